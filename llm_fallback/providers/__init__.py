"""Provider registry and the default provider set."""
from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Optional

from ..config import ProviderSettings
from .base import Provider, TextGenerator, provider_name
from .gemini_provider import GeminiProvider
from .huggingface_provider import HuggingFaceProvider
from .nvidia_provider import NvidiaProvider
from .openai_compatible import OpenAICompatibleProvider
from .openrouter_provider import OpenRouterProvider
from .text import EMPTY_RESPONSE_TEXT

ProviderFactory = Callable[[ProviderSettings], Provider]


class ProviderRegistry:
    def __init__(self) -> None:
        self._factories: Dict[str, ProviderFactory] = {}

    def register(self, name: str, factory: ProviderFactory) -> None:
        self._factories[name.lower()] = factory

    def get(self, name: str) -> Optional[ProviderFactory]:
        return self._factories.get(name.lower())

    def names(self) -> Iterable[str]:
        return self._factories.keys()

    def create(self, name: str, settings: ProviderSettings) -> Provider:
        factory = self.get(name)
        if factory is None:
            available = ", ".join(sorted(self.names()))
            raise ValueError(f"Unknown provider {name!r}. Available providers: {available}")
        return factory(settings)

    def __contains__(self, item: str) -> bool:
        return item.lower() in self._factories


def default_registry() -> ProviderRegistry:
    registry = ProviderRegistry()
    registry.register(
        "openrouter",
        lambda s: OpenRouterProvider(
            s.openrouter_api_key,
            model=s.openrouter_model,
            site_url=s.site_url,
            site_name=s.site_name,
            timeout=s.request_timeout,
        ),
    )
    registry.register(
        "huggingface",
        lambda s: HuggingFaceProvider(s.huggingface_api_key, model=s.huggingface_model, timeout=s.request_timeout),
    )
    registry.register(
        "nvidia",
        lambda s: NvidiaProvider(s.nvidia_api_key, model=s.nvidia_model, timeout=s.request_timeout),
    )
    registry.register(
        "gemini",
        lambda s: GeminiProvider(s.gemini_api_key, model=s.gemini_model, timeout=s.request_timeout),
    )
    return registry


def build_default_providers(
    settings: Optional[ProviderSettings] = None,
    registry: Optional[ProviderRegistry] = None,
) -> List[Provider]:
    """Instantiate providers in ``settings.provider_order``.

    Providers are built whether or not a key is configured; the ones without a
    key report themselves unavailable and get skipped by the client.
    """
    settings = settings or ProviderSettings.from_env()
    registry = registry or default_registry()
    return [registry.create(name, settings) for name in settings.provider_order]


__all__ = [
    "EMPTY_RESPONSE_TEXT",
    "GeminiProvider",
    "HuggingFaceProvider",
    "NvidiaProvider",
    "OpenAICompatibleProvider",
    "OpenRouterProvider",
    "Provider",
    "ProviderFactory",
    "ProviderRegistry",
    "TextGenerator",
    "build_default_providers",
    "default_registry",
    "provider_name",
]
