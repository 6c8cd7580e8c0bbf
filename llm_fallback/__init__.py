"""Sequential, first-success-wins routing across text-generation providers."""
from __future__ import annotations

from .client import AttemptOutcome, GenerationResult, LLMClient, ProviderAttempt
from .config import DEFAULT_PROVIDER_ORDER, ProviderSettings, configure_logging
from .exceptions import (
    AllProvidersFailedError,
    LLMFallbackError,
    ProviderAuthenticationError,
    ProviderCallError,
    ProviderError,
    ProviderRateLimitError,
    ProviderUnconfiguredError,
)
from .options import GenerationOptions, PromptRequest
from .providers import (
    EMPTY_RESPONSE_TEXT,
    GeminiProvider,
    HuggingFaceProvider,
    NvidiaProvider,
    OpenRouterProvider,
    Provider,
    ProviderRegistry,
    TextGenerator,
    build_default_providers,
    default_registry,
)

__all__ = [
    "AllProvidersFailedError",
    "AttemptOutcome",
    "DEFAULT_PROVIDER_ORDER",
    "EMPTY_RESPONSE_TEXT",
    "GeminiProvider",
    "GenerationOptions",
    "GenerationResult",
    "HuggingFaceProvider",
    "LLMClient",
    "LLMFallbackError",
    "NvidiaProvider",
    "OpenRouterProvider",
    "PromptRequest",
    "Provider",
    "ProviderAttempt",
    "ProviderAuthenticationError",
    "ProviderCallError",
    "ProviderError",
    "ProviderRateLimitError",
    "ProviderRegistry",
    "ProviderSettings",
    "ProviderUnconfiguredError",
    "TextGenerator",
    "build_default_providers",
    "configure_logging",
    "default_registry",
]
