"""Environment-driven settings for the default providers."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple, Union

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_PROVIDER_ORDER: Tuple[str, ...] = ("openrouter", "huggingface", "nvidia", "gemini")
DEFAULT_SITE_URL = "http://localhost:3000"
DEFAULT_SITE_NAME = "LLM Fallback"
DEFAULT_REQUEST_TIMEOUT = 90.0


def load_env(
    key: str,
    *,
    default: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Optional[str]:
    source = os.environ if environ is None else environ
    return source.get(key, default)


def configure_logging(level: Union[str, int, None] = None) -> None:
    """Apply a basic logging setup, reading ``LOG_LEVEL`` when no level is given."""
    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO")
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(level=level)


def parse_provider_order(raw: Optional[str]) -> Tuple[str, ...]:
    if not raw or not raw.strip():
        return DEFAULT_PROVIDER_ORDER
    return tuple(name.strip().lower() for name in raw.split(",") if name.strip())


@dataclass
class ProviderSettings:
    openrouter_api_key: str = ""
    huggingface_api_key: str = ""
    nvidia_api_key: str = ""
    gemini_api_key: str = ""
    openrouter_model: Optional[str] = None
    huggingface_model: Optional[str] = None
    nvidia_model: Optional[str] = None
    gemini_model: Optional[str] = None
    site_url: str = DEFAULT_SITE_URL
    site_name: str = DEFAULT_SITE_NAME
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    provider_order: Tuple[str, ...] = DEFAULT_PROVIDER_ORDER

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        *,
        dotenv_path: Optional[str] = None,
    ) -> "ProviderSettings":
        """Build settings from the process environment or an explicit mapping.

        With no mapping, a ``.env`` file is loaded first (``dotenv_path`` or the
        nearest one python-dotenv finds). An explicit mapping is read as-is and
        the real environment is left untouched.
        """
        if environ is None:
            load_dotenv(dotenv_path)

        def env(key: str, default: Optional[str] = None) -> Optional[str]:
            return load_env(key, default=default, environ=environ)

        timeout_raw = env("LLM_REQUEST_TIMEOUT")
        try:
            timeout = float(timeout_raw) if timeout_raw else DEFAULT_REQUEST_TIMEOUT
        except ValueError:
            raise ValueError(f"LLM_REQUEST_TIMEOUT must be a number, got {timeout_raw!r}") from None
        if timeout <= 0:
            raise ValueError("LLM_REQUEST_TIMEOUT must be positive")

        settings = cls(
            openrouter_api_key=env("OPENROUTER_API_KEY", "") or "",
            huggingface_api_key=env("HUGGINGFACE_API_KEY", "") or "",
            nvidia_api_key=env("NVIDIA_API_KEY", "") or "",
            gemini_api_key=env("GEMINI_API_KEY", "") or "",
            openrouter_model=env("OPENROUTER_MODEL") or None,
            huggingface_model=env("HUGGINGFACE_MODEL") or None,
            nvidia_model=env("NVIDIA_MODEL") or None,
            gemini_model=env("GEMINI_MODEL") or None,
            site_url=env("OPENROUTER_SITE_URL") or DEFAULT_SITE_URL,
            site_name=env("OPENROUTER_SITE_NAME") or DEFAULT_SITE_NAME,
            request_timeout=timeout,
            provider_order=parse_provider_order(env("LLM_PROVIDER_ORDER")),
        )
        logger.debug("API keys available: %s", settings.keys_present())
        return settings

    def keys_present(self) -> Mapping[str, bool]:
        return {
            "openrouter": bool(self.openrouter_api_key),
            "huggingface": bool(self.huggingface_api_key),
            "nvidia": bool(self.nvidia_api_key),
            "gemini": bool(self.gemini_api_key),
        }
