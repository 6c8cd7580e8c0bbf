"""OpenRouter provider."""
from __future__ import annotations

from typing import Any, Dict, Optional

from ..config import DEFAULT_SITE_NAME, DEFAULT_SITE_URL
from .openai_compatible import OpenAICompatibleProvider


class OpenRouterProvider(OpenAICompatibleProvider):
    name = "openrouter"
    label = "OpenRouter"
    default_model = "mistralai/mistral-7b-instruct:free"
    default_base_url = "https://openrouter.ai/api/v1"

    def __init__(
        self,
        api_key: Optional[str],
        *,
        site_url: str = DEFAULT_SITE_URL,
        site_name: str = DEFAULT_SITE_NAME,
        **kwargs: Any,
    ) -> None:
        super().__init__(api_key, **kwargs)
        self.site_url = site_url
        self.site_name = site_name

    def _headers(self) -> Dict[str, str]:
        # OpenRouter attributes traffic to the calling site through these two headers.
        headers = super()._headers()
        headers["HTTP-Referer"] = self.site_url
        headers["X-Title"] = self.site_name
        return headers
