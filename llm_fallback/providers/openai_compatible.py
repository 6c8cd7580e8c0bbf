"""Chat-completions providers speaking the OpenAI wire format."""
from __future__ import annotations

from typing import Any, Dict

from ..exceptions import ProviderCallError
from ..options import PromptRequest
from .base import Provider, auth_headers
from .text import or_placeholder


class OpenAICompatibleProvider(Provider):
    """Base for vendors that expose ``/chat/completions``."""

    def _headers(self) -> Dict[str, str]:
        return auth_headers(self.api_key)

    def _payload(self, request: PromptRequest) -> Dict[str, Any]:
        return {
            "model": request.model,
            "messages": [{"role": "user", "content": request.prompt}],
            "temperature": request.temperature,
            "max_tokens": request.max_tokens,
        }

    async def _complete(self, request: PromptRequest) -> str:
        url = f"{self.base_url}/chat/completions"
        data = await self._post_json(url, self._payload(request), headers=self._headers())
        choices = data.get("choices") if isinstance(data, dict) else None
        if not choices:
            raise ProviderCallError(self.name, f"{self.label} returned no choices")
        message = choices[0].get("message") or {}
        return or_placeholder(message.get("content"))
