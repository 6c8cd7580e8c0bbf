"""Google Gemini provider."""
from __future__ import annotations

from ..exceptions import ProviderCallError
from ..options import PromptRequest
from .base import Provider
from .text import or_placeholder


class GeminiProvider(Provider):
    name = "gemini"
    label = "Gemini"
    default_model = "gemini-1.5-flash"
    default_base_url = "https://generativelanguage.googleapis.com"

    async def _complete(self, request: PromptRequest) -> str:
        url = f"{self.base_url}/v1beta/models/{request.model}:generateContent"
        payload = {
            "contents": [
                {
                    "role": "user",
                    "parts": [
                        {"text": request.prompt},
                    ],
                }
            ],
            "generationConfig": {
                "temperature": request.temperature,
                "maxOutputTokens": request.max_tokens,
                "topP": 0.95,
                "topK": 64,
            },
        }
        data = await self._post_json(
            url,
            payload,
            headers={"Content-Type": "application/json"},
            params={"key": self.api_key},
        )
        candidates = data.get("candidates", [])
        if not candidates:
            block_reason = (data.get("promptFeedback") or {}).get("blockReason")
            if block_reason:
                raise ProviderCallError(self.name, f"Gemini response blocked: {block_reason}")
            raise ProviderCallError(self.name, "Gemini response did not include candidates")
        parts = (candidates[0].get("content") or {}).get("parts", [])
        text = "".join(part.get("text") or "" for part in parts)
        return or_placeholder(text)
