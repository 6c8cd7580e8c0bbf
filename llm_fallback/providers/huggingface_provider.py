"""Hugging Face Inference API provider."""
from __future__ import annotations

from typing import Any

from ..exceptions import ProviderCallError
from ..options import PromptRequest
from .base import Provider, auth_headers
from .text import strip_markup


class HuggingFaceProvider(Provider):
    name = "huggingface"
    label = "HuggingFace"
    default_model = "mistralai/Mistral-Nemo-Instruct-2407"
    default_base_url = "https://api-inference.huggingface.co"
    default_max_tokens = 100

    async def _complete(self, request: PromptRequest) -> str:
        url = f"{self.base_url}/models/{request.model}"
        payload = {
            "inputs": request.prompt,
            "parameters": {
                "max_new_tokens": request.max_tokens,
                "temperature": request.temperature,
                "top_p": 0.95,
                "return_full_text": False,
            },
        }
        data = await self._post_json(url, payload, headers=auth_headers(self.api_key))
        return strip_markup(self._generated_text(data))

    def _generated_text(self, data: Any) -> str:
        # The endpoint answers with either a list of generations or a single object.
        if isinstance(data, list):
            if not data:
                return ""
            data = data[0]
        if not isinstance(data, dict):
            raise ProviderCallError(self.name, "HuggingFace returned an unexpected payload")
        return data.get("generated_text") or ""
