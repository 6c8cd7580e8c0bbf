"""NVIDIA NIM provider."""
from __future__ import annotations

from typing import Any, Dict

from ..options import PromptRequest
from .openai_compatible import OpenAICompatibleProvider


class NvidiaProvider(OpenAICompatibleProvider):
    name = "nvidia"
    label = "NVIDIA"
    default_model = "meta/llama-3.3-70b-instruct"
    default_base_url = "https://integrate.api.nvidia.com/v1"

    def _payload(self, request: PromptRequest) -> Dict[str, Any]:
        payload = super()._payload(request)
        payload["top_p"] = 0.7
        payload["stream"] = False
        return payload
