"""Provider abstraction for the fallback client."""
from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Dict, Mapping, Optional, Protocol, runtime_checkable

import aiohttp

from ..exceptions import (
    ProviderAuthenticationError,
    ProviderCallError,
    ProviderError,
    ProviderRateLimitError,
    ProviderUnconfiguredError,
)
from ..options import DEFAULT_TEMPERATURE, GenerationOptions, OptionsLike, PromptRequest

logger = logging.getLogger(__name__)

INVALID_KEY_SENTINEL = "invalid-key"
DEFAULT_TIMEOUT = 90.0


@runtime_checkable
class TextGenerator(Protocol):
    """Anything the client can route to."""

    def is_available(self) -> bool:
        ...

    async def generate(self, prompt: str, options: OptionsLike = None) -> str:
        ...


def provider_name(provider: Any) -> str:
    return getattr(provider, "name", None) or type(provider).__name__


class Provider:
    """Base class for HTTP-backed providers.

    Subclasses set ``name``, ``label``, ``default_model`` and
    ``default_max_tokens`` and implement ``_complete``.
    """

    name: str
    label: str
    default_model: str
    default_max_tokens: int = 1000
    default_temperature: float = DEFAULT_TEMPERATURE
    default_base_url: str = ""

    def __init__(
        self,
        api_key: Optional[str],
        *,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[aiohttp.ClientSession] = None,
    ) -> None:
        self.api_key = api_key or ""
        if model:
            self.default_model = model
        self.base_url = (base_url or self.default_base_url).rstrip("/")
        self.timeout = timeout
        self._session = session

    def is_available(self) -> bool:
        key = self.api_key
        valid = isinstance(key, str) and bool(key.strip()) and key != INVALID_KEY_SENTINEL
        if not valid:
            logger.warning("%s: invalid or missing API key", self.label)
        return valid

    async def generate(self, prompt: str, options: OptionsLike = None) -> str:
        if not self.is_available():
            raise ProviderUnconfiguredError(self.name, f"{self.label} API key not set")
        request = self.build_request(prompt, options)
        try:
            return await self._complete(request)
        except ProviderError:
            raise
        except (KeyError, IndexError, TypeError, AttributeError) as exc:
            raise ProviderCallError(self.name, f"{self.label} returned a malformed response: {exc!r}") from exc

    def build_request(self, prompt: str, options: OptionsLike = None) -> PromptRequest:
        opts = GenerationOptions.coerce(options)
        return PromptRequest(
            prompt=prompt,
            model=opts.model or self.default_model,
            temperature=self.default_temperature if opts.temperature is None else opts.temperature,
            max_tokens=self.default_max_tokens if opts.max_tokens is None else opts.max_tokens,
        )

    async def _complete(self, request: PromptRequest) -> str:  # pragma: no cover - interface
        raise NotImplementedError

    async def _post_json(
        self,
        url: str,
        payload: Mapping[str, Any],
        *,
        headers: Optional[Mapping[str, str]] = None,
        params: Optional[Mapping[str, str]] = None,
    ) -> Any:
        try:
            if self._session is not None:
                return await self._send(self._session, url, payload, headers, params)
            async with aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=self.timeout)) as session:
                return await self._send(session, url, payload, headers, params)
        except asyncio.TimeoutError as exc:
            raise ProviderCallError(self.name, f"{self.label} request timed out after {self.timeout}s") from exc
        except aiohttp.ClientError as exc:
            raise ProviderCallError(self.name, f"{self.label} API error: {exc}") from exc

    async def _send(
        self,
        session: aiohttp.ClientSession,
        url: str,
        payload: Mapping[str, Any],
        headers: Optional[Mapping[str, str]],
        params: Optional[Mapping[str, str]],
    ) -> Any:
        async with session.post(url, headers=headers, json=payload, params=params) as response:
            status = response.status
            reason = response.reason
            try:
                body = await response.text()
            except UnicodeDecodeError as exc:
                raise ProviderCallError(self.name, f"{self.label} returned an undecodable response", status) from exc
        try:
            data = json.loads(body) if body else {}
        except ValueError:
            data = None
        if status >= 400:
            logger.debug("%s request failed: status=%s body=%s", self.label, status, body[:500])
            raise self._status_error(status, _error_message(data) or reason or "unknown error")
        if data is None:
            raise ProviderCallError(self.name, f"{self.label} returned a non-JSON response", status)
        return data

    def _status_error(self, status: int, message: str) -> ProviderCallError:
        if status in (401, 403):
            return ProviderAuthenticationError(
                self.name, f"{self.label} authentication failed: invalid API key", status
            )
        if status == 429:
            return ProviderRateLimitError(self.name, f"{self.label} rate limit exceeded", status)
        return ProviderCallError(self.name, f"{self.label} error {status}: {message}", status)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(model={self.default_model!r})"


def _error_message(data: Any) -> Optional[str]:
    if not isinstance(data, dict):
        return None
    error = data.get("error")
    if isinstance(error, dict):
        return error.get("message")
    if isinstance(error, str):
        return error
    return None


def auth_headers(api_key: str) -> Dict[str, str]:
    return {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
    }
