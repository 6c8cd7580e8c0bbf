"""Shared test fixtures."""

from __future__ import annotations

import json
from typing import Any, Dict, List

import pytest


class FakeResponse:
    """Stands in for an aiohttp response used as ``async with session.post(...)``."""

    def __init__(self, status: int = 200, body: Any = None, reason: str = "OK") -> None:
        self.status = status
        self.reason = reason
        if body is None:
            self._raw = b""
        elif isinstance(body, bytes):
            self._raw = body
        elif isinstance(body, str):
            self._raw = body.encode("utf-8")
        else:
            self._raw = json.dumps(body).encode("utf-8")

    async def text(self) -> str:
        return self._raw.decode("utf-8")

    async def __aenter__(self) -> "FakeResponse":
        return self

    async def __aexit__(self, *exc_info: Any) -> bool:
        return False


class FakeSession:
    """Replays queued responses (or raises queued exceptions) and records calls."""

    def __init__(self, *responses: Any) -> None:
        self._responses = list(responses)
        self.calls: List[Dict[str, Any]] = []

    def post(self, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append({"url": url, **kwargs})
        item = self._responses.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item


@pytest.fixture
def session_factory():
    return FakeSession


@pytest.fixture
def response_factory():
    return FakeResponse
