"""Error types raised by providers and the fallback client."""
from __future__ import annotations

from typing import TYPE_CHECKING, Dict, List, Optional, Sequence

if TYPE_CHECKING:
    from .client import ProviderAttempt


class LLMFallbackError(RuntimeError):
    """Base class for every error raised by this package."""


class ProviderError(LLMFallbackError):
    """Raised when a single provider cannot produce a completion."""

    def __init__(self, provider: str, message: str) -> None:
        super().__init__(message)
        self.provider = provider


class ProviderUnconfiguredError(ProviderError):
    """The provider has no usable credential and was never called."""


class ProviderCallError(ProviderError):
    """The remote call was attempted and failed."""

    def __init__(self, provider: str, message: str, status: Optional[int] = None) -> None:
        super().__init__(provider, message)
        self.status = status


class ProviderAuthenticationError(ProviderCallError):
    """The backend rejected the credential (401/403)."""


class ProviderRateLimitError(ProviderCallError):
    """The backend signalled a rate limit (429)."""


class AllProvidersFailedError(LLMFallbackError):
    """Raised by the client once every provider was skipped or failed.

    ``attempts`` holds one entry per provider that was considered, in the order
    they were consulted. When the call deadline ran out, ``timed_out`` is set and
    later providers are absent from ``attempts``.
    """

    def __init__(self, attempts: Sequence["ProviderAttempt"], *, timed_out: bool = False) -> None:
        self.attempts: List["ProviderAttempt"] = list(attempts)
        self.timed_out = timed_out
        super().__init__(self._build_message())

    @property
    def tried(self) -> int:
        return len(self.attempts)

    @property
    def skipped(self) -> int:
        return sum(1 for attempt in self.attempts if attempt.skipped)

    @property
    def failed(self) -> int:
        return sum(1 for attempt in self.attempts if attempt.failed)

    @property
    def errors(self) -> Dict[str, str]:
        """Cause per provider. Repeats of a name are keyed ``name#2``, ``name#3``..."""
        errors: Dict[str, str] = {}
        for attempt in self.attempts:
            key = attempt.provider
            occurrence = 1
            while key in errors:
                occurrence += 1
                key = f"{attempt.provider}#{occurrence}"
            errors[key] = attempt.error or ""
        return errors

    def _build_message(self) -> str:
        message = f"All LLM providers failed ({self.tried} tried)"
        if self.timed_out:
            message += ", deadline exceeded"
        if self.attempts:
            details = "; ".join(attempt.describe() for attempt in self.attempts)
            message = f"{message}: {details}"
        return message
