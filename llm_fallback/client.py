"""Fallback client: routes one prompt across an ordered list of providers."""
from __future__ import annotations

import asyncio
import enum
import logging
import threading
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from .config import ProviderSettings
from .exceptions import AllProvidersFailedError, ProviderError
from .options import GenerationOptions, OptionsLike
from .providers import TextGenerator, build_default_providers, provider_name

logger = logging.getLogger(__name__)

# Event-loop timers may fire a little early; budgets below this count as spent.
DEADLINE_SLACK = 0.01


class AttemptOutcome(str, enum.Enum):
    SKIPPED = "skipped"
    FAILED = "failed"
    SUCCEEDED = "succeeded"


@dataclass
class ProviderAttempt:
    provider: str
    outcome: AttemptOutcome
    error: Optional[str] = None

    @property
    def skipped(self) -> bool:
        return self.outcome is AttemptOutcome.SKIPPED

    @property
    def failed(self) -> bool:
        return self.outcome is AttemptOutcome.FAILED

    def describe(self) -> str:
        if self.skipped:
            return f"{self.provider} skipped ({self.error or 'unavailable'})"
        if self.failed:
            return f"{self.provider} failed ({self.error})"
        return f"{self.provider} succeeded"


@dataclass
class GenerationResult:
    text: str
    provider: str
    attempts: List[ProviderAttempt] = field(default_factory=list)


class LLMClient:
    """Tries each provider in order and returns the first successful completion.

    The provider list is stored as an immutable tuple and replaced on every
    mutation, so a ``generate`` call in flight keeps iterating the snapshot it
    started with.
    """

    def __init__(
        self,
        providers: Optional[Iterable[TextGenerator]] = None,
        *,
        settings: Optional[ProviderSettings] = None,
    ) -> None:
        if providers is None:
            providers = build_default_providers(settings)
        self._providers: Tuple[TextGenerator, ...] = tuple(providers)
        self._lock = threading.Lock()

    @property
    def providers(self) -> Tuple[TextGenerator, ...]:
        return self._providers

    def add_provider(self, provider: TextGenerator) -> None:
        with self._lock:
            self._providers = self._providers + (provider,)

    def set_providers(self, providers: Iterable[TextGenerator]) -> None:
        replacement = tuple(providers)
        with self._lock:
            self._providers = replacement

    async def generate(
        self,
        prompt: str,
        options: OptionsLike = None,
        *,
        timeout: Optional[float] = None,
    ) -> str:
        result = await self.generate_result(prompt, options, timeout=timeout)
        return result.text

    async def generate_result(
        self,
        prompt: str,
        options: OptionsLike = None,
        *,
        timeout: Optional[float] = None,
    ) -> GenerationResult:
        """Run the fallback chain and report which provider answered.

        ``timeout`` bounds the whole call in seconds. Each provider gets whatever
        budget is left; once it is spent no further providers are tried.

        Raises:
            AllProvidersFailedError: every provider was skipped or failed, or the
                deadline ran out first.
        """
        opts = GenerationOptions.coerce(options)
        providers = self._providers
        attempts: List[ProviderAttempt] = []
        loop = asyncio.get_running_loop()
        deadline = None if timeout is None else loop.time() + timeout

        for provider in providers:
            name = provider_name(provider)
            remaining: Optional[float] = None
            if deadline is not None:
                remaining = deadline - loop.time()
                if remaining <= DEADLINE_SLACK:
                    raise self._exhausted(attempts, timed_out=True)

            available, reason = self._check_available(provider, name)
            if not available:
                logger.debug("Skipping %s: %s", name, reason)
                attempts.append(ProviderAttempt(name, AttemptOutcome.SKIPPED, reason))
                continue

            try:
                if remaining is None:
                    text = await provider.generate(prompt, opts)
                else:
                    text = await asyncio.wait_for(provider.generate(prompt, opts), remaining)
            except asyncio.TimeoutError:
                cause = "timed out" if remaining is None else f"timed out after {remaining:.2f}s"
                logger.warning("%s failed: %s", name, cause)
                attempts.append(ProviderAttempt(name, AttemptOutcome.FAILED, cause))
                if deadline is not None and deadline - loop.time() <= DEADLINE_SLACK:
                    raise self._exhausted(attempts, timed_out=True) from None
                continue
            except Exception as exc:
                cause = _describe_error(exc)
                logger.warning("%s failed: %s", name, cause)
                attempts.append(ProviderAttempt(name, AttemptOutcome.FAILED, cause))
                continue

            attempts.append(ProviderAttempt(name, AttemptOutcome.SUCCEEDED))
            logger.info("Successfully used %s", name)
            return GenerationResult(text=text, provider=name, attempts=attempts)

        timed_out = deadline is not None and deadline - loop.time() <= DEADLINE_SLACK
        raise self._exhausted(attempts, timed_out=timed_out)

    def _check_available(self, provider: TextGenerator, name: str) -> Tuple[bool, Optional[str]]:
        try:
            if provider.is_available():
                return True, None
        except Exception as exc:
            logger.warning("%s availability check raised: %s", name, exc)
            return False, f"availability check failed: {_describe_error(exc)}"
        return False, "unavailable"

    def _exhausted(self, attempts: List[ProviderAttempt], *, timed_out: bool) -> AllProvidersFailedError:
        error = AllProvidersFailedError(attempts, timed_out=timed_out)
        logger.error("%s", error)
        return error


def _describe_error(exc: BaseException) -> str:
    if isinstance(exc, ProviderError):
        return str(exc)
    return f"{type(exc).__name__}: {exc}" if str(exc) else type(exc).__name__
