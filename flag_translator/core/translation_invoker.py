"""Bounded-retry translation calls.

The :class:`TranslationInvoker` is the only place that talks to a translation
provider. Each attempt is raced against a hard timeout, every failure is
classified into the taxonomy from :mod:`flag_translator.core.errors`, and
retryable failures are retried a fixed number of times with a constant delay.

Like the rest of ``core`` it has no discord.py dependency and can be unit
tested with a stub provider.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
import logging
from typing import TYPE_CHECKING, Awaitable, Callable, Optional, Protocol

import httpx

from .errors import (
    EmptyResult,
    InvalidInput,
    RateLimited,
    ServiceUnavailable,
    TranslationError,
    TranslationTimeout,
    UnsupportedLanguage,
)

if TYPE_CHECKING:  # pragma: no cover
    from flag_translator.config import FlagTranslatorConfig


logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 15.0
DEFAULT_MAX_RETRIES = 2
DEFAULT_RETRY_DELAY = 2.0


@dataclass(frozen=True, slots=True)
class TranslationRequest:
    """One attempt's worth of input; discarded once the attempt resolves."""

    text: str
    target_language: str
    attempt: int = 0


@dataclass(slots=True)
class TranslationResult:
    """Container describing a translated string."""

    provider: str
    translated_text: str
    target_language: str
    source_language: Optional[str] = None
    attempts: int = 1


class TranslationProvider(Protocol):
    name: str

    async def translate(self, text: str, target_language: str) -> TranslationResult: ...


def classify_error(exc: BaseException) -> TranslationError:
    """Map any exception raised while translating onto the failure taxonomy."""

    if isinstance(exc, TranslationError):
        return exc
    if isinstance(exc, (asyncio.TimeoutError, httpx.TimeoutException)):
        return TranslationTimeout(f"translation timed out: {exc}")
    if isinstance(exc, httpx.HTTPStatusError):
        status = exc.response.status_code
        if status == 429:
            return RateLimited(f"provider rate limited the request (HTTP {status})")
        if status == 400:
            return UnsupportedLanguage(f"provider rejected the language pair (HTTP {status})")
        if status >= 500:
            return ServiceUnavailable(f"provider unavailable (HTTP {status})")
        return ServiceUnavailable(f"provider rejected the request (HTTP {status})", retryable=False)
    if isinstance(exc, (httpx.TransportError, ConnectionError)):
        return ServiceUnavailable(f"network error: {exc}")
    return ServiceUnavailable(f"unexpected provider error: {exc!r}", retryable=False)


class TranslationInvoker:
    """Calls a provider with a per-attempt timeout and constant-backoff retries."""

    def __init__(
        self,
        provider: TranslationProvider,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        max_retries: int = DEFAULT_MAX_RETRIES,
        retry_delay: float = DEFAULT_RETRY_DELAY,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._provider = provider
        self._timeout = timeout
        self._max_retries = max(0, max_retries)
        self._retry_delay = max(0.0, retry_delay)
        self._sleep = sleep

    @classmethod
    def from_config(cls, config: "FlagTranslatorConfig", provider: TranslationProvider) -> "TranslationInvoker":
        return cls(
            provider,
            timeout=config.translation_timeout,
            max_retries=config.max_retries,
            retry_delay=config.retry_delay,
        )

    @property
    def provider_name(self) -> str:
        return getattr(self._provider, "name", type(self._provider).__name__)

    @property
    def max_attempts(self) -> int:
        return self._max_retries + 1

    async def translate(self, text: str, target_language: str) -> TranslationResult:
        """Translate ``text`` into ``target_language`` or raise a classified failure."""

        cleaned = (text or "").strip()
        if not cleaned:
            raise InvalidInput("nothing to translate after trimming")

        attempt = 0
        while True:
            request = TranslationRequest(text=cleaned, target_language=target_language, attempt=attempt)
            try:
                result = await self._attempt(request)
            except TranslationError as exc:
                can_retry = exc.retryable and attempt < self._max_retries
                logger.warning(
                    "Translation attempt %d/%d to %s via %s failed (%s): %s",
                    attempt + 1,
                    self.max_attempts,
                    target_language,
                    self.provider_name,
                    exc.kind.value,
                    exc,
                )
                if not can_retry:
                    raise
                logger.info("Retrying translation in %.1fs", self._retry_delay)
                await self._sleep(self._retry_delay)
                attempt += 1
                continue

            result.attempts = attempt + 1
            return result

    async def _attempt(self, request: TranslationRequest) -> TranslationResult:
        logger.debug(
            "Translation attempt %d: %r -> %s",
            request.attempt + 1,
            request.text[:50],
            request.target_language,
        )
        try:
            result = await asyncio.wait_for(
                self._provider.translate(request.text, request.target_language),
                timeout=self._timeout,
            )
        except Exception as exc:
            raise classify_error(exc) from exc

        translated = (result.translated_text or "").strip() if result else ""
        if not translated:
            raise EmptyResult(f"{self.provider_name} returned no text")
        if translated.casefold() == request.text.casefold():
            logger.debug("Translation identical to input; text may already be in %s", request.target_language)
        result.translated_text = translated
        return result


__all__ = [
    "TranslationInvoker",
    "TranslationProvider",
    "TranslationRequest",
    "TranslationResult",
    "classify_error",
]
