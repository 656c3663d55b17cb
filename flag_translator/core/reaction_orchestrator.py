"""Reaction-to-translation workflow.

:class:`ReactionOrchestrator` handles one reaction-add event at a time:

1. reactions from bots are ignored;
2. the emoji is resolved to a target language (most reactions are not flags);
3. the ``(message id, emoji)`` key is reserved in the :class:`DedupCache`;
4. the message text is fetched and run through the :class:`ContentFilter`;
5. the :class:`TranslationInvoker` is called and the reply delivered.

Any failure after step 3 releases the reservation so a later reaction can
retry. Discord objects never reach this module; the cog adapts them to the
:class:`MessageSource` protocol.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import logging
import time
from typing import Any, Dict, Optional, Protocol

from flag_translator.language_context.flag_map import LanguageDirectory

from .content_filter import ContentFilter
from .dedup_cache import DedupCache, make_key
from .errors import DeliveryFailed, TranslationError
from .translation_invoker import TranslationInvoker
from .translation_ui_engine import TranslationUIEngine


logger = logging.getLogger(__name__)


class SourceUnavailable(RuntimeError):
    """Raised by a message source when the reacted message cannot be resolved."""


class MessageSource(Protocol):
    message_id: int

    async def fetch_content(self) -> Optional[str]: ...

    async def reply(self, content: str) -> None: ...

    async def send_to_channel(self, content: str) -> None: ...


@dataclass(slots=True)
class ReactionEvent:
    trigger: str
    actor_is_bot: bool
    source: MessageSource
    actor_name: Optional[str] = None


class ReactionOutcome(str, Enum):
    SKIPPED_BOT = "skipped_bot"
    SKIPPED_UNSUPPORTED = "skipped_unsupported"
    SKIPPED_DUPLICATE = "skipped_duplicate"
    SKIPPED_UNAVAILABLE = "skipped_unavailable"
    SKIPPED_INELIGIBLE = "skipped_ineligible"
    TRANSLATED = "translated"
    FAILED = "failed"


@dataclass(slots=True)
class TranslationStats:
    translations_processed: int = 0
    duplicates_prevented: int = 0
    errors_handled: int = 0
    started_at: float = field(default_factory=time.time)

    def uptime(self) -> int:
        return int(time.time() - self.started_at)

    def as_dict(self) -> Dict[str, int]:
        return {
            "translations_processed": self.translations_processed,
            "duplicates_prevented": self.duplicates_prevented,
            "errors_handled": self.errors_handled,
            "uptime_seconds": self.uptime(),
        }


class ReactionOrchestrator:
    """Coordinates filter, dedup cache, invoker and reply for reaction events."""

    def __init__(
        self,
        *,
        directory: LanguageDirectory,
        cache: DedupCache,
        content_filter: ContentFilter,
        invoker: TranslationInvoker,
        ui: TranslationUIEngine,
    ) -> None:
        self.directory = directory
        self.cache = cache
        self.content_filter = content_filter
        self.invoker = invoker
        self.ui = ui
        self.stats = TranslationStats()

    async def handle(self, event: ReactionEvent) -> ReactionOutcome:
        source = event.source
        if event.actor_is_bot:
            logger.debug("Ignoring bot reaction from %s", event.actor_name)
            return ReactionOutcome.SKIPPED_BOT

        target_language = self.directory.language_for(event.trigger)
        if target_language is None:
            logger.debug("Unsupported reaction emoji %r", event.trigger)
            return ReactionOutcome.SKIPPED_UNSUPPORTED

        key = make_key(source.message_id, event.trigger)
        # Reservation happens before the first await so concurrent reactions
        # on the same key cannot both pass this gate.
        if not self.cache.try_reserve(key):
            self.stats.duplicates_prevented += 1
            logger.info("Duplicate translation prevented for message %s with %s", source.message_id, event.trigger)
            return ReactionOutcome.SKIPPED_DUPLICATE

        try:
            return await self._translate_reserved(event, key, target_language)
        except Exception:
            # Unclassified bug: keep the key retryable and isolate the event.
            self.cache.release(key)
            self.stats.errors_handled += 1
            logger.exception("Unexpected error handling reaction on message %s", source.message_id)
            return ReactionOutcome.FAILED

    async def _translate_reserved(self, event: ReactionEvent, key, target_language: str) -> ReactionOutcome:
        source = event.source
        try:
            content = await source.fetch_content()
        except SourceUnavailable as exc:
            self.cache.release(key)
            logger.warning("Could not resolve message %s: %s", source.message_id, exc)
            return ReactionOutcome.SKIPPED_UNAVAILABLE

        eligibility = self.content_filter.check(content)
        if not eligibility.eligible:
            self.cache.release(key)
            logger.info("Message %s not translatable: %s", source.message_id, eligibility.reason)
            return ReactionOutcome.SKIPPED_INELIGIBLE

        language_name = self.directory.display_name(target_language)
        logger.info(
            "Translating message %s to %s (%s) for %s",
            source.message_id,
            language_name,
            target_language,
            event.actor_name or "unknown user",
        )
        try:
            result = await self.invoker.translate(eligibility.cleaned_text or "", target_language)
            reply = self.ui.build_reply(result=result, language_name=language_name, trigger=event.trigger)
            if not await self.ui.deliver(source, reply):
                raise DeliveryFailed(f"could not deliver translation for message {source.message_id}")
        except TranslationError as exc:
            try:
                await self._report_failure(source, exc)
            finally:
                self.cache.release(key)
            return ReactionOutcome.FAILED

        self.cache.mark_completed(key)
        self.stats.translations_processed += 1
        logger.info(
            "Translation for message %s sent via %s after %d attempt(s)",
            source.message_id,
            result.provider,
            result.attempts,
        )
        return ReactionOutcome.TRANSLATED

    async def _report_failure(self, source: MessageSource, error: TranslationError) -> None:
        self.stats.errors_handled += 1
        logger.error("Translation for message %s failed (%s): %s", source.message_id, error.kind.value, error)
        delivered = await self.ui.deliver(source, self.ui.build_error(error), fallback=False)
        if not delivered:
            logger.error("Failed to send error message for message %s", source.message_id)

    def sweep(self) -> int:
        removed = self.cache.sweep_expired()
        stats = self.stats
        logger.info(
            "Performance stats - uptime: %ss, translations: %d, duplicates prevented: %d, errors: %d, cache size: %d",
            stats.uptime(),
            stats.translations_processed,
            stats.duplicates_prevented,
            stats.errors_handled,
            len(self.cache),
        )
        return removed

    def status_snapshot(self) -> Dict[str, Any]:
        keys = self.cache.keys()
        return {
            **self.stats.as_dict(),
            "cache_size": len(keys),
            "cache_entries": [f"{message_id}_{trigger}" for message_id, trigger in keys],
        }


__all__ = [
    "MessageSource",
    "ReactionEvent",
    "ReactionOrchestrator",
    "ReactionOutcome",
    "SourceUnavailable",
    "TranslationStats",
]
