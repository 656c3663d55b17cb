"""UI helpers for presenting translations back to Discord users."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .errors import DeliveryFailed, user_message_for
from .translation_invoker import TranslationResult

if TYPE_CHECKING:  # pragma: no cover
    from .reaction_orchestrator import MessageSource


logger = logging.getLogger(__name__)

DISCORD_MESSAGE_LIMIT = 2000


class TranslationUIEngine:
    """Formatting and delivery helpers that keep presentation outside the orchestrator."""

    def __init__(self, *, limit: int = DISCORD_MESSAGE_LIMIT) -> None:
        self._limit = limit

    def build_reply(self, *, result: TranslationResult, language_name: str, trigger: str) -> str:
        header = f"🌐 **Translation to {language_name}** {trigger}\n```\n"
        footer = "\n```"
        body = result.translated_text.replace("```", "'''")
        return header + self._truncate(body, self._limit - len(header) - len(footer)) + footer

    def build_error(self, error: BaseException) -> str:
        return f"❌ {user_message_for(error)}"

    async def deliver(self, source: "MessageSource", content: str, *, fallback: bool = True) -> bool:
        """Reply to the source message, then fall back to a plain channel message.

        Returns False when every path failed.
        """

        try:
            await source.reply(content)
            return True
        except DeliveryFailed as exc:
            logger.warning("Reply to message %s failed: %s", source.message_id, exc)
            if not fallback:
                return False

        try:
            await source.send_to_channel(content)
            logger.info("Delivered to channel of message %s without reply (fallback)", source.message_id)
            return True
        except DeliveryFailed as exc:
            logger.warning("Fallback channel message for %s failed: %s", source.message_id, exc)
            return False

    @staticmethod
    def _truncate(text: str, limit: int) -> str:
        if len(text) <= limit:
            return text
        return text[: limit - 3] + "..."


__all__ = ["TranslationUIEngine", "DISCORD_MESSAGE_LIMIT"]
