"""Discord cog that turns flag reactions into translation replies."""

from __future__ import annotations

import logging
from typing import Optional

import discord
from discord.ext import commands, tasks

from flag_translator.config import FlagTranslatorConfig
from flag_translator.core.error_engine import ErrorEngine
from flag_translator.core.errors import DeliveryFailed
from flag_translator.core.reaction_orchestrator import (
    ReactionEvent,
    ReactionOrchestrator,
    ReactionOutcome,
    SourceUnavailable,
)


logger = logging.getLogger(__name__)


class DiscordMessageSource:
    """Lazily resolves a reacted message and sends replies next to it."""

    def __init__(
        self,
        bot: commands.Bot,
        *,
        channel_id: int,
        message_id: int,
        message: Optional[discord.Message] = None,
    ) -> None:
        self.bot = bot
        self.channel_id = channel_id
        self.message_id = message_id
        self._message = message

    async def _channel(self) -> discord.abc.Messageable:
        channel = self.bot.get_channel(self.channel_id)
        if channel is not None:
            return channel  # type: ignore[return-value]
        try:
            return await self.bot.fetch_channel(self.channel_id)  # type: ignore[return-value]
        except discord.HTTPException as exc:
            raise SourceUnavailable(f"channel {self.channel_id} unavailable: {exc}") from exc

    async def _fetch_message(self) -> discord.Message:
        if self._message is None:
            channel = await self._channel()
            try:
                self._message = await channel.fetch_message(self.message_id)
            except discord.HTTPException as exc:
                raise SourceUnavailable(f"message {self.message_id} unavailable: {exc}") from exc
        return self._message

    async def fetch_content(self) -> Optional[str]:
        message = await self._fetch_message()
        return message.content

    async def reply(self, content: str) -> None:
        try:
            message = await self._fetch_message()
            await message.reply(content, mention_author=False)
        except (SourceUnavailable, discord.HTTPException) as exc:
            raise DeliveryFailed(f"reply failed: {exc}") from exc

    async def send_to_channel(self, content: str) -> None:
        try:
            channel = await self._channel()
            await channel.send(content)
        except (SourceUnavailable, discord.HTTPException) as exc:
            raise DeliveryFailed(f"channel send failed: {exc}") from exc


class ReactionTranslationCog(commands.Cog):
    """Listens for flag reactions and replies with a translation."""

    def __init__(
        self,
        bot: commands.Bot,
        config: FlagTranslatorConfig,
        orchestrator: ReactionOrchestrator,
        error_engine: Optional[ErrorEngine] = None,
    ) -> None:
        self.bot = bot
        self.config = config
        self.orchestrator = orchestrator
        self.error_engine = error_engine

    async def cog_load(self) -> None:
        self._sweep_loop.change_interval(seconds=self.config.sweep_interval)
        self._sweep_loop.start()

    async def cog_unload(self) -> None:
        self._sweep_loop.cancel()

    # --------------------------------------------------------------
    # Events
    # --------------------------------------------------------------

    @commands.Cog.listener()
    async def on_raw_reaction_add(self, payload: discord.RawReactionActionEvent) -> None:
        try:
            await self.handle_reaction(payload)
        except Exception as exc:
            logger.exception("Error in reaction handler for message %s", payload.message_id)
            if self.error_engine:
                self.error_engine.log_exception(exc, context=f"reaction on message {payload.message_id}")

    async def handle_reaction(self, payload: discord.RawReactionActionEvent) -> Optional[ReactionOutcome]:
        actor = await self._resolve_actor(payload)
        if actor is None:
            return None

        source = DiscordMessageSource(self.bot, channel_id=payload.channel_id, message_id=payload.message_id)
        event = ReactionEvent(
            trigger=str(payload.emoji),
            actor_is_bot=actor.bot,
            source=source,
            actor_name=str(actor),
        )
        return await self.orchestrator.handle(event)

    # --------------------------------------------------------------
    # Internal helpers
    # --------------------------------------------------------------

    async def _resolve_actor(self, payload: discord.RawReactionActionEvent) -> Optional[discord.abc.User]:
        if payload.member is not None:
            return payload.member
        user = self.bot.get_user(payload.user_id)
        if user is not None:
            return user
        try:
            return await self.bot.fetch_user(payload.user_id)
        except discord.HTTPException as exc:
            logger.warning("Failed to fetch reacting user %s: %s", payload.user_id, exc)
            return None

    @tasks.loop(seconds=300)
    async def _sweep_loop(self) -> None:
        self.orchestrator.sweep()


async def setup(bot: commands.Bot) -> None:  # pragma: no cover - dynamic loading guard
    raise RuntimeError("Use FlagTranslatorRunner to load ReactionTranslationCog")


__all__ = ["DiscordMessageSource", "ReactionTranslationCog"]
