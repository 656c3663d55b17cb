"""Async bootstrapper for the flag translator bot."""

from __future__ import annotations

import asyncio
import logging
import signal
from typing import Callable, List, Optional

import discord
from discord.ext import commands
from dotenv import load_dotenv

from flag_translator import __version__
from flag_translator.config import FlagTranslatorConfig
from flag_translator.core.content_filter import ContentFilter
from flag_translator.core.dedup_cache import DedupCache
from flag_translator.core.error_engine import ErrorEngine
from flag_translator.core.logging_utils import configure_library_logging
from flag_translator.core.providers import build_provider
from flag_translator.core.reaction_orchestrator import ReactionOrchestrator
from flag_translator.core.status_server import StatusServer
from flag_translator.core.translation_invoker import TranslationInvoker
from flag_translator.core.translation_ui_engine import TranslationUIEngine
from flag_translator.cogs.translation_cog import ReactionTranslationCog
from flag_translator.language_context.flag_map import LanguageDirectory


logger = logging.getLogger(__name__)

SHUTDOWN_SIGNALS = ("SIGINT", "SIGTERM", "SIGUSR2")


def install_shutdown_handlers(
    loop: asyncio.AbstractEventLoop,
    callback: Callable[[signal.Signals], None],
) -> List[signal.Signals]:
    """Route termination signals to ``callback`` on the running loop."""

    installed: List[signal.Signals] = []
    for name in SHUTDOWN_SIGNALS:
        sig = getattr(signal, name, None)
        if sig is None:
            continue
        try:
            loop.add_signal_handler(sig, callback, sig)
        except (NotImplementedError, RuntimeError):
            # Proactor loops on Windows have no signal handler support.
            continue
        installed.append(sig)
    return installed


def build_orchestrator(config: FlagTranslatorConfig, directory: LanguageDirectory) -> ReactionOrchestrator:
    invoker = TranslationInvoker.from_config(config, build_provider(config))
    return ReactionOrchestrator(
        directory=directory,
        cache=DedupCache(config.cache_duration),
        content_filter=ContentFilter(config.min_text_length),
        invoker=invoker,
        ui=TranslationUIEngine(),
    )


class FlagTranslatorRunner:
    """Full lifecycle manager for the discord.py bot instance."""

    def __init__(self, config: Optional[FlagTranslatorConfig] = None) -> None:
        load_dotenv()
        self.config = config or FlagTranslatorConfig.from_env()
        configure_library_logging(level=self.config.log_level)
        self.error_engine = ErrorEngine(log_file=self.config.error_log_file)
        self.error_engine.catch_uncaught()

        intents = discord.Intents.default()
        intents.guilds = True
        intents.guild_messages = True
        intents.guild_reactions = True
        intents.message_content = True

        self.bot = commands.Bot(
            command_prefix=self.config.command_prefix,
            intents=intents,
            help_command=None,
            allowed_mentions=discord.AllowedMentions(everyone=False, users=True, roles=True, replied_user=False),
        )

        self.language_directory = LanguageDirectory.default()
        self.orchestrator = build_orchestrator(self.config, self.language_directory)
        self.status_server: Optional[StatusServer] = None
        self._shutdown_task: Optional[asyncio.Task] = None
        if self.config.status_enabled:
            self.status_server = StatusServer(
                orchestrator=self.orchestrator,
                directory=self.language_directory,
                is_ready=self.bot.is_ready,
                bot_name=lambda: self.bot.user.name if self.bot.user else None,
                latency=lambda: self.bot.latency if self.bot.is_ready() else None,
                host=self.config.status_host,
                port=self.config.status_port,
            )

        async def setup_hook() -> None:
            self.error_engine.catch_unhandled_async(asyncio.get_running_loop())
            await self.bot.add_cog(
                ReactionTranslationCog(
                    self.bot,
                    self.config,
                    self.orchestrator,
                    self.error_engine,
                )
            )
            if self.status_server:
                await self.status_server.start()

        self.bot.setup_hook = setup_hook  # type: ignore[assignment]

        @self.bot.event  # type: ignore[misc]
        async def on_ready() -> None:
            bot_user = self.bot.user
            user_id = bot_user.id if bot_user else "unknown"
            logger.info("Flag translator connected as %s (%s) in %d servers", bot_user, user_id, len(self.bot.guilds))
            logger.info("Supporting %d flag emojis", len(self.language_directory))
            await self.bot.change_presence(
                activity=discord.Activity(type=discord.ActivityType.watching, name="flag reactions for translations")
            )

    async def start(self) -> None:
        logger.info(
            "Starting flag translator v%s (provider=%s, cache=%ss, timeout=%sms)",
            __version__,
            self.config.provider,
            self.config.cache_duration,
            self.config.translation_timeout_ms,
        )
        install_shutdown_handlers(asyncio.get_running_loop(), self.request_shutdown)
        try:
            await self.bot.start(self.config.discord_token)
        finally:
            await self.close()

    def request_shutdown(self, sig: signal.Signals) -> None:
        logger.info("Received %s, shutting down", sig.name)
        if self._shutdown_task is None:
            self._shutdown_task = asyncio.get_running_loop().create_task(self.bot.close())

    async def close(self) -> None:
        if self.status_server:
            await self.status_server.stop()
        if not self.bot.is_closed():
            await self.bot.close()
        logger.info("Final performance stats: %s", self.orchestrator.stats.as_dict())


def run_flag_translator() -> None:
    runner = FlagTranslatorRunner()
    try:
        asyncio.run(runner.start())
    except KeyboardInterrupt:
        logger.info("Flag translator interrupted by user")
    except discord.LoginFailure as exc:
        logger.error("Failed to login to Discord: %s - check DISCORD_BOT_TOKEN and the Message Content intent", exc)
        raise SystemExit(1) from exc


__all__ = ["FlagTranslatorRunner", "build_orchestrator", "install_shutdown_handlers", "run_flag_translator"]
