import signal
from unittest.mock import AsyncMock, MagicMock

import pytest

from flag_translator.core.providers import DeepLProvider
from flag_translator.core.reaction_orchestrator import ReactionOrchestrator
from flag_translator.runner import FlagTranslatorRunner, build_orchestrator, install_shutdown_handlers


def test_build_orchestrator_wires_config(sample_config, directory):
    sample_config.cache_duration = 45
    sample_config.min_text_length = 4

    orchestrator = build_orchestrator(sample_config, directory)

    assert isinstance(orchestrator, ReactionOrchestrator)
    assert orchestrator.cache.duration == 45
    assert orchestrator.content_filter.min_length == 4
    assert orchestrator.invoker.provider_name == "google"
    assert orchestrator.invoker.max_attempts == 3
    assert orchestrator.directory is directory


def test_build_orchestrator_uses_configured_provider(sample_config, directory):
    sample_config.provider = "deepl"
    orchestrator = build_orchestrator(sample_config, directory)
    assert isinstance(orchestrator.invoker._provider, DeepLProvider)


def test_shutdown_handlers_cover_termination_signals():
    loop = MagicMock()
    callback = MagicMock()

    installed = install_shutdown_handlers(loop, callback)

    assert signal.SIGTERM in installed
    assert signal.SIGINT in installed
    loop.add_signal_handler.assert_any_call(signal.SIGTERM, callback, signal.SIGTERM)


def test_shutdown_handlers_skip_loops_without_signal_support():
    loop = MagicMock()
    loop.add_signal_handler.side_effect = NotImplementedError

    assert install_shutdown_handlers(loop, MagicMock()) == []


@pytest.mark.asyncio
async def test_sigterm_closes_bot_once():
    runner = FlagTranslatorRunner.__new__(FlagTranslatorRunner)
    runner.bot = MagicMock()
    runner.bot.close = AsyncMock()
    runner._shutdown_task = None

    runner.request_shutdown(signal.SIGTERM)
    runner.request_shutdown(signal.SIGTERM)
    await runner._shutdown_task

    runner.bot.close.assert_awaited_once()


@pytest.mark.asyncio
async def test_close_stops_status_server_and_logs_stats(sample_config, directory, monkeypatch):
    runner = FlagTranslatorRunner.__new__(FlagTranslatorRunner)
    runner.bot = MagicMock()
    runner.bot.is_closed.return_value = False
    runner.bot.close = AsyncMock()
    runner.status_server = MagicMock()
    runner.status_server.stop = AsyncMock()
    runner.orchestrator = build_orchestrator(sample_config, directory)

    log = MagicMock()
    monkeypatch.setattr("flag_translator.runner.logger", log)

    await runner.close()

    runner.status_server.stop.assert_awaited_once()
    runner.bot.close.assert_awaited_once()
    assert log.info.call_args.args[0] == "Final performance stats: %s"
