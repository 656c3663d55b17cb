import asyncio
import sys

import pytest

from flag_translator.core.error_engine import ErrorEngine
from flag_translator.core.errors import RateLimited


def _reset_logger(engine: ErrorEngine):
    for handler in list(engine.logger.handlers):
        handler.close()
        engine.logger.removeHandler(handler)


def test_log_exception_persists_and_prints(tmp_path, capsys):
    log_file = tmp_path / "errors.log"
    engine = ErrorEngine(log_file=str(log_file))

    try:
        engine.log_exception(ValueError("boom"), context="reaction on message 20")
    finally:
        _reset_logger(engine)

    captured = capsys.readouterr()
    assert "reaction on message 20" in captured.err
    assert "ValueError: boom" in log_file.read_text(encoding="utf-8")
    assert engine.error_count == 1


def test_repeated_construction_reuses_file_handler(tmp_path):
    log_file = tmp_path / "nested" / "errors.log"
    first = ErrorEngine(log_file=str(log_file))
    second = ErrorEngine(log_file=str(log_file))
    try:
        assert len(second.logger.handlers) == 1
        assert log_file.parent.is_dir()
    finally:
        _reset_logger(first)


def test_catch_uncaught_installs_hook(tmp_path):
    log_file = tmp_path / "errors.log"
    engine = ErrorEngine(log_file=str(log_file))
    calls = []

    def fake_log(exc, context=""):
        calls.append((exc, context))

    engine.log_exception = fake_log  # type: ignore[attr-defined]

    original = sys.excepthook
    engine.catch_uncaught()
    try:
        sys.excepthook(RuntimeError, RuntimeError("failure"), None)
    finally:
        sys.excepthook = original
        _reset_logger(engine)

    assert calls and calls[0][1] == "Uncaught Exception"


@pytest.mark.asyncio
async def test_catch_unhandled_async_logs_loop_errors(tmp_path):
    engine = ErrorEngine(log_file=str(tmp_path / "errors.log"))
    calls = []
    engine.log_exception = lambda exc, context="": calls.append((exc, context))  # type: ignore[assignment]

    loop = asyncio.get_running_loop()
    original = loop.get_exception_handler()
    engine.catch_unhandled_async(loop)
    try:
        loop.call_exception_handler({"message": "task exploded"})
    finally:
        loop.set_exception_handler(original)
        _reset_logger(engine)

    assert calls[0][1] == "Unhandled Rejection"
    assert "task exploded" in str(calls[0][0])


def test_translation_errors_are_tagged_with_their_kind(tmp_path):
    engine = ErrorEngine(log_file=str(tmp_path / "errors.log"))
    try:
        engine.log_exception(RateLimited("quota"), context="reaction on message 20")
    finally:
        _reset_logger(engine)

    assert engine.last_error == "[rate_limited] quota"
    assert ErrorEngine.describe(KeyError("x")) == "KeyError: 'x'"
