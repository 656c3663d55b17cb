import asyncio
import logging
from logging.handlers import RotatingFileHandler
import os
import sys
import traceback
from typing import Any, Dict, Optional

from .errors import TranslationError


class ErrorEngine:
    """Persists unexpected failures to a rotating log next to the console output."""

    def __init__(self, log_file: str = "logs/flag_translator_errors.log", *, max_bytes: int = 1_000_000, backups: int = 5):
        self.logger = logging.getLogger("flag_translator.errors")
        self.error_count = 0
        self.last_error: Optional[str] = None
        os.makedirs(os.path.dirname(log_file) or ".", exist_ok=True)
        abs_path = os.path.abspath(log_file)
        # One file handler per path, however many engines get built.
        if not any(getattr(h, "baseFilename", None) == abs_path for h in self.logger.handlers):
            handler = RotatingFileHandler(abs_path, maxBytes=max_bytes, backupCount=backups, encoding="utf-8")
            handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
            self.logger.addHandler(handler)
        self.logger.setLevel(logging.ERROR)

    @staticmethod
    def describe(exc: BaseException) -> str:
        if isinstance(exc, TranslationError):
            return f"[{exc.kind.value}] {exc}"
        return f"{type(exc).__name__}: {exc}"

    def log_exception(self, exc: BaseException, context: str = ""):
        self.error_count += 1
        self.last_error = self.describe(exc)
        tb = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        self.logger.error("Exception in %s: %s\n%s", context or "unknown context", self.last_error, tb)
        print(f"[FlagTranslator Error] {self.last_error} in {context}", file=sys.stderr)

    def catch_uncaught(self):
        def handle_exception(exc_type, exc_value, exc_traceback):
            if issubclass(exc_type, KeyboardInterrupt):
                sys.__excepthook__(exc_type, exc_value, exc_traceback)
                return
            self.log_exception(exc_value, context="Uncaught Exception")

        sys.excepthook = handle_exception

    def catch_unhandled_async(self, loop: asyncio.AbstractEventLoop):
        def handle_async_exception(_loop: asyncio.AbstractEventLoop, context: Dict[str, Any]):
            exc = context.get("exception")
            if isinstance(exc, asyncio.CancelledError):
                return
            if exc is None:
                exc = RuntimeError(context.get("message", "unknown asyncio error"))
            self.log_exception(exc, context="Unhandled Rejection")

        loop.set_exception_handler(handle_async_exception)
