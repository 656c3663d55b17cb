"""Logging setup for the ``flag_translator`` logger tree."""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence, Union

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
ROOT_LOGGER = "flag_translator"

# Libraries that log every gateway event or HTTP request at INFO.
NOISY_LOGGERS: Sequence[str] = ("discord.gateway", "discord.http", "httpx", "aiohttp.access")


def resolve_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_library_logging(
    *,
    level: Union[int, str] = logging.INFO,
    fmt: str = DEFAULT_FORMAT,
    handlers: Optional[Iterable[logging.Handler]] = None,
    quiet: Sequence[str] = NOISY_LOGGERS,
) -> logging.Logger:
    """Attach one formatter to the bot's handlers and return the root bot logger.

    Calling it again replaces the previous handlers, so the runner and tests can
    both configure logging without duplicate output. Third-party loggers named
    in ``quiet`` are capped at WARNING unless ``level`` is DEBUG.
    """

    numeric_level = resolve_level(level)
    formatter = logging.Formatter(fmt)

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(numeric_level)
    logger.handlers.clear()
    for handler in list(handlers or [logging.StreamHandler()]):
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.propagate = False

    if numeric_level > logging.DEBUG:
        for name in quiet:
            logging.getLogger(name).setLevel(logging.WARNING)
    return logger


__all__ = ["configure_library_logging", "resolve_level", "ROOT_LOGGER", "NOISY_LOGGERS"]
