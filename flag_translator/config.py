"""Environment-backed configuration helpers for the flag translator."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional


_TRUTHY = {"1", "true", "yes", "on"}


def _env_int(name: str, default: int, *, minimum: int = 0) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return max(value, minimum)


def _env_float(name: str, default: float, *, minimum: float = 0.0) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return max(value, minimum)


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name, "").strip().lower()
    if not raw:
        return default
    return raw in _TRUTHY


@dataclass(slots=True)
class FlagTranslatorConfig:
    discord_token: str
    # Dedup window for a (message, flag) pair, in seconds.
    cache_duration: float = 60.0
    translation_timeout_ms: int = 15000
    max_retries: int = 2
    min_text_length: int = 2
    retry_delay_ms: int = 2000
    sweep_interval: float = 300.0
    provider: str = "google"
    deepl_api_key: Optional[str] = None
    deepl_endpoint: str = "https://api-free.deepl.com/v2/translate"
    my_memory_api_key: Optional[str] = None
    my_memory_email: Optional[str] = None
    fallback_source_language: str = "en"
    status_enabled: bool = True
    status_host: str = "0.0.0.0"
    status_port: int = 5000
    command_prefix: str = "!"
    log_level: str = "INFO"
    error_log_file: str = "logs/flag_translator_errors.log"

    @property
    def translation_timeout(self) -> float:
        return self.translation_timeout_ms / 1000

    @property
    def retry_delay(self) -> float:
        return self.retry_delay_ms / 1000

    @classmethod
    def from_env(cls) -> "FlagTranslatorConfig":
        token = (os.getenv("DISCORD_BOT_TOKEN", "").strip() or os.getenv("DISCORD_TOKEN", "").strip())
        if not token:
            raise RuntimeError("DISCORD_BOT_TOKEN is required to run the bot")

        return cls(
            discord_token=token,
            cache_duration=_env_float("CACHE_DURATION", 60.0, minimum=1.0),
            translation_timeout_ms=_env_int("TRANSLATION_TIMEOUT_MS", 15000, minimum=100),
            max_retries=_env_int("MAX_RETRIES", 2),
            min_text_length=_env_int("MIN_TEXT_LENGTH", 2, minimum=1),
            retry_delay_ms=_env_int("RETRY_DELAY_MS", 2000),
            sweep_interval=_env_float("CACHE_SWEEP_INTERVAL", 300.0, minimum=1.0),
            provider=os.getenv("TRANSLATION_PROVIDER", "google").strip().lower() or "google",
            deepl_api_key=os.getenv("DEEPL_API_KEY", "").strip() or None,
            deepl_endpoint=os.getenv("DEEPL_ENDPOINT", "").strip()
            or "https://api-free.deepl.com/v2/translate",
            my_memory_api_key=os.getenv("MY_MEMORY_API_KEY", "").strip() or None,
            my_memory_email=os.getenv("MYMEMORY_USER_EMAIL", "").strip() or None,
            fallback_source_language=os.getenv("TRANSLATION_FALLBACK_LANGUAGE", "en").strip().lower() or "en",
            status_enabled=_env_bool("STATUS_SERVER_ENABLED", True),
            status_host=os.getenv("STATUS_HOST", "0.0.0.0").strip() or "0.0.0.0",
            status_port=_env_int("PORT", 5000, minimum=1),
            command_prefix=os.getenv("BOT_PREFIX", "!"),
            log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO",
            error_log_file=os.getenv("ERROR_LOG_FILE", "").strip() or "logs/flag_translator_errors.log",
        )


__all__ = ["FlagTranslatorConfig"]
