from pathlib import Path
import sys

import pytest

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from flag_translator.config import FlagTranslatorConfig  # noqa: E402
from flag_translator.core.content_filter import ContentFilter  # noqa: E402
from flag_translator.core.dedup_cache import DedupCache  # noqa: E402
from flag_translator.core.reaction_orchestrator import ReactionOrchestrator  # noqa: E402
from flag_translator.core.translation_invoker import TranslationInvoker, TranslationResult  # noqa: E402
from flag_translator.core.translation_ui_engine import TranslationUIEngine  # noqa: E402
from flag_translator.language_context.flag_map import LanguageDirectory  # noqa: E402
from flag_translator.tests.stubs import FakeClock, SuccessStub  # noqa: E402


@pytest.fixture()
def sample_config() -> FlagTranslatorConfig:
    return FlagTranslatorConfig(
        discord_token="testing-token",
        cache_duration=60,
        translation_timeout_ms=500,
        max_retries=2,
        min_text_length=2,
        retry_delay_ms=0,
        provider="google",
        deepl_api_key="deepl-key",
        my_memory_api_key="mm-key",
        my_memory_email="dev@example.com",
        status_enabled=False,
    )


@pytest.fixture()
def translation_result() -> TranslationResult:
    return TranslationResult(
        provider="stub",
        translated_text="Hola",
        target_language="es",
        source_language="en",
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def directory() -> LanguageDirectory:
    return LanguageDirectory.default()


@pytest.fixture()
def provider() -> SuccessStub:
    return SuccessStub("Hola")


@pytest.fixture()
def orchestrator(directory, clock, provider) -> ReactionOrchestrator:
    return ReactionOrchestrator(
        directory=directory,
        cache=DedupCache(60, clock=clock),
        content_filter=ContentFilter(2),
        invoker=TranslationInvoker(provider, timeout=1.0, max_retries=2, retry_delay=0),
        ui=TranslationUIEngine(),
    )


__all__ = [
    "sample_config",
    "translation_result",
    "clock",
    "directory",
    "provider",
    "orchestrator",
]
