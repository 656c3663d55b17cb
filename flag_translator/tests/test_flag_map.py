import pytest

from flag_translator.language_context.flag_map import (
    LanguageDirectory,
    LanguageSpec,
    flag_emoji,
)
from flag_translator.tests.stubs import MEXICO, SPAIN


def test_flag_emoji_builds_regional_indicators():
    assert flag_emoji("es") == SPAIN
    assert flag_emoji(" MX ") == MEXICO
    with pytest.raises(ValueError):
        flag_emoji("ESP")


def test_flag_lookup_resolves_language():
    directory = LanguageDirectory.default()

    spec = directory.resolve_by_flag(MEXICO)
    assert spec is not None
    assert spec.iso_code == "es"
    assert directory.language_for(SPAIN) == "es"
    assert directory.language_for(flag_emoji("US")) == "en"
    assert directory.language_for(flag_emoji("TW")) == "zh-tw"
    assert directory.language_for(flag_emoji("LK")) == "ta"


def test_non_flag_emojis_are_unsupported():
    directory = LanguageDirectory.default()
    assert directory.language_for("\U0001F44D") is None
    assert directory.language_for("<:custom:1234>") is None
    assert directory.language_for(flag_emoji("AQ")) is None


def test_display_name_falls_back_to_upper_code():
    directory = LanguageDirectory.default()
    assert directory.display_name("es") == "Spanish"
    assert directory.display_name("xx") == "XX"


def test_first_language_wins_for_shared_flag():
    directory = LanguageDirectory(
        [
            LanguageSpec("First", "aa", ("ZZ",)),
            LanguageSpec("Second", "bb", ("ZZ", "ZY")),
        ]
    )
    assert directory.language_for(flag_emoji("ZZ")) == "aa"
    assert directory.language_for(flag_emoji("ZY")) == "bb"
    assert len(directory) == 2


def test_every_flag_maps_to_exactly_one_language():
    directory = LanguageDirectory.default()
    emojis = [emoji for emoji, _, _ in directory.flags()]
    assert len(emojis) == len(set(emojis)) == len(directory)
    assert len(directory) > 100

