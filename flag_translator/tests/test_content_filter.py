import pytest

from flag_translator.core.content_filter import (
    REASON_NO_CONTENT,
    REASON_NO_WORDS,
    REASON_NOTHING_LEFT,
    REASON_TOO_SHORT,
    ContentFilter,
    has_word_characters,
    is_eligible,
    strip_untranslatable,
)


@pytest.mark.parametrize("text", [None, "", "   \n\t ", 42])
def test_missing_content_is_rejected(text):
    verdict = ContentFilter().check(text)
    assert verdict.eligible is False
    assert verdict.reason == REASON_NO_CONTENT


def test_text_below_minimum_length_is_too_short():
    verdict = ContentFilter(2).check(" a ")
    assert verdict == ContentFilter(2).check("a")
    assert verdict.reason == REASON_TOO_SHORT


def test_url_only_message_has_nothing_left():
    verdict = is_eligible("https://example.com/path?q=1")
    assert verdict.eligible is False
    assert verdict.reason == REASON_NOTHING_LEFT


def test_emoji_and_mentions_only_have_nothing_left():
    verdict = is_eligible("<@123456> 😀😀 <:party:998877> \U0001F1EA\U0001F1F8")
    assert verdict.eligible is False
    assert verdict.reason == REASON_NOTHING_LEFT


def test_symbols_and_digits_have_no_words():
    verdict = is_eligible("12345 !!! ???")
    assert verdict.eligible is False
    assert verdict.reason == REASON_NO_WORDS


def test_plain_text_is_eligible_and_cleaned():
    verdict = is_eligible("  Hello   there  ")
    assert verdict.eligible is True
    assert verdict.reason is None
    assert verdict.cleaned_text == "Hello there"


def test_mixed_content_strips_markup_but_keeps_words():
    text = "Check this out https://example.com <@!42> `code()` ||spoiler|| 🎉 it is great"
    verdict = is_eligible(text)
    assert verdict.eligible is True
    assert verdict.cleaned_text == "Check this out it is great"


@pytest.mark.parametrize("text", ["こんにちは", "Привет", "مرحبا", "안녕하세요", "你好"])
def test_non_latin_scripts_are_words(text):
    assert has_word_characters(text)
    assert is_eligible(text).eligible is True


def test_fenced_code_block_is_removed():
    assert strip_untranslatable("before ```\nprint('hi')\n``` after") == "before after"


def test_minimum_length_is_configurable():
    assert is_eligible("ok", min_length=3).reason == REASON_TOO_SHORT
    assert ContentFilter(0).min_length == 1


def test_filter_is_deterministic():
    content_filter = ContentFilter()
    text = "Bonjour www.example.org tout le monde"
    assert content_filter.check(text) == content_filter.check(text)


def test_inline_code_spanning_lines_is_removed():
    verdict = is_eligible("Look at `first line\nsecond line` please")
    assert verdict.eligible is True
    assert verdict.cleaned_text == "Look at please"
