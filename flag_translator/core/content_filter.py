"""
Eligibility checks deciding whether a Discord message is worth translating.

Everything here is pure and synchronous: the same input always yields the same
verdict, and nothing is logged or cached, so the filter can be called from any
handler without coordination.
"""

from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Any, Optional

DEFAULT_MIN_LENGTH = 2

REASON_NO_CONTENT = "no content"
REASON_TOO_SHORT = "too short"
REASON_NOTHING_LEFT = "no translatable content after filtering"
REASON_NO_WORDS = "no recognizable words"

# Fenced blocks first so inline backticks inside them are not matched separately.
_CODE_RE = re.compile(r"```.*?```|`[^`]+`", flags=re.DOTALL)

_SPOILER_RE = re.compile(r"\|\|.*?\|\|", flags=re.DOTALL)

_URL_RE = re.compile(r"\b[a-z][a-z0-9+.\-]*://\S+|\bwww\.\S+", flags=re.IGNORECASE)

# <@123>, <@!123>, <@&123> and <#123>.
_MENTION_RE = re.compile(r"<(?:@[!&]?|#)\d+>")

# Discord custom emoji markup <:name:id> or <a:name:id>.
_CUSTOM_EMOJI_RE = re.compile(r"<a?:\w+:\d+>")

# Pictographs, dingbats, regional indicators, keycaps, tags and the joiners /
# variation selectors that glue emoji sequences together.
_EMOJI_RE = re.compile(
    "["
    "\U0001F000-\U0001FAFF"
    "\u2300-\u23ff"
    "\u2600-\u27bf"
    "\u2b00-\u2bff"
    "\u200d\u20e3\ufe0e\ufe0f"
    "\U000E0020-\U000E007F"
    "]+"
)

_WHITESPACE_RE = re.compile(r"\s+")

# Unicode blocks that carry actual words, as (start, end, label).
_SCRIPT_RANGES = [
    (0x0041, 0x005A, "latin"),
    (0x0061, 0x007A, "latin"),
    (0x00C0, 0x024F, "latin"),
    (0x0370, 0x03FF, "greek"),
    (0x0400, 0x04FF, "cyrillic"),
    (0x0530, 0x058F, "armenian"),
    (0x0590, 0x05FF, "hebrew"),
    (0x0600, 0x06FF, "arabic"),
    (0x0780, 0x07BF, "thaana"),
    (0x0900, 0x0DFF, "indic"),
    (0x0E00, 0x0EFF, "thai-lao"),
    (0x0F00, 0x0FFF, "tibetan"),
    (0x1000, 0x109F, "myanmar"),
    (0x10A0, 0x10FF, "georgian"),
    (0x1100, 0x11FF, "hangul"),
    (0x1200, 0x137F, "ethiopic"),
    (0x1780, 0x17FF, "khmer"),
    (0x1800, 0x18AF, "mongolian"),
    (0x1E00, 0x1EFF, "latin"),
    (0x3040, 0x30FF, "japanese"),
    (0x3400, 0x4DBF, "cjk"),
    (0x4E00, 0x9FFF, "cjk"),
    (0xAC00, 0xD7AF, "hangul"),
]


@dataclass(frozen=True, slots=True)
class Eligibility:
    eligible: bool
    reason: Optional[str] = None
    cleaned_text: Optional[str] = None


def strip_untranslatable(text: str) -> str:
    """Remove markup that should never be sent to a translator and tidy whitespace."""

    cleaned = _CODE_RE.sub(" ", text or "")
    cleaned = _SPOILER_RE.sub(" ", cleaned)
    cleaned = _URL_RE.sub(" ", cleaned)
    cleaned = _MENTION_RE.sub(" ", cleaned)
    cleaned = _CUSTOM_EMOJI_RE.sub(" ", cleaned)
    cleaned = _EMOJI_RE.sub(" ", cleaned)
    return _WHITESPACE_RE.sub(" ", cleaned).strip()


def script_family(char: str) -> Optional[str]:
    code = ord(char)
    for start, end, label in _SCRIPT_RANGES:
        if start <= code <= end:
            return label
    return None


def has_word_characters(text: str) -> bool:
    return any(script_family(char) for char in text or "")


class ContentFilter:
    """Applies the eligibility rules in order, stopping at the first failure."""

    def __init__(self, min_length: int = DEFAULT_MIN_LENGTH) -> None:
        self.min_length = max(1, min_length)

    def check(self, text: Any) -> Eligibility:
        if not isinstance(text, str) or not text.strip():
            return Eligibility(False, REASON_NO_CONTENT)

        trimmed = text.strip()
        if len(trimmed) < self.min_length:
            return Eligibility(False, REASON_TOO_SHORT)

        cleaned = strip_untranslatable(trimmed)
        if len(cleaned) < self.min_length:
            return Eligibility(False, REASON_NOTHING_LEFT)

        if not has_word_characters(cleaned):
            return Eligibility(False, REASON_NO_WORDS)

        return Eligibility(True, cleaned_text=cleaned)


def is_eligible(text: Any, *, min_length: int = DEFAULT_MIN_LENGTH) -> Eligibility:
    return ContentFilter(min_length).check(text)


__all__ = [
    "ContentFilter",
    "Eligibility",
    "has_word_characters",
    "is_eligible",
    "script_family",
    "strip_untranslatable",
    "REASON_NO_CONTENT",
    "REASON_TOO_SHORT",
    "REASON_NOTHING_LEFT",
    "REASON_NO_WORDS",
]
