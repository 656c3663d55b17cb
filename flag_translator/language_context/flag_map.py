"""Language metadata and flag emoji helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple


_REGIONAL_INDICATOR_A = 0x1F1E6


def flag_emoji(country_code: str) -> str:
    """Return the regional-indicator flag for an ISO-3166 alpha-2 country code."""

    code = country_code.strip().upper()
    if len(code) != 2 or not code.isascii() or not code.isalpha():
        raise ValueError(f"not an ISO-3166 alpha-2 code: {country_code!r}")
    return "".join(chr(_REGIONAL_INDICATOR_A + ord(char) - ord("A")) for char in code)


@dataclass(frozen=True, slots=True)
class LanguageSpec:
    name: str
    iso_code: str
    countries: Tuple[str, ...] = ()

    @property
    def flag_emojis(self) -> Tuple[str, ...]:
        return tuple(flag_emoji(country) for country in self.countries)


class LanguageDirectory:
    """Read-only lookup from flag emojis to target languages.

    Built once at startup and never mutated afterwards, so it can be shared by
    every reaction handler without synchronisation.
    """

    def __init__(self, specs: Sequence[LanguageSpec]) -> None:
        self._by_iso: Dict[str, LanguageSpec] = {}
        self._by_flag: Dict[str, LanguageSpec] = {}

        for spec in specs:
            self._by_iso.setdefault(spec.iso_code.lower(), spec)
            for emoji in spec.flag_emojis:
                # First one wins; a flag never maps to two languages.
                self._by_flag.setdefault(emoji, spec)

    @classmethod
    def default(cls) -> "LanguageDirectory":
        return cls(DEFAULT_LANGUAGES)

    def __len__(self) -> int:
        return len(self._by_flag)

    def resolve_by_flag(self, emoji: str) -> Optional[LanguageSpec]:
        return self._by_flag.get(emoji)

    def language_for(self, emoji: str) -> Optional[str]:
        spec = self._by_flag.get(emoji)
        return spec.iso_code if spec else None

    def display_name(self, iso_code: str) -> str:
        spec = self._by_iso.get((iso_code or "").lower())
        return spec.name if spec else (iso_code or "").upper()

    def flags(self) -> List[Tuple[str, str, str]]:
        return [(emoji, spec.iso_code, spec.name) for emoji, spec in self._by_flag.items()]


DEFAULT_LANGUAGES: Tuple[LanguageSpec, ...] = (
    # Europe
    LanguageSpec("English", "en", ("GB", "US", "CA", "AU", "NZ", "IE", "ZA", "BZ", "GY", "PG", "SB")),
    LanguageSpec(
        "French",
        "fr",
        ("FR", "BE", "CH", "MC", "LU", "CI", "BF", "TD", "CM", "CF", "CG", "CD", "GA", "GN", "MU", "GF", "NC", "PF"),
    ),
    LanguageSpec(
        "Spanish",
        "es",
        ("ES", "MX", "AR", "CO", "PE", "VE", "CL", "EC", "GT", "CU", "DO", "HN", "PY", "NI", "CR", "PA", "UY", "BO", "SV"),
    ),
    LanguageSpec("German", "de", ("DE", "AT", "LI")),
    LanguageSpec("Italian", "it", ("IT", "SM")),
    LanguageSpec("Portuguese", "pt", ("PT", "BR", "TL")),
    LanguageSpec("Dutch", "nl", ("NL", "SR")),
    LanguageSpec("Russian", "ru", ("RU",)),
    LanguageSpec("Polish", "pl", ("PL",)),
    LanguageSpec("Swedish", "sv", ("SE",)),
    LanguageSpec("Norwegian", "no", ("NO",)),
    LanguageSpec("Danish", "da", ("DK",)),
    LanguageSpec("Finnish", "fi", ("FI",)),
    LanguageSpec("Greek", "el", ("GR",)),
    LanguageSpec("Hungarian", "hu", ("HU",)),
    LanguageSpec("Czech", "cs", ("CZ",)),
    LanguageSpec("Slovak", "sk", ("SK",)),
    LanguageSpec("Romanian", "ro", ("RO",)),
    LanguageSpec("Bulgarian", "bg", ("BG",)),
    LanguageSpec("Croatian", "hr", ("HR",)),
    LanguageSpec("Slovenian", "sl", ("SI",)),
    LanguageSpec("Lithuanian", "lt", ("LT",)),
    LanguageSpec("Latvian", "lv", ("LV",)),
    LanguageSpec("Estonian", "et", ("EE",)),
    LanguageSpec("Ukrainian", "uk", ("UA",)),
    LanguageSpec("Belarusian", "be", ("BY",)),
    LanguageSpec("Serbian", "sr", ("RS",)),
    LanguageSpec("Macedonian", "mk", ("MK",)),
    LanguageSpec("Albanian", "sq", ("AL",)),
    LanguageSpec("Icelandic", "is", ("IS",)),
    LanguageSpec("Maltese", "mt", ("MT",)),
    LanguageSpec("Catalan", "ca", ("AD",)),
    LanguageSpec("Latin", "la", ("VA",)),
    # Asia
    LanguageSpec("Japanese", "ja", ("JP",)),
    LanguageSpec("Korean", "ko", ("KR",)),
    LanguageSpec("Chinese (Simplified)", "zh", ("CN", "SG")),
    LanguageSpec("Chinese (Traditional)", "zh-tw", ("TW", "HK")),
    LanguageSpec("Thai", "th", ("TH",)),
    LanguageSpec("Vietnamese", "vi", ("VN",)),
    LanguageSpec("Hindi", "hi", ("IN",)),
    LanguageSpec("Indonesian", "id", ("ID",)),
    LanguageSpec("Malay", "ms", ("MY", "BN")),
    LanguageSpec("Filipino", "tl", ("PH",)),
    # Sri Lanka's flag requests Tamil; Sinhala stays available by code only.
    LanguageSpec("Tamil", "ta", ("LK",)),
    LanguageSpec("Sinhala", "si"),
    LanguageSpec("Bengali", "bn", ("BD",)),
    LanguageSpec("Urdu", "ur", ("PK",)),
    LanguageSpec("Nepali", "ne", ("NP",)),
    LanguageSpec("Myanmar", "my", ("MM",)),
    LanguageSpec("Khmer", "km", ("KH",)),
    LanguageSpec("Lao", "lo", ("LA",)),
    LanguageSpec("Mongolian", "mn", ("MN",)),
    LanguageSpec("Kazakh", "kk", ("KZ",)),
    LanguageSpec("Uzbek", "uz", ("UZ",)),
    LanguageSpec("Tajik", "tg", ("TJ",)),
    LanguageSpec("Kyrgyz", "ky", ("KG",)),
    LanguageSpec("Turkmen", "tk", ("TM",)),
    LanguageSpec("Pashto", "ps", ("AF",)),
    LanguageSpec("Dhivehi", "dv", ("MV",)),
    LanguageSpec("Dzongkha", "dz", ("BT",)),
    # Middle East
    LanguageSpec(
        "Arabic",
        "ar",
        ("SA", "AE", "EG", "JO", "LB", "SY", "IQ", "KW", "QA", "BH", "OM", "YE", "MA", "DZ", "TN", "LY", "SD"),
    ),
    LanguageSpec("Persian", "fa", ("IR",)),
    LanguageSpec("Turkish", "tr", ("TR",)),
    LanguageSpec("Hebrew", "he", ("IL",)),
    LanguageSpec("Armenian", "hy", ("AM",)),
    LanguageSpec("Georgian", "ka", ("GE",)),
    LanguageSpec("Azerbaijani", "az", ("AZ",)),
    # Africa
    LanguageSpec("Yoruba", "yo", ("NG",)),
    LanguageSpec("Swahili", "sw", ("KE", "TZ", "UG")),
    LanguageSpec("Amharic", "am", ("ET",)),
    LanguageSpec("Shona", "sn", ("ZW",)),
    LanguageSpec("Chichewa", "ny", ("ZM", "MW")),
    LanguageSpec("Twi", "tw", ("GH",)),
    LanguageSpec("Wolof", "wo", ("SN",)),
    LanguageSpec("Bambara", "bm", ("ML",)),
    LanguageSpec("Hausa", "ha", ("NE",)),
    LanguageSpec("Malagasy", "mg", ("MG",)),
    LanguageSpec("Kinyarwanda", "rw", ("RW",)),
    LanguageSpec("Kirundi", "rn", ("BI",)),
    # Pacific
    LanguageSpec("Fijian", "fj", ("FJ",)),
    LanguageSpec("Tongan", "to", ("TO",)),
    LanguageSpec("Samoan", "sm", ("WS",)),
    LanguageSpec("Bislama", "bi", ("VU",)),
)


__all__ = [
    "DEFAULT_LANGUAGES",
    "LanguageSpec",
    "LanguageDirectory",
    "flag_emoji",
]
