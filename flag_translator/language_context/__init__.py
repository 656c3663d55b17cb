from .flag_map import LanguageDirectory, LanguageSpec, flag_emoji

__all__ = ["LanguageDirectory", "LanguageSpec", "flag_emoji"]
