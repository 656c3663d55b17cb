"""Discord bot that translates messages when users react with flag emojis."""

__version__ = "2.0.0"
