"""Failure taxonomy shared by the translation invoker, providers and orchestrator."""

from __future__ import annotations

from enum import Enum
from typing import Optional


class FailureKind(str, Enum):
    INVALID_INPUT = "invalid_input"
    TIMEOUT = "timeout"
    SERVICE_UNAVAILABLE = "service_unavailable"
    RATE_LIMITED = "rate_limited"
    EMPTY_RESULT = "empty_result"
    DELIVERY_FAILED = "delivery_failed"
    UNSUPPORTED_LANGUAGE = "unsupported_language"


GENERIC_USER_MESSAGE = "Translation temporarily unavailable - please try again"


class TranslationError(RuntimeError):
    """Base class for classified translation failures."""

    kind: FailureKind = FailureKind.SERVICE_UNAVAILABLE
    retryable: bool = False
    user_message: str = GENERIC_USER_MESSAGE

    def __init__(self, message: str = "", *, retryable: Optional[bool] = None) -> None:
        super().__init__(message or self.kind.value)
        if retryable is not None:
            self.retryable = retryable


class InvalidInput(TranslationError):
    kind = FailureKind.INVALID_INPUT
    user_message = "Message contains no translatable text"


class TranslationTimeout(TranslationError):
    kind = FailureKind.TIMEOUT
    retryable = True
    user_message = "Translation service is temporarily slow - please try again"


class ServiceUnavailable(TranslationError):
    kind = FailureKind.SERVICE_UNAVAILABLE
    retryable = True
    user_message = "Network connection issue - please try again later"


class RateLimited(TranslationError):
    kind = FailureKind.RATE_LIMITED
    user_message = "Too many translation requests - please wait a moment"


class EmptyResult(TranslationError):
    kind = FailureKind.EMPTY_RESULT
    user_message = "The translation service returned no text - please try again"


class UnsupportedLanguage(TranslationError):
    """The provider refused the language pair, e.g. source and target are the same."""

    kind = FailureKind.UNSUPPORTED_LANGUAGE
    user_message = "Language not supported for this text"


class DeliveryFailed(TranslationError):
    kind = FailureKind.DELIVERY_FAILED


def user_message_for(error: BaseException) -> str:
    if isinstance(error, TranslationError):
        return error.user_message
    return GENERIC_USER_MESSAGE


__all__ = [
    "DeliveryFailed",
    "EmptyResult",
    "FailureKind",
    "InvalidInput",
    "RateLimited",
    "ServiceUnavailable",
    "TranslationError",
    "TranslationTimeout",
    "UnsupportedLanguage",
    "user_message_for",
    "GENERIC_USER_MESSAGE",
]
