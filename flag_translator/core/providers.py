"""Upstream translation services.

Each provider exposes the same narrow contract,
``await provider.translate(text, target_language) -> TranslationResult``, and
turns transport/HTTP failures into the typed errors of
:mod:`flag_translator.core.errors` before they leave the module.
"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, Any, Dict, Optional

import httpx
from langdetect import DetectorFactory, LangDetectException, detect

from .errors import EmptyResult, RateLimited, ServiceUnavailable, UnsupportedLanguage
from .translation_invoker import TranslationProvider, TranslationResult, classify_error

if TYPE_CHECKING:  # pragma: no cover
    from flag_translator.config import FlagTranslatorConfig


logger = logging.getLogger(__name__)

# Transport-level timeout; the invoker enforces its own, stricter, per-attempt limit.
HTTP_TIMEOUT = 15

GOOGLE_ENDPOINT = "https://translate.googleapis.com/translate_a/single"
MYMEMORY_ENDPOINT = "https://api.mymemory.translated.net/get"

_GOOGLE_CODES = {"zh": "zh-CN", "zh-tw": "zh-TW", "he": "iw"}
_DEEPL_CODES = {"EN": "EN-US", "PT": "PT-BR", "ZH-TW": "ZH-HANT", "ZH": "ZH-HANS"}


async def _get_json(url: str, *, params: Dict[str, Any], timeout: float) -> Any:
    try:
        async with httpx.AsyncClient(timeout=timeout) as client:
            response = await client.get(url, params=params)
            response.raise_for_status()
            return response.json()
    except httpx.HTTPError as exc:
        raise classify_error(exc) from exc


async def _post_json(url: str, *, data: Dict[str, Any], headers: Dict[str, str], timeout: float) -> Any:
    try:
        async with httpx.AsyncClient(timeout=timeout) as client:
            response = await client.post(url, data=data, headers=headers)
            response.raise_for_status()
            return response.json()
    except httpx.HTTPError as exc:
        raise classify_error(exc) from exc


class GoogleTranslateProvider:
    """Public Google Translate endpoint with automatic source detection."""

    name = "google"

    def __init__(self, *, timeout: float = HTTP_TIMEOUT) -> None:
        self._timeout = timeout

    async def translate(self, text: str, target_language: str) -> TranslationResult:
        target = _GOOGLE_CODES.get(target_language.lower(), target_language.lower())
        params = {"client": "gtx", "sl": "auto", "tl": target, "dt": "t", "q": text}
        data = await _get_json(GOOGLE_ENDPOINT, params=params, timeout=self._timeout)

        segments = data[0] if isinstance(data, list) and data and data[0] else []
        translated = "".join(segment[0] for segment in segments if segment and segment[0])
        detected = data[2] if isinstance(data, list) and len(data) > 2 and isinstance(data[2], str) else None
        return TranslationResult(
            provider=self.name,
            translated_text=translated,
            target_language=target_language,
            source_language=detected,
        )


class MyMemoryProvider:
    """MyMemory needs an explicit source language, guessed with langdetect."""

    name = "mymemory"

    def __init__(
        self,
        *,
        api_key: Optional[str] = None,
        email: Optional[str] = None,
        fallback_source: str = "en",
        timeout: float = HTTP_TIMEOUT,
    ) -> None:
        self._api_key = api_key
        self._email = email
        self._fallback_source = fallback_source
        self._timeout = timeout
        # langdetect is randomised per process unless seeded.
        DetectorFactory.seed = int(os.getenv("LANGDETECT_SEED", "31337"))

    def detect_source(self, text: str) -> str:
        try:
            code = detect(text)
        except LangDetectException:
            code = None
        return (code or self._fallback_source).split("-", 1)[0].lower()

    async def translate(self, text: str, target_language: str) -> TranslationResult:
        source = self.detect_source(text)
        params = {"q": text, "langpair": f"{source}|{target_language.lower()}"}
        if self._email:
            params["de"] = self._email
        if self._api_key:
            params["key"] = self._api_key
        payload = await _get_json(MYMEMORY_ENDPOINT, params=params, timeout=self._timeout)

        # Errors arrive as HTTP 200 with the real code in responseStatus and the
        # message in responseData.translatedText.
        status = int(payload.get("responseStatus") or 200)
        if status == 429 or payload.get("quotaFinished"):
            raise RateLimited("MyMemory quota exhausted")
        if status != 200:
            details = payload.get("responseDetails") or (payload.get("responseData") or {}).get("translatedText")
            if status in (400, 403):
                raise UnsupportedLanguage(f"MyMemory rejected {params['langpair']} (status {status}): {details}")
            raise ServiceUnavailable(f"MyMemory API status {status}: {details}", retryable=False)
        translated = (payload.get("responseData") or {}).get("translatedText") or ""
        if not translated:
            matches = payload.get("matches") or []
            if not matches:
                raise EmptyResult("MyMemory returned no data")
            best = max(matches, key=lambda item: float(item.get("match") or 0))
            translated = best.get("translation", "")
        return TranslationResult(
            provider=self.name,
            translated_text=translated.strip(),
            target_language=target_language,
            source_language=source,
        )


class DeepLProvider:
    name = "deepl"

    def __init__(
        self,
        *,
        api_key: str,
        endpoint: str = "https://api-free.deepl.com/v2/translate",
        timeout: float = HTTP_TIMEOUT,
    ) -> None:
        self._api_key = api_key
        self._endpoint = endpoint
        self._timeout = timeout

    async def translate(self, text: str, target_language: str) -> TranslationResult:
        target = target_language.upper()
        target = _DEEPL_CODES.get(target, target)
        payload = await _post_json(
            self._endpoint,
            data={"text": text, "target_lang": target},
            headers={"Authorization": f"DeepL-Auth-Key {self._api_key}"},
            timeout=self._timeout,
        )
        translations = payload.get("translations") or []
        if not translations:
            raise EmptyResult("DeepL returned no translations")
        first = translations[0]
        detected = first.get("detected_source_language")
        return TranslationResult(
            provider=self.name,
            translated_text=first.get("text", ""),
            target_language=target_language,
            source_language=detected.lower() if detected else None,
        )


def build_provider(config: "FlagTranslatorConfig") -> TranslationProvider:
    name = config.provider.lower()
    if name == "google":
        return GoogleTranslateProvider()
    if name == "mymemory":
        return MyMemoryProvider(
            api_key=config.my_memory_api_key,
            email=config.my_memory_email,
            fallback_source=config.fallback_source_language,
        )
    if name == "deepl":
        if not config.deepl_api_key:
            raise RuntimeError("DEEPL_API_KEY is required when TRANSLATION_PROVIDER=deepl")
        return DeepLProvider(api_key=config.deepl_api_key, endpoint=config.deepl_endpoint)
    raise ValueError(f"Unknown translation provider: {config.provider!r}")


__all__ = ["DeepLProvider", "GoogleTranslateProvider", "MyMemoryProvider", "build_provider"]
