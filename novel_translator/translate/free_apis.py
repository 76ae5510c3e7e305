"""
Machine-translation HTTP backends.

This module provides:
- Hugging Face Inference API (hosted translation model, token required)
- LibreTranslate (form-encoded POST, public or self-hosted)
- MyMemory (public GET endpoint, free)
- Google Translate Free API (via deep-translator)

These backends translate plain text only: glossary and style hints are
ignored and notes are always empty. Glossary consistency still holds because
the caller substitutes marker tokens before the call.
"""

from __future__ import annotations

import logging
from typing import Optional

import requests
from deep_translator import GoogleTranslator
from deep_translator.exceptions import BaseError as DeepTranslatorError
from deep_translator.exceptions import RequestError, ServerException, TooManyRequests

from novel_translator import config
from novel_translator.errors import ConfigurationError, ProviderError
from novel_translator.keys import env_var_for, get_key
from novel_translator.translate.base import (
    TranslationRequest,
    TranslationResult,
    Translator,
)

logger = logging.getLogger(__name__)


def _request_or_raise(provider: str, call, *args, **kwargs) -> requests.Response:
    """Run a requests call, turning failures into ProviderError."""
    try:
        response = call(*args, **kwargs)
    except requests.exceptions.RequestException as e:
        raise ProviderError(f"{provider} request failed: {e}", provider=provider) from e
    if not response.ok:
        raise ProviderError(
            f"{provider} request failed: {response.status_code}",
            status_code=response.status_code,
            provider=provider,
        )
    return response


def _json_or_none(response: requests.Response):
    try:
        return response.json()
    except ValueError:
        return None


class HuggingFaceTranslator(Translator):
    """Hugging Face Inference API translator.

    Usage:
        translator = HuggingFaceTranslator(model="Helsinki-NLP/opus-mt-zh-en")
        result = translator.translate(TranslationRequest(text="你好"))
    """

    SERVICE = "huggingface"
    DEFAULT_MODEL = "Helsinki-NLP/opus-mt-zh-en"
    DEFAULT_BASE_URL = "https://router.huggingface.co/hf-inference/models"

    def __init__(
        self,
        model: str = DEFAULT_MODEL,
        api_key: Optional[str] = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = config.DEFAULT_TIMEOUT,
    ):
        self.model = model
        self.api_key = api_key
        self.api_url = f"{base_url.rstrip('/')}/{model}"
        self.timeout = timeout

    @property
    def name(self) -> str:
        return f"huggingface-{self.model.split('/')[-1]}"

    def translate(self, request: TranslationRequest) -> TranslationResult:
        """Translate using Hugging Face Inference API."""
        api_key = self.api_key or get_key(self.SERVICE)
        if not api_key:
            raise ConfigurationError(
                f"Hugging Face token required. Set {env_var_for(self.SERVICE)} "
                f"or run: noveltrans keys set {self.SERVICE}",
                provider=self.SERVICE,
            )

        response = _request_or_raise(
            self.SERVICE,
            requests.post,
            self.api_url,
            headers={"Authorization": f"Bearer {api_key}"},
            json={"inputs": request.text},
            timeout=self.timeout,
        )

        data = _json_or_none(response)
        translated = None
        if isinstance(data, list) and data and isinstance(data[0], dict):
            translated = data[0].get("translation_text") or data[0].get("generated_text")
        elif isinstance(data, dict):
            translated = data.get("translation_text") or data.get("generated_text")

        metadata = {"translator": self.name, "model": self.model}
        if translated is None:
            logger.debug("Hugging Face: unexpected response shape, using raw body")
            translated = response.text
            metadata["fallback"] = "raw_body"

        return TranslationResult(text=translated, source_text=request.text, metadata=metadata)


class LibreTranslateTranslator(Translator):
    """LibreTranslate translator (form-encoded POST).

    Works with the public instance (needs an API key) or a self-hosted one
    (usually keyless).
    """

    SERVICE = "libretranslate"
    DEFAULT_ENDPOINT = "https://libretranslate.com"

    def __init__(
        self,
        endpoint: Optional[str] = DEFAULT_ENDPOINT,
        api_key: Optional[str] = None,
        timeout: float = config.DEFAULT_TIMEOUT,
    ):
        self.endpoint = (endpoint or "").rstrip("/")
        self.api_key = api_key
        self.timeout = timeout

    @property
    def name(self) -> str:
        return "libretranslate"

    def translate(self, request: TranslationRequest) -> TranslationResult:
        if not self.endpoint:
            raise ConfigurationError("LibreTranslate endpoint is not configured", provider=self.SERVICE)

        form = {
            "q": request.text,
            "source": request.source_lang,
            "target": request.target_lang,
            "format": "text",
        }
        api_key = self.api_key or get_key(self.SERVICE)
        if api_key:
            form["api_key"] = api_key

        response = _request_or_raise(
            self.SERVICE,
            requests.post,
            f"{self.endpoint}/translate",
            data=form,
            timeout=self.timeout,
        )

        data = _json_or_none(response)
        metadata = {"translator": self.name, "endpoint": self.endpoint}
        if isinstance(data, dict) and isinstance(data.get("translatedText"), str):
            translated = data["translatedText"]
        else:
            translated = response.text
            metadata["fallback"] = "raw_body"

        return TranslationResult(text=translated, source_text=request.text, metadata=metadata)


class MyMemoryTranslator(Translator):
    """MyMemory public translation API (no key; optional contact email raises quota)."""

    SERVICE = "mymemory"
    DEFAULT_ENDPOINT = "https://api.mymemory.translated.net/get"

    # MyMemory wants regional codes for Chinese
    LANG_CODES = {"zh": "zh-CN", "zh-hans": "zh-CN", "zh-hant": "zh-TW"}

    def __init__(
        self,
        endpoint: Optional[str] = DEFAULT_ENDPOINT,
        email: Optional[str] = None,
        timeout: float = config.DEFAULT_TIMEOUT,
    ):
        self.endpoint = endpoint or ""
        self.email = email
        self.timeout = timeout

    @property
    def name(self) -> str:
        return "mymemory"

    def _code(self, lang: str) -> str:
        return self.LANG_CODES.get(lang.lower(), lang)

    def translate(self, request: TranslationRequest) -> TranslationResult:
        if not self.endpoint:
            raise ConfigurationError("MyMemory endpoint is not configured", provider=self.SERVICE)

        params = {
            "q": request.text,
            "langpair": f"{self._code(request.source_lang)}|{self._code(request.target_lang)}",
        }
        if self.email:
            params["de"] = self.email

        response = _request_or_raise(
            self.SERVICE,
            requests.get,
            self.endpoint,
            params=params,
            timeout=self.timeout,
        )

        data = _json_or_none(response)
        metadata = {"translator": self.name}
        if not isinstance(data, dict):
            metadata["fallback"] = "raw_body"
            return TranslationResult(text=response.text, source_text=request.text, metadata=metadata)

        # Quota and validation errors arrive as HTTP 200 with a status in the body
        status = data.get("responseStatus", 200)
        if str(status) != "200":
            raise ProviderError(
                f"MyMemory request failed: {data.get('responseDetails') or status}",
                status_code=int(status) if str(status).isdigit() else None,
                provider=self.SERVICE,
            )

        translated = (data.get("responseData") or {}).get("translatedText")
        if not isinstance(translated, str):
            translated = response.text
            metadata["fallback"] = "raw_body"

        return TranslationResult(text=translated, source_text=request.text, metadata=metadata)


class GoogleFreeTranslator(Translator):
    """Google Translate Free API (via deep-translator library).

    - No API key required
    - Rate limited; for heavy use prefer an LLM backend
    """

    SERVICE = "google-free"
    LANG_CODES = {"zh": "zh-CN"}

    @property
    def name(self) -> str:
        return "google-free"

    def translate(self, request: TranslationRequest) -> TranslationResult:
        """Translate using Google Translate Free API via deep-translator."""
        source = self.LANG_CODES.get(request.source_lang, request.source_lang)
        target = self.LANG_CODES.get(request.target_lang, request.target_lang)

        try:
            translated = GoogleTranslator(source=source, target=target).translate(request.text)
        except (
            DeepTranslatorError,
            RequestError,
            ServerException,
            TooManyRequests,
            requests.exceptions.RequestException,
        ) as e:
            raise ProviderError(f"Google Free translation failed: {e}", provider=self.SERVICE) from e

        return TranslationResult(
            text=translated or "",
            source_text=request.text,
            metadata={"translator": self.name, "api_used": "deep-translator"},
        )
