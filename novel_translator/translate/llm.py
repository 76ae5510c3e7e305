"""
LLM-based translation backends.

This module provides:
- Google Gemini translator (REST via requests)
- OpenAI GPT translator
- DeepSeek translator (OpenAI-compatible endpoint)
- Anthropic Claude translator

All of them share BaseLLMTranslator, which builds the prompts (style hint,
glossary hints, marker-token rules, optional notes request) and parses the
reply. Subclasses only implement _generate(), the raw text call, which the
context-aware pipeline also uses through complete().
"""

from __future__ import annotations

import json
import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

import anthropic
import openai
import requests

from novel_translator import config
from novel_translator.errors import ConfigurationError, ProviderError
from novel_translator.keys import env_var_for, get_key
from novel_translator.translate.base import (
    TranslationRequest,
    TranslationResult,
    Translator,
)

logger = logging.getLogger(__name__)

LANGUAGE_NAMES = {
    "zh": "Chinese",
    "en": "English",
    "ja": "Japanese",
    "ko": "Korean",
    "fr": "French",
    "de": "German",
    "es": "Spanish",
    "ru": "Russian",
    "vi": "Vietnamese",
}

_FENCE_PATTERN = re.compile(r"^```[a-zA-Z]*\s*\n?(.*?)\n?```\s*$", re.DOTALL)


def language_name(code: str) -> str:
    return LANGUAGE_NAMES.get(code.lower(), code)


def strip_code_fence(text: str) -> str:
    """Remove a surrounding ```json ... ``` fence if the model added one."""
    match = _FENCE_PATTERN.match(text.strip())
    return match.group(1).strip() if match else text.strip()


@dataclass
class LLMConfig:
    """Configuration for LLM translators."""
    model: str = "gemini-2.5-flash-lite"
    temperature: float = 0.3
    max_tokens: int = 8192
    api_key: Optional[str] = None
    base_url: Optional[str] = None
    timeout: float = config.DEFAULT_TIMEOUT


class BaseLLMTranslator(Translator, ABC):
    """Base class for LLM-based translators.

    Provides common functionality:
    - Prompt construction with style hint and glossary
    - Response parsing, including the notes JSON envelope
    - Credential resolution that fails before any request is sent
    """

    # Key name in novel_translator.keys.SERVICES
    SERVICE = ""

    def __init__(self, config: Optional[LLMConfig] = None, api_key: Optional[str] = None):
        self.config = config or LLMConfig()
        self.api_key = api_key or self.config.api_key

    @property
    def supports_notes(self) -> bool:
        return True

    def _require_api_key(self) -> str:
        """Return the API key or raise ConfigurationError."""
        key = self.api_key or get_key(self.SERVICE)
        if not key:
            raise ConfigurationError(
                f"{self.SERVICE.capitalize()} API key required. Set {env_var_for(self.SERVICE)} "
                f"environment variable, pass api_key, or run: noveltrans keys set {self.SERVICE}",
                provider=self.SERVICE,
            )
        return key

    @abstractmethod
    def _generate(self, prompt: str, system: Optional[str], temperature: float) -> str:
        """Send one prompt and return the raw reply text."""

    def complete(
        self,
        prompt: str,
        temperature: Optional[float] = None,
        system: Optional[str] = None,
    ) -> str:
        """Raw text generation (used by the two-pass pipeline)."""
        temp = self.config.temperature if temperature is None else temperature
        logger.debug("%s: sending %d-char prompt (temperature=%s)", self.name, len(prompt), temp)
        return self._generate(prompt, system, temp)

    def build_system_prompt(self, request: TranslationRequest) -> str:
        """Build the system prompt for translation."""
        source = language_name(request.source_lang)
        target = language_name(request.target_lang)

        prompt_parts = [
            "You are an expert literary translator specializing in serialized web fiction.",
            f"Translate text from {source} to {target}.",
            "",
            "## Critical Rules:",
            "1. Preserve ALL placeholders exactly as they appear (e.g., «0», «12»); never translate or drop them",
            "2. Maintain paragraph structure and line breaks",
            "3. Keep character names and terms consistent",
            "4. Do not add explanations outside the requested output",
            "",
            f"## Tone/style: {request.style_hint or config.DEFAULT_STYLE_HINT}",
            "",
        ]

        if request.glossary is not None and len(request.glossary) > 0:
            prompt_parts.append("## " + request.glossary.to_prompt_string(max_entries=40))
            prompt_parts.append("")

        if request.want_notes:
            prompt_parts.extend([
                "## Output format:",
                'Return JSON only: {"translation": "<translated text>", '
                '"notes": ["<short translator note>", ...]}',
                "Use notes for puns, cultural references or ambiguous names. Notes may be empty.",
            ])
        else:
            prompt_parts.append("Only provide the translation.")

        return "\n".join(prompt_parts)

    def build_user_prompt(self, text: str) -> str:
        """Build the user prompt with text to translate."""
        return f"Translate the following text:\n\n{text}"

    def parse_response(self, response: str) -> str:
        """Parse and clean the LLM response."""
        cleaned = strip_code_fence(response)

        prefixes = ["Translation:", "Translated text:", "Here is the translation:"]
        for prefix in prefixes:
            if cleaned.lower().startswith(prefix.lower()):
                cleaned = cleaned[len(prefix):].strip()

        return cleaned

    def parse_notes_reply(self, response: str) -> tuple[str, list[str], bool]:
        """Read the {"translation", "notes"} envelope.

        Returns:
            (text, notes, parsed); when the reply is not the expected JSON the
            raw reply is the text, notes are empty and parsed is False.
        """
        try:
            data = json.loads(strip_code_fence(response))
        except json.JSONDecodeError:
            return self.parse_response(response), [], False

        if not isinstance(data, dict) or not isinstance(data.get("translation"), str):
            return self.parse_response(response), [], False

        notes = data.get("notes") or []
        if not isinstance(notes, list):
            notes = [notes]
        return data["translation"].strip(), [str(n) for n in notes if str(n).strip()], True

    def translate(self, request: TranslationRequest) -> TranslationResult:
        """Translate the request with one model call."""
        self._require_api_key()

        system_prompt = self.build_system_prompt(request)
        user_prompt = self.build_user_prompt(request.text)
        reply = self.complete(user_prompt, system=system_prompt)

        metadata = {"translator": self.name, "model": self.config.model}
        if request.want_notes:
            text, notes, parsed = self.parse_notes_reply(reply)
            if not parsed:
                logger.debug("%s: reply was not notes JSON, using raw text", self.name)
                metadata["fallback"] = "raw_reply"
        else:
            text, notes = self.parse_response(reply), []

        return TranslationResult(
            text=text,
            source_text=request.text,
            notes=notes,
            metadata=metadata,
        )


class GeminiTranslator(BaseLLMTranslator):
    """Google Gemini translator using the generateContent REST endpoint.

    Usage:
        translator = GeminiTranslator(config=LLMConfig(model="gemini-2.5-flash-lite"))
        result = translator.translate(TranslationRequest(text="你好"))
    """

    SERVICE = "gemini"
    DEFAULT_MODEL = "gemini-2.5-flash-lite"
    DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"

    def __init__(
        self,
        config: Optional[LLMConfig] = None,
        api_key: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ):
        super().__init__(config or LLMConfig(model=self.DEFAULT_MODEL), api_key)
        self.session = session or requests.Session()

    @property
    def name(self) -> str:
        return f"gemini-{self.config.model}"

    @property
    def api_url(self) -> str:
        base = (self.config.base_url or self.DEFAULT_BASE_URL).rstrip("/")
        return f"{base}/models/{self.config.model}:generateContent"

    @staticmethod
    def extract_text(payload: object) -> Optional[str]:
        """Pull candidates[0].content.parts[*].text out of a response body."""
        try:
            parts = payload["candidates"][0]["content"]["parts"]
            return "".join(part.get("text", "") for part in parts)
        except (KeyError, IndexError, TypeError, AttributeError):
            return None

    def _generate(self, prompt: str, system: Optional[str], temperature: float) -> str:
        api_key = self._require_api_key()

        body = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": temperature,
                "maxOutputTokens": self.config.max_tokens,
            },
        }
        if system:
            body["systemInstruction"] = {"parts": [{"text": system}]}

        try:
            response = self.session.post(
                self.api_url,
                headers={"Content-Type": "application/json", "x-goog-api-key": api_key},
                json=body,
                timeout=self.config.timeout,
            )
        except requests.exceptions.RequestException as e:
            raise ProviderError(f"Gemini request failed: {e}", provider=self.SERVICE) from e

        if not response.ok:
            raise ProviderError(
                f"Gemini request failed: {response.status_code}",
                status_code=response.status_code,
                provider=self.SERVICE,
            )

        try:
            text = self.extract_text(response.json())
        except ValueError:
            text = None
        if text is None:
            logger.debug("Gemini: unexpected response shape, using raw body")
            return response.text
        return text


class OpenAITranslator(BaseLLMTranslator):
    """OpenAI GPT-based translator.

    Supports GPT-4o, GPT-4o-mini and compatible chat models.
    """

    SERVICE = "openai"

    def __init__(self, config: Optional[LLMConfig] = None, api_key: Optional[str] = None):
        super().__init__(config or LLMConfig(model="gpt-4o-mini"), api_key)
        self._client = None

    @property
    def name(self) -> str:
        return f"openai-{self.config.model}"

    def _client_kwargs(self, api_key: str) -> dict:
        kwargs = {"api_key": api_key, "max_retries": 0, "timeout": self.config.timeout}
        if self.config.base_url:
            kwargs["base_url"] = self.config.base_url
        return kwargs

    def _get_client(self) -> openai.OpenAI:
        """Lazy initialization of OpenAI client."""
        if self._client is None:
            self._client = openai.OpenAI(**self._client_kwargs(self._require_api_key()))
        return self._client

    def _generate(self, prompt: str, system: Optional[str], temperature: float) -> str:
        client = self._get_client()

        messages = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})

        try:
            response = client.chat.completions.create(
                model=self.config.model,
                messages=messages,
                temperature=temperature,
                max_tokens=self.config.max_tokens,
            )
        except openai.APIStatusError as e:
            raise ProviderError(
                f"{self.SERVICE} request failed: {e.status_code}",
                status_code=e.status_code,
                provider=self.SERVICE,
            ) from e
        except openai.APIError as e:
            raise ProviderError(f"{self.SERVICE} request failed: {e}", provider=self.SERVICE) from e

        return response.choices[0].message.content or ""


class DeepSeekTranslator(OpenAITranslator):
    """DeepSeek API translator.

    Uses DeepSeek's chat API which is OpenAI-compatible.
    """

    SERVICE = "deepseek"
    DEFAULT_BASE_URL = "https://api.deepseek.com/v1"

    def __init__(self, config: Optional[LLMConfig] = None, api_key: Optional[str] = None):
        super().__init__(config or LLMConfig(model="deepseek-chat"), api_key)

    @property
    def name(self) -> str:
        return f"deepseek-{self.config.model}"

    def _client_kwargs(self, api_key: str) -> dict:
        kwargs = super()._client_kwargs(api_key)
        kwargs["base_url"] = self.config.base_url or self.DEFAULT_BASE_URL
        return kwargs


class AnthropicTranslator(BaseLLMTranslator):
    """Anthropic Claude translator."""

    SERVICE = "anthropic"

    def __init__(self, config: Optional[LLMConfig] = None, api_key: Optional[str] = None):
        super().__init__(config or LLMConfig(model="claude-3-5-haiku-latest"), api_key)
        self._client = None

    @property
    def name(self) -> str:
        return f"anthropic-{self.config.model}"

    def _get_client(self) -> anthropic.Anthropic:
        """Lazy initialization of Anthropic client."""
        if self._client is None:
            self._client = anthropic.Anthropic(
                api_key=self._require_api_key(),
                max_retries=0,
                timeout=self.config.timeout,
            )
        return self._client

    def _generate(self, prompt: str, system: Optional[str], temperature: float) -> str:
        client = self._get_client()

        kwargs = {
            "model": self.config.model,
            "max_tokens": self.config.max_tokens,
            "temperature": temperature,
            "messages": [{"role": "user", "content": prompt}],
        }
        if system:
            kwargs["system"] = system

        try:
            response = client.messages.create(**kwargs)
        except anthropic.APIStatusError as e:
            raise ProviderError(
                f"Anthropic request failed: {e.status_code}",
                status_code=e.status_code,
                provider=self.SERVICE,
            ) from e
        except anthropic.APIError as e:
            raise ProviderError(f"Anthropic request failed: {e}", provider=self.SERVICE) from e

        return "".join(
            block.text for block in response.content if getattr(block, "type", "") == "text"
        )
