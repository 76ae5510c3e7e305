"""
Base translator interface and implementations.

This module defines:
- TranslationRequest / TranslationResult, the provider-neutral call shape
- Abstract Translator interface that all backends implement
- DummyTranslator for testing (echo or simple transformations)
- create_translator(), which picks a backend by configuration name

Design Philosophy:
- Translators are stateless: everything they need is in the request
- Requests are frozen; a translator never mutates its input
- No translator retries; a failed call raises once and the caller decides
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional

from novel_translator import config
from novel_translator.translate.glossary import Glossary


@dataclass(frozen=True)
class TranslationRequest:
    """Input to a single provider call.

    Attributes:
        text: Source text (usually already glossary-mapped)
        style_hint: Tone/style instruction, e.g. "casual, snappy web novel"
        glossary: Optional glossary passed to the provider as hints
        want_notes: Ask the provider for translator notes
        source_lang: Source language code
        target_lang: Target language code
    """
    text: str
    style_hint: str = ""
    glossary: Optional[Glossary] = None
    want_notes: bool = False
    source_lang: str = config.DEFAULT_SOURCE_LANG
    target_lang: str = config.DEFAULT_TARGET_LANG


@dataclass
class TranslationResult:
    """Result of a translation operation.

    Attributes:
        text: The translated text
        source_text: Original source text
        notes: Translator notes, in the order the provider returned them
        metadata: Additional info (backend, model, fallbacks used...)
    """
    text: str
    source_text: str
    notes: list[str] = field(default_factory=list)
    metadata: dict = field(default_factory=dict)

    @property
    def has_notes(self) -> bool:
        return len(self.notes) > 0


class Translator(ABC):
    """Abstract base class for all translation backends.

    Each backend is responsible for:
    - turning a TranslationRequest into its wire format
    - raising ConfigurationError before any network call when a required
      credential or endpoint is missing
    - raising ProviderError on a non-success status
    - extracting text (and notes, if any) from its response shape
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the translator name (e.g., 'gemini', 'mymemory', 'dummy')."""

    @property
    def supports_notes(self) -> bool:
        """Whether this translator can return translator notes."""
        return False

    @abstractmethod
    def translate(self, request: TranslationRequest) -> TranslationResult:
        """Translate the request text.

        Args:
            request: Text plus style, glossary and language hints

        Returns:
            TranslationResult with translation and metadata
        """


class DummyTranslator(Translator):
    """A dummy translator for testing.

    Modes:
    - 'echo': Return the input unchanged
    - 'upper': Return uppercase version
    - 'prefix': Add [TRANSLATED] prefix
    - 'reverse': Reverse the text (for debugging)
    """

    def __init__(self, mode: str = "prefix"):
        self.mode = mode

    @property
    def name(self) -> str:
        return f"dummy-{self.mode}"

    def translate(self, request: TranslationRequest) -> TranslationResult:
        text = request.text
        if self.mode == "echo":
            translated = text
        elif self.mode == "upper":
            translated = text.upper()
        elif self.mode == "reverse":
            translated = text[::-1]
        else:  # prefix
            translated = f"[TRANSLATED] {text}"

        return TranslationResult(
            text=translated,
            source_text=text,
            metadata={"translator": self.name, "mode": self.mode},
        )


BACKENDS = {
    "gemini": "Google Gemini (generateContent REST API)",
    "openai": "OpenAI chat completions",
    "deepseek": "DeepSeek (OpenAI-compatible)",
    "anthropic": "Anthropic Claude messages",
    "huggingface": "Hugging Face hosted inference (translation model)",
    "libretranslate": "LibreTranslate (form-encoded, self-hostable)",
    "mymemory": "MyMemory public API (free)",
    "google-free": "Google Translate via deep-translator (free)",
    "dummy": "Offline test translator",
}


def create_translator(backend: str, **kwargs) -> Translator:
    """Factory function to create a translator by name.

    Args:
        backend: Translator backend name ('gemini', 'openai', 'mymemory', ...)
        **kwargs: Backend-specific arguments (api_key, model, endpoint, ...)

    Returns:
        Configured Translator instance

    Supported backends and aliases:
        - gemini, google-ai: Google Gemini (default)
        - openai, gpt: OpenAI GPT models
        - deepseek, ds: DeepSeek models
        - anthropic, claude: Anthropic Claude models
        - huggingface, hf: Hugging Face Inference API
        - libretranslate, libre: LibreTranslate
        - mymemory: MyMemory free API
        - google-free, googlefree: Google Translate via deep-translator
        - dummy, echo, test: Simple test translator
    """
    backend_lower = backend.lower().replace("_", "-")

    if backend_lower in ("dummy", "echo", "test"):
        mode = kwargs.get("mode", "echo" if backend_lower == "echo" else "prefix")
        return DummyTranslator(mode=mode)

    elif backend_lower in ("gemini", "google-ai"):
        from novel_translator.translate.llm import GeminiTranslator, LLMConfig
        llm_config = kwargs.get("config") or LLMConfig(model=kwargs.get("model") or GeminiTranslator.DEFAULT_MODEL)
        return GeminiTranslator(config=llm_config, api_key=kwargs.get("api_key"))

    elif backend_lower in ("openai", "gpt"):
        from novel_translator.translate.llm import OpenAITranslator, LLMConfig
        llm_config = kwargs.get("config") or LLMConfig(model=kwargs.get("model") or "gpt-4o-mini")
        return OpenAITranslator(config=llm_config, api_key=kwargs.get("api_key"))

    elif backend_lower in ("deepseek", "ds"):
        from novel_translator.translate.llm import DeepSeekTranslator, LLMConfig
        llm_config = kwargs.get("config") or LLMConfig(model=kwargs.get("model") or "deepseek-chat")
        return DeepSeekTranslator(config=llm_config, api_key=kwargs.get("api_key"))

    elif backend_lower in ("anthropic", "claude"):
        from novel_translator.translate.llm import AnthropicTranslator, LLMConfig
        llm_config = kwargs.get("config") or LLMConfig(model=kwargs.get("model") or "claude-3-5-haiku-latest")
        return AnthropicTranslator(config=llm_config, api_key=kwargs.get("api_key"))

    elif backend_lower in ("huggingface", "hf"):
        from novel_translator.translate.free_apis import HuggingFaceTranslator
        return HuggingFaceTranslator(
            model=kwargs.get("model") or HuggingFaceTranslator.DEFAULT_MODEL,
            api_key=kwargs.get("api_key"),
        )

    elif backend_lower in ("libretranslate", "libre"):
        from novel_translator.translate.free_apis import LibreTranslateTranslator
        return LibreTranslateTranslator(
            endpoint=kwargs.get("endpoint", LibreTranslateTranslator.DEFAULT_ENDPOINT),
            api_key=kwargs.get("api_key"),
        )

    elif backend_lower in ("mymemory",):
        from novel_translator.translate.free_apis import MyMemoryTranslator
        return MyMemoryTranslator(
            endpoint=kwargs.get("endpoint", MyMemoryTranslator.DEFAULT_ENDPOINT),
            email=kwargs.get("email"),
        )

    elif backend_lower in ("google-free", "googlefree"):
        from novel_translator.translate.free_apis import GoogleFreeTranslator
        return GoogleFreeTranslator()

    raise ValueError(
        f"Unknown translator backend: {backend}. "
        f"Available backends: {', '.join(BACKENDS)}"
    )
