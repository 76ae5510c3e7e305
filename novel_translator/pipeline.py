"""
Translation pipelines for Novel Translator.

Two layers live here:

ContextAwarePipeline: the two-pass analyze-then-translate sequence:
1. Analyze: ask the model for chapter title, characters, terminology and
   themes as JSON. An unusable reply degrades to a default context instead
   of aborting.
2. Translate: send the same text again together with that context and the
   style hint.

TranslationPipeline: what callers use for a chapter:
1. Map glossary terms to marker tokens
2. Translate, either with the two-pass pipeline ("context" mode) or with a
   single provider call ("direct" mode)
3. Restore glossary terms
4. Report marker tokens the provider failed to preserve

Both passes run sequentially in the caller's thread; nothing is retried.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

from novel_translator import config
from novel_translator.errors import ConfigurationError, ProviderError
from novel_translator.masking import GlossaryLike, SubstitutionMarker, SubstitutionSession
from novel_translator.translate.base import (
    TranslationRequest,
    Translator,
    create_translator,
)
from novel_translator.translate.context import (
    ContextAnalysis,
    ExtractedContext,
    analyze_response,
    build_analysis_prompt,
    build_translation_prompt,
)
from novel_translator.translate.glossary import Glossary
from novel_translator.translate.llm import BaseLLMTranslator

logger = logging.getLogger(__name__)

# Type alias for progress callbacks
ProgressCallback = Callable[[str, float], None]

MODES = ("context", "direct")


@dataclass
class PipelineResult:
    """Result of one ContextAwarePipeline.run()."""
    text: str
    context: ExtractedContext
    notes: list[str] = field(default_factory=list)
    degraded: bool = False
    degraded_reason: Optional[str] = None


class ContextAwarePipeline:
    """Analyze-then-translate over a single LLM backend.

    Usage:
        pipeline = ContextAwarePipeline(create_translator("gemini"))
        result = pipeline.run(chapter_text, style_hint="casual", chapter_title_hint="Ch 3")
        print(result.context.characters, result.text)
    """

    ANALYZE_TEMPERATURE = 0.1
    TRANSLATE_TEMPERATURE = 0.3

    def __init__(
        self,
        translator: BaseLLMTranslator,
        source_lang: str = config.DEFAULT_SOURCE_LANG,
        target_lang: str = config.DEFAULT_TARGET_LANG,
    ):
        self.translator = translator
        self.source_lang = source_lang
        self.target_lang = target_lang

    def _call(self, stage: str, prompt: str, temperature: float) -> str:
        try:
            return self.translator.complete(prompt, temperature=temperature)
        except ProviderError as e:
            raise ProviderError(
                f"{stage.capitalize()} failed: {e.message}",
                status_code=e.status_code,
                provider=e.provider,
                stage=stage,
            ) from e

    def analyze(self, source_text: str, chapter_title_hint: Optional[str] = None) -> ContextAnalysis:
        """First pass. Raises only ProviderError/ConfigurationError."""
        prompt = build_analysis_prompt(source_text, self.source_lang, self.target_lang)
        raw = self._call("analysis", prompt, self.ANALYZE_TEMPERATURE)

        analysis = analyze_response(raw, chapter_title_hint)
        if analysis.degraded:
            logger.warning("Context analysis unusable, continuing with default context: %s", analysis.reason)
        else:
            logger.debug(
                "Context: %d characters, %d terms, chapter title %r",
                len(analysis.context.characters),
                len(analysis.context.terminology),
                analysis.context.chapter_title,
            )
        return analysis

    def run(
        self,
        source_text: str,
        style_hint: str = "",
        chapter_title_hint: Optional[str] = None,
    ) -> PipelineResult:
        """Run both passes. The translate pass always follows the analysis."""
        analysis = self.analyze(source_text, chapter_title_hint)

        prompt = build_translation_prompt(
            source_text,
            analysis.context,
            style_hint=style_hint,
            source_lang=self.source_lang,
            target_lang=self.target_lang,
        )
        reply = self._call("translation", prompt, self.TRANSLATE_TEMPERATURE)

        translated = self.translator.parse_response(reply)
        if not translated:
            logger.warning("Empty translation reply, keeping source text")
            translated = source_text

        return PipelineResult(
            text=translated,
            context=analysis.context,
            degraded=analysis.degraded,
            degraded_reason=analysis.reason,
        )


# ============================================================================
# Glossary-aware pipeline
# ============================================================================

@dataclass
class PipelineConfig:
    """Configuration for TranslationPipeline."""
    backend: str = config.DEFAULT_BACKEND
    mode: str = "context"  # 'context' (two-pass) or 'direct' (single call)
    style_hint: str = config.DEFAULT_STYLE_HINT
    want_notes: bool = False
    source_lang: str = config.DEFAULT_SOURCE_LANG
    target_lang: str = config.DEFAULT_TARGET_LANG
    translator_kwargs: dict = field(default_factory=dict)
    enable_glossary: bool = True

    def to_dict(self) -> dict:
        """Serialize config for logging/debugging."""
        return {
            "backend": self.backend,
            "mode": self.mode,
            "style_hint": self.style_hint,
            "want_notes": self.want_notes,
            "source_lang": self.source_lang,
            "target_lang": self.target_lang,
            "enable_glossary": self.enable_glossary,
        }


@dataclass
class TranslationOutcome:
    """Final result handed back to the caller.

    leaked_tokens lists token-shaped residue left in text; dropped_terms the
    glossary source terms whose marker the provider did not return verbatim.
    """
    text: str
    source_text: str
    backend: str
    notes: list[str] = field(default_factory=list)
    context: Optional[ExtractedContext] = None
    degraded: bool = False
    markers: list[SubstitutionMarker] = field(default_factory=list)
    leaked_tokens: list[str] = field(default_factory=list)
    dropped_terms: list[str] = field(default_factory=list)

    @property
    def detected_chapter_title(self) -> Optional[str]:
        return self.context.chapter_title if self.context else None


class TranslationPipeline:
    """Glossary substitution around a provider call or the two-pass pipeline.

    Usage:
        pipeline = TranslationPipeline(PipelineConfig(backend="gemini"))
        outcome = pipeline.translate(text, glossary=novel_glossary)
    """

    def __init__(
        self,
        config: PipelineConfig | None = None,
        translator: Translator | None = None,
        progress_callback: ProgressCallback | None = None,
    ):
        self.config = config or PipelineConfig()
        if self.config.mode not in MODES:
            raise ConfigurationError(f"Unknown pipeline mode: {self.config.mode}. Use one of {MODES}")
        self.progress_callback = progress_callback or (lambda msg, pct: None)
        self.translator = translator or create_translator(
            self.config.backend, **self.config.translator_kwargs
        )
        if self.config.mode == "context" and not isinstance(self.translator, BaseLLMTranslator):
            raise ConfigurationError(
                f"Backend '{self.translator.name}' cannot run the two-pass context mode; "
                "use an LLM backend or mode 'direct'"
            )

    def _hint_glossary(self, session: SubstitutionSession, mapped: str) -> Optional[Glossary]:
        """Glossary of token → target for the tokens present, shown to LLMs."""
        pairs = [(m.token, m.target_term) for m in session.markers if m.token in mapped]
        return Glossary.from_pairs(pairs, name="markers") if pairs else None

    def translate(
        self,
        text: str,
        glossary: GlossaryLike = None,
        chapter_title_hint: Optional[str] = None,
    ) -> TranslationOutcome:
        """Translate text, keeping glossary terms fixed.

        Raises:
            ConfigurationError: missing credential or endpoint (before any request)
            ProviderError: a provider request failed; nothing partial is returned
        """
        session = SubstitutionSession(glossary if self.config.enable_glossary else None)

        self.progress_callback("Applying glossary...", 0.1)
        mapped = session.map(text)
        if session.terms_found:
            logger.debug("Glossary terms in text: %s", ", ".join(session.terms_found))

        context = None
        degraded = False
        notes: list[str] = []

        if self.config.mode == "context":
            self.progress_callback("Analyzing and translating...", 0.3)
            pipeline = ContextAwarePipeline(
                self.translator,
                source_lang=self.config.source_lang,
                target_lang=self.config.target_lang,
            )
            result = pipeline.run(mapped, self.config.style_hint, chapter_title_hint)
            translated = result.text
            context = result.context
            degraded = result.degraded
            notes = result.notes
        else:
            self.progress_callback("Translating...", 0.3)
            request = TranslationRequest(
                text=mapped,
                style_hint=self.config.style_hint,
                glossary=self._hint_glossary(session, mapped),
                want_notes=self.config.want_notes,
                source_lang=self.config.source_lang,
                target_lang=self.config.target_lang,
            )
            result = self.translator.translate(request)
            translated = result.text
            notes = list(result.notes)

        self.progress_callback("Restoring glossary terms...", 0.9)
        final = session.restore(translated)
        if context is not None:
            context.chapter_title = session.restore(context.chapter_title) if context.chapter_title else None
        notes = [session.restore(n) for n in notes]

        leaked = session.leaked(final)
        if leaked:
            logger.warning("Unrestored marker tokens in output: %s", ", ".join(leaked))
        dropped = [m.source_term for m in session.dropped(translated)]
        if dropped:
            logger.warning(
                "Provider did not preserve %d glossary marker(s) for: %s", len(dropped), ", ".join(dropped)
            )

        self.progress_callback("Complete!", 1.0)

        return TranslationOutcome(
            text=final,
            source_text=text,
            backend=self.translator.name,
            notes=notes,
            context=context,
            degraded=degraded,
            markers=session.markers,
            leaked_tokens=leaked,
            dropped_terms=dropped,
        )


# ============================================================================
# Convenience Functions
# ============================================================================

def translate_text(
    text: str,
    backend: str = config.DEFAULT_BACKEND,
    glossary: GlossaryLike = None,
    mode: str = "context",
    style_hint: str = config.DEFAULT_STYLE_HINT,
    **translator_kwargs,
) -> str:
    """Quick translation of plain text.

        result = translate_text("张三与李四同行", backend="gemini", glossary={"张三": "Zhang San"})

    For more control, use TranslationPipeline directly.
    """
    pipeline_config = PipelineConfig(
        backend=backend,
        mode=mode,
        style_hint=style_hint,
        translator_kwargs=translator_kwargs,
    )
    return TranslationPipeline(pipeline_config).translate(text, glossary).text
