"""
Chapter context extraction for coherent translation.

This module provides the first half of the two-pass pipeline:
- The analysis prompt asking the model for chapter title, characters,
  terminology and recurring themes as JSON
- ExtractedContext, the parsed form of that reply
- analyze_response(), which never raises: it returns a ContextAnalysis that
  is either the parsed context or an explicit degraded default
- The translation prompt that feeds the context back to the model

Design Philosophy:
- The strict parser (ExtractedContext.from_json) raises ContextParseError;
  the fallback is a separate, testable branch in analyze_response()
- Both the snake_case field names and the camelCase keys models tend to
  return ("novelTitle", "chineseName", "jargon", ...) are accepted
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from typing import Any, Optional

from novel_translator import config
from novel_translator.errors import ContextParseError
from novel_translator.translate.llm import language_name, strip_code_fence

UNKNOWN_WORK_TITLE = "Unknown"


@dataclass
class CharacterProfile:
    """A character detected in the chapter."""
    source_name: str
    target_name: str
    gender: str = ""
    description: str = ""
    name_kind: str = ""  # 'translation' or 'pinyin'

    def describe(self) -> str:
        return (
            f"{self.source_name} → {self.target_name} ({self.gender or 'unknown'}) - "
            f"{self.description or 'no description'} [{self.name_kind or 'unknown'}]"
        )


@dataclass
class TermNote:
    """A term that needs a consistent rendering."""
    term: str
    meaning: str


@dataclass
class ExtractedContext:
    """Structured context produced by the analysis pass.

    Attributes:
        work_title: Title of the novel, in the target language
        chapter_title: Title detected at the top of the chapter, if any
        characters: Characters with their chosen target-language names
        terminology: Jargon and recurring terms with their meaning
        recurring_themes: Inside jokes and recurring themes
    """
    work_title: str = UNKNOWN_WORK_TITLE
    chapter_title: Optional[str] = None
    characters: list[CharacterProfile] = field(default_factory=list)
    terminology: list[TermNote] = field(default_factory=list)
    recurring_themes: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.characters or self.terminology or self.recurring_themes)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def default(cls, chapter_title_hint: Optional[str] = None) -> ExtractedContext:
        """Minimal context used when the analysis reply is unusable."""
        return cls(work_title=chapter_title_hint or UNKNOWN_WORK_TITLE)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ExtractedContext:
        if not isinstance(data, dict):
            raise ContextParseError("Context must be a JSON object")

        characters = []
        for item in _list_field(data, "characters"):
            if not isinstance(item, dict):
                continue
            source = _first(item, "source_name", "chineseName", "sourceName", "name")
            target = _first(item, "target_name", "englishName", "targetName")
            if not source or not target:
                continue
            characters.append(CharacterProfile(
                source_name=source,
                target_name=target,
                gender=_first(item, "gender") or "",
                description=_first(item, "description") or "",
                name_kind=_first(item, "name_kind", "nameType", "nameKind") or "",
            ))

        terminology = []
        for item in _list_field(data, "terminology", "jargon"):
            if isinstance(item, dict):
                term = _first(item, "term")
                meaning = _first(item, "meaning")
                if term and meaning:
                    terminology.append(TermNote(term=term, meaning=meaning))

        themes = [
            str(t).strip()
            for t in _list_field(data, "recurring_themes", "insideJokes", "recurringThemes")
            if str(t).strip()
        ]

        chapter_title = _first(data, "chapter_title", "chapterTitle")
        if chapter_title and chapter_title.lower() in ("null", "none"):
            chapter_title = None

        return cls(
            work_title=_first(data, "work_title", "novelTitle", "workTitle") or UNKNOWN_WORK_TITLE,
            chapter_title=chapter_title or None,
            characters=characters,
            terminology=terminology,
            recurring_themes=themes,
        )

    @classmethod
    def from_json(cls, raw: str) -> ExtractedContext:
        """Strictly parse a model reply.

        Raises:
            ContextParseError: if the reply is not a JSON object
        """
        try:
            data = json.loads(strip_code_fence(raw or ""))
        except json.JSONDecodeError as e:
            raise ContextParseError(f"Analysis reply is not valid JSON: {e}") from e
        return cls.from_dict(data)


def _first(data: dict, *keys: str) -> Optional[str]:
    """First non-empty string value among keys."""
    for key in keys:
        value = data.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def _list_field(data: dict, *keys: str) -> list:
    for key in keys:
        value = data.get(key)
        if isinstance(value, list):
            return value
    return []


@dataclass
class ContextAnalysis:
    """Outcome of the analysis pass.

    Either a parsed context (degraded=False) or the default context with the
    reason the reply could not be used (degraded=True).
    """
    context: ExtractedContext
    degraded: bool = False
    reason: Optional[str] = None


def analyze_response(raw: str, chapter_title_hint: Optional[str] = None) -> ContextAnalysis:
    """Turn an analysis reply into a ContextAnalysis. Never raises."""
    try:
        return ContextAnalysis(context=ExtractedContext.from_json(raw))
    except ContextParseError as e:
        return ContextAnalysis(
            context=ExtractedContext.default(chapter_title_hint),
            degraded=True,
            reason=str(e),
        )


# ============================================================================
# Prompts
# ============================================================================

def build_analysis_prompt(
    text: str,
    source_lang: str = config.DEFAULT_SOURCE_LANG,
    target_lang: str = config.DEFAULT_TARGET_LANG,
) -> str:
    """Prompt for the analysis pass."""
    source = language_name(source_lang)
    target = language_name(target_lang)
    return f"""Analyze this {source} novel chapter and extract:
1. Chapter title (if present in the text, usually at the beginning)
2. Character names (with gender if mentioned)
3. Important terms/jargon that need consistent translation
4. Inside jokes or recurring themes
5. Novel title (if not in {target}, translate it)

IMPORTANT: For character names, provide:
- A {target} translation if the name has a clear meaning
- Otherwise a romanization (e.g. pinyin for Chinese)
- Mark which one you chose in name_kind ("translation" or "pinyin")

IMPORTANT: For chapter titles:
- Look for patterns like "第 X 章" or standalone titles at the beginning
- Extract the actual title text, not the chapter number
- If no clear title is found, use null

Placeholders like «0» stand for names fixed by the translator's glossary; keep them as they are.

Return JSON only:
{{
  "chapter_title": "extracted chapter title or null",
  "work_title": "{target} title",
  "characters": [
    {{
      "source_name": "name as written in the text",
      "target_name": "{target} translation or romanization",
      "gender": "M/F",
      "description": "brief description",
      "name_kind": "translation/pinyin"
    }}
  ],
  "terminology": [{{"term": "source term", "meaning": "{target} meaning"}}],
  "recurring_themes": ["description of recurring jokes/themes"]
}}

Text to analyze:
{text}"""


def build_translation_prompt(
    text: str,
    context: ExtractedContext,
    style_hint: str = "",
    source_lang: str = config.DEFAULT_SOURCE_LANG,
    target_lang: str = config.DEFAULT_TARGET_LANG,
) -> str:
    """Prompt for the translation pass, grounded in the extracted context."""
    source = language_name(source_lang)
    target = language_name(target_lang)

    characters = ", ".join(c.describe() for c in context.characters) or "none detected"
    terms = ", ".join(f'"{t.term}" = "{t.meaning}"' for t in context.terminology) or "none detected"
    themes = ", ".join(context.recurring_themes) or "none detected"

    if context.chapter_title:
        title_rule = (
            f"- A chapter title was detected ({context.chapter_title}); REMOVE it from the translation\n"
            "- Start the translation directly with the story content\n"
            "- Do not include chapter numbers or titles in the output"
        )
    else:
        title_rule = "- Do not include chapter numbers or titles in the output"

    return f"""You are translating a novel chapter from {source} to {target}.

IMPORTANT TONE GUIDELINES:
- Match the original tone EXACTLY - if it's casual/colloquial, keep it casual
- Use natural, conversational {target} that feels authentic
- Avoid overly formal or academic language unless the original is formal
- Preserve each character's personality and speech patterns
- For web novels, maintain that snappy, engaging style

Novel Context:
- Title: {context.work_title}
- Characters: {characters}
- Important Terms: {terms}
- Recurring Themes: {themes}

IMPORTANT: When translating character names in the text:
- Use the names provided in the context consistently
- Maintain the same name throughout the chapter
- Keep placeholders like «0» exactly as they appear

IMPORTANT: Chapter title handling:
{title_rule}

Tone/style: {style_hint or config.DEFAULT_STYLE_HINT}

Translate this text into natural, flowing {target}. Output only the translation:

{text}"""
