"""
Chapter workflow: translate a stored chapter and save the result.

Steps:
1. Load the chapter and its novel's glossary
2. Run the translation pipeline
3. Save the translation (insert or replace)
4. Adopt the chapter title detected by the analysis pass, if it differs

Nothing is written unless the translation succeeds, and the title is left
alone unless the translation was saved.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from novel_translator.library import Chapter, ChapterTranslation, LibraryStore
from novel_translator.pipeline import TranslationOutcome, TranslationPipeline

logger = logging.getLogger(__name__)


@dataclass
class ChapterTranslationOutcome:
    chapter: Chapter
    translation: ChapterTranslation
    outcome: TranslationOutcome
    renamed_from: Optional[str] = None

    @property
    def title_updated(self) -> bool:
        return self.renamed_from is not None


def translate_chapter(
    store: LibraryStore,
    chapter_id: str,
    pipeline: TranslationPipeline,
) -> ChapterTranslationOutcome:
    """Translate one chapter and persist the result."""
    chapter = store.get_chapter(chapter_id)
    if not chapter.content.strip():
        raise ValueError(f"Chapter {chapter.number} has no source text to translate")

    glossary = store.get_glossary(chapter.novel_id)
    logger.info(
        "Translating chapter %d (%d chars, %d glossary terms) with %s",
        chapter.number, len(chapter.content), len(glossary), pipeline.translator.name,
    )

    outcome = pipeline.translate(
        chapter.content,
        glossary=glossary,
        chapter_title_hint=chapter.title or None,
    )

    translation = store.save_translation(chapter.id, outcome.text, outcome.notes)

    renamed_from = None
    detected = (outcome.detected_chapter_title or "").strip()
    if detected and detected != chapter.title:
        renamed_from = chapter.title
        chapter = store.rename_chapter(chapter.id, detected)
        logger.info("Chapter %d title set to %r", chapter.number, detected)

    return ChapterTranslationOutcome(
        chapter=chapter,
        translation=translation,
        outcome=outcome,
        renamed_from=renamed_from,
    )
