"""Reading mode: one translated chapter at a time, with prev/next navigation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from novel_translator.library import Chapter, LibraryStore

NO_TRANSLATION = "No translation available for this chapter."


def _index_of(chapters: Sequence[Chapter], chapter_id: Optional[str]) -> int:
    for i, chapter in enumerate(chapters):
        if chapter.id == chapter_id:
            return i
    return -1


def next_chapter(chapters: Sequence[Chapter], current_id: Optional[str]) -> Optional[Chapter]:
    """Chapter after current_id, or None at the end (or if current_id is unknown)."""
    i = _index_of(chapters, current_id)
    if i < 0 or i + 1 >= len(chapters):
        return None
    return chapters[i + 1]


def previous_chapter(chapters: Sequence[Chapter], current_id: Optional[str]) -> Optional[Chapter]:
    i = _index_of(chapters, current_id)
    if i <= 0:
        return None
    return chapters[i - 1]


@dataclass
class ReadingView:
    """Everything the reading screen shows for one chapter."""
    heading: str
    chapter_heading: str
    position: str
    body: str
    has_translation: bool
    previous_chapter_id: Optional[str] = None
    next_chapter_id: Optional[str] = None

    @property
    def has_previous(self) -> bool:
        return self.previous_chapter_id is not None

    @property
    def has_next(self) -> bool:
        return self.next_chapter_id is not None

    @property
    def paragraphs(self) -> list[str]:
        return [p.strip() for p in self.body.split("\n") if p.strip()]

    @classmethod
    def for_chapter(cls, store: LibraryStore, chapter_id: str) -> ReadingView:
        chapter = store.get_chapter(chapter_id)
        novel = store.get_novel(chapter.novel_id)
        chapters = store.list_chapters(novel.id)
        translation = store.get_translation(chapter.id)

        prev_ch = previous_chapter(chapters, chapter.id)
        next_ch = next_chapter(chapters, chapter.id)
        has_translation = bool(translation and translation.text.strip())

        return cls(
            heading=f"{novel.title} - Chapter {chapter.number}: {chapter.display_title}",
            chapter_heading=f"Chapter {chapter.number}: {chapter.display_title}",
            position=f"{_index_of(chapters, chapter.id) + 1} of {len(chapters)} chapters",
            body=translation.text if has_translation else NO_TRANSLATION,
            has_translation=has_translation,
            previous_chapter_id=prev_ch.id if prev_ch else None,
            next_chapter_id=next_ch.id if next_ch else None,
        )
