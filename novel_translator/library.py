"""
Library storage: novels, chapters, translations and glossary rows.

The store is the persistence gateway of the application. Translation code
never touches it; only the chapter workflow and the CLI read and write
through it.

Implementations:
- MemoryLibraryStore: in-process only (tests, scratch sessions)
- JsonLibraryStore: one JSON file on disk, rewritten atomically on change

Records are keyed by opaque string ids (uuid4 hex).
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import uuid
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from novel_translator.errors import NotFoundError
from novel_translator.translate.glossary import Glossary

logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _new_id() -> str:
    return uuid.uuid4().hex


@dataclass
class Novel:
    id: str
    title: str
    is_public: bool = True
    created_at: str = field(default_factory=_now)


@dataclass
class Chapter:
    id: str
    novel_id: str
    number: int
    title: str = ""
    content: str = ""
    created_at: str = field(default_factory=_now)

    @property
    def display_title(self) -> str:
        return self.title or "Untitled"


@dataclass
class ChapterTranslation:
    id: str
    chapter_id: str
    text: str
    notes: list[str] = field(default_factory=list)
    updated_at: str = field(default_factory=_now)


def _empty_state() -> dict:
    return {"novels": {}, "chapters": {}, "translations": {}, "glossary": {}}


def _require_title(title: str) -> str:
    title = (title or "").strip()
    if not title:
        raise ValueError("Title must not be empty")
    return title


class LibraryStore(ABC):
    """Create/read/update operations over the library.

    Subclasses only decide where the state lives: _load_state() is called
    once on construction and _save_state() after every change.
    """

    def __init__(self):
        self._state = self._load_state()

    @abstractmethod
    def _load_state(self) -> dict:
        """Return the stored state, or an empty one."""

    @abstractmethod
    def _save_state(self, state: dict) -> None:
        """Persist the full state."""

    def _commit(self) -> None:
        self._save_state(self._state)

    # ------------------------------------------------------------------
    # Novels
    # ------------------------------------------------------------------

    def create_novel(self, title: str, is_public: bool = True) -> Novel:
        novel = Novel(id=_new_id(), title=_require_title(title), is_public=bool(is_public))
        self._state["novels"][novel.id] = asdict(novel)
        self._commit()
        logger.debug("Created novel %s (%s)", novel.id, novel.title)
        return novel

    def list_novels(self) -> list[Novel]:
        """All novels, newest first."""
        return [Novel(**data) for data in reversed(list(self._state["novels"].values()))]

    def get_novel(self, novel_id: str) -> Novel:
        data = self._state["novels"].get(novel_id)
        if data is None:
            raise NotFoundError(f"Novel not found: {novel_id}", novel_id=novel_id)
        return Novel(**data)

    def rename_novel(self, novel_id: str, title: str) -> Novel:
        self.get_novel(novel_id)
        self._state["novels"][novel_id]["title"] = _require_title(title)
        self._commit()
        return self.get_novel(novel_id)

    # ------------------------------------------------------------------
    # Chapters
    # ------------------------------------------------------------------

    def add_chapter(self, novel_id: str, number: int, title: str = "", content: str = "") -> Chapter:
        self.get_novel(novel_id)
        if any(c.number == number for c in self.list_chapters(novel_id)):
            raise ValueError(f"Chapter {number} already exists in this novel")

        chapter = Chapter(
            id=_new_id(),
            novel_id=novel_id,
            number=int(number),
            title=(title or "").strip(),
            content=content or "",
        )
        self._state["chapters"][chapter.id] = asdict(chapter)
        self._commit()
        return chapter

    def list_chapters(self, novel_id: str) -> list[Chapter]:
        """Chapters of a novel ordered by chapter number."""
        chapters = [
            Chapter(**data)
            for data in self._state["chapters"].values()
            if data["novel_id"] == novel_id
        ]
        return sorted(chapters, key=lambda c: c.number)

    def get_chapter(self, chapter_id: str) -> Chapter:
        data = self._state["chapters"].get(chapter_id)
        if data is None:
            raise NotFoundError(f"Chapter not found: {chapter_id}", chapter_id=chapter_id)
        return Chapter(**data)

    def update_chapter_content(self, chapter_id: str, content: str) -> Chapter:
        self.get_chapter(chapter_id)
        self._state["chapters"][chapter_id]["content"] = content or ""
        self._commit()
        return self.get_chapter(chapter_id)

    def rename_chapter(self, chapter_id: str, title: str) -> Chapter:
        self.get_chapter(chapter_id)
        self._state["chapters"][chapter_id]["title"] = _require_title(title)
        self._commit()
        return self.get_chapter(chapter_id)

    # ------------------------------------------------------------------
    # Translations
    # ------------------------------------------------------------------

    def get_translation(self, chapter_id: str) -> Optional[ChapterTranslation]:
        data = self._state["translations"].get(chapter_id)
        return ChapterTranslation(**data) if data else None

    def save_translation(
        self,
        chapter_id: str,
        text: str,
        notes: Optional[list[str]] = None,
    ) -> ChapterTranslation:
        """Insert or replace the translation of a chapter."""
        self.get_chapter(chapter_id)
        existing = self.get_translation(chapter_id)
        translation = ChapterTranslation(
            id=existing.id if existing else _new_id(),
            chapter_id=chapter_id,
            text=text,
            notes=list(notes or []),
        )
        self._state["translations"][chapter_id] = asdict(translation)
        self._commit()
        return translation

    # ------------------------------------------------------------------
    # Glossary rows
    # ------------------------------------------------------------------

    def get_glossary(self, novel_id: str) -> Glossary:
        novel = self.get_novel(novel_id)
        rows = self._state["glossary"].get(novel_id, [])
        glossary = Glossary(name=novel.title)
        for source, target, notes in rows:
            glossary.add_entry(source, target, notes)
        return glossary

    def _store_glossary(self, novel_id: str, glossary: Glossary) -> None:
        self._state["glossary"][novel_id] = [[e.source, e.target, e.notes] for e in glossary]
        self._commit()

    def add_glossary_term(self, novel_id: str, source: str, target: str, notes: str = "") -> Glossary:
        """Add or update one term. Blank terms raise ValueError."""
        glossary = self.get_glossary(novel_id)
        glossary.add_entry(source, target, notes)
        self._store_glossary(novel_id, glossary)
        return glossary

    def import_glossary(self, novel_id: str, other: Glossary) -> Glossary:
        glossary = self.get_glossary(novel_id)
        for entry in other:
            glossary.add_entry(entry.source, entry.target, entry.notes)
        self._store_glossary(novel_id, glossary)
        return glossary

    def remove_glossary_term(self, novel_id: str, source: str) -> bool:
        glossary = self.get_glossary(novel_id)
        removed = glossary.remove_entry(source)
        if removed:
            self._store_glossary(novel_id, glossary)
        return removed


class MemoryLibraryStore(LibraryStore):
    """Library kept in memory only."""

    def _load_state(self) -> dict:
        return _empty_state()

    def _save_state(self, state: dict) -> None:
        pass


class JsonLibraryStore(LibraryStore):
    """Library stored in a single JSON file.

    Usage:
        store = JsonLibraryStore(config.LIBRARY_FILE)
        novel = store.create_novel("Lord of the Mysteries")
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        super().__init__()

    def _load_state(self) -> dict:
        if not self.path.exists():
            return _empty_state()
        with open(self.path, "r", encoding="utf-8") as f:
            state = json.load(f)
        for key, value in _empty_state().items():
            state.setdefault(key, value)
        return state

    def _save_state(self, state: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=".library-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(state, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise
