"""Tests for the library store (in-memory and JSON file)."""

import json

import pytest

from novel_translator.errors import NotFoundError
from novel_translator.library import JsonLibraryStore, MemoryLibraryStore
from novel_translator.translate.glossary import Glossary


class TestNovels:
    """Test novel records."""

    def test_create_and_get(self, store):
        novel = store.create_novel("  Coiling Dragon ", is_public=False)

        assert novel.title == "Coiling Dragon"
        assert novel.is_public is False
        assert store.get_novel(novel.id) == novel

    def test_list_newest_first(self, store):
        first = store.create_novel("First")
        second = store.create_novel("Second")
        assert [n.id for n in store.list_novels()] == [second.id, first.id]

    def test_rename(self, store):
        novel = store.create_novel("Old")
        assert store.rename_novel(novel.id, "New").title == "New"

    def test_blank_title_rejected(self, store):
        novel = store.create_novel("Title")
        with pytest.raises(ValueError):
            store.create_novel("   ")
        with pytest.raises(ValueError):
            store.rename_novel(novel.id, "")

    def test_unknown_id(self, store):
        with pytest.raises(NotFoundError):
            store.get_novel("missing")


class TestChapters:
    """Test chapter records."""

    def test_sorted_by_number(self, store):
        novel = store.create_novel("Novel")
        store.add_chapter(novel.id, 3, "Third")
        store.add_chapter(novel.id, 1, "First")
        store.add_chapter(novel.id, 2)

        chapters = store.list_chapters(novel.id)
        assert [c.number for c in chapters] == [1, 2, 3]
        assert chapters[1].display_title == "Untitled"

    def test_chapters_scoped_to_novel(self, store):
        a = store.create_novel("A")
        b = store.create_novel("B")
        store.add_chapter(a.id, 1)
        assert store.list_chapters(b.id) == []

    def test_duplicate_number_rejected(self, store):
        novel = store.create_novel("Novel")
        store.add_chapter(novel.id, 1)
        with pytest.raises(ValueError):
            store.add_chapter(novel.id, 1)

    def test_add_to_unknown_novel(self, store):
        with pytest.raises(NotFoundError):
            store.add_chapter("missing", 1)

    def test_update_content_and_rename(self, store):
        novel = store.create_novel("Novel")
        chapter = store.add_chapter(novel.id, 1, content="旧")

        assert store.update_chapter_content(chapter.id, "新").content == "新"
        assert store.rename_chapter(chapter.id, "Awakening").title == "Awakening"


class TestTranslations:
    """Test the one-translation-per-chapter upsert."""

    def test_save_replaces(self, store):
        novel = store.create_novel("Novel")
        chapter = store.add_chapter(novel.id, 1, content="原文")

        assert store.get_translation(chapter.id) is None
        first = store.save_translation(chapter.id, "Draft", ["note"])
        second = store.save_translation(chapter.id, "Final")

        assert second.id == first.id
        assert store.get_translation(chapter.id).text == "Final"
        assert store.get_translation(chapter.id).notes == []

    def test_unknown_chapter(self, store):
        with pytest.raises(NotFoundError):
            store.save_translation("missing", "text")


class TestGlossaryRows:
    """Test per-novel glossary storage."""

    def test_add_update_remove(self, store):
        novel = store.create_novel("Coiling Dragon")
        store.add_glossary_term(novel.id, "林雷", "Lin Lei")
        store.add_glossary_term(novel.id, "林雷", "Linley", "protagonist")

        glossary = store.get_glossary(novel.id)
        assert glossary.name == "Coiling Dragon"
        assert glossary.to_dict() == {"林雷": "Linley"}

        assert store.remove_glossary_term(novel.id, "林雷") is True
        assert store.remove_glossary_term(novel.id, "林雷") is False
        assert len(store.get_glossary(novel.id)) == 0

    def test_blank_term_rejected(self, store):
        novel = store.create_novel("Novel")
        with pytest.raises(ValueError):
            store.add_glossary_term(novel.id, "", "x")

    def test_import_merges(self, store):
        novel = store.create_novel("Novel")
        store.add_glossary_term(novel.id, "林雷", "Lin Lei")
        merged = store.import_glossary(novel.id, Glossary.from_dict({"林雷": "Linley", "德林": "Doehring"}))
        assert merged.to_dict() == {"林雷": "Linley", "德林": "Doehring"}


class TestJsonLibraryStore:
    """Test persistence to disk."""

    def test_reload(self, tmp_path):
        path = tmp_path / "lib" / "library.json"
        store = JsonLibraryStore(path)
        novel = store.create_novel("诡秘之主")
        chapter = store.add_chapter(novel.id, 1, "绯红", "原文")
        store.save_translation(chapter.id, "Crimson")
        store.add_glossary_term(novel.id, "克莱恩", "Klein")

        reloaded = JsonLibraryStore(path)
        assert reloaded.get_novel(novel.id).title == "诡秘之主"
        assert reloaded.list_chapters(novel.id)[0].title == "绯红"
        assert reloaded.get_translation(chapter.id).text == "Crimson"
        assert reloaded.get_glossary(novel.id).get_target("克莱恩") == "Klein"

    def test_written_as_utf8(self, tmp_path):
        path = tmp_path / "library.json"
        JsonLibraryStore(path).create_novel("诡秘之主")

        raw = path.read_text(encoding="utf-8")
        assert "诡秘之主" in raw
        assert list(json.loads(raw)) == ["novels", "chapters", "translations", "glossary"]
        assert [p.name for p in tmp_path.iterdir()] == ["library.json"]

    def test_missing_file_is_empty(self, tmp_path):
        store = JsonLibraryStore(tmp_path / "none.json")
        assert store.list_novels() == []
        assert not (tmp_path / "none.json").exists()


def test_memory_store_starts_empty():
    assert MemoryLibraryStore().list_novels() == []
