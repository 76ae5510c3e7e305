"""Tests for the glossary model and CSV import/export."""

import pytest

from novel_translator.translate.glossary import (
    Glossary,
    GlossaryEntry,
    load_glossary_csv,
    save_glossary_csv,
)


class TestGlossary:
    """Test glossary entry management."""

    def test_add_and_lookup(self):
        glossary = Glossary()
        glossary.add_entry("林雷", "Linley", "protagonist")

        assert len(glossary) == 1
        assert "林雷" in glossary
        assert glossary.get_target("林雷") == "Linley"
        assert glossary.get_target("德林") is None

    def test_readding_replaces_in_place(self):
        glossary = Glossary.from_pairs([("林雷", "Lin Lei"), ("德林", "Doehring")])
        glossary.add_entry("林雷", "Linley")

        assert [e.source for e in glossary] == ["林雷", "德林"]
        assert glossary.get_target("林雷") == "Linley"

    def test_terms_are_stripped(self):
        glossary = Glossary()
        glossary.add_entry("  林雷 ", " Linley ")
        assert glossary.entries == [GlossaryEntry("林雷", "Linley")]

    @pytest.mark.parametrize("source,target", [("", "Linley"), ("林雷", ""), ("   ", "x")])
    def test_blank_terms_rejected(self, source, target):
        with pytest.raises(ValueError):
            Glossary().add_entry(source, target)

    def test_remove_entry(self):
        glossary = Glossary.from_dict({"林雷": "Linley"})
        assert glossary.remove_entry("林雷") is True
        assert glossary.remove_entry("林雷") is False
        assert len(glossary) == 0

    def test_to_dict_keeps_order(self):
        glossary = Glossary.from_pairs([("b", "B"), ("a", "A")])
        assert list(glossary.to_dict()) == ["b", "a"]

    def test_prompt_string_truncates(self):
        glossary = Glossary.from_pairs([(f"词{i}", f"term{i}") for i in range(5)])
        prompt = glossary.to_prompt_string(max_entries=3)

        assert "词0 → term0" in prompt
        assert "词3" not in prompt
        assert "2 more terms" in prompt


class TestGlossaryCSV:
    """Test CSV loading and saving."""

    def test_load_skips_bad_rows(self, tmp_path):
        path = tmp_path / "terms.csv"
        path.write_text(
            "source,target,notes\n"
            "林雷,Linley,protagonist\n"
            "only-one-column\n"
            ",Empty Source\n"
            "德林,Doehring\n",
            encoding="utf-8",
        )
        glossary = load_glossary_csv(path)

        assert glossary.name == "terms"
        assert glossary.to_dict() == {"林雷": "Linley", "德林": "Doehring"}
        assert glossary.entries[0].notes == "protagonist"

    def test_save_then_load(self, tmp_path):
        path = tmp_path / "out.csv"
        glossary = Glossary.from_pairs([("林雷", "Linley"), ("斗气", "battle qi")])
        save_glossary_csv(glossary, path)

        assert path.read_text(encoding="utf-8").splitlines()[0] == "source,target,notes"
        assert load_glossary_csv(path).to_dict() == glossary.to_dict()
