"""
Tests for glossary substitution.

Tests cover:
- Mapping source terms to marker tokens and restoring target terms
- Literal matching (regex metacharacters in terms)
- Salted tokens when the text already contains token syntax
- Terms never rewritten inside tokens issued earlier in the same call
- Restore idempotence and leak detection
- SubstitutionSession bookkeeping
"""

import pytest

from novel_translator.masking import (
    SubstitutionMarker,
    SubstitutionSession,
    count_tokens,
    find_dropped_markers,
    find_leaked_tokens,
    map_terms,
    restore_terms,
)
from novel_translator.translate.glossary import Glossary


class TestMapTerms:
    """Test source term → token substitution."""

    def test_basic_round_trip(self):
        """Names come back as their glossary renderings."""
        glossary = {"张三": "Zhang San", "李四": "Li Si"}
        mapped, markers = map_terms("张三与李四同行。", glossary)

        assert mapped == "«0»与«1»同行。"
        assert [m.source_term for m in markers] == ["张三", "李四"]

        translated = "«0» traveled with «1»."
        assert restore_terms(translated, markers) == "Zhang San traveled with Li Si."

    def test_every_occurrence_replaced(self):
        mapped, _ = map_terms("张三说张三不在", {"张三": "Zhang San"})
        assert mapped == "«0»说«0»不在"

    def test_accepts_glossary_object(self):
        glossary = Glossary.from_pairs([("林雷", "Linley")])
        mapped, markers = map_terms("林雷醒了", glossary)

        assert mapped == "«0»醒了"
        assert markers == [SubstitutionMarker("«0»", "林雷", "Linley")]

    def test_empty_glossary_is_noop(self):
        assert map_terms("张三", {}) == ("张三", [])
        assert map_terms("张三", None) == ("张三", [])

    def test_empty_text(self):
        mapped, markers = map_terms("", {"张三": "Zhang San"})
        assert mapped == ""
        assert len(markers) == 1

    def test_marker_recorded_for_absent_term(self):
        """Restoration needs only the marker list, so every entry gets one."""
        mapped, markers = map_terms("没有名字", {"张三": "Zhang San"})

        assert mapped == "没有名字"
        assert markers[0].token == "«0»"
        assert markers[0].target_term == "Zhang San"

    def test_blank_pairs_skipped(self):
        mapped, markers = map_terms("a b", {"": "X", "a": "", "  ": "Y"})
        assert mapped == "a b"
        assert markers == []

    def test_earlier_terms_take_precedence(self):
        """Glossary order decides overlapping terms."""
        glossary = {"张三丰": "Zhang Sanfeng", "张三": "Zhang San"}
        mapped, markers = map_terms("张三丰见张三", glossary)

        assert mapped == "«0»见«1»"
        assert restore_terms(mapped, markers) == "Zhang Sanfeng见Zhang San"

    def test_deterministic(self):
        glossary = {"张三": "Zhang San", "李四": "Li Si"}
        assert map_terms("张三李四", glossary) == map_terms("张三李四", glossary)


class TestLiteralMatching:
    """Terms are matched literally, never as patterns."""

    def test_dot_is_not_wildcard(self):
        mapped, _ = map_terms("a.b acb", {"a.b": "X"})
        assert mapped == "«0» acb"

    def test_parentheses_and_brackets(self):
        mapped, markers = map_terms("(第一卷) [注]", {"(第一卷)": "(Volume 1)", "[注]": "[Note]"})
        assert mapped == "«0» «1»"
        assert restore_terms(mapped, markers) == "(Volume 1) [Note]"

    def test_backslash_in_target_not_expanded(self):
        _, markers = map_terms("路径", {"路径": r"C:\new\1"})
        assert restore_terms("«0»", markers) == r"C:\new\1"


class TestTokenCollisions:
    """Tokens never collide with the text, targets or each other."""

    def test_salt_when_text_contains_token(self):
        text = "literal «0» here, 张三 too"
        mapped, markers = map_terms(text, {"张三": "Zhang San"})

        assert markers[0].token == "«0~1»"
        assert mapped == "literal «0» here, «0~1» too"
        assert restore_terms(mapped, markers) == "literal «0» here, Zhang San too"

    def test_salt_when_target_contains_token(self):
        _, markers = map_terms("张三", {"张三": "«1» the Bold", "李四": "Li Si"})
        assert markers[0].token.endswith("~1»")

    def test_numeric_term_skips_issued_tokens(self):
        """A source term "1" must not rewrite the token «1»."""
        glossary = {"a": "A", "b": "B", "1": "one"}
        mapped, markers = map_terms("a b 1", glossary)

        assert mapped == "«0» «1» «2»"
        assert restore_terms(mapped, markers) == "A B one"

    def test_term_matching_token_digit(self):
        mapped, markers = map_terms("张三 0", {"张三": "Zhang San", "0": "zero"})
        assert mapped == "«0» «1»"
        assert restore_terms(mapped, markers) == "Zhang San zero"


class TestRestoreTerms:
    """Test token → target term restoration."""

    def test_idempotent(self):
        _, markers = map_terms("张三", {"张三": "Zhang San"})
        once = restore_terms("«0» left", markers)
        assert restore_terms(once, markers) == once

    def test_absent_token_is_noop(self):
        _, markers = map_terms("张三", {"张三": "Zhang San"})
        assert restore_terms("nothing to do", markers) == "nothing to do"

    def test_restored_term_never_forms_token(self):
        mapped, markers = map_terms("a1»b", {"a": "«", "b": "B"})
        assert mapped == "«0»1»«1»"
        assert restore_terms(mapped, markers) == "«1»B"

    def test_mangled_token_leaks(self):
        _, markers = map_terms("张三", {"张三": "Zhang San"})
        assert restore_terms("« 0 » said", markers) == "« 0 » said"


class TestLeakDetection:
    """Test reporting of tokens the provider did not preserve."""

    def test_leaked_residue(self):
        assert find_leaked_tokens("Zhang San and «01»", "张三和李四") == ["«01»"]

    def test_token_syntax_from_source_not_reported(self):
        assert find_leaked_tokens("kept «0» as is", "原文 «0»") == []

    def test_token_syntax_from_target_not_reported(self):
        _, markers = map_terms("张三", {"张三": "«5»"})
        assert markers[0].token == "«0»"
        assert find_leaked_tokens("«5» came", "张三", markers) == []
        assert find_leaked_tokens("«5» came", "张三") == ["«5»"]

    def test_dropped_markers(self):
        mapped, markers = map_terms("张三与李四", {"张三": "Zhang San", "李四": "Li Si", "王五": "Wang Wu"})
        dropped = find_dropped_markers("«0» and Lee Sy", mapped, markers)
        assert [m.source_term for m in dropped] == ["李四"]

    def test_count_tokens(self):
        assert count_tokens("«0» «12~3» «x» <<1>>") == 2


class TestSubstitutionSession:
    """Test the single round-trip registry."""

    def test_round_trip(self):
        session = SubstitutionSession({"张三": "Zhang San", "李四": "Li Si"})
        mapped = session.map("张三笑了")

        assert mapped == "«0»笑了"
        assert session.terms_found == ["张三"]
        assert len(session.markers) == 2

        translated = "«0» laughed"
        final = session.restore(translated)
        assert final == "Zhang San laughed"
        assert session.leaked(final) == []
        assert session.dropped(translated) == []

    def test_reports_dropped_term(self):
        session = SubstitutionSession({"张三": "Zhang San"})
        session.map("张三笑了")
        assert [m.source_term for m in session.dropped("Zhangsan laughed")] == ["张三"]

    def test_single_use(self):
        session = SubstitutionSession({"张三": "Zhang San"})
        session.map("张三")
        with pytest.raises(RuntimeError):
            session.map("张三")
