"""Tests for chapter context extraction and the two-pass prompts."""

import json

import pytest

from novel_translator.errors import ContextParseError
from novel_translator.translate.context import (
    CharacterProfile,
    ExtractedContext,
    TermNote,
    analyze_response,
    build_analysis_prompt,
    build_translation_prompt,
)


class TestExtractedContext:
    """Test parsing of analysis replies."""

    def test_snake_case_reply(self, analysis_reply):
        ctx = ExtractedContext.from_json(analysis_reply)

        assert ctx.work_title == "Wandering Swords"
        assert ctx.chapter_title == "The Meeting"
        assert ctx.characters[0].gender == "M"
        assert ctx.terminology == [TermNote("内力", "inner force")]
        assert ctx.recurring_themes == ["Li Si is always late"]
        assert not ctx.is_empty

    def test_camel_case_reply_in_fence(self):
        reply = "```json\n" + json.dumps({
            "chapterTitle": "初遇",
            "novelTitle": "Swords",
            "characters": [{"chineseName": "张三", "englishName": "Zhang San", "nameType": "pinyin"}],
            "jargon": [{"term": "内力", "meaning": "inner force"}],
            "insideJokes": ["the broken teapot"],
        }) + "\n```"
        ctx = ExtractedContext.from_json(reply)

        assert ctx.chapter_title == "初遇"
        assert ctx.characters == [CharacterProfile("张三", "Zhang San", name_kind="pinyin")]
        assert ctx.recurring_themes == ["the broken teapot"]

    def test_null_chapter_title(self):
        ctx = ExtractedContext.from_json('{"chapter_title": "null", "work_title": "X"}')
        assert ctx.chapter_title is None

    def test_incomplete_entries_dropped(self):
        ctx = ExtractedContext.from_dict({
            "characters": [{"source_name": "张三"}, "not a dict"],
            "terminology": [{"term": "内力"}],
        })
        assert ctx.characters == []
        assert ctx.terminology == []
        assert ctx.work_title == "Unknown"
        assert ctx.is_empty

    def test_invalid_json(self):
        with pytest.raises(ContextParseError):
            ExtractedContext.from_json("Sure! Here is the analysis:")

    def test_non_object_json(self):
        with pytest.raises(ContextParseError):
            ExtractedContext.from_json('["a", "b"]')


class TestAnalyzeResponse:
    """Test the non-raising analysis wrapper."""

    def test_parsed(self, analysis_reply):
        analysis = analyze_response(analysis_reply)
        assert not analysis.degraded
        assert analysis.reason is None

    def test_degraded_uses_title_hint(self):
        analysis = analyze_response("not json at all", chapter_title_hint="Chapter 3")

        assert analysis.degraded
        assert analysis.reason
        assert analysis.context.work_title == "Chapter 3"
        assert analysis.context.characters == []
        assert analysis.context.chapter_title is None

    def test_degraded_without_hint(self):
        assert analyze_response("").context.work_title == "Unknown"


class TestPrompts:
    """Test analysis and translation prompt construction."""

    def test_analysis_prompt(self):
        prompt = build_analysis_prompt("第一章 初遇\n张三来了")
        assert "Chinese novel chapter" in prompt
        assert prompt.endswith("第一章 初遇\n张三来了")
        assert '"chapter_title"' in prompt

    def test_translation_prompt_with_context(self, analysis_reply):
        ctx = ExtractedContext.from_json(analysis_reply)
        prompt = build_translation_prompt("正文", ctx, style_hint="snappy")

        assert "Title: Wandering Swords" in prompt
        assert "«0» → «0» (M) - the protagonist [pinyin]" in prompt
        assert '"内力" = "inner force"' in prompt
        assert "REMOVE it from the translation" in prompt
        assert "Tone/style: snappy" in prompt
        assert prompt.endswith("正文")

    def test_translation_prompt_default_context(self):
        prompt = build_translation_prompt("正文", ExtractedContext.default())

        assert "Characters: none detected" in prompt
        assert "REMOVE" not in prompt
        assert "Tone/style: match original" in prompt
