"""Shared fixtures: no test may reach a real keychain, key file or provider."""

import json
from typing import Optional

import pytest

from novel_translator.keys import SERVICES
from novel_translator.library import MemoryLibraryStore
from novel_translator.translate.llm import BaseLLMTranslator, LLMConfig


@pytest.fixture(autouse=True)
def no_stored_keys(monkeypatch):
    """Hide API keys from env, keychain and key file."""
    for env_var in SERVICES.values():
        monkeypatch.delenv(env_var, raising=False)
    monkeypatch.setattr("novel_translator.translate.llm.get_key", lambda service: None)
    monkeypatch.setattr("novel_translator.translate.free_apis.get_key", lambda service: None)


class FakeResponse:
    """Stand-in for requests.Response."""

    def __init__(self, status_code=200, payload=None, text=None):
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else json.dumps(payload, ensure_ascii=False)

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON body")
        return self._payload


class ScriptedLLM(BaseLLMTranslator):
    """LLM translator that replays canned replies and records every call."""

    SERVICE = "gemini"

    def __init__(self, replies):
        super().__init__(LLMConfig(model="scripted"), api_key="test-key")
        self.replies = list(replies)
        self.calls = []

    @property
    def name(self) -> str:
        return "scripted-llm"

    def _generate(self, prompt: str, system: Optional[str], temperature: float) -> str:
        self.calls.append({"prompt": prompt, "system": system, "temperature": temperature})
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


@pytest.fixture
def store():
    return MemoryLibraryStore()


@pytest.fixture
def analysis_reply():
    return json.dumps({
        "chapter_title": "The Meeting",
        "work_title": "Wandering Swords",
        "characters": [
            {
                "source_name": "«0»",
                "target_name": "«0»",
                "gender": "M",
                "description": "the protagonist",
                "name_kind": "pinyin",
            }
        ],
        "terminology": [{"term": "内力", "meaning": "inner force"}],
        "recurring_themes": ["Li Si is always late"],
    })
