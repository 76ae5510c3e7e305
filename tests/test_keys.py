"""Tests for API key lookup, using a temporary key file and no keychain."""

import pytest

from novel_translator.errors import ConfigurationError, NovelTranslatorError, ProviderError
from novel_translator.keys import KeyManager, env_var_for, require_key


@pytest.fixture
def km(tmp_path):
    return KeyManager(config_file=tmp_path / "keys.json", use_keyring=False)


class TestKeyManager:
    """Test env → keychain → file lookup order."""

    def test_missing(self, km):
        info = km.get_key_info("gemini")
        assert km.get_key("gemini") is None
        assert (info.is_set, info.source, info.masked_value) == (False, "none", "")

    def test_config_file(self, km):
        assert km.set_key("gemini", "AIzaFileKey000000") == "config"
        assert km.get_key("GEMINI") == "AIzaFileKey000000"
        assert km.get_key_info("gemini").source == "config"

    def test_env_wins(self, km, monkeypatch):
        km.set_key("openai", "sk-from-file-000000")
        monkeypatch.setenv("OPENAI_API_KEY", "sk-from-env-000000")
        assert km.get_key("openai") == "sk-from-env-000000"
        assert km.get_key_info("openai").source == "env"

    def test_delete(self, km):
        km.set_key("deepseek", "ds-key")
        assert km.delete_key("deepseek") is True
        assert km.delete_key("deepseek") is False
        assert km.get_key("deepseek") is None

    def test_unreadable_file_ignored(self, km):
        km.config_file.write_text("{not json", encoding="utf-8")
        assert km.get_key("gemini") is None

    def test_list_keys_covers_services(self, km):
        services = [info.service for info in km.list_keys()]
        assert "gemini" in services
        assert "huggingface" in services

    def test_mask(self, km):
        assert km._mask_key("short") == "*****"
        assert km._mask_key("AIzaSyExampleKey1234") == "AIza...1234"


class TestHelpers:
    def test_env_var_for(self):
        assert env_var_for("huggingface") == "HF_TOKEN"
        assert env_var_for("custom") == "CUSTOM_API_KEY"

    def test_require_key(self, km):
        with pytest.raises(ConfigurationError, match="GEMINI_API_KEY"):
            require_key("gemini", km)
        km.set_key("gemini", "AIzaKey")
        assert require_key("gemini", km) == "AIzaKey"


class TestErrors:
    def test_to_dict(self):
        error = ProviderError("quota exceeded", status_code=429, provider="gemini", stage="translation")
        data = error.to_dict()

        assert isinstance(error, NovelTranslatorError)
        assert str(error) == "quota exceeded"
        assert data["error_type"] == "ProviderError"
        assert data["context"] == {"status_code": 429, "provider": "gemini", "stage": "translation"}
