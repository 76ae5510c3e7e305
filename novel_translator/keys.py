"""
API key management for Novel Translator.

Credentials are looked up in this order:
1. Environment variables (preferred for CI/production)
2. OS keychain via keyring (secure local storage)
3. Local config file (fallback)

Usage:
    from novel_translator.keys import KeyManager

    km = KeyManager()
    km.set_key("gemini", "AIza...")
    key = km.get_key("gemini")
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import keyring
from keyring.backends import fail
from keyring.errors import KeyringError

from novel_translator import config
from novel_translator.errors import ConfigurationError

logger = logging.getLogger(__name__)


# Supported services and their env var names
SERVICES = {
    "gemini": "GEMINI_API_KEY",
    "openai": "OPENAI_API_KEY",
    "deepseek": "DEEPSEEK_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
    "huggingface": "HF_TOKEN",
    "libretranslate": "LIBRETRANSLATE_API_KEY",
}


@dataclass
class KeyInfo:
    """Information about an API key."""
    service: str
    is_set: bool
    source: str  # 'env', 'keyring', 'config', 'none'
    masked_value: str  # e.g., "AIza...9xQk"


def env_var_for(service: str) -> str:
    return SERVICES.get(service.lower(), f"{service.upper()}_API_KEY")


class KeyManager:
    """Manage API keys.

    Priority order for key retrieval:
    1. Environment variable
    2. OS keychain (via keyring)
    3. Local config file (~/.noveltrans/keys.json)
    """

    SERVICE_NAME = "novel-translator"

    def __init__(self, config_file: Optional[Path] = None, use_keyring: bool = True):
        self.config_file = Path(config_file) if config_file else config.KEYS_FILE
        self._keyring_available = use_keyring and self._check_keyring()

    def _check_keyring(self) -> bool:
        """Check if a usable keyring backend is installed."""
        return not isinstance(keyring.get_keyring(), fail.Keyring)

    def _read_config(self) -> dict[str, str]:
        if not self.config_file.exists():
            return {}
        try:
            return json.loads(self.config_file.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable key file %s: %s", self.config_file, e)
            return {}

    def _write_config(self, data: dict[str, str]) -> None:
        self.config_file.parent.mkdir(parents=True, exist_ok=True)
        self.config_file.write_text(json.dumps(data, indent=2), encoding="utf-8")
        self.config_file.chmod(0o600)

    def _lookup(self, service: str) -> tuple[Optional[str], str]:
        """Return (key, source) for a service."""
        service = service.lower()

        if env_val := os.getenv(env_var_for(service)):
            return env_val, "env"

        if self._keyring_available:
            try:
                if key := keyring.get_password(self.SERVICE_NAME, service):
                    return key, "keyring"
            except KeyringError as e:
                logger.debug("Keyring lookup failed for %s: %s", service, e)

        if key := self._read_config().get(service):
            return key, "config"

        return None, "none"

    def get_key(self, service: str) -> Optional[str]:
        """Get API key for a service, or None if not found."""
        return self._lookup(service)[0]

    def set_key(self, service: str, key: str, use_keyring: bool = True) -> str:
        """Store API key for a service.

        Returns:
            Storage location used ('keyring' or 'config')
        """
        service = service.lower()

        if use_keyring and self._keyring_available:
            try:
                keyring.set_password(self.SERVICE_NAME, service, key)
                return "keyring"
            except KeyringError as e:
                logger.debug("Keyring write failed for %s, using config file: %s", service, e)

        data = self._read_config()
        data[service] = key
        self._write_config(data)
        return "config"

    def delete_key(self, service: str) -> bool:
        """Delete stored API key for a service."""
        service = service.lower()
        deleted = False

        if self._keyring_available:
            try:
                keyring.delete_password(self.SERVICE_NAME, service)
                deleted = True
            except KeyringError:
                pass  # nothing stored there

        data = self._read_config()
        if service in data:
            del data[service]
            self._write_config(data)
            deleted = True

        return deleted

    def get_key_info(self, service: str) -> KeyInfo:
        """Get information about a stored key."""
        key, source = self._lookup(service)
        return KeyInfo(
            service=service.lower(),
            is_set=key is not None,
            source=source,
            masked_value=self._mask_key(key) if key else "",
        )

    def list_keys(self) -> list[KeyInfo]:
        """List all known services and their key status."""
        return [self.get_key_info(service) for service in SERVICES]

    def _mask_key(self, key: str) -> str:
        """Mask a key for display (show first 4 and last 4 chars)."""
        if len(key) <= 12:
            return "*" * len(key)
        return f"{key[:4]}...{key[-4:]}"


def get_key(service: str) -> Optional[str]:
    """Convenience function to get an API key."""
    return KeyManager().get_key(service)


def require_key(service: str, key_manager: Optional[KeyManager] = None) -> str:
    """Get API key or raise ConfigurationError if not found."""
    key = (key_manager or KeyManager()).get_key(service)
    if not key:
        raise ConfigurationError(
            f"API key for '{service}' not found. "
            f"Set {env_var_for(service)} environment variable "
            f"or run: noveltrans keys set {service}",
            service=service,
        )
    return key
