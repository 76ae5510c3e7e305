"""
Project-wide configuration and directory structure.

Module Contents:
    APP_NAME: Application name for display purposes
    DATA_DIR: Directory holding the library file and stored keys
    LIBRARY_FILE: JSON file backing the local library store
    KEYS_FILE: Fallback API key file (used when no OS keychain exists)
    DEFAULT_BACKEND: Translation backend used when none is given
    DEFAULT_SOURCE_LANG / DEFAULT_TARGET_LANG: Language pair defaults
    DEFAULT_STYLE_HINT: Tone instruction used when none is given

DATA_DIR defaults to ~/.noveltrans and can be moved with the
NOVELTRANS_HOME environment variable. Unlike a package data directory it
lives in the user's home, so it is only created on demand.

Example:
    >>> from novel_translator.config import LIBRARY_FILE, ensure_data_dir
    >>> ensure_data_dir()
    >>> print(f"Library at: {LIBRARY_FILE}")
"""

import os
from pathlib import Path

APP_NAME = "Novel Translator"

DATA_DIR = Path(os.getenv("NOVELTRANS_HOME") or Path.home() / ".noveltrans")

LIBRARY_FILE = DATA_DIR / "library.json"

KEYS_FILE = DATA_DIR / "keys.json"

DEFAULT_BACKEND = "gemini"

DEFAULT_SOURCE_LANG = "zh"

DEFAULT_TARGET_LANG = "en"

DEFAULT_STYLE_HINT = "match original"

# Seconds before an HTTP request to a provider gives up
DEFAULT_TIMEOUT = 120.0


def ensure_data_dir() -> Path:
    """Create DATA_DIR if needed and return it."""
    DATA_DIR.mkdir(parents=True, exist_ok=True)
    return DATA_DIR
