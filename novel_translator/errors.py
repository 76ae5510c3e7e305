"""
Exception classes for Novel Translator.

All errors raised on purpose by the package derive from NovelTranslatorError,
so callers (the CLI, the chapter workflow) can surface a single readable
message without catching unrelated exceptions.
"""

from __future__ import annotations

from typing import Optional


class NovelTranslatorError(Exception):
    """Base exception for all novel translator errors.

    Extra keyword arguments are kept as context and exported by to_dict()
    for logging.
    """

    def __init__(self, message: str, **kwargs):
        super().__init__(message)
        self.message = message
        self.context = kwargs

    def __str__(self):
        return self.message

    def to_dict(self) -> dict:
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "context": self.context,
        }


class ConfigurationError(NovelTranslatorError):
    """A required credential or endpoint is missing.

    Always raised before any network request is attempted.
    """


class ProviderError(NovelTranslatorError):
    """A translation backend failed or returned an unusable payload."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        provider: Optional[str] = None,
        **kwargs,
    ):
        super().__init__(message, status_code=status_code, provider=provider, **kwargs)
        self.status_code = status_code
        self.provider = provider


class ContextParseError(NovelTranslatorError):
    """The analysis reply could not be read as structured context.

    Only the strict parser raises this; the pipeline turns it into a
    degraded default context.
    """


class NotFoundError(NovelTranslatorError):
    """A novel, chapter or translation id does not exist in the library."""
