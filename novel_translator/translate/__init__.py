"""Translation backends, glossary model and chapter context extraction."""

from novel_translator.translate.base import (
    BACKENDS,
    DummyTranslator,
    TranslationRequest,
    TranslationResult,
    Translator,
    create_translator,
)
from novel_translator.translate.glossary import Glossary, GlossaryEntry

__all__ = [
    "BACKENDS",
    "DummyTranslator",
    "Glossary",
    "GlossaryEntry",
    "TranslationRequest",
    "TranslationResult",
    "Translator",
    "create_translator",
]
