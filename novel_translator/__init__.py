"""
Novel Translator: glossary-aware, context-aware translation of web novels

Translates serialized fiction chapter by chapter while keeping names and
invented terms consistent:
1. Glossary substitution with marker tokens that survive the provider call
2. Two-pass translation (context analysis, then translation) on LLM backends
3. A local library of novels, chapters, translations and glossaries
"""

__version__ = "0.1.0"

from novel_translator.masking import SubstitutionMarker, SubstitutionSession, map_terms, restore_terms
from novel_translator.pipeline import (
    ContextAwarePipeline,
    PipelineConfig,
    TranslationPipeline,
    translate_text,
)
from novel_translator.translate import Glossary, create_translator

__all__ = [
    "SubstitutionMarker",
    "SubstitutionSession",
    "map_terms",
    "restore_terms",
    "ContextAwarePipeline",
    "PipelineConfig",
    "TranslationPipeline",
    "translate_text",
    "Glossary",
    "create_translator",
]
