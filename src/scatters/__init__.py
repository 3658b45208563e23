"""
scatters package exports convenience helpers for library consumers.
"""

from __future__ import annotations

from .config import ScattersConfig, config_from_dict, config_from_yaml, load_config
from .generator import ScattersGenerator
from .ingestion import IngestionError, parse_file
from .models import Document, DocumentKind, Placement
from .pipeline import EmptyVocabularyError, build_word_bank, load_corpus
from .session import ScatterSession
from .word_bank import WordBank

__all__ = [
    "ScattersConfig",
    "config_from_dict",
    "config_from_yaml",
    "load_config",
    "Document",
    "DocumentKind",
    "Placement",
    "IngestionError",
    "parse_file",
    "WordBank",
    "ScattersGenerator",
    "ScatterSession",
    "EmptyVocabularyError",
    "build_word_bank",
    "load_corpus",
]

__version__ = "0.1.0"
