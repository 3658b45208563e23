from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from .config import ScattersConfig
from .generator import ScattersGenerator
from .ingestion import (
    EXTENSION_KINDS,
    SUPPORTED_EXTENSIONS,
    IngestionError,
    document_kind,
    parse_document,
)
from .models import Document
from .word_bank import WordBank

LOGGER = logging.getLogger(__name__)


class EmptyVocabularyError(RuntimeError):
    """Raised when no admissible words were collected from the input."""


@dataclass(slots=True)
class CorpusBuild:
    """Outcome of ingesting a batch of documents."""

    word_bank: WordBank
    parsed_count: int = 0
    failures: List[IngestionError] = field(default_factory=list)


def collect_documents(input_path: Path, recursive: bool = False) -> List[Document]:
    """Expand a file or directory into the supported documents it contains."""
    if input_path.is_file():
        kind = document_kind(input_path)
        if kind is None:
            return []
        return [Document(path=input_path, kind=kind, doc_id=input_path.name)]

    candidates = input_path.rglob("*") if recursive else input_path.iterdir()
    documents: List[Document] = []
    for path in sorted(
        p for p in candidates if p.is_file() and p.suffix.lower() in SUPPORTED_EXTENSIONS
    ):
        kind = EXTENSION_KINDS[path.suffix.lower()]
        doc_id = path.relative_to(input_path).as_posix()
        documents.append(Document(path=path, kind=kind, doc_id=doc_id))
    return documents


def build_word_bank(
    documents: List[Document],
    config: ScattersConfig | None = None,
    strict: bool = False,
) -> CorpusBuild:
    """Ingest documents in order into a fresh WordBank.

    In strict mode the first IngestionError propagates; otherwise failed
    documents are logged, recorded and skipped.
    """
    config = config or ScattersConfig()
    bank = WordBank(stop_words=config.stop_words(), min_length=config.min_word_length)
    build = CorpusBuild(word_bank=bank)
    for document in documents:
        LOGGER.info("Parsing %s", document.path)
        try:
            words = parse_document(document)
        except IngestionError as exc:
            if strict:
                raise
            LOGGER.warning("Skipping %s: %s", document.path, exc.reason)
            build.failures.append(exc)
            continue
        bank.add(words, document.doc_id)
        build.parsed_count += 1
    LOGGER.info(
        "Parsed %d files, collected %d unique words", build.parsed_count, bank.size()
    )
    return build


def load_corpus(input_path: Path, config: ScattersConfig | None = None) -> CorpusBuild:
    """Build a vocabulary from a file or directory.

    A single file is ingested strictly; a directory skips unreadable files.
    """
    config = config or ScattersConfig()
    documents = collect_documents(input_path, recursive=config.recursive)
    build = build_word_bank(documents, config, strict=input_path.is_file())
    if build.word_bank.size() == 0:
        raise EmptyVocabularyError(f"No words found in {input_path}")
    return build


def build_generator(build: CorpusBuild, config: ScattersConfig | None = None) -> ScattersGenerator:
    """Create a generator over the collected vocabulary using configured tuning."""
    config = config or ScattersConfig()
    return ScattersGenerator.from_word_bank(
        build.word_bank,
        min_gap=config.min_gap,
        max_attempts=config.max_attempts,
        cells_per_word=config.cells_per_word,
    )
