from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List

from .epub import EPUBParseError, extract_text_from_epub
from .markup import extract_text_from_markdown
from .models import Document, DocumentKind
from .textutils import extract_words

LOGGER = logging.getLogger(__name__)

# File types the ingester knows how to turn into word lists.
EXTENSION_KINDS: Dict[str, DocumentKind] = {
    ".txt": DocumentKind.PLAIN,
    ".md": DocumentKind.LIGHT_MARKUP,
    ".markdown": DocumentKind.LIGHT_MARKUP,
    ".epub": DocumentKind.EBOOK_CONTAINER,
}
SUPPORTED_EXTENSIONS = frozenset(EXTENSION_KINDS)


class IngestionError(RuntimeError):
    """Raised when a single document cannot be read or parsed."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Failed to parse {path}: {reason}")
        self.path = path
        self.reason = reason


def document_kind(path: Path) -> DocumentKind | None:
    """Return the document kind implied by the file extension, if recognized."""
    return EXTENSION_KINDS.get(path.suffix.lower())


def parse_file(path: Path) -> List[str]:
    """Read a file and return its normalized words.

    Unrecognized extensions yield an empty list. Any read or parse failure
    raises IngestionError before a single word is returned.
    """
    kind = document_kind(path)
    if kind is None:
        LOGGER.debug("Ignoring unsupported file %s", path)
        return []
    return _extract(path, kind)


def parse_document(document: Document) -> List[str]:
    """Ingest a Document using its recorded kind."""
    return _extract(document.path, document.kind)


def _extract(path: Path, kind: DocumentKind) -> List[str]:
    try:
        if kind is DocumentKind.EBOOK_CONTAINER:
            text = extract_text_from_epub(path)
        elif kind is DocumentKind.LIGHT_MARKUP:
            text = extract_text_from_markdown(path.read_text(encoding="utf-8"))
        else:
            text = path.read_text(encoding="utf-8")
    except EPUBParseError as exc:
        raise IngestionError(path, str(exc)) from exc
    except UnicodeDecodeError as exc:
        raise IngestionError(path, f"not valid UTF-8 ({exc.reason})") from exc
    except OSError as exc:
        raise IngestionError(path, exc.strerror or str(exc)) from exc
    return extract_words(text)
