from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class DocumentKind(str, Enum):
    """Recognized input formats."""

    PLAIN = "plain"
    LIGHT_MARKUP = "light-markup"
    EBOOK_CONTAINER = "ebook-container"


@dataclass(frozen=True, slots=True)
class Document:
    """An input file queued for ingestion."""

    path: Path
    kind: DocumentKind
    doc_id: str


@dataclass(slots=True)
class Placement:
    """A word positioned on the canvas, occupying cells [x, x + len(word)) of row y."""

    word: str
    x: int
    y: int
    source: str | None = None
    forced: bool = False

    @property
    def end(self) -> int:
        return self.x + len(self.word)
