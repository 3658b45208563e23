from __future__ import annotations

from typing import AbstractSet, Dict, Iterable, List

from .stopwords import STOP_WORDS

MIN_WORD_LENGTH = 3


class WordBank:
    """Deduplicated, filtered vocabulary accumulated from one or more documents.

    Filters run once, at insertion time. Each word remembers the first
    document that contributed it; later sightings never overwrite that.
    """

    def __init__(
        self,
        stop_words: AbstractSet[str] = STOP_WORDS,
        min_length: int = MIN_WORD_LENGTH,
    ) -> None:
        self._stop_words = stop_words
        self._min_length = min_length
        self._words: Dict[str, str | None] = {}

    def add(self, tokens: Iterable[str], source_id: str | None = None) -> int:
        """Insert admissible tokens and return how many were new."""
        added = 0
        for token in tokens:
            if not self.admits(token) or token in self._words:
                continue
            self._words[token] = source_id
            added += 1
        return added

    def admits(self, token: str) -> bool:
        return len(token) >= self._min_length and token not in self._stop_words

    def finalize(self) -> List[str]:
        """Return every vocabulary word in first-insertion order."""
        return list(self._words)

    def size(self) -> int:
        return len(self._words)

    def source_of(self, word: str) -> str | None:
        return self._words.get(word)

    def sources(self) -> Dict[str, str | None]:
        return dict(self._words)

    def __len__(self) -> int:
        return len(self._words)

    def __contains__(self, word: object) -> bool:
        return word in self._words
