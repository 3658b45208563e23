from __future__ import annotations

from typing import List

import regex

# A character counts as part of a word when it is Alphabetic or Numeric in the
# Unicode sense. That includes Other_Alphabetic marks such as Devanagari vowel
# signs, which str.isalnum() and re's \w reject.
EDGE_PUNCT_RE = regex.compile(r"^[^\p{Alphabetic}\p{N}]+|[^\p{Alphabetic}\p{N}]+$")


def normalize_token(piece: str) -> str:
    """Trim non-alphanumeric characters from both ends and lowercase the rest."""
    return EDGE_PUNCT_RE.sub("", piece).lower()


def extract_words(text: str) -> List[str]:
    """Split text on whitespace runs and normalize every piece, dropping empties.

    Every ingestion format funnels its extracted text through here so the
    tokens they produce are identical.
    """
    words: List[str] = []
    for piece in text.split():
        word = normalize_token(piece)
        if word:
            words.append(word)
    return words
