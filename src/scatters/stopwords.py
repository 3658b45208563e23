from __future__ import annotations

from pathlib import Path
from typing import FrozenSet

# Common English function words that never make it into a vocabulary.
STOP_WORDS: FrozenSet[str] = frozenset(
    """
    the be to of and a in that have i it for not on with he as you do at
    this but his by from they we say her she or an will my one all would
    there their what so up out if about who get which go me when make can
    like time no just him know take people into year your good some could
    them see other than then now look only come its over think also back
    after use two how our work first well way even new want because any
    these give day most us is was are been has had were said did having
    may should am being does
    """.split()
)


def load_stopwords(path: str | Path) -> list[str]:
    """Load a newline-delimited stop-word list, skipping blanks and '#' comments."""
    words: list[str] = []
    for line in Path(path).read_text(encoding="utf-8").splitlines():
        entry = line.strip().lower()
        if entry and not entry.startswith("#"):
            words.append(entry)
    return words
