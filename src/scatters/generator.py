from __future__ import annotations

import logging
import random
from typing import List, Mapping, Sequence, Tuple

from .models import Placement
from .word_bank import WordBank

LOGGER = logging.getLogger(__name__)

MIN_GAP = 2
MAX_ATTEMPTS = 100
CELLS_PER_WORD = 40.0
MIN_WORDS = 2
# Re-roll variety: the drawn count lands within 70%..130% of the base count.
COUNT_LOW_PERCENT = 70
COUNT_HIGH_PERCENT = 130

# (x, y, length) of an accepted placement.
Span = Tuple[int, int, int]


def compute_count_range(
    area: int,
    density: float,
    vocabulary_size: int,
    cells_per_word: float = CELLS_PER_WORD,
) -> Tuple[int, int]:
    """Return (min_count, max_count) for a canvas of the given area.

    The base is roughly one word per ``cells_per_word`` cells, scaled by
    density. The lower bound is clamped to MIN_WORDS before the upper bound
    is clamped to the vocabulary size, so a tiny vocabulary can leave
    min_count > max_count.
    """
    base = max(MIN_WORDS, int(max(area, 0) / cells_per_word * density))
    min_count = max(MIN_WORDS, base * COUNT_LOW_PERCENT // 100)
    max_count = min(vocabulary_size, base * COUNT_HIGH_PERCENT // 100)
    return min_count, max_count


def is_overlapping_tight(
    x: int, y: int, length: int, occupied: Sequence[Span], min_gap: int = MIN_GAP
) -> bool:
    """True when [x, x+length) on row y comes within min_gap cells of an occupied span.

    Rows never interact; only same-row spans are compared.
    """
    x_end = x + length
    for ox, oy, olen in occupied:
        if y != oy:
            continue
        if x_end + min_gap > ox and x < ox + olen + min_gap:
            return True
    return False


class ScattersGenerator:
    """Samples words from a vocabulary and scatters them across a character grid."""

    def __init__(
        self,
        words: Sequence[str],
        sources: Mapping[str, str | None] | None = None,
        *,
        min_gap: int = MIN_GAP,
        max_attempts: int = MAX_ATTEMPTS,
        cells_per_word: float = CELLS_PER_WORD,
    ) -> None:
        self._pool: List[str] = list(words)
        self._sources: Mapping[str, str | None] = sources or {}
        self.min_gap = min_gap
        self.max_attempts = max_attempts
        self.cells_per_word = cells_per_word

    @classmethod
    def from_word_bank(
        cls,
        bank: WordBank,
        *,
        min_gap: int = MIN_GAP,
        max_attempts: int = MAX_ATTEMPTS,
        cells_per_word: float = CELLS_PER_WORD,
    ) -> "ScattersGenerator":
        """Snapshot a finalized WordBank, keeping per-word source attribution."""
        return cls(
            bank.finalize(),
            bank.sources(),
            min_gap=min_gap,
            max_attempts=max_attempts,
            cells_per_word=cells_per_word,
        )

    @property
    def vocabulary_size(self) -> int:
        return len(self._pool)

    def choose_count(self, width: int, height: int, density: float, rng: random.Random) -> int:
        """Draw how many words the next scatter should try to place."""
        area = max(width, 0) * max(height, 0)
        min_count, max_count = compute_count_range(
            area, density, len(self._pool), self.cells_per_word
        )
        if min_count < max_count:
            return rng.randint(min_count, max_count)
        return min(min_count, len(self._pool))

    def generate(
        self,
        width: int,
        height: int,
        density: float = 1.0,
        rng: random.Random | None = None,
    ) -> List[Placement]:
        """Return placements for a fresh random sample of the vocabulary.

        Earlier words in the shuffled sample get first pick of the grid.
        Each word gets up to ``max_attempts`` collision-checked tries, then
        one unchecked placement flagged ``forced``. Words wider than the
        canvas are dropped.
        """
        rng = rng or random.Random()
        count = self.choose_count(width, height, density, rng)
        selected = rng.sample(self._pool, count)
        rng.shuffle(selected)

        placements: List[Placement] = []
        occupied: List[Span] = []
        for word in selected:
            placement = self._place(word, width, height, occupied, rng)
            if placement is not None:
                placements.append(placement)

        LOGGER.debug(
            "Placed %d of %d sampled words on a %dx%d canvas (density %.2f)",
            len(placements),
            count,
            width,
            height,
            density,
        )
        return placements

    def _place(
        self,
        word: str,
        width: int,
        height: int,
        occupied: List[Span],
        rng: random.Random,
    ) -> Placement | None:
        length = len(word)
        if length > width or height <= 0:
            LOGGER.debug("Dropping %r: does not fit a %dx%d canvas", word, width, height)
            return None

        source = self._sources.get(word)
        max_x = width - length
        for _ in range(self.max_attempts):
            x = rng.randint(0, max_x)
            y = rng.randrange(height)
            if not is_overlapping_tight(x, y, length, occupied, self.min_gap):
                occupied.append((x, y, length))
                return Placement(word=word, x=x, y=y, source=source)

        LOGGER.debug("Forcing %r after %d attempts", word, self.max_attempts)
        return Placement(
            word=word,
            x=rng.randint(0, max_x),
            y=rng.randrange(height),
            source=source,
            forced=True,
        )
