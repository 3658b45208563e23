from __future__ import annotations

import random
from typing import List

from .generator import ScattersGenerator
from .models import Placement

MIN_DENSITY = 0.1
MAX_DENSITY = 6.0
DEFAULT_DENSITY = 1.0


def density_step(bar_width: int) -> float:
    """Density change for one cell of a density bar ``bar_width`` cells wide."""
    return (MAX_DENSITY - MIN_DENSITY) / max(bar_width, 1)


class ScatterSession:
    """State a renderer needs between frames: the current scatter, density and selection.

    Selection indices always point into ``placements``; re-rolling replaces
    the list and resets the selection to its first entry.
    """

    def __init__(
        self,
        generator: ScattersGenerator,
        density: float = DEFAULT_DENSITY,
        min_density: float = MIN_DENSITY,
        max_density: float = MAX_DENSITY,
    ) -> None:
        self.generator = generator
        self.min_density = min_density
        self.max_density = max_density
        self.density = min(max(density, min_density), max_density)
        self.placements: List[Placement] = []
        self.current_index: int | None = None
        self.visited: List[int] = []
        self.dimmed = False

    @property
    def current(self) -> Placement | None:
        if self.current_index is None:
            return None
        return self.placements[self.current_index]

    def reroll(self, width: int, height: int, rng: random.Random | None = None) -> List[Placement]:
        """Generate a new scatter at the current density and reset selection."""
        self.set_placements(self.generator.generate(width, height, self.density, rng))
        return self.placements

    def set_placements(self, placements: List[Placement]) -> None:
        self.placements = placements
        if placements:
            self.current_index = 0
            self.visited = [0]
        else:
            self.current_index = None
            self.visited = []

    def increase_density(self, bar_width: int) -> float:
        self.density = min(self.density + density_step(bar_width), self.max_density)
        return self.density

    def decrease_density(self, bar_width: int) -> float:
        self.density = max(self.density - density_step(bar_width), self.min_density)
        return self.density

    def select_next(self) -> int | None:
        if self.current_index is None:
            return None
        return self._select((self.current_index + 1) % len(self.placements))

    def select_previous(self) -> int | None:
        if self.current_index is None:
            return None
        return self._select((self.current_index - 1) % len(self.placements))

    def toggle_dimmed(self) -> bool:
        self.dimmed = not self.dimmed
        return self.dimmed

    def _select(self, index: int) -> int:
        self.current_index = index
        if index not in self.visited:
            self.visited.append(index)
        return index
