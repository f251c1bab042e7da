# propagation.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from random import Random
from typing import List, Optional, Tuple

from ..exceptions import Contradiction
from ..grid import DIGITS, SIZE, Cell, Grid
from .base import PuzzleGenerator
from .rules import BASELINE_RULES, PropagationRule, satisfies

logger = logging.getLogger(__name__)


@dataclass
class PropagationGenerator(PuzzleGenerator):
    """
    Wavefunction-collapse style generator.

    Every cell starts in superposition over 1..9. The cell with the
    fewest candidates is collapsed to a random candidate and the choice
    is propagated to related cells; cells left with one candidate
    collapse in turn. An emptied candidate set aborts the attempt.

    ``extra_rules`` adds variant constraints (see ``rules.py``) on top of
    the row/column/block baseline.
    """

    extra_rules: Tuple[PropagationRule, ...] = ()

    @property
    def rules(self) -> Tuple[PropagationRule, ...]:
        return BASELINE_RULES + tuple(self.extra_rules)

    def _attempt(self, rng: Random) -> Optional[Grid]:
        grid = Grid()
        self.initialize_superposition(grid)
        try:
            for _ in range(SIZE * SIZE):
                if self.collapse_next(grid, rng) is None:
                    break
        except Contradiction as exc:
            logger.debug("Contradiction, starting over: %s", exc)
            return None
        return grid

    def validate(self, grid: Grid) -> bool:
        return super().validate(grid) and satisfies(grid, self.extra_rules)

    # --------------------------
    # Collapse / propagate
    # --------------------------

    @staticmethod
    def initialize_superposition(grid: Grid) -> None:
        for cell in grid.cells():
            cell.actual_value = 0
            cell.entered_value = None
            cell.potential_values = set(DIGITS)

    def collapse_next(self, grid: Grid, rng: Random) -> Optional[Cell]:
        """
        Collapse a random cell among those with the fewest candidates.
        Returns None once every cell is collapsed.
        """
        uncollapsed = [c for c in grid.cells() if c.actual_value == 0]
        if not uncollapsed:
            return None

        fewest = min(len(c.potential_values) for c in uncollapsed)
        group: List[Cell] = [c for c in uncollapsed if len(c.potential_values) == fewest]
        cell = rng.choice(group)
        if not cell.potential_values:
            raise Contradiction(cell.position)
        self.collapse(grid, cell, rng)
        return cell

    def collapse(self, grid: Grid, cell: Cell, rng: Random) -> None:
        value = rng.choice(sorted(cell.potential_values))
        cell.actual_value = value
        cell.potential_values.clear()
        self._propagate(grid, cell, value, rng)

    def _propagate(self, grid: Grid, cell: Cell, value: int, rng: Random) -> None:
        for rule in self.rules:
            singletons: List[Cell] = []
            for other, digits in rule.exclusions(grid, cell, value):
                if other.actual_value != 0:
                    # already collapsed by an earlier cascade
                    if other.actual_value in digits:
                        raise Contradiction(other.position)
                    continue
                other.potential_values.difference_update(digits)
                if not other.potential_values:
                    raise Contradiction(other.position)
                if len(other.potential_values) == 1:
                    singletons.append(other)

            for other in singletons:
                if other.actual_value == 0 and len(other.potential_values) == 1:
                    self.collapse(grid, other, rng)
