# base.py

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from random import Random, randrange
from typing import Optional

from ..exceptions import InvalidGridError, RetriesExhausted
from ..grid import Grid

logger = logging.getLogger(__name__)

MAX_RETRIES = 50


def is_valid_solution(grid: Grid) -> bool:
    """
    Re-check a generated grid from scratch: every cell has an actual
    value and no row, column or block repeats one.
    """
    for cell in grid.cells():
        if cell.actual_value == 0:
            logger.debug("Cell %s has no value", cell.position)
            return False
    for unit in grid.units():
        values = [c.actual_value for c in unit]
        if len(set(values)) != len(values):
            logger.debug("Duplicate value in unit starting at %s", unit[0].position)
            return False
    return True


@dataclass
class PuzzleGenerator(ABC):
    """
    Base for generators that fill the actual values of a fresh grid.

    ``generate()`` retries whole attempts up to ``retries`` times.
    Randomness comes from ``rng`` when given, otherwise from a
    ``Random(seed)`` created per call, so repeated calls with the same
    seed return the same grid.
    """

    retries: int = MAX_RETRIES
    seed: int = field(default_factory=lambda: randrange(2**31 - 1))
    rng: Optional[Random] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        assert self.retries > 0, "Retries cannot be less than 1"

    def generate(self) -> Grid:
        rng = self.rng if self.rng is not None else Random(self.seed)
        name = type(self).__name__

        for attempt in range(1, self.retries + 1):
            grid = self._attempt(rng)
            if grid is not None and self.validate(grid):
                logger.info("%s generated in %d tries", name, attempt)
                return grid
            logger.debug("%s attempt %d failed", name, attempt)

        logger.warning("%s hit the maximum of %d retries", name, self.retries)
        raise RetriesExhausted(name, self.retries)

    def validate(self, grid: Grid) -> bool:
        return is_valid_solution(grid)

    @abstractmethod
    def _attempt(self, rng: Random) -> Optional[Grid]:
        """Fill one fresh grid. None means the attempt failed."""
        ...


def make_puzzle(
    solved: Grid,
    exposed_fraction: float,
    rng: Optional[Random] = None,
    seed: Optional[int] = None,
) -> Grid:
    """
    Copy a solved grid and reveal a random share of its cells.

    exposed_fraction: 0 <= exposed_fraction <= 1 (fraction of cells whose
    actual value is copied into the entered value; the rest stay empty)
    """
    if not 0.0 <= exposed_fraction <= 1.0:
        raise InvalidGridError("Exposed fraction must be between 0 and 1")
    if any(cell.actual_value == 0 for cell in solved.cells()):
        raise InvalidGridError("Puzzle can only be made from a solved grid")

    if rng is None:
        rng = Random(seed)

    puzzle = solved.deep_copy()
    cells = list(puzzle.cells())
    for cell in cells:
        cell.entered_value = None

    indices = list(range(len(cells)))
    rng.shuffle(indices)
    target = round(exposed_fraction * len(cells))
    for idx in indices[:target]:
        cells[idx].entered_value = cells[idx].actual_value
    return puzzle
