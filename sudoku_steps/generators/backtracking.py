# backtracking.py

from __future__ import annotations

from dataclasses import dataclass
from random import Random
from typing import List, Optional, Tuple

from ..grid import DIGITS, Cell, Grid
from .base import PuzzleGenerator


def _next_empty(grid: Grid) -> Optional[Cell]:
    for cell in grid.cells():
        if cell.actual_value == 0:
            return cell
    return None


def _fits(grid: Grid, cell: Cell, value: int) -> bool:
    """Row first, then column, then block."""
    return (
        all(c.actual_value != value for c in grid.row(cell.y))
        and all(c.actual_value != value for c in grid.column(cell.x))
        and all(c.actual_value != value for c in grid.block_of(cell))
    )


@dataclass
class BacktrackingGenerator(PuzzleGenerator):
    """
    Randomized depth-first fill.

    Keeps an explicit stack of (cell, untried digits) frames instead of
    recursing. When a frame runs out of digits its cell is cleared and
    the previous frame tries its next digit.
    """

    def _attempt(self, rng: Random) -> Optional[Grid]:
        grid = Grid()
        if self.fill(grid, rng):
            return grid
        return None

    @staticmethod
    def fill(grid: Grid, rng: Random) -> bool:
        """Fill every unset actual value of ``grid``. False if impossible."""
        cell = _next_empty(grid)
        if cell is None:
            return True

        stack: List[Tuple[Cell, List[int]]] = [(cell, _shuffled(rng))]
        while stack:
            cell, options = stack[-1]
            cell.actual_value = 0
            while options:
                value = options.pop()
                if _fits(grid, cell, value):
                    cell.actual_value = value
                    break

            if cell.actual_value == 0:
                # exhausted, backtrack
                stack.pop()
                continue

            nxt = _next_empty(grid)
            if nxt is None:
                return True
            stack.append((nxt, _shuffled(rng)))

        return False


def _shuffled(rng: Random) -> List[int]:
    options = list(DIGITS)
    rng.shuffle(options)
    return options
