# blind.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from ..grid import Grid
from ..techniques import candidates_for
from .astar import AStarSolver, Guess, SearchNode


@dataclass
class BlindAStarSolver(AStarSolver):
    """
    A* solver that makes no assumption about the actual values and
    works only off entered data.

    Without ground truth, a state counts as solved once every cell is
    filled and no row, column or block repeats a digit.
    """

    def is_goal(self, grid: Grid) -> bool:
        return grid.are_entered_values_valid()

    def generate_guesses(self, node: SearchNode) -> Iterator[Guess]:
        grid = node.state
        for cell in grid.cells():
            if not cell.is_empty:
                continue
            # every digit this cell COULD be
            for value in sorted(candidates_for(grid, cell)):
                yield cell.position, value
