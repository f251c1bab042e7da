# insightful.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from .astar import AStarSolver, Guess, SearchNode


@dataclass
class InsightfulAStarSolver(AStarSolver):
    """
    A* solver that knows the actual value of each cell (from the
    generated grid itself). Every guess is the correct one.
    """

    def generate_guesses(self, node: SearchNode) -> Iterator[Guess]:
        for cell in node.state.cells():
            # already filled AND correct
            if cell.entered_value is not None and not cell.is_entered_value_wrong:
                continue
            # no ground truth to guess from
            if cell.actual_value == 0:
                continue
            yield cell.position, cell.actual_value
