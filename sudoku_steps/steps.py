# steps.py

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Tuple

from .grid import Cell, Grid, Pos


class StepKind(Enum):
    """Deduction rule behind a step, with its display name and description."""

    RANDOM_GUESS = (
        "Random guess",
        "Randomly guess the value",
    )
    LAST_IN_ROW = (
        "Last value in row",
        "There is only one empty cell remaining in the row so its value "
        "is the only one missing",
    )
    LAST_IN_COLUMN = (
        "Last value in column",
        "There is only one empty cell remaining in the column so its value "
        "is the only one missing",
    )
    LAST_IN_BLOCK = (
        "Last value in block",
        "There is only one empty cell remaining in the block so its value "
        "is the only one missing",
    )
    ONLY_CANDIDATE = (
        "Only candidate",
        "Each row, column, and block can only contain the numbers 1 to 9 "
        "exactly once, which leaves a single possible value for this cell",
    )
    SCANNING = (
        "Scanning",
        "The digit is already placed in the highlighted rows and columns, "
        "which leaves only one cell in the block where it can go",
    )
    SINGLE_ELIMINATION = (
        "Single elimination",
        "A digit confined to one line of a block (or one block of a line) "
        "cannot appear elsewhere on that line (or in that block), which "
        "leaves a single candidate for this cell",
    )

    @property
    def title(self) -> str:
        return self.value[0]

    @property
    def description(self) -> str:
        return self.value[1]


@dataclass(frozen=True)
class SolutionStep:
    """
    One placement towards the solution: ``value`` goes into ``cell``.
    ``hint_cells`` are the cells a presentation layer can highlight to
    explain the deduction.
    """

    kind: StepKind
    cell: Cell
    value: int
    hint_cells: Tuple[Cell, ...] = field(default=())

    @property
    def name(self) -> str:
        return self.kind.title

    @property
    def description(self) -> str:
        return self.kind.description

    @property
    def is_guess(self) -> bool:
        return self.kind is StepKind.RANDOM_GUESS

    @property
    def position(self) -> Pos:
        return self.cell.position

    @property
    def hint_positions(self) -> List[Pos]:
        return [c.position for c in self.hint_cells]

    def apply(self, grid: Grid) -> None:
        """Replay this step onto ``grid`` (matched by coordinates)."""
        grid.get_cell(self.cell.x, self.cell.y).entered_value = self.value

    def __str__(self) -> str:
        return f"{self.name}: {self.value} at {self.position}"


def make_step(
    kind: StepKind, cell: Cell, value: int, hints: Iterable[Cell] = ()
) -> SolutionStep:
    """Build a step, dropping repeated hint cells but keeping their order."""
    unique: List[Cell] = []
    seen = set()
    for hint in hints:
        if id(hint) not in seen:
            seen.add(id(hint))
            unique.append(hint)
    return SolutionStep(kind, cell, value, tuple(unique))
