# rules.py

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, Iterator, Tuple

from ..grid import DIGITS, SIZE, Cell, Grid

Exclusion = Tuple[Cell, Tuple[int, ...]]


class PropagationRule(ABC):
    """
    A constraint the propagation generator enforces when a cell collapses.
    Subclasses list which other cells lose which digits.
    """

    @abstractmethod
    def exclusions(self, grid: Grid, cell: Cell, value: int) -> Iterator[Exclusion]:
        """Yield (other cell, digits it can no longer hold)."""
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class RowRule(PropagationRule):
    def exclusions(self, grid: Grid, cell: Cell, value: int) -> Iterator[Exclusion]:
        for other in grid.row(cell.y):
            if other is not cell:
                yield other, (value,)


class ColumnRule(PropagationRule):
    def exclusions(self, grid: Grid, cell: Cell, value: int) -> Iterator[Exclusion]:
        for other in grid.column(cell.x):
            if other is not cell:
                yield other, (value,)


class BlockRule(PropagationRule):
    def exclusions(self, grid: Grid, cell: Cell, value: int) -> Iterator[Exclusion]:
        for other in grid.block_of(cell):
            if other is not cell:
                yield other, (value,)


# --------------------------
# Variant rules (off by default)
# --------------------------


class _OffsetRule(PropagationRule):
    offsets: Tuple[Tuple[int, int], ...] = ()

    def _neighbours(self, grid: Grid, cell: Cell) -> Iterable[Cell]:
        for dx, dy in self.offsets:
            x, y = cell.x + dx, cell.y + dy
            if 0 <= x < SIZE and 0 <= y < SIZE:
                yield grid.get_cell(x, y)

    def exclusions(self, grid: Grid, cell: Cell, value: int) -> Iterator[Exclusion]:
        for other in self._neighbours(grid, cell):
            yield other, (value,)


class KnightRule(_OffsetRule):
    """Cells a chess knight's move apart cannot hold the same digit."""

    offsets = (
        (-2, -1), (-1, -2), (1, -2), (2, -1),
        (-2, 1), (-1, 2), (2, 1), (1, 2),
    )


class KingRule(_OffsetRule):
    """Cells a chess king's move apart cannot hold the same digit."""

    offsets = (
        (-1, -1), (0, -1), (1, -1),
        (-1, 0), (1, 0),
        (-1, 1), (0, 1), (1, 1),
    )


class NonConsecutiveRule(_OffsetRule):
    """Orthogonally adjacent cells cannot hold consecutive digits."""

    offsets = ((-1, 0), (1, 0), (0, 1), (0, -1))

    def exclusions(self, grid: Grid, cell: Cell, value: int) -> Iterator[Exclusion]:
        digits = tuple(d for d in (value - 1, value + 1) if d in DIGITS)
        for other in self._neighbours(grid, cell):
            yield other, digits


BASELINE_RULES: Tuple[PropagationRule, ...] = (RowRule(), ColumnRule(), BlockRule())


def satisfies(grid: Grid, rules: Iterable[PropagationRule]) -> bool:
    """True when every cell is set and no rule is broken by the actual values."""
    rules = tuple(rules)
    for cell in grid.cells():
        if cell.actual_value == 0:
            return False
        for rule in rules:
            for other, digits in rule.exclusions(grid, cell, cell.actual_value):
                if other.actual_value in digits:
                    return False
    return True
