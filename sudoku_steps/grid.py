# grid.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Sequence, Set, Tuple

from .exceptions import InvalidGridError

SIZE = 9
BLOCK_SIZE = 3
DIGITS: Tuple[int, ...] = tuple(range(1, SIZE + 1))

Pos = Tuple[int, int]
Board = List[List[int]]


# --------------------------
# Cells and blocks
# --------------------------


@dataclass(eq=False)
class Cell:
    """
    One square of the grid. ``x`` is the column and ``y`` the row.

    ``actual_value`` is the ground truth (0 = unset), ``entered_value``
    what has been placed so far, and ``potential_values`` is scratch
    space for propagation-based algorithms.
    """

    x: int
    y: int
    actual_value: int = 0
    entered_value: Optional[int] = None
    potential_values: Set[int] = field(default_factory=set, repr=False)

    @property
    def position(self) -> Pos:
        return (self.x, self.y)

    @property
    def block_x(self) -> int:
        return self.x // BLOCK_SIZE

    @property
    def block_y(self) -> int:
        return self.y // BLOCK_SIZE

    @property
    def is_empty(self) -> bool:
        return self.entered_value is None

    @property
    def is_entered_value_wrong(self) -> bool:
        return (
            self.entered_value is not None
            and self.entered_value != self.actual_value
        )


class Block:
    """
    A fixed 3x3 partition of the grid. Owns its cells and supports
    local indexing with ``block[lx, ly]``.
    """

    def __init__(self, block_x: int, block_y: int) -> None:
        self.block_x = block_x
        self.block_y = block_y
        self._cells: List[List[Cell]] = [
            [
                Cell(self.offset_x + lx, self.offset_y + ly)
                for lx in range(BLOCK_SIZE)
            ]
            for ly in range(BLOCK_SIZE)
        ]

    @property
    def offset_x(self) -> int:
        return self.block_x * BLOCK_SIZE

    @property
    def offset_y(self) -> int:
        return self.block_y * BLOCK_SIZE

    @property
    def columns_spanned(self) -> range:
        return range(self.offset_x, self.offset_x + BLOCK_SIZE)

    @property
    def rows_spanned(self) -> range:
        return range(self.offset_y, self.offset_y + BLOCK_SIZE)

    def __getitem__(self, local: Pos) -> Cell:
        lx, ly = local
        return self._cells[ly][lx]

    def __iter__(self) -> Iterator[Cell]:
        for row in self._cells:
            yield from row

    def __len__(self) -> int:
        return BLOCK_SIZE * BLOCK_SIZE

    def __contains__(self, cell: object) -> bool:
        return isinstance(cell, Cell) and (
            cell.block_x == self.block_x and cell.block_y == self.block_y
        )

    def __repr__(self) -> str:
        return f"Block(block_x={self.block_x}, block_y={self.block_y})"


def entered_digits(cells: Iterable[Cell]) -> List[int]:
    """Entered values of ``cells``, in order, skipping empty ones."""
    return [c.entered_value for c in cells if c.entered_value is not None]


def _has_duplicates(values: Sequence[int]) -> bool:
    return len(values) != len(set(values))


# --------------------------
# Grid
# --------------------------


class Grid:
    """
    9x9 Sudoku grid made of 9 blocks.

    Blocks own the cells. ``row(y)`` and ``column(x)`` hand out fresh
    lists of the grid's own cells, so writes through them land in the
    grid.
    """

    def __init__(self) -> None:
        self._blocks: List[List[Block]] = [
            [Block(bx, by) for bx in range(BLOCK_SIZE)]
            for by in range(BLOCK_SIZE)
        ]
        # coordinate index into the blocks' cells
        self._rows: List[List[Cell]] = [
            [
                self._blocks[y // BLOCK_SIZE][x // BLOCK_SIZE][x % BLOCK_SIZE, y % BLOCK_SIZE]
                for x in range(SIZE)
            ]
            for y in range(SIZE)
        ]
        self._columns: List[List[Cell]] = [
            [self._rows[y][x] for y in range(SIZE)] for x in range(SIZE)
        ]

    @classmethod
    def from_rows(
        cls,
        rows: Sequence[Sequence[Optional[int]]],
        actual: Optional[Sequence[Sequence[int]]] = None,
    ) -> "Grid":
        """
        Build a grid whose entered values come from ``rows``
        (0 or None = empty). ``actual`` optionally supplies the
        ground truth in the same layout.
        """
        _check_board(rows, allow_empty=True)
        if actual is not None:
            _check_board(actual, allow_empty=False)

        grid = cls()
        for y in range(SIZE):
            for x in range(SIZE):
                cell = grid.get_cell(x, y)
                v = rows[y][x]
                cell.entered_value = v if v else None
                if actual is not None:
                    cell.actual_value = actual[y][x]
        return grid

    # --------------------------
    # Lookup
    # --------------------------

    def get_block(self, bx: int, by: int) -> Block:
        if not (0 <= bx < BLOCK_SIZE and 0 <= by < BLOCK_SIZE):
            raise IndexError(f"Block ({bx}, {by}) is outside the grid")
        return self._blocks[by][bx]

    def get_cell(self, x: int, y: int) -> Cell:
        if not (0 <= x < SIZE and 0 <= y < SIZE):
            raise IndexError(f"Cell ({x}, {y}) is outside the grid")
        return self._rows[y][x]

    def block_of(self, cell: Cell) -> Block:
        return self._blocks[cell.block_y][cell.block_x]

    def row(self, y: int) -> List[Cell]:
        if not 0 <= y < SIZE:
            raise IndexError(f"Row {y} is outside the grid")
        return list(self._rows[y])

    def column(self, x: int) -> List[Cell]:
        if not 0 <= x < SIZE:
            raise IndexError(f"Column {x} is outside the grid")
        return list(self._columns[x])

    def peers(self, cell: Cell) -> List[Cell]:
        """Row, column and block of ``cell`` without ``cell`` itself."""
        out: List[Cell] = []
        seen = {id(cell)}
        for other in (
            self.row(cell.y) + self.column(cell.x) + list(self.block_of(cell))
        ):
            if id(other) not in seen:
                seen.add(id(other))
                out.append(other)
        return out

    # --------------------------
    # Enumeration
    # --------------------------

    def cells(self) -> Iterator[Cell]:
        """All cells, row-major."""
        for row in self._rows:
            yield from row

    def __iter__(self) -> Iterator[Cell]:
        return self.cells()

    def rows(self) -> Iterator[List[Cell]]:
        for y in range(SIZE):
            yield self.row(y)

    def columns(self) -> Iterator[List[Cell]]:
        for x in range(SIZE):
            yield self.column(x)

    def blocks(self) -> Iterator[Block]:
        for row in self._blocks:
            yield from row

    def empty_cells(self) -> List[Cell]:
        return [c for c in self.cells() if c.is_empty]

    # --------------------------
    # State checks
    # --------------------------

    def is_solved(self) -> bool:
        for cell in self.cells():
            if cell.entered_value is None or cell.is_entered_value_wrong:
                return False
        return True

    def are_entered_values_valid(self) -> bool:
        """
        True when no cell is empty and no row, column or block
        holds a digit twice.
        """
        if any(cell.is_empty for cell in self.cells()):
            return False
        for unit in self.units():
            if _has_duplicates(entered_digits(unit)):
                return False
        return True

    def units(self) -> Iterator[List[Cell]]:
        """Every row, then every column, then every block."""
        yield from self.rows()
        yield from self.columns()
        for block in self.blocks():
            yield list(block)

    # --------------------------
    # Copying / conversion
    # --------------------------

    def deep_copy(self) -> "Grid":
        """
        Independent copy carrying actual and entered values.
        Candidate sets are not copied.
        """
        other = Grid()
        for src, dst in zip(self.cells(), other.cells()):
            dst.actual_value = src.actual_value
            dst.entered_value = src.entered_value
        return other

    def reveal_all(self) -> None:
        for cell in self.cells():
            cell.entered_value = cell.actual_value or None

    def entered_key(self) -> Tuple[Optional[int], ...]:
        return tuple(cell.entered_value for cell in self.cells())

    def entered_rows(self) -> Board:
        return [[c.entered_value or 0 for c in row] for row in self.rows()]

    def actual_rows(self) -> Board:
        return [[c.actual_value for c in row] for row in self.rows()]

    def __str__(self) -> str:
        return "\n".join(
            " ".join(str(v or ".") for v in row) for row in self.entered_rows()
        )


def _check_board(rows: Sequence[Sequence[Optional[int]]], allow_empty: bool) -> None:
    if len(rows) != SIZE or any(len(row) != SIZE for row in rows):
        raise InvalidGridError("Board must be 9 rows of 9 values")
    low = 0 if allow_empty else 1
    for y, row in enumerate(rows):
        for x, v in enumerate(row):
            if v is None and allow_empty:
                continue
            if not isinstance(v, int) or isinstance(v, bool) or not low <= v <= SIZE:
                raise InvalidGridError(f"Invalid value {v!r} at ({x}, {y})")
