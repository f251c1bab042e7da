# techniques.py
#
# Human-style deductions. Every technique takes a grid, and either sets
# exactly one entered value and returns the step explaining it, or leaves
# the grid untouched and returns None.

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Sequence, Set, Tuple

from .grid import DIGITS, Cell, Grid, entered_digits
from .steps import SolutionStep, StepKind, make_step

logger = logging.getLogger(__name__)

Technique = Callable[[Grid], Optional[SolutionStep]]
Candidates = Dict[Cell, Set[int]]


def candidates_for(grid: Grid, cell: Cell) -> Set[int]:
    """Digits not yet entered in the row, column or block of ``cell``."""
    return set(DIGITS) - set(entered_digits(grid.peers(cell)))


class _Placed:
    """Snapshot of the digits entered in every row, column and block."""

    def __init__(self, grid: Grid) -> None:
        self.rows = [set(entered_digits(r)) for r in grid.rows()]
        self.columns = [set(entered_digits(c)) for c in grid.columns()]
        self.blocks = {
            (b.block_x, b.block_y): set(entered_digits(b)) for b in grid.blocks()
        }

    def candidates(self, cell: Cell) -> Set[int]:
        return set(DIGITS) - (
            self.rows[cell.y]
            | self.columns[cell.x]
            | self.blocks[cell.block_x, cell.block_y]
        )


# --------------------------
# Last value in a unit
# --------------------------


def _last_in_unit(
    units: Iterable[Sequence[Cell]], kind: StepKind
) -> Optional[SolutionStep]:
    for unit in units:
        unit = list(unit)
        empty = [c for c in unit if c.is_empty]
        missing = set(DIGITS) - set(entered_digits(unit))
        if len(empty) == 1 and len(missing) == 1:
            cell, value = empty[0], missing.pop()
            cell.entered_value = value
            return make_step(kind, cell, value, unit)
    return None


def last_in_row(grid: Grid) -> Optional[SolutionStep]:
    return _last_in_unit(grid.rows(), StepKind.LAST_IN_ROW)


def last_in_column(grid: Grid) -> Optional[SolutionStep]:
    return _last_in_unit(grid.columns(), StepKind.LAST_IN_COLUMN)


def last_in_block(grid: Grid) -> Optional[SolutionStep]:
    return _last_in_unit(grid.blocks(), StepKind.LAST_IN_BLOCK)


# --------------------------
# Basic techniques
# --------------------------


def only_candidate(grid: Grid) -> Optional[SolutionStep]:
    """
    First empty cell (row-major) whose row, column and block
    together rule out all digits but one.
    """
    placed = _Placed(grid)
    for cell in grid.cells():
        if not cell.is_empty:
            continue
        options = placed.candidates(cell)
        if len(options) == 1:
            value = options.pop()
            cell.entered_value = value
            hints = grid.row(cell.y) + grid.column(cell.x) + list(grid.block_of(cell))
            return make_step(StepKind.ONLY_CANDIDATE, cell, value, hints)
    return None


def scanning(grid: Grid) -> Optional[SolutionStep]:
    """
    For each digit missing from a block, cross out the block's empty
    cells whose row or column already holds that digit. A single
    survivor must take it.
    """
    placed = _Placed(grid)
    for block in grid.blocks():
        empty = [c for c in block if c.is_empty]
        if not empty:
            continue
        for digit in DIGITS:
            if digit in placed.blocks[block.block_x, block.block_y]:
                continue
            rows = [y for y in block.rows_spanned if digit in placed.rows[y]]
            cols = [x for x in block.columns_spanned if digit in placed.columns[x]]
            survivors = [c for c in empty if c.y not in rows and c.x not in cols]
            if len(survivors) != 1:
                continue

            cell = survivors[0]
            cell.entered_value = digit
            hints: List[Cell] = []
            for y in rows:
                hints.extend(grid.row(y))
            for x in cols:
                hints.extend(grid.column(x))
            return make_step(StepKind.SCANNING, cell, digit, hints)
    return None


# --------------------------
# Locked candidates
# --------------------------


def _locked_candidates(
    grid: Grid, candidates: Candidates
) -> Iterator[Tuple[int, List[Cell], List[Cell]]]:
    """
    Yield (digit, confining cells, cells the digit can be removed from).

    Reads ``candidates`` lazily, so eliminations applied by the caller
    between yields are seen by later checks.
    """
    # pointing: inside a block, the digit only fits on one line
    for block in grid.blocks():
        for digit in DIGITS:
            holders = [c for c in block if digit in candidates.get(c, ())]
            if not holders:
                continue
            rows = {c.y for c in holders}
            if len(rows) == 1:
                line = grid.row(rows.pop())
                yield digit, holders, [c for c in line if c not in block and c in candidates]
            cols = {c.x for c in holders}
            if len(cols) == 1:
                line = grid.column(cols.pop())
                yield digit, holders, [c for c in line if c not in block and c in candidates]

    # claiming: on a line, the digit only fits inside one block
    for line in list(grid.rows()) + list(grid.columns()):
        for digit in DIGITS:
            holders = [c for c in line if digit in candidates.get(c, ())]
            if not holders:
                continue
            if len({(c.block_x, c.block_y) for c in holders}) == 1:
                block = grid.block_of(holders[0])
                yield digit, holders, [c for c in block if c not in line and c in candidates]


def single_elimination(grid: Grid) -> Optional[SolutionStep]:
    """
    Recompute candidates from scratch, then remove digits with
    pointing / claiming logic until some cell is left with a single
    candidate.
    """
    placed = _Placed(grid)
    candidates: Candidates = {
        cell: placed.candidates(cell) for cell in grid.cells() if cell.is_empty
    }
    causes: Dict[Cell, List[Cell]] = defaultdict(list)

    progress = True
    while progress:
        progress = False
        for digit, holders, targets in _locked_candidates(grid, candidates):
            for target in targets:
                options = candidates[target]
                if digit not in options:
                    continue
                options.discard(digit)
                causes[target].extend(holders)
                progress = True
                if len(options) == 1:
                    value = next(iter(options))
                    target.entered_value = value
                    return make_step(
                        StepKind.SINGLE_ELIMINATION, target, value, causes[target]
                    )
    return None


# --------------------------
# Registries
# --------------------------

DEFAULT_TECHNIQUES: Tuple[Technique, ...] = (
    # last possible value scenarios
    last_in_row,
    last_in_column,
    last_in_block,
    # basic techniques
    scanning,
    only_candidate,
)

ALL_TECHNIQUES: Tuple[Technique, ...] = DEFAULT_TECHNIQUES + (single_elimination,)


def reduce(
    grid: Grid, techniques: Sequence[Technique] = DEFAULT_TECHNIQUES
) -> List[SolutionStep]:
    """
    Apply ``techniques`` until none fires, restarting from the first
    (highest priority) after every hit. Returns the applied steps in order.
    """
    steps: List[SolutionStep] = []
    while True:
        for technique in techniques:
            step = technique(grid)
            if step is not None:
                steps.append(step)
                break
        else:
            logger.debug("Reduced grid with %d steps", len(steps))
            return steps
