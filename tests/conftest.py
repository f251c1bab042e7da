# tests/conftest.py
import pytest

from boards import PUZZLE, SOLUTION
from sudoku_steps import Grid


@pytest.fixture
def solution_rows():
    return [row[:] for row in SOLUTION]


@pytest.fixture
def puzzle_grid():
    """Puzzle givens entered, ground truth known."""
    return Grid.from_rows(PUZZLE, actual=SOLUTION)


@pytest.fixture
def solved_grid():
    return Grid.from_rows(SOLUTION, actual=SOLUTION)
