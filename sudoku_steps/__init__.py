import logging

from sudoku_steps.exceptions import (
    Contradiction,
    InvalidGridError,
    NoSolutionFound,
    RetriesExhausted,
    SudokuError,
)
from sudoku_steps.grid import DIGITS, SIZE, Block, Cell, Grid
from sudoku_steps.steps import SolutionStep, StepKind
from sudoku_steps.generators import (
    BacktrackingGenerator,
    PropagationGenerator,
    PuzzleGenerator,
    make_puzzle,
)
from sudoku_steps.solvers import AStarSolver, BlindAStarSolver, InsightfulAStarSolver

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Cell",
    "Block",
    "Grid",
    "DIGITS",
    "SIZE",
    "SolutionStep",
    "StepKind",
    "PuzzleGenerator",
    "BacktrackingGenerator",
    "PropagationGenerator",
    "make_puzzle",
    "AStarSolver",
    "InsightfulAStarSolver",
    "BlindAStarSolver",
    "SudokuError",
    "InvalidGridError",
    "RetriesExhausted",
    "Contradiction",
    "NoSolutionFound",
]
