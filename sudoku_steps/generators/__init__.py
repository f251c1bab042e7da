from .base import MAX_RETRIES, PuzzleGenerator, is_valid_solution, make_puzzle
from .backtracking import BacktrackingGenerator
from .propagation import PropagationGenerator
from .rules import (
    BASELINE_RULES,
    BlockRule,
    ColumnRule,
    KingRule,
    KnightRule,
    NonConsecutiveRule,
    PropagationRule,
    RowRule,
)

__all__ = [
    "MAX_RETRIES",
    "PuzzleGenerator",
    "BacktrackingGenerator",
    "PropagationGenerator",
    "is_valid_solution",
    "make_puzzle",
    "PropagationRule",
    "RowRule",
    "ColumnRule",
    "BlockRule",
    "KnightRule",
    "KingRule",
    "NonConsecutiveRule",
    "BASELINE_RULES",
]
