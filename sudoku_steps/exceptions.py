# exceptions.py

from typing import Optional, Tuple


class SudokuError(Exception):
    pass


class InvalidGridError(SudokuError, ValueError):
    pass


class RetriesExhausted(SudokuError):
    """
    A generator could not produce a valid, complete grid
    within its retry budget.
    """

    def __init__(self, generator: str, attempts: int) -> None:
        super().__init__(
            f"{generator} gave up after {attempts} attempts"
        )
        self.generator = generator
        self.attempts = attempts


class Contradiction(SudokuError):
    """
    Propagation left an uncollapsed cell with no candidates.
    Only raised inside an attempt; the generator retries on it.
    """

    def __init__(self, position: Optional[Tuple[int, int]] = None) -> None:
        msg = "Candidate set emptied"
        if position is not None:
            msg += f" at {position}"
        super().__init__(msg)
        self.position = position


class NoSolutionFound(SudokuError):
    def __init__(self, expanded: int) -> None:
        super().__init__(
            "No solution found for puzzle after expanding "
            f"{expanded} states. Maybe there is a technique that "
            "is not known yet."
        )
        self.expanded = expanded
