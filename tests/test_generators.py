# tests/test_generators.py
from random import Random

import pytest

from boards import SOLUTION
from sudoku_steps import (
    BacktrackingGenerator,
    Contradiction,
    Grid,
    InvalidGridError,
    PropagationGenerator,
    RetriesExhausted,
    make_puzzle,
)
from sudoku_steps.generators import (
    BASELINE_RULES,
    KingRule,
    KnightRule,
    NonConsecutiveRule,
    PuzzleGenerator,
    is_valid_solution,
)
from sudoku_steps.generators.rules import satisfies


def _generators():
    return [
        BacktrackingGenerator(seed=42),
        PropagationGenerator(seed=42, retries=500),
    ]


# --------------------------
# Generated grids
# --------------------------


@pytest.mark.parametrize("generator", _generators(), ids=lambda g: type(g).__name__)
def test_generated_grid_is_valid(generator):
    grid = generator.generate()
    assert is_valid_solution(grid)
    assert len(grid.empty_cells()) == 81

    grid.reveal_all()
    assert grid.is_solved()
    assert grid.are_entered_values_valid()


@pytest.mark.parametrize("cls", [BacktrackingGenerator, PropagationGenerator])
def test_same_seed_same_grid(cls):
    first = cls(seed=1234, retries=500).generate()
    second = cls(seed=1234, retries=500).generate()
    assert first.actual_rows() == second.actual_rows()


def test_repeated_generate_calls_are_reproducible():
    generator = BacktrackingGenerator(seed=99)
    assert generator.generate().actual_rows() == generator.generate().actual_rows()


def test_injected_rng_is_used():
    a = BacktrackingGenerator(rng=Random(5)).generate()
    b = BacktrackingGenerator(rng=Random(5)).generate()
    assert a.actual_rows() == b.actual_rows()


def test_retries_must_be_positive():
    with pytest.raises(AssertionError):
        BacktrackingGenerator(retries=0)


def test_retries_exhausted():
    class Failing(PuzzleGenerator):
        calls = 0

        def _attempt(self, rng):
            Failing.calls += 1
            return None

    with pytest.raises(RetriesExhausted) as info:
        Failing(retries=3).generate()
    assert info.value.attempts == 3
    assert info.value.generator == "Failing"
    assert Failing.calls == 3


def test_contradiction_is_retried_not_raised(monkeypatch):
    def always_contradict(self, grid, rng):
        raise Contradiction((0, 0))

    monkeypatch.setattr(PropagationGenerator, "collapse_next", always_contradict)
    with pytest.raises(RetriesExhausted) as info:
        PropagationGenerator(seed=0, retries=4).generate()
    assert info.value.attempts == 4


# --------------------------
# Backtracking fill
# --------------------------


def test_fill_completes_partial_grid():
    grid = Grid.from_rows([[0] * 9] * 9, actual=SOLUTION)
    for cell in grid.row(0):
        cell.actual_value = 0

    assert BacktrackingGenerator.fill(grid, Random(0))
    assert grid.actual_rows() == SOLUTION


def test_fill_reports_impossible_grid():
    grid = Grid()
    for x in range(1, 9):
        grid.get_cell(x, 0).actual_value = x
    grid.get_cell(0, 1).actual_value = 9

    assert not BacktrackingGenerator.fill(grid, Random(0))
    assert grid.get_cell(0, 0).actual_value == 0


# --------------------------
# Propagation
# --------------------------


def test_initialize_superposition():
    grid = Grid.from_rows(SOLUTION, actual=SOLUTION)
    PropagationGenerator.initialize_superposition(grid)
    for cell in grid:
        assert cell.actual_value == 0
        assert cell.is_empty
        assert cell.potential_values == set(range(1, 10))


def test_collapse_removes_value_from_related_cells():
    grid = Grid()
    generator = PropagationGenerator()
    generator.initialize_superposition(grid)
    cell = grid.get_cell(4, 4)
    generator.collapse(grid, cell, Random(3))

    value = cell.actual_value
    assert value in range(1, 10)
    assert not cell.potential_values
    for other in grid.peers(cell):
        assert value not in other.potential_values
    assert value in grid.get_cell(0, 0).potential_values


def test_collapse_next_returns_none_when_done():
    grid = Grid.from_rows([[0] * 9] * 9, actual=SOLUTION)
    assert PropagationGenerator().collapse_next(grid, Random(0)) is None


def test_collapse_next_raises_on_empty_candidates():
    grid = Grid()
    generator = PropagationGenerator()
    generator.initialize_superposition(grid)
    grid.get_cell(2, 2).potential_values = set()
    with pytest.raises(Contradiction) as info:
        generator.collapse_next(grid, Random(0))
    assert info.value.position == (2, 2)


def test_extra_rules_are_validated():
    solved = Grid.from_rows([[0] * 9] * 9, actual=SOLUTION)
    assert PropagationGenerator().validate(solved)
    # 3 and 4 sit next to each other in the first row
    assert not PropagationGenerator(extra_rules=(NonConsecutiveRule(),)).validate(solved)


# --------------------------
# Rules
# --------------------------


def test_baseline_rules_exclude_row_column_block():
    grid = Grid()
    cell = grid.get_cell(4, 4)
    touched = set()
    for rule in BASELINE_RULES:
        for other, digits in rule.exclusions(grid, cell, 7):
            assert digits == (7,)
            assert other is not cell
            touched.add(other.position)
    assert len(touched) == 20


def test_knight_rule_at_corner():
    grid = Grid()
    positions = {
        other.position
        for other, _ in KnightRule().exclusions(grid, grid.get_cell(0, 0), 5)
    }
    assert positions == {(1, 2), (2, 1)}


def test_king_rule_in_middle():
    grid = Grid()
    exclusions = list(KingRule().exclusions(grid, grid.get_cell(4, 4), 5))
    assert len(exclusions) == 8
    assert all(digits == (5,) for _, digits in exclusions)


@pytest.mark.parametrize("value, expected", [(1, (2,)), (5, (4, 6)), (9, (8,))])
def test_non_consecutive_rule(value, expected):
    grid = Grid()
    exclusions = list(NonConsecutiveRule().exclusions(grid, grid.get_cell(0, 0), value))
    assert {o.position for o, _ in exclusions} == {(1, 0), (0, 1)}
    assert all(digits == expected for _, digits in exclusions)


def test_satisfies():
    solved = Grid.from_rows([[0] * 9] * 9, actual=SOLUTION)
    assert satisfies(solved, BASELINE_RULES)
    assert not satisfies(solved, (NonConsecutiveRule(),))
    assert not satisfies(Grid(), BASELINE_RULES)


def test_is_valid_solution_rejects_duplicates():
    grid = Grid.from_rows([[0] * 9] * 9, actual=SOLUTION)
    assert is_valid_solution(grid)
    grid.get_cell(0, 0).actual_value = 3
    assert not is_valid_solution(grid)


# --------------------------
# Puzzles
# --------------------------


@pytest.fixture
def solved():
    return Grid.from_rows([[0] * 9] * 9, actual=SOLUTION)


@pytest.mark.parametrize("fraction, exposed", [(0.0, 0), (1 / 3, 27), (1.0, 81)])
def test_make_puzzle_exposes_fraction(solved, fraction, exposed):
    puzzle = make_puzzle(solved, fraction, seed=7)
    filled = [c for c in puzzle if not c.is_empty]
    assert len(filled) == exposed
    assert not any(c.is_entered_value_wrong for c in puzzle)
    assert puzzle.actual_rows() == SOLUTION
    # source untouched
    assert len(solved.empty_cells()) == 81


def test_make_puzzle_is_seeded(solved):
    a = make_puzzle(solved, 0.5, seed=3)
    b = make_puzzle(solved, 0.5, rng=Random(3))
    assert a.entered_key() == b.entered_key()


@pytest.mark.parametrize("fraction", [-0.1, 1.5])
def test_make_puzzle_rejects_bad_fraction(solved, fraction):
    with pytest.raises(InvalidGridError):
        make_puzzle(solved, fraction)


def test_make_puzzle_needs_solved_grid():
    with pytest.raises(InvalidGridError):
        make_puzzle(Grid(), 0.5)
