# astar.py

from __future__ import annotations

import heapq
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from itertools import count
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from ..exceptions import NoSolutionFound
from ..grid import Grid, Pos
from ..steps import SolutionStep, StepKind, make_step
from ..techniques import DEFAULT_TECHNIQUES, Technique, reduce

logger = logging.getLogger(__name__)

Guess = Tuple[Pos, int]
StateKey = Tuple[Optional[int], ...]


# --------------------------
# Search tree
# --------------------------


@dataclass
class SearchNode:
    """
    A grid snapshot after all known reductions were applied.

    ``parent`` is the index of the parent node in its ``SearchTree``.
    """

    state: Grid
    reductions: List[SolutionStep]
    g: int = 0
    h: int = 0
    parent: Optional[int] = None
    step_from_parent: Optional[SolutionStep] = field(default=None, repr=False)

    @property
    def f(self) -> int:
        return self.g + self.h

    @property
    def key(self) -> StateKey:
        # equal iff every cell holds the same entered value
        return self.state.entered_key()


class SearchTree:
    """All nodes created by one search, parents referenced by index."""

    def __init__(self) -> None:
        self.nodes: List[SearchNode] = []

    def add(self, node: SearchNode) -> int:
        self.nodes.append(node)
        return len(self.nodes) - 1

    def __getitem__(self, index: int) -> SearchNode:
        return self.nodes[index]

    def __len__(self) -> int:
        return len(self.nodes)

    def path_to(self, index: int) -> Iterator[SolutionStep]:
        """
        Steps from the root down to ``index``: each node's guess
        followed by its reductions.
        """
        chain: List[SearchNode] = []
        current: Optional[int] = index
        while current is not None:
            node = self.nodes[current]
            chain.append(node)
            current = node.parent

        for node in reversed(chain):
            if node.step_from_parent is not None:
                yield node.step_from_parent
            yield from node.reductions


# --------------------------
# Solver
# --------------------------


@dataclass
class AStarSolver(ABC):
    """
    Best-first search over "apply every known deduction, then guess"
    states, ordered by f = g + h where g is the number of guesses and h
    the number of empty cells.

    Subclasses decide which guesses to branch on.
    """

    techniques: Sequence[Technique] = DEFAULT_TECHNIQUES

    def solve(self, grid: Grid) -> Iterator[SolutionStep]:
        """
        Steps that take ``grid`` from its current state to the solution.
        The returned iterator is single-use. Raises NoSolutionFound if
        the search runs dry.
        """
        tree = SearchTree()
        start = tree.add(self.make_node(grid))
        goal = self._search(tree, start)
        return tree.path_to(goal)

    def make_node(
        self,
        grid: Grid,
        guess: Optional[Guess] = None,
        parent: Optional[SearchNode] = None,
        parent_index: Optional[int] = None,
    ) -> SearchNode:
        state = grid.deep_copy()
        step = None
        if guess is not None:
            (x, y), value = guess
            cell = state.get_cell(x, y)
            cell.entered_value = value
            step = make_step(StepKind.RANDOM_GUESS, cell, value)

        reductions = reduce(state, self.techniques)
        return SearchNode(
            state=state,
            reductions=reductions,
            g=parent.g + 1 if parent is not None else 0,
            h=self.heuristic(state),
            parent=parent_index,
            step_from_parent=step,
        )

    def heuristic(self, grid: Grid) -> int:
        # number of empty cells is the "distance from the goal"
        return sum(1 for cell in grid.cells() if cell.is_empty)

    def is_goal(self, grid: Grid) -> bool:
        return grid.is_solved()

    @abstractmethod
    def generate_guesses(self, node: SearchNode) -> Iterator[Guess]:
        """Guesses worth branching on from ``node``."""
        ...

    # https://en.wikipedia.org/wiki/A*_search_algorithm
    def _search(self, tree: SearchTree, start: int) -> int:
        root = tree[start]
        if self.is_goal(root.state):
            return start

        order = count()
        open_heap: List[Tuple[int, int, int, int]] = [(root.f, root.h, next(order), start)]
        # best f recorded for every state seen so far
        visited: Dict[StateKey, int] = {root.key: root.f}
        expanded = 0

        while open_heap:
            f, _, _, index = heapq.heappop(open_heap)
            current = tree[index]
            if f > visited[current.key]:
                # a better path to this state was queued after this one
                continue
            if self.is_goal(current.state):
                logger.debug(
                    "Solved after expanding %d of %d states, %d guesses deep",
                    expanded, len(tree), current.g,
                )
                return index

            expanded += 1
            for guess in self.generate_guesses(current):
                neighbour = self.make_node(current.state, guess, current, index)
                key = neighbour.key
                if key in visited and visited[key] <= neighbour.f:
                    continue
                visited[key] = neighbour.f
                heapq.heappush(
                    open_heap,
                    (neighbour.f, neighbour.h, next(order), tree.add(neighbour)),
                )

        logger.debug("Search exhausted after expanding %d states", expanded)
        raise NoSolutionFound(expanded)
