from .astar import AStarSolver, SearchNode, SearchTree
from .blind import BlindAStarSolver
from .insightful import InsightfulAStarSolver

__all__ = [
    "AStarSolver",
    "SearchNode",
    "SearchTree",
    "InsightfulAStarSolver",
    "BlindAStarSolver",
]
