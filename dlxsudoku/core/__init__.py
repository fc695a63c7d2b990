"""Core module for puzzle grid, cell and candidate representation."""

from .candidates import CandidateSet
from .cell import Cell, CellState
from .house import House, HouseKind
from .grid import PuzzleGrid, GridLayout, CHARACTERS
from .validator import (
    count_solutions,
    find_conflicts,
    has_unique_solution,
    is_valid_grid,
    is_valid_placement,
    validate_solution,
)

__all__ = [
    "CandidateSet",
    "Cell",
    "CellState",
    "House",
    "HouseKind",
    "PuzzleGrid",
    "GridLayout",
    "CHARACTERS",
    "count_solutions",
    "find_conflicts",
    "has_unique_solution",
    "is_valid_grid",
    "is_valid_placement",
    "validate_solution",
]
