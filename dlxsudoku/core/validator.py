"""Validation utilities for puzzle grids."""

from __future__ import annotations
from typing import TYPE_CHECKING, List, Optional, Tuple

if TYPE_CHECKING:
    from .cell import Cell
    from .grid import PuzzleGrid
    from .house import House


def is_valid_placement(grid: PuzzleGrid, row: int, col: int, value: int) -> bool:
    """
    Check if placing a value at (row, col) is valid.

    Args:
        grid: The puzzle grid.
        row: Row index.
        col: Column index.
        value: Value to check (1 to grid.size).

    Returns:
        True if no buddy of the cell already holds the value.
    """
    if value < 1 or value > grid.size:
        return False

    cell = grid.cell_at(row, col)
    return all(
        not (buddy.contains_value and buddy.value == value)
        for buddy in grid.buddies(cell)
    )


def find_conflicts(grid: PuzzleGrid) -> List[Tuple[House, int, List[Cell]]]:
    """
    Find every house in which a value is held by more than one cell.

    Returns:
        A list of (house, value, cells) triples, in house order.
    """
    conflicts = []
    for house in grid.houses:
        seen = {}
        for cell in house.cells:
            if cell.contains_value:
                seen.setdefault(cell.value, []).append(cell)
        for value in sorted(seen):
            if len(seen[value]) > 1:
                conflicts.append((house, value, seen[value]))
    return conflicts


def is_valid_grid(grid: PuzzleGrid) -> bool:
    """
    Check if the current grid state is valid.
    Does not check if the solution is complete, only if no conflicts exist.
    """
    for house in grid.houses:
        values = house.values()
        if len(values) != len(set(values)):
            return False
    return True


def validate_solution(puzzle: PuzzleGrid, solution: PuzzleGrid) -> bool:
    """
    Validate that a solution correctly solves the puzzle.

    Args:
        puzzle: The original puzzle.
        solution: The proposed solution.

    Returns:
        True if solution is valid and matches the puzzle's givens and solved cells.
    """
    if puzzle.layout != solution.layout:
        return False

    for cell in puzzle.cells:
        if cell.contains_value and solution.get(cell.row, cell.column) != cell.value:
            return False

    return solution.is_solved()


def count_solutions(grid: PuzzleGrid, limit: Optional[int] = 2) -> int:
    """
    Count the solutions of a puzzle by exact cover search, stopping at ``limit``.

    Args:
        grid: The puzzle. Not modified.
        limit: Maximum number of solutions to look for, or None for all.

    Returns:
        Number of solutions found (at most ``limit``).
    """
    from ..solvers.dlx_solver import SudokuDLXSolver
    return SudokuDLXSolver().count_solutions(grid, limit)


def has_unique_solution(grid: PuzzleGrid) -> bool:
    """Check if the puzzle has exactly one solution."""
    return count_solutions(grid, limit=2) == 1
