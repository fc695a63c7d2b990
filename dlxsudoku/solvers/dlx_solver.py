"""Dancing Links solver and validity checker using Knuth's Algorithm X."""

from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

import numpy as np

from .base_solver import BaseSolver
from ..core.cell import CellState
from ..core.grid import PuzzleGrid
from ..core.validator import find_conflicts
from ..dlx import ExactCoverMatrix

logger = logging.getLogger(__name__)

# Marks "use the solver's own limit" so that None can mean no limit.
_SOLVER_LIMIT = object()


class Validity(Enum):
    """How many solutions a puzzle has."""
    NO_SOLUTION = "none"
    UNIQUE = "unique"
    MULTIPLE = "multiple"


@dataclass
class CheckResult:
    """Outcome of checking a puzzle."""
    validity: Validity
    # Values of the only solution as a size x size array, when there is one.
    solution: Optional[np.ndarray] = None
    # The solved cells agree with the solution and the unsolved ones still allow it.
    consistent: bool = False

    @property
    def is_valid(self) -> bool:
        return self.validity == Validity.UNIQUE


class SolutionRecorder:
    """Keeps the first cover found and stops the search after ``limit`` covers."""

    def __init__(self, matrix: ExactCoverMatrix, limit: Optional[int] = 2):
        self.matrix = matrix
        self.limit = limit
        self.count = 0
        self.first: Optional[List[int]] = None

    def solution_found(self, rows: List[int]) -> bool:
        self.count += 1
        if self.first is None:
            self.first = [self.matrix.payload_of(node) for node in rows]
        return self.limit is not None and self.count >= self.limit


class SudokuDLXSolver(BaseSolver):
    """
    Solves and checks puzzles by reduction to exact cover.

    Every possible (cell, value) placement is a row of the matrix, covering
    four columns:

    - the cell is filled (size * size columns),
    - the row has the value (size * size columns),
    - the column has the value (size * size columns),
    - the block has the value (size * size columns),

    plus one column per diagonal and value for X-sudoku. A placement's
    payload is ``cell_index * size + (value - 1)``.
    """

    name = "Dancing Links (DLX)"

    def __init__(self, limit: int = 2):
        super().__init__()
        self.limit = limit

    def build_matrix(self, grid: PuzzleGrid) -> ExactCoverMatrix:
        """
        Build the exact cover matrix for a puzzle.

        Cells with a value get a single row. Empty cells get a row for each
        value not already placed in one of their houses.
        """
        size = grid.size
        area = size * size
        num_columns = 4 * area
        if grid.layout.diagonals:
            num_columns += 2 * size
        matrix = ExactCoverMatrix(num_columns)

        for cell in grid.cells:
            if cell.contains_value:
                values = [cell.value]
            else:
                values = list(grid.calculate_candidates(cell))

            for value in values:
                d = value - 1
                columns = [
                    cell.index,
                    area + cell.row * size + d,
                    2 * area + cell.column * size + d,
                    3 * area + cell.block_index * size + d,
                ]
                if grid.layout.diagonals:
                    if cell.row == cell.column:
                        columns.append(4 * area + d)
                    if cell.row + cell.column == size - 1:
                        columns.append(4 * area + size + d)
                matrix.add_row(columns, cell.index * size + d)

        logger.debug("Built exact cover matrix: %d columns, %d rows", num_columns, matrix.num_rows)
        return matrix

    def _search(self, grid: PuzzleGrid, limit: Optional[int]) -> SolutionRecorder:
        matrix = self.build_matrix(grid)
        recorder = SolutionRecorder(matrix, limit)
        stats = matrix.search(recorder)
        self.stats.nodes_explored += stats.nodes
        self.stats.solutions = recorder.count
        return recorder

    def _decode(self, grid: PuzzleGrid, payloads: List[int]) -> np.ndarray:
        size = grid.size
        values = np.zeros(size * size, dtype=np.int32)
        for payload in payloads:
            values[payload // size] = payload % size + 1
        return values.reshape(size, size)

    def count_solutions(self, grid: PuzzleGrid, limit=_SOLVER_LIMIT) -> int:
        """
        Count the solutions of a puzzle, stopping at ``limit``.

        Args:
            grid: The puzzle. Not modified.
            limit: Stop counting here. Defaults to the solver's limit; None counts all.

        Returns:
            The number of solutions found, at most ``limit``.
        """
        if limit is _SOLVER_LIMIT:
            limit = self.limit
        if find_conflicts(grid):
            return 0
        return self._search(grid, limit).count

    def check(self, grid: PuzzleGrid, givens_only: bool = False) -> CheckResult:
        """
        Decide whether a puzzle has no solution, exactly one or several.

        Args:
            grid: The puzzle. Not modified.
            givens_only: Ignore the solved cells and check the puzzle as given.

        Returns:
            The validity, plus the solution and a consistency check of the
            current grid against it when the solution is unique.
        """
        puzzle = PuzzleGrid.from_string(grid.original_puzzle(), grid.layout) if givens_only else grid
        if find_conflicts(puzzle):
            logger.info("Puzzle has conflicting values")
            return CheckResult(Validity.NO_SOLUTION)

        recorder = self._search(puzzle, 2)
        if recorder.count == 0:
            return CheckResult(Validity.NO_SOLUTION)
        if recorder.count > 1:
            return CheckResult(Validity.MULTIPLE)

        solution = self._decode(puzzle, recorder.first)
        return CheckResult(Validity.UNIQUE, solution, self._is_consistent(grid, solution))

    @staticmethod
    def _is_consistent(grid: PuzzleGrid, solution: np.ndarray) -> bool:
        flat = solution.ravel()
        for cell in grid.cells:
            expected = int(flat[cell.index])
            if cell.state == CellState.SOLVED and cell.value != expected:
                return False
            if cell.state == CellState.UNSOLVED and expected not in cell.candidates:
                return False
        return True

    def _solve(self, grid: PuzzleGrid) -> Optional[PuzzleGrid]:
        """Solve using Dancing Links."""
        self.stats.nodes_explored = 0
        if find_conflicts(grid):
            return None

        recorder = self._search(grid, 1)
        if recorder.first is None:
            return None

        flat = self._decode(grid, recorder.first).ravel()
        for cell in grid.cells:
            if cell.state == CellState.UNSOLVED:
                grid.place_value(cell, int(flat[cell.index]))
        return grid
