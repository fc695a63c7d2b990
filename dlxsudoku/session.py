"""One puzzle being worked on: the grid, its history and the current hint."""

from __future__ import annotations
import logging
from typing import Optional, Tuple

from .core.cell import Cell
from .core.grid import PuzzleGrid
from .solvers import CheckResult, Solver, SudokuDLXSolver
from .steps import CandidateRemovalStep, History, Step, ValuePlacementStep

logger = logging.getLogger(__name__)


class PuzzleSession:
    """
    Owns a grid together with its undo/redo history and hint highlighting.

    Every change goes through a step, whether it comes from a technique or
    from the user, so everything can be undone.
    """

    def __init__(self, grid: PuzzleGrid, solver: Optional[Solver] = None,
                 checker: Optional[SudokuDLXSolver] = None):
        self.grid = grid
        self.solver = solver or Solver()
        self.checker = checker or SudokuDLXSolver()
        self.history = History()
        self.pending_step: Optional[Step] = None
        self.highlighted_cells: Tuple[Cell, ...] = ()
        self.supporting_cells: Tuple[Cell, ...] = ()

    def _clear_hint(self) -> None:
        self.pending_step = None
        self.highlighted_cells = ()
        self.supporting_cells = ()

    def apply(self, step: Step) -> Step:
        """Apply a step and record it."""
        step.apply()
        self.history.push(step)
        self._clear_hint()
        logger.debug("Applied %r", step)
        return step

    def undo(self) -> Optional[Step]:
        """Undo the last step, if any."""
        if not self.history.can_undo:
            return None
        self._clear_hint()
        return self.history.undo()

    def redo(self) -> Optional[Step]:
        """Redo the last undone step, if any."""
        if not self.history.can_redo:
            return None
        self._clear_hint()
        return self.history.redo()

    def place_value(self, cell: Cell, value: int) -> Step:
        """Enter a value as the user."""
        return self.apply(ValuePlacementStep(self.grid, cell, value))

    def remove_candidate(self, cell: Cell, value: int) -> Step:
        """Strike out a candidate as the user."""
        return self.apply(CandidateRemovalStep.for_value([cell], value))

    def hint(self, big: bool = False) -> Optional[str]:
        """
        Find the next deduction and highlight it without applying it.

        Args:
            big: Return the detailed hint instead of the technique name.

        Returns:
            The hint text, or None if no technique applies.
        """
        step = self.solver.get_next_step(self.grid)
        if step is None:
            self._clear_hint()
            return None
        self.pending_step = step
        self.highlighted_cells = step.changed_cells
        self.supporting_cells = step.explaining_cells
        return step.big_hint if big else step.small_hint

    def apply_hint(self) -> Optional[Step]:
        """Apply the highlighted hint, finding one first if needed."""
        step = self.pending_step or self.solver.get_next_step(self.grid)
        if step is None:
            return None
        return self.apply(step)

    def check(self, givens_only: bool = False) -> CheckResult:
        return self.checker.check(self.grid, givens_only)

    def replace_grid(self, grid: PuzzleGrid) -> None:
        """Start over with another puzzle."""
        self.grid = grid
        self.history.clear()
        self._clear_hint()
