"""Reversible steps toward the solution of a puzzle."""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from ..core.candidates import CandidateSet
from ..core.cell import Cell, CellState
from ..core.errors import StepConflictError

if TYPE_CHECKING:
    from ..core.grid import PuzzleGrid


class Step(ABC):
    """
    One reversible change to a grid: a value placement or candidate removals.

    Besides its own reversal logic a step carries purely descriptive data
    for hints: the cells it changes, the cells whose state justifies it, and
    short and long hint text.
    """

    def __init__(self, technique: str = "", small_hint: str = "", big_hint: str = ""):
        self.technique = technique
        self.small_hint = small_hint
        self.big_hint = big_hint
        # dicts used as ordered sets
        self._changed: Dict[Cell, None] = {}
        self._explaining: Dict[Cell, None] = {}

    @property
    def changed_cells(self) -> Tuple[Cell, ...]:
        return tuple(self._changed)

    @property
    def explaining_cells(self) -> Tuple[Cell, ...]:
        return tuple(self._explaining)

    def add_changed_cell(self, cell: Cell) -> None:
        self._changed[cell] = None

    def add_explaining_cell(self, cell: Cell) -> None:
        self._explaining[cell] = None

    def add_explaining_cells(self, cells: Iterable[Cell]) -> None:
        for cell in cells:
            self._explaining[cell] = None

    def apply(self) -> None:
        """Perform the step for the first time."""
        self.redo()

    @abstractmethod
    def redo(self) -> None:
        """Perform the change on the grid."""

    @abstractmethod
    def undo(self) -> None:
        """Reverse the change, restoring the grid exactly."""

    def __repr__(self) -> str:
        cells = ", ".join(cell.label for cell in self._changed)
        return f"{type(self).__name__}({self.technique or 'user'}: {cells})"


class ValuePlacementStep(Step):
    """A step that puts a value into an unsolved cell."""

    def __init__(
        self,
        grid: PuzzleGrid,
        cell: Cell,
        value: int,
        technique: str = "",
        small_hint: str = "",
        big_hint: str = "",
    ):
        super().__init__(technique, small_hint, big_hint)
        self.grid = grid
        self.cell = cell
        self.value = value
        self.add_changed_cell(cell)
        self._previous_candidates: Optional[CandidateSet] = None
        self._touched: List[Cell] = []

    def redo(self) -> None:
        cell = self.cell
        if cell.state != CellState.UNSOLVED:
            raise StepConflictError(f"Cannot place {self.value} in {cell.label}: cell is {cell.state.value}")
        self._previous_candidates = cell.candidates
        self._touched = self.grid.place_value(cell, self.value)

    def undo(self) -> None:
        cell = self.cell
        if cell.state != CellState.SOLVED or cell.value != self.value:
            raise StepConflictError(f"Cannot undo placement of {self.value} in {cell!r}")
        cell.clear()
        cell.candidates = self._previous_candidates
        # Only the buddies that lost the value get it back.
        for buddy in self._touched:
            buddy.add_candidate(self.value)
        self._touched = []


class CandidateRemovalStep(Step):
    """
    A step that removes candidates from one or more cells.

    ``removals`` maps each changed cell to the candidates taken from it. Most
    techniques remove a single value; hidden subsets remove everything except
    the subset values.
    """

    def __init__(
        self,
        removals: Mapping[Cell, Union[CandidateSet, int]],
        technique: str = "",
        small_hint: str = "",
        big_hint: str = "",
    ):
        super().__init__(technique, small_hint, big_hint)
        self.removals: Dict[Cell, CandidateSet] = {}
        for cell in sorted(removals, key=lambda c: c.index):
            removed = removals[cell]
            if isinstance(removed, int):
                removed = CandidateSet.of(removed)
            self.removals[cell] = removed
            self.add_changed_cell(cell)

    @classmethod
    def for_value(
        cls,
        cells: Iterable[Cell],
        value: int,
        technique: str = "",
        small_hint: str = "",
        big_hint: str = "",
    ) -> CandidateRemovalStep:
        """Remove the same single value from every cell."""
        removed = CandidateSet.of(value)
        return cls({cell: removed for cell in cells}, technique, small_hint, big_hint)

    @property
    def value(self) -> Optional[int]:
        """The removed value when every cell loses the same single value, else None."""
        removed = set(self.removals.values())
        if len(removed) == 1:
            only = removed.pop()
            if len(only) == 1:
                return only.first()
        return None

    def redo(self) -> None:
        for cell, removed in self.removals.items():
            if cell.state != CellState.UNSOLVED or not removed.issubset(cell.candidates):
                raise StepConflictError(
                    f"Cannot remove {sorted(removed)} from {cell!r}"
                )
        for cell, removed in self.removals.items():
            cell.candidates = cell.candidates - removed

    def undo(self) -> None:
        for cell, removed in self.removals.items():
            if cell.state != CellState.UNSOLVED:
                raise StepConflictError(f"Cannot restore candidates of {cell!r}")
        for cell, removed in self.removals.items():
            cell.candidates = cell.candidates | removed
