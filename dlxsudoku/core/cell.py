"""A single cell of a puzzle grid."""

from __future__ import annotations
from enum import Enum

from .candidates import CandidateSet


class CellState(Enum):
    """Lifecycle states of a cell."""
    UNASSIGNED = "unassigned"   # not yet part of a complete house topology
    GIVEN = "given"
    UNSOLVED = "unsolved"
    SOLVED = "solved"


class Cell:
    """
    One square of a puzzle grid.

    Cells are created once by the grid and mutated in place by steps.
    Identity matters: steps and houses hold references to the same objects,
    so cells compare and hash by identity.
    """

    __slots__ = ["row", "column", "index", "block_index", "state", "value", "candidates"]

    def __init__(self, row: int, column: int, index: int, block_index: int):
        self.row = row
        self.column = column
        self.index = index
        self.block_index = block_index
        self.state = CellState.UNASSIGNED
        self.value = 0
        self.candidates = CandidateSet()

    @property
    def label(self) -> str:
        """1-based row/column label such as ``r3c5``."""
        return f"r{self.row + 1}c{self.column + 1}"

    @property
    def contains_value(self) -> bool:
        return self.state in (CellState.GIVEN, CellState.SOLVED)

    @property
    def is_unsolved(self) -> bool:
        return self.state == CellState.UNSOLVED

    def has_candidate(self, value: int) -> bool:
        return value in self.candidates

    def add_candidate(self, value: int) -> None:
        self.candidates = self.candidates.with_value(value)

    def remove_candidate(self, value: int) -> None:
        self.candidates = self.candidates.without(value)

    def place(self, value: int, state: CellState = CellState.SOLVED) -> None:
        """Fill the cell. Placed cells never carry candidates."""
        self.state = state
        self.value = value
        self.candidates = CandidateSet()

    def clear(self) -> None:
        """Empty the cell. The caller is responsible for recomputing candidates."""
        self.state = CellState.UNSOLVED
        self.value = 0
        self.candidates = CandidateSet()

    def snapshot(self) -> tuple:
        """The (state, value, candidates) triple, for comparing before/after states."""
        return (self.state, self.value, self.candidates)

    def __repr__(self) -> str:
        if self.contains_value:
            return f"Cell({self.label}={self.value}, {self.state.value})"
        return f"Cell({self.label}, {sorted(self.candidates)})"
