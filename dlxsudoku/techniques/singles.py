"""Naked and hidden singles."""

from __future__ import annotations
from typing import Dict, Optional

from ..core.cell import Cell, CellState
from ..core.grid import PuzzleGrid
from ..steps.step import Step, ValuePlacementStep
from .base import Technique, digit


class NakedSingleSolver(Technique):
    """An unsolved cell with exactly one candidate must take that value."""

    name = "Naked Single"
    group = "single"

    def get_next_step(self, grid: PuzzleGrid) -> Optional[Step]:
        for cell in grid.cells:
            if cell.state != CellState.UNSOLVED or len(cell.candidates) != 1:
                continue

            value = cell.candidates.first()
            step = ValuePlacementStep(
                grid, cell, value,
                technique=self.name,
                small_hint=self.name,
                big_hint=f"{self.name}: {cell.label} can only be {digit(value)}.",
            )
            # The placed buddies are what ruled out every other value.
            step.add_explaining_cells(b for b in grid.buddies(cell) if b.contains_value)
            return step
        return None


class HiddenSingleSolver(Technique):
    """A value that is a candidate in only one cell of a house must go there."""

    name = "Hidden Single"
    group = "single"

    def get_next_step(self, grid: PuzzleGrid) -> Optional[Step]:
        for house in grid.houses:
            unsolved = house.unsolved_cells()

            # Count the times each value is a candidate in this house.
            counts: Dict[int, int] = {}
            last_cell: Dict[int, Cell] = {}
            for cell in unsolved:
                for value in cell.candidates:
                    counts[value] = counts.get(value, 0) + 1
                    last_cell[value] = cell

            for value in range(1, grid.size + 1):
                if counts.get(value) != 1:
                    continue
                single = last_cell[value]
                step = ValuePlacementStep(
                    grid, single, value,
                    technique=self.name,
                    small_hint=self.name,
                    big_hint=(f"{self.name}: {digit(value)} can only go in "
                              f"{single.label} within {house.name}."),
                )
                step.add_explaining_cells(c for c in unsolved if c is not single)
                return step
        return None
