"""The law of leftovers: innies and outies across a straight cut."""

from __future__ import annotations
from typing import List, Optional, Tuple

from ..core.candidates import CandidateSet
from ..core.cell import Cell
from ..core.grid import PuzzleGrid
from ..steps.step import CandidateRemovalStep, Step, ValuePlacementStep
from .base import Technique, digit


class LeftoversSolver(Technique):
    """
    Cut the grid after a row (or column). The cells above the cut form whole
    blocks plus a few leftovers: cells of blocks that lie mostly below the cut
    stick up into it (innies), and cells of blocks that lie mostly above the
    cut stick down out of it (outies). Since the rows above the cut and the
    blocks they nearly cover hold the same multiset of values, the innies and
    the outies must hold the same values.

    Rules applied when both sets have ``k`` cells:

    1. A value placed in one set, that fits only one cell of the other set,
       goes in that cell.
    2. A value possible in one set but not in the other is removed from the
       first set.
    """

    name = "Law of Leftovers"
    group = "leftovers"

    def get_next_step(self, grid: PuzzleGrid) -> Optional[Step]:
        for leftover_size in range(1, grid.size // 2 + 1):
            step = self._find(grid, leftover_size, by_row=True)
            if step is None:
                step = self._find(grid, leftover_size, by_row=False)
            if step is not None:
                return step
        return None

    def _find(self, grid: PuzzleGrid, leftover_size: int, by_row: bool) -> Optional[Step]:
        size = grid.size
        block_counts = [0] * size

        for line in range(size):
            for other in range(size):
                cell = grid.cell_at(line, other) if by_row else grid.cell_at(other, line)
                block_counts[cell.block_index] += 1

            innies, outies = self._collect(grid, line, block_counts, by_row)
            if len(innies) != leftover_size or len(outies) != leftover_size:
                continue

            step = self._create_step(grid, innies, outies)
            if step is not None:
                return step
        return None

    @staticmethod
    def _collect(
        grid: PuzzleGrid,
        line: int,
        block_counts: List[int],
        by_row: bool,
    ) -> Tuple[List[Cell], List[Cell]]:
        size = grid.size
        innies: List[Cell] = []
        outies: List[Cell] = []
        for b, count in enumerate(block_counts):
            if count == size:
                continue
            for cell in grid.blocks[b]:
                position = cell.row if by_row else cell.column
                if count <= size // 2:
                    if position <= line:
                        innies.append(cell)
                elif position > line:
                    outies.append(cell)
        innies.sort(key=lambda c: c.index)
        outies.sort(key=lambda c: c.index)
        return innies, outies

    def _create_step(self, grid: PuzzleGrid, set1: List[Cell], set2: List[Cell]) -> Optional[Step]:
        step = self._required_value_step(grid, set1, set2)
        if step is None:
            step = self._required_value_step(grid, set2, set1)
        if step is None:
            step = self._common_candidate_step(grid, set2, set1)
        if step is None:
            step = self._common_candidate_step(grid, set1, set2)
        return step

    def _required_value_step(self, grid: PuzzleGrid, set1: List[Cell], set2: List[Cell]) -> Optional[Step]:
        for cell1 in set1:
            if not cell1.contains_value:
                continue
            value = cell1.value
            if any(cell2.contains_value and cell2.value == value for cell2 in set2):
                continue

            required = [cell2 for cell2 in set2 if cell2.is_unsolved and value in cell2.candidates]
            if len(required) != 1:
                continue

            target = required[0]
            step = ValuePlacementStep(
                grid, target, value,
                technique=self.name,
                small_hint=self.name,
                big_hint=(f"{self.name}: {target.label} must be {digit(value)}, "
                          f"to match the value on the other side of the cut."),
            )
            step.add_explaining_cells(set1)
            step.add_explaining_cells(c for c in set2 if c is not target)
            return step
        return None

    def _common_candidate_step(self, grid: PuzzleGrid, set1: List[Cell], set2: List[Cell]) -> Optional[Step]:
        possible1 = _possible_values(set1)
        possible2 = _possible_values(set2)

        for value in possible1 - possible2:
            affected = [cell for cell in set1 if cell.is_unsolved and value in cell.candidates]
            if not affected:
                continue
            step = CandidateRemovalStep.for_value(
                affected, value,
                technique=self.name,
                small_hint=self.name,
                big_hint=(f"{self.name}: {digit(value)} cannot appear on the other side of "
                          f"the cut, so it can be removed from this side."),
            )
            step.add_explaining_cells(set2)
            return step
        return None


def _possible_values(cells: List[Cell]) -> CandidateSet:
    """Values placed in, or still candidates of, the given cells."""
    possible = CandidateSet()
    for cell in cells:
        if cell.contains_value:
            possible = possible.with_value(cell.value)
        else:
            possible = possible | cell.candidates
    return possible
