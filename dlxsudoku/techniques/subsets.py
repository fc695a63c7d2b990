"""Naked and hidden pairs, triplets and quads."""

from __future__ import annotations
from itertools import combinations
from typing import Dict, List, Optional, Sequence

from ..core.candidates import CandidateSet
from ..core.cell import Cell
from ..core.grid import PuzzleGrid
from ..core.house import House
from ..steps.step import CandidateRemovalStep, Step
from .base import Technique, cell_labels, digits, popcount


class NakedSubsetSolver(Technique):
    """
    A naked subset is ``size`` unsolved cells of one house whose candidates
    together number exactly ``size`` values. Those values must fill those
    cells, so they can be removed from every other cell that sees all of them.
    """

    size = 2
    group = "subset"

    def get_next_step(self, grid: PuzzleGrid) -> Optional[Step]:
        k = self.size
        for house in grid.houses:
            unsolved = house.unsolved_cells()
            if len(unsolved) <= k:
                continue
            pool = [cell for cell in unsolved if 1 <= len(cell.candidates) <= k]
            for subset in combinations(pool, k):
                values = CandidateSet.union(cell.candidates for cell in subset)
                if len(values) != k:
                    continue
                step = self._create_step(grid, house, subset, values)
                if step is not None:
                    return step
        return None

    def _create_step(
        self,
        grid: PuzzleGrid,
        house: House,
        subset: Sequence[Cell],
        values: CandidateSet,
    ) -> Optional[Step]:
        common = ~0
        for cell in subset:
            common &= grid.buddy_mask(cell)

        removals: Dict[Cell, CandidateSet] = {}
        for cell in grid.cells_in_mask(common):
            if not cell.is_unsolved:
                continue
            removed = cell.candidates & values
            if removed:
                removals[cell] = removed
        if not removals:
            return None

        step = CandidateRemovalStep(
            removals,
            technique=self.name,
            small_hint=self.name,
            big_hint=(f"{self.name}: {cell_labels(subset)} in {house.name} must hold "
                      f"{digits(values)}, so those values can be removed from the cells they all see."),
        )
        step.add_explaining_cells(subset)
        return step


class NakedPairSolver(NakedSubsetSolver):
    name = "Naked Pair"
    size = 2


class NakedTripletSolver(NakedSubsetSolver):
    name = "Naked Triplet"
    size = 3


class NakedQuadSolver(NakedSubsetSolver):
    name = "Naked Quad"
    size = 4


class HiddenSubsetSolver(Technique):
    """
    A hidden subset is ``size`` values that, within one house, are candidates
    in exactly ``size`` unsolved cells. Those cells must hold those values,
    so every other candidate can be removed from them.
    """

    size = 2
    group = "subset"

    def get_next_step(self, grid: PuzzleGrid) -> Optional[Step]:
        k = self.size
        for house in grid.houses:
            unsolved = house.unsolved_cells()
            if len(unsolved) <= k + 1:
                continue

            positions = {value: house.candidate_mask(value) for value in range(1, grid.size + 1)}
            eligible = [value for value, mask in positions.items() if 1 <= popcount(mask) <= k]
            for subset in combinations(eligible, k):
                mask = 0
                for value in subset:
                    mask |= positions[value]
                if popcount(mask) != k:
                    continue
                step = self._create_step(grid, house, unsolved, subset, mask)
                if step is not None:
                    return step
        return None

    def _create_step(
        self,
        grid: PuzzleGrid,
        house: House,
        unsolved: List[Cell],
        subset: Sequence[int],
        mask: int,
    ) -> Optional[Step]:
        keep = CandidateSet.of(*subset)
        cells = grid.cells_in_mask(mask)

        # Only useful if the cells hold candidates outside the subset.
        removals = {cell: cell.candidates - keep for cell in cells if cell.candidates - keep}
        if not removals:
            return None

        step = CandidateRemovalStep(
            removals,
            technique=self.name,
            small_hint=self.name,
            big_hint=(f"{self.name}: in {house.name}, {digits(subset)} only fit in "
                      f"{cell_labels(cells)}, so those cells can hold nothing else."),
        )
        step.add_explaining_cells(cell for cell in unsolved if not (mask >> cell.index & 1))
        return step


class HiddenPairSolver(HiddenSubsetSolver):
    name = "Hidden Pair"
    size = 2


class HiddenTripletSolver(HiddenSubsetSolver):
    name = "Hidden Triplet"
    size = 3


class HiddenQuadSolver(HiddenSubsetSolver):
    name = "Hidden Quad"
    size = 4
