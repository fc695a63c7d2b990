"""Box-line intersections (pointing and claiming)."""

from __future__ import annotations
from typing import Optional

from ..core.grid import PuzzleGrid
from ..core.house import House
from ..steps.step import CandidateRemovalStep, Step
from .base import Technique, digit, popcount


class IntersectionSolver(Technique):
    """
    When every candidate position of a value in one house lies inside its
    overlap with a second house, the value can be removed from the rest of
    the second house.
    """

    name = "Intersection"
    group = "intersection"

    def get_next_step(self, grid: PuzzleGrid) -> Optional[Step]:
        houses = grid.houses
        for value in range(1, grid.size + 1):
            masks = [house.candidate_mask(value) for house in houses]

            # Consider each pair of houses that have cells in common.
            for i1 in range(len(houses) - 1):
                mask1 = masks[i1]
                if not mask1:
                    continue
                for i2 in range(i1 + 1, len(houses)):
                    mask2 = masks[i2]
                    overlap = mask1 & mask2
                    # A single shared cell would be a hidden single, not an intersection.
                    if popcount(overlap) <= 1:
                        continue

                    if mask1 == overlap and mask2 != overlap:
                        return self._create_step(grid, houses[i1], houses[i2], mask2, overlap, value)
                    if mask2 == overlap and mask1 != overlap:
                        return self._create_step(grid, houses[i2], houses[i1], mask1, overlap, value)
        return None

    def _create_step(
        self,
        grid: PuzzleGrid,
        confined: House,
        other: House,
        other_mask: int,
        overlap: int,
        value: int,
    ) -> Step:
        step = CandidateRemovalStep.for_value(
            grid.cells_in_mask(other_mask & ~overlap),
            value,
            technique=self.name,
            small_hint=self.name,
            big_hint=(f"{self.name}: in {confined.name}, {digit(value)} must be where it meets "
                      f"{other.name}, so it can be removed from the rest of {other.name}."),
        )
        step.add_explaining_cells(grid.cells_in_mask(overlap))
        return step
