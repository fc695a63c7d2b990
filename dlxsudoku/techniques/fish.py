"""X-wing and its larger relatives: swordfish, jellyfish and squirmbag."""

from __future__ import annotations
from itertools import combinations
from typing import List, Optional, Tuple

from ..core.cell import Cell
from ..core.grid import PuzzleGrid
from ..core.house import House
from ..steps.step import CandidateRemovalStep, Step
from .base import Technique, digit

FISH_NAMES = {
    2: "X-Wing",
    3: "Swordfish",
    4: "Jellyfish",
    5: "Squirmbag",
}


class FishSolver(Technique):
    """
    Finds fish of a given rank for one value at a time.

    Take ``rank`` base lines (rows, or columns, plus the diagonals in X-sudoku)
    that hold the value as a candidate in few cells and do not share any of
    those cells. If all those cells lie in exactly ``rank`` cover lines, each
    cover line gets its copy of the value from one of the base lines, so the
    value can be removed from every other cell of the cover lines.
    """

    group = "fish"

    def __init__(self, rank: int = 3):
        if rank not in FISH_NAMES:
            raise ValueError(f"Fish rank must be 2-5, got {rank}")
        self.rank = rank
        self.name = FISH_NAMES[rank]

    def get_next_step(self, grid: PuzzleGrid) -> Optional[Step]:
        # Rows as base lines first, then columns.
        for by_row in (True, False):
            bases = (grid.rows if by_row else grid.columns) + grid.diagonals
            covers = grid.columns if by_row else grid.rows
            for value in range(1, grid.size + 1):
                step = self._find(grid, value, bases, covers, by_row)
                if step is not None:
                    return step
        return None

    def _find(
        self,
        grid: PuzzleGrid,
        value: int,
        bases: List[House],
        covers: List[House],
        by_row: bool,
    ) -> Optional[Step]:
        rank = self.rank
        lines: List[Tuple[House, List[Cell], int]] = []
        for house in bases:
            cells = house.cells_with_candidate(value)
            if 2 <= len(cells) <= rank:
                lines.append((house, cells, house.candidate_mask(value)))
        if len(lines) < rank:
            return None

        for chosen in combinations(lines, rank):
            used = 0
            disjoint = True
            cover_indices = set()
            for _, cells, mask in chosen:
                if used & mask:
                    disjoint = False
                    break
                used |= mask
                cover_indices.update(cell.column if by_row else cell.row for cell in cells)
            if not disjoint or len(cover_indices) != rank:
                continue

            targets = [
                cell
                for index in sorted(cover_indices)
                for cell in covers[index].cells_with_candidate(value)
                if not (used >> cell.index & 1)
            ]
            if not targets:
                continue

            base_names = ", ".join(house.name for house, _, _ in chosen)
            step = CandidateRemovalStep.for_value(
                targets, value,
                technique=self.name,
                small_hint=self.name,
                big_hint=(f"{self.name}: in {base_names}, {digit(value)} is confined to "
                          f"{rank} {'columns' if by_row else 'rows'}, so it can be removed "
                          f"from the rest of those lines."),
            )
            step.add_explaining_cells(grid.cells_in_mask(used))
            return step
        return None


class XWingSolver(FishSolver):
    """Rank 2 fish whose base lines hold the value in exactly two cells."""

    def __init__(self):
        super().__init__(2)
