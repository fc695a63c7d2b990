"""Houses: rows, columns, blocks and diagonals."""

from __future__ import annotations
from enum import Enum
from typing import List, Sequence, Tuple

from .cell import Cell, CellState


class HouseKind(Enum):
    ROW = "row"
    COLUMN = "column"
    BLOCK = "block"
    DIAGONAL = "diagonal"


class House:
    """
    An ordered, immutable group of cells that must hold each value exactly once.

    Besides the cell tuple a house keeps a bitmask over the flat cell index of
    its members, which makes overlap tests between houses a single ``&``.
    """

    __slots__ = ["kind", "index", "cells", "mask"]

    def __init__(self, kind: HouseKind, index: int, cells: Sequence[Cell]):
        self.kind = kind
        self.index = index
        self.cells: Tuple[Cell, ...] = tuple(cells)
        mask = 0
        for cell in self.cells:
            mask |= 1 << cell.index
        self.mask = mask

    @property
    def name(self) -> str:
        """Human readable name used in hint text."""
        if self.kind == HouseKind.DIAGONAL:
            return "main diagonal" if self.index == 0 else "anti-diagonal"
        return f"{self.kind.value} {self.index + 1}"

    def unsolved_cells(self) -> List[Cell]:
        return [cell for cell in self.cells if cell.state == CellState.UNSOLVED]

    def cells_with_candidate(self, value: int) -> List[Cell]:
        return [cell for cell in self.cells
                if cell.state == CellState.UNSOLVED and value in cell.candidates]

    def candidate_mask(self, value: int) -> int:
        """Bitmask of the unsolved cells in this house that have ``value`` as a candidate."""
        mask = 0
        for cell in self.cells:
            if cell.state == CellState.UNSOLVED and value in cell.candidates:
                mask |= 1 << cell.index
        return mask

    def values(self) -> List[int]:
        """Values held by the given and solved cells of this house."""
        return [cell.value for cell in self.cells if cell.contains_value]

    def __contains__(self, cell: Cell) -> bool:
        return bool(self.mask >> cell.index & 1)

    def __iter__(self):
        return iter(self.cells)

    def __len__(self) -> int:
        return len(self.cells)

    def __repr__(self) -> str:
        return f"House({self.name})"
