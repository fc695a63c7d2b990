"""Puzzle grid representation with support for variable sizes and block shapes."""

from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

import numpy as np

from .candidates import CandidateSet
from .cell import Cell, CellState
from .errors import InvalidPuzzleError
from .house import House, HouseKind


# Index 0 is the blank; value v is written as CHARACTERS[v].
CHARACTERS = ".123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"

MAX_GRID_SIZE = len(CHARACTERS) - 1


@dataclass(frozen=True)
class GridLayout:
    """
    Topology of a puzzle: its size and how cells are grouped into blocks.

    Regular layouts use ``block_height x block_width`` rectangles. A jigsaw
    layout gives an explicit ``size x size`` map of block indices instead.
    Diagonal houses (X-sudoku) can be added to either kind.
    """
    size: int = 9
    block_height: int = 0
    block_width: int = 0
    diagonals: bool = False
    jigsaw: Optional[Tuple[Tuple[int, ...], ...]] = None

    def __post_init__(self):
        size = self.size
        if size < 2 or size > MAX_GRID_SIZE:
            raise InvalidPuzzleError(f"Grid size must be 2-{MAX_GRID_SIZE}, got {size}")

        if self.jigsaw is not None:
            object.__setattr__(self, "jigsaw", tuple(tuple(int(b) for b in row) for row in self.jigsaw))
            self._validate_jigsaw()
            return

        if not self.block_height and not self.block_width:
            height, width = _default_block_shape(size)
            object.__setattr__(self, "block_height", height)
            object.__setattr__(self, "block_width", width)
        elif not self.block_height:
            object.__setattr__(self, "block_height", size // self.block_width)
        elif not self.block_width:
            object.__setattr__(self, "block_width", size // self.block_height)

        if self.block_height * self.block_width != size:
            raise InvalidPuzzleError(
                f"Blocks of {self.block_height}x{self.block_width} do not tile a {size}x{size} grid"
            )

    @classmethod
    def jigsaw_layout(cls, block_map: Sequence[Sequence[int]], diagonals: bool = False) -> GridLayout:
        """Create an irregular layout from a square map of block indices."""
        return cls(size=len(block_map), diagonals=diagonals, jigsaw=tuple(tuple(row) for row in block_map))

    @property
    def is_jigsaw(self) -> bool:
        return self.jigsaw is not None

    def block_index(self, row: int, col: int) -> int:
        """Get the block index (0 to size-1) for a cell."""
        if self.jigsaw is not None:
            return self.jigsaw[row][col]
        blocks_per_row = self.size // self.block_width
        return (row // self.block_height) * blocks_per_row + (col // self.block_width)

    def _validate_jigsaw(self) -> None:
        size = self.size
        block_map = self.jigsaw
        if len(block_map) != size or any(len(row) != size for row in block_map):
            raise InvalidPuzzleError(f"Jigsaw map must be {size}x{size}")
        indices = np.array(block_map).ravel()
        if indices.min() < 0 or indices.max() >= size:
            raise InvalidPuzzleError(f"Block indices must be 0-{size - 1}")
        counts = np.bincount(indices, minlength=size)
        if np.any(counts != size):
            raise InvalidPuzzleError(
                f"Each block index 0-{size - 1} must appear exactly {size} times"
            )


def _default_block_shape(size: int) -> Tuple[int, int]:
    """Most square block shape with height <= width, e.g. 2x3 for a 6x6 grid."""
    height = int(math.isqrt(size))
    while size % height:
        height -= 1
    return height, size // height


class PuzzleGrid:
    """
    The cells of one puzzle, the houses they belong to and the buddy relation.

    Standard Sudoku is 9x9 with 3x3 blocks. Any size up to 35 is supported,
    including rectangular blocks (6x6 with 2x3), jigsaw blocks and the two
    diagonals of X-sudoku.

    Buddies (cells sharing at least one house) are precomputed once per grid
    as a bitmask over the flat cell index, since every technique asks for
    them over and over.
    """

    def __init__(self, layout: Optional[GridLayout] = None, size: int = 9):
        """
        Initialize an empty grid.

        Args:
            layout: Grid topology. If None, a regular layout of ``size``.
            size: Grid size, used only when no layout is given.
        """
        if layout is None:
            layout = GridLayout(size=size)
        self.layout = layout
        self.size = layout.size

        n = self.size
        self._cells: List[Cell] = []
        for r in range(n):
            for c in range(n):
                self._cells.append(Cell(r, c, r * n + c, layout.block_index(r, c)))

        self.rows = [House(HouseKind.ROW, r, self._cells[r * n:(r + 1) * n]) for r in range(n)]
        self.columns = [House(HouseKind.COLUMN, c, self._cells[c::n]) for c in range(n)]
        block_cells: List[List[Cell]] = [[] for _ in range(n)]
        for cell in self._cells:
            block_cells[cell.block_index].append(cell)
        self.blocks = [House(HouseKind.BLOCK, b, cells) for b, cells in enumerate(block_cells)]
        self.diagonals: List[House] = []
        if layout.diagonals:
            self.diagonals = [
                House(HouseKind.DIAGONAL, 0, [self._cells[i * n + i] for i in range(n)]),
                House(HouseKind.DIAGONAL, 1, [self._cells[i * n + (n - 1 - i)] for i in range(n)]),
            ]
        self.houses: List[House] = self.rows + self.columns + self.blocks + self.diagonals

        self._build_buddies()

        # Topology is fixed from here on.
        for cell in self._cells:
            cell.state = CellState.UNSOLVED
            cell.candidates = CandidateSet.full(n)

    def _build_buddies(self) -> None:
        """Precompute the houses of each cell and its buddy bitmask."""
        n_cells = len(self._cells)
        membership = np.zeros((len(self.houses), n_cells), dtype=np.int32)
        for h, house in enumerate(self.houses):
            membership[h, [cell.index for cell in house.cells]] = 1

        shared = membership.T @ membership
        np.fill_diagonal(shared, 0)

        self._houses_of: List[Tuple[House, ...]] = [
            tuple(self.houses[h] for h in np.flatnonzero(membership[:, i]))
            for i in range(n_cells)
        ]
        self._buddies: List[Tuple[Cell, ...]] = []
        self._buddy_masks: List[int] = []
        for i in range(n_cells):
            indices = np.flatnonzero(shared[i])
            self._buddies.append(tuple(self._cells[j] for j in indices))
            mask = 0
            for j in indices:
                mask |= 1 << int(j)
            self._buddy_masks.append(mask)

    # ------------------------------------------------------------------
    # Topology queries
    # ------------------------------------------------------------------

    @property
    def cells(self) -> List[Cell]:
        """All cells, row-major."""
        return self._cells

    def __iter__(self) -> Iterator[Cell]:
        return iter(self._cells)

    def cell_at(self, row: int, col: int) -> Cell:
        return self._cells[row * self.size + col]

    def house(self, index: int) -> House:
        return self.houses[index]

    def houses_of(self, cell: Cell) -> Tuple[House, ...]:
        return self._houses_of[cell.index]

    def buddies(self, cell: Cell) -> Tuple[Cell, ...]:
        """Cells sharing at least one house with ``cell``, excluding itself."""
        return self._buddies[cell.index]

    def unsolved_buddies(self, cell: Cell) -> List[Cell]:
        return [buddy for buddy in self._buddies[cell.index] if buddy.state == CellState.UNSOLVED]

    def buddy_mask(self, cell: Cell) -> int:
        return self._buddy_masks[cell.index]

    def are_buddies(self, first: Cell, second: Cell) -> bool:
        return bool(self._buddy_masks[first.index] >> second.index & 1)

    def cells_in_mask(self, mask: int) -> List[Cell]:
        """Cells whose flat index bit is set in ``mask``, in row-major order."""
        cells = []
        while mask:
            low = mask & -mask
            cells.append(self._cells[low.bit_length() - 1])
            mask ^= low
        return cells

    # ------------------------------------------------------------------
    # Values and candidates
    # ------------------------------------------------------------------

    def calculate_candidates(self, cell: Cell) -> CandidateSet:
        """
        Derive a cell's candidates from scratch.

        Returns every value minus those held by a given or solved buddy.
        """
        mask = CandidateSet.full(self.size).mask
        for buddy in self._buddies[cell.index]:
            if buddy.state in (CellState.GIVEN, CellState.SOLVED):
                mask &= ~(1 << buddy.value)
        return CandidateSet(mask)

    def recalculate_candidates(self) -> None:
        """Reset the candidates of every unsolved cell from the placed values."""
        for cell in self._cells:
            if cell.state == CellState.UNSOLVED:
                cell.candidates = self.calculate_candidates(cell)

    def place_value(self, cell: Cell, value: int, state: CellState = CellState.SOLVED) -> List[Cell]:
        """
        Put a value into a cell and remove it from the candidates of its buddies.

        Returns:
            The unsolved buddies that actually lost ``value`` as a candidate.
        """
        if value < 1 or value > self.size:
            raise ValueError(f"Value must be 1-{self.size}, got {value}")
        cell.place(value, state)
        touched = []
        for buddy in self._buddies[cell.index]:
            if buddy.state == CellState.UNSOLVED and value in buddy.candidates:
                buddy.remove_candidate(value)
                touched.append(buddy)
        return touched

    def clear_cell(self, cell: Cell) -> None:
        """
        Remove the value of a cell, restoring its candidates and those of its buddies.

        Candidates are only ever added back here, never removed, so eliminations
        made on the buddies stay in place where the placed values still allow them.
        """
        cell.clear()
        cell.candidates = self.calculate_candidates(cell)
        for buddy in self._buddies[cell.index]:
            if buddy.state == CellState.UNSOLVED:
                buddy.candidates = buddy.candidates | self.calculate_candidates(buddy)

    def get(self, row: int, col: int) -> int:
        """Get value at position (row, col). 0 means empty."""
        return self._cells[row * self.size + col].value

    def set_given(self, row: int, col: int, value: int) -> None:
        """Enter a given while setting up a puzzle. Use 0 to clear."""
        if value < 0 or value > self.size:
            raise ValueError(f"Value must be 0-{self.size}, got {value}")
        cell = self.cell_at(row, col)
        if value == 0:
            self.clear_cell(cell)
        else:
            self.place_value(cell, value, CellState.GIVEN)

    def unsolved_cells(self) -> List[Cell]:
        return [cell for cell in self._cells if cell.state == CellState.UNSOLVED]

    def count_empty(self) -> int:
        """Count the number of cells without a value."""
        return sum(1 for cell in self._cells if not cell.contains_value)

    def count_filled(self) -> int:
        """Count the number of cells with a value."""
        return len(self._cells) - self.count_empty()

    def is_complete(self) -> bool:
        """Check if all cells are filled."""
        return self.count_empty() == 0

    def is_solved(self) -> bool:
        """Check if the puzzle is completely and correctly solved."""
        from .validator import is_valid_grid
        return self.is_complete() and is_valid_grid(self)

    @property
    def values(self) -> np.ndarray:
        """Current values as a size x size array (0 = empty)."""
        return np.array([cell.value for cell in self._cells], dtype=np.int32).reshape(self.size, self.size)

    def snapshot(self) -> Dict[int, tuple]:
        """The (state, value, candidates) of every cell keyed by flat index."""
        return {cell.index: cell.snapshot() for cell in self._cells}

    def copy(self) -> PuzzleGrid:
        """Create a deep copy of the grid (same layout, independent cells)."""
        new_grid = PuzzleGrid(self.layout)
        for old, new in zip(self._cells, new_grid._cells):
            new.state = old.state
            new.value = old.value
            new.candidates = old.candidates
        return new_grid

    # ------------------------------------------------------------------
    # Text encoding
    # ------------------------------------------------------------------

    def to_string(self) -> str:
        """
        Convert the grid to its row-major text encoding.

        Blank cells are written as '.', values use CHARACTERS.
        """
        return "".join(CHARACTERS[cell.value] for cell in self._cells)

    def original_puzzle(self) -> str:
        """The text encoding of the givens only."""
        return "".join(
            CHARACTERS[cell.value] if cell.state == CellState.GIVEN else CHARACTERS[0]
            for cell in self._cells
        )

    @classmethod
    def from_string(cls, text: str, layout: Optional[GridLayout] = None) -> PuzzleGrid:
        """
        Create a grid from its text encoding.

        Args:
            text: size*size characters, row-major. '.' or '0' for blanks,
                  1-9 then A-Z for larger values. Line breaks are ignored.
            layout: Grid topology. If None, a regular layout whose size is
                    inferred from the text length.

        Raises:
            InvalidPuzzleError: on a wrong length or an unknown character.
        """
        text = "".join(text.split())
        if layout is None:
            size = math.isqrt(len(text))
            if size * size != len(text) or size < 2:
                raise InvalidPuzzleError(
                    f"Puzzle text length must be a square number, got {len(text)}"
                )
            layout = GridLayout(size=size)
        size = layout.size
        if len(text) != size * size:
            raise InvalidPuzzleError(f"String length must be {size * size}, got {len(text)}")

        grid = cls(layout)
        for cell, char in zip(grid._cells, text.upper()):
            if char == "0":
                continue
            value = CHARACTERS.find(char)
            if value < 0 or value > size:
                raise InvalidPuzzleError(
                    f"Invalid character {char!r} at {cell.label} for a {size}x{size} puzzle"
                )
            if value:
                cell.place(value, CellState.GIVEN)
        grid.recalculate_candidates()
        return grid

    @classmethod
    def from_2d_list(cls, data: List[List[int]], layout: Optional[GridLayout] = None) -> PuzzleGrid:
        """Create a grid of givens from a 2D list (0 = empty)."""
        arr = np.array(data, dtype=np.int32)
        if layout is None:
            layout = GridLayout(size=arr.shape[0])
        if arr.shape != (layout.size, layout.size):
            raise InvalidPuzzleError(f"Grid shape must be ({layout.size}, {layout.size})")
        bad = np.argwhere((arr < 0) | (arr > layout.size))
        if len(bad):
            r, c = bad[0]
            raise InvalidPuzzleError(
                f"Invalid value {arr[r, c]} at r{r + 1}c{c + 1} for a {layout.size}x{layout.size} puzzle"
            )
        return cls.from_string("".join(CHARACTERS[v] for v in arr.ravel()), layout)

    def render(self) -> str:
        """Pretty-print the grid with block separators (regular layouts only)."""
        if self.layout.is_jigsaw:
            return "\n".join(
                " ".join(CHARACTERS[cell.value] for cell in self.rows[r].cells) for r in range(self.size)
            )
        bh, bw = self.layout.block_height, self.layout.block_width
        horizontal_sep = '+' + (('-' * (bw * 2 + 1)) + '+') * (self.size // bw)

        lines = []
        for i in range(self.size):
            if i % bh == 0:
                lines.append(horizontal_sep)
            row_str = '|'
            for j in range(self.size):
                row_str += f' {CHARACTERS[self.get(i, j)]}'
                if (j + 1) % bw == 0:
                    row_str += ' |'
            lines.append(row_str)
        lines.append(horizontal_sep)
        return '\n'.join(lines)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"PuzzleGrid(size={self.size}, filled={self.count_filled()})"
