"""Tiling rectangles with the twelve pentominoes by exact cover."""

from __future__ import annotations
import logging
from typing import Callable, List, Optional, Set, Tuple

import numpy as np

from ..dlx import ExactCoverMatrix
from .pieces import ORIENTATIONS, PENTOMINO_SIZE, PIECE_NAMES

logger = logging.getLogger(__name__)

NUM_PIECES = len(PIECE_NAMES)
BOARD_AREA = NUM_PIECES * PENTOMINO_SIZE
MAX_ORIENTATIONS = 8
X_PIECE = PIECE_NAMES.index("X")

# Called with each solution grid; returning True stops the search.
GridListener = Callable[[np.ndarray], bool]


class PentominoSolver:
    """
    Finds every way to tile a ``height x width`` rectangle with one of each
    pentomino.

    The universe has 72 elements for a 60 square board:

    - one per piece, so each piece is used exactly once,
    - one per square of the board.

    Each row of the matrix is one placement of one piece in one orientation.

    Every tiling of a rectangle comes with three mirror images. The X piece
    looks the same in every orientation, so restricting its centre to the
    upper-left quadrant keeps at least one member of each family of four;
    solutions that are still mirror images of each other (X on a centre
    line) are then merged by their canonical form.
    """

    def __init__(self, width: int = 10, height: int = 6):
        if width <= 0 or height <= 0 or width * height != BOARD_AREA:
            raise ValueError(f"Board must have {BOARD_AREA} squares, got {width}x{height}")
        self.width = width
        self.height = height

    def _encode(self, piece: int, orientation: int, row: int, column: int) -> int:
        return ((piece * MAX_ORIENTATIONS + orientation) * self.height + row) * self.width + column

    def _decode(self, payload: int) -> Tuple[int, int, int, int]:
        rest, column = divmod(payload, self.width)
        rest, row = divmod(rest, self.height)
        piece, orientation = divmod(rest, MAX_ORIENTATIONS)
        return piece, orientation, row, column

    def _x_allowed(self, row: int, column: int) -> bool:
        # The X piece's centre square is offset (1, 1) from its corner.
        return 2 * (row + 1) <= self.height - 1 and 2 * (column + 1) <= self.width - 1

    def build_matrix(self, unique: bool = False) -> ExactCoverMatrix:
        """
        Load every possible piece placement into an exact cover matrix.

        Args:
            unique: Restrict the X piece to the upper-left quadrant.
        """
        matrix = ExactCoverMatrix(NUM_PIECES + BOARD_AREA)
        for piece, orientations in enumerate(ORIENTATIONS):
            for orientation, shape in enumerate(orientations):
                shape_width = max(x for x, _ in shape) + 1
                shape_height = max(y for _, y in shape) + 1
                for row in range(self.height - shape_height + 1):
                    for column in range(self.width - shape_width + 1):
                        if unique and piece == X_PIECE and not self._x_allowed(row, column):
                            continue
                        columns = [piece] + [
                            NUM_PIECES + (row + y) * self.width + column + x for x, y in shape
                        ]
                        matrix.add_row(columns, self._encode(piece, orientation, row, column))
        logger.debug("Pentomino matrix for %dx%d: %d placements", self.height, self.width, matrix.num_rows)
        return matrix

    def _to_grid(self, payloads: List[int]) -> np.ndarray:
        grid = np.full((self.height, self.width), -1, dtype=np.int8)
        for payload in payloads:
            piece, orientation, row, column = self._decode(payload)
            for x, y in ORIENTATIONS[piece][orientation]:
                grid[row + y, column + x] = piece
        return grid

    @staticmethod
    def canonical_form(grid: np.ndarray) -> bytes:
        """Key shared by a solution and its mirror images."""
        return min(
            g.tobytes()
            for g in (grid, np.flipud(grid), np.fliplr(grid), np.flipud(np.fliplr(grid)))
        )

    def solve(
        self,
        unique: bool = False,
        listener: Optional[GridListener] = None,
        limit: Optional[int] = None,
    ) -> List[np.ndarray]:
        """
        Find tilings of the board.

        Args:
            unique: Report one tiling per family of mirror images.
            listener: Called with each new solution grid; returning True stops.
            limit: Stop after this many solutions. None for all of them.

        Returns:
            Solution grids of piece indices into PIECE_NAMES.
        """
        matrix = self.build_matrix(unique)
        solutions: List[np.ndarray] = []
        seen: Set[bytes] = set()

        def solution_found(rows: List[int]) -> bool:
            grid = self._to_grid([matrix.payload_of(node) for node in rows])
            if unique:
                key = self.canonical_form(grid)
                if key in seen:
                    return False
                seen.add(key)
            solutions.append(grid)
            if listener is not None and listener(grid):
                return True
            return limit is not None and len(solutions) >= limit

        stats = matrix.search(solution_found)
        logger.info(
            "Pentomino %dx%d: %d solutions (%d covers, %d nodes)",
            self.height, self.width, len(solutions), stats.solutions, stats.nodes,
        )
        return solutions

    def count(self, unique: bool = True) -> int:
        """Number of tilings, counting mirror images once when ``unique``."""
        return len(self.solve(unique=unique))

    @staticmethod
    def format_solution(grid: np.ndarray) -> str:
        """Draw a solution with one letter per square."""
        return "\n".join("".join(PIECE_NAMES[p] for p in row) for row in grid)
