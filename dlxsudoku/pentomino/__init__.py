"""Pentomino tiling, a second client of the exact cover engine."""

from .pieces import PENTOMINOES, PIECE_NAMES, ORIENTATIONS, rotations
from .solver import PentominoSolver

__all__ = ["PENTOMINOES", "PIECE_NAMES", "ORIENTATIONS", "rotations", "PentominoSolver"]
