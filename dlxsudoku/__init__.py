"""Dancing Links Sudoku: exact-cover search and human-style solving techniques."""

from .core import PuzzleGrid, GridLayout, Cell, CellState, House, HouseKind, CandidateSet
from .core.errors import InvalidPuzzleError, StepConflictError
from .session import PuzzleSession
from .solvers import Solver, LogicSolver, SudokuDLXSolver, Validity

__version__ = "1.0.0"

__all__ = [
    "PuzzleGrid",
    "GridLayout",
    "Cell",
    "CellState",
    "House",
    "HouseKind",
    "CandidateSet",
    "InvalidPuzzleError",
    "StepConflictError",
    "PuzzleSession",
    "Solver",
    "LogicSolver",
    "SudokuDLXSolver",
    "Validity",
]
