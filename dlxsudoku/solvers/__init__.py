"""Whole-puzzle solvers and the next-step orchestrator."""

from .base_solver import BaseSolver, SolverStats
from .logic_solver import Solver, LogicSolver, default_techniques
from .dlx_solver import SudokuDLXSolver, CheckResult, Validity

__all__ = [
    "BaseSolver",
    "SolverStats",
    "Solver",
    "LogicSolver",
    "default_techniques",
    "SudokuDLXSolver",
    "CheckResult",
    "Validity",
]
