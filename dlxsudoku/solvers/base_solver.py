"""Whole-puzzle solvers: run a strategy on a copy of a grid and report what it cost."""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, Dict, Any
import time
import tracemalloc

from ..core.errors import StepConflictError
from ..core.grid import PuzzleGrid


@dataclass
class SolverStats:
    """
    Statistics from one whole-puzzle run.

    ``iterations`` counts applied steps for the technique solver;
    ``nodes_explored`` and ``solutions`` come from the exact cover search.
    Technique usage and other per-solver details go in ``extra``.
    """
    # Core metrics
    solved: bool = False
    time_seconds: float = 0.0
    memory_bytes: int = 0
    iterations: int = 0

    # Algorithm-specific metrics
    nodes_explored: int = 0
    solutions: int = 0

    # Additional metadata
    algorithm: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Flatten the stats, extras included, for JSON output."""
        return {
            "solved": self.solved,
            "time_seconds": self.time_seconds,
            "memory_bytes": self.memory_bytes,
            "iterations": self.iterations,
            "nodes_explored": self.nodes_explored,
            "solutions": self.solutions,
            "algorithm": self.algorithm,
            **self.extra
        }


class BaseSolver(ABC):
    """
    Base class for solvers that take a puzzle grid to completion.

    Subclasses implement ``_solve`` on a private copy of the grid.
    ``StepConflictError`` propagates; any other failure is recorded in
    ``stats.extra["error"]`` and the run reports no solution.
    """

    name: str = "BaseSolver"

    def __init__(self):
        self.stats = SolverStats(algorithm=self.name)

    def solve(self, grid: PuzzleGrid) -> tuple[Optional[PuzzleGrid], SolverStats]:
        """
        Solve a puzzle with timing and memory tracking.

        The grid passed in is never modified; the solver works on a copy.

        Args:
            grid: The puzzle to solve, givens and any solved cells included.

        Returns:
            Tuple of (grid as far as the solver got, or None, stats).
            ``stats.solved`` is True only for a complete, valid grid.
        """
        self.stats = SolverStats(algorithm=self.name)

        # Start memory tracking
        tracemalloc.start()

        # Start timing
        start_time = time.perf_counter()

        try:
            solution = self._solve(grid.copy())
            self.stats.solved = solution is not None and solution.is_solved()
        except StepConflictError:
            tracemalloc.stop()
            raise
        except Exception as e:
            self.stats.extra["error"] = str(e)
            solution = None

        # End timing
        self.stats.time_seconds = time.perf_counter() - start_time

        # Get memory usage
        current, peak = tracemalloc.get_traced_memory()
        tracemalloc.stop()
        self.stats.memory_bytes = peak

        return solution, self.stats

    @abstractmethod
    def _solve(self, grid: PuzzleGrid) -> Optional[PuzzleGrid]:
        """
        Internal solve method to be implemented by subclasses.

        Args:
            grid: A copy of the puzzle, free to modify.

        Returns:
            The grid after solving (possibly incomplete), or None if the
            puzzle has no solution.
        """
        pass

    def reset_stats(self) -> None:
        """Clear the statistics of the last run."""
        self.stats = SolverStats(algorithm=self.name)
