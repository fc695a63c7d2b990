"""Step-by-step solving with the human-style techniques."""

from __future__ import annotations
import logging
from collections import Counter
from typing import Dict, List, Optional, Sequence

from .base_solver import BaseSolver
from ..core.grid import PuzzleGrid
from ..steps.step import Step
from ..techniques import (
    Technique,
    NakedSingleSolver,
    HiddenSingleSolver,
    IntersectionSolver,
    NakedPairSolver,
    NakedTripletSolver,
    NakedQuadSolver,
    HiddenPairSolver,
    HiddenTripletSolver,
    HiddenQuadSolver,
    LeftoversSolver,
    XWingSolver,
    FishSolver,
)

logger = logging.getLogger(__name__)


def default_techniques() -> List[Technique]:
    """The technique library, simplest first."""
    return [
        NakedSingleSolver(),
        HiddenSingleSolver(),
        IntersectionSolver(),
        NakedPairSolver(),
        NakedTripletSolver(),
        NakedQuadSolver(),
        HiddenPairSolver(),
        HiddenTripletSolver(),
        HiddenQuadSolver(),
        LeftoversSolver(),
        XWingSolver(),
        FishSolver(3),
        FishSolver(4),
        FishSolver(5),
    ]


class Solver:
    """
    Produces the next deduction for a puzzle.

    Techniques are tried in order and the first step found wins, so the
    order of the list is also the order in which hints are given.
    """

    def __init__(self, techniques: Optional[Sequence[Technique]] = None):
        self.techniques: List[Technique] = list(techniques) if techniques is not None else default_techniques()

    @property
    def groups(self) -> Dict[str, List[Technique]]:
        """Techniques keyed by group name, in order."""
        groups: Dict[str, List[Technique]] = {}
        for technique in self.techniques:
            groups.setdefault(technique.group, []).append(technique)
        return groups

    def technique(self, name: str) -> Technique:
        """Look up a technique by name (case-insensitive)."""
        for technique in self.techniques:
            if technique.name.lower() == name.lower():
                return technique
        raise ValueError(f"Unknown technique: {name}")

    def get_next_step(self, grid: PuzzleGrid) -> Optional[Step]:
        """
        Find the next step using the simplest technique that applies.

        Returns:
            The step, or None if no technique in the list can make progress.
        """
        for technique in self.techniques:
            logger.debug("Trying %s", technique.name)
            step = technique.get_next_step(grid)
            if step is not None:
                logger.debug("%s", step.big_hint)
                return step
        return None


class LogicSolver(BaseSolver):
    """
    Solves a puzzle the way a person would, one deduction at a time.

    Unlike the search-based solver it can get stuck: a puzzle that needs a
    technique outside the library comes back unsolved, with the partial grid
    as the solution.
    """

    name = "Logic"

    def __init__(self, techniques: Optional[Sequence[Technique]] = None):
        super().__init__()
        self.solver = Solver(techniques)

    def _solve(self, grid: PuzzleGrid) -> Optional[PuzzleGrid]:
        usage: Counter = Counter()
        self.stats.iterations = 0

        while not grid.is_complete():
            step = self.solver.get_next_step(grid)
            if step is None:
                logger.info("Stuck after %d steps with %d empty cells", self.stats.iterations, grid.count_empty())
                break
            step.apply()
            usage[step.technique] += 1
            self.stats.iterations += 1

        self.stats.extra["techniques"] = dict(usage)
        self.stats.extra["empty_cells"] = grid.count_empty()
        return grid

    def hardest_technique(self) -> Optional[str]:
        """The latest technique in the list used by the last solve."""
        used = self.stats.extra.get("techniques", {})
        hardest = None
        for technique in self.solver.techniques:
            if technique.name in used:
                hardest = technique.name
        return hardest
