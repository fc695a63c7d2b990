"""Human-style solving techniques."""

from .base import Technique
from .singles import NakedSingleSolver, HiddenSingleSolver
from .intersection import IntersectionSolver
from .subsets import (
    NakedSubsetSolver,
    NakedPairSolver,
    NakedTripletSolver,
    NakedQuadSolver,
    HiddenSubsetSolver,
    HiddenPairSolver,
    HiddenTripletSolver,
    HiddenQuadSolver,
)
from .leftovers import LeftoversSolver
from .fish import FishSolver, XWingSolver

__all__ = [
    "Technique",
    "NakedSingleSolver",
    "HiddenSingleSolver",
    "IntersectionSolver",
    "NakedSubsetSolver",
    "NakedPairSolver",
    "NakedTripletSolver",
    "NakedQuadSolver",
    "HiddenSubsetSolver",
    "HiddenPairSolver",
    "HiddenTripletSolver",
    "HiddenQuadSolver",
    "LeftoversSolver",
    "FishSolver",
    "XWingSolver",
]
