"""Reversible steps and their undo/redo history."""

from .step import Step, ValuePlacementStep, CandidateRemovalStep
from .history import History

__all__ = ["Step", "ValuePlacementStep", "CandidateRemovalStep", "History"]
