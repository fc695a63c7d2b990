"""Generic exact-cover search (Dancing Links / Algorithm X)."""

from .matrix import ExactCoverMatrix, SearchStats, SolutionListener

__all__ = ["ExactCoverMatrix", "SearchStats", "SolutionListener"]
