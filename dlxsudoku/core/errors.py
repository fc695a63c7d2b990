"""Exceptions raised by the puzzle model."""


class InvalidPuzzleError(ValueError):
    """Raised when puzzle text or a grid layout cannot be turned into a puzzle."""


class StepConflictError(RuntimeError):
    """
    Raised when a step is applied to a grid that no longer matches it.

    This is always a bug in the caller (for example redoing a candidate
    removal on a cell that has already lost that candidate) and is never
    handled inside the library.
    """
