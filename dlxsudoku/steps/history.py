"""Undo/redo history of steps."""

from __future__ import annotations
from typing import List

from .step import Step


class History:
    """
    Stacks of steps done and steps undone.

    History is linear: pushing a new step after an undo discards the redo
    stack. Popping an empty stack raises IndexError.
    """

    def __init__(self):
        self._undo: List[Step] = []
        self._redo: List[Step] = []

    @property
    def can_undo(self) -> bool:
        return len(self._undo) > 0

    @property
    def can_redo(self) -> bool:
        return len(self._redo) > 0

    def push(self, step: Step) -> None:
        """Record a step that has just been applied."""
        self._undo.append(step)
        self._redo.clear()

    def undo(self) -> Step:
        step = self._undo.pop()
        step.undo()
        self._redo.append(step)
        return step

    def redo(self) -> Step:
        step = self._redo.pop()
        step.redo()
        self._undo.append(step)
        return step

    def clear(self) -> None:
        self._undo.clear()
        self._redo.clear()

    def __len__(self) -> int:
        return len(self._undo)
