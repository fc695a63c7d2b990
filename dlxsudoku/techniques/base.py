"""Technique interface and helpers shared by the strategies."""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Iterable, Optional

from ..core.grid import CHARACTERS

if TYPE_CHECKING:
    from ..core.grid import PuzzleGrid
    from ..steps.step import Step


class Technique(ABC):
    """
    One human solving strategy.

    ``get_next_step`` inspects the grid without changing it and returns the
    first instance of the pattern in the technique's own enumeration order,
    or None. Only applying the returned step mutates the grid.
    """

    name: str = "Technique"
    group: str = ""

    @abstractmethod
    def get_next_step(self, grid: PuzzleGrid) -> Optional[Step]:
        """
        Look for the next application of this technique.

        Args:
            grid: The puzzle being solved. Not modified.

        Returns:
            A step describing the deduction, or None if the technique does not apply.
        """
        pass

    @property
    def menu_label(self) -> str:
        return self.name

    @property
    def not_applicable_message(self) -> str:
        return f"No {self.name.lower()} found."

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


def digit(value: int) -> str:
    """The character used to display a value."""
    return CHARACTERS[value]


def digits(values: Iterable[int]) -> str:
    """Join values for hint text: ``3/7/8``."""
    return "/".join(digit(v) for v in values)


def cell_labels(cells) -> str:
    return ", ".join(cell.label for cell in cells)


def popcount(mask: int) -> int:
    return bin(mask).count("1")
