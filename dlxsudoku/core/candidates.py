"""Bitset of candidate values for a single cell."""

from __future__ import annotations
from typing import Iterable, Iterator, Optional


class CandidateSet:
    """
    Immutable set of values 1..n stored as bits of an integer.

    Bit ``v`` is set when value ``v`` is still possible. Bit 0 is never used,
    so the mask of a full 9x9 cell is ``0b1111111110``.
    """

    __slots__ = ["_mask"]

    def __init__(self, mask: int = 0):
        if mask < 0 or mask & 1:
            raise ValueError(f"Invalid candidate mask {mask:#b}")
        self._mask = mask

    @classmethod
    def full(cls, size: int) -> CandidateSet:
        """All values 1..size."""
        return cls(((1 << size) - 1) << 1)

    @classmethod
    def of(cls, *values: int) -> CandidateSet:
        mask = 0
        for value in values:
            if value < 1:
                raise ValueError(f"Candidate values start at 1, got {value}")
            mask |= 1 << value
        return cls(mask)

    @classmethod
    def union(cls, sets: Iterable[CandidateSet]) -> CandidateSet:
        mask = 0
        for candidates in sets:
            mask |= candidates._mask
        return cls(mask)

    @property
    def mask(self) -> int:
        return self._mask

    def first(self) -> Optional[int]:
        """Smallest value in the set, or None when empty."""
        if not self._mask:
            return None
        return (self._mask & -self._mask).bit_length() - 1

    def with_value(self, value: int) -> CandidateSet:
        return CandidateSet(self._mask | (1 << value))

    def without(self, value: int) -> CandidateSet:
        return CandidateSet(self._mask & ~(1 << value))

    def issubset(self, other: CandidateSet) -> bool:
        return self._mask & ~other._mask == 0

    def __contains__(self, value: int) -> bool:
        return value > 0 and bool(self._mask >> value & 1)

    def __iter__(self) -> Iterator[int]:
        mask = self._mask
        while mask:
            low = mask & -mask
            yield low.bit_length() - 1
            mask ^= low

    def __len__(self) -> int:
        return bin(self._mask).count("1")

    def __bool__(self) -> bool:
        return self._mask != 0

    def __or__(self, other: CandidateSet) -> CandidateSet:
        return CandidateSet(self._mask | other._mask)

    def __and__(self, other: CandidateSet) -> CandidateSet:
        return CandidateSet(self._mask & other._mask)

    def __sub__(self, other: CandidateSet) -> CandidateSet:
        return CandidateSet(self._mask & ~other._mask)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CandidateSet):
            return NotImplemented
        return self._mask == other._mask

    def __hash__(self) -> int:
        return hash(self._mask)

    def __repr__(self) -> str:
        return f"CandidateSet({{{', '.join(str(v) for v in self)}}})"
