"""Comparator and range value objects produced by the range translator."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TypeAlias

from .version import Version


class Operator(str, Enum):
    """The five comparison operators a comparator can carry."""

    EQ = "="
    LT = "<"
    LE = "<="
    GT = ">"
    GE = ">="

    @property
    def inclusive(self) -> bool:
        return self in _INCLUSIVE

    @property
    def is_lower_bound(self) -> bool:
        return self in (Operator.GT, Operator.GE)

    @property
    def is_upper_bound(self) -> bool:
        return self in (Operator.LT, Operator.LE)


_INCLUSIVE = frozenset({Operator.EQ, Operator.LE, Operator.GE})


@dataclass(frozen=True, slots=True)
class Comparator:
    """A single ``version OP boundary`` constraint."""

    operator: Operator
    boundary: Version

    @property
    def inclusive(self) -> bool:
        """Whether a version equal to ``boundary`` satisfies this comparator."""
        return self.operator.inclusive

    def __str__(self) -> str:
        return f"{self.operator.value}{self.boundary}"


ComparatorSet: TypeAlias = tuple[Comparator, ...]


@dataclass(frozen=True, slots=True)
class Range:
    """OR-combined comparator sets, as written with ``||`` in range text."""

    alternatives: tuple[ComparatorSet, ...]

    def __post_init__(self) -> None:
        if not self.alternatives:
            raise ValueError("Range must contain at least one comparator set")

    def __str__(self) -> str:
        parts = [" ".join(str(c) for c in comparators) or "*" for comparators in self.alternatives]
        return " || ".join(parts)

    @property
    def matches_all(self) -> bool:
        return any(not comparators for comparators in self.alternatives)
