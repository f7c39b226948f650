"""Value objects shared by the parsers, evaluator and solver."""

from __future__ import annotations

from .comparator import Comparator, ComparatorSet, Operator, Range
from .version import ZERO, Version, WildcardVersion, format_version

__all__ = [
    "Comparator",
    "ComparatorSet",
    "Operator",
    "Range",
    "Version",
    "WildcardVersion",
    "ZERO",
    "format_version",
]
