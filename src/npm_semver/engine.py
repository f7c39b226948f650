"""Public semver operations.

Every function here is total: malformed version or range text never raises,
it yields None, False or 0 instead.
"""

from __future__ import annotations

from collections.abc import Iterable
from functools import cmp_to_key
from typing import Any

from .coerce import coerce
from .compare import compare_versions
from .evaluate import satisfies
from .models import Version
from .parsers.version import parse_version_string
from .solver import intersects, min_version

__all__ = [
    "coerce",
    "compare",
    "intersects",
    "min_version",
    "parse_version",
    "satisfies",
    "sort_versions",
    "valid",
]


def parse_version(text: Any) -> Version | None:
    return parse_version_string(text)


def valid(text: Any) -> str | None:
    """Return the canonical form of ``text`` if it is a valid version."""
    parsed = parse_version_string(text)
    return parsed.version if parsed is not None else None


def compare(left: Any, right: Any) -> int:
    """Return -1, 0 or 1; unparseable input compares equal."""
    cmp = compare_versions(left, right)
    return (cmp > 0) - (cmp < 0)


def sort_versions(values: Iterable[Any]) -> list[Any]:
    """Sort versions ascending by semver precedence.

    The sort is stable, and unparseable items compare equal to everything.
    """
    return sorted(values, key=cmp_to_key(compare))
