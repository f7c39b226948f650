"""Semver precedence ordering."""

from __future__ import annotations

from typing import Any

from .models import Version
from .parsers.version import parse_version_string


def _is_numeric(identifier: str) -> bool:
    return identifier.isascii() and identifier.isdigit()


def _compare_numeric(a: str, b: str) -> int:
    # digit strings of any length, without converting to int
    a, b = a.lstrip("0"), b.lstrip("0")
    if len(a) != len(b):
        return -1 if len(a) < len(b) else 1
    if a != b:
        return -1 if a < b else 1
    return 0


def compare_prerelease(left: tuple[str, ...], right: tuple[str, ...]) -> int:
    """Compare two prerelease identifier sequences element by element."""
    for index in range(max(len(left), len(right))):
        # The shorter sequence runs out first and ranks lower.
        if index >= len(left):
            return -1
        if index >= len(right):
            return 1
        a, b = left[index], right[index]
        a_numeric, b_numeric = _is_numeric(a), _is_numeric(b)
        if a_numeric and b_numeric:
            cmp = _compare_numeric(a, b)
            if cmp:
                return cmp
            continue
        if a_numeric:
            return -1
        if b_numeric:
            return 1
        if a != b:
            return -1 if a < b else 1
    return 0


def as_version(value: Any) -> Version | None:
    if isinstance(value, Version):
        return value
    return parse_version_string(value)


def compare_versions(left_input: Any, right_input: Any) -> int:
    """Return a negative, zero or positive number as ``left`` <, ==, > ``right``.

    Text inputs are parsed strictly. When either side does not parse the
    comparison degrades to 0 instead of raising.
    """
    left = as_version(left_input)
    right = as_version(right_input)
    if left is None or right is None:
        return 0
    if left.major != right.major:
        return left.major - right.major
    if left.minor != right.minor:
        return left.minor - right.minor
    if left.patch != right.patch:
        return left.patch - right.patch
    if not left.prerelease and not right.prerelease:
        return 0
    if not left.prerelease:
        return 1
    if not right.prerelease:
        return -1
    return compare_prerelease(left.prerelease, right.prerelease)
