"""Minimum satisfying versions and range overlap.

A comparator set is treated as one interval over the version ordering. The
lowest candidate is the lower bound itself, or the next patch when that bound
is exclusive, and is then nudged upward one patch at a time until it satisfies
every comparator. The nudging is capped at ``MAX_NUDGES`` attempts; running out
counts as unsatisfiable. The search never steps through prerelease versions, so
it is exact for sets produced by the range translator but only approximate for
hand-built sets whose gaps are smaller than one patch.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from loguru import logger

from .compare import compare_versions
from .evaluate import satisfies_comparators
from .models import ZERO, Comparator, Operator, Version
from .parsers.range import parse_range

MAX_NUDGES = 10


@dataclass(frozen=True, slots=True)
class Bound:
    version: Version | None
    inclusive: bool = True
    defined: bool = False


def _tighter(current: Bound, comparator: Comparator, direction: int) -> bool:
    """True when ``comparator`` narrows ``current``; direction 1 for lower bounds."""
    if not current.defined:
        return True
    cmp = compare_versions(comparator.boundary, current.version) * direction
    return cmp > 0 or (cmp == 0 and not comparator.inclusive)


def interval_bounds(comparators: tuple[Comparator, ...]) -> tuple[Bound, Bound]:
    """Collapse AND-combined comparators into their (lower, upper) bounds."""
    lower = Bound(ZERO)
    upper = Bound(None)
    for comparator in comparators:
        bound = Bound(comparator.boundary, comparator.inclusive, defined=True)
        if comparator.operator is Operator.EQ:
            lower = upper = bound
        elif comparator.operator.is_lower_bound:
            if _tighter(lower, comparator, 1):
                lower = bound
        elif _tighter(upper, comparator, -1):
            upper = bound
    return lower, upper


def min_satisfying_version(comparators: tuple[Comparator, ...]) -> Version | None:
    """Return the lowest version satisfying every comparator, or None."""
    if not comparators:
        return ZERO

    lower, upper = interval_bounds(comparators)
    if lower.defined and upper.defined:
        cmp = compare_versions(lower.version, upper.version)
        if cmp > 0 or (cmp == 0 and not (lower.inclusive and upper.inclusive)):
            return None

    candidate = lower.version if lower.defined else ZERO
    if lower.defined and not lower.inclusive:
        candidate = candidate.increment_patch()

    if upper.defined:
        cmp = compare_versions(candidate, upper.version)
        if cmp > 0 or (cmp == 0 and not upper.inclusive):
            return None

    for _ in range(MAX_NUDGES):
        if satisfies_comparators(candidate, comparators):
            return candidate
        candidate = candidate.increment_patch()
        if upper.defined and compare_versions(candidate, upper.version) > 0:
            return None

    logger.debug(
        "Gave up searching for a minimum of {} after {} attempts",
        " ".join(str(c) for c in comparators),
        MAX_NUDGES,
    )
    return None


def min_version(range_text: Any) -> Version | None:
    """Lowest version satisfying any alternative of the range, or None."""
    parsed = parse_range(range_text)
    if parsed is None:
        return None
    best: Version | None = None
    for comparators in parsed.alternatives:
        candidate = min_satisfying_version(comparators)
        if candidate is None:
            continue
        if best is None or compare_versions(candidate, best) < 0:
            best = candidate
    return best


def intersects(range_a: Any, range_b: Any) -> bool:
    """True when some alternative of ``range_a`` overlaps some alternative of ``range_b``."""
    parsed_a = parse_range(range_a)
    parsed_b = parse_range(range_b)
    if parsed_a is None or parsed_b is None:
        return False
    return any(
        min_satisfying_version(left + right) is not None
        for left in parsed_a.alternatives
        for right in parsed_b.alternatives
    )
