"""Check versions against comparator sets and ranges."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from .compare import as_version, compare_versions
from .models import Comparator, Operator, Version
from .parsers.range import parse_range


def satisfies_comparator(version: Version, comparator: Comparator) -> bool:
    cmp = compare_versions(version, comparator.boundary)
    if cmp == 0:
        return comparator.inclusive
    if comparator.operator is Operator.EQ:
        return False
    if comparator.operator.is_lower_bound:
        return cmp > 0
    return cmp < 0


def satisfies_comparators(version: Version, comparators: Iterable[Comparator]) -> bool:
    """True when ``version`` satisfies every comparator (an empty set always is)."""
    return all(satisfies_comparator(version, comparator) for comparator in comparators)


def satisfies(version: Any, range_text: Any) -> bool:
    """True when ``version`` parses and satisfies at least one alternative."""
    parsed = as_version(version)
    if parsed is None:
        return False
    parsed_range = parse_range(range_text)
    if parsed_range is None:
        return False
    return any(
        satisfies_comparators(parsed, comparators) for comparators in parsed_range.alternatives
    )
