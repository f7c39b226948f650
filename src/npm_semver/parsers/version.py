"""Parse version text, strictly or with range wildcards.

Both parsers return None rather than raising when the text does not look like
a version; callers branch on the absence.
"""

from __future__ import annotations

import re
from typing import Any

from loguru import logger

from ..models import Version, WildcardVersion

WILDCARD_VALUES = frozenset({"x", "X", "*", ""})

# Longer digit runs are rejected as malformed; int() and str() refuse
# conversions past a few thousand digits.
MAX_COMPONENT_DIGITS = 256

_STRICT_PATTERN = re.compile(
    r"[v=\s]*([0-9]+)(?:\.([0-9]+))?(?:\.([0-9]+))?"
    r"(?:-([0-9A-Za-z.-]+))?(?:\+[0-9A-Za-z.-]+)?"
)
_WILDCARD_PATTERN = re.compile(
    r"[v=\s]*([0-9]+|[xX*])(?:\.([0-9]+|[xX*]))?(?:\.([0-9]+|[xX*]))?"
    r"(?:-([0-9A-Za-z.-]+))?"
)


def to_int(digits: str) -> int | None:
    """Convert a digit run, or None when it is too long to be a version part."""
    if len(digits) > MAX_COMPONENT_DIGITS:
        return None
    return int(digits)


def _split_prerelease(raw: str | None) -> tuple[str, ...]:
    return tuple(raw.split(".")) if raw else ()


def parse_version_string(value: Any) -> Version | None:
    """Parse ``value`` as a concrete version.

    Missing minor/patch default to 0 and build metadata is dropped, so
    ``v1.2`` parses as ``1.2.0`` and ``1.2.3+abc`` as ``1.2.3``.
    """
    if value is None:
        return None
    cleaned = str(value).strip()
    if not cleaned:
        return None
    match = _STRICT_PATTERN.fullmatch(cleaned)
    if match is None:
        return None
    major, minor, patch, prerelease = match.groups()
    numbers = [to_int(raw) for raw in (major, minor or "0", patch or "0")]
    if None in numbers:
        return None
    return Version(*numbers, _split_prerelease(prerelease))


def parse_version_with_wildcards(value: Any) -> WildcardVersion | None:
    """Parse a range body such as ``1.x``, ``1.2`` or ``*``.

    Empty input is the unconstrained marker: every component unset.
    """
    if value is None:
        return None
    cleaned = str(value).strip()
    if not cleaned:
        return WildcardVersion(None, None, None)
    match = _WILDCARD_PATTERN.fullmatch(cleaned)
    if match is None:
        logger.debug("Unparseable version body {!r}", cleaned)
        return None
    *parts, prerelease = match.groups()
    components: list[int | None] = []
    for raw in parts:
        if raw is None or raw in WILDCARD_VALUES:
            components.append(None)
            continue
        number = to_int(raw)
        if number is None:
            logger.debug("Version component too long in {!r}", cleaned)
            return None
        components.append(number)
    return WildcardVersion(*components, _split_prerelease(prerelease))
