"""npm-semver core package.

Parses npm version and range text, compares versions, and answers range
queries. The manifest checker and the CLI are thin layers over the
operations exported here.
"""

from __future__ import annotations

from loguru import logger

from .engine import (
    coerce,
    compare,
    intersects,
    min_version,
    parse_version,
    satisfies,
    sort_versions,
    valid,
)
from .models import Comparator, Operator, Range, Version
from .parsers.range import parse_range

# Silent unless an application opts in with logger.enable("npm_semver").
logger.disable(__name__)

__all__ = [
    "Comparator",
    "Operator",
    "Range",
    "Version",
    "coerce",
    "compare",
    "intersects",
    "min_version",
    "parse_range",
    "parse_version",
    "satisfies",
    "sort_versions",
    "valid",
]
