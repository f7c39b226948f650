"""Best-effort extraction of a version from loose text."""

from __future__ import annotations

import re
from typing import Any

from .models import Version
from .parsers.version import parse_version_string, to_int

_COERCE_PATTERN = re.compile(r"([0-9]+)(?:\.([0-9]+))?(?:\.([0-9]+))?")


def coerce(value: Any) -> Version | None:
    """Pull the first ``N[.N[.N]]`` run out of ``value``.

    Numbers are stringified and parsed strictly. Prerelease and build suffixes
    are always dropped, so ``v1.2.3-rc.1`` coerces to ``1.2.3``.
    """
    if value is None:
        return None
    if isinstance(value, float) and value.is_integer():
        # str() would switch to exponent form from 1e16 on
        return parse_version_string(str(int(value)))
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return parse_version_string(str(value))
    match = _COERCE_PATTERN.search(str(value))
    if match is None:
        return None
    numbers = [to_int(raw or "0") for raw in match.groups()]
    if None in numbers:
        return None
    return Version(*numbers)
