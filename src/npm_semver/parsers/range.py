"""Translate npm range text into explicit comparator sets.

Supported expressions:
- alternatives joined by ``||``, each an AND of space separated tokens
- hyphen ranges ``1.2.3 - 2.3.4`` → >=1.2.3 <=2.3.4 (``1.2.3 - 2.x`` → <3.0.0)
- caret ranges ^x.y.z → >=x.y.z <(left-most non-zero part + 1)
- tilde ranges ~x.y.z → >=x.y.z <x.(y+1).0, and ~x → >=x.0.0 <(x+1).0.0
- x-ranges ``1.2.x``, ``1.x``, ``1``, ``*`` and the empty string
- primitive comparators ``=``, ``<``, ``<=``, ``>``, ``>=`` (bare versions mean ``=``)

Malformed tokens contribute no comparators; the translator only rejects input
that is not text at all.
"""

from __future__ import annotations

import re
from typing import Any

from loguru import logger

from ..models import Comparator, ComparatorSet, Operator, Range, WildcardVersion
from .version import parse_version_with_wildcards

_HYPHEN_PATTERN = re.compile(r"(.*)\s+-\s+(.*)")
_OPERATOR_PATTERN = re.compile(r"(<=|>=|<|>|=)?\s*(.*)")


def is_any_token(token: str) -> bool:
    return token in ("*", "") or token.lower() == "x"


def _bounded(parsed: WildcardVersion, upper: Comparator) -> list[Comparator]:
    return [Comparator(Operator.GE, parsed.normalized()), upper]


def parse_hyphen_range(text: str) -> list[Comparator] | None:
    """Translate ``min - max``; None when ``text`` is not a hyphen range."""
    match = _HYPHEN_PATTERN.fullmatch(text)
    if match is None:
        return None
    low = parse_version_with_wildcards(match.group(1).strip())
    high = parse_version_with_wildcards(match.group(2).strip())
    if low is None or high is None:
        return None

    comparators = [Comparator(Operator.GE, low.normalized())]
    if high.has_wildcard:
        upper = high.wildcard_upper_bound()
        if upper is not None:
            comparators.append(Comparator(Operator.LT, upper))
    else:
        comparators.append(Comparator(Operator.LE, high.normalized()))
    return comparators


def _parse_primitive(operator: Operator, parsed: WildcardVersion) -> list[Comparator]:
    if parsed.is_any:
        return []
    lower = parsed.normalized()

    if not parsed.has_wildcard:
        if operator is Operator.EQ:
            return [Comparator(Operator.GE, lower), Comparator(Operator.LE, lower)]
        return [Comparator(operator, lower)]

    upper = parsed.wildcard_upper_bound()
    if operator is Operator.EQ:
        return _bounded(parsed, Comparator(Operator.LT, upper))
    if operator.is_upper_bound:
        return [Comparator(operator, upper)]
    return [Comparator(operator, lower)]


def parse_comparator_token(token: str) -> list[Comparator]:
    """Translate a single whitespace-free token into comparators."""
    trimmed = token.strip()
    if is_any_token(trimmed):
        return []

    if trimmed.startswith("^") or trimmed.startswith("~"):
        parsed = parse_version_with_wildcards(trimmed[1:])
        if parsed is None:
            return []
        if trimmed[0] == "^":
            upper = parsed.caret_upper_bound()
        else:
            upper = parsed.tilde_upper_bound()
        return _bounded(parsed, Comparator(Operator.LT, upper))

    match = _OPERATOR_PATTERN.fullmatch(trimmed)
    if match is None:
        return []
    operator = Operator(match.group(1) or "=")
    parsed = parse_version_with_wildcards(match.group(2))
    if parsed is None:
        logger.debug("Ignoring malformed range token {!r}", trimmed)
        return []
    return _parse_primitive(operator, parsed)


def parse_range_part(part: str) -> ComparatorSet:
    """Translate one ``||`` alternative into an AND-combined comparator set."""
    trimmed = part.strip()
    if not trimmed:
        return ()
    hyphen = parse_hyphen_range(trimmed)
    if hyphen is not None:
        return tuple(hyphen)

    comparators: list[Comparator] = []
    for token in trimmed.split():
        comparators.extend(parse_comparator_token(token))
    return tuple(comparators)


def parse_range(text: Any) -> Range | None:
    """Translate range text into a Range; None only for non-text input."""
    if isinstance(text, Range):
        return text
    if not isinstance(text, str):
        return None
    raw = text.strip()
    if not raw:
        return Range(((),))
    return Range(tuple(parse_range_part(part) for part in raw.split("||")))
