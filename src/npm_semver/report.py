"""Report aggregation and schema-checked output."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from jsonschema import Draft202012Validator

REASONS = (
    "outside-range",
    "missing",
    "invalid-version",
    "unsatisfiable-range",
    "conflicting-ranges",
)

_COUNT = {"type": "integer", "minimum": 0}

REPORT_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "required": ["version", "hasFindings", "projects", "totals"],
    "additionalProperties": False,
    "properties": {
        "version": {"const": "1"},
        "hasFindings": {"type": "boolean"},
        "projects": {"type": "array", "items": {"$ref": "#/$defs/project"}},
        "totals": {
            "type": "object",
            "required": ["projects", "dependencies", "findings"],
            "additionalProperties": False,
            "properties": {"projects": _COUNT, "dependencies": _COUNT, "findings": _COUNT},
        },
    },
    "$defs": {
        "project": {
            "type": "object",
            "required": ["path", "lockfile", "checked", "findings"],
            "additionalProperties": False,
            "properties": {
                "path": {"type": "string", "minLength": 1},
                "lockfile": {"type": ["string", "null"]},
                "checked": _COUNT,
                "findings": {"type": "array", "items": {"$ref": "#/$defs/finding"}},
            },
        },
        "finding": {
            "type": "object",
            "required": ["package", "section", "range", "installed", "reason", "minimum"],
            "additionalProperties": False,
            "properties": {
                "package": {"type": "string", "minLength": 1},
                "section": {"type": "string", "minLength": 1},
                "range": {"type": "string"},
                "installed": {"type": "array", "items": {"type": "string"}},
                "reason": {"enum": list(REASONS)},
                "minimum": {"type": ["string", "null"]},
            },
        },
    },
}

_VALIDATOR = Draft202012Validator(REPORT_SCHEMA)


class ReportSchemaError(ValueError):
    """Raised when a report does not conform to REPORT_SCHEMA."""


def _format_errors(errors: Iterable) -> str:
    messages = []
    for error in errors:
        pointer = "/".join(str(p) for p in error.path)
        messages.append(f"- {pointer or '<root>'}: {error.message}")
    return "\n".join(messages)


def validate_report(report: dict[str, Any]) -> None:
    errors = sorted(_VALIDATOR.iter_errors(report), key=lambda e: [str(p) for p in e.path])
    if errors:
        raise ReportSchemaError("\n" + _format_errors(errors))


def aggregate(projects: list[dict[str, Any]]) -> dict[str, Any]:
    """Aggregate per-project findings into a single schema-checked report.

    Each entry in ``projects`` carries ``path``, ``lockfile``, ``checked`` (the
    number of declarations examined) and ``findings``.
    """

    total_dependencies = sum(p.get("checked", 0) for p in projects)
    total_findings = sum(len(p.get("findings", [])) for p in projects)

    report: dict[str, Any] = {
        "version": "1",
        "hasFindings": total_findings > 0,
        "projects": projects,
        "totals": {
            "projects": len(projects),
            "dependencies": total_dependencies,
            "findings": total_findings,
        },
    }

    validate_report(report)
    return report
