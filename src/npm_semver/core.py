"""Core checking entrypoints.

Compares the dependency ranges declared in each package.json against the
versions pinned by the lockfile next to it. Everything here works on local
files only.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from itertools import combinations
from pathlib import Path
from typing import Any

import yaml
from loguru import logger

from .coerce import coerce
from .config import Settings
from .discovery import discover_manifests, find_lockfile
from .engine import intersects, min_version, parse_version, satisfies
from .models import Version
from .parsers.package_json import parse as parse_package_json
from .parsers.package_lock import parse as parse_package_lock
from .parsers.pnpm_lock import parse as parse_pnpm_lock
from .parsers.yarn_lock import parse as parse_yarn_lock
from .report import aggregate

_LOCK_PARSERS = {
    "package-lock.json": parse_package_lock,
    "pnpm-lock.yaml": parse_pnpm_lock,
    "yarn.lock": parse_yarn_lock,
}


class ManifestError(RuntimeError):
    """Raised when a manifest or lockfile cannot be read or decoded."""


def is_semver_range(expr: str) -> bool:
    """False for specifiers such as ``file:..``, git URLs, ``npm:`` aliases and tarballs."""
    return ":" not in expr and "/" not in expr


def load_lockfile(path: Path) -> dict[str, list[str]]:
    """Return package -> locked versions for any supported lockfile."""
    parser = _LOCK_PARSERS[path.name]
    try:
        pairs = parser(path)
    except (OSError, UnicodeDecodeError, ValueError, yaml.YAMLError) as exc:
        raise ManifestError(f"Failed to parse {path}: {exc}") from exc

    installed: dict[str, list[str]] = defaultdict(list)
    for name, version in pairs:
        if version not in installed[name]:
            installed[name].append(version)
    return dict(installed)


def _finding(
    section: str,
    name: str,
    range_expr: str,
    reason: str,
    installed: list[str],
    minimum: Version | None,
) -> dict[str, Any]:
    return {
        "package": name,
        "section": section,
        "range": range_expr,
        "installed": installed,
        "reason": reason,
        "minimum": minimum.version if minimum is not None else None,
    }


def check_dependency(
    section: str,
    name: str,
    range_expr: str,
    installed: dict[str, list[str]] | None,
) -> dict[str, Any] | None:
    """Check one declaration; returns a finding or None when it is consistent.

    ``installed`` is None when the project has no lockfile, in which case only
    the range itself is checked.
    """
    minimum = min_version(range_expr)
    if minimum is None:
        return _finding(section, name, range_expr, "unsatisfiable-range", [], None)
    if installed is None:
        return None

    versions = installed.get(name, [])
    if not versions:
        return _finding(section, name, range_expr, "missing", [], minimum)

    parsed = [v for v in (parse_version(raw) or coerce(raw) for raw in versions) if v is not None]
    if not parsed:
        return _finding(section, name, range_expr, "invalid-version", versions, minimum)

    if not any(satisfies(version, range_expr) for version in parsed):
        return _finding(section, name, range_expr, "outside-range", versions, minimum)
    return None


def _conflicts(declarations: dict[str, list[tuple[str, str]]]) -> Iterable[dict[str, Any]]:
    for name, entries in declarations.items():
        for (left_section, left), (right_section, right) in combinations(entries, 2):
            if not intersects(left, right):
                yield _finding(
                    f"{left_section}, {right_section}",
                    name,
                    f"{left} vs {right}",
                    "conflicting-ranges",
                    [],
                    None,
                )
                break


def check_project(manifest: Path, root: Path, sections: Iterable[str]) -> dict[str, Any]:
    """Check a single package.json against its lockfile."""
    try:
        declared = parse_package_json(manifest, sections)
    except (OSError, UnicodeDecodeError, ValueError) as exc:
        raise ManifestError(f"Failed to parse {manifest}: {exc}") from exc

    lockfile = find_lockfile(manifest.parent)
    installed = load_lockfile(lockfile) if lockfile is not None else None
    path = str(manifest.parent.relative_to(root))
    logger.info("Checking {} ({})", path, lockfile.name if lockfile else "no lockfile")

    findings: list[dict[str, Any]] = []
    declarations: dict[str, list[tuple[str, str]]] = defaultdict(list)
    for section, name, range_expr in declared:
        if not is_semver_range(range_expr):
            logger.debug("Skipping {} {!r}: not a semver range", name, range_expr)
            continue
        declarations[name].append((section, range_expr))
        finding = check_dependency(section, name, range_expr, installed)
        if finding is not None:
            findings.append(finding)

    findings.extend(_conflicts(declarations))

    return {
        "path": path,
        "lockfile": lockfile.name if lockfile is not None else None,
        "checked": sum(len(entries) for entries in declarations.values()),
        "findings": findings,
    }


def check_repository(root: Path, settings: Settings | None = None) -> dict[str, Any]:
    """Check every package.json under root.

    Params:
        root: directory to search for projects
        settings: sections and exclusions to use; defaults when None

    Returns: dict report matching report.REPORT_SCHEMA
    """
    root = root.resolve()
    settings = settings or Settings()

    projects = [
        check_project(manifest, root, settings.sections)
        for manifest in discover_manifests(root, settings.exclude)
    ]
    return aggregate(projects)
