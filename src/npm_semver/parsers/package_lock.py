"""Parse npm package-lock.json to capture installed top-level versions."""

from __future__ import annotations

import json
from collections.abc import Iterator
from pathlib import Path
from typing import Any

_PREFIX = "node_modules/"


def _top_level_packages(packages: dict[str, Any]) -> Iterator[tuple[str, str]]:
    # lockfile v2+: "node_modules/<name>" keys, nested installs repeat the prefix
    for key, meta in packages.items():
        if not key.startswith(_PREFIX) or not isinstance(meta, dict):
            continue
        name = key[len(_PREFIX):]
        if _PREFIX not in name and meta.get("version"):
            yield name, str(meta["version"])


def _legacy_dependencies(dependencies: dict[str, Any]) -> Iterator[tuple[str, str]]:
    for name, meta in dependencies.items():
        if isinstance(meta, dict) and "version" in meta:
            yield name, str(meta["version"])


def parse(path: Path) -> list[tuple[str, str]]:
    """Return list of (package, version) from lockfile.

    Handles lockfile v1 (``dependencies`` tree) and v2+ (``packages`` map).
    Nested installs such as ``node_modules/a/node_modules/b`` are left out.
    """
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        return []

    pairs: list[tuple[str, str]] = []
    if isinstance(data.get("packages"), dict):
        pairs.extend(_top_level_packages(data["packages"]))
    if isinstance(data.get("dependencies"), dict):
        pairs.extend(_legacy_dependencies(data["dependencies"]))
    return pairs
