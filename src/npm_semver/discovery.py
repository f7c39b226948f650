"""Project and manifest discovery utilities."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path


EXCLUDES = {"node_modules", ".git", ".venv"}

# Checked in order; the first one present next to package.json wins.
LOCKFILES = ("package-lock.json", "pnpm-lock.yaml", "yarn.lock")


def discover_manifests(root: Path, exclude: Iterable[str] = EXCLUDES) -> list[Path]:
    """Find package.json files recursively under root (excluding vendor dirs)."""
    root = root.resolve()
    excluded = set(exclude)
    found: list[Path] = []

    def should_skip(p: Path) -> bool:
        return any(part in excluded for part in p.parts)

    for path in root.rglob("package.json"):
        if not path.is_file():
            continue
        if should_skip(path.relative_to(root)):
            continue
        found.append(path)

    return sorted(found)


def find_lockfile(project: Path) -> Path | None:
    """Return the lockfile that belongs to the project directory, if any."""
    for name in LOCKFILES:
        candidate = project / name
        if candidate.is_file():
            return candidate
    return None
