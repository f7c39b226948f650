"""Parse yarn.lock to capture resolved dependencies."""

from __future__ import annotations

from pathlib import Path


def _package_name(header: str) -> str:
    first = header.split(",", 1)[0].strip().strip('"')
    if first.startswith("@"):
        idx = first.find("@", 1)
        return first[:idx] if idx != -1 else first
    return first.split("@", 1)[0]


def parse(path: Path) -> list[tuple[str, str]]:
    """Return list of (package, version) from a classic or berry yarn lock file."""
    lines = path.read_text(encoding="utf-8").splitlines()
    pairs: list[tuple[str, str]] = []

    current_name: str | None = None
    for raw in lines:
        line = raw.rstrip()
        if not line or line.startswith("#"):
            current_name = None
            continue
        if not line.startswith(" ") and line.endswith(":"):
            current_name = _package_name(line[:-1])
            # berry keeps lockfile metadata in a "__metadata" block
            if current_name.startswith("__"):
                current_name = None
            continue

        stripped = line.strip()
        if current_name and (stripped.startswith("version ") or stripped.startswith("version:")):
            part = stripped[len("version"):].lstrip(":").strip()
            pairs.append((current_name, part.strip('"')))

    return pairs
