"""Parse package.json and extract declared dependency ranges."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

DEFAULT_SECTIONS = (
    "dependencies",
    "devDependencies",
    "peerDependencies",
    "optionalDependencies",
)


def parse(path: Path, sections: Iterable[str] = DEFAULT_SECTIONS) -> list[tuple[str, str, str]]:
    """Return list of (section, package, range_expr) from the given sections.

    Sections that are missing or not JSON objects are ignored.
    """
    import json

    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        return []

    triples: list[tuple[str, str, str]] = []
    for section in sections:
        deps = data.get(section)
        if not isinstance(deps, dict):
            continue
        for name, version in deps.items():
            triples.append((section, name, str(version)))

    return triples
