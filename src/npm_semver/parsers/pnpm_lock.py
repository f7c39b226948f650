"""Parse pnpm-lock.yaml to capture resolved dependencies."""

from __future__ import annotations

from pathlib import Path


def parse(path: Path) -> list[tuple[str, str]]:
    """Return list of (package, version) from pnpm lock file.

    Keys look like "/name@1.2.3", "/@scope/name@1.2.3" or, from lockfile v6
    on, "/name@1.2.3(peer@4.5.6)". Lockfile v9 drops the leading slash.
    """
    import yaml

    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        return []
    pkgs = data.get("packages") or {}
    if not isinstance(pkgs, dict):
        return []

    pairs: list[tuple[str, str]] = []
    for key in pkgs.keys():
        if not isinstance(key, str):
            continue
        ref = key[1:] if key.startswith("/") else key
        ref = ref.split("(", 1)[0]
        if "@" not in ref[1:]:
            continue
        name, version = ref.rsplit("@", 1)
        if name and version:
            pairs.append((name, version))

    return pairs
