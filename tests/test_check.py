from __future__ import annotations

import json
from pathlib import Path

import pytest

from npm_semver.config import Settings
from npm_semver.core import (
    ManifestError,
    check_dependency,
    check_project,
    check_repository,
    is_semver_range,
    load_lockfile,
)
from npm_semver.discovery import discover_manifests, find_lockfile


def _write_json(path: Path, data: object) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


@pytest.fixture()
def workspace(tmp_path: Path) -> Path:
    _write_json(
        tmp_path / "package.json",
        {
            "name": "app",
            "dependencies": {
                "lodash": "^4.17.0",
                "left-pad": "~1.1.0",
                "local": "file:../local",
                "missing-pkg": "^1.0.0",
                "broken": "^2.0.0 <1.0.0",
            },
            "devDependencies": {"react": "^18.0.0"},
            "peerDependencies": {"react": "^17.0.0"},
        },
    )
    _write_json(
        tmp_path / "package-lock.json",
        {
            "lockfileVersion": 3,
            "packages": {
                "": {"name": "app"},
                "node_modules/lodash": {"version": "4.17.21"},
                "node_modules/left-pad": {"version": "1.3.0"},
                "node_modules/react": {"version": "18.2.0"},
            },
        },
    )
    _write_json(
        tmp_path / "packages" / "web" / "package.json",
        {"dependencies": {"a": "^1.0.0", "b": ">3.0.0 <3.0.0"}},
    )
    _write_json(
        tmp_path / "node_modules" / "lodash" / "package.json",
        {"dependencies": {"never": "^9.9.9"}},
    )
    return tmp_path


def test_discovery_skips_vendor_directories(workspace: Path) -> None:
    found = discover_manifests(workspace)
    assert [p.relative_to(workspace.resolve()).as_posix() for p in found] == [
        "package.json",
        "packages/web/package.json",
    ]
    assert find_lockfile(workspace).name == "package-lock.json"
    assert find_lockfile(workspace / "packages" / "web") is None


def test_check_repository(workspace: Path) -> None:
    report = check_repository(workspace)

    assert report["hasFindings"] is True
    assert report["totals"] == {"projects": 2, "dependencies": 8, "findings": 6}

    root, web = report["projects"]
    assert root["path"] == "."
    assert root["lockfile"] == "package-lock.json"
    assert root["checked"] == 6
    by_key = {(f["package"], f["reason"]): f for f in root["findings"]}
    assert set(by_key) == {
        ("left-pad", "outside-range"),
        ("missing-pkg", "missing"),
        ("broken", "unsatisfiable-range"),
        ("react", "outside-range"),
        ("react", "conflicting-ranges"),
    }
    assert by_key[("left-pad", "outside-range")]["installed"] == ["1.3.0"]
    assert by_key[("left-pad", "outside-range")]["minimum"] == "1.1.0"
    assert by_key[("react", "outside-range")]["section"] == "peerDependencies"
    assert by_key[("react", "outside-range")]["minimum"] == "17.0.0"
    assert by_key[("missing-pkg", "missing")]["minimum"] == "1.0.0"
    assert by_key[("broken", "unsatisfiable-range")]["minimum"] is None
    conflict = by_key[("react", "conflicting-ranges")]
    assert conflict["section"] == "devDependencies, peerDependencies"
    assert conflict["range"] == "^18.0.0 vs ^17.0.0"

    assert web["path"] == "packages/web"
    assert web["lockfile"] is None
    assert web["checked"] == 2
    assert [(f["package"], f["reason"]) for f in web["findings"]] == [
        ("b", "unsatisfiable-range")
    ]


def test_settings_limit_sections(workspace: Path) -> None:
    report = check_repository(workspace, Settings(sections=("devDependencies",)))
    assert report["totals"] == {"projects": 2, "dependencies": 1, "findings": 0}
    assert report["hasFindings"] is False


def test_settings_exclude(workspace: Path) -> None:
    report = check_repository(workspace, Settings(exclude=("node_modules", "packages")))
    assert [p["path"] for p in report["projects"]] == ["."]


def test_check_dependency_without_lockfile() -> None:
    assert check_dependency("dependencies", "a", "^1.0.0", None) is None


def test_invalid_locked_version() -> None:
    finding = check_dependency("dependencies", "a", "^1.0.0", {"a": ["banana"]})
    assert finding is not None
    assert finding["reason"] == "invalid-version"
    assert finding["installed"] == ["banana"]


def test_locked_versions_are_coerced() -> None:
    installed = {"a": ["1.2.3(react@18.2.0)"]}
    assert check_dependency("dependencies", "a", "^1.0.0", installed) is None


def test_any_locked_version_may_satisfy() -> None:
    installed = {"a": ["2.0.0", "1.4.0"]}
    assert check_dependency("dependencies", "a", "^1.0.0", installed) is None


@pytest.mark.parametrize(
    ("expr", "expected"),
    [
        ("^1.0.0", True),
        (">=1 <2 || 3.x", True),
        ("latest", True),
        ("file:../local", False),
        ("git+https://github.com/a/b.git", False),
        ("npm:other@^1.0.0", False),
        ("user/repo", False),
        ("workspace:*", False),
    ],
)
def test_is_semver_range(expr: str, expected: bool) -> None:
    assert is_semver_range(expr) is expected


def test_yarn_project(tmp_path: Path) -> None:
    manifest = _write_json(tmp_path / "package.json", {"dependencies": {"lodash": "^4.17.0"}})
    (tmp_path / "yarn.lock").write_text(
        'lodash@^4.17.0:\n  version "4.16.0"\n', encoding="utf-8"
    )
    project = check_project(manifest, tmp_path, ["dependencies"])
    assert project["lockfile"] == "yarn.lock"
    assert [(f["package"], f["reason"]) for f in project["findings"]] == [
        ("lodash", "outside-range")
    ]


def test_load_lockfile_deduplicates(tmp_path: Path) -> None:
    lock = tmp_path / "yarn.lock"
    lock.write_text(
        'a@^1.0.0:\n  version "1.0.0"\n\na@~1.0.0:\n  version "1.0.0"\n\n'
        'a@^2.0.0:\n  version "2.1.0"\n',
        encoding="utf-8",
    )
    assert load_lockfile(lock) == {"a": ["1.0.0", "2.1.0"]}


def test_broken_lockfile_raises(tmp_path: Path) -> None:
    lock = tmp_path / "package-lock.json"
    lock.write_text("{not json", encoding="utf-8")
    with pytest.raises(ManifestError):
        load_lockfile(lock)


def test_broken_pnpm_lockfile_raises(tmp_path: Path) -> None:
    lock = tmp_path / "pnpm-lock.yaml"
    lock.write_text("packages: [unclosed\n", encoding="utf-8")
    with pytest.raises(ManifestError):
        load_lockfile(lock)


def test_broken_manifest_raises(tmp_path: Path) -> None:
    manifest = tmp_path / "package.json"
    manifest.write_text("", encoding="utf-8")
    with pytest.raises(ManifestError):
        check_project(manifest, tmp_path, ["dependencies"])


def test_pnpm_lockfile_with_list_packages(tmp_path: Path) -> None:
    manifest = _write_json(tmp_path / "package.json", {"dependencies": {"a": "^1.0.0"}})
    (tmp_path / "pnpm-lock.yaml").write_text("packages:\n  - a\n", encoding="utf-8")
    project = check_project(manifest, tmp_path, ["dependencies"])
    assert [(f["package"], f["reason"]) for f in project["findings"]] == [("a", "missing")]


def test_overlong_range_component_is_not_fatal(tmp_path: Path) -> None:
    manifest = _write_json(
        tmp_path / "package.json", {"dependencies": {"a": ">=1." + "9" * 5000}}
    )
    project = check_project(manifest, tmp_path, ["dependencies"])
    assert project["checked"] == 1
    assert project["findings"] == []
