from __future__ import annotations

import json
from collections.abc import Iterator
from pathlib import Path

import pytest
from loguru import logger

from npm_semver.cli import ERROR_EXIT_CODE, FINDINGS_EXIT_CODE, WARN_ONLY_ENV_VAR, main
from npm_semver.config import CONFIG_PATH_ENV_VAR


@pytest.fixture(autouse=True)
def _reset_logging(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.delenv(CONFIG_PATH_ENV_VAR, raising=False)
    monkeypatch.delenv(WARN_ONLY_ENV_VAR, raising=False)
    yield
    logger.remove()
    logger.disable("npm_semver")


@pytest.fixture()
def project(tmp_path: Path) -> Path:
    (tmp_path / "package.json").write_text(
        json.dumps({"dependencies": {"left-pad": "~1.1.0 || ~1.2.0"}}), encoding="utf-8"
    )
    (tmp_path / "package-lock.json").write_text(
        json.dumps({"packages": {"node_modules/left-pad": {"version": "1.3.0"}}}),
        encoding="utf-8",
    )
    return tmp_path


@pytest.mark.parametrize(
    ("argv", "output", "code"),
    [
        (["valid", "v1.2.3"], "1.2.3", 0),
        (["valid", "nope"], "none", 1),
        (["compare", "1.0.0-alpha", "1.0.0"], "-1", 0),
        (["compare", "2.0.0", "1.9.9"], "1", 0),
        (["satisfies", "1.2.3", "^1.0.0"], "true", 0),
        (["satisfies", "2.0.0", "^1.0.0"], "false", 1),
        (["min-version", ">1.2.3 <2.0.0"], "1.2.4", 0),
        (["min-version", ">=2.0.0 <1.0.0"], "none", 1),
        (["intersects", "^1.2.0", "~1.4.0"], "true", 0),
        (["intersects", "^1.0.0", "^2.0.0"], "false", 1),
        (["coerce", "node v18.17"], "18.17.0", 0),
        (["coerce", "no digits"], "none", 1),
    ],
)
def test_queries(
    argv: list[str], output: str, code: int, capsys: pytest.CaptureFixture[str]
) -> None:
    assert main(argv) == code
    assert capsys.readouterr().out.strip() == output


def test_sort(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["sort", "1.10.0", "1.2.0", "1.2.0-rc.1", "0.9.0"]) == 0
    assert capsys.readouterr().out.split() == ["0.9.0", "1.2.0-rc.1", "1.2.0", "1.10.0"]


def test_check_reports_findings(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["check", "--root", str(project)]) == FINDINGS_EXIT_CODE
    report = json.loads(capsys.readouterr().out)
    assert report["totals"] == {"projects": 1, "dependencies": 1, "findings": 1}
    assert report["projects"][0]["findings"][0]["minimum"] == "1.1.0"


def test_check_warn_only_flag(project: Path) -> None:
    assert main(["check", "--root", str(project), "--warn-only"]) == 0


def test_check_warn_only_env(project: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(WARN_ONLY_ENV_VAR, "true")
    assert main(["check", "--root", str(project)]) == 0


def test_check_markdown(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    main(["check", "--root", str(project), "--format", "markdown", "--warn-only"])
    out = capsys.readouterr().out
    assert out.startswith("# npm-semver Summary")
    assert "~1.1.0 \\|\\| ~1.2.0" in out


def test_check_clean_project(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (tmp_path / "package.json").write_text(
        json.dumps({"dependencies": {"a": "^1.0.0"}}), encoding="utf-8"
    )
    assert main(["check", "--root", str(tmp_path)]) == 0
    assert json.loads(capsys.readouterr().out)["hasFindings"] is False


def test_check_config_error(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["check", "--root", str(project), "--config", str(project / "missing.json")])
    assert code == ERROR_EXIT_CODE
    assert capsys.readouterr().err.startswith("ERROR: Configuration file not found")


def test_check_broken_lockfile(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (project / "package-lock.json").write_text("[", encoding="utf-8")
    assert main(["check", "--root", str(project)]) == ERROR_EXIT_CODE
    assert "ERROR: Failed to parse" in capsys.readouterr().err


def test_log_level_enables_diagnostics(
    project: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    main(["--log-level", "info", "check", "--root", str(project), "--warn-only"])
    assert "INFO: Checking ." in capsys.readouterr().err
