"""Command-line entrypoint: semver queries and the local manifest check.

Usage:
  npm-semver satisfies 1.2.3 "^1.0.0"
  npm-semver min-version ">1.0.0 <2.0.0"
  npm-semver check --root . [--format markdown] [--warn-only]
"""

from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path

from loguru import logger

from . import engine
from .config import DEFAULT_LOG_LEVEL, LOG_LEVELS, ConfigError, load_settings
from .core import ManifestError, check_repository
from .models import Version
from .report import ReportSchemaError
from .summary import render_summary

FINDINGS_EXIT_CODE = 10
ERROR_EXIT_CODE = 2
WARN_ONLY_ENV_VAR = "NPM_SEMVER_WARN_ONLY"


def configure_logging(level: str) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), format="{level}: {message}")
    logger.enable("npm_semver")


def _print_version(version: Version | None) -> int:
    print(version.version if version is not None else "none")
    return 0 if version is not None else 1


def _print_bool(value: bool) -> int:
    print("true" if value else "false")
    return 0 if value else 1


def _truthy_env(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in {"1", "true", "yes", "y"}


def _run_check(args: argparse.Namespace) -> int:
    try:
        settings = load_settings(args.config, root=args.root)
        configure_logging(args.log_level or settings.log_level)
        report = check_repository(args.root, settings)
    except (ConfigError, ManifestError, ReportSchemaError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return ERROR_EXIT_CODE

    if args.format == "markdown":
        print(render_summary(report), end="")
    else:
        print(json.dumps(report, indent=2))

    if report["hasFindings"] and not (args.warn_only or _truthy_env(WARN_ONLY_ENV_VAR)):
        return FINDINGS_EXIT_CODE
    return 0


def _dispatch(args: argparse.Namespace) -> int:
    if args.command == "check":
        return _run_check(args)

    configure_logging(args.log_level or DEFAULT_LOG_LEVEL)
    if args.command == "valid":
        return _print_version(engine.parse_version(args.version))
    if args.command == "compare":
        print(engine.compare(args.left, args.right))
        return 0
    if args.command == "satisfies":
        return _print_bool(engine.satisfies(args.version, args.range))
    if args.command == "min-version":
        return _print_version(engine.min_version(args.range))
    if args.command == "intersects":
        return _print_bool(engine.intersects(args.left, args.right))
    if args.command == "coerce":
        return _print_version(engine.coerce(args.text))
    if args.command == "sort":
        for version in engine.sort_versions(args.versions):
            print(version)
        return 0
    raise AssertionError(f"unhandled command {args.command!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="npm-semver", description=__doc__.splitlines()[0])
    parser.add_argument(
        "--log-level",
        default=None,
        type=str.upper,
        choices=sorted(LOG_LEVELS),
        help="loguru level for diagnostics on stderr (default: WARNING or the configured level)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("valid", help="Print the canonical form of a version")
    p.add_argument("version")

    p = sub.add_parser("compare", help="Print -1, 0 or 1 comparing two versions")
    p.add_argument("left")
    p.add_argument("right")

    p = sub.add_parser("satisfies", help="Test whether a version satisfies a range")
    p.add_argument("version")
    p.add_argument("range")

    p = sub.add_parser("min-version", help="Print the lowest version satisfying a range")
    p.add_argument("range")

    p = sub.add_parser("intersects", help="Test whether two ranges overlap")
    p.add_argument("left")
    p.add_argument("right")

    p = sub.add_parser("coerce", help="Extract a version from loose text")
    p.add_argument("text")

    p = sub.add_parser("sort", help="Sort versions by semver precedence")
    p.add_argument("versions", nargs="+")

    p = sub.add_parser("check", help="Check package.json ranges against lockfiles")
    p.add_argument("--root", type=Path, default=Path("."))
    p.add_argument("--config", type=Path, default=None, help="Path to a JSON settings file")
    p.add_argument("--format", choices=("json", "markdown"), default="json")
    p.add_argument("--warn-only", action="store_true", help="Exit 0 even when findings exist")

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    return _dispatch(args)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
