"""Human-readable Markdown rendering of a check report."""

from __future__ import annotations

from typing import Any


def _cell(value: str) -> str:
    # range text may contain "||", which would split a Markdown table cell
    return value.replace("|", "\\|")


def render_summary(report: dict[str, Any]) -> str:
    """Return a Markdown string with totals and a table of inconsistent declarations."""
    totals = report.get("totals", {})
    projects = report.get("projects", [])

    lines = []
    lines.append("# npm-semver Summary")
    lines.append("")
    lines.append(
        f"Total projects: {totals.get('projects', 0)} | "
        f"Dependencies: {totals.get('dependencies', 0)} | "
        f"Findings: {totals.get('findings', 0)}"
    )
    lines.append("")
    lines.append("| Project | Package | Range | Installed | Reason | Minimum |")
    lines.append("| --- | --- | --- | --- | --- | --- |")

    has_rows = False

    for proj in projects:
        path = proj.get("path") or "(unknown project)"
        findings = proj.get("findings") or []
        if not findings:
            lines.append(f"| {path} | No findings | n/a | n/a | n/a | n/a |")
            has_rows = True
            continue

        for finding in findings:
            pkg = finding.get("package", "")
            rng = _cell(finding.get("range", ""))
            inst = ",".join(finding.get("installed", []) or []) or "n/a"
            reason = finding.get("reason", "")
            minimum = finding.get("minimum") or "n/a"
            lines.append(f"| {path} | {pkg} | {rng} | {inst} | {reason} | {minimum} |")
            has_rows = True

    if not has_rows:
        lines.append("| (no projects found) | No findings | n/a | n/a | n/a | n/a |")

    return "\n".join(lines) + "\n"
