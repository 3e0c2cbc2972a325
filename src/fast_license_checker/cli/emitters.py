# flc:header:start
#
#   project      : Fast License Checker
#   file         : emitters.py
#   file_relpath : src/fast_license_checker/cli/emitters.py
#   license      : MIT
#   copyright    : (c) 2025 Fast License Checker contributors
#
# flc:header:end

"""Render scan and fix reports for humans, machines and GitHub Actions.

Formats:
    - ``text``: colored counters, a 40-cell progress bar and per-file details.
    - ``json``: summary plus per-file results with stable enum keys.
    - ``github``: workflow commands (``::error file=...::``) per failing file
      followed by one summary annotation.

All emitters write through the `ClickConsole` so that color handling and
stream redirection (``CliRunner``) stay in one place.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import TYPE_CHECKING, Any, Final, Union

from fast_license_checker.engine.results import FixKind, FixReport, ScanReport, StatusKind

if TYPE_CHECKING:
    from pathlib import Path

    from fast_license_checker.cli.console import ClickConsole
    from fast_license_checker.engine.results import FixResult, ScanResult, ScanSummary

Report = Union[ScanReport, FixReport]

BAR_WIDTH: Final[int] = 40


class OutputFormat(str, Enum):
    """Report output formats."""

    TEXT = "text"
    JSON = "json"
    GITHUB = "github"


def display_path(path: Path, root: Path) -> str:
    """Return ``path`` relative to ``root`` when possible, in POSIX form."""
    base: Path = root if root.is_dir() else root.parent
    try:
        return path.relative_to(base).as_posix()
    except ValueError:
        return path.as_posix()


def progress_bar(passed: int, total: int, width: int = BAR_WIDTH) -> tuple[str, str, int]:
    """Return the filled part, the empty part and the integer pass percentage."""
    pct: int = int(passed * 100 / total) if total else 0
    filled: int = pct * width // 100
    return "█" * filled, "░" * (width - filled), pct


# ------------------------------- text -------------------------------


def _counters_line(console: ClickConsole, summary: ScanSummary) -> str:
    parts: list[str] = [console.styled(f"✓ Passed: {summary.passed}", fg="green")]
    if summary.failed:
        parts.append(console.styled(f"✗ Failed: {summary.failed}", fg="red"))
    if summary.skipped:
        parts.append(console.styled(f"⚠ Skipped: {summary.skipped}", fg="yellow"))
    parts.append(console.styled(f"Total: {summary.total}", fg="cyan"))
    return "  ".join(parts)


def _scan_details(
    console: ClickConsole, report: ScanReport, root: Path, *, show_skipped: bool
) -> None:
    failed: list[ScanResult] = [r for r in report.results if r.status.is_failure]
    skipped: list[ScanResult] = [r for r in report.results if r.status.kind is StatusKind.SKIPPED]
    if failed:
        console.print(console.styled("Failed files:", fg="red"))
        for r in failed:
            label: str = r.status.kind.render(enable_color=console.enable_color)
            detail: str = (
                f" ({r.status.similarity}% similar)"
                if r.status.kind is StatusKind.MALFORMED_HEADER
                else ""
            )
            console.print(f"  {display_path(r.path, root)}: {label}{detail}")
    if skipped:
        console.print(console.styled("Skipped files:", fg="yellow"))
        if show_skipped:
            for r in skipped:
                reason: str = r.status.reason.label if r.status.reason else "skipped"
                console.print(f"  {display_path(r.path, root)}: {reason}")
        else:
            console.print(f"  {len(skipped)} files skipped (binary, unsupported, etc.)")


def _fix_details(
    console: ClickConsole, report: FixReport, root: Path, *, show_skipped: bool
) -> None:
    changed: list[FixResult] = [
        r for r in report.results if r.action.kind in (FixKind.FIXED, FixKind.WOULD_FIX)
    ]
    failed: list[FixResult] = [r for r in report.results if r.action.is_failure]
    skipped: list[FixResult] = [r for r in report.results if r.action.kind is FixKind.SKIPPED]
    if changed:
        console.print(console.styled("Changed files:", fg="green"))
        for r in changed:
            label: str = r.action.kind.render(enable_color=console.enable_color)
            console.print(f"  {display_path(r.path, root)}: {label}")
    if failed:
        console.print(console.styled("Failed files:", fg="red"))
        for r in failed:
            console.print(f"  {display_path(r.path, root)}: {r.action.message}")
    if skipped:
        console.print(console.styled("Skipped files:", fg="yellow"))
        if show_skipped:
            for r in skipped:
                reason: str = r.action.reason.label if r.action.reason else "skipped"
                console.print(f"  {display_path(r.path, root)}: {reason}")
        else:
            console.print(f"  {len(skipped)} files skipped (binary, unsupported, etc.)")


def _has_details(report: Report) -> bool:
    if isinstance(report, ScanReport):
        return any(not r.status.is_pass for r in report.results)
    return any(r.action.kind is not FixKind.ALREADY_HAS_HEADER for r in report.results)


def emit_text(
    console: ClickConsole, report: Report, root: Path, *, show_skipped: bool = False
) -> None:
    """Print a human-readable report.

    Args:
        console (ClickConsole): Output console.
        report (Report): Scan or fix report.
        root (Path): Scan root; paths are shown relative to it.
        show_skipped (bool): List skipped files individually instead of counting them.
    """
    summary: ScanSummary = report.summary
    if summary.total == 0:
        console.print("No files found to check")
        return

    title: str = (
        "License Header Fix Results"
        if isinstance(report, FixReport)
        else "License Header Check Results"
    )
    console.print(console.styled(title, fg="cyan", bold=True))
    console.print(_counters_line(console, summary))

    filled, empty, pct = progress_bar(summary.passed, summary.total)
    console.print(
        console.styled("[" + filled, fg="green") + console.styled(empty, fg="red") + f"] {pct}%"
    )

    if _has_details(report):
        console.print()
        console.print(console.styled("Details:", bold=True))
        if isinstance(report, ScanReport):
            _scan_details(console, report, root, show_skipped=show_skipped)
        else:
            _fix_details(console, report, root, show_skipped=show_skipped)

    for error in report.walk_errors:
        console.warn(f"⚠ {error}")
    if summary.interrupted:
        console.warn("⚠ Run interrupted: results cover completed files only")
    console.print()
    console.print(console.styled(str(summary), dim=True))


# ------------------------------- json -------------------------------


def _scan_result_dict(result: ScanResult, root: Path) -> dict[str, Any]:
    out: dict[str, Any] = {
        "path": display_path(result.path, root),
        "status": result.status.kind.value,
    }
    if result.status.similarity is not None:
        out["similarity"] = result.status.similarity
    if result.status.reason is not None:
        out["reason"] = result.status.reason.value
    return out


def _fix_result_dict(result: FixResult, root: Path) -> dict[str, Any]:
    out: dict[str, Any] = {
        "path": display_path(result.path, root),
        "action": result.action.kind.value,
    }
    if result.action.reason is not None:
        out["reason"] = result.action.reason.value
    if result.action.message is not None:
        out["message"] = result.action.message
    return out


def report_to_dict(report: Report, root: Path) -> dict[str, Any]:
    """Return the JSON-serializable form of ``report``."""
    summary: ScanSummary = report.summary
    results: list[dict[str, Any]]
    if isinstance(report, ScanReport):
        results = [_scan_result_dict(r, root) for r in report.results]
    else:
        results = [_fix_result_dict(r, root) for r in report.results]
    return {
        "summary": {
            "total": summary.total,
            "passed": summary.passed,
            "failed": summary.failed,
            "skipped": summary.skipped,
            "duration": round(summary.duration, 3),
            "interrupted": summary.interrupted,
        },
        "results": results,
        "walk_errors": list(report.walk_errors),
    }


def emit_json(console: ClickConsole, report: Report, root: Path) -> None:
    """Print the report as pretty-printed JSON."""
    console.print(json.dumps(report_to_dict(report, root), indent=2))


# ------------------------------ github ------------------------------


def _escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def _escape_property(value: str) -> str:
    return _escape_data(value).replace(":", "%3A").replace(",", "%2C")


def github_annotations(report: Report, root: Path) -> list[str]:
    """Return GitHub Actions workflow commands for ``report``."""
    lines: list[str] = []
    summary: ScanSummary = report.summary
    if isinstance(report, ScanReport):
        for r in report.results:
            if r.status.is_failure:
                lines.append(
                    f"::error file={_escape_property(display_path(r.path, root))},"
                    f"title=License Header::{_escape_data(r.status.describe())}"
                )
        if summary.failed:
            lines.append(
                "::error title=License Check Failed::Found "
                f"{summary.failed} files missing license headers out of "
                f"{summary.total} total files"
            )
        elif summary.total == 0:
            lines.append(
                "::warning title=No Files Found::No files found to check for license headers"
            )
        else:
            lines.append(
                "::notice title=License Check Passed::All "
                f"{summary.total} files have valid license headers"
            )
        return lines

    for r in report.results:
        if r.action.is_failure:
            lines.append(
                f"::error file={_escape_property(display_path(r.path, root))},"
                f"title=License Header::{_escape_data(r.action.describe())}"
            )
    if summary.failed:
        lines.append(
            "::error title=License Fix Failed::Could not fix "
            f"{summary.failed} files out of {summary.total} total files"
        )
    elif summary.total == 0:
        lines.append("::warning title=No Files Found::No files found to fix")
    else:
        changed: int = sum(
            1 for r in report.results if r.action.kind in (FixKind.FIXED, FixKind.WOULD_FIX)
        )
        lines.append(
            f"::notice title=License Fix Passed::Added license headers to {changed} "
            f"of {summary.total} files"
        )
    return lines


def emit_github(console: ClickConsole, report: Report, root: Path) -> None:
    """Print GitHub Actions annotations."""
    for line in github_annotations(report, root):
        console.print(line)


def emit_report(
    console: ClickConsole,
    report: Report,
    root: Path,
    fmt: OutputFormat,
    *,
    show_skipped: bool = False,
) -> None:
    """Dispatch ``report`` to the emitter for ``fmt``."""
    if fmt is OutputFormat.JSON:
        emit_json(console, report, root)
    elif fmt is OutputFormat.GITHUB:
        emit_github(console, report, root)
    else:
        emit_text(console, report, root, show_skipped=show_skipped)
