# flc:header:start
#
#   project      : Fast License Checker
#   file         : test_emitters.py
#   file_relpath : tests/cli/test_emitters.py
#   license      : MIT
#   copyright    : (c) 2025 Fast License Checker contributors
#
# flc:header:end

"""Unit tests for the report emitters, independent of the Click group."""

from __future__ import annotations

import io
import json
from pathlib import Path
from typing import Any

import pytest

from fast_license_checker.cli.console import ClickConsole
from fast_license_checker.cli.emitters import (
    BAR_WIDTH,
    OutputFormat,
    display_path,
    emit_report,
    github_annotations,
    progress_bar,
    report_to_dict,
)
from fast_license_checker.engine.results import (
    FileStatus,
    FixAction,
    FixReport,
    FixResult,
    ScanReport,
    ScanResult,
    ScanSummary,
    SkipReason,
)


def _console() -> tuple[ClickConsole, io.StringIO, io.StringIO]:
    out = io.StringIO()
    err = io.StringIO()
    return ClickConsole(enable_color=False, out=out, err=err), out, err


def _scan_report(root: Path) -> ScanReport:
    return ScanReport(
        summary=ScanSummary(total=4, passed=1, failed=2, skipped=1, duration=0.5),
        results=(
            ScanResult(root / "a.rs", FileStatus.has_header()),
            ScanResult(root / "src" / "b.rs", FileStatus.missing_header()),
            ScanResult(root / "c.rs", FileStatus.malformed_header(82)),
            ScanResult(root / "d.bin", FileStatus.skipped(SkipReason.BINARY)),
        ),
        walk_errors=("cannot read directory locked: permission denied",),
    )


def test_display_path(tmp_path: Path) -> None:
    """Paths are shown relative to the root directory, or to a file root's parent."""
    nested: Path = tmp_path / "src" / "lib.rs"
    assert display_path(nested, tmp_path) == "src/lib.rs"
    file_root: Path = tmp_path / "main.rs"
    file_root.write_text("", encoding="utf-8")
    assert display_path(file_root, file_root) == "main.rs"
    assert display_path(Path("/elsewhere/x.rs"), tmp_path) == "/elsewhere/x.rs"


@pytest.mark.parametrize(
    ("passed", "total", "filled", "pct"),
    [
        (0, 0, 0, 0),
        (0, 3, 0, 0),
        (1, 2, 20, 50),
        (2, 3, 26, 66),
        (5, 5, BAR_WIDTH, 100),
    ],
)
def test_progress_bar(passed: int, total: int, filled: int, pct: int) -> None:
    """The bar always spans the full width and truncates the percentage."""
    full, empty, percent = progress_bar(passed, total)
    assert percent == pct
    assert len(full) == filled
    assert len(full) + len(empty) == BAR_WIDTH
    assert set(full) <= {"█"} and set(empty) <= {"░"}


def test_text_report(tmp_path: Path) -> None:
    """The text report lists failures and counts skipped files."""
    console, out, err = _console()
    emit_report(console, _scan_report(tmp_path), tmp_path, OutputFormat.TEXT)
    text: str = out.getvalue()
    assert "\x1b[" not in text
    assert "✓ Passed: 1  ✗ Failed: 2  ⚠ Skipped: 1  Total: 4" in text
    assert "src/b.rs: missing header" in text
    assert "c.rs: malformed header (82% similar)" in text
    assert "1 files skipped (binary, unsupported, etc.)" in text
    assert "] 25%" in text
    assert "permission denied" in err.getvalue()


def test_text_report_show_skipped(tmp_path: Path) -> None:
    """``show_skipped`` lists each skipped file with its reason."""
    console, out, _ = _console()
    emit_report(console, _scan_report(tmp_path), tmp_path, OutputFormat.TEXT, show_skipped=True)
    assert "d.bin: binary file" in out.getvalue()


def test_text_report_interrupted(tmp_path: Path) -> None:
    """Interrupted runs are flagged on stderr."""
    console, _, err = _console()
    report = ScanReport(
        summary=ScanSummary(total=1, passed=1, interrupted=True),
        results=(ScanResult(tmp_path / "a.rs", FileStatus.has_header()),),
    )
    emit_report(console, report, tmp_path, OutputFormat.TEXT)
    assert "Run interrupted" in err.getvalue()


def test_json_scan_report(tmp_path: Path) -> None:
    """The JSON form uses stable keys and relative paths."""
    console, out, _ = _console()
    emit_report(console, _scan_report(tmp_path), tmp_path, OutputFormat.JSON)
    data: dict[str, Any] = json.loads(out.getvalue())
    assert data == report_to_dict(_scan_report(tmp_path), tmp_path)
    assert data["summary"] == {
        "total": 4,
        "passed": 1,
        "failed": 2,
        "skipped": 1,
        "duration": 0.5,
        "interrupted": False,
    }
    assert data["results"][1] == {"path": "src/b.rs", "status": "missing_header"}
    assert data["results"][2]["similarity"] == 82
    assert data["walk_errors"] == ["cannot read directory locked: permission denied"]


def test_json_fix_report(tmp_path: Path) -> None:
    """Fix results carry actions, reasons and failure messages."""
    report = FixReport(
        summary=ScanSummary(total=3, passed=1, failed=1, skipped=1),
        results=(
            FixResult(tmp_path / "a.rs", FixAction.fixed()),
            FixResult(tmp_path / "b.rs", FixAction.failed("permission denied")),
            FixResult(tmp_path / "c.rs", FixAction.skipped(SkipReason.EMPTY)),
        ),
    )
    results: list[dict[str, Any]] = report_to_dict(report, tmp_path)["results"]
    assert results[0] == {"path": "a.rs", "action": "fixed"}
    assert results[1] == {"path": "b.rs", "action": "failed", "message": "permission denied"}
    assert results[2] == {"path": "c.rs", "action": "skipped", "reason": "empty"}


def test_github_escaping(tmp_path: Path) -> None:
    """Properties escape ``:`` and ``,``; messages escape newlines and ``%``."""
    report = FixReport(
        summary=ScanSummary(total=1, failed=1),
        results=(FixResult(tmp_path / "a:b.rs", FixAction.failed("50% done\nthen")),),
    )
    lines: list[str] = github_annotations(report, tmp_path)
    assert lines[0] == "::error file=a%3Ab.rs,title=License Header::failed: 50%25 done%0Athen"
    assert lines[1] == (
        "::error title=License Fix Failed::Could not fix 1 files out of 1 total files"
    )


def test_github_no_files(tmp_path: Path) -> None:
    """An empty run produces a warning annotation."""
    report = ScanReport(summary=ScanSummary())
    assert github_annotations(report, tmp_path) == [
        "::warning title=No Files Found::No files found to check for license headers"
    ]
