# flc:header:start
#
#   project      : Fast License Checker
#   file         : test_fix_command.py
#   file_relpath : tests/cli/test_fix_command.py
#   license      : MIT
#   copyright    : (c) 2025 Fast License Checker contributors
#
# flc:header:end

"""CLI tests for ``flc fix``."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from click.testing import Result

from fast_license_checker.cli.exit_codes import ExitCode

pytestmark = pytest.mark.cli

Tree = Callable[[dict[str, "str | bytes"]], Path]
RunFlc = Callable[..., Result]

HEADER: str = "MIT License\n\nCopyright 2024 Test"
GOOD_RS: str = "// MIT License\n//\n// Copyright 2024 Test\n\nfn main() {}\n"


def test_fix_then_check(write_tree: Tree, run_flc: RunFlc) -> None:
    """Fixing makes a subsequent check pass."""
    root: Path = write_tree({"main.rs": "fn main() {}\n", "ok.rs": GOOD_RS})
    fixed: Result = run_flc(["fix", "--header", HEADER, "."], cwd=root)
    assert fixed.exit_code == ExitCode.SUCCESS, fixed.output
    assert "License Header Fix Results" in fixed.stdout
    assert "main.rs: fixed" in fixed.stdout
    assert (root / "main.rs").read_text(encoding="utf-8") == GOOD_RS

    checked: Result = run_flc(["check", "--header", HEADER, "."], cwd=root)
    assert checked.exit_code == ExitCode.SUCCESS, checked.output


def test_dry_run_would_change(write_tree: Tree, run_flc: RunFlc) -> None:
    """``--dry-run`` exits 2 when files would change and writes nothing."""
    root: Path = write_tree({"main.rs": "fn main() {}\n"})
    result: Result = run_flc(["fix", "--dry-run", "--header", HEADER, str(root)])
    assert result.exit_code == ExitCode.WOULD_CHANGE, result.output
    assert "main.rs: would fix" in result.stdout
    assert (root / "main.rs").read_text(encoding="utf-8") == "fn main() {}\n"


def test_dry_run_nothing_to_do(write_tree: Tree, run_flc: RunFlc) -> None:
    """A clean tree exits 0 even in dry-run mode."""
    root: Path = write_tree({"ok.rs": GOOD_RS})
    result: Result = run_flc(["fix", "--dry-run", "--header", HEADER, str(root)])
    assert result.exit_code == ExitCode.SUCCESS, result.output


def test_malformed_header_fails(write_tree: Tree, run_flc: RunFlc) -> None:
    """Near-miss headers are left alone and fail the run."""
    original: str = GOOD_RS.replace("2024", "2023")
    root: Path = write_tree({"near.rs": original, "new.rs": "fn x() {}\n"})
    result: Result = run_flc(["fix", "--header", HEADER, "-o", "json", "."], cwd=root)
    assert result.exit_code == ExitCode.FAILURE, result.output
    data: dict[str, Any] = json.loads(result.stdout)
    actions: dict[str, dict[str, Any]] = {r["path"]: r for r in data["results"]}
    assert actions["near.rs"]["action"] == "failed"
    assert "manual review" in actions["near.rs"]["message"]
    assert actions["new.rs"]["action"] == "fixed"
    assert data["summary"] == {
        "total": 2,
        "passed": 1,
        "failed": 1,
        "skipped": 0,
        "duration": data["summary"]["duration"],
        "interrupted": False,
    }
    assert (root / "near.rs").read_text(encoding="utf-8") == original


def test_github_summary(write_tree: Tree, run_flc: RunFlc) -> None:
    """The GitHub summary counts the files that changed."""
    root: Path = write_tree({"a.rs": "fn a() {}\n", "ok.rs": GOOD_RS})
    result: Result = run_flc(["fix", "--header", HEADER, "-o", "github", str(root)])
    assert result.exit_code == ExitCode.SUCCESS, result.output
    assert result.stdout.strip() == (
        "::notice title=License Fix Passed::Added license headers to 1 of 2 files"
    )


def test_fix_without_header(tmp_path: Path, run_flc: RunFlc) -> None:
    """Fix needs a header like check does."""
    result: Result = run_flc(["fix", str(tmp_path)])
    assert result.exit_code == ExitCode.CONFIG_ERROR
