# flc:header:start
#
#   project      : Fast License Checker
#   file         : test_check_command.py
#   file_relpath : tests/cli/test_check_command.py
#   license      : MIT
#   copyright    : (c) 2025 Fast License Checker contributors
#
# flc:header:end

"""CLI tests for ``flc check``: output formats and exit codes."""

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


def test_all_files_pass(write_tree: Tree, run_flc: RunFlc) -> None:
    """A clean tree exits 0 and prints the text report."""
    root: Path = write_tree({"a.rs": GOOD_RS, "b.rs": GOOD_RS})
    result: Result = run_flc(["check", "--header", HEADER, "."], cwd=root)
    assert result.exit_code == ExitCode.SUCCESS, result.output
    assert "License Header Check Results" in result.stdout
    assert "✓ Passed: 2" in result.stdout
    assert "] 100%" in result.stdout
    assert "Details:" not in result.stdout


def test_missing_header_fails(write_tree: Tree, run_flc: RunFlc) -> None:
    """Any file without the header makes the run fail."""
    root: Path = write_tree({"a.rs": GOOD_RS, "sub/b.rs": "fn b() {}\n"})
    result: Result = run_flc(["check", "--header", HEADER, "."], cwd=root)
    assert result.exit_code == ExitCode.FAILURE, result.output
    assert "✗ Failed: 1" in result.stdout
    assert "Failed files:" in result.stdout
    assert "sub/b.rs: missing header" in result.stdout


def test_skipped_files_do_not_fail(write_tree: Tree, run_flc: RunFlc) -> None:
    """Binary and empty files are counted but never fail the check."""
    root: Path = write_tree({"a.rs": GOOD_RS, "blob.rs": b"\x00\x00", "empty.py": ""})
    result: Result = run_flc(["check", "--header", HEADER, str(root)])
    assert result.exit_code == ExitCode.SUCCESS, result.output
    assert "2 files skipped" in result.stdout


def test_verbose_lists_skipped_files(write_tree: Tree, run_flc: RunFlc) -> None:
    """With ``-v`` each skipped file is listed with its reason."""
    root: Path = write_tree({"blob.rs": b"\x00\x00"})
    result: Result = run_flc(["-v", "check", "--header", HEADER, str(root)])
    assert result.exit_code == ExitCode.SUCCESS, result.output
    assert "blob.rs: binary file" in result.stdout


def test_empty_tree(tmp_path: Path, run_flc: RunFlc) -> None:
    """Nothing to check is not an error."""
    result: Result = run_flc(["check", "--header", HEADER, str(tmp_path)])
    assert result.exit_code == ExitCode.SUCCESS, result.output
    assert "No files found to check" in result.stdout


def test_json_output(write_tree: Tree, run_flc: RunFlc) -> None:
    """JSON output carries the summary and per-file results."""
    root: Path = write_tree(
        {
            "a.rs": GOOD_RS,
            "b.rs": "fn b() {}\n",
            "c.rs": GOOD_RS.replace("2024", "2023"),
            "d.rs": b"\x00",
        }
    )
    result: Result = run_flc(["check", "--header", HEADER, "-o", "json", "."], cwd=root)
    assert result.exit_code == ExitCode.FAILURE, result.output
    data: dict[str, Any] = json.loads(result.stdout)
    assert data["summary"]["total"] == 4
    assert data["summary"]["passed"] == 1
    assert data["summary"]["failed"] == 2
    assert data["summary"]["skipped"] == 1
    assert data["summary"]["interrupted"] is False
    by_path: dict[str, dict[str, Any]] = {r["path"]: r for r in data["results"]}
    assert by_path["a.rs"]["status"] == "has_header"
    assert by_path["b.rs"]["status"] == "missing_header"
    assert by_path["c.rs"]["status"] == "malformed_header"
    assert 70 <= by_path["c.rs"]["similarity"] < 100
    assert by_path["d.rs"] == {"path": "d.rs", "status": "skipped", "reason": "binary"}
    assert data["walk_errors"] == []


def test_github_output(write_tree: Tree, run_flc: RunFlc) -> None:
    """GitHub format emits one annotation per failure plus a summary line."""
    root: Path = write_tree({"a.rs": GOOD_RS, "b,c.rs": "fn b() {}\n"})
    result: Result = run_flc(["check", "--header", HEADER, "--format", "github", "."], cwd=root)
    assert result.exit_code == ExitCode.FAILURE, result.output
    lines: list[str] = result.stdout.splitlines()
    assert lines[0] == "::error file=b%2Cc.rs,title=License Header::missing header"
    assert lines[-1] == (
        "::error title=License Check Failed::Found 1 files missing license headers "
        "out of 2 total files"
    )


def test_github_output_passing(write_tree: Tree, run_flc: RunFlc) -> None:
    """A passing run ends with a notice."""
    root: Path = write_tree({"a.rs": GOOD_RS})
    result: Result = run_flc(["check", "--header", HEADER, "-o", "github", str(root)])
    assert result.exit_code == ExitCode.SUCCESS, result.output
    assert result.stdout.strip() == (
        "::notice title=License Check Passed::All 1 files have valid license headers"
    )


def test_license_file_option(write_tree: Tree, run_flc: RunFlc, tmp_path: Path) -> None:
    """``--license`` reads the header from a file."""
    license_file: Path = tmp_path / "HEADER.txt"
    license_file.write_text(HEADER + "\n", encoding="utf-8")
    root: Path = write_tree({"a.rs": GOOD_RS})
    result: Result = run_flc(["check", "-l", str(license_file), str(root)])
    assert result.exit_code == ExitCode.SUCCESS, result.output


def test_header_from_config_file(write_tree: Tree, run_flc: RunFlc) -> None:
    """A discovered ``.flc.toml`` supplies the header and ignore patterns."""
    root: Path = write_tree(
        {
            ".flc.toml": (
                'license_header = """\nMIT License\n\nCopyright 2024 Test\n"""\n'
                'ignore_patterns = ["vendor/"]\n'
            ),
            "a.rs": GOOD_RS,
            "vendor/lib.rs": "fn x() {}\n",
        }
    )
    result: Result = run_flc(["check", "."], cwd=root)
    assert result.exit_code == ExitCode.SUCCESS, result.output


def test_header_from_environment(
    write_tree: Tree, run_flc: RunFlc, monkeypatch: pytest.MonkeyPatch
) -> None:
    """``FLC_HEADER`` is an accepted header source."""
    monkeypatch.setenv("FLC_HEADER", HEADER)
    root: Path = write_tree({"a.rs": GOOD_RS})
    result: Result = run_flc(["check", str(root)])
    assert result.exit_code == ExitCode.SUCCESS, result.output


def test_exclude_option(write_tree: Tree, run_flc: RunFlc) -> None:
    """``--exclude`` drops matching files from the run."""
    root: Path = write_tree({"a.rs": GOOD_RS, "gen/b.rs": "fn b() {}\n"})
    result: Result = run_flc(["check", "--header", HEADER, "-e", "gen/", str(root)])
    assert result.exit_code == ExitCode.SUCCESS, result.output


def test_threshold_option(write_tree: Tree, run_flc: RunFlc) -> None:
    """``--threshold 100`` reports near misses as missing headers."""
    root: Path = write_tree({"c.rs": GOOD_RS.replace("2024", "2023")})
    result: Result = run_flc(
        ["check", "--header", HEADER, "--threshold", "100", "-o", "json", "."], cwd=root
    )
    assert result.exit_code == ExitCode.FAILURE, result.output
    assert json.loads(result.stdout)["results"][0]["status"] == "missing_header"


def test_no_header_is_config_error(write_tree: Tree, run_flc: RunFlc) -> None:
    """Without any header source the run aborts with EX_CONFIG."""
    root: Path = write_tree({"a.rs": GOOD_RS})
    result: Result = run_flc(["check", str(root)])
    assert result.exit_code == ExitCode.CONFIG_ERROR
    assert "No license header" in result.output


def test_header_and_license_conflict(tmp_path: Path, run_flc: RunFlc) -> None:
    """``--header`` and ``--license`` are mutually exclusive."""
    license_file: Path = tmp_path / "HEADER.txt"
    license_file.write_text(HEADER, encoding="utf-8")
    result: Result = run_flc(["check", "--header", HEADER, "-l", str(license_file), "."])
    assert result.exit_code == ExitCode.USAGE_ERROR
    assert "mutually exclusive" in result.output


def test_missing_path(tmp_path: Path, run_flc: RunFlc) -> None:
    """A PATH that does not exist exits with EX_NOINPUT."""
    result: Result = run_flc(["check", "--header", HEADER, str(tmp_path / "nope")])
    assert result.exit_code == ExitCode.FILE_NOT_FOUND
    assert "does not exist" in result.output


def test_invalid_config_file(tmp_path: Path, run_flc: RunFlc) -> None:
    """A broken ``--config`` file is a configuration error."""
    config: Path = tmp_path / "broken.toml"
    config.write_text("similarity_threshold = 'high'\n", encoding="utf-8")
    result: Result = run_flc(["check", "--header", HEADER, "-c", str(config), str(tmp_path)])
    assert result.exit_code == ExitCode.CONFIG_ERROR
    assert "must be an integer" in result.output


def test_single_file_path(write_tree: Tree, run_flc: RunFlc) -> None:
    """PATH may name a single file."""
    root: Path = write_tree({"a.rs": "fn a() {}\n"})
    result: Result = run_flc(["check", "--header", HEADER, "-o", "json", str(root / "a.rs")])
    assert result.exit_code == ExitCode.FAILURE, result.output
    assert json.loads(result.stdout)["results"][0]["path"] == "a.rs"
