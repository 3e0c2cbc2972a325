# flc:header:start
#
#   project      : Fast License Checker
#   file         : test_group_and_version.py
#   file_relpath : tests/cli/test_group_and_version.py
#   license      : MIT
#   copyright    : (c) 2025 Fast License Checker contributors
#
# flc:header:end

"""CLI tests for the command group, ``flc version`` and shared options."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable

import pytest
from click.testing import Result

from fast_license_checker.cli.errors import FlcUsageError
from fast_license_checker.cli.exit_codes import ExitCode
from fast_license_checker.cli.options import ColorMode, resolve_color_mode, resolve_verbosity
from fast_license_checker.config.logging import TRACE_LEVEL
from fast_license_checker.constants import FLC_VERSION

pytestmark = pytest.mark.cli

RunFlc = Callable[..., Result]


def test_group_without_command_shows_hint(run_flc: RunFlc) -> None:
    """Running bare ``flc`` prints a hint and the help text."""
    result: Result = run_flc([])
    assert result.exit_code == ExitCode.SUCCESS, result.output
    assert "Hint: use 'flc check [PATH]'" in result.stdout
    for name in ("check", "fix", "init-config", "dump-config", "version"):
        assert name in result.stdout


@pytest.mark.parametrize("command", ["check", "fix", "init-config", "dump-config", "version"])
def test_subcommand_help(run_flc: RunFlc, command: str) -> None:
    """Every subcommand has ``-h`` help."""
    result: Result = run_flc([command, "-h"])
    assert result.exit_code == ExitCode.SUCCESS, result.output
    assert "Usage:" in result.stdout


def test_version_text(run_flc: RunFlc) -> None:
    """The default output is the bare version string."""
    result: Result = run_flc(["version"])
    assert result.exit_code == ExitCode.SUCCESS, result.output
    assert result.stdout.strip() == FLC_VERSION


def test_version_verbose(run_flc: RunFlc) -> None:
    """``-v`` adds a heading."""
    result: Result = run_flc(["-v", "version"])
    assert "Fast License Checker version:" in result.stdout
    assert FLC_VERSION in result.stdout


def test_version_json(run_flc: RunFlc) -> None:
    """JSON output is a one-key object."""
    result: Result = run_flc(["version", "--format", "json"])
    assert json.loads(result.stdout) == {"version": FLC_VERSION}


def test_verbose_and_quiet_conflict(run_flc: RunFlc) -> None:
    """``-v`` and ``-q`` together are a usage error."""
    result: Result = run_flc(["-v", "-q", "version"])
    assert result.exit_code == ExitCode.USAGE_ERROR


@pytest.mark.parametrize(
    ("verbose", "quiet", "level"),
    [
        (0, 0, logging.WARNING),
        (1, 0, logging.INFO),
        (2, 0, logging.DEBUG),
        (3, 0, TRACE_LEVEL),
        (0, 1, logging.ERROR),
    ],
)
def test_resolve_verbosity(verbose: int, quiet: int, level: int) -> None:
    """Each ``-v`` lowers the level one step; ``-q`` raises it to ERROR."""
    assert resolve_verbosity(verbose, quiet) == level


def test_resolve_verbosity_conflict() -> None:
    """Both flags at once raise a usage error."""
    with pytest.raises(FlcUsageError):
        resolve_verbosity(1, 1)


def test_resolve_color_mode(monkeypatch: pytest.MonkeyPatch) -> None:
    """Explicit modes win, then FORCE_COLOR and NO_COLOR, then the TTY check."""
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    assert resolve_color_mode(cli_mode=ColorMode.ALWAYS, stdout_isatty=False)
    assert not resolve_color_mode(cli_mode=ColorMode.NEVER, stdout_isatty=True)
    assert resolve_color_mode(cli_mode=ColorMode.AUTO, stdout_isatty=True)
    assert not resolve_color_mode(cli_mode=ColorMode.AUTO, stdout_isatty=False)

    monkeypatch.setenv("NO_COLOR", "1")
    assert not resolve_color_mode(cli_mode=None, stdout_isatty=True)
    monkeypatch.setenv("FORCE_COLOR", "1")
    assert resolve_color_mode(cli_mode=None, stdout_isatty=False)


def test_color_always_styles_output(run_flc: RunFlc) -> None:
    """``--color always`` emits ANSI escapes even when captured."""
    result: Result = run_flc(["--color", "always", "version"])
    assert "\x1b[" in result.stdout
    plain: Result = run_flc(["--no-color", "version"])
    assert "\x1b[" not in plain.stdout
