# flc:header:start
#
#   project      : Fast License Checker
#   file         : conftest.py
#   file_relpath : tests/cli/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Fast License Checker contributors
#
# flc:header:end

"""CLI test helpers for running ``flc`` in a controlled working directory.

`run_flc` invokes the Click group through `click.testing.CliRunner`. When
``cwd`` is given the process working directory is switched to it for the
duration of the call, so that relative paths and config discovery resolve
against the test tree.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Sequence
from pathlib import Path

import pytest
from click.testing import CliRunner, Result

from fast_license_checker.cli.main import cli

RunFlc = Callable[..., Result]


@pytest.fixture
def run_flc() -> RunFlc:
    """Return a helper invoking ``flc`` with the given arguments.

    Returns:
        RunFlc: ``run(argv, *, cwd=None) -> Result``.

    Example:
        ```python
        result = run_flc(["check", "--header", "Copyright X", "."], cwd=tree)
        assert result.exit_code == ExitCode.SUCCESS, result.output
        ```
    """

    def _run(argv: Sequence[str], *, cwd: Path | None = None) -> Result:
        runner = CliRunner()
        previous: str = os.getcwd()
        try:
            if cwd is not None:
                os.chdir(cwd)
            return runner.invoke(cli, list(argv))
        finally:
            os.chdir(previous)

    return _run
