# flc:header:start
#
#   project      : Fast License Checker
#   file         : check.py
#   file_relpath : src/fast_license_checker/cli/commands/check.py
#   license      : MIT
#   copyright    : (c) 2025 Fast License Checker contributors
#
# flc:header:end

"""``flc check``: report files missing the configured license header.

Examples:
  Check the current directory with a header file:

    $ flc check --license LICENSE_HEADER.txt

  Annotate a pull request from GitHub Actions:

    $ flc check -o github src
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import click

from fast_license_checker.cli.cmd_common import (
    build_config_common,
    cancel_on_sigint,
    get_effective_verbosity,
)
from fast_license_checker.cli.emitters import OutputFormat, emit_report
from fast_license_checker.cli.errors import translate_errors
from fast_license_checker.cli.exit_codes import ExitCode
from fast_license_checker.cli.options import CONTEXT_SETTINGS, common_run_options
from fast_license_checker.config.logging import get_logger
from fast_license_checker.engine.scanner import Scanner

if TYPE_CHECKING:
    from pathlib import Path

    from fast_license_checker.cli.console import ClickConsole
    from fast_license_checker.config.logging import FlcLogger
    from fast_license_checker.engine.results import ScanReport

logger: FlcLogger = get_logger(__name__)


@click.command(
    name="check",
    help="Check that files start with the license header.",
    context_settings=CONTEXT_SETTINGS,
    epilog="""\
Examples:

  # Check the current directory
  flc check --header "Copyright (c) 2025 Example"

  # Machine-readable output
  flc check -o json src
""",
)
@common_run_options
def check_command(
    *,
    path: Path,
    config_path: Path | None,
    license_file: Path | None,
    header_text: str | None,
    jobs: int | None,
    max_bytes: int | None,
    threshold: int | None,
    exclude_patterns: tuple[str, ...],
    include_hidden: bool,
    follow_links: bool,
    no_ignore_vcs: bool,
    output_format: OutputFormat | None,
    timeout: float | None,
) -> None:
    """Scan PATH and report missing or malformed license headers.

    Exit Status:
        SUCCESS (0): Every checked file has the header (skipped files do not count).
        FAILURE (1): At least one file is missing the header or has a malformed one.
        USAGE_ERROR (64): Invalid invocation (e.g. both ``--header`` and ``--license``).
        FILE_NOT_FOUND (66): PATH does not exist.
        CONFIG_ERROR (78): No header configured, or an invalid config file.
    """
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ClickConsole = ctx.obj["console"]
    fmt: OutputFormat = output_format or OutputFormat.TEXT
    logger.debug("check: root=%s format=%s", path, fmt.value)

    config = build_config_common(
        config_path=config_path,
        license_file=license_file,
        header_text=header_text,
        jobs=jobs,
        max_bytes=max_bytes,
        threshold=threshold,
        exclude_patterns=exclude_patterns,
        include_hidden=include_hidden,
        follow_links=follow_links,
        no_ignore_vcs=no_ignore_vcs,
    )

    with translate_errors():
        scanner = Scanner(path, config)
    with cancel_on_sigint() as cancel:
        report: ScanReport = scanner.scan(cancel=cancel, timeout=timeout)

    emit_report(
        console,
        report,
        scanner.root,
        fmt,
        show_skipped=get_effective_verbosity(ctx) <= logging.INFO,
    )

    if report.summary.failed > 0:
        ctx.exit(ExitCode.FAILURE)
