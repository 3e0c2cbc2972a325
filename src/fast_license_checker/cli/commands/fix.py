# flc:header:start
#
#   project      : Fast License Checker
#   file         : fix.py
#   file_relpath : src/fast_license_checker/cli/commands/fix.py
#   license      : MIT
#   copyright    : (c) 2025 Fast License Checker contributors
#
# flc:header:end

"""``flc fix``: insert the license header into files that lack it.

Files with a malformed header are reported as failed and left untouched
for manual review.
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
from fast_license_checker.engine.fixer import HeaderFixer
from fast_license_checker.engine.results import FixKind

if TYPE_CHECKING:
    from pathlib import Path

    from fast_license_checker.cli.console import ClickConsole
    from fast_license_checker.config.logging import FlcLogger
    from fast_license_checker.engine.results import FixReport

logger: FlcLogger = get_logger(__name__)


@click.command(
    name="fix",
    help="Add the license header to files that are missing it.",
    context_settings=CONTEXT_SETTINGS,
    epilog="""\
Examples:

  # Preview which files would change
  flc fix --dry-run --license LICENSE_HEADER.txt

  # Add headers in place
  flc fix --license LICENSE_HEADER.txt src
""",
)
@common_run_options
@click.option(
    "--dry-run",
    "dry_run",
    is_flag=True,
    help="Report files that would change without writing them.",
)
def fix_command(
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
    dry_run: bool,
) -> None:
    """Insert the header into every file below PATH that lacks it.

    Exit Status:
        SUCCESS (0): Nothing left to fix.
        FAILURE (1): At least one file could not be fixed (malformed header, write error).
        WOULD_CHANGE (2): ``--dry-run`` found files that would be fixed.
        USAGE_ERROR (64): Invalid invocation.
        FILE_NOT_FOUND (66): PATH does not exist.
        CONFIG_ERROR (78): No header configured, or an invalid config file.
    """
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ClickConsole = ctx.obj["console"]
    fmt: OutputFormat = output_format or OutputFormat.TEXT
    logger.debug("fix: root=%s format=%s dry_run=%s", path, fmt.value, dry_run)

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
        fixer = HeaderFixer(path, config)
    with cancel_on_sigint() as cancel:
        report: FixReport = fixer.fix_all(cancel=cancel, timeout=timeout, dry_run=dry_run)

    emit_report(
        console,
        report,
        fixer.root,
        fmt,
        show_skipped=get_effective_verbosity(ctx) <= logging.INFO,
    )

    if report.summary.failed > 0:
        ctx.exit(ExitCode.FAILURE)
    if dry_run and any(r.action.kind is FixKind.WOULD_FIX for r in report.results):
        ctx.exit(ExitCode.WOULD_CHANGE)
