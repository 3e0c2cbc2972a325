# flc:header:start
#
#   project      : Fast License Checker
#   file         : init_config.py
#   file_relpath : src/fast_license_checker/cli/commands/init_config.py
#   license      : MIT
#   copyright    : (c) 2025 Fast License Checker contributors
#
# flc:header:end

"""``flc init-config``: emit a starter configuration file.

The template is printed to stdout unless ``--output`` names a file. Existing
files are only replaced with ``--force``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import click

from fast_license_checker.cli.cmd_common import get_effective_verbosity
from fast_license_checker.cli.errors import FlcIOError, FlcUsageError, translate_errors
from fast_license_checker.config.io import TEMPLATE_FORMATS, render_config_template
from fast_license_checker.config.logging import get_logger

if TYPE_CHECKING:
    from fast_license_checker.cli.console import ClickConsole
    from fast_license_checker.config.logging import FlcLogger

logger: FlcLogger = get_logger(__name__)


@click.command(
    name="init-config",
    help="Print (or write) a starter configuration file.",
)
@click.option(
    "--format",
    "config_format",
    type=click.Choice(TEMPLATE_FORMATS, case_sensitive=False),
    default="toml",
    show_default=True,
    help="Template format.",
)
@click.option(
    "--output",
    "output_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Write the template to FILE instead of stdout (e.g. .flc.toml).",
)
@click.option(
    "--force",
    is_flag=True,
    help="Overwrite FILE if it already exists.",
)
def init_config_command(
    *,
    config_format: str,
    output_path: Path | None,
    force: bool,
) -> None:
    """Emit an annotated configuration template.

    Args:
        config_format (str): ``toml`` or ``json``.
        output_path (Path | None): Destination file; stdout when None.
        force (bool): Replace an existing destination file.

    Raises:
        FlcUsageError: If the destination exists and ``--force`` was not given.
        FlcIOError: If the destination cannot be written.
    """
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ClickConsole = ctx.obj["console"]

    with translate_errors():
        text: str = render_config_template(config_format.lower())

    if output_path is None:
        console.print(text, nl=False)
        return

    if output_path.exists() and not force:
        raise FlcUsageError(f"{output_path} already exists (use --force to overwrite).")
    try:
        output_path.write_text(text, encoding="utf-8")
    except OSError as e:
        raise FlcIOError(f"Could not write {output_path}: {e.strerror or e}") from e

    logger.info("Wrote %s configuration template to %s", config_format, output_path)
    if get_effective_verbosity(ctx) <= logging.WARNING:
        console.print(console.styled(f"✓ Created {output_path}", fg="green"))
