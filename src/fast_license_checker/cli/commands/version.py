# flc:header:start
#
#   project      : Fast License Checker
#   file         : version.py
#   file_relpath : src/fast_license_checker/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Fast License Checker contributors
#
# flc:header:end

"""``flc version``: print the installed version."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

import click

from fast_license_checker.cli.cmd_common import get_effective_verbosity
from fast_license_checker.constants import FLC_VERSION

if TYPE_CHECKING:
    from fast_license_checker.cli.console import ClickConsole


@click.command(
    name="version",
    help="Show the current version of Fast License Checker.",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"], case_sensitive=False),
    default="text",
    show_default=True,
    help="Output format.",
)
def version_command(*, output_format: str = "text") -> None:
    """Print the version as installed in the current Python environment."""
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ClickConsole = ctx.obj["console"]

    if output_format.lower() == "json":
        console.print(json.dumps({"version": FLC_VERSION}))
    elif get_effective_verbosity(ctx) <= logging.INFO:
        console.print(console.styled("Fast License Checker version:", bold=True, underline=True))
        console.print(f"    {console.styled(FLC_VERSION, bold=True)}")
    else:
        console.print(console.styled(FLC_VERSION, bold=True))
