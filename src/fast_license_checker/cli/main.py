# flc:header:start
#
#   project      : Fast License Checker
#   file         : main.py
#   file_relpath : src/fast_license_checker/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Fast License Checker contributors
#
# flc:header:end

"""The ``flc`` command group.

Group-level options (verbosity, color) are initialized once and stored in
``ctx.obj``; subcommands read the console and verbosity from there.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from fast_license_checker.cli.commands.check import check_command
from fast_license_checker.cli.commands.dump_config import dump_config_command
from fast_license_checker.cli.commands.fix import fix_command
from fast_license_checker.cli.commands.init_config import init_config_command
from fast_license_checker.cli.commands.version import version_command
from fast_license_checker.cli.console import ClickConsole
from fast_license_checker.cli.options import (
    CONTEXT_SETTINGS,
    ColorMode,
    common_color_options,
    common_verbose_options,
    resolve_color_mode,
    resolve_verbosity,
)
from fast_license_checker.config.logging import get_logger, resolve_env_log_level, setup_logging

if TYPE_CHECKING:
    from fast_license_checker.config.logging import FlcLogger

logger: FlcLogger = get_logger(__name__)


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
) -> None:
    """Initialize shared state (verbosity, logging and color) on the Click context.

    Args:
        ctx (click.Context): Current Click context; will have ``obj`` and ``color`` set.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
        color_mode (ColorMode | None): Explicit color mode from ``--color`` (or ``None``).
        no_color (bool): Whether ``--no-color`` was passed; forces color off.
    """
    ctx.obj = ctx.obj or {}

    level_cli: int = resolve_verbosity(verbose, quiet)
    ctx.obj["verbosity_level"] = level_cli

    # FLC_LOG_LEVEL wins over -v/-q for diagnostics.
    level_env: int | None = resolve_env_log_level()
    log_level: int = level_env if level_env is not None else level_cli
    ctx.obj["log_level"] = log_level
    setup_logging(level=log_level)

    effective_color_mode: ColorMode = (
        ColorMode.NEVER if no_color else (color_mode or ColorMode.AUTO)
    )
    enable_color: bool = resolve_color_mode(cli_mode=effective_color_mode)
    ctx.obj["color_enabled"] = enable_color
    ctx.color = enable_color

    ctx.obj["console"] = ClickConsole(enable_color=enable_color)


@click.group(
    cls=click.Group,
    context_settings=CONTEXT_SETTINGS,
    invoke_without_command=True,
    help="Fast License Checker: check and add license headers in source files.",
)
@common_verbose_options
@common_color_options
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
) -> None:
    """Entry point for the ``flc`` CLI."""
    init_common_state(
        ctx,
        verbose=verbose,
        quiet=quiet,
        color_mode=color_mode,
        no_color=no_color,
    )
    console: ClickConsole = ctx.obj["console"]

    if ctx.invoked_subcommand is None:
        console.print("Hint: use 'flc check [PATH]' to validate license headers.")
        console.print()
        console.print(ctx.get_help())


cli.add_command(version_command)

cli.add_command(init_config_command)

cli.add_command(dump_config_command)

cli.add_command(check_command)

cli.add_command(fix_command)

if __name__ == "__main__":
    cli()
