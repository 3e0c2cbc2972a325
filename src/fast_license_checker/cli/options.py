# flc:header:start
#
#   project      : Fast License Checker
#   file         : options.py
#   file_relpath : src/fast_license_checker/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 Fast License Checker contributors
#
# flc:header:end

"""Reusable Click options and their resolution logic.

Group-level options (verbosity, color) are resolved once in
`fast_license_checker.cli.main.init_common_state`; the run options shared
by ``check`` and ``fix`` are bundled in `common_run_options` so that both
commands accept exactly the same configuration overrides.
"""

from __future__ import annotations

import logging
import os
import sys
from enum import Enum
from pathlib import Path
from typing import Callable, ParamSpec, TypeVar

import click

from fast_license_checker.cli.cli_types import EnumChoiceParam
from fast_license_checker.cli.emitters import OutputFormat
from fast_license_checker.cli.errors import FlcUsageError
from fast_license_checker.config.logging import TRACE_LEVEL

P = ParamSpec("P")
R = TypeVar("R")

#: Click context settings shared by the group and its commands.
CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Resolve the logging level from ``-v`` and ``-q`` counts.

    Args:
        verbose_count (int): Number of ``-v`` flags.
        quiet_count (int): Number of ``-q`` flags.

    Returns:
        int: The logging level.

    Raises:
        FlcUsageError: If both flags are given.

    Behavior:
        Three or more ``-v`` set TRACE, two set DEBUG, one sets INFO;
        ``-q`` sets ERROR. The default is WARNING.
    """
    if verbose_count > 0 and quiet_count > 0:
        raise FlcUsageError("The '--verbose' and '--quiet' options are mutually exclusive.")
    if verbose_count >= 3:
        return TRACE_LEVEL
    if verbose_count == 2:
        return logging.DEBUG
    if verbose_count == 1:
        return logging.INFO
    if quiet_count >= 1:
        return logging.ERROR
    return logging.WARNING


def common_verbose_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add counting ``-v/--verbose`` and ``-q/--quiet`` options."""
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Increase log verbosity (-v info, -vv debug, -vvv trace).",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        count=True,
        help="Only log errors.",
    )(f)
    return f


class ColorMode(str, Enum):
    """User intent for colorized terminal output."""

    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


def resolve_color_mode(*, cli_mode: ColorMode | None, stdout_isatty: bool | None = None) -> bool:
    """Determine whether color output should be enabled.

    Honors ``--color``/``--no-color`` first, then ``FORCE_COLOR`` and
    ``NO_COLOR``, and finally whether stdout is a terminal.

    Args:
        cli_mode (ColorMode | None): Explicit mode from the command line.
        stdout_isatty (bool | None): Whether stdout is a TTY; auto-detected if None.

    Returns:
        bool: True if color output should be enabled.
    """
    if cli_mode == ColorMode.ALWAYS:
        return True
    if cli_mode == ColorMode.NEVER:
        return False
    force_color: str | None = os.getenv("FORCE_COLOR")
    if force_color and force_color != "0":
        return True
    if os.getenv("NO_COLOR") is not None:
        return False
    if stdout_isatty is None:
        stdout_isatty = sys.stdout.isatty()
    return bool(stdout_isatty)


def common_color_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--color`` and ``--no-color`` options."""
    f = click.option(
        "--color",
        "color_mode",
        type=EnumChoiceParam(ColorMode),
        default=None,
        help="Color output: auto (default), always, or never.",
    )(f)
    f = click.option(
        "--no-color",
        "no_color",
        is_flag=True,
        help="Disable color output (equivalent to --color=never).",
    )(f)
    return f


def common_config_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add the configuration overrides shared by ``check``, ``fix`` and ``dump-config``."""
    f = click.option(
        "-c",
        "--config",
        "config_path",
        type=click.Path(path_type=Path, dir_okay=False),
        default=None,
        help="Config file (default: .flc.toml, .flc.json, flc.toml, flc.json "
        "or [tool.flc] in pyproject.toml in the current directory).",
    )(f)
    f = click.option(
        "-l",
        "--license",
        "license_file",
        type=click.Path(path_type=Path, dir_okay=False),
        default=None,
        help="File containing the license header text.",
    )(f)
    f = click.option(
        "--header",
        "header_text",
        default=None,
        help="License header text (alternative to --license).",
    )(f)
    f = click.option(
        "-j",
        "--jobs",
        type=click.IntRange(min=1),
        default=None,
        help="Number of parallel jobs (default: number of CPUs).",
    )(f)
    f = click.option(
        "--max-bytes",
        type=click.IntRange(min=1),
        default=None,
        help="Maximum bytes read from the start of each file (default: 8192).",
    )(f)
    f = click.option(
        "--threshold",
        type=click.IntRange(0, 100),
        default=None,
        help="Similarity (0-100) above which a header counts as malformed (default: 70).",
    )(f)
    f = click.option(
        "-e",
        "--exclude",
        "exclude_patterns",
        multiple=True,
        help="Additional gitignore-style pattern to exclude (repeatable).",
    )(f)
    f = click.option(
        "--hidden",
        "include_hidden",
        is_flag=True,
        help="Also check hidden files and directories.",
    )(f)
    f = click.option(
        "--follow-links",
        "follow_links",
        is_flag=True,
        help="Follow symbolic links.",
    )(f)
    f = click.option(
        "--no-ignore-vcs",
        "no_ignore_vcs",
        is_flag=True,
        help="Do not honor .gitignore, .ignore and git exclude files.",
    )(f)
    return f


def common_run_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add the PATH argument, config overrides and output options of ``check`` and ``fix``."""
    f = click.argument(
        "path",
        type=click.Path(path_type=Path),
        default=".",
        required=False,
    )(f)
    f = common_config_options(f)
    f = click.option(
        "-o",
        "--format",
        "output_format",
        type=EnumChoiceParam(OutputFormat),
        default=None,
        help=f"Output format ({', '.join(v.value for v in OutputFormat)}).",
    )(f)
    f = click.option(
        "--timeout",
        type=click.FloatRange(min=0, min_open=True),
        default=None,
        help="Stop after this many seconds and report the files checked so far.",
    )(f)
    return f
