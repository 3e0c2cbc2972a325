# flc:header:start
#
#   project      : Fast License Checker
#   file         : dump_config.py
#   file_relpath : src/fast_license_checker/cli/commands/dump_config.py
#   license      : MIT
#   copyright    : (c) 2025 Fast License Checker contributors
#
# flc:header:end

"""``flc dump-config``: print the effective configuration as TOML.

Merges defaults, the discovered (or ``--config``) file, ``FLC_*`` environment
variables and command-line overrides exactly like ``check`` does, then
prints the result. Useful to debug which layer set a value.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import click

from fast_license_checker.cli.cmd_common import build_config_common, get_effective_verbosity
from fast_license_checker.cli.options import CONTEXT_SETTINGS, common_config_options
from fast_license_checker.config.io import to_toml

if TYPE_CHECKING:
    from pathlib import Path

    from fast_license_checker.cli.console import ClickConsole


@click.command(
    name="dump-config",
    help="Print the effective configuration after merging all layers.",
    context_settings=CONTEXT_SETTINGS,
)
@common_config_options
def dump_config_command(
    *,
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
) -> None:
    """Print the merged configuration in TOML format."""
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ClickConsole = ctx.obj["console"]

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
        require_header=False,
    )

    if get_effective_verbosity(ctx) <= logging.INFO:
        console.print(
            console.styled(
                "# Layers: " + " < ".join(str(source) for source in config.config_files),
                fg="cyan",
                dim=True,
            )
        )
    console.print(to_toml(config.to_toml_dict()), nl=False)
