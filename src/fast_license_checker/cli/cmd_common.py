# flc:header:start
#
#   project      : Fast License Checker
#   file         : cmd_common.py
#   file_relpath : src/fast_license_checker/cli/cmd_common.py
#   license      : MIT
#   copyright    : (c) 2025 Fast License Checker contributors
#
# flc:header:end

"""Helpers shared by the ``check`` and ``fix`` commands.

Configuration precedence (lowest to highest):
    built-in defaults < config file < ``FLC_*`` environment < command line.
"""

from __future__ import annotations

import logging
import signal
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

import click

from fast_license_checker.cli.errors import FlcUsageError, translate_errors
from fast_license_checker.config.logging import get_logger
from fast_license_checker.config.model import MutableConfig, read_license_file

if TYPE_CHECKING:
    from pathlib import Path
    from types import FrameType

    from fast_license_checker.config.logging import FlcLogger
    from fast_license_checker.config.model import Config

logger: FlcLogger = get_logger(__name__)


def get_effective_verbosity(ctx: click.Context) -> int:
    """Return the program-output verbosity (a logging level) stored on the context."""
    return int(ctx.obj.get("verbosity_level", logging.WARNING))


def build_config_common(
    *,
    config_path: Path | None,
    license_file: Path | None,
    header_text: str | None,
    jobs: int | None,
    max_bytes: int | None,
    threshold: int | None,
    exclude_patterns: tuple[str, ...] | list[str],
    include_hidden: bool,
    follow_links: bool,
    no_ignore_vcs: bool,
    require_header: bool = True,
) -> Config:
    """Resolve the effective configuration for a run.

    Args:
        config_path (Path | None): Explicit ``--config`` file.
        license_file (Path | None): ``--license`` file with the header text.
        header_text (str | None): ``--header`` text.
        jobs (int | None): ``--jobs``.
        max_bytes (int | None): ``--max-bytes``.
        threshold (int | None): ``--threshold``.
        exclude_patterns (tuple[str, ...] | list[str]): ``--exclude`` patterns.
        include_hidden (bool): ``--hidden``.
        follow_links (bool): ``--follow-links``.
        no_ignore_vcs (bool): ``--no-ignore-vcs``.
        require_header (bool): Fail when no usable license header is configured.

    Returns:
        Config: The frozen configuration.

    Raises:
        FlcUsageError: If both ``--header`` and ``--license`` are given.
        FlcConfigError: If a layer cannot be loaded or the result is invalid.
    """
    if header_text is not None and license_file is not None:
        raise FlcUsageError("Options --header and --license are mutually exclusive.")

    with translate_errors():
        draft: MutableConfig = MutableConfig.load_merged(config_path=config_path)
        header: str | None = header_text
        if license_file is not None:
            header = read_license_file(license_file)

        # Flags only ever switch behavior on; leaving them unset keeps file values.
        overrides: dict[str, Any] = {
            "license_header": header,
            "parallel_jobs": jobs,
            "max_header_bytes": max_bytes,
            "similarity_threshold": threshold,
            "ignore_patterns": list(exclude_patterns),
            "include_hidden": True if include_hidden else None,
            "follow_links": True if follow_links else None,
            "respect_vcs_ignores": False if no_ignore_vcs else None,
        }
        draft.apply_overrides(overrides)
        config: Config = draft.freeze()
        if require_header:
            config.header()

    logger.debug(
        "Effective configuration from: %s", ", ".join(str(s) for s in config.config_files)
    )
    return config


@contextmanager
def cancel_on_sigint() -> Iterator[threading.Event]:
    """Yield an event that is set on the first Ctrl-C.

    The run then drains in-flight files and reports partial results. A second
    Ctrl-C falls back to the previous handler. Outside the main thread (where
    signal handlers cannot be installed) the event is returned unarmed.
    """
    cancel = threading.Event()
    if threading.current_thread() is not threading.main_thread():
        yield cancel
        return

    previous: Any = signal.getsignal(signal.SIGINT) or signal.default_int_handler

    def _handler(signum: int, frame: FrameType | None) -> None:
        if cancel.is_set():
            signal.signal(signal.SIGINT, previous)
            raise KeyboardInterrupt
        logger.warning("Interrupted: finishing files in progress (Ctrl-C again to abort)")
        cancel.set()

    signal.signal(signal.SIGINT, _handler)
    try:
        yield cancel
    finally:
        signal.signal(signal.SIGINT, previous)
