# flc:header:start
#
#   project      : Fast License Checker
#   file         : errors.py
#   file_relpath : src/fast_license_checker/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Fast License Checker contributors
#
# flc:header:end

"""Click exceptions carrying ``flc`` exit codes.

Library errors (`fast_license_checker.core.errors`) are translated at the
command boundary by `translate_errors`; everything raised from there on is a
`FlcError` that Click prints and exits with.

Styling:
    Errors are printed through the project console when one is attached to
    the Click context (see `FlcError.show`); otherwise Click's default
    rendering is used.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import IO, Any

import click

from fast_license_checker.cli.exit_codes import ExitCode
from fast_license_checker.core.errors import (
    ConfigError,
    ScannerError,
    ValidationError,
)


class FlcError(click.ClickException):
    """Base class for all ``flc`` CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:
        """Return the plain error message text (colorized by `show`)."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:
        """Display the error using the project console if available."""
        ctx: click.Context | None = click.get_current_context(silent=True)
        if ctx is not None and isinstance(ctx.obj, dict):
            console = ctx.obj.get("console")
            if console is not None:
                console.error(f"Error: {self.format_message()}")
                return
        super().show(file)


class FlcUsageError(FlcError):
    """Invalid command-line invocation."""

    exit_code = ExitCode.USAGE_ERROR


class FlcConfigError(FlcError):
    """Missing, unreadable or invalid configuration."""

    exit_code = ExitCode.CONFIG_ERROR


class FlcFileNotFoundError(FlcError):
    """The input path does not exist."""

    exit_code = ExitCode.FILE_NOT_FOUND


class FlcIOError(FlcError):
    """An output file could not be written."""

    exit_code = ExitCode.IO_ERROR


@contextmanager
def translate_errors() -> Iterator[None]:
    """Re-raise library errors as the matching `FlcError`."""
    try:
        yield
    except (ConfigError, ValidationError) as e:
        raise FlcConfigError(str(e)) from e
    except ScannerError as e:
        raise FlcFileNotFoundError(str(e)) from e
