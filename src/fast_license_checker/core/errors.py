# flc:header:start
#
#   project      : Fast License Checker
#   file         : errors.py
#   file_relpath : src/fast_license_checker/core/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Fast License Checker contributors
#
# flc:header:end

"""Exception hierarchy for the license checker core.

Usage:
    Library code raises these exceptions; the CLI translates them into
    `click` errors with sysexits-aligned exit codes (see
    `fast_license_checker.cli.errors`).

Fatal vs. per-file:
    - `ConfigError`, `ValidationError` and `ScannerError` abort a run before
      any file is processed.
    - `WriteError` is raised by the atomic writer for a single file; the fixer
      catches it and records a ``FAILED`` action for that file only.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class LicenseCheckerError(Exception):
    """Base class for all license checker errors."""


class ConfigError(LicenseCheckerError):
    """Invalid, unreadable or inconsistent configuration."""


class ValidationError(LicenseCheckerError):
    """A domain value failed validation (empty header, bad extension, ...)."""


class ScannerError(LicenseCheckerError):
    """The scan root cannot be used (missing, not a directory, unreadable)."""


class WriteError(LicenseCheckerError):
    """An atomic write failed; the target file was left untouched.

    Args:
        path (Path): The file that was being written.
        stage (str): The failing step (``"create"``, ``"write"``, ``"sync"``, ``"rename"``).
        reason (str): Human-readable cause, usually the ``OSError`` text.
    """

    path: Path
    stage: str
    reason: str

    def __init__(self, path: Path, stage: str, reason: str) -> None:
        self.path = path
        self.stage = stage
        self.reason = reason
        super().__init__(f"Cannot write {path} ({stage}): {reason}")
