# flc:header:start
#
#   project      : Fast License Checker
#   file         : writer.py
#   file_relpath : src/fast_license_checker/fixer/writer.py
#   license      : MIT
#   copyright    : (c) 2025 Fast License Checker contributors
#
# flc:header:end

"""Crash-safe file replacement.

`write_atomic` writes the new content to ``.{name}.tmp`` next to the target,
flushes and fsyncs it, copies the target's permission bits and renames it
over the target with ``os.replace``. Readers therefore observe either the old
or the new content, never a partial write. On any failure the temporary file
is removed and the target is left untouched.

Sinks
-----
- `AtomicFileSink`: writes with `write_atomic`.
- `DryRunSink`: records what would be written and touches nothing.
"""

from __future__ import annotations

import os
import stat
from pathlib import Path
from typing import TYPE_CHECKING, Final, Protocol

from fast_license_checker.config.logging import get_logger
from fast_license_checker.constants import DEFAULT_MAX_FILE_BYTES
from fast_license_checker.core.errors import WriteError

if TYPE_CHECKING:
    from fast_license_checker.config.logging import FlcLogger

logger: FlcLogger = get_logger(__name__)

# Numbered fallbacks used when ``.{name}.tmp`` is already taken.
_MAX_TEMP_ATTEMPTS: Final[int] = 100


def temp_path_for(path: Path, attempt: int = 0) -> Path:
    """Return the temporary sibling used while rewriting ``path``."""
    suffix: str = ".tmp" if attempt == 0 else f".{attempt}.tmp"
    return path.with_name(f".{path.name}{suffix}")


def _create_temp(path: Path) -> tuple[int, Path]:
    flags: int = os.O_WRONLY | os.O_CREAT | os.O_EXCL | getattr(os, "O_BINARY", 0)
    last_error: OSError | None = None
    for attempt in range(_MAX_TEMP_ATTEMPTS):
        candidate: Path = temp_path_for(path, attempt)
        try:
            return os.open(candidate, flags, 0o600), candidate
        except FileExistsError as e:
            last_error = e
            continue
        except OSError as e:
            raise WriteError(path, "create", e.strerror or str(e)) from e
    raise WriteError(path, "create", str(last_error))


def _remove_quietly(path: Path) -> None:
    try:
        path.unlink()
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning("Cannot remove temporary file %s: %s", path, e)


def write_atomic(path: Path, data: bytes) -> None:
    """Replace the content of ``path`` with ``data`` atomically.

    Symlinks are resolved first so that the link itself survives.

    Args:
        path (Path): File to replace.
        data (bytes): New content.

    Raises:
        WriteError: If any step fails; the original file is unchanged and no
            temporary file remains.
    """
    target: Path = path.resolve() if path.is_symlink() else path
    fd, temp = _create_temp(target)
    stage: str = "write"
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
            fh.flush()
            stage = "sync"
            os.fsync(fh.fileno())
        stage = "chmod"
        try:
            mode: int = stat.S_IMODE(os.stat(target).st_mode)
        except FileNotFoundError:
            mode = 0o644
        os.chmod(temp, mode)
        stage = "rename"
        os.replace(temp, target)
    except OSError as e:
        _remove_quietly(temp)
        raise WriteError(target, stage, e.strerror or str(e)) from e
    except BaseException:
        _remove_quietly(temp)
        raise
    logger.debug("Wrote %d byte(s) to %s", len(data), target)


def is_writable(path: Path) -> bool:
    """True when ``path`` and its directory are writable (the rename needs both)."""
    target: Path = path.resolve() if path.is_symlink() else path
    if target.exists():
        return os.access(target, os.W_OK) and os.access(target.parent, os.W_OK)
    return os.access(target.parent, os.W_OK)


def validate_content(path: Path, data: bytes, max_bytes: int = DEFAULT_MAX_FILE_BYTES) -> None:
    """Refuse to write more than ``max_bytes`` to ``path``.

    Raises:
        WriteError: If ``data`` exceeds the limit.
    """
    if len(data) > max_bytes:
        raise WriteError(path, "validate", f"{len(data)} bytes exceeds {max_bytes}")


class WriteSink(Protocol):
    """Destination for rewritten file content."""

    def write(self, path: Path, data: bytes) -> None:
        """Persist ``data`` as the new content of ``path``.

        Raises:
            WriteError: If the content could not be persisted.
        """
        ...


class AtomicFileSink:
    """Write through `write_atomic`, enforcing a content size limit."""

    def __init__(self, max_bytes: int = DEFAULT_MAX_FILE_BYTES) -> None:
        self.max_bytes = max_bytes

    def write(self, path: Path, data: bytes) -> None:
        validate_content(path, data, self.max_bytes)
        if not is_writable(path):
            raise WriteError(path, "create", "permission denied")
        write_atomic(path, data)


class DryRunSink:
    """Record intended writes without touching the filesystem."""

    def __init__(self) -> None:
        self.planned: list[Path] = []

    def write(self, path: Path, data: bytes) -> None:
        logger.info("Would write %d byte(s) to %s", len(data), path)
        self.planned.append(path)
