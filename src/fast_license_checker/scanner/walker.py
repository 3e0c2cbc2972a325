# flc:header:start
#
#   project      : Fast License Checker
#   file         : walker.py
#   file_relpath : src/fast_license_checker/scanner/walker.py
#   license      : MIT
#   copyright    : (c) 2025 Fast License Checker contributors
#
# flc:header:end

"""Parallel directory traversal with gitignore-aware pruning.

`ParallelWalker.walk` returns a lazy generator of `WalkEntry` (a file to
check) and `WalkError` (a path that could not be traversed). Order is not
specified.

Threads:
    A fixed pool of worker threads pulls directory tasks from an unbounded
    work queue, lists each directory with ``os.scandir`` and pushes child
    directories back onto the work queue and files onto a bounded result
    queue. A coordinator thread waits for the work queue to drain and then
    signals completion. The generator consumes the result queue; closing it
    early sets a stop event that makes all producers wind down.

Pruning:
    Hidden entries, ``.git`` directories and ignored directories are never
    listed. Symlinked directories are only followed when requested; loops
    are detected from the (device, inode) identities of the ancestor chain
    carried with every directory task.
"""

from __future__ import annotations

import os
import queue
import threading
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Final, Union

from fast_license_checker.config.logging import get_logger
from fast_license_checker.header.types import FileExtension
from fast_license_checker.scanner.ignore import (
    GIT_DIR_NAME,
    IgnoreLayer,
    base_layers,
    directory_layers,
    is_ignored,
)

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from fast_license_checker.config.logging import FlcLogger

logger: FlcLogger = get_logger(__name__)

DEFAULT_RESULT_QUEUE_SIZE: Final[int] = 1024
_PUT_POLL_SECONDS: Final[float] = 0.05


class EntryType(str, Enum):
    """Kind of file yielded by the walker."""

    FILE = "file"
    SYMLINK_FILE = "symlink_file"


@dataclass(frozen=True, slots=True)
class WalkEntry:
    """A file discovered by the walker.

    Attributes:
        path (Path): Absolute path.
        depth (int): Distance from the walk root (0 for a root file).
        file_type (EntryType): Regular file or symlink to one.
        ignored (bool): Only set for an explicitly given root file that the
            ignore rules exclude; the walker never yields other ignored files.
    """

    path: Path
    depth: int
    file_type: EntryType = EntryType.FILE
    ignored: bool = False

    @property
    def file_name(self) -> str:
        return self.path.name

    @property
    def extension(self) -> FileExtension | None:
        return FileExtension.for_path(self.path)

    def relative_to(self, root: Path) -> Path:
        """Return the path relative to ``root`` (unchanged when not below it)."""
        try:
            return self.path.relative_to(root)
        except ValueError:
            return self.path


@dataclass(frozen=True, slots=True)
class WalkError:
    """A traversal failure; the walk continues with other subtrees."""

    path: Path
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


WalkItem = Union[WalkEntry, WalkError]


@dataclass(frozen=True)
class _DirTask:
    path: Path
    depth: int
    layers: tuple[IgnoreLayer, ...]
    ancestry: frozenset[tuple[int, int]] = field(default_factory=frozenset)


class _Done:
    """Sentinel closing the result stream."""


_DONE: Final[_Done] = _Done()


class ParallelWalker:
    """Gitignore-aware directory walker backed by a thread pool.

    Args:
        root (Path): Directory (or single file) to walk.
        ignore_patterns (Sequence[str]): Extra gitignore-style patterns relative to ``root``.
        jobs (int | None): Worker threads; defaults to the CPU count.
        include_hidden (bool): Also yield and descend into dot-entries (``.git`` excepted).
        follow_links (bool): Descend into symlinked directories and yield symlinked files.
        respect_vcs_ignores (bool): Honor ``.gitignore``/``.ignore`` and git exclude files.
        queue_size (int): Capacity of the result queue between workers and consumer.
    """

    def __init__(
        self,
        root: Path,
        *,
        ignore_patterns: Sequence[str] = (),
        jobs: int | None = None,
        include_hidden: bool = False,
        follow_links: bool = False,
        respect_vcs_ignores: bool = True,
        queue_size: int = DEFAULT_RESULT_QUEUE_SIZE,
    ) -> None:
        self.root = Path(os.path.abspath(root))
        self.ignore_patterns = tuple(ignore_patterns)
        self.jobs = max(1, jobs or os.cpu_count() or 1)
        self.include_hidden = include_hidden
        self.follow_links = follow_links
        self.respect_vcs_ignores = respect_vcs_ignores
        self.queue_size = max(1, queue_size)

    def walk(self) -> Iterator[WalkItem]:
        """Yield every non-ignored file below the root, in no particular order.

        Each call starts an independent traversal.

        Yields:
            WalkItem: A `WalkEntry` per file, a `WalkError` per failed directory or entry.
        """
        if self.root.is_file():
            yield self._root_file_entry()
            return
        if not self.root.is_dir():
            yield WalkError(self.root, "not a file or directory")
            return

        vcs, overrides = base_layers(
            self.root,
            extra_patterns=self.ignore_patterns,
            respect_vcs_ignores=self.respect_vcs_ignores,
        )
        work: queue.Queue[_DirTask | None] = queue.Queue()
        results: queue.Queue[WalkItem | _Done] = queue.Queue(maxsize=self.queue_size)
        stop = threading.Event()

        root_id: tuple[int, int] | None = self._identity(self.root)
        work.put(
            _DirTask(
                path=self.root,
                depth=0,
                layers=vcs,
                ancestry=frozenset([root_id]) if root_id else frozenset(),
            )
        )

        workers: list[threading.Thread] = [
            threading.Thread(
                target=self._worker,
                args=(work, results, stop, overrides),
                name=f"flc-walk-{i}",
                daemon=True,
            )
            for i in range(self.jobs)
        ]
        coordinator = threading.Thread(
            target=self._coordinate,
            args=(work, results, stop),
            name="flc-walk-coordinator",
            daemon=True,
        )
        for thread in workers:
            thread.start()
        coordinator.start()
        logger.debug("Walking %s with %d thread(s)", self.root, self.jobs)

        try:
            while True:
                item: WalkItem | _Done = results.get()
                if isinstance(item, _Done):
                    break
                yield item
        finally:
            stop.set()

    # ------------------------------ internals ------------------------------

    def _root_file_entry(self) -> WalkEntry:
        parent: Path = self.root.parent
        vcs, overrides = base_layers(
            parent,
            extra_patterns=self.ignore_patterns,
            respect_vcs_ignores=self.respect_vcs_ignores,
        )
        layers: list[IgnoreLayer] = list(vcs)
        if self.respect_vcs_ignores:
            layers.extend(directory_layers(parent))
        layers.extend(overrides)
        ignored: bool = is_ignored(layers, self.root, is_dir=False)
        file_type: EntryType = EntryType.SYMLINK_FILE if self.root.is_symlink() else EntryType.FILE
        return WalkEntry(self.root, 0, file_type, ignored=ignored)

    @staticmethod
    def _identity(path: Path) -> tuple[int, int] | None:
        try:
            st: os.stat_result = path.stat()
        except OSError:
            return None
        return (st.st_dev, st.st_ino)

    @staticmethod
    def _emit(
        results: queue.Queue[WalkItem | _Done], item: WalkItem, stop: threading.Event
    ) -> None:
        while not stop.is_set():
            try:
                results.put(item, timeout=_PUT_POLL_SECONDS)
                return
            except queue.Full:
                continue

    def _coordinate(
        self,
        work: queue.Queue[_DirTask | None],
        results: queue.Queue[WalkItem | _Done],
        stop: threading.Event,
    ) -> None:
        work.join()
        for _ in range(self.jobs):
            work.put(None)
        while not stop.is_set():
            try:
                results.put(_DONE, timeout=_PUT_POLL_SECONDS)
                return
            except queue.Full:
                continue

    def _worker(
        self,
        work: queue.Queue[_DirTask | None],
        results: queue.Queue[WalkItem | _Done],
        stop: threading.Event,
        overrides: tuple[IgnoreLayer, ...],
    ) -> None:
        while True:
            task: _DirTask | None = work.get()
            try:
                if task is None:
                    return
                if not stop.is_set():
                    self._scan_directory(task, overrides, work, results, stop)
            finally:
                work.task_done()

    def _scan_directory(
        self,
        task: _DirTask,
        overrides: tuple[IgnoreLayer, ...],
        work: queue.Queue[_DirTask | None],
        results: queue.Queue[WalkItem | _Done],
        stop: threading.Event,
    ) -> None:
        layers: tuple[IgnoreLayer, ...] = task.layers
        if self.respect_vcs_ignores:
            layers = layers + tuple(directory_layers(task.path))
        effective: tuple[IgnoreLayer, ...] = layers + overrides

        try:
            with os.scandir(task.path) as it:
                entries: list[os.DirEntry[str]] = list(it)
        except OSError as e:
            logger.warning("Cannot list directory %s: %s", task.path, e)
            self._emit(results, WalkError(task.path, e.strerror or str(e)), stop)
            return

        for entry in entries:
            if stop.is_set():
                return
            name: str = entry.name
            if name == GIT_DIR_NAME or (name.startswith(".") and not self.include_hidden):
                continue
            path = Path(entry.path)
            try:
                is_link: bool = entry.is_symlink()
                is_dir: bool = entry.is_dir(follow_symlinks=self.follow_links)
                is_file: bool = entry.is_file(follow_symlinks=self.follow_links)
            except OSError as e:
                self._emit(results, WalkError(path, e.strerror or str(e)), stop)
                continue

            if is_link and not self.follow_links:
                logger.trace("Not following symlink %s", path)
                continue

            if is_dir:
                if is_ignored(effective, path, is_dir=True):
                    logger.trace("Pruned %s", path)
                    continue
                identity: tuple[int, int] | None = self._identity(path)
                if identity is not None and identity in task.ancestry:
                    self._emit(results, WalkError(path, "symlink loop detected"), stop)
                    continue
                work.put(
                    _DirTask(
                        path=path,
                        depth=task.depth + 1,
                        layers=layers,
                        ancestry=(task.ancestry | {identity}) if identity else task.ancestry,
                    )
                )
            elif is_file:
                if is_ignored(effective, path, is_dir=False):
                    continue
                file_type: EntryType = EntryType.SYMLINK_FILE if is_link else EntryType.FILE
                self._emit(results, WalkEntry(path, task.depth + 1, file_type), stop)
