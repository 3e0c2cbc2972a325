# flc:header:start
#
#   project      : Fast License Checker
#   file         : fixer.py
#   file_relpath : src/fast_license_checker/engine/fixer.py
#   license      : MIT
#   copyright    : (c) 2025 Fast License Checker contributors
#
# flc:header:end

"""Insert missing license headers.

`HeaderFixer` reuses `Scanner.check_entry` for the read-only part and only
touches files whose verdict is ``MISSING_HEADER``:

    Matched(missing) -> Read (whole file) -> Re-check content -> Insert -> Write

Verdict to action:
    - ``HAS_HEADER`` -> ``ALREADY_HAS_HEADER``
    - ``MALFORMED_HEADER`` -> ``FAILED`` (a near-miss header needs a human)
    - ``SKIPPED(reason)`` -> ``SKIPPED(reason)``
    - ``MISSING_HEADER`` -> ``FIXED`` (``WOULD_FIX`` in dry-run mode)

Writes go through a `WriteSink`; the default sink replaces files atomically.
"""

from __future__ import annotations

import time
from contextlib import closing
from typing import TYPE_CHECKING

from fast_license_checker.config.logging import get_logger
from fast_license_checker.core.errors import WriteError
from fast_license_checker.engine.pool import BoundedPool
from fast_license_checker.engine.results import (
    FixAction,
    FixReport,
    FixResult,
    SkipReason,
    StatusKind,
    SummaryBuilder,
)
from fast_license_checker.engine.scanner import Scanner
from fast_license_checker.fixer.writer import AtomicFileSink, DryRunSink
from fast_license_checker.header.formatter import insert_header
from fast_license_checker.scanner.classifier import classify_content
from fast_license_checker.scanner.sampler import read_all
from fast_license_checker.scanner.walker import EntryType, WalkEntry

if TYPE_CHECKING:
    import threading
    from pathlib import Path

    from fast_license_checker.config.logging import FlcLogger
    from fast_license_checker.config.model import Config
    from fast_license_checker.engine.results import ScanResult
    from fast_license_checker.fixer.writer import WriteSink
    from fast_license_checker.header.types import CommentStyle

logger: FlcLogger = get_logger(__name__)


class HeaderFixer:
    """Add the configured license header to files that lack it.

    Args:
        root (Path): Directory (or single file) to fix.
        config (Config): Frozen configuration.
        sink (WriteSink | None): Write destination; defaults to `AtomicFileSink`.

    Raises:
        ScannerError: If ``root`` does not exist.
        ConfigError: If no valid license header is configured.
    """

    def __init__(self, root: Path, config: Config, sink: WriteSink | None = None) -> None:
        self.scanner: Scanner = Scanner(root, config)
        self.config: Config = config
        self.sink: WriteSink = sink or AtomicFileSink(config.max_file_bytes)

    @property
    def root(self) -> Path:
        return self.scanner.root

    def fix_file(self, path: Path, *, dry_run: bool = False) -> FixResult:
        """Fix a single file, bypassing ignore rules."""
        file_type: EntryType = EntryType.SYMLINK_FILE if path.is_symlink() else EntryType.FILE
        sink: WriteSink = DryRunSink() if dry_run else self.sink
        return self._fix_entry(WalkEntry(path, 0, file_type), sink, dry_run=dry_run)

    def _fix_entry(self, entry: WalkEntry, sink: WriteSink, *, dry_run: bool) -> FixResult:
        checked: ScanResult = self.scanner.check_entry(entry)
        path: Path = checked.path
        kind: StatusKind = checked.status.kind

        if kind is StatusKind.SKIPPED:
            return FixResult(path, FixAction.skipped(checked.status.reason or SkipReason.IGNORED))
        if kind is StatusKind.HAS_HEADER:
            return FixResult(path, FixAction.already_has_header())
        if kind is StatusKind.MALFORMED_HEADER:
            message: str = (
                f"malformed header ({checked.status.similarity}% similar), "
                "manual review required"
            )
            logger.warning("%s: %s", path, message)
            return FixResult(path, FixAction.failed(message))
        return FixResult(path, self._insert(entry, sink, dry_run=dry_run))

    def _insert(self, entry: WalkEntry, sink: WriteSink, *, dry_run: bool) -> FixAction:
        path: Path = entry.path
        style: CommentStyle | None = self.scanner.style_for(entry.extension)
        if style is None:
            return FixAction.skipped(SkipReason.NO_COMMENT_STYLE)

        try:
            size: int = path.stat().st_size
            if size > self.config.max_file_bytes:
                logger.info("Not fixing %s: %d bytes exceeds the limit", path, size)
                return FixAction.skipped(SkipReason.TOO_LARGE)
            content: bytes = read_all(path)
        except OSError as e:
            logger.warning("Cannot read %s: %s", path, e.strerror or e)
            return FixAction.skipped(SkipReason.UNREADABLE)

        # The scan only saw the head; the rest of the file must pass as well.
        reason: SkipReason | None = classify_content(content)
        if reason is not None:
            logger.info("Not fixing %s: %s", path, reason.label)
            return FixAction.skipped(reason)

        updated: bytes = insert_header(content, self.scanner.header, style)
        try:
            sink.write(path, updated)
        except WriteError as e:
            logger.error("%s", e)
            return FixAction.failed(str(e))
        if dry_run:
            return FixAction.would_fix()
        logger.info("Added license header to %s", path)
        return FixAction.fixed()

    def fix_all(
        self,
        cancel: threading.Event | None = None,
        timeout: float | None = None,
        *,
        dry_run: bool = False,
    ) -> FixReport:
        """Insert the header into every file below the root that lacks it.

        Args:
            cancel (threading.Event | None): Stops the run when set.
            timeout (float | None): Seconds after which the run stops.
            dry_run (bool): Report ``WOULD_FIX`` instead of writing.

        Returns:
            FixReport: Summary and per-file actions sorted by path.
        """
        start: float = time.perf_counter()
        sink: WriteSink = DryRunSink() if dry_run else self.sink
        walk_errors: list[str] = []
        builder = SummaryBuilder()
        results: list[FixResult] = []
        pool: BoundedPool[WalkEntry, FixResult] = BoundedPool(
            self.config.jobs, cancel=cancel, timeout=timeout
        )

        def work(entry: WalkEntry) -> FixResult:
            return self._fix_entry(entry, sink, dry_run=dry_run)

        logger.info("Fixing %s%s", self.root, " (dry run)" if dry_run else "")
        with closing(self.scanner.iter_entries(walk_errors)) as entries:
            for result in pool.map_unordered(work, entries):
                builder.add_action(result.action)
                results.append(result)

        results.sort(key=lambda r: r.path)
        report = FixReport(
            summary=builder.build(time.perf_counter() - start, interrupted=pool.interrupted),
            results=tuple(results),
            walk_errors=tuple(walk_errors),
        )
        logger.info("%s", report.summary)
        return report
