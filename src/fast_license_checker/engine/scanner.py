# flc:header:start
#
#   project      : Fast License Checker
#   file         : scanner.py
#   file_relpath : src/fast_license_checker/engine/scanner.py
#   license      : MIT
#   copyright    : (c) 2025 Fast License Checker contributors
#
# flc:header:end

"""Read-only header check over a directory tree.

Per file the scanner moves through three states:

    Sampled -> Classified (skip | proceed) -> Matched (verdict)

Files are discovered by `ParallelWalker` and processed on a `BoundedPool`;
the calling thread folds every `ScanResult` into a `SummaryBuilder`. The
report lists results sorted by path regardless of completion order.
"""

from __future__ import annotations

import os
import time
from contextlib import closing
from pathlib import Path
from typing import TYPE_CHECKING

from fast_license_checker.config.logging import get_logger
from fast_license_checker.constants import PRELUDE_ALLOWANCE_BYTES
from fast_license_checker.core.errors import ScannerError
from fast_license_checker.engine.pool import BoundedPool
from fast_license_checker.engine.results import (
    FileStatus,
    ScanReport,
    ScanResult,
    SkipReason,
    SummaryBuilder,
    classify_match,
)
from fast_license_checker.header.formatter import rendered_size
from fast_license_checker.header.matcher import (
    contains_any_license_header,
    detect,
    detect_malformed_header,
)
from fast_license_checker.scanner.classifier import classify
from fast_license_checker.scanner.sampler import read_sample
from fast_license_checker.scanner.walker import EntryType, ParallelWalker, WalkEntry, WalkError

if TYPE_CHECKING:
    import threading
    from collections.abc import Iterator

    from fast_license_checker.config.logging import FlcLogger
    from fast_license_checker.config.model import Config
    from fast_license_checker.header.matcher import MatchOutcome
    from fast_license_checker.header.types import (
        CommentStyle,
        CommentStyleTable,
        FileExtension,
        LicenseHeaderText,
    )
    from fast_license_checker.scanner.sampler import Sample
    from fast_license_checker.scanner.walker import WalkItem

logger: FlcLogger = get_logger(__name__)


def make_walker(root: Path, config: Config) -> ParallelWalker:
    """Return a walker configured from ``config``."""
    return ParallelWalker(
        root,
        ignore_patterns=config.ignore_patterns,
        jobs=config.jobs,
        include_hidden=config.include_hidden,
        follow_links=config.follow_links,
        respect_vcs_ignores=config.respect_vcs_ignores,
    )


class Scanner:
    """Check every file below ``root`` for the configured license header.

    Args:
        root (Path): Directory (or single file) to scan.
        config (Config): Frozen configuration.

    Raises:
        ScannerError: If ``root`` does not exist.
        ConfigError: If no valid license header is configured.
    """

    def __init__(self, root: Path, config: Config) -> None:
        if not root.exists():
            raise ScannerError(f"Path does not exist: {root}")
        self.root: Path = Path(os.path.abspath(root))
        self.config: Config = config
        self.header: LicenseHeaderText = config.header()
        self.styles: CommentStyleTable = config.style_table()
        self.sample_sizes: dict[CommentStyle, int] = {
            style: self.sample_size(style)
            for style in (*self.styles.styles.values(), self.styles.default)
            if style is not None
        }

    def sample_size(self, style: CommentStyle) -> int:
        """Bytes to read so that a full header in ``style`` fits the sample.

        Headers longer than ``max_header_bytes`` raise the limit instead of
        becoming unmatchable.
        """
        needed: int = rendered_size(self.header, style) + PRELUDE_ALLOWANCE_BYTES
        return max(self.config.max_header_bytes, needed)

    def style_for(self, ext: FileExtension | None) -> CommentStyle | None:
        return self.styles.lookup(ext)

    def check_file(self, path: Path) -> ScanResult:
        """Check a single file, bypassing ignore rules."""
        file_type: EntryType = EntryType.SYMLINK_FILE if path.is_symlink() else EntryType.FILE
        return self.check_entry(WalkEntry(path, 0, file_type))

    def check_entry(self, entry: WalkEntry) -> ScanResult:
        """Sample, classify and match one walked file.

        Never raises for per-file problems: unreadable files become
        ``SKIPPED(UNREADABLE)``.
        """
        path: Path = entry.path
        if entry.ignored:
            return ScanResult(path, FileStatus.skipped(SkipReason.IGNORED))

        ext: FileExtension | None = entry.extension
        style: CommentStyle | None = self.style_for(ext)
        size: int = self.config.max_header_bytes
        if style is not None:
            size = self.sample_sizes.get(style, size)
        try:
            sample: Sample = read_sample(path, size)
        except OSError as e:
            logger.warning("Cannot read %s: %s", path, e.strerror or e)
            return ScanResult(path, FileStatus.skipped(SkipReason.UNREADABLE))

        reason: SkipReason | None = classify(
            sample, style, skip_empty_files=self.config.skip_empty_files
        )
        if reason is not None or style is None:
            logger.trace("Skipping %s: %s", path, reason)
            return ScanResult(path, FileStatus.skipped(reason or SkipReason.NO_COMMENT_STYLE))

        outcome: MatchOutcome = detect(
            sample.data, self.header, style, self.config.threshold_for(ext)
        )
        status: FileStatus = classify_match(outcome)
        if status.is_failure:
            note: str | None = detect_malformed_header(sample.data)
            if note is not None:
                logger.debug("%s: %s (%s)", path, status.describe(), note)
            elif contains_any_license_header(sample.data):
                logger.debug("%s: %s (a different license header)", path, status.describe())
            else:
                logger.debug("%s: %s", path, status.describe())
        return ScanResult(path, status)

    def iter_entries(self, walk_errors: list[str]) -> Iterator[WalkEntry]:
        """Yield walked files, recording traversal errors in ``walk_errors``."""
        walker: ParallelWalker = make_walker(self.root, self.config)
        with closing(walker.walk()) as items:
            item: WalkItem
            for item in items:
                if isinstance(item, WalkError):
                    logger.warning("Walk error: %s", item)
                    walk_errors.append(str(item))
                    continue
                yield item

    def scan(
        self,
        cancel: threading.Event | None = None,
        timeout: float | None = None,
    ) -> ScanReport:
        """Check all files below the root.

        Args:
            cancel (threading.Event | None): Stops the run when set.
            timeout (float | None): Seconds after which the run stops.

        Returns:
            ScanReport: Summary and per-file results sorted by path.
        """
        start: float = time.perf_counter()
        walk_errors: list[str] = []
        builder = SummaryBuilder()
        results: list[ScanResult] = []
        pool: BoundedPool[WalkEntry, ScanResult] = BoundedPool(
            self.config.jobs, cancel=cancel, timeout=timeout
        )
        logger.info("Scanning %s", self.root)
        with closing(self.iter_entries(walk_errors)) as entries:
            for result in pool.map_unordered(self.check_entry, entries):
                builder.add_status(result.status)
                results.append(result)

        results.sort(key=lambda r: r.path)
        report = ScanReport(
            summary=builder.build(time.perf_counter() - start, interrupted=pool.interrupted),
            results=tuple(results),
            walk_errors=tuple(walk_errors),
        )
        logger.info("%s", report.summary)
        return report
