# flc:header:start
#
#   project      : Fast License Checker
#   file         : results.py
#   file_relpath : src/fast_license_checker/engine/results.py
#   license      : MIT
#   copyright    : (c) 2025 Fast License Checker contributors
#
# flc:header:end

"""Per-file outcomes and run-level summaries.

Tagged variants are frozen dataclasses carrying a `kind` enum plus the
payload that kind needs (a similarity score, a skip reason, a failure
message). Enums are `ColoredStrEnum`s so that the CLI can render them in
color while JSON output uses their stable ``.value`` keys.

Summaries are produced by `SummaryBuilder`, a single-threaded fold over
per-file results: counters are commutative, so the order in which worker
threads complete files does not matter.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from yachalk import chalk

from fast_license_checker.header.matcher import MatchKind
from fast_license_checker.rendering.colored_enum import ColoredStrEnum

if TYPE_CHECKING:
    from pathlib import Path

    from fast_license_checker.header.matcher import MatchOutcome


class SkipReason(ColoredStrEnum):
    """Why a file was not checked."""

    BINARY = ("binary", "binary file", chalk.gray)
    EMPTY = ("empty", "empty file", chalk.gray)
    IGNORED = ("ignored", "ignored", chalk.gray)
    UNSUPPORTED_ENCODING = ("unsupported_encoding", "unsupported encoding", chalk.yellow)
    NO_COMMENT_STYLE = ("no_comment_style", "no comment style", chalk.gray)
    TOO_LARGE = ("too_large", "too large", chalk.yellow)
    UNREADABLE = ("unreadable", "unreadable", chalk.red)


class StatusKind(ColoredStrEnum):
    """Scan verdict for one file."""

    HAS_HEADER = ("has_header", "has header", chalk.green)
    MISSING_HEADER = ("missing_header", "missing header", chalk.red_bright)
    MALFORMED_HEADER = ("malformed_header", "malformed header", chalk.yellow_bright)
    SKIPPED = ("skipped", "skipped", chalk.gray)


class FixKind(ColoredStrEnum):
    """Fix outcome for one file."""

    FIXED = ("fixed", "fixed", chalk.green_bright)
    WOULD_FIX = ("would_fix", "would fix", chalk.cyan)
    ALREADY_HAS_HEADER = ("already_has_header", "already has header", chalk.green)
    SKIPPED = ("skipped", "skipped", chalk.gray)
    FAILED = ("failed", "failed", chalk.red_bright)


@dataclass(frozen=True, slots=True)
class FileStatus:
    """Scan verdict with its payload.

    Attributes:
        kind (StatusKind): The verdict.
        similarity (int | None): Fuzzy score, only for ``MALFORMED_HEADER``.
        reason (SkipReason | None): Only for ``SKIPPED``.
    """

    kind: StatusKind
    similarity: int | None = None
    reason: SkipReason | None = None

    @classmethod
    def has_header(cls) -> FileStatus:
        return cls(StatusKind.HAS_HEADER)

    @classmethod
    def missing_header(cls) -> FileStatus:
        return cls(StatusKind.MISSING_HEADER)

    @classmethod
    def malformed_header(cls, similarity: int) -> FileStatus:
        return cls(StatusKind.MALFORMED_HEADER, similarity=similarity)

    @classmethod
    def skipped(cls, reason: SkipReason) -> FileStatus:
        return cls(StatusKind.SKIPPED, reason=reason)

    @property
    def is_pass(self) -> bool:
        return self.kind is StatusKind.HAS_HEADER

    @property
    def is_failure(self) -> bool:
        return self.kind in (StatusKind.MISSING_HEADER, StatusKind.MALFORMED_HEADER)

    def describe(self) -> str:
        """Return a short human-readable description, payload included."""
        if self.kind is StatusKind.MALFORMED_HEADER:
            return f"{self.kind.label} ({self.similarity}% similar)"
        if self.kind is StatusKind.SKIPPED and self.reason is not None:
            return f"{self.kind.label} ({self.reason.label})"
        return self.kind.label


@dataclass(frozen=True, slots=True)
class FixAction:
    """Fix outcome with its payload.

    Attributes:
        kind (FixKind): The outcome.
        reason (SkipReason | None): Only for ``SKIPPED``.
        message (str | None): Only for ``FAILED``.
    """

    kind: FixKind
    reason: SkipReason | None = None
    message: str | None = None

    @classmethod
    def fixed(cls) -> FixAction:
        return cls(FixKind.FIXED)

    @classmethod
    def would_fix(cls) -> FixAction:
        return cls(FixKind.WOULD_FIX)

    @classmethod
    def already_has_header(cls) -> FixAction:
        return cls(FixKind.ALREADY_HAS_HEADER)

    @classmethod
    def skipped(cls, reason: SkipReason) -> FixAction:
        return cls(FixKind.SKIPPED, reason=reason)

    @classmethod
    def failed(cls, message: str) -> FixAction:
        return cls(FixKind.FAILED, message=message)

    @property
    def is_pass(self) -> bool:
        return self.kind in (FixKind.FIXED, FixKind.WOULD_FIX, FixKind.ALREADY_HAS_HEADER)

    @property
    def is_failure(self) -> bool:
        return self.kind is FixKind.FAILED

    def describe(self) -> str:
        """Return a short human-readable description, payload included."""
        if self.kind is FixKind.FAILED and self.message:
            return f"{self.kind.label}: {self.message}"
        if self.kind is FixKind.SKIPPED and self.reason is not None:
            return f"{self.kind.label} ({self.reason.label})"
        return self.kind.label


def classify_match(outcome: MatchOutcome) -> FileStatus:
    """Map a matcher outcome to a scan verdict."""
    if outcome.kind is MatchKind.EXACT:
        return FileStatus.has_header()
    if outcome.kind is MatchKind.FUZZY:
        return FileStatus.malformed_header(outcome.similarity or 0)
    return FileStatus.missing_header()


@dataclass(frozen=True, slots=True)
class ScanResult:
    path: Path
    status: FileStatus


@dataclass(frozen=True, slots=True)
class FixResult:
    path: Path
    action: FixAction


@dataclass(frozen=True, slots=True)
class ScanSummary:
    """Run-level counters.

    Attributes:
        total (int): Files that reached a terminal state.
        passed (int): Files with a header (or fixed, for fix runs).
        failed (int): Files missing a header or with a malformed one (failed fixes).
        skipped (int): Files not checked, for any `SkipReason`.
        duration (float): Wall-clock seconds for the whole run.
        interrupted (bool): True when the run was cancelled or hit its deadline;
            counters then cover completed files only.
    """

    total: int = 0
    passed: int = 0
    failed: int = 0
    skipped: int = 0
    duration: float = 0.0
    interrupted: bool = False

    @property
    def needs_attention(self) -> int:
        return self.failed + self.skipped

    @property
    def is_clean(self) -> bool:
        return self.failed == 0 and self.skipped == 0

    @property
    def success_rate(self) -> float:
        """Fraction of files that passed, in ``[0.0, 1.0]``."""
        return self.passed / self.total if self.total else 0.0

    def __str__(self) -> str:
        return (
            f"Processed {self.total} files in {self.duration:.2f}s: "
            f"{self.passed} passed, {self.failed} failed, {self.skipped} skipped "
            f"({self.success_rate * 100:.1f}% success)"
        )


@dataclass
class SummaryBuilder:
    """Mutable accumulator folded by the consuming thread only."""

    passed: int = 0
    failed: int = 0
    skipped: int = 0

    def add_status(self, status: FileStatus) -> None:
        if status.is_pass:
            self.passed += 1
        elif status.is_failure:
            self.failed += 1
        else:
            self.skipped += 1

    def add_action(self, action: FixAction) -> None:
        if action.is_pass:
            self.passed += 1
        elif action.is_failure:
            self.failed += 1
        else:
            self.skipped += 1

    def build(self, duration: float, *, interrupted: bool = False) -> ScanSummary:
        return ScanSummary(
            total=self.passed + self.failed + self.skipped,
            passed=self.passed,
            failed=self.failed,
            skipped=self.skipped,
            duration=duration,
            interrupted=interrupted,
        )


@dataclass(frozen=True, slots=True)
class ScanReport:
    """Outcome of `Scanner.scan`: summary plus per-file results sorted by path."""

    summary: ScanSummary
    results: tuple[ScanResult, ...] = ()
    walk_errors: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class FixReport:
    """Outcome of `HeaderFixer.fix_all`: summary plus per-file results sorted by path."""

    summary: ScanSummary
    results: tuple[FixResult, ...] = ()
    walk_errors: tuple[str, ...] = field(default_factory=tuple)
