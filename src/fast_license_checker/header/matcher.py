# flc:header:start
#
#   project      : Fast License Checker
#   file         : matcher.py
#   file_relpath : src/fast_license_checker/header/matcher.py
#   license      : MIT
#   copyright    : (c) 2025 Fast License Checker contributors
#
# flc:header:end

"""Decide whether sampled file content carries the expected license header.

`detect` looks only at the region following the prelude (see
`fast_license_checker.header.prelude`) and returns a `MatchOutcome`:

- ``EXACT``: the region starts with one of the accepted renderings;
- ``FUZZY``: the region resembles the header (score at or above the threshold);
- ``NONE``: no header-like text was found.

The keyword heuristics at the bottom of this module are diagnostics only and
never change a match outcome.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Final

from fast_license_checker.config.logging import get_logger
from fast_license_checker.constants import DEFAULT_SIMILARITY_THRESHOLD
from fast_license_checker.header.formatter import detect_newline, search_candidates
from fast_license_checker.header.prelude import header_start_offset
from fast_license_checker.header.similarity import (
    decode_head,
    line_fuzzy_score,
    prefix_fuzzy_score,
)

if TYPE_CHECKING:
    from fast_license_checker.config.logging import FlcLogger
    from fast_license_checker.header.types import CommentStyle, LicenseHeaderText

logger: FlcLogger = get_logger(__name__)

HEADER_KEYWORDS: Final[tuple[str, ...]] = (
    "copyright",
    "license",
    "licensed under",
    "mit license",
    "apache license",
    "gpl",
    "lgpl",
    "bsd license",
    "mozilla public license",
    "isc license",
)
PARTIAL_HEADER_KEYWORDS: Final[tuple[str, ...]] = (
    "copyright",
    "license",
    "mit",
    "apache",
    "gpl",
    "bsd",
)


class MatchKind(str, Enum):
    """How closely the file head matches the expected header."""

    EXACT = "exact"
    FUZZY = "fuzzy"
    NONE = "none"


@dataclass(frozen=True, slots=True)
class MatchOutcome:
    """Result of `detect`.

    Attributes:
        kind (MatchKind): The match category.
        similarity (int | None): Score in ``[0, 100]``; set only for ``FUZZY``.
    """

    kind: MatchKind
    similarity: int | None = None

    @classmethod
    def exact(cls) -> MatchOutcome:
        return cls(MatchKind.EXACT)

    @classmethod
    def fuzzy(cls, similarity: int) -> MatchOutcome:
        return cls(MatchKind.FUZZY, max(0, min(100, similarity)))

    @classmethod
    def none(cls) -> MatchOutcome:
        return cls(MatchKind.NONE)


def similarity_score(region: bytes, candidates: tuple[str, ...]) -> int | None:
    """Return the best fuzzy score of ``region`` against any candidate rendering."""
    best: int | None = None
    for candidate in candidates:
        for score in (
            prefix_fuzzy_score(region, candidate.encode("utf-8")),
            line_fuzzy_score(region, candidate),
        ):
            if score is not None and (best is None or score > best):
                best = score
    return best


def detect(
    sample: bytes,
    header: LicenseHeaderText,
    style: CommentStyle,
    threshold: int = DEFAULT_SIMILARITY_THRESHOLD,
) -> MatchOutcome:
    """Classify the head of ``sample`` against the expected header.

    Never raises, whatever the bytes: undecodable content simply scores as
    no match.

    Args:
        sample (bytes): The first bytes of a file.
        header (LicenseHeaderText): Expected header text.
        style (CommentStyle): Comment markers for the file's type.
        threshold (int): Minimum fuzzy score reported as ``FUZZY``.

    Returns:
        MatchOutcome: The classification.
    """
    offset: int = header_start_offset(sample)
    region: bytes = sample[offset:]
    candidates: tuple[str, ...] = search_candidates(header, style, detect_newline(sample))

    for candidate in candidates:
        if region.startswith(candidate.encode("utf-8")):
            return MatchOutcome.exact()

    score: int | None = similarity_score(region, candidates)
    logger.trace("Fuzzy score %s (threshold %d, prelude %d bytes)", score, threshold, offset)
    if score is not None and score >= threshold:
        return MatchOutcome.fuzzy(score)
    return MatchOutcome.none()


def _leading_text(sample: bytes, max_lines: int) -> str | None:
    text: str | None = decode_head(sample[header_start_offset(sample) :])
    if text is None:
        return None
    return "\n".join(text.splitlines()[:max_lines]).lower()


def contains_any_license_header(sample: bytes) -> bool:
    """True when the first ten lines after the prelude mention a license."""
    text: str | None = _leading_text(sample, 10)
    if text is None:
        return False
    return any(keyword in text for keyword in HEADER_KEYWORDS)


def detect_malformed_header(sample: bytes) -> str | None:
    """Describe license-like text found in the first five lines, if any.

    Returns:
        str | None: A human-readable note naming the keyword that was found.
    """
    text: str | None = _leading_text(sample, 5)
    if text is None:
        return None
    for keyword in PARTIAL_HEADER_KEYWORDS:
        if keyword in text:
            return f"partial license text containing '{keyword}'"
    return None
