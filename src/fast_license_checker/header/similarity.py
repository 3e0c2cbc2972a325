# flc:header:start
#
#   project      : Fast License Checker
#   file         : similarity.py
#   file_relpath : src/fast_license_checker/header/similarity.py
#   license      : MIT
#   copyright    : (c) 2025 Fast License Checker contributors
#
# flc:header:end

"""Similarity scores used to tell a damaged header from a missing one.

Scores are integer percentages in ``[0, 100]``. Two independent measures are
provided and the matcher keeps the higher of the two:

- `prefix_fuzzy_score`: how far the file content and the expected header agree
  byte for byte before diverging (cheap; catches truncated or edited tails).
- `line_fuzzy_score`: average per-line Levenshtein similarity over the first
  lines (catches edits in the middle, such as a changed year).
"""

from __future__ import annotations

import codecs

from fast_license_checker.constants import (
    FUZZY_LINE_MAX_CHARS,
    FUZZY_LINE_WINDOW,
    FUZZY_MIN_COMPARE_BYTES,
    FUZZY_PREFIX_WINDOW,
)


def byte_prefix_similarity(a: bytes, b: bytes) -> int:
    """Return the common-prefix length as a percentage of the shorter input.

    Args:
        a (bytes): First input.
        b (bytes): Second input.

    Returns:
        int: 100 when both are empty; 0 when the common prefix is empty.
    """
    if not a and not b:
        return 100
    common: int = 0
    for x, y in zip(a, b):
        if x != y:
            break
        common += 1
    if common == 0:
        return 0
    return min(100, common * 100 // min(len(a), len(b)))


def prefix_fuzzy_score(region: bytes, expected: bytes) -> int | None:
    """Compare the head of ``region`` with the head of ``expected``.

    At most `FUZZY_PREFIX_WINDOW` bytes are compared.

    Returns:
        int | None: The byte-prefix similarity, or ``None`` when either input is
        empty or fewer than `FUZZY_MIN_COMPARE_BYTES` bytes can be compared.
    """
    if not region or not expected:
        return None
    n: int = min(len(region), len(expected), FUZZY_PREFIX_WINDOW)
    if n < FUZZY_MIN_COMPARE_BYTES:
        return None
    return byte_prefix_similarity(region[:n], expected[:n])


def levenshtein_distance(a: str, b: str) -> int:
    """Return the edit distance between ``a`` and ``b`` (code points).

    Uses a single DP row sized after the shorter input.
    """
    if len(a) < len(b):
        a, b = b, a
    row: list[int] = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        prev_diag: int = row[0]
        row[0] = i
        for j, cb in enumerate(b, start=1):
            current: int = row[j]
            cost: int = 0 if ca == cb else 1
            row[j] = min(row[j - 1] + 1, current + 1, prev_diag + cost)
            prev_diag = current
    return row[len(b)]


def levenshtein_similarity(a: str, b: str) -> int:
    """Return ``(max_len - distance) * 100 // max_len`` clamped to ``[0, 100]``.

    Two empty strings are 100% similar.
    """
    max_len: int = max(len(a), len(b))
    if max_len == 0:
        return 100
    score: int = (max_len - levenshtein_distance(a, b)) * 100 // max_len
    return max(0, min(100, score))


def decode_head(region: bytes) -> str | None:
    """Decode ``region`` as UTF-8, tolerating a sequence cut off at its end."""
    decoder = codecs.getincrementaldecoder("utf-8")("strict")
    try:
        return decoder.decode(region, final=False)
    except UnicodeDecodeError:
        return None


def line_fuzzy_score(region: bytes, expected: str) -> int | None:
    """Average the Levenshtein similarity of the leading lines.

    The first `FUZZY_LINE_WINDOW` lines of ``region`` and ``expected`` are
    compared pairwise (each cut to `FUZZY_LINE_MAX_CHARS`); pairs where both
    lines are blank are skipped.

    Args:
        region (bytes): File content after the prelude.
        expected (str): A rendered header.

    Returns:
        int | None: Average similarity, or ``None`` when ``region`` is empty or not
        UTF-8, or no line pair was compared.
    """
    if not region or not expected:
        return None
    text: str | None = decode_head(region)
    if text is None:
        return None
    actual_lines: list[str] = text.splitlines()[:FUZZY_LINE_WINDOW]
    expected_lines: list[str] = expected.splitlines()[:FUZZY_LINE_WINDOW]
    total: int = 0
    compared: int = 0
    for actual, wanted in zip(actual_lines, expected_lines):
        if not actual.strip() and not wanted.strip():
            continue
        total += levenshtein_similarity(
            actual[:FUZZY_LINE_MAX_CHARS], wanted[:FUZZY_LINE_MAX_CHARS]
        )
        compared += 1
    if compared == 0:
        return None
    return total // compared
