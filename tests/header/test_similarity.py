# flc:header:start
#
#   project      : Fast License Checker
#   file         : test_similarity.py
#   file_relpath : tests/header/test_similarity.py
#   license      : MIT
#   copyright    : (c) 2025 Fast License Checker contributors
#
# flc:header:end

"""Tests for the byte-prefix and line-wise similarity measures."""

from __future__ import annotations

import pytest

from fast_license_checker.header.similarity import (
    byte_prefix_similarity,
    decode_head,
    levenshtein_distance,
    levenshtein_similarity,
    line_fuzzy_score,
    prefix_fuzzy_score,
)


@pytest.mark.parametrize(
    ("a", "b", "expected"),
    [
        (b"", b"", 100),
        (b"abc", b"abc", 100),
        (b"abc", b"abd", 66),
        (b"abc", b"abcdef", 100),
        (b"x", b"y", 0),
        (b"", b"abc", 0),
    ],
)
def test_byte_prefix_similarity(a: bytes, b: bytes, expected: int) -> None:
    """Common-prefix length relative to the shorter input."""
    assert byte_prefix_similarity(a, b) == expected


def test_prefix_fuzzy_score_needs_enough_bytes() -> None:
    """Fewer than ten comparable bytes yield no score."""
    assert prefix_fuzzy_score(b"short", b"shorter text here") is None
    assert prefix_fuzzy_score(b"", b"anything at all") is None
    assert prefix_fuzzy_score(b"0123456789", b"0123456789abc") == 100


@pytest.mark.parametrize(
    ("a", "b", "distance"),
    [
        ("kitten", "sitting", 3),
        ("", "abc", 3),
        ("abc", "", 3),
        ("flaw", "lawn", 2),
        ("same", "same", 0),
    ],
)
def test_levenshtein_distance(a: str, b: str, distance: int) -> None:
    """Classic edit-distance examples."""
    assert levenshtein_distance(a, b) == distance


def test_levenshtein_similarity() -> None:
    """Similarity is relative to the longer string."""
    assert levenshtein_similarity("", "") == 100
    assert levenshtein_similarity("kitten", "sitting") == 57
    assert levenshtein_similarity("abc", "xyz") == 0


def test_decode_head_tolerates_cut_sequence() -> None:
    """A multi-byte character cut at the end of the sample is dropped."""
    assert decode_head("abc€".encode()[:-1]) == "abc"
    assert decode_head(b"\xff\xfe") is None


def test_line_fuzzy_score() -> None:
    """Pairs of blank lines are skipped; undecodable regions score nothing."""
    expected: str = "# MIT License\n#\n# Copyright 2024 Test\n"
    assert line_fuzzy_score(expected.encode(), expected) == 100
    near: int | None = line_fuzzy_score(b"# MIT License\n#\n# Copyright 2023 Test\n", expected)
    assert near is not None and 90 <= near < 100
    assert line_fuzzy_score(b"\n\n", "\n\n") is None
    assert line_fuzzy_score(b"\xff\xff", expected) is None
    assert line_fuzzy_score(b"", expected) is None


def test_line_window_is_bounded() -> None:
    """Only the first ten lines are compared."""
    expected: str = "".join(f"line {i}\n" for i in range(10)) + "tail differs\n"
    region: bytes = ("".join(f"line {i}\n" for i in range(10)) + "completely other\n").encode()
    assert line_fuzzy_score(region, expected) == 100
