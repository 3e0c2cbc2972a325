# flc:header:start
#
#   project      : Fast License Checker
#   file         : sampler.py
#   file_relpath : src/fast_license_checker/scanner/sampler.py
#   license      : MIT
#   copyright    : (c) 2025 Fast License Checker contributors
#
# flc:header:end

"""Bounded reads of file heads.

A scan never loads whole files: each file is opened once and at most
``max_bytes`` are read. The result records whether more content exists so
that downstream checks know the sample may end mid-character.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


@dataclass(frozen=True, slots=True)
class Sample:
    """The first bytes of a file.

    Attributes:
        data (bytes): Up to ``max_bytes`` bytes from the start of the file.
        truncated (bool): True when the file holds more than ``data``.
        size (int): File size in bytes as reported by ``fstat``.
    """

    data: bytes
    truncated: bool
    size: int

    @property
    def is_empty(self) -> bool:
        return not self.data and not self.truncated


def read_sample(path: Path, max_bytes: int) -> Sample:
    """Read at most ``max_bytes`` from the start of ``path``.

    Args:
        path (Path): File to sample.
        max_bytes (int): Read bound.

    Returns:
        Sample: The sampled head.

    Raises:
        OSError: If the file cannot be opened or read.
    """
    with path.open("rb") as fh:
        size: int = os.fstat(fh.fileno()).st_size
        # One extra byte tells whether the file continues past the bound.
        data: bytes = fh.read(max_bytes + 1)
    truncated: bool = len(data) > max_bytes
    return Sample(data=data[:max_bytes], truncated=truncated, size=size)


def read_all(path: Path) -> bytes:
    """Read the whole content of ``path``.

    Raises:
        OSError: If the file cannot be opened or read.
    """
    with path.open("rb") as fh:
        return fh.read()
