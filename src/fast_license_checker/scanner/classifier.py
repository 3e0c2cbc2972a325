# flc:header:start
#
#   project      : Fast License Checker
#   file         : classifier.py
#   file_relpath : src/fast_license_checker/scanner/classifier.py
#   license      : MIT
#   copyright    : (c) 2025 Fast License Checker contributors
#
# flc:header:end

"""Content gate: decide from a file sample whether it can be checked.

Checks run in a fixed order and the first failing one wins:

1. empty file (when empty files are skipped),
2. binary content (any NUL byte),
3. invalid UTF-8,
4. no comment style for the file's type.

All functions are pure; no I/O happens here.
"""

from __future__ import annotations

import codecs
from typing import TYPE_CHECKING

from fast_license_checker.engine.results import SkipReason

if TYPE_CHECKING:
    from fast_license_checker.header.types import CommentStyle
    from fast_license_checker.scanner.sampler import Sample


def is_binary(buf: bytes) -> bool:
    """True iff ``buf`` contains a NUL byte."""
    return b"\x00" in buf


def is_valid_utf8(buf: bytes, *, final: bool = True) -> bool:
    """Strictly validate ``buf`` as UTF-8.

    Args:
        buf (bytes): Bytes to validate.
        final (bool): False when ``buf`` is a prefix of a longer stream; a
            multi-byte sequence cut off at the end is then accepted.

    Returns:
        bool: True when ``buf`` decodes without error.
    """
    decoder = codecs.getincrementaldecoder("utf-8")("strict")
    try:
        decoder.decode(buf, final=final)
    except UnicodeDecodeError:
        return False
    return True


def classify_content(buf: bytes, *, truncated: bool = False) -> SkipReason | None:
    """Return the content-level skip reason of ``buf`` (binary or encoding), if any."""
    if is_binary(buf):
        return SkipReason.BINARY
    if not is_valid_utf8(buf, final=not truncated):
        return SkipReason.UNSUPPORTED_ENCODING
    return None


def classify(
    sample: Sample,
    style: CommentStyle | None,
    *,
    skip_empty_files: bool = True,
) -> SkipReason | None:
    """Return why the sampled file must be skipped, or None to proceed.

    Args:
        sample (Sample): The file head.
        style (CommentStyle | None): Comment style resolved for the file's type.
        skip_empty_files (bool): Whether empty files are skipped.

    Returns:
        SkipReason | None: The first failing check, in the documented order.
    """
    if sample.is_empty:
        if skip_empty_files:
            return SkipReason.EMPTY
    else:
        reason: SkipReason | None = classify_content(sample.data, truncated=sample.truncated)
        if reason is not None:
            return reason
    if style is None:
        return SkipReason.NO_COMMENT_STYLE
    return None
