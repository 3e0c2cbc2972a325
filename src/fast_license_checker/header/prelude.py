# flc:header:start
#
#   project      : Fast License Checker
#   file         : prelude.py
#   file_relpath : src/fast_license_checker/header/prelude.py
#   license      : MIT
#   copyright    : (c) 2025 Fast License Checker contributors
#
# flc:header:end

"""Detect leading constructs that must stay on the first line(s) of a file.

A license header is searched for, and inserted, *after* such a prelude:

- a shebang line (``#!/usr/bin/env python3``),
- an XML declaration (``<?xml version="1.0"?>``),
- an editor directive line (``# -*- coding: utf-8 -*-``, ``# vim: set ft=ruby:``).

All functions are pure, operate on raw bytes and never raise, even on empty
or truncated input. A prelude line without a terminating newline is not
treated as a prelude (the caller falls back to offset 0).
"""

from __future__ import annotations

from typing import Final

UTF8_BOM: Final[bytes] = b"\xef\xbb\xbf"
SHEBANG: Final[bytes] = b"#!"
XML_DECL_OPEN: Final[bytes] = b"<?xml"
XML_DECL_CLOSE: Final[bytes] = b"?>"
DIRECTIVE_PREFIXES: Final[tuple[bytes, ...]] = (
    b"# -*- coding:",
    b"# vim:",
)


def _end_of_first_line(buf: bytes) -> int | None:
    newline: int = buf.find(b"\n")
    return None if newline == -1 else newline + 1


def detect_shebang(buf: bytes) -> int | None:
    """Return the offset just past a leading shebang line.

    Args:
        buf (bytes): File content (or a prefix of it).

    Returns:
        int | None: Offset after the first ``\\n``, or ``None`` if ``buf`` does not
        start with ``#!`` or the shebang line is unterminated.
    """
    if not buf.startswith(SHEBANG):
        return None
    return _end_of_first_line(buf)


def detect_xml_declaration(buf: bytes) -> int | None:
    """Return the offset just past a leading XML declaration.

    The declaration ends at the first ``?>``; a directly following ``\\n`` (or
    ``\\r\\n``) is included in the prelude.

    Args:
        buf (bytes): File content (or a prefix of it).

    Returns:
        int | None: Offset after the declaration, or ``None`` if there is none
        or it is unterminated.
    """
    if not buf.startswith(XML_DECL_OPEN):
        return None
    close: int = buf.find(XML_DECL_CLOSE)
    if close == -1:
        return None
    end: int = close + len(XML_DECL_CLOSE)
    if buf[end : end + 1] == b"\n":
        end += 1
    elif buf[end : end + 2] == b"\r\n":
        end += 2
    return end


def detect_hashbang(buf: bytes) -> int | None:
    """Return the offset just past a leading editor/encoding directive line."""
    if not buf.startswith(DIRECTIVE_PREFIXES):
        return None
    return _end_of_first_line(buf)


def header_start_offset(buf: bytes) -> int:
    """Return where the license header is expected to start.

    Precedence: shebang, then XML declaration, then directive lines, else 0.
    A leading UTF-8 byte order mark always stays in front of the header.

    Args:
        buf (bytes): File content (or a prefix of it).

    Returns:
        int: Offset in ``[0, len(buf)]``.
    """
    bom: int = len(UTF8_BOM) if buf.startswith(UTF8_BOM) else 0
    body: bytes = buf[bom:] if bom else buf
    for detector in (detect_shebang, detect_xml_declaration, detect_hashbang):
        offset: int | None = detector(body)
        if offset is not None:
            return bom + offset
    return bom
