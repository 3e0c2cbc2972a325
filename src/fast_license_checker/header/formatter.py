# flc:header:start
#
#   project      : Fast License Checker
#   file         : formatter.py
#   file_relpath : src/fast_license_checker/header/formatter.py
#   license      : MIT
#   copyright    : (c) 2025 Fast License Checker contributors
#
# flc:header:end

"""Render a license header as comment text and splice it into file content.

Two renderings exist per style:

- *search* form: what the matcher looks for at the top of a file.
  Line style renders each header line as ``prefix + " " + line`` (bare
  ``prefix`` for blank lines). Block style wraps the whole header once::

      /*
      MIT License

      Copyright 2024 Test
      */

- *insert* form: what the fixer writes. Line style is the search form plus a
  separating blank line. Block style wraps each line individually
  (``/* MIT License */``), then adds the separating blank line.

`search_candidates` returns every rendering the matcher accepts as an exact
match, which includes the insert form without its separator. A header written
by `insert_header` is therefore always found again as an exact match.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fast_license_checker.header.prelude import UTF8_BOM, header_start_offset

if TYPE_CHECKING:
    from fast_license_checker.header.types import CommentStyle, LicenseHeaderText


def detect_newline(buf: bytes) -> str:
    r"""Return the newline convention of ``buf``.

    Only the first line terminator is inspected: ``"\r\n"`` when it is CRLF,
    ``"\n"`` otherwise (including when ``buf`` has no newline at all).
    """
    pos: int = buf.find(b"\n")
    if pos > 0 and buf[pos - 1 : pos] == b"\r":
        return "\r\n"
    return "\n"


def _comment_line(style: CommentStyle, line: str) -> str:
    return f"{style.prefix} {line}" if line else style.prefix


def _wrapped_line(style: CommentStyle, line: str) -> str:
    body: str = f"{style.prefix} {line}" if line else style.prefix
    return f"{body} {style.suffix}"


def format_for_search(header: LicenseHeaderText, style: CommentStyle, newline: str = "\n") -> str:
    """Render ``header`` the way the matcher searches for it.

    Args:
        header (LicenseHeaderText): Header to render.
        style (CommentStyle): Comment markers.
        newline (str): Line terminator to use.

    Returns:
        str: The rendered search form.
    """
    lines: list[str] = header.lines()
    if style.suffix is None:
        return "".join(_comment_line(style, line) + newline for line in lines)
    return newline.join([style.prefix, *lines, style.suffix])


def format_for_insert(header: LicenseHeaderText, style: CommentStyle, newline: str = "\n") -> str:
    """Render ``header`` the way the fixer inserts it, trailing blank line included.

    Args:
        header (LicenseHeaderText): Header to render.
        style (CommentStyle): Comment markers.
        newline (str): Line terminator to use.

    Returns:
        str: The rendered insert form.
    """
    lines: list[str] = header.lines()
    if style.suffix is None:
        body: str = "".join(_comment_line(style, line) + newline for line in lines)
    else:
        body = "".join(_wrapped_line(style, line) + newline for line in lines)
    return body + newline


def search_candidates(
    header: LicenseHeaderText, style: CommentStyle, newline: str = "\n"
) -> tuple[str, ...]:
    """Return all renderings accepted as an exact header match, most specific first."""
    searched: str = format_for_search(header, style, newline)
    inserted: str = format_for_insert(header, style, newline)[: -len(newline)]
    if inserted == searched:
        return (searched,)
    return (searched, inserted)


def rendered_size(header: LicenseHeaderText, style: CommentStyle) -> int:
    """Return the encoded length of the longest accepted rendering, in bytes.

    Both newline conventions are measured since CRLF renderings are longer.
    """
    return max(
        len(candidate.encode("utf-8"))
        for newline in ("\n", "\r\n")
        for candidate in search_candidates(header, style, newline)
    )


def insert_header(content: bytes, header: LicenseHeaderText, style: CommentStyle) -> bytes:
    """Return ``content`` with the header inserted after any prelude.

    The newline convention of ``content`` is preserved. A prelude that does not
    end with a line break (``<?xml ...?><root>``) gets one, so that the header
    starts on its own line.

    Args:
        content (bytes): Full original file content.
        header (LicenseHeaderText): Header to insert.
        style (CommentStyle): Comment markers for the file type.

    Returns:
        bytes: The new file content.
    """
    newline: str = detect_newline(content)
    offset: int = header_start_offset(content)
    prelude: bytes = content[:offset]
    # A BOM-only prelude legitimately ends without a newline.
    if prelude and not prelude.endswith((b"\n", UTF8_BOM)):
        prelude += newline.encode("ascii")
    rendered: bytes = format_for_insert(header, style, newline).encode("utf-8")
    return prelude + rendered + content[offset:]


def remove_header(content: bytes, header: LicenseHeaderText, style: CommentStyle) -> bytes:
    """Return ``content`` without an exactly matching header.

    The separating blank line that `insert_header` adds is removed as well.
    Content without an exact header at the expected offset is returned unchanged.

    Args:
        content (bytes): Full file content.
        header (LicenseHeaderText): Header to remove.
        style (CommentStyle): Comment markers for the file type.

    Returns:
        bytes: The content with the header removed.
    """
    newline: str = detect_newline(content)
    offset: int = header_start_offset(content)
    region: bytes = content[offset:]
    for candidate in search_candidates(header, style, newline):
        encoded: bytes = candidate.encode("utf-8")
        if not region.startswith(encoded):
            continue
        rest: bytes = region[len(encoded) :]
        if style.suffix is not None and candidate.endswith(style.suffix):
            rest = rest.removeprefix(newline.encode("ascii"))
        rest = rest.removeprefix(newline.encode("ascii"))
        return content[:offset] + rest
    return content
