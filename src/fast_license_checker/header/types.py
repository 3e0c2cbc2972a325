# flc:header:start
#
#   project      : Fast License Checker
#   file         : types.py
#   file_relpath : src/fast_license_checker/header/types.py
#   license      : MIT
#   copyright    : (c) 2025 Fast License Checker contributors
#
# flc:header:end

"""Validated value types for the license header domain.

All types are immutable and validate on construction, raising
`fast_license_checker.core.errors.ValidationError` on bad input:

- `LicenseHeaderText`: canonical header text without comment markers.
- `CommentStyle`: line (`//`) or block (`/* */`) comment markers.
- `FileExtension`: normalized extension key used to select a comment style.
- `CommentStyleTable`: read-only extension -> style mapping with an optional default.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Final

from fast_license_checker.constants import MAX_HEADER_CHARS
from fast_license_checker.core.errors import ValidationError

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping
    from pathlib import Path

LICENSE_KEYWORDS: Final[tuple[str, ...]] = (
    "license",
    "copyright",
    "licensed",
    "permission",
    "redistribution",
)

_EXTENSION_RE: Final[re.Pattern[str]] = re.compile(r"^[a-z0-9_+#]+$")


def normalize_newlines(text: str) -> str:
    """Convert CRLF and lone CR line terminators to LF."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


@dataclass(frozen=True, slots=True)
class LicenseHeaderText:
    """Canonical license header text, without comment markers.

    Use `LicenseHeaderText.parse` to build an instance from raw user input;
    the constructor expects already-normalized text.

    Attributes:
        text (str): Trimmed header text with LF line terminators only.
    """

    text: str

    def __post_init__(self) -> None:
        if not self.text.strip():
            raise ValidationError("License header text must not be empty")
        if "\r" in self.text:
            raise ValidationError("License header text must use LF line endings")

    @classmethod
    def parse(cls, raw: str) -> LicenseHeaderText:
        """Trim ``raw`` and normalize its line endings.

        Args:
            raw (str): Header text as read from a file, the CLI or the environment.

        Returns:
            LicenseHeaderText: The validated header.

        Raises:
            ValidationError: If the text is empty or whitespace-only.
        """
        return cls(normalize_newlines(raw).strip())

    def lines(self) -> list[str]:
        """Return the header lines, blank lines preserved."""
        return self.text.split("\n")

    def validate_format(self, *, require_keyword: bool = False) -> None:
        """Check that the header looks like license text.

        Args:
            require_keyword (bool): Also require one of `LICENSE_KEYWORDS`.

        Raises:
            ValidationError: If the header is too long or, with ``require_keyword``,
                contains no license keyword.
        """
        if len(self.text) > MAX_HEADER_CHARS:
            raise ValidationError(
                f"License header is too long ({len(self.text)} > {MAX_HEADER_CHARS} characters)"
            )
        if require_keyword:
            lowered: str = self.text.lower()
            if not any(keyword in lowered for keyword in LICENSE_KEYWORDS):
                raise ValidationError("License header does not appear to contain license text")


@dataclass(frozen=True, slots=True)
class CommentStyle:
    """Comment markers for a family of file types.

    Attributes:
        prefix (str): Line-comment marker, or the opening marker of a block comment.
        suffix (str | None): Closing marker of a block comment; ``None`` for line comments.
    """

    prefix: str
    suffix: str | None = None

    def __post_init__(self) -> None:
        if not self.prefix.strip():
            raise ValidationError("Comment prefix must not be empty")
        if any(ch in self.prefix for ch in "\r\n"):
            raise ValidationError(f"Comment prefix must be a single line: {self.prefix!r}")
        if self.suffix is not None:
            if not self.suffix.strip():
                raise ValidationError("Block comment suffix must not be empty")
            if any(ch in self.suffix for ch in "\r\n"):
                raise ValidationError(f"Comment suffix must be a single line: {self.suffix!r}")

    @classmethod
    def line(cls, prefix: str) -> CommentStyle:
        """Return a line-comment style such as ``//`` or ``#``."""
        return cls(prefix=prefix)

    @classmethod
    def block(cls, prefix: str, suffix: str) -> CommentStyle:
        """Return a block-comment style such as ``/* */`` or ``<!-- -->``."""
        return cls(prefix=prefix, suffix=suffix)

    @property
    def is_block(self) -> bool:
        """True when the style has a closing marker."""
        return self.suffix is not None

    def __str__(self) -> str:
        return self.prefix if self.suffix is None else f"{self.prefix} {self.suffix}"


@dataclass(frozen=True, slots=True)
class FileExtension:
    """Normalized file extension key (no leading dot, lowercase).

    Extensionless files that are identified by name (``Makefile``,
    ``Dockerfile``) use their lowercased file name as key.

    Attributes:
        value (str): The normalized key, e.g. ``"py"``.
    """

    value: str

    def __post_init__(self) -> None:
        if not _EXTENSION_RE.match(self.value):
            raise ValidationError(f"Invalid file extension: {self.value!r}")

    @classmethod
    def parse(cls, raw: str) -> FileExtension:
        """Strip whitespace and leading dots, lowercase, then validate.

        Raises:
            ValidationError: If nothing valid remains.
        """
        return cls(raw.strip().lstrip(".").lower())

    @classmethod
    def for_path(cls, path: Path) -> FileExtension | None:
        """Return the extension key of ``path``, or None when it has no valid key."""
        raw: str = path.suffix if path.suffix else path.name
        try:
            return cls.parse(raw)
        except ValidationError:
            return None

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class CommentStyleTable:
    """Read-only mapping of extensions to comment styles.

    Attributes:
        styles (Mapping[FileExtension, CommentStyle]): Configured styles.
        default (CommentStyle | None): Style used for unknown extensions, if any.
    """

    styles: Mapping[FileExtension, CommentStyle] = field(default_factory=dict)
    default: CommentStyle | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "styles", MappingProxyType(dict(self.styles)))

    def lookup(self, ext: FileExtension | None) -> CommentStyle | None:
        """Return the style for ``ext``, falling back to the default style.

        Args:
            ext (FileExtension | None): Extension key; ``None`` when the file has none.

        Returns:
            CommentStyle | None: The style, or ``None`` when the file cannot be commented.
        """
        if ext is not None:
            style: CommentStyle | None = self.styles.get(ext)
            if style is not None:
                return style
        return self.default

    def __contains__(self, ext: object) -> bool:
        return ext in self.styles

    def __iter__(self) -> Iterator[FileExtension]:
        return iter(self.styles)

    def __len__(self) -> int:
        return len(self.styles)
