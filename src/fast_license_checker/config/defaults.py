# flc:header:start
#
#   project      : Fast License Checker
#   file         : defaults.py
#   file_relpath : src/fast_license_checker/config/defaults.py
#   license      : MIT
#   copyright    : (c) 2025 Fast License Checker contributors
#
# flc:header:end

"""Built-in comment styles per file extension.

Config files may override individual entries or add new extensions; the
table below is the starting point of every `MutableConfig.from_defaults`.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Final

from fast_license_checker.header.types import CommentStyle

if TYPE_CHECKING:
    from collections.abc import Mapping

_STYLE_GROUPS: Final[tuple[tuple[CommentStyle, tuple[str, ...]], ...]] = (
    (
        CommentStyle.line("//"),
        (
            "rs", "js", "ts", "jsx", "tsx", "c", "cpp", "cc", "cxx", "h", "hpp", "hxx",
            "java", "kt", "scala", "go", "swift", "cs", "vb", "fs", "ml", "fsx", "elm",
            "php", "pas", "d",
        ),
    ),
    (
        CommentStyle.line("#"),
        (
            "py", "rb", "sh", "bash", "zsh", "fish", "pl", "pm", "tcl", "lua", "r",
            "yaml", "yml", "toml", "ini", "cfg", "conf", "ex", "exs", "clj", "cljs",
            "coffee", "dart", "nim", "nimble", "cr", "rspec", "thor",
        ),
    ),
    (CommentStyle.block("<!--", "-->"), ("html", "htm", "xml", "svg", "vue", "xsd")),
    (CommentStyle.block("/*", "*/"), ("css", "scss", "sass", "less", "styl")),
    (CommentStyle.line("--"), ("sql", "hs", "lhs")),
    (CommentStyle.line("%"), ("erl", "hrl")),
    (CommentStyle.line(";;"), ("lisp", "lsp", "scm", "ss", "rkt")),
    (CommentStyle.line('"'), ("vim", "vimrc")),
    (CommentStyle.line("REM"), ("bat", "cmd")),
    (CommentStyle.line("'"), ("asp",)),
    (CommentStyle.line(";"), ("asm",)),
)  # fmt: skip


def _build_default_styles() -> dict[str, CommentStyle]:
    styles: dict[str, CommentStyle] = {}
    for style, extensions in _STYLE_GROUPS:
        for ext in extensions:
            styles[ext] = style
    return styles


DEFAULT_COMMENT_STYLES: Final[Mapping[str, CommentStyle]] = MappingProxyType(
    _build_default_styles()
)
