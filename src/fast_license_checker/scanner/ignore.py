# flc:header:start
#
#   project      : Fast License Checker
#   file         : ignore.py
#   file_relpath : src/fast_license_checker/scanner/ignore.py
#   license      : MIT
#   copyright    : (c) 2025 Fast License Checker contributors
#
# flc:header:end

"""Gitignore-style exclusion rules for the parallel walker.

Rules come in layers, each anchored at a base directory:

- the global git excludes file (``core.excludesFile`` or ``$XDG_CONFIG_HOME/git/ignore``),
- the repository's ``.git/info/exclude``,
- ``.gitignore`` files of the directories between the repository root and the walk root,
- ``.gitignore`` / ``.ignore`` files found while walking (added per directory),
- caller-supplied patterns, anchored at the walk root.

Within and across layers the last matching pattern wins, so deeper files
override shallower ones and ``!pattern`` re-includes a path. Patterns are
compiled with `pathspec`'s ``gitwildmatch`` flavor. Directories are tested
with a trailing slash so that ``build/`` only matches directories.

``.gitignore`` files are honored whether or not the tree is a git checkout.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Final

from pathspec import PathSpec
from pathspec.patterns.gitwildmatch import GitWildMatchPattern

from fast_license_checker.config.logging import get_logger
from fast_license_checker.constants import IGNORE_FILE_NAMES

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from fast_license_checker.config.logging import FlcLogger

logger: FlcLogger = get_logger(__name__)

GIT_DIR_NAME: Final[str] = ".git"

_EXCLUDES_FILE_RE: Final[re.Pattern[str]] = re.compile(
    r"^\s*excludesfile\s*=\s*(?P<value>.+?)\s*$", re.IGNORECASE
)


@dataclass(frozen=True)
class IgnoreLayer:
    """Compiled patterns anchored at ``base``.

    Attributes:
        base (Path): Directory the patterns are relative to.
        spec (PathSpec): Compiled patterns.
        source (str): Where the patterns came from (for diagnostics).
    """

    base: Path
    spec: PathSpec
    source: str

    @classmethod
    def from_lines(cls, base: Path, lines: Iterable[str], source: str) -> IgnoreLayer | None:
        """Compile ``lines``; return None when no effective pattern remains."""
        patterns: list[str] = [
            line.rstrip("\r") for line in lines if line.strip() and not line.startswith("#")
        ]
        if not patterns:
            return None
        spec: PathSpec = PathSpec.from_lines(GitWildMatchPattern, patterns)
        return cls(base=base, spec=spec, source=source)

    def verdict(self, path: Path, *, is_dir: bool) -> bool | None:
        """Return True (ignored), False (re-included) or None (no pattern matched).

        Args:
            path (Path): Absolute candidate path.
            is_dir (bool): Whether ``path`` is a directory.

        Returns:
            bool | None: The polarity of the last matching pattern.
        """
        try:
            rel: str = path.relative_to(self.base).as_posix()
        except ValueError:
            return None
        if rel in ("", "."):
            return None
        if is_dir:
            rel += "/"
        result: bool | None = None
        for pattern in self.spec.patterns:
            if pattern.include is not None and pattern.match_file(rel) is not None:
                result = pattern.include
        return result


def is_ignored(layers: Sequence[IgnoreLayer], path: Path, *, is_dir: bool) -> bool:
    """Evaluate ``layers`` in order; the last layer with an opinion wins."""
    ignored: bool = False
    for layer in layers:
        verdict: bool | None = layer.verdict(path, is_dir=is_dir)
        if verdict is not None:
            ignored = verdict
    return ignored


def read_ignore_file(path: Path, base: Path) -> IgnoreLayer | None:
    """Load one ignore file; unreadable files are logged and skipped."""
    try:
        text: str = path.read_text(encoding="utf-8", errors="replace")
    except FileNotFoundError:
        return None
    except OSError as e:
        logger.warning("Cannot read ignore file %s: %s", path, e)
        return None
    layer: IgnoreLayer | None = IgnoreLayer.from_lines(base, text.splitlines(), str(path))
    if layer is not None:
        logger.trace("Loaded %d pattern(s) from %s", len(layer.spec.patterns), path)
    return layer


def directory_layers(directory: Path) -> list[IgnoreLayer]:
    """Return the layers declared by ``.gitignore`` / ``.ignore`` inside ``directory``."""
    layers: list[IgnoreLayer] = []
    for name in IGNORE_FILE_NAMES:
        layer: IgnoreLayer | None = read_ignore_file(directory / name, directory)
        if layer is not None:
            layers.append(layer)
    return layers


def find_repository_root(start: Path) -> Path | None:
    """Return the closest directory at or above ``start`` containing ``.git``."""
    for candidate in (start, *start.parents):
        if (candidate / GIT_DIR_NAME).exists():
            return candidate
    return None


def global_excludes_file(environ: Mapping[str, str] | None = None) -> Path | None:
    """Locate the user's global git excludes file, if configured or present."""
    env: Mapping[str, str] = os.environ if environ is None else environ
    home: Path = Path(env.get("HOME", str(Path.home())))
    gitconfig: Path = home / ".gitconfig"
    try:
        text: str = gitconfig.read_text(encoding="utf-8", errors="replace")
    except OSError:
        text = ""
    in_core: bool = False
    for line in text.splitlines():
        stripped: str = line.strip()
        if stripped.startswith("["):
            in_core = stripped.lower().startswith("[core")
            continue
        match: re.Match[str] | None = _EXCLUDES_FILE_RE.match(stripped) if in_core else None
        if match:
            value: str = match.group("value").strip('"')
            return Path(value.replace("~", str(home), 1) if value.startswith("~") else value)
    xdg: str = env.get("XDG_CONFIG_HOME") or str(home / ".config")
    candidate: Path = Path(xdg) / "git" / "ignore"
    return candidate if candidate.is_file() else None


def base_layers(
    root: Path,
    *,
    extra_patterns: Sequence[str] = (),
    respect_vcs_ignores: bool = True,
) -> tuple[tuple[IgnoreLayer, ...], tuple[IgnoreLayer, ...]]:
    """Build the layers that apply before the walk starts.

    Args:
        root (Path): Absolute walk root (a directory).
        extra_patterns (Sequence[str]): Caller-supplied patterns, anchored at ``root``.
        respect_vcs_ignores (bool): Whether to read git ignore sources at all.

    Returns:
        tuple[tuple[IgnoreLayer, ...], tuple[IgnoreLayer, ...]]: ``(vcs_layers,
        override_layers)``. Per-directory layers discovered during the walk go
        between the two, so caller-supplied patterns always take precedence.
    """
    vcs: list[IgnoreLayer] = []
    if respect_vcs_ignores:
        repo: Path | None = find_repository_root(root)
        global_file: Path | None = global_excludes_file()
        if global_file is not None:
            # Global patterns are relative to the repository (or walk) root.
            layer: IgnoreLayer | None = read_ignore_file(global_file, repo or root)
            if layer is not None:
                vcs.append(layer)
        if repo is not None:
            layer = read_ignore_file(repo / GIT_DIR_NAME / "info" / "exclude", repo)
            if layer is not None:
                vcs.append(layer)
            # Ancestors strictly above the walk root; the root itself is read by the walker.
            ancestors: list[Path] = [p for p in root.parents if p == repo or repo in p.parents]
            for directory in reversed(ancestors):
                vcs.extend(directory_layers(directory))

    overrides: list[IgnoreLayer] = []
    extra: IgnoreLayer | None = IgnoreLayer.from_lines(root, extra_patterns, "<config>")
    if extra is not None:
        overrides.append(extra)
    return tuple(vcs), tuple(overrides)
