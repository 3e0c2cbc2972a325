# flc:header:start
#
#   project      : Fast License Checker
#   file         : model.py
#   file_relpath : src/fast_license_checker/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Fast License Checker contributors
#
# flc:header:end

"""Configuration model and merge policy.

This module defines:
    - `Config`: an immutable runtime snapshot used by the scanner and fixer.
    - `MutableConfig`: a mutable builder used while layering sources; it can
      be frozen into `Config` and thawed back for edits.

Layering (lowest to highest precedence):
    1. built-in defaults (`MutableConfig.from_defaults`),
    2. one config file (explicit ``--config`` or discovered in the CWD),
    3. ``FLC_*`` environment variables,
    4. command-line options.

Merge policy:
    Scalars use ``None`` to mean "inherit"; the later layer wins when it sets
    a value. ``comment_styles`` and ``similarity_thresholds`` merge key by key,
    ``ignore_patterns`` and ``config_files`` are concatenated.

Validation happens once, in `MutableConfig.freeze`, and raises `ConfigError`.
The license header itself is only required by operations that need it (see
`Config.header`), so that commands like ``init-config`` work without one.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from fast_license_checker.config.defaults import DEFAULT_COMMENT_STYLES
from fast_license_checker.config.io import (
    ConfigTable,
    discover_config_file,
    env_overrides,
    get_bool_value_or_none,
    get_int_value_or_none,
    get_string_list_value,
    get_string_value_or_none,
    get_table_value,
    is_config_table,
    load_config_file,
)
from fast_license_checker.config.logging import get_logger
from fast_license_checker.constants import (
    DEFAULT_MAX_FILE_BYTES,
    DEFAULT_MAX_HEADER_BYTES,
    DEFAULT_SIMILARITY_THRESHOLD,
    MIN_MAX_HEADER_BYTES,
)
from fast_license_checker.core.errors import ConfigError, ValidationError
from fast_license_checker.header.types import (
    CommentStyle,
    CommentStyleTable,
    FileExtension,
    LicenseHeaderText,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from fast_license_checker.config.logging import FlcLogger

logger: FlcLogger = get_logger(__name__)

_KNOWN_KEYS: frozenset[str] = frozenset(
    {
        "license_header",
        "license_file",
        "comment_styles",
        "default_comment_style",
        "ignore_patterns",
        "max_header_bytes",
        "max_file_bytes",
        "skip_empty_files",
        "parallel_jobs",
        "similarity_threshold",
        "similarity_thresholds",
        "include_hidden",
        "follow_links",
        "respect_vcs_ignores",
        "require_license_keyword",
    }
)


def _style_to_table(style: CommentStyle) -> ConfigTable:
    table: ConfigTable = {"prefix": style.prefix}
    if style.suffix is not None:
        table["suffix"] = style.suffix
    return table


def _style_from_table(value: Any, key: str, source: str) -> CommentStyle:
    if not is_config_table(value):
        raise ConfigError(f"{source}: comment style '{key}' must be a table with a 'prefix'")
    prefix: str | None = get_string_value_or_none(value, "prefix", source)
    suffix: str | None = get_string_value_or_none(value, "suffix", source)
    if prefix is None:
        raise ConfigError(f"{source}: comment style '{key}' has no 'prefix'")
    try:
        return CommentStyle(prefix=prefix, suffix=suffix)
    except ValidationError as e:
        raise ConfigError(f"{source}: comment style '{key}': {e}") from e


def _normalize_extension(raw: str, source: str) -> str:
    try:
        return FileExtension.parse(raw).value
    except ValidationError as e:
        raise ConfigError(f"{source}: {e}") from e


# ------------------ Immutable runtime config ------------------


@dataclass(frozen=True, slots=True)
class Config:
    """Immutable runtime configuration.

    Produced by `MutableConfig.freeze`. Collections are tuples or read-only
    mappings. Use `Config.thaw` to obtain a builder for edits.

    Attributes:
        license_header (str): Raw license header text (may be empty until required).
        comment_styles (Mapping[str, CommentStyle]): Normalized extension to style.
        default_comment_style (CommentStyle | None): Style for unknown extensions.
        ignore_patterns (tuple[str, ...]): Extra gitignore-style patterns.
        max_header_bytes (int): Bytes sampled from the start of each file.
        max_file_bytes (int): Largest file the fixer will rewrite.
        skip_empty_files (bool): Whether empty files are skipped.
        parallel_jobs (int | None): Worker threads; None means the CPU count.
        similarity_threshold (int): Fuzzy score (0-100) that marks a header as malformed.
        similarity_thresholds (Mapping[str, int]): Per-extension threshold overrides.
        include_hidden (bool): Whether dot-files and dot-directories are walked.
        follow_links (bool): Whether symlinks are followed.
        respect_vcs_ignores (bool): Whether ``.gitignore`` and friends apply.
        require_license_keyword (bool): Whether the header must contain a license keyword.
        config_files (tuple[Path | str, ...]): Provenance of the merged layers.
    """

    license_header: str
    comment_styles: Mapping[str, CommentStyle]
    default_comment_style: CommentStyle | None
    ignore_patterns: tuple[str, ...]
    max_header_bytes: int
    max_file_bytes: int
    skip_empty_files: bool
    parallel_jobs: int | None
    similarity_threshold: int
    similarity_thresholds: Mapping[str, int]
    include_hidden: bool
    follow_links: bool
    respect_vcs_ignores: bool
    require_license_keyword: bool
    config_files: tuple[Path | str, ...]

    def header(self) -> LicenseHeaderText:
        """Return the validated license header.

        Raises:
            ConfigError: If no header is configured or it fails validation.
        """
        if not self.license_header.strip():
            raise ConfigError(
                "No license header configured: use --header, --license, "
                "FLC_HEADER or 'license_header' in a config file"
            )
        try:
            header: LicenseHeaderText = LicenseHeaderText.parse(self.license_header)
            header.validate_format(require_keyword=self.require_license_keyword)
        except ValidationError as e:
            raise ConfigError(str(e)) from e
        return header

    def style_table(self) -> CommentStyleTable:
        """Return the comment styles as a `CommentStyleTable`."""
        return CommentStyleTable(
            styles={FileExtension(ext): style for ext, style in self.comment_styles.items()},
            default=self.default_comment_style,
        )

    def threshold_for(self, ext: FileExtension | None) -> int:
        """Return the similarity threshold that applies to ``ext``."""
        if ext is not None:
            override: int | None = self.similarity_thresholds.get(ext.value)
            if override is not None:
                return override
        return self.similarity_threshold

    @property
    def jobs(self) -> int:
        """Effective worker count (``parallel_jobs`` or the CPU count)."""
        return self.parallel_jobs or os.cpu_count() or 1

    def to_toml_dict(self) -> ConfigTable:
        """Convert this config into a TOML-serializable dict.

        Export-only convenience (used by ``flc dump-config``); loading
        goes through `MutableConfig.from_dict`.
        """
        table: ConfigTable = {
            "license_header": self.license_header,
            "ignore_patterns": list(self.ignore_patterns),
            "max_header_bytes": self.max_header_bytes,
            "max_file_bytes": self.max_file_bytes,
            "skip_empty_files": self.skip_empty_files,
            "parallel_jobs": self.parallel_jobs,
            "similarity_threshold": self.similarity_threshold,
            "include_hidden": self.include_hidden,
            "follow_links": self.follow_links,
            "respect_vcs_ignores": self.respect_vcs_ignores,
            "require_license_keyword": self.require_license_keyword,
        }
        if self.similarity_thresholds:
            table["similarity_thresholds"] = dict(self.similarity_thresholds)
        if self.default_comment_style is not None:
            table["default_comment_style"] = _style_to_table(self.default_comment_style)
        table["comment_styles"] = {
            ext: _style_to_table(style) for ext, style in sorted(self.comment_styles.items())
        }
        return table

    def thaw(self) -> MutableConfig:
        """Return a mutable copy of this frozen config."""
        return MutableConfig(
            license_header=self.license_header,
            comment_styles=dict(self.comment_styles),
            default_comment_style=self.default_comment_style,
            ignore_patterns=list(self.ignore_patterns),
            max_header_bytes=self.max_header_bytes,
            max_file_bytes=self.max_file_bytes,
            skip_empty_files=self.skip_empty_files,
            parallel_jobs=self.parallel_jobs,
            similarity_threshold=self.similarity_threshold,
            similarity_thresholds=dict(self.similarity_thresholds),
            include_hidden=self.include_hidden,
            follow_links=self.follow_links,
            respect_vcs_ignores=self.respect_vcs_ignores,
            require_license_keyword=self.require_license_keyword,
            config_files=list(self.config_files),
        )


# -------------------------- Mutable builder --------------------------


@dataclass
class MutableConfig:
    """Mutable configuration used while layering sources.

    Every scalar is ``None`` until a layer sets it; `freeze` substitutes the
    built-in default for fields that remain unset.
    """

    license_header: str | None = None
    comment_styles: dict[str, CommentStyle] = field(default_factory=lambda: {})
    default_comment_style: CommentStyle | None = None
    ignore_patterns: list[str] = field(default_factory=lambda: [])
    max_header_bytes: int | None = None
    max_file_bytes: int | None = None
    skip_empty_files: bool | None = None
    parallel_jobs: int | None = None
    similarity_threshold: int | None = None
    similarity_thresholds: dict[str, int] = field(default_factory=lambda: {})
    include_hidden: bool | None = None
    follow_links: bool | None = None
    respect_vcs_ignores: bool | None = None
    require_license_keyword: bool | None = None
    config_files: list[Path | str] = field(default_factory=lambda: [])

    # ---------------------------- Build/freeze ----------------------------

    def validate(self) -> None:
        """Check value ranges.

        Raises:
            ConfigError: On the first invalid value.
        """
        if self.max_header_bytes is not None and self.max_header_bytes < MIN_MAX_HEADER_BYTES:
            raise ConfigError(
                f"max_header_bytes must be at least {MIN_MAX_HEADER_BYTES} bytes "
                f"(got {self.max_header_bytes})"
            )
        if self.max_file_bytes is not None and self.max_file_bytes < 1:
            raise ConfigError(f"max_file_bytes must be positive (got {self.max_file_bytes})")
        if self.similarity_threshold is not None and not 0 <= self.similarity_threshold <= 100:
            raise ConfigError(
                f"similarity_threshold must be between 0 and 100 (got {self.similarity_threshold})"
            )
        for ext, threshold in self.similarity_thresholds.items():
            if not 0 <= threshold <= 100:
                raise ConfigError(
                    f"similarity_thresholds.{ext} must be between 0 and 100 (got {threshold})"
                )
        if self.parallel_jobs is not None and self.parallel_jobs < 1:
            raise ConfigError(f"parallel_jobs must be greater than 0 (got {self.parallel_jobs})")

    def freeze(self) -> Config:
        """Validate and freeze this builder into an immutable `Config`.

        Raises:
            ConfigError: If a value is out of range.
        """
        self.validate()
        return Config(
            license_header=self.license_header or "",
            comment_styles=MappingProxyType(dict(self.comment_styles)),
            default_comment_style=self.default_comment_style,
            ignore_patterns=tuple(self.ignore_patterns),
            max_header_bytes=(
                self.max_header_bytes
                if self.max_header_bytes is not None
                else DEFAULT_MAX_HEADER_BYTES
            ),
            max_file_bytes=(
                self.max_file_bytes if self.max_file_bytes is not None else DEFAULT_MAX_FILE_BYTES
            ),
            skip_empty_files=self.skip_empty_files if self.skip_empty_files is not None else True,
            parallel_jobs=self.parallel_jobs,
            similarity_threshold=(
                self.similarity_threshold
                if self.similarity_threshold is not None
                else DEFAULT_SIMILARITY_THRESHOLD
            ),
            similarity_thresholds=MappingProxyType(dict(self.similarity_thresholds)),
            include_hidden=bool(self.include_hidden),
            follow_links=bool(self.follow_links),
            respect_vcs_ignores=(
                self.respect_vcs_ignores if self.respect_vcs_ignores is not None else True
            ),
            require_license_keyword=bool(self.require_license_keyword),
            config_files=tuple(self.config_files),
        )

    # --------------------------- Loaders/parsers --------------------------

    @classmethod
    def from_defaults(cls) -> MutableConfig:
        """Return a builder holding the built-in defaults."""
        return cls(
            comment_styles=dict(DEFAULT_COMMENT_STYLES),
            max_header_bytes=DEFAULT_MAX_HEADER_BYTES,
            max_file_bytes=DEFAULT_MAX_FILE_BYTES,
            skip_empty_files=True,
            similarity_threshold=DEFAULT_SIMILARITY_THRESHOLD,
            include_hidden=False,
            follow_links=False,
            respect_vcs_ignores=True,
            require_license_keyword=False,
            config_files=["<defaults>"],
        )

    @classmethod
    def from_dict(
        cls,
        data: ConfigTable,
        source: str = "<dict>",
        *,
        base_dir: Path | None = None,
    ) -> MutableConfig:
        """Create a builder from a raw configuration table.

        Unknown keys are logged and ignored. ``license_file`` is read
        immediately, relative to ``base_dir`` (or the CWD) and overrides
        ``license_header`` from the same table.

        Args:
            data (ConfigTable): Table from a config file or `env_overrides`.
            source (str): Name used in error messages and provenance.
            base_dir (Path | None): Directory relative paths are resolved against.

        Returns:
            MutableConfig: The parsed layer.

        Raises:
            ConfigError: If a value has the wrong type or cannot be read.
        """
        for key in data:
            if key not in _KNOWN_KEYS:
                logger.warning("%s: ignoring unknown configuration key '%s'", source, key)

        draft: MutableConfig = cls(config_files=[source])
        draft.license_header = get_string_value_or_none(data, "license_header", source)

        license_file: str | None = get_string_value_or_none(data, "license_file", source)
        if license_file is not None:
            path: Path = Path(license_file)
            if not path.is_absolute():
                path = (base_dir or Path.cwd()) / path
            draft.license_header = read_license_file(path)

        styles_tbl: ConfigTable = get_table_value(data, "comment_styles", source)
        logger.trace("%s [comment_styles]: %s", source, styles_tbl)
        for raw_ext, value in styles_tbl.items():
            ext: str = _normalize_extension(raw_ext, source)
            draft.comment_styles[ext] = _style_from_table(value, raw_ext, source)

        if "default_comment_style" in data:
            draft.default_comment_style = _style_from_table(
                data["default_comment_style"], "default_comment_style", source
            )

        draft.ignore_patterns = get_string_list_value(data, "ignore_patterns", source)
        draft.max_header_bytes = get_int_value_or_none(data, "max_header_bytes", source)
        draft.max_file_bytes = get_int_value_or_none(data, "max_file_bytes", source)
        draft.skip_empty_files = get_bool_value_or_none(data, "skip_empty_files", source)
        draft.parallel_jobs = get_int_value_or_none(data, "parallel_jobs", source)
        draft.similarity_threshold = get_int_value_or_none(data, "similarity_threshold", source)

        thresholds_tbl: ConfigTable = get_table_value(data, "similarity_thresholds", source)
        for raw_ext in thresholds_tbl:
            threshold: int | None = get_int_value_or_none(thresholds_tbl, raw_ext, source)
            if threshold is not None:
                draft.similarity_thresholds[_normalize_extension(raw_ext, source)] = threshold

        draft.include_hidden = get_bool_value_or_none(data, "include_hidden", source)
        draft.follow_links = get_bool_value_or_none(data, "follow_links", source)
        draft.respect_vcs_ignores = get_bool_value_or_none(data, "respect_vcs_ignores", source)
        draft.require_license_keyword = get_bool_value_or_none(
            data, "require_license_keyword", source
        )
        return draft

    @classmethod
    def from_file(cls, path: Path) -> MutableConfig:
        """Load one configuration file (TOML, JSON or ``pyproject.toml``).

        Raises:
            ConfigError: If the file cannot be read, parsed or validated.
        """
        data: ConfigTable = load_config_file(path)
        draft: MutableConfig = cls.from_dict(data, str(path), base_dir=path.parent)
        logger.debug("Loaded configuration layer from %s", path)
        return draft

    @classmethod
    def from_env(cls, environ: Mapping[str, str]) -> MutableConfig:
        """Build the environment layer from ``FLC_*`` variables."""
        return cls.from_dict(env_overrides(environ), "<environment>")

    @classmethod
    def load_merged(
        cls,
        *,
        config_path: Path | None = None,
        cwd: Path | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> MutableConfig:
        """Layer defaults, one config file and the environment.

        Args:
            config_path (Path | None): Explicit config file; when None, the
                CWD is searched with `discover_config_file`.
            cwd (Path | None): Directory for discovery (defaults to the CWD).
            environ (Mapping[str, str] | None): Environment (defaults to ``os.environ``).

        Returns:
            MutableConfig: The merged draft; CLI overrides are applied by the caller.

        Raises:
            ConfigError: If the config file is missing, unreadable or invalid.
        """
        draft: MutableConfig = cls.from_defaults()

        if config_path is not None:
            if not config_path.is_file():
                raise ConfigError(f"Config file not found: {config_path}")
            draft = draft.merge_with(cls.from_file(config_path))
        else:
            discovered: Path | None = discover_config_file(cwd or Path.cwd())
            if discovered is not None:
                draft = draft.merge_with(cls.from_file(discovered))

        env_layer: MutableConfig = cls.from_env(os.environ if environ is None else environ)
        if env_layer.has_values():
            draft = draft.merge_with(env_layer)
        return draft

    # ------------------------------- Merging -------------------------------

    def has_values(self) -> bool:
        """True when this layer sets at least one option."""
        probe: MutableConfig = MutableConfig()
        probe.config_files = self.config_files
        return self != probe

    def merge_with(self, other: MutableConfig) -> MutableConfig:
        """Return a new draft where values set in ``other`` override this draft.

        Args:
            other (MutableConfig): The higher-precedence layer.

        Returns:
            MutableConfig: The merged draft; neither input is modified.
        """

        def pick(mine: Any, theirs: Any) -> Any:
            return theirs if theirs is not None else mine

        return MutableConfig(
            license_header=pick(self.license_header, other.license_header),
            comment_styles={**self.comment_styles, **other.comment_styles},
            default_comment_style=pick(self.default_comment_style, other.default_comment_style),
            ignore_patterns=self.ignore_patterns + other.ignore_patterns,
            max_header_bytes=pick(self.max_header_bytes, other.max_header_bytes),
            max_file_bytes=pick(self.max_file_bytes, other.max_file_bytes),
            skip_empty_files=pick(self.skip_empty_files, other.skip_empty_files),
            parallel_jobs=pick(self.parallel_jobs, other.parallel_jobs),
            similarity_threshold=pick(self.similarity_threshold, other.similarity_threshold),
            similarity_thresholds={**self.similarity_thresholds, **other.similarity_thresholds},
            include_hidden=pick(self.include_hidden, other.include_hidden),
            follow_links=pick(self.follow_links, other.follow_links),
            respect_vcs_ignores=pick(self.respect_vcs_ignores, other.respect_vcs_ignores),
            require_license_keyword=pick(
                self.require_license_keyword, other.require_license_keyword
            ),
            config_files=self.config_files + other.config_files,
        )

    def apply_overrides(self, args: Mapping[str, Any]) -> MutableConfig:
        """Apply command-line (or API) overrides in place.

        Keys mirror `Config` field names. ``None`` values are ignored;
        ``ignore_patterns`` are appended.

        Args:
            args (Mapping[str, Any]): Override values.

        Returns:
            MutableConfig: ``self``, for chaining.
        """
        applied: list[str] = []
        for key, value in args.items():
            if value is None:
                continue
            if key == "ignore_patterns":
                if value:
                    self.ignore_patterns.extend(value)
                    applied.append(key)
                continue
            if not hasattr(self, key) or key in ("comment_styles", "similarity_thresholds"):
                raise ConfigError(f"Unsupported override: {key}")
            setattr(self, key, value)
            applied.append(key)
        if applied:
            self.config_files.append("<CLI overrides>")
            logger.debug("Applied overrides: %s", ", ".join(applied))
        return self


def read_license_file(path: Path) -> str:
    """Read a license header from ``path``.

    Raises:
        ConfigError: If the file cannot be read.
    """
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Could not read license file {path}: {e.strerror or e}") from e
    except UnicodeDecodeError as e:
        raise ConfigError(f"License file {path} is not valid UTF-8") from e
