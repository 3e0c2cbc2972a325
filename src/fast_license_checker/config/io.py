# flc:header:start
#
#   project      : Fast License Checker
#   file         : io.py
#   file_relpath : src/fast_license_checker/config/io.py
#   license      : MIT
#   copyright    : (c) 2025 Fast License Checker contributors
#
# flc:header:end

"""Configuration file and environment I/O.

This module holds the **pure** reading/writing helpers of the configuration
layer. It never builds `MutableConfig` objects itself; the model calls into
it, which keeps the import graph acyclic.

Supported sources:
    * ``.flc.toml`` / ``flc.toml`` (parsed with `tomlkit`),
    * ``.flc.json`` / ``flc.json`` (parsed with `json`),
    * ``pyproject.toml`` (the ``[tool.flc]`` table),
    * ``FLC_*`` environment variables (see `env_overrides`).

Typed getters (``get_*_value``) validate individual values and raise
`ConfigError` with the offending key and source in the message.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, TypeGuard, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from fast_license_checker.config.logging import get_logger
from fast_license_checker.constants import (
    CONFIG_FILE_NAMES,
    DEFAULT_MAX_HEADER_BYTES,
    DEFAULT_SIMILARITY_THRESHOLD,
    ENV_HEADER,
    ENV_MAX_BYTES,
    ENV_PARALLEL_JOBS,
    ENV_SIMILARITY_THRESHOLD,
    PYPROJECT_TOML_NAME,
    PYPROJECT_TOOL_SECTION,
)
from fast_license_checker.core.errors import ConfigError

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

    from fast_license_checker.config.logging import FlcLogger

logger: FlcLogger = get_logger(__name__)

ConfigTable = dict[str, Any]

TEMPLATE_FORMATS: tuple[str, ...] = ("toml", "json")

_TEMPLATE_HEADER: str = (
    "Copyright 2024 Your Organization\n\nLicensed under the MIT License.\n"
)
_TEMPLATE_IGNORE_PATTERNS: tuple[str, ...] = ("*.tmp", "*.bak", "target/", "node_modules/")


def is_config_table(val: Any) -> TypeGuard[ConfigTable]:
    """Type guard for a table-like mapping."""
    return isinstance(val, dict)


def get_table_value(table: ConfigTable, key: str, source: str) -> ConfigTable:
    """Return the sub-table ``key`` (empty when missing).

    Raises:
        ConfigError: If the value exists but is not a table.
    """
    value: Any = table.get(key)
    if value is None:
        return {}
    if not is_config_table(value):
        raise ConfigError(f"{source}: '{key}' must be a table")
    return value


def get_string_value_or_none(table: ConfigTable, key: str, source: str) -> str | None:
    """Return the string at ``key`` or None when missing.

    Raises:
        ConfigError: If the value is not a string.
    """
    value: Any = table.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigError(f"{source}: '{key}' must be a string")
    return value


def get_bool_value_or_none(table: ConfigTable, key: str, source: str) -> bool | None:
    """Return the boolean at ``key`` or None when missing.

    Raises:
        ConfigError: If the value is not a boolean.
    """
    value: Any = table.get(key)
    if value is None:
        return None
    if not isinstance(value, bool):
        raise ConfigError(f"{source}: '{key}' must be true or false")
    return value


def get_int_value_or_none(table: ConfigTable, key: str, source: str) -> int | None:
    """Return the integer at ``key`` or None when missing.

    Raises:
        ConfigError: If the value is not an integer (booleans are rejected).
    """
    value: Any = table.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{source}: '{key}' must be an integer")
    return value


def get_string_list_value(table: ConfigTable, key: str, source: str) -> list[str]:
    """Return the list of strings at ``key`` (empty when missing).

    Raises:
        ConfigError: If the value is not a list of strings.
    """
    value: Any = table.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ConfigError(f"{source}: '{key}' must be a list of strings")
    items: list[Any] = cast("list[Any]", value)
    if not all(isinstance(item, str) for item in items):
        raise ConfigError(f"{source}: '{key}' must be a list of strings")
    return [str(item) for item in items]


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e.strerror or e}") from e


def load_toml_dict(path: Path) -> ConfigTable:
    """Parse a TOML file into plain Python containers.

    Raises:
        ConfigError: If the file cannot be read or parsed.
    """
    text: str = _read_text(path)
    try:
        data: ConfigTable = tomlkit.parse(text).unwrap()
    except TomlkitParseError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e
    return data


def load_json_dict(path: Path) -> ConfigTable:
    """Parse a JSON config file.

    Raises:
        ConfigError: If the file cannot be read, parsed or is not an object.
    """
    text: str = _read_text(path)
    try:
        data: Any = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}") from e
    if not is_config_table(data):
        raise ConfigError(f"Invalid JSON in {path}: top-level value must be an object")
    return data


def load_config_file(path: Path) -> ConfigTable:
    """Load a configuration table from ``path``.

    JSON is selected by the ``.json`` suffix, TOML otherwise. For
    ``pyproject.toml`` only the ``[tool.flc]`` table is returned.

    Args:
        path (Path): Config file to read.

    Returns:
        ConfigTable: The raw configuration table.

    Raises:
        ConfigError: If the file cannot be read or parsed, or a
            ``pyproject.toml`` has no ``[tool.flc]`` table.
    """
    logger.debug("Loading configuration from %s", path)
    if path.suffix.lower() == ".json":
        return load_json_dict(path)
    data: ConfigTable = load_toml_dict(path)
    if path.name == PYPROJECT_TOML_NAME:
        tool: ConfigTable = get_table_value(data, "tool", str(path))
        section: ConfigTable = get_table_value(tool, PYPROJECT_TOOL_SECTION, str(path))
        if not section:
            raise ConfigError(f"[tool.{PYPROJECT_TOOL_SECTION}] section missing in {path}")
        return section
    return data


def _has_tool_section(path: Path) -> bool:
    try:
        data: ConfigTable = load_toml_dict(path)
    except ConfigError as e:
        logger.debug("Ignoring unreadable %s during discovery: %s", path, e)
        return False
    tool: Any = data.get("tool")
    return is_config_table(tool) and is_config_table(tool.get(PYPROJECT_TOOL_SECTION))


def discover_config_file(cwd: Path) -> Path | None:
    """Return the first config file found in ``cwd``.

    Candidates are tried in order: ``.flc.toml``, ``.flc.json``, ``flc.toml``,
    ``flc.json``, then ``pyproject.toml`` if it has a ``[tool.flc]`` table.

    Args:
        cwd (Path): Directory to search (not its parents).

    Returns:
        Path | None: The config file, or None when there is none.
    """
    for name in CONFIG_FILE_NAMES:
        candidate: Path = cwd / name
        if candidate.is_file():
            logger.debug("Discovered config file: %s", candidate)
            return candidate
    pyproject: Path = cwd / PYPROJECT_TOML_NAME
    if pyproject.is_file() and _has_tool_section(pyproject):
        logger.debug("Discovered [tool.%s] in %s", PYPROJECT_TOOL_SECTION, pyproject)
        return pyproject
    return None


def _env_int(environ: Mapping[str, str], name: str) -> int | None:
    raw: str | None = environ.get(name)
    if raw is None:
        return None
    try:
        return int(raw.strip())
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer", name, raw)
        return None


def env_overrides(environ: Mapping[str, str]) -> ConfigTable:
    """Collect configuration overrides from ``FLC_*`` environment variables.

    - ``FLC_HEADER``: license header text (ignored when blank).
    - ``FLC_MAX_BYTES``: ``max_header_bytes``.
    - ``FLC_SIMILARITY_THRESHOLD``: ``similarity_threshold``, capped at 100.
    - ``FLC_PARALLEL_JOBS``: ``parallel_jobs``.

    Unparseable numbers are logged and ignored.

    Args:
        environ (Mapping[str, str]): Environment to read, usually ``os.environ``.

    Returns:
        ConfigTable: A table with the same keys a config file would use.
    """
    table: ConfigTable = {}
    header: str | None = environ.get(ENV_HEADER)
    if header is not None and header.strip():
        table["license_header"] = header
    max_bytes: int | None = _env_int(environ, ENV_MAX_BYTES)
    if max_bytes is not None:
        table["max_header_bytes"] = max_bytes
    threshold: int | None = _env_int(environ, ENV_SIMILARITY_THRESHOLD)
    if threshold is not None:
        table["similarity_threshold"] = min(threshold, 100)
    jobs: int | None = _env_int(environ, ENV_PARALLEL_JOBS)
    if jobs is not None:
        table["parallel_jobs"] = jobs
    if table:
        logger.debug("Environment overrides: %s", sorted(table))
    return table


def _toml_template() -> str:
    doc: tomlkit.TOMLDocument = tomlkit.document()
    doc.add(tomlkit.comment("Fast License Checker configuration"))
    doc.add("license_header", tomlkit.string(_TEMPLATE_HEADER, multiline=True))
    doc.add(tomlkit.nl())
    doc.add(tomlkit.comment("Comment styles per file extension (defaults provided)"))
    doc.add(tomlkit.comment("[comment_styles]"))
    doc.add(tomlkit.comment('rs = { prefix = "//" }'))
    doc.add(tomlkit.comment('py = { prefix = "#" }'))
    doc.add(tomlkit.comment('css = { prefix = "/*", suffix = "*/" }'))
    doc.add(tomlkit.nl())
    doc.add(tomlkit.comment("Additional ignore patterns (beyond .gitignore)"))
    patterns = tomlkit.array()
    patterns.extend(_TEMPLATE_IGNORE_PATTERNS)
    doc.add("ignore_patterns", patterns.multiline(True))
    doc.add(tomlkit.nl())
    doc.add(tomlkit.comment("Maximum bytes to read from file start"))
    doc.add("max_header_bytes", DEFAULT_MAX_HEADER_BYTES)
    doc.add(tomlkit.nl())
    doc.add(tomlkit.comment("Skip empty files"))
    doc.add("skip_empty_files", True)
    doc.add(tomlkit.nl())
    doc.add(tomlkit.comment("Number of parallel jobs (default: number of CPU cores)"))
    doc.add(tomlkit.comment("parallel_jobs = 4"))
    doc.add(tomlkit.nl())
    doc.add(tomlkit.comment("Similarity threshold for malformed header detection (0-100)"))
    doc.add("similarity_threshold", DEFAULT_SIMILARITY_THRESHOLD)
    return tomlkit.dumps(doc)


def _json_template() -> str:
    data: ConfigTable = {
        "license_header": _TEMPLATE_HEADER,
        "ignore_patterns": list(_TEMPLATE_IGNORE_PATTERNS),
        "max_header_bytes": DEFAULT_MAX_HEADER_BYTES,
        "skip_empty_files": True,
        "similarity_threshold": DEFAULT_SIMILARITY_THRESHOLD,
    }
    return json.dumps(data, indent=2) + "\n"


def render_config_template(fmt: str = "toml") -> str:
    """Return a starter configuration file.

    Args:
        fmt (str): ``"toml"`` (annotated with comments) or ``"json"``.

    Returns:
        str: The template text.

    Raises:
        ConfigError: If ``fmt`` is not a supported format.
    """
    if fmt == "toml":
        return _toml_template()
    if fmt == "json":
        return _json_template()
    raise ConfigError(f"Unsupported config format {fmt!r}: must be 'toml' or 'json'")


def to_toml(table: ConfigTable) -> str:
    """Serialize ``table`` to TOML text, dropping ``None`` values."""
    return tomlkit.dumps(_drop_none(table))


def _drop_none(table: ConfigTable) -> ConfigTable:
    out: ConfigTable = {}
    for key, value in table.items():
        if value is None:
            continue
        out[key] = _drop_none(value) if is_config_table(value) else value
    return out
