# flc:header:start
#
#   project      : Fast License Checker
#   file         : constants.py
#   file_relpath : src/fast_license_checker/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Fast License Checker contributors
#
# flc:header:end

"""Fast License Checker constants."""

from __future__ import annotations

from importlib.metadata import version as get_version
from typing import Final

FLC_VERSION: str = get_version("fast-license-checker")

# Bytes read from the head of each file during a scan.
DEFAULT_MAX_HEADER_BYTES: Final[int] = 8192
MIN_MAX_HEADER_BYTES: Final[int] = 256
# Room left for a shebang or XML declaration when a header outgrows the sample.
PRELUDE_ALLOWANCE_BYTES: Final[int] = 1024

# Files larger than this are never rewritten.
DEFAULT_MAX_FILE_BYTES: Final[int] = 100 * 1024 * 1024

DEFAULT_SIMILARITY_THRESHOLD: Final[int] = 70

# Byte-prefix comparison window and minimum comparable length.
FUZZY_PREFIX_WINDOW: Final[int] = 256
FUZZY_MIN_COMPARE_BYTES: Final[int] = 10

# Number of leading lines compared by the line-wise fuzzy matcher.
FUZZY_LINE_WINDOW: Final[int] = 10
# Longer lines are cut before computing their edit distance.
FUZZY_LINE_MAX_CHARS: Final[int] = 256

MAX_HEADER_CHARS: Final[int] = 5000

# Config file names probed (in order) in the working directory.
CONFIG_FILE_NAMES: Final[tuple[str, ...]] = (
    ".flc.toml",
    ".flc.json",
    "flc.toml",
    "flc.json",
)
PYPROJECT_TOML_NAME: Final[str] = "pyproject.toml"
PYPROJECT_TOOL_SECTION: Final[str] = "flc"

# Per-directory ignore files, in increasing order of precedence.
IGNORE_FILE_NAMES: Final[tuple[str, ...]] = (".gitignore", ".ignore")

# Environment variables.
ENV_LOG_LEVEL: Final[str] = "FLC_LOG_LEVEL"
ENV_HEADER: Final[str] = "FLC_HEADER"
ENV_MAX_BYTES: Final[str] = "FLC_MAX_BYTES"
ENV_SIMILARITY_THRESHOLD: Final[str] = "FLC_SIMILARITY_THRESHOLD"
ENV_PARALLEL_JOBS: Final[str] = "FLC_PARALLEL_JOBS"
