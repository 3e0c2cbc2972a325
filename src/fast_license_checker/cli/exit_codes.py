# flc:header:start
#
#   project      : Fast License Checker
#   file         : exit_codes.py
#   file_relpath : src/fast_license_checker/cli/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Fast License Checker contributors
#
# flc:header:end

"""Exit codes for the ``flc`` CLI.

Values follow the BSD `sysexits` convention where practical. ``FAILURE``
(1) means the run completed but at least one file failed the check (or
could not be fixed); ``WOULD_CHANGE`` (2) is returned by ``flc fix
--dry-run`` when files would be modified.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for the ``flc`` CLI.

    Attributes:
        SUCCESS: Every file passed (or was fixed).
        FAILURE: At least one file is missing a header, has a malformed one,
            or could not be fixed.
        WOULD_CHANGE: Dry-run: files would be modified by ``flc fix``.
        USAGE_ERROR: Invalid flags or arguments. Mirrors ``EX_USAGE (64)``.
        FILE_NOT_FOUND: The scan path does not exist. Mirrors ``EX_NOINPUT (66)``.
        IO_ERROR: An output file could not be written. Mirrors ``EX_IOERR (74)``.
        CONFIG_ERROR: Missing or invalid configuration, including an empty or
            invalid license header. Mirrors ``EX_CONFIG (78)``.
        UNEXPECTED_ERROR: Unhandled error (last resort).
    """

    SUCCESS = 0
    FAILURE = 1
    WOULD_CHANGE = 2

    USAGE_ERROR = 64  # EX_USAGE
    FILE_NOT_FOUND = 66  # EX_NOINPUT
    IO_ERROR = 74  # EX_IOERR
    CONFIG_ERROR = 78  # EX_CONFIG

    UNEXPECTED_ERROR = 255
