# flc:header:start
#
#   project      : Fast License Checker
#   file         : __main__.py
#   file_relpath : src/fast_license_checker/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Fast License Checker contributors
#
# flc:header:end

"""Module entry point for running the checker via ``python -m fast_license_checker``.

Equivalent to running the ``flc`` console script.

Examples:
    Check the current directory::

        python -m fast_license_checker check .
"""

from __future__ import annotations

from fast_license_checker.cli.main import cli

if __name__ == "__main__":
    cli()
