# flc:header:start
#
#   project      : Fast License Checker
#   file         : __init__.py
#   file_relpath : src/fast_license_checker/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Fast License Checker contributors
#
# flc:header:end

"""Fast License Checker package.

Fast License Checker (``flc``) walks a source tree in parallel, verifies that
every text file starts with the project's license header and can insert the
header where it is missing. It exposes both a CLI and a small typed API.
"""

from __future__ import annotations
