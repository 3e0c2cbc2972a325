# flc:header:start
#
#   project      : Fast License Checker
#   file         : __init__.py
#   file_relpath : src/fast_license_checker/core/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Fast License Checker contributors
#
# flc:header:end

"""Core building blocks shared by the library and the CLI."""

from __future__ import annotations
