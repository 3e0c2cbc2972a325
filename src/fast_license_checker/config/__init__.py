# flc:header:start
#
#   project      : Fast License Checker
#   file         : __init__.py
#   file_relpath : src/fast_license_checker/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Fast License Checker contributors
#
# flc:header:end

"""Configuration model, loaders and logging setup."""

from __future__ import annotations
