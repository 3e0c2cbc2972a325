# flc:header:start
#
#   project      : Fast License Checker
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Fast License Checker contributors
#
# flc:header:end

"""Pytest configuration for the Fast License Checker test suite.

Notes:
    Tests should respect the immutable/mutable configuration split:

    - Build configs with `MutableConfig` (mutable), then `freeze()` into a
      `Config` for `Scanner` / `HeaderFixer`.
    - Do **not** mutate a frozen `Config`. If you need to tweak one, call
      `Config.thaw()`, edit the returned `MutableConfig`, then `freeze()` again.

    Every test runs with a clean environment: ``FLC_*`` variables are removed,
    ``HOME`` / ``XDG_CONFIG_HOME`` point into a temporary directory (so the
    developer's global git excludes never leak in) and the working directory
    is an empty temporary directory (so no config file is discovered).
"""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from fast_license_checker.config import logging
from fast_license_checker.config.model import Config, MutableConfig

#: Header used by most tests.
MIT_HEADER: str = "MIT License\n\nCopyright 2024 Test"


@pytest.fixture(autouse=True)
def isolated_environment(
    monkeypatch: pytest.MonkeyPatch, tmp_path_factory: pytest.TempPathFactory
) -> Path:
    """Isolate each test from the developer's environment.

    Args:
        monkeypatch (pytest.MonkeyPatch): Fixture used to edit env vars and the CWD.
        tmp_path_factory (pytest.TempPathFactory): Factory for the fake home and CWD.

    Returns:
        Path: The temporary working directory.
    """
    for name in list(os.environ):
        if name.startswith("FLC_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.delenv("FORCE_COLOR", raising=False)

    home: Path = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))

    cwd: Path = tmp_path_factory.mktemp("cwd")
    monkeypatch.chdir(cwd)
    return cwd


@pytest.hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Log at TRACE level so failing tests show the full diagnostic trail."""
    logging.setup_logging(level=logging.TRACE_LEVEL)


def make_mutable_config(**overrides: Any) -> MutableConfig:
    """Return a builder seeded with defaults and the test header, then ``overrides``."""
    m: MutableConfig = MutableConfig.from_defaults()
    m.license_header = MIT_HEADER
    m.parallel_jobs = 2
    for key, value in overrides.items():
        setattr(m, key, value)
    return m


def make_config(**overrides: Any) -> Config:
    """Return a frozen `Config` built from defaults, the test header and ``overrides``."""
    return make_mutable_config(**overrides).freeze()


@pytest.fixture
def config_factory() -> Callable[..., Config]:
    """Expose `make_config` to tests."""
    return make_config


@pytest.fixture
def mutable_config_factory() -> Callable[..., MutableConfig]:
    """Expose `make_mutable_config` to tests."""
    return make_mutable_config


@pytest.fixture
def mit_header() -> str:
    """Return the header text used across the suite."""
    return MIT_HEADER


@pytest.fixture
def write_tree(tmp_path: Path) -> Callable[[dict[str, str | bytes]], Path]:
    """Return a helper that materializes ``{relative path: content}`` below ``tmp_path``.

    Returns:
        Callable[[dict[str, str | bytes]], Path]: Helper returning the tree root.
    """

    def _write(files: dict[str, str | bytes]) -> Path:
        root: Path = tmp_path / "tree"
        root.mkdir(exist_ok=True)
        for rel, content in files.items():
            path: Path = root / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                path.write_bytes(content)
            else:
                path.write_bytes(content.encode("utf-8"))
        return root

    return _write
