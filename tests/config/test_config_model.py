# flc:header:start
#
#   project      : Fast License Checker
#   file         : test_config_model.py
#   file_relpath : tests/config/test_config_model.py
#   license      : MIT
#   copyright    : (c) 2025 Fast License Checker contributors
#
# flc:header:end

"""Tests for `MutableConfig` layering and the frozen `Config`."""

from __future__ import annotations

import dataclasses
from collections.abc import Callable
from pathlib import Path

import pytest

from fast_license_checker.config.model import Config, MutableConfig, read_license_file
from fast_license_checker.constants import DEFAULT_MAX_HEADER_BYTES, DEFAULT_SIMILARITY_THRESHOLD
from fast_license_checker.core.errors import ConfigError
from fast_license_checker.header.types import CommentStyle, FileExtension, LicenseHeaderText


def test_defaults_freeze() -> None:
    """Defaults alone produce a usable config, minus the header."""
    config: Config = MutableConfig.from_defaults().freeze()
    assert config.max_header_bytes == DEFAULT_MAX_HEADER_BYTES
    assert config.similarity_threshold == DEFAULT_SIMILARITY_THRESHOLD
    assert config.skip_empty_files
    assert config.respect_vcs_ignores
    assert not config.include_hidden
    assert config.comment_styles["rs"] == CommentStyle.line("//")
    assert config.comment_styles["css"] == CommentStyle.block("/*", "*/")
    with pytest.raises(ConfigError, match="No license header"):
        config.header()


def test_config_is_immutable(config_factory: Callable[..., Config]) -> None:
    """Frozen configs reject attribute and mapping writes."""
    config: Config = config_factory()
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.max_header_bytes = 1  # type: ignore[misc]
    with pytest.raises(TypeError):
        config.comment_styles["rs"] = CommentStyle.line("#")  # type: ignore[index]


def test_thaw_freeze_roundtrip(config_factory: Callable[..., Config]) -> None:
    """Thawing and refreezing yields an equal config."""
    config: Config = config_factory(ignore_patterns=["*.gen"])
    assert config.thaw().freeze() == config


def test_header_validation(config_factory: Callable[..., Config]) -> None:
    """The header is parsed on demand and keyword checks are opt-in."""
    expected: LicenseHeaderText = LicenseHeaderText.parse("MIT License\n\nCopyright 2024 Test")
    assert config_factory().header() == expected
    with pytest.raises(ConfigError):
        config_factory(license_header="hello", require_license_keyword=True).header()


@pytest.mark.parametrize(
    ("field_name", "value"),
    [
        ("max_header_bytes", 10),
        ("max_file_bytes", 0),
        ("similarity_threshold", 101),
        ("similarity_threshold", -1),
        ("parallel_jobs", 0),
        ("similarity_thresholds", {"rs": 200}),
    ],
)
def test_out_of_range_values(field_name: str, value: object) -> None:
    """Validation happens in `MutableConfig.freeze`."""
    draft: MutableConfig = MutableConfig.from_defaults()
    setattr(draft, field_name, value)
    with pytest.raises(ConfigError):
        draft.freeze()


def test_threshold_for_extension(config_factory: Callable[..., Config]) -> None:
    """Per-extension thresholds override the global one."""
    config: Config = config_factory(similarity_threshold=80, similarity_thresholds={"md": 95})
    assert config.threshold_for(FileExtension("md")) == 95
    assert config.threshold_for(FileExtension("rs")) == 80
    assert config.threshold_for(None) == 80


def test_from_dict_parses_all_keys(tmp_path: Path) -> None:
    """Every documented key is read, extensions are normalized."""
    (tmp_path / "HEADER.txt").write_text("Copyright Example\n", encoding="utf-8")
    draft: MutableConfig = MutableConfig.from_dict(
        {
            "license_file": "HEADER.txt",
            "comment_styles": {
                ".PY": {"prefix": "##"},
                "vue": {"prefix": "<!--", "suffix": "-->"},
            },
            "default_comment_style": {"prefix": "#"},
            "ignore_patterns": ["dist/"],
            "max_header_bytes": 4096,
            "max_file_bytes": 1000,
            "skip_empty_files": False,
            "parallel_jobs": 3,
            "similarity_threshold": 60,
            "similarity_thresholds": {"RS": 90},
            "include_hidden": True,
            "follow_links": True,
            "respect_vcs_ignores": False,
            "require_license_keyword": True,
        },
        "test.toml",
        base_dir=tmp_path,
    )
    assert draft.license_header == "Copyright Example\n"
    assert draft.comment_styles["py"] == CommentStyle.line("##")
    assert draft.comment_styles["vue"].is_block
    assert draft.default_comment_style == CommentStyle.line("#")
    assert draft.ignore_patterns == ["dist/"]
    assert draft.similarity_thresholds == {"rs": 90}
    assert (draft.parallel_jobs, draft.max_header_bytes, draft.max_file_bytes) == (3, 4096, 1000)
    assert draft.skip_empty_files is False
    assert draft.respect_vcs_ignores is False
    assert draft.config_files == ["test.toml"]


@pytest.mark.parametrize(
    "data",
    [
        {"max_header_bytes": "big"},
        {"skip_empty_files": "yes"},
        {"parallel_jobs": True},
        {"ignore_patterns": "*.tmp"},
        {"ignore_patterns": [1, 2]},
        {"comment_styles": {"rs": "//"}},
        {"comment_styles": {"rs": {"suffix": "*/"}}},
        {"comment_styles": {"tar.gz": {"prefix": "#"}}},
        {"license_header": 42},
    ],
)
def test_from_dict_rejects_bad_types(data: dict[str, object]) -> None:
    """Wrong value types are configuration errors naming the source."""
    with pytest.raises(ConfigError, match="bad.toml"):
        MutableConfig.from_dict(data, "bad.toml")


def test_unknown_keys_are_ignored() -> None:
    """Unknown keys do not fail the load."""
    draft: MutableConfig = MutableConfig.from_dict({"mystery": 1}, "x.toml")
    assert not draft.has_values()


def test_merge_precedence() -> None:
    """Scalars from the later layer win; maps merge and lists concatenate."""
    base: MutableConfig = MutableConfig.from_defaults()
    base.ignore_patterns = ["a"]
    layer: MutableConfig = MutableConfig.from_dict(
        {
            "similarity_threshold": 50,
            "ignore_patterns": ["b"],
            "comment_styles": {"rs": {"prefix": "///"}},
        },
        "layer",
    )
    merged: MutableConfig = base.merge_with(layer)
    assert merged.similarity_threshold == 50
    assert merged.max_header_bytes == DEFAULT_MAX_HEADER_BYTES
    assert merged.ignore_patterns == ["a", "b"]
    assert merged.comment_styles["rs"] == CommentStyle.line("///")
    assert merged.comment_styles["py"] == CommentStyle.line("#")
    assert merged.config_files == ["<defaults>", "layer"]
    assert base.similarity_threshold == DEFAULT_SIMILARITY_THRESHOLD


def test_apply_overrides() -> None:
    """None values are skipped, patterns appended, unknown keys refused."""
    draft: MutableConfig = MutableConfig.from_defaults()
    draft.apply_overrides(
        {"parallel_jobs": 8, "similarity_threshold": None, "ignore_patterns": ["x/"]}
    )
    assert draft.parallel_jobs == 8
    assert draft.similarity_threshold == DEFAULT_SIMILARITY_THRESHOLD
    assert draft.ignore_patterns == ["x/"]
    assert draft.config_files[-1] == "<CLI overrides>"
    with pytest.raises(ConfigError, match="Unsupported override"):
        draft.apply_overrides({"bogus": 1})


def test_load_merged_layers(tmp_path: Path) -> None:
    """File, then environment; explicit files must exist."""
    (tmp_path / ".flc.toml").write_text(
        'license_header = "From file"\nsimilarity_threshold = 60\nparallel_jobs = 2\n',
        encoding="utf-8",
    )
    draft: MutableConfig = MutableConfig.load_merged(
        cwd=tmp_path, environ={"FLC_PARALLEL_JOBS": "6"}
    )
    assert draft.license_header == "From file"
    assert draft.similarity_threshold == 60
    assert draft.parallel_jobs == 6
    assert draft.config_files == ["<defaults>", str(tmp_path / ".flc.toml"), "<environment>"]

    with pytest.raises(ConfigError, match="not found"):
        MutableConfig.load_merged(config_path=tmp_path / "missing.toml", environ={})


def test_read_license_file_errors(tmp_path: Path) -> None:
    """Missing or non-UTF-8 license files are configuration errors."""
    with pytest.raises(ConfigError, match="Could not read"):
        read_license_file(tmp_path / "LICENSE")
    (tmp_path / "LICENSE").write_bytes(b"\xff\xfe")
    with pytest.raises(ConfigError, match="UTF-8"):
        read_license_file(tmp_path / "LICENSE")


def test_to_toml_dict_roundtrip(config_factory: Callable[..., Config]) -> None:
    """The exported table loads back into an equivalent configuration."""
    config: Config = config_factory(ignore_patterns=["*.gen"], similarity_thresholds={"md": 90})
    table = config.to_toml_dict()
    assert "parallel_jobs" in table
    reloaded: Config = MutableConfig.from_dict(table, "<dump>").freeze()
    assert reloaded.license_header == config.license_header
    assert reloaded.ignore_patterns == config.ignore_patterns
    assert dict(reloaded.comment_styles) == dict(config.comment_styles)
    assert dict(reloaded.similarity_thresholds) == {"md": 90}
