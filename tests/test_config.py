# Copyright (c) Syntropy Systems
"""Tests for configuration loading."""

import pytest

from crucible_ir.config import IRConfig, find_crucible_dir, load_config
from crucible_ir.errors import ConfigError


class TestFindCrucibleDir:
    """Tests for locating the .crucible directory."""

    def test_finds_in_start_dir(self, temp_dir):
        (temp_dir / ".crucible").mkdir()
        assert find_crucible_dir(temp_dir) == (temp_dir / ".crucible").resolve()

    def test_walks_up(self, temp_dir):
        (temp_dir / ".crucible").mkdir()
        nested = temp_dir / "a" / "b"
        nested.mkdir(parents=True)
        assert find_crucible_dir(nested) == (temp_dir / ".crucible").resolve()


class TestLoadConfig:
    """Tests for load_config."""

    def test_defaults_without_file(self, temp_dir):
        assert load_config(temp_dir) == IRConfig()

    def test_reads_values(self, temp_dir):
        (temp_dir / "config.yaml").write_text(
            "json_indent: 4\nexclude_none: true\ndefault_kind: backend_ref\nlog_level: debug\n"
        )
        config = load_config(temp_dir)
        assert config.json_indent == 4
        assert config.exclude_none is True
        assert config.default_kind == "backend_ref"
        assert config.log_level == "DEBUG"

    def test_null_indent_means_compact(self, temp_dir):
        (temp_dir / "config.yaml").write_text("json_indent: null\n")
        assert load_config(temp_dir).json_indent is None

    def test_wrong_types_ignored(self, temp_dir):
        (temp_dir / "config.yaml").write_text(
            "json_indent: wide\nexclude_none: sometimes\ndefault_kind: 3\n"
        )
        assert load_config(temp_dir) == IRConfig()

    def test_empty_file(self, temp_dir):
        (temp_dir / "config.yaml").write_text("")
        assert load_config(temp_dir) == IRConfig()

    def test_not_a_mapping(self, temp_dir):
        (temp_dir / "config.yaml").write_text("- one\n- two\n")
        with pytest.raises(ConfigError):
            _ = load_config(temp_dir)

    def test_invalid_yaml(self, temp_dir):
        (temp_dir / "config.yaml").write_text("json_indent: [unclosed\n")
        with pytest.raises(ConfigError):
            _ = load_config(temp_dir)

    def test_found_from_cwd(self, crucible_project):
        (crucible_project / ".crucible" / "config.yaml").write_text("default_kind: prompt\n")
        assert load_config().default_kind == "prompt"
