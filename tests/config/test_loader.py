"""Tests for config/loader.py module.

Covers:
- _load_yaml() function
- _deep_merge() function
- load_config() precedence: defaults < global < project < env < kwargs
- get_default_config() caching
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest

from fkfactory.config.loader import (
    GLOBAL_CONFIG_PATH,
    PROJECT_CONFIG_NAME,
    _deep_merge,
    _load_yaml,
    get_default_config,
    load_config,
)
from fkfactory.config.models import GeneratorConfig, LoggingConfig
from fkfactory.core.errors import ConfigError, ErrorCode


class TestLoadYaml:
    """Tests for _load_yaml function."""

    def test_returns_empty_dict_for_missing_file(self, tmp_path: Path) -> None:
        """Returns empty dict when file doesn't exist."""
        result = _load_yaml(tmp_path / "nonexistent.yaml")
        assert result == {}

    def test_loads_valid_yaml(self, tmp_path: Path) -> None:
        """Loads valid YAML content."""
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text("generator:\n  setter_prefix: set_\n")

        result = _load_yaml(yaml_file)
        assert result == {"generator": {"setter_prefix": "set_"}}

    def test_returns_empty_for_empty_file(self, tmp_path: Path) -> None:
        """Returns empty dict for empty file."""
        yaml_file = tmp_path / "empty.yaml"
        yaml_file.write_text("")

        assert _load_yaml(yaml_file) == {}

    def test_raises_config_error_for_invalid_yaml(self, tmp_path: Path) -> None:
        """Raises ConfigError for invalid YAML syntax."""
        yaml_file = tmp_path / "invalid.yaml"
        yaml_file.write_text("generator:\n  id_suffix:\n    - invalid: [unclosed")

        with pytest.raises(ConfigError) as exc_info:
            _load_yaml(yaml_file)
        assert exc_info.value.code == ErrorCode.CONFIG_PARSE_ERROR

    def test_raises_config_error_for_non_mapping(self, tmp_path: Path) -> None:
        """A YAML list at the top level is rejected."""
        yaml_file = tmp_path / "list.yaml"
        yaml_file.write_text("- a\n- b\n")

        with pytest.raises(ConfigError, match="top level must be a mapping"):
            _load_yaml(yaml_file)


class TestDeepMerge:
    """Tests for _deep_merge function."""

    def test_override_wins(self) -> None:
        assert _deep_merge({"a": 1, "b": 2}, {"b": 3}) == {"a": 1, "b": 3}

    def test_nested_merge(self) -> None:
        """Nested dicts are merged recursively."""
        base = {"generator": {"id_suffix": "_id", "setter_prefix": "with_"}}
        override = {"generator": {"setter_prefix": "set_"}}
        assert _deep_merge(base, override) == {
            "generator": {"id_suffix": "_id", "setter_prefix": "set_"}
        }

    def test_override_replaces_non_dict(self) -> None:
        base: dict[str, Any] = {"a": {"nested": 1}}
        override: dict[str, Any] = {"a": "simple"}
        assert _deep_merge(base, override) == {"a": "simple"}

    def test_does_not_mutate_base(self) -> None:
        base = {"a": 1}
        _deep_merge(base, {"b": 2})
        assert base == {"a": 1}


@pytest.fixture
def no_global_config(tmp_path: Path) -> Any:
    with patch("fkfactory.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "none.yaml"):
        yield


@pytest.mark.usefixtures("no_global_config")
class TestLoadConfig:
    """Tests for load_config function."""

    def test_returns_default_config_when_no_files(self, tmp_path: Path) -> None:
        config = load_config(tmp_path)

        assert config.logging.level == "INFO"
        assert config.generator == GeneratorConfig()

    def test_loads_project_config(self, tmp_path: Path) -> None:
        (tmp_path / PROJECT_CONFIG_NAME).write_text(
            "generator:\n  id_suffix: _pk\n  docstrings: false\n"
        )

        config = load_config(tmp_path)

        assert config.generator.id_suffix == "_pk"
        assert config.generator.docstrings is False
        assert config.generator.setter_prefix == "with_"

    def test_project_overrides_global(self, tmp_path: Path) -> None:
        global_path = tmp_path / "global.yaml"
        global_path.write_text("generator:\n  setter_prefix: set_\n  id_suffix: _pk\n")
        (tmp_path / PROJECT_CONFIG_NAME).write_text("generator:\n  id_suffix: _ref\n")

        with patch("fkfactory.config.loader.GLOBAL_CONFIG_PATH", global_path):
            config = load_config(tmp_path)

        assert config.generator.setter_prefix == "set_"
        assert config.generator.id_suffix == "_ref"

    def test_env_vars_override_yaml(self, tmp_path: Path) -> None:
        (tmp_path / PROJECT_CONFIG_NAME).write_text("generator:\n  resolve_method: persist\n")

        with patch.dict(os.environ, {"FKFACTORY__GENERATOR__RESOLVE_METHOD": "insert_deps"}):
            config = load_config(tmp_path)

        assert config.generator.resolve_method == "insert_deps"

    def test_kwargs_override_all(self, tmp_path: Path) -> None:
        with patch.dict(os.environ, {"FKFACTORY__LOGGING__LEVEL": "WARNING"}):
            config = load_config(tmp_path, logging=LoggingConfig(level="ERROR"))

        assert config.logging.level == "ERROR"

    def test_raises_config_error_for_invalid_value(self, tmp_path: Path) -> None:
        (tmp_path / PROJECT_CONFIG_NAME).write_text("generator:\n  setter_prefix: 'with-'\n")

        with pytest.raises(ConfigError) as exc_info:
            load_config(tmp_path)

        assert exc_info.value.code == ErrorCode.CONFIG_INVALID_VALUE
        assert "setter_prefix" in exc_info.value.details["field"]


class TestGetDefaultConfig:
    def test_cached_per_process(self) -> None:
        get_default_config.cache_clear()
        try:
            assert get_default_config() is get_default_config()
        finally:
            get_default_config.cache_clear()


class TestGlobalConfigPath:
    def test_is_in_user_config(self) -> None:
        assert isinstance(GLOBAL_CONFIG_PATH, Path)
        assert "fkfactory" in str(GLOBAL_CONFIG_PATH)
