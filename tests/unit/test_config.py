"""Tests for validation configuration."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from storygraph.config import ConfigError, ValidationConfig, load_validation_config

if TYPE_CHECKING:
    from pathlib import Path


class TestValidationConfig:
    """Tests for ValidationConfig class."""

    def test_defaults(self) -> None:
        config = ValidationConfig()
        assert config.require_entry is True
        assert config.report_cycles is True
        assert config.report_self_loops is True
        assert config.report_unreachable is True
        assert config.report_dead_ends is True
        assert config.sort_components is False

    def test_from_dict_partial(self) -> None:
        config = ValidationConfig.from_dict({"report_dead_ends": False})
        assert config.report_dead_ends is False
        assert config.report_cycles is True

    def test_from_dict_unknown_key(self) -> None:
        with pytest.raises(ValueError, match="Unknown validation option"):
            ValidationConfig.from_dict({"report_cycle": False})

    def test_from_dict_non_string_key(self) -> None:
        with pytest.raises(ValueError, match="must be strings"):
            ValidationConfig.from_dict({1: True})  # type: ignore[dict-item]

    def test_from_dict_non_bool(self) -> None:
        with pytest.raises(ValueError, match="must be true or false"):
            ValidationConfig.from_dict({"report_cycles": "no"})

    def test_env_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SG_REPORT_CYCLES", "false")
        monkeypatch.setenv("SG_SORT_COMPONENTS", "YES")
        config = ValidationConfig().with_env_overrides()
        assert config.report_cycles is False
        assert config.sort_components is True

    def test_env_override_invalid(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SG_REPORT_CYCLES", "maybe")
        with pytest.raises(ValueError, match="SG_REPORT_CYCLES"):
            ValidationConfig().with_env_overrides()


class TestLoadValidationConfig:
    """Tests for load_validation_config."""

    def test_no_path_gives_defaults(self) -> None:
        assert load_validation_config() == ValidationConfig()

    def test_load_file(self, tmp_path: Path) -> None:
        path = tmp_path / "storygraph.yaml"
        path.write_text("validation:\n  report_unreachable: false\n  sort_components: true\n")
        config = load_validation_config(path)
        assert config.report_unreachable is False
        assert config.sort_components is True

    def test_file_without_validation_section(self, tmp_path: Path) -> None:
        path = tmp_path / "storygraph.yaml"
        path.write_text("other: 1\n")
        assert load_validation_config(path) == ValidationConfig()

    def test_env_beats_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        path = tmp_path / "storygraph.yaml"
        path.write_text("validation:\n  report_cycles: false\n")
        monkeypatch.setenv("SG_REPORT_CYCLES", "1")
        assert load_validation_config(path).report_cycles is True

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="File not found"):
            load_validation_config(tmp_path / "missing.yaml")

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "storygraph.yaml"
        path.write_text("")
        with pytest.raises(ConfigError, match="Empty file"):
            load_validation_config(path)

    def test_invalid_option(self, tmp_path: Path) -> None:
        path = tmp_path / "storygraph.yaml"
        path.write_text("validation:\n  bogus: true\n")
        with pytest.raises(ConfigError, match="bogus"):
            load_validation_config(path)

    def test_non_string_option_name(self, tmp_path: Path) -> None:
        path = tmp_path / "storygraph.yaml"
        path.write_text("validation:\n  1: true\n")
        with pytest.raises(ConfigError, match="must be strings"):
            load_validation_config(path)

    def test_mixed_option_name_types(self, tmp_path: Path) -> None:
        path = tmp_path / "storygraph.yaml"
        path.write_text("validation:\n  1: true\n  foo: true\n")
        with pytest.raises(ConfigError, match="must be strings"):
            load_validation_config(path)

    def test_non_mapping_top_level(self, tmp_path: Path) -> None:
        path = tmp_path / "storygraph.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_validation_config(path)

    def test_bad_env_wrapped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SG_REPORT_DEAD_ENDS", "sometimes")
        with pytest.raises(ConfigError):
            load_validation_config()
