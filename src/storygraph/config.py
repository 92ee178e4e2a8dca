"""Validation configuration loading.

Settings are resolved in this order (highest priority first):
1. Environment variables (e.g. SG_REPORT_CYCLES=false)
2. The YAML config file (``storygraph.yaml``)
3. Defaults
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from pathlib import Path  # noqa: TC003 - used at runtime
from typing import Any

from ruamel.yaml import YAML

from storygraph.observability.logging import get_logger

log = get_logger(__name__)

CONFIG_FILENAME = "storygraph.yaml"
ENV_PREFIX = "SG_"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class ConfigError(Exception):
    """Raised when a config file cannot be loaded."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load config from {path}: {reason}")


@dataclass
class ValidationConfig:
    """Which structural checks to run and how to present them.

    Attributes:
        require_entry: Fail when a non-empty graph has no entry node.
        report_cycles: Report strongly connected components of 2+ nodes.
        report_self_loops: Report nodes with an edge to themselves.
        report_unreachable: Warn about nodes no entry node can reach.
        report_dead_ends: Warn about non-ending nodes without outgoing edges.
        sort_components: Sort cycle members and cycles for display.
    """

    require_entry: bool = True
    report_cycles: bool = True
    report_self_loops: bool = True
    report_unreachable: bool = True
    report_dead_ends: bool = True
    sort_components: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ValidationConfig:
        """Create config from a dictionary (the ``validation`` section).

        Unknown keys are rejected so typos do not silently disable checks.

        Raises:
            ValueError: On non-string or unknown keys, or non-boolean values.
        """
        bad_keys = [key for key in data if not isinstance(key, str)]
        if bad_keys:
            names = ", ".join(map(repr, bad_keys))
            raise ValueError(f"Option names must be strings, got: {names}")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown validation option(s): {', '.join(unknown)}")

        values: dict[str, bool] = {}
        for key, value in data.items():
            if not isinstance(value, bool):
                raise ValueError(f"Option '{key}' must be true or false, got {value!r}")
            values[key] = value
        return cls(**values)

    def with_env_overrides(self) -> ValidationConfig:
        """Return a copy with SG_* environment variables applied.

        Raises:
            ValueError: If a variable holds something other than a boolean word.
        """
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        for name in values:
            raw = os.getenv(f"{ENV_PREFIX}{name.upper()}")
            if raw is None:
                continue
            lowered = raw.strip().lower()
            if lowered in _TRUE_VALUES:
                values[name] = True
            elif lowered in _FALSE_VALUES:
                values[name] = False
            else:
                raise ValueError(f"{ENV_PREFIX}{name.upper()} must be a boolean, got {raw!r}")
        return ValidationConfig(**values)


def load_validation_config(config_path: Path | None = None) -> ValidationConfig:
    """Load validation settings from a YAML file plus environment overrides.

    Args:
        config_path: Path to a config file. When None, only defaults and
            environment variables apply.

    Returns:
        ValidationConfig instance.

    Raises:
        ConfigError: If the file is missing, unparseable or invalid.
    """
    if config_path is None:
        config = ValidationConfig()
    else:
        config = _read_config_file(config_path)

    try:
        return config.with_env_overrides()
    except ValueError as e:
        raise ConfigError(config_path or Path(CONFIG_FILENAME), str(e)) from e


def _read_config_file(config_path: Path) -> ValidationConfig:
    if not config_path.exists():
        raise ConfigError(config_path, "File not found")

    yaml = YAML(typ="safe")
    try:
        with config_path.open("r", encoding="utf-8") as f:
            data = yaml.load(f)
    except Exception as e:
        raise ConfigError(config_path, str(e)) from e

    if data is None:
        raise ConfigError(config_path, "Empty file")
    if not isinstance(data, dict):
        raise ConfigError(config_path, "Top level must be a mapping")

    section = data.get("validation", {}) or {}
    if not isinstance(section, dict):
        raise ConfigError(config_path, "'validation' must be a mapping")

    try:
        config = ValidationConfig.from_dict(dict(section))
    except ValueError as e:
        raise ConfigError(config_path, str(e)) from e

    log.debug("validation_config_loaded", path=str(config_path))
    return config
