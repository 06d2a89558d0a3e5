# Copyright (c) Syntropy Systems
"""Configuration management for crucible-ir tooling."""
from __future__ import annotations

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional, cast

import yaml

from crucible_ir.errors import ConfigError

CONFIG_DIR_NAME = ".crucible"
CONFIG_FILE_NAME = "config.yaml"


@dataclass
class IRConfig:
    """Configuration for crucible-ir tooling."""

    # Indent used when writing JSON (None for compact output)
    json_indent: Optional[int] = 2

    # Omit null fields when writing JSON
    exclude_none: bool = False

    # Entity kind assumed when a command is not given --kind
    default_kind: str = "experiment"

    # Level for the CLI log handler
    log_level: str = "WARNING"

    def to_dict(self) -> dict[str, object]:
        return asdict(self)


def find_crucible_dir(start_path: Path | None = None) -> Path | None:
    """Find the nearest .crucible directory by walking up from start_path.

    Returns None if no .crucible directory is found.
    """
    if start_path is None:
        start_path = Path.cwd()

    current = start_path.resolve()

    while current != current.parent:
        crucible_dir = current / CONFIG_DIR_NAME
        if crucible_dir.is_dir():
            return crucible_dir
        current = current.parent

    # Check root
    crucible_dir = current / CONFIG_DIR_NAME
    if crucible_dir.is_dir():
        return crucible_dir

    return None


def get_global_config_dir() -> Path:
    """Get the global config directory (~/.crucible)."""
    return Path.home() / CONFIG_DIR_NAME


def _read_yaml(config_path: Path) -> dict[str, object]:
    try:
        with config_path.open() as f:
            data = cast("object", yaml.safe_load(f))
    except (OSError, yaml.YAMLError) as exc:
        msg = f"Cannot read {config_path}: {exc}"
        raise ConfigError(msg) from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        msg = f"{config_path} must contain a mapping, got {type(data).__name__}"
        raise ConfigError(msg)
    return cast("dict[str, object]", data)


def load_config(crucible_dir: Path | None = None) -> IRConfig:
    """Load configuration from .crucible/config.yaml or defaults.

    Looks for config in:
    1. Provided crucible_dir
    2. Nearest .crucible directory walking up
    3. ~/.crucible/config.yaml
    4. Defaults

    Values of the wrong type are ignored. Raises ConfigError when the file
    exists but is not a YAML mapping.
    """
    config = IRConfig()

    # Find config file
    config_path = None

    if crucible_dir is not None:
        config_path = crucible_dir / CONFIG_FILE_NAME
    else:
        found_dir = find_crucible_dir()
        if found_dir is not None:
            config_path = found_dir / CONFIG_FILE_NAME
        else:
            global_config = get_global_config_dir() / CONFIG_FILE_NAME
            if global_config.exists():
                config_path = global_config

    if config_path is not None and config_path.exists():
        data = _read_yaml(config_path)

        if "json_indent" in data:
            json_indent = data["json_indent"]
            if json_indent is None:
                config.json_indent = None
            elif isinstance(json_indent, int) and not isinstance(json_indent, bool):
                config.json_indent = max(json_indent, 0)
        exclude_none = data.get("exclude_none")
        if isinstance(exclude_none, bool):
            config.exclude_none = exclude_none
        default_kind = data.get("default_kind")
        if isinstance(default_kind, str) and default_kind:
            config.default_kind = default_kind
        log_level = data.get("log_level")
        if isinstance(log_level, str) and log_level:
            config.log_level = log_level.upper()

    return config
