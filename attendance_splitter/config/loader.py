from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import (
    DEFAULT_HEADER_SCAN_ROWS,
    DEFAULT_OUTPUT_TEMPLATE,
    DEFAULT_PREVIEW_ROWS,
    SplitterConfig,
)

"""Config loader.

Responsibilities:
- Load the YAML config (default config/splitter.yml)
- Validate it against the bundled JSON schema (config_schema.json)
- Apply defaults and environment overrides
"""

__all__ = [
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "CONFIG_ENV_VAR",
    "OUTPUT_DIR_ENV_VAR",
    "resolve_config_path",
    "load_config",
]

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/splitter.yml")
CONFIG_ENV_VAR = "ATTENDANCE_SPLITTER_CONFIG"
OUTPUT_DIR_ENV_VAR = "ATTENDANCE_SPLITTER_OUTPUT_DIR"


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against JSON schema.

    Raises:
        ConfigError: If the schema file is missing or not valid JSON, or the
            config data fails schema validation.
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def resolve_config_path(cli_value: str | None = None) -> Path:
    """--config wins over $ATTENDANCE_SPLITTER_CONFIG, then the default path."""
    if cli_value:
        return Path(cli_value)
    env_value = os.getenv(CONFIG_ENV_VAR)
    if env_value:
        return Path(env_value)
    return DEFAULT_CONFIG_PATH


def load_config(path: Path) -> SplitterConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError("config validation failed: top level must be a mapping")

    _validate_config_schema(data)

    output_directory = os.getenv(OUTPUT_DIR_ENV_VAR) or data["output_directory"]
    return SplitterConfig(
        source_directory=data["source_directory"],
        output_directory=output_directory,
        header_scan_rows=data.get("header_scan_rows", DEFAULT_HEADER_SCAN_ROWS),
        preview_rows=data.get("preview_rows", DEFAULT_PREVIEW_ROWS),
        output_template=data.get("output_template", DEFAULT_OUTPUT_TEMPLATE),
        output_names=dict(data.get("output_names") or {}),
        sheet_name_policy=data.get("sheet_name_policy", "truncate"),
        keep_na_strings=data.get("keep_na_strings"),
    )
