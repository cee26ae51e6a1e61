from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import AppConfig, DatabaseConfig, StorageConfig

"""Config loader.

Responsibilities:
- Resolve the config path (--config > JOBSITES_CONFIG env > config/jobsites.yml)
- Load YAML and validate it against config_schema.json
- Apply defaults for every omitted key
A missing file at the *default* location is not an error: defaults apply.
"""

__all__ = [
    "CONFIG_ENV_VAR",
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "SCHEMA_PATH",
    "load_config",
    "resolve_config_path",
]

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/jobsites.yml")
CONFIG_ENV_VAR = "JOBSITES_CONFIG"


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: schema file missing or invalid, or the data fails validation
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


def resolve_config_path(explicit: Path | None = None) -> tuple[Path, bool]:
    """Return (path, required). Only an explicitly chosen path is required to exist."""
    if explicit is not None:
        return explicit, True
    env_value = os.getenv(CONFIG_ENV_VAR)
    if env_value:
        return Path(env_value), True
    return DEFAULT_CONFIG_PATH, False


def load_config(path: Path | None = None, *, required: bool = True) -> AppConfig:
    if path is None or not path.exists():
        if required:
            raise ConfigError(f"config file not found: {path}")
        return AppConfig()
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError("config validation failed: top level must be a mapping")

    _validate_config_schema(data)

    tz = data.get("timezone", "UTC")
    try:
        ZoneInfo(tz)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigError(f"unknown timezone: {tz}") from e

    defaults = AppConfig()
    storage_raw = data.get("storage") or {}
    storage = StorageConfig(
        backend=storage_raw.get("backend", defaults.storage.backend),
        path=storage_raw.get("path", defaults.storage.path),
        key=storage_raw.get("key", defaults.storage.key),
    )
    db_raw = data.get("database") or {}
    db = DatabaseConfig(
        host=db_raw.get("host"),
        port=db_raw.get("port"),
        user=db_raw.get("user"),
        password=db_raw.get("password"),
        database=db_raw.get("database"),
        dsn=db_raw.get("dsn"),
    )
    return AppConfig(
        storage=storage,
        timezone=tz,
        error_log_dir=data.get("error_log_dir", defaults.error_log_dir),
        database=db,
    )
