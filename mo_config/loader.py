"""
Configuration Loader (``mo_config.loader``).

Responsibility
--------------
Loads a YAML configuration file and parses it into the frozen
dataclasses of ``mo_config.schema``.  Environment overrides are applied
after parsing.  The public runtime entry point is
``mo_config.get_active_config()``.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Wrongly typed or unknown values  -> ``ConfigurationError``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import replace
from pathlib import Path
from typing import Any

import yaml

from mo_config.schema import (
    DatabaseConfig,
    LoggingConfig,
    ResolutionConfig,
    StoreConfig,
    TransactionConfig,
)
from mo_kernel.exceptions import ConfigurationError

ENV_DATABASE_URL = "MO_DATABASE_URL"
ENV_LOG_LEVEL = "MO_LOG_LEVEL"

_LOG_LEVELS = frozenset(logging.getLevelNamesMapping())


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path) as f:
        return yaml.safe_load(f) or {}


def _section(data: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, Mapping):
        raise ConfigurationError(name, "must be a mapping")
    return section


def _bool(section: Mapping[str, Any], key: str, default: bool, path: str) -> bool:
    value = section.get(key, default)
    if not isinstance(value, bool):
        raise ConfigurationError(f"{path}.{key}", f"expected true/false, got {value!r}")
    return value


def _int(section: Mapping[str, Any], key: str, default: int, path: str) -> int:
    value = section.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ConfigurationError(f"{path}.{key}", f"expected a non-negative integer, got {value!r}")
    return value


def parse_log_level(value: Any) -> str:
    level = str(value).strip().upper()
    if level not in _LOG_LEVELS:
        raise ConfigurationError("logging.level", f"unknown level {value!r}")
    return level


def parse_database(data: Mapping[str, Any]) -> DatabaseConfig:
    section = _section(data, "database")
    defaults = DatabaseConfig()
    url = section.get("url", defaults.url)
    if not isinstance(url, str) or not url.strip():
        raise ConfigurationError("database.url", "must be a non-empty string")
    return DatabaseConfig(
        url=url.strip(),
        echo=_bool(section, "echo", defaults.echo, "database"),
        pool_size=_int(section, "pool_size", defaults.pool_size, "database"),
        max_overflow=_int(section, "max_overflow", defaults.max_overflow, "database"),
        pool_timeout=_int(section, "pool_timeout", defaults.pool_timeout, "database"),
    )


def parse_config(data: Mapping[str, Any]) -> TransactionConfig:
    """
    Parse a ``TransactionConfig`` from a dict.

    Absent sections and keys take the schema defaults.

    Raises:
        ConfigurationError: if a value has the wrong type.
    """
    store = _section(data, "store")
    resolution = _section(data, "resolution")
    logging_section = _section(data, "logging")

    return TransactionConfig(
        config_id=str(data.get("config_id", "default")),
        database=parse_database(data),
        store=StoreConfig(
            lock_nowait=_bool(store, "lock_nowait", False, "store"),
        ),
        resolution=ResolutionConfig(
            allow_empty_facility=_bool(
                resolution, "allow_empty_facility", False, "resolution"
            ),
        ),
        logging=LoggingConfig(
            level=parse_log_level(logging_section.get("level", "INFO")),
        ),
    )


def apply_env_overrides(
    config: TransactionConfig, environ: Mapping[str, str]
) -> TransactionConfig:
    """Apply ``MO_DATABASE_URL`` and ``MO_LOG_LEVEL`` when set."""
    url = environ.get(ENV_DATABASE_URL, "").strip()
    if url:
        config = replace(config, database=replace(config.database, url=url))

    level = environ.get(ENV_LOG_LEVEL, "").strip()
    if level:
        config = replace(config, logging=LoggingConfig(level=parse_log_level(level)))

    return config
