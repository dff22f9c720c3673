"""
mo_config -- single public entrypoint for transaction configuration.

Responsibility:
    Provides the way to obtain configuration at runtime through
    ``get_active_config()``.  Returns a frozen ``TransactionConfig``.

Architecture position:
    Configuration -- sits above ``mo_kernel``.  The kernel never imports
    ``mo_config``; ``mo_config.bridges`` turns a config into wired kernel
    objects.

Failure modes:
    - ``FileNotFoundError`` -- the configuration file does not exist.
    - ``ConfigurationError`` -- a value has the wrong type.

Audit relevance:
    Every successful ``get_active_config()`` call emits a
    ``MO_CONFIG_TRACE`` log entry naming the file, config id and lock
    policy in effect.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from mo_config.loader import apply_env_overrides, load_yaml_file, parse_config
from mo_config.schema import (
    DatabaseConfig,
    LoggingConfig,
    ResolutionConfig,
    StoreConfig,
    TransactionConfig,
)
from mo_kernel.logging_config import get_logger

_logger = get_logger("config")

_DEFAULT_CONFIG_FILE = Path(__file__).parent / "sets" / "default.yaml"


def get_active_config(
    config_file: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> TransactionConfig:
    """
    Load the active transaction configuration.

    Args:
        config_file: Override path to the YAML file.  Defaults to
            mo_config/sets/default.yaml.
        environ: Environment used for overrides.  Defaults to os.environ.

    Returns:
        TransactionConfig with environment overrides applied.
    """
    path = config_file or _DEFAULT_CONFIG_FILE
    config = parse_config(load_yaml_file(path))
    config = apply_env_overrides(config, os.environ if environ is None else environ)

    _logger.info(
        "MO_CONFIG_TRACE",
        extra={
            "trace_type": "MO_CONFIG_TRACE",
            "config_file": str(path),
            "config_id": config.config_id,
            "lock_nowait": config.store.lock_nowait,
            "allow_empty_facility": config.resolution.allow_empty_facility,
        },
    )
    return config


__all__ = [
    "DatabaseConfig",
    "LoggingConfig",
    "ResolutionConfig",
    "StoreConfig",
    "TransactionConfig",
    "get_active_config",
]
