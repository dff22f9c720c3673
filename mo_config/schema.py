"""
Transaction configuration schema.

Frozen dataclasses the YAML loader parses into.  Defaults here are the
values used when a key is absent from the file.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class DatabaseConfig:
    """Connection settings for the order-header store."""

    url: str = "sqlite:///mo_kernel.db"
    echo: bool = False
    pool_size: int = 20
    max_overflow: int = 10
    pool_timeout: int = 30


@dataclass(frozen=True)
class StoreConfig:
    """Lock policy of the store."""

    # True: fail at once if another transaction holds the row lock
    lock_nowait: bool = False


@dataclass(frozen=True)
class ResolutionConfig:
    """Warehouse resolution behaviour."""

    # True: an empty lookup result passes through as an empty facility
    allow_empty_facility: bool = False


@dataclass(frozen=True)
class LoggingConfig:
    level: str = "INFO"


@dataclass(frozen=True)
class TransactionConfig:
    """Root configuration for the documents-printed transaction."""

    config_id: str = "default"
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    store: StoreConfig = field(default_factory=StoreConfig)
    resolution: ResolutionConfig = field(default_factory=ResolutionConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
