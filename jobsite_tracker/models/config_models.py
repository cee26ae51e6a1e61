from __future__ import annotations

from dataclasses import dataclass, field

"""Config dataclasses for the job-site tracker.

These are the typed form of config/jobsites.yml after schema validation and
default application in jobsite_tracker.config.loader.
"""

DEFAULT_STORAGE_PATH = "./data/jobsites.json"
DEFAULT_STORAGE_KEY = "jobsites_data"
DEFAULT_ERROR_LOG_DIR = "./logs"


@dataclass(frozen=True)
class DatabaseConfig:
    """Database connection configuration for the postgres storage backend.

    Used as fallback when environment variables are not set.
    Environment variables take precedence over these values.
    """
    host: str | None = None
    port: int | None = None
    user: str | None = None
    password: str | None = None
    database: str | None = None
    dsn: str | None = None


@dataclass(frozen=True)
class StorageConfig:
    """Where the job-site collection is persisted."""
    backend: str = "json"  # json | postgres
    path: str = DEFAULT_STORAGE_PATH  # JSON file (json backend only)
    key: str = DEFAULT_STORAGE_KEY  # key-value slot holding the collection


@dataclass(frozen=True)
class AppConfig:
    """Root configuration object."""
    storage: StorageConfig = field(default_factory=StorageConfig)
    timezone: str = "UTC"  # IANA name used to compute "today"
    error_log_dir: str = DEFAULT_ERROR_LOG_DIR
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
