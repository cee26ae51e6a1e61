"""Persistence for the job-site collection."""

from .backends import JsonFileBackend, KeyValueBackend, PostgresBackend, StorageError
from .repository import JobSiteRepository

__all__ = [
    "JobSiteRepository",
    "JsonFileBackend",
    "KeyValueBackend",
    "PostgresBackend",
    "StorageError",
]
