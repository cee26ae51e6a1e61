from __future__ import annotations

import os
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import psycopg2

from ..models.config_models import DatabaseConfig
from .backends import StorageError

"""PostgreSQL connection handling for the postgres storage backend.

Resolution order for connection parameters:
    1. DATABASE_URL / PGDSN (whole DSN), else config ``database.dsn``
    2. PGHOST / PGPORT / PGUSER / PGPASSWORD / PGDATABASE
    3. the config ``database`` section, then libpq-style defaults
``.env`` is loaded by the CLI before this runs, so its values count as (1)/(2).
"""

__all__ = [
    "build_dsn",
    "postgres_cursor",
]


def build_dsn(db_cfg: DatabaseConfig) -> str:
    dsn = os.getenv("DATABASE_URL") or os.getenv("PGDSN") or db_cfg.dsn
    if dsn:
        return dsn
    host = os.getenv("PGHOST", db_cfg.host or "localhost")
    port = os.getenv("PGPORT", str(db_cfg.port) if db_cfg.port else "5432")
    user = os.getenv("PGUSER", db_cfg.user or "postgres")
    password = os.getenv("PGPASSWORD", db_cfg.password or "")
    database = os.getenv("PGDATABASE", db_cfg.database or "postgres")
    dsn = f"host={host} port={port} user={user} dbname={database}"
    if password:
        dsn += f" password={password}"
    return dsn


@contextmanager
def postgres_cursor(db_cfg: DatabaseConfig) -> Iterator[Any]:
    """Yield a cursor inside one transaction: commit on success, rollback on error."""
    try:
        conn = psycopg2.connect(build_dsn(db_cfg))
    except psycopg2.Error as e:
        raise StorageError(f"database connection failed: {e}") from e
    try:
        with conn.cursor() as cur:
            yield cur
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()
