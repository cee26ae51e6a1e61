from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Protocol

"""Key-value blob backends for the job-site collection.

The collection is stored as one JSON string under one key. Two backends:
- JsonFileBackend: a local JSON object file ``{key: value}``
- PostgresBackend: table ``jobsite_storage(key TEXT PRIMARY KEY, value TEXT)``
  written through a psycopg2 cursor; the caller owns the connection and the
  transaction boundary.
"""

__all__ = [
    "STORAGE_TABLE",
    "JsonFileBackend",
    "KeyValueBackend",
    "PostgresBackend",
    "StorageError",
]

STORAGE_TABLE = "jobsite_storage"


class StorageError(Exception):
    pass


class KeyValueBackend(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class JsonFileBackend:
    """Key-value slots kept in a single JSON object file."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def _read_all(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"failed reading {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise StorageError(f"unexpected storage format in {self.path}: expected an object")
        return data

    def get(self, key: str) -> str | None:
        value = self._read_all().get(key)
        return None if value is None else str(value)

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
        except OSError as e:
            raise StorageError(f"failed writing {self.path}: {e}") from e


class PostgresBackend:
    """Key-value slots in a PostgreSQL table.

    Any driver error is wrapped in StorageError; the cursor's connection is
    left for the caller to commit or roll back.
    """

    def __init__(self, cursor: Any, table: str = STORAGE_TABLE) -> None:
        if not table.replace("_", "").isalnum():
            raise StorageError(f"invalid table name: {table}")
        self.cursor = cursor
        self.table = table

    def ensure_table(self) -> None:
        self._execute(
            f"CREATE TABLE IF NOT EXISTS {self.table} (key TEXT PRIMARY KEY, value TEXT NOT NULL)"
        )

    def get(self, key: str) -> str | None:
        self._execute(f"SELECT value FROM {self.table} WHERE key = %s", (key,))
        try:
            row = self.cursor.fetchone()
        except Exception as e:
            raise StorageError(f"failed fetching key {key!r}: {e}") from e
        return None if row is None else row[0]

    def set(self, key: str, value: str) -> None:
        self._execute(
            f"INSERT INTO {self.table} (key, value) VALUES (%s, %s) "
            "ON CONFLICT (key) DO UPDATE SET value = EXCLUDED.value",
            (key, value),
        )

    def _execute(self, sql: str, params: tuple[Any, ...] | None = None) -> None:
        try:
            self.cursor.execute(sql, params)
        except Exception as e:
            raise StorageError(str(e)) from e
