from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from ..models.error_record import ErrorRecord

"""Import error log: buffered JSON Lines.

- one ErrorRecord per line, fixed key set
- file ``<log_dir>/import-errors-YYYYMMDD-HHMMSS.log`` (UTC), created lazily
  on the first flush that has something to write
- single-threaded use only
"""

__all__ = [
    "ErrorRecord",
    "ErrorLogBuffer",
]

DEFAULT_LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


class ErrorLogBuffer:
    """In-memory buffer for error records. flush() appends them as JSON Lines."""

    def __init__(self, log_dir: Path | str | None = None) -> None:
        self._records: list[ErrorRecord] = []
        self._log_dir = Path(log_dir) if log_dir is not None else DEFAULT_LOGS_DIR
        self._file_path: Path | None = None

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self._log_dir / f"import-errors-{stamp}.log"
        return self._file_path

    @property
    def records(self) -> list[ErrorRecord]:
        return list(self._records)

    def append(self, record: ErrorRecord) -> None:
        self._records.append(record)

    def __len__(self) -> int:
        return len(self._records)

    def flush(self) -> Path | None:
        """Write buffered records; returns the file path, or None if nothing was written."""
        if not self._records:
            return None
        fp = self.file_path
        fp.parent.mkdir(parents=True, exist_ok=True)
        with fp.open("a", encoding="utf-8") as f:
            for r in self._records:
                f.write(r.to_json_line() + "\n")
        self._records.clear()
        return fp
