from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""ErrorRecord model for the import error log.

This module defines the ErrorRecord dataclass used for structured error logging
during CSV imports. It supports row=-1 as a sentinel value for file-level errors
(unreadable file, missing columns, ...) where no single row is at fault.
"""

__all__ = [
    "ErrorRecord",
]


@dataclass(frozen=True)
class ErrorRecord:
    """Structured error record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: CSV filename being imported
        row: Line number among the non-blank lines (1-based). -1 for file-level errors
        error_type: Error classification in UPPER_SNAKE_CASE format
        message: Human-readable description
    """
    timestamp: str  # ISO8601 UTC
    file: str
    row: int  # 行番号。不明な場合 -1 許容
    error_type: str  # UPPER_SNAKE
    message: str

    @staticmethod
    def create(file: str, row: int, error_type: str, message: str) -> ErrorRecord:
        """Create a new ErrorRecord with current UTC timestamp."""
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            file=file,
            row=row,
            error_type=error_type,
            message=message,
        )

    def to_json_line(self) -> str:
        """Serialize ErrorRecord to JSON Lines format (fixed key set)."""
        return json.dumps(asdict(self), ensure_ascii=False)
