from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal

from .jobsite import JobSite

"""Result models for one CSV import attempt.

parse_csv() never raises for malformed content; it returns either a
ParseSuccess or a ParseFailure so the caller can show a message directly.
"""

__all__ = [
    "ParseErrorKind",
    "ParseFailure",
    "ParseOutcome",
    "ParseSuccess",
]


class ParseErrorKind(Enum):
    """Batch-level failure classification.

    - INSUFFICIENT_ROWS: fewer than 2 non-empty lines (header + 1 data row)
    - MISSING_COLUMNS: one or more required columns absent from the header
    - NO_STAGE_COLUMNS: neither stage naming scheme present
    - NO_VALID_ROWS: every data row was blank or failed to parse
    """
    INSUFFICIENT_ROWS = "insufficient_rows"
    MISSING_COLUMNS = "missing_columns"
    NO_STAGE_COLUMNS = "no_stage_columns"
    NO_VALID_ROWS = "no_valid_rows"

    @property
    def error_type(self) -> str:
        """UPPER_SNAKE label used in the error log."""
        return self.name


@dataclass(frozen=True)
class ParseSuccess:
    records: list[JobSite]
    rows_processed: int
    row_errors: list[str] = field(default_factory=list)  # dropped rows (diagnostic only)
    success: Literal[True] = True


@dataclass(frozen=True)
class ParseFailure:
    kind: ParseErrorKind
    error: str  # short user-facing message
    details: str | None = None
    row_errors: list[str] = field(default_factory=list)
    success: Literal[False] = False


ParseOutcome = ParseSuccess | ParseFailure
