from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

"""Import result models for the job-site tracker.

ImportResult aggregates one `import` run over several CSV files and feeds
the SUMMARY output line; FileStat keeps the per-file detail.
"""


@dataclass(frozen=True)
class FileStat:
    """Per-file import statistics."""
    file_name: str
    status: str  # success/failed
    imported_rows: int  # 成功時行数
    elapsed_seconds: float
    dropped_rows: int = 0  # rows excluded by row-level parse errors
    error: str | None = None  # failure summary shown to the user


@dataclass(frozen=True)
class ImportResult:
    """Aggregated results and summary metrics for one import run."""
    success_files: int
    failed_files: int
    total_imported_rows: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float  # end - start
    throughput_rows_per_sec: float  # total_imported / elapsed
    file_stats: list[FileStat] | None = None

    @property
    def total_files(self) -> int:
        return self.success_files + self.failed_files
