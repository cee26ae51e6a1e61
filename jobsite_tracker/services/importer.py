from __future__ import annotations

import logging
import re
import time
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from pathlib import Path

from ..csvio.parser import parse_csv
from ..logging.error_log import ErrorLogBuffer
from ..models.error_record import ErrorRecord
from ..models.jobsite import JobSite
from ..models.parse_outcome import ParseErrorKind, ParseFailure
from ..models.processing_result import FileStat, ImportResult
from ..store.repository import JobSiteRepository
from .progress import ProgressTracker

"""Import orchestration: CSV files on disk -> job-site repository.

For every file: read (UTF-8, BOM tolerated), parse, append the records to the
repository, and record failures in the JSON Lines error log. One bad file
never stops the others; a path that is not a file at all is fatal and is
reported before anything is imported.
"""

__all__ = [
    "ImportProcessingError",
    "import_files",
    "validate_paths",
]

logger = logging.getLogger(__name__)

_ROW_ERROR = re.compile(r"^Row (\d+): (.*)$", re.DOTALL)

EMPTY_FILE_MESSAGE = "The selected file is empty"


class ImportProcessingError(Exception):
    """Fatal import error (bad arguments), as opposed to a per-file failure."""


@dataclass
class _FileOutcome:
    records: list[JobSite] = field(default_factory=list)
    dropped_rows: int = 0
    error: str | None = None

    @property
    def success(self) -> bool:
        return self.error is None


def validate_paths(paths: Sequence[Path]) -> list[Path]:
    """Check every path names an existing regular file.

    Raises:
        ImportProcessingError: no paths, or a path is missing / not a file
    """
    if not paths:
        raise ImportProcessingError("no CSV files given")
    for p in paths:
        if not p.exists():
            raise ImportProcessingError(f"file not found: {p}")
        if not p.is_file():
            raise ImportProcessingError(f"not a file: {p}")
    return list(paths)


def _record_row_errors(file_name: str, row_errors: list[str], error_log: ErrorLogBuffer) -> None:
    for message in row_errors:
        m = _ROW_ERROR.match(message)
        row = int(m.group(1)) if m else -1
        error_log.append(ErrorRecord.create(file_name, row, "ROW_PARSE_ERROR", message))


def _import_single_file(
    file_path: Path,
    error_log: ErrorLogBuffer,
    today: date | None,
    id_seed: str,
) -> _FileOutcome:
    name = file_path.name
    try:
        content = file_path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        error_log.append(ErrorRecord.create(name, -1, "READ_ERROR", str(e)))
        return _FileOutcome(error=f"failed reading file: {e}")

    if not content.strip():
        error_log.append(ErrorRecord.create(name, -1, "EMPTY_FILE", EMPTY_FILE_MESSAGE))
        return _FileOutcome(error=EMPTY_FILE_MESSAGE)

    outcome = parse_csv(content, today=today, id_seed=id_seed)
    _record_row_errors(name, outcome.row_errors, error_log)

    if isinstance(outcome, ParseFailure):
        message = outcome.error if not outcome.details else f"{outcome.error} ({outcome.details})"
        if outcome.kind is not ParseErrorKind.NO_VALID_ROWS or not outcome.row_errors:
            error_log.append(ErrorRecord.create(name, -1, outcome.kind.error_type, message))
        return _FileOutcome(error=outcome.error, dropped_rows=len(outcome.row_errors))

    return _FileOutcome(records=outcome.records, dropped_rows=len(outcome.row_errors))


def import_files(
    paths: Sequence[Path],
    repository: JobSiteRepository,
    *,
    error_log: ErrorLogBuffer | None = None,
    today: date | None = None,
) -> ImportResult:
    """Import CSV files into ``repository``.

    Args:
        paths: CSV files, imported in the given order
        repository: loaded repository; successful files are appended to it
        error_log: buffer receiving file- and row-level errors (flushed here)
        today: import date passed to the parser (None -> current UTC date)

    Returns:
        ImportResult with per-file stats and throughput

    Raises:
        ImportProcessingError: a path is missing or not a file
        StorageError: the repository could not persist the records
    """
    file_paths = validate_paths(paths)
    error_log = error_log if error_log is not None else ErrorLogBuffer()
    start_time = datetime.now(UTC)
    run_seed = str(int(time.time() * 1000))

    file_stats: list[FileStat] = []
    success_count = 0
    failed_count = 0
    total_rows = 0

    try:
        with ProgressTracker(len(file_paths)) as progress:
            for index, file_path in enumerate(file_paths, start=1):
                progress.start_file(file_path)
                file_start = datetime.now(UTC)

                result = _import_single_file(file_path, error_log, today, f"{run_seed}-{index}")
                if result.success:
                    repository.add_job_sites(result.records)
                    success_count += 1
                    total_rows += len(result.records)
                    logger.info(f"{file_path.name}: imported {len(result.records)} job sites")
                    if result.dropped_rows:
                        logger.warning(f"{file_path.name}: {result.dropped_rows} rows skipped (see error log)")
                else:
                    failed_count += 1
                    logger.error(f"{file_path.name}: {result.error}")

                progress.set_postfix(success=success_count, failed=failed_count, rows=total_rows)
                progress.finish_file()

                file_stats.append(
                    FileStat(
                        file_name=file_path.name,
                        status="success" if result.success else "failed",
                        imported_rows=len(result.records),
                        elapsed_seconds=(datetime.now(UTC) - file_start).total_seconds(),
                        dropped_rows=result.dropped_rows,
                        error=result.error,
                    )
                )
    finally:
        # flushed even when a save raises
        written = error_log.flush()
        if written is not None:
            logger.info(f"error log written: {written}")

    end_time = datetime.now(UTC)
    elapsed_seconds = (end_time - start_time).total_seconds()
    throughput_rps = total_rows / elapsed_seconds if elapsed_seconds > 0 else 0.0

    return ImportResult(
        success_files=success_count,
        failed_files=failed_count,
        total_imported_rows=total_rows,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=elapsed_seconds,
        throughput_rows_per_sec=throughput_rps,
        file_stats=file_stats,
    )
