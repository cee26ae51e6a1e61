from __future__ import annotations

import logging
import time
from datetime import date

from ..models.jobsite import STAGE_COUNT, JobSite, Stages
from ..models.parse_outcome import ParseErrorKind, ParseFailure, ParseOutcome, ParseSuccess
from .dates import ISO_DATE_FMT, normalize_date, utc_now
from .fields import parse_boolean, parse_csv_line, split_lines, trim

"""CSV -> JobSite import pipeline.

parse_csv() turns a raw spreadsheet export into JobSite records:

1. split lines, drop blanks (need header + >=1 data row)
2. parse header, build case-insensitive column lookup (last duplicate wins)
3. validate required columns, then stage columns (either naming scheme)
4. build one JobSite per non-blank row; bad rows are collected, not fatal
5. succeed if at least one record was produced

Column validation is all-or-nothing and happens before any row is read.
"""

__all__ = [
    "REQUIRED_COLUMNS",
    "STAGE_COLUMN_ALIASES",
    "parse_csv",
]

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS: tuple[str, ...] = (
    "jobName",
    "jobType",
    "location",
    "coordinator",
    "contractor",
    "dueDate",
)

# (column alias, 0-based stage slot), applied in this order for every row.
# Semantic names come last, so they win over stageN when both are filled in.
STAGE_COLUMN_ALIASES: tuple[tuple[str, int], ...] = (
    ("stage1", 0),
    ("stage2", 1),
    ("stage3", 2),
    ("stage4", 3),
    ("stage5", 4),
    ("planning", 0),
    ("foundation", 1),
    ("construction", 2),
    ("finishing", 3),
    ("inspection", 4),
)

DEFAULT_JOB_TYPE = "Commercial"

_STAGE_SCHEMES_HINT = "stage1-5 or planning/foundation/construction/finishing/inspection"


def _build_column_map(headers: list[str]) -> dict[str, int]:
    column_map: dict[str, int] = {}
    for index, header in enumerate(headers):
        column_map[trim(header).lower()] = index  # 後勝ち (duplicate -> later index)
    return column_map


def _column_value(values: list[str], column_map: dict[str, int], name: str) -> str:
    index = column_map.get(name.lower())
    if index is None or index >= len(values):
        return ""
    return values[index]


def _build_stages(values: list[str], column_map: dict[str, int]) -> Stages:
    stages = Stages()
    for alias, slot in STAGE_COLUMN_ALIASES:
        raw = _column_value(values, column_map, alias)
        if raw != "":
            stages = stages.with_slot(slot, parse_boolean(raw))
    return stages


def _build_job_site(
    values: list[str],
    column_map: dict[str, int],
    row_index: int,
    id_seed: str,
    today: date,
) -> JobSite:
    stamp = today.strftime(ISO_DATE_FMT)
    return JobSite(
        id=f"imported-{id_seed}-{row_index}",
        job_name=_column_value(values, column_map, "jobName") or f"Job {row_index}",
        job_type=_column_value(values, column_map, "jobType") or DEFAULT_JOB_TYPE,
        location=_column_value(values, column_map, "location"),
        coordinator=_column_value(values, column_map, "coordinator"),
        contractor=_column_value(values, column_map, "contractor"),
        due_date=normalize_date(_column_value(values, column_map, "dueDate"), today),
        notes=_column_value(values, column_map, "notes"),
        stages=_build_stages(values, column_map),
        created_at=stamp,
        updated_at=stamp,
    )


def parse_csv(raw_text: str, *, today: date | None = None, id_seed: str | None = None) -> ParseOutcome:
    """Parse raw CSV text into JobSite records.

    Parameters
    ----------
    raw_text: whole file content (UTF-8 decoded)
    today: import date used for createdAt/updatedAt and the blank dueDate
        default (None -> current UTC date)
    id_seed: prefix making ids unique across batches (None -> epoch millis)

    Returns
    -------
    ParseSuccess with the records in input order, or ParseFailure describing
    why the whole batch was rejected.
    """
    today = today or utc_now().date()
    id_seed = id_seed or str(int(time.time() * 1000))

    lines = split_lines(raw_text)
    logger.debug(f"csv: {len(raw_text)} chars, {len(lines)} non-empty lines")

    if len(lines) < 2:
        logger.warning(f"csv: not enough lines ({len(lines)})")
        return ParseFailure(
            kind=ParseErrorKind.INSUFFICIENT_ROWS,
            error="CSV file must contain at least a header row and one data row",
            details=f"Found {len(lines)} lines",
        )

    headers = parse_csv_line(lines[0])
    logger.debug(f"csv: headers={headers}")
    found = f"Found columns: {', '.join(headers)}"
    lowered = {h.lower() for h in headers}

    missing = [col for col in REQUIRED_COLUMNS if col.lower() not in lowered]
    if missing:
        logger.warning(f"csv: missing columns {missing}")
        return ParseFailure(
            kind=ParseErrorKind.MISSING_COLUMNS,
            error=f"Missing required columns: {', '.join(missing)}",
            details=found,
        )

    if not any(alias in lowered for alias, _ in STAGE_COLUMN_ALIASES):
        logger.warning("csv: no stage columns")
        return ParseFailure(
            kind=ParseErrorKind.NO_STAGE_COLUMNS,
            error=f"CSV must contain at least one stage column ({_STAGE_SCHEMES_HINT})",
            details=found,
        )

    column_map = _build_column_map(headers)

    records: list[JobSite] = []
    errors: list[str] = []
    for row_index in range(1, len(lines)):
        try:
            values = parse_csv_line(lines[row_index])
            if not any(trim(v) for v in values):
                logger.debug(f"csv: skipping empty row {row_index}")
                continue
            job_site = _build_job_site(values, column_map, row_index, id_seed, today)
        except (ValueError, TypeError, IndexError) as e:
            message = f"Row {row_index + 1}: {e}"
            logger.warning(f"csv: {message}")
            errors.append(message)
            continue
        logger.debug(
            f"csv: row {row_index} -> {job_site.job_name} "
            f"stages={job_site.stages.completed_count()}/{STAGE_COUNT}"
        )
        records.append(job_site)

    if not records:
        logger.warning("csv: no valid job sites found")
        return ParseFailure(
            kind=ParseErrorKind.NO_VALID_ROWS,
            error="\n".join(errors) if errors else "No valid data rows found",
            details=f"Processed {len(lines) - 1} data rows",
            row_errors=errors,
        )

    logger.debug(f"csv: parsed {len(records)} job sites")
    return ParseSuccess(records=records, rows_processed=len(records), row_errors=errors)
