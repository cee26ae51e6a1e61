from __future__ import annotations

from ..models.processing_result import ImportResult

"""SUMMARY line rendering for the import command.

Format:
SUMMARY files={total}/{total} success={success} failed={failed} rows={rows}
elapsed_sec={elapsed} throughput_rps={throughput}
"""


def _format_number(value: float) -> str:
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        # avoid scientific notation for tiny values
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return str(value)


def render_summary_line(total_files: int, result: ImportResult) -> str:
    """Render the SUMMARY line for an import run.

    Examples:
        >>> from datetime import datetime, timezone
        >>> start = datetime(2025, 1, 1, 10, 0, 0, tzinfo=timezone.utc)
        >>> end = datetime(2025, 1, 1, 10, 0, 2, tzinfo=timezone.utc)
        >>> result = ImportResult(
        ...     success_files=1, failed_files=0, total_imported_rows=10,
        ...     start_time=start, end_time=end,
        ...     elapsed_seconds=2.0, throughput_rows_per_sec=5.0
        ... )
        >>> render_summary_line(1, result)
        'SUMMARY files=1/1 success=1 failed=0 rows=10 elapsed_sec=2 throughput_rps=5'
    """
    return (
        f"SUMMARY files={total_files}/{total_files} "
        f"success={result.success_files} "
        f"failed={result.failed_files} "
        f"rows={result.total_imported_rows} "
        f"elapsed_sec={_format_number(result.elapsed_seconds)} "
        f"throughput_rps={_format_number(result.throughput_rows_per_sec)}"
    )
