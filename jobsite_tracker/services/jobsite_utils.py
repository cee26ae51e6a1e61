from __future__ import annotations

import math
from collections.abc import Sequence
from datetime import datetime, timedelta
from enum import Enum

from ..csvio.dates import parse_timestamp, utc_now
from ..models.jobsite import STAGE_COUNT, STAGE_NAMES, JobSite, Stages

"""Derived-data utilities over job-site records.

Progress, due-date urgency, search and sort orderings consumed by the CLI
views and the dashboard statistics. Every function is pure: inputs are never
mutated and list results are always new lists.

Due dates are parsed the same way the importer parses them. A due date that
is not a calendar date (kept verbatim by the importer) has no day count,
classifies as FUTURE and sorts after every dated record.
"""

__all__ = [
    "DueDateStatus",
    "ProgressColor",
    "calculate_progress",
    "format_due_date",
    "get_days_until_due",
    "get_due_date_status",
    "get_progress_color",
    "search_job_sites",
    "sort_job_sites_by_due_date",
    "sort_job_sites_by_name",
    "sort_job_sites_by_progress",
    "stage_checklist",
]

_ONE_DAY = timedelta(days=1)

SEARCH_FIELDS: tuple[str, ...] = ("job_name", "job_type", "location", "coordinator", "contractor")

URGENT_DAYS = 7
UPCOMING_DAYS = 30


class ProgressColor(Enum):
    GREEN = "#34C759"
    ORANGE = "#FF9500"
    BLUE = "#007AFF"
    GRAY = "#8E8E93"


class DueDateStatus(Enum):
    OVERDUE = "overdue"
    URGENT = "urgent"
    UPCOMING = "upcoming"
    FUTURE = "future"


def calculate_progress(stages: Stages) -> float:
    """Percentage of completed stages: 0, 20, 40, 60, 80 or 100."""
    return stages.completed_count() * 100 / STAGE_COUNT


def get_progress_color(progress: float) -> ProgressColor:
    if progress == 100:
        return ProgressColor.GREEN
    if progress >= 60:
        return ProgressColor.ORANGE
    if progress >= 20:
        return ProgressColor.BLUE
    return ProgressColor.GRAY


def get_days_until_due(due_date: str, *, now: datetime | None = None) -> int | None:
    """Whole days until ``due_date``, rounded up; negative when past.

    ``now`` is a naive UTC datetime (default: current instant). A date-only
    value means midnight UTC of that day. Returns None when ``due_date`` is
    not a date.
    """
    due = parse_timestamp(due_date)
    if due is None:
        return None
    now = now or utc_now()
    return math.ceil((due.to_pydatetime() - now) / _ONE_DAY)


def get_due_date_status(due_date: str, *, now: datetime | None = None) -> DueDateStatus:
    days = get_days_until_due(due_date, now=now)
    if days is None:
        return DueDateStatus.FUTURE
    if days < 0:
        return DueDateStatus.OVERDUE
    if days <= URGENT_DAYS:
        return DueDateStatus.URGENT
    if days <= UPCOMING_DAYS:
        return DueDateStatus.UPCOMING
    return DueDateStatus.FUTURE


def search_job_sites(job_sites: Sequence[JobSite], query: str) -> list[JobSite]:
    """Case-insensitive substring search over name, type, location, coordinator, contractor.

    A blank query returns every record in the original order.
    """
    if not query.strip():
        return list(job_sites)
    needle = query.lower()
    return [
        job for job in job_sites
        if any(needle in getattr(job, name).lower() for name in SEARCH_FIELDS)
    ]


def sort_job_sites_by_due_date(job_sites: Sequence[JobSite]) -> list[JobSite]:
    """Earliest due date first; ties and undated records keep input order."""
    def key(job: JobSite) -> tuple[int, datetime]:
        due = parse_timestamp(job.due_date)
        if due is None:
            return (1, datetime.min)
        return (0, due.to_pydatetime())

    return sorted(job_sites, key=key)


def sort_job_sites_by_progress(job_sites: Sequence[JobSite]) -> list[JobSite]:
    """Most complete first; ties keep input order."""
    return sorted(job_sites, key=lambda job: calculate_progress(job.stages), reverse=True)


def sort_job_sites_by_name(job_sites: Sequence[JobSite]) -> list[JobSite]:
    return sorted(job_sites, key=lambda job: job.job_name.casefold())


def format_due_date(date_string: str) -> str:
    """Display form, e.g. ``Dec 31, 2024``; raw input when not a date."""
    ts = parse_timestamp(date_string)
    if ts is None:
        return date_string
    return f"{ts.strftime('%b')} {ts.day}, {ts.year}"


def stage_checklist(stages: Stages) -> list[tuple[str, bool]]:
    """(stage name, completed) pairs in fixed stage order."""
    return list(zip(STAGE_NAMES, stages.as_tuple(), strict=True))
