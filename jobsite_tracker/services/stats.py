from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime

import pandas as pd

from ..csvio.dates import utc_now
from ..models.jobsite import JobSite
from .jobsite_utils import (
    DueDateStatus,
    calculate_progress,
    format_due_date,
    get_due_date_status,
)

"""Dashboard statistics over the job-site collection.

Records are tabulated into a pandas DataFrame (one row per job site, with the
derived progress and due-date status columns) and the dashboard counters are
computed from that frame.
"""

__all__ = [
    "DashboardStats",
    "compute_dashboard_stats",
    "job_sites_frame",
]

FRAME_COLUMNS: tuple[str, ...] = (
    "id",
    "job_name",
    "job_type",
    "location",
    "coordinator",
    "contractor",
    "due_date",
    "due",
    "progress",
    "status",
)


@dataclass(frozen=True)
class DashboardStats:
    total_jobs: int
    completed_jobs: int  # progress == 100
    in_progress_jobs: int  # 0 < progress < 100
    not_started_jobs: int  # progress == 0
    overdue_jobs: int
    urgent_jobs: int  # due within 7 days
    average_progress: float  # 0.0 when there are no jobs


def job_sites_frame(job_sites: Sequence[JobSite], *, now: datetime | None = None) -> pd.DataFrame:
    """Tabular view of the records with derived columns, in input order."""
    now = now or utc_now()
    rows = [
        {
            "id": job.id,
            "job_name": job.job_name,
            "job_type": job.job_type,
            "location": job.location,
            "coordinator": job.coordinator,
            "contractor": job.contractor,
            "due_date": job.due_date,
            "due": format_due_date(job.due_date),
            "progress": calculate_progress(job.stages),
            "status": get_due_date_status(job.due_date, now=now).value,
        }
        for job in job_sites
    ]
    return pd.DataFrame(rows, columns=list(FRAME_COLUMNS))


def compute_dashboard_stats(job_sites: Sequence[JobSite], *, now: datetime | None = None) -> DashboardStats:
    df = job_sites_frame(job_sites, now=now)
    if df.empty:
        return DashboardStats(0, 0, 0, 0, 0, 0, 0.0)

    progress = df["progress"]
    status = df["status"]
    return DashboardStats(
        total_jobs=len(df),
        completed_jobs=int((progress == 100).sum()),
        in_progress_jobs=int(((progress > 0) & (progress < 100)).sum()),
        not_started_jobs=int((progress == 0).sum()),
        overdue_jobs=int((status == DueDateStatus.OVERDUE.value).sum()),
        urgent_jobs=int((status == DueDateStatus.URGENT.value).sum()),
        average_progress=float(progress.mean()),
    )
