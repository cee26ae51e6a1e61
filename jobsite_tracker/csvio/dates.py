from __future__ import annotations

import warnings
from datetime import UTC, date, datetime, timedelta
from zoneinfo import ZoneInfo

import pandas as pd

from .fields import trim

"""Date helpers shared by the import pipeline and the derived-data utilities.

Parsing goes through pandas.to_datetime so the usual spreadsheet spellings
(``2024-12-31``, ``12/31/2024``, ``Dec 31 2024``, ISO timestamps) all work.
Timezone-aware values are converted to UTC and made naive, so every instant
handled here is "naive UTC".
"""

__all__ = [
    "DEFAULT_DUE_DAYS",
    "ISO_DATE_FMT",
    "RELATIVE_KEYWORDS",
    "default_due_date",
    "normalize_date",
    "parse_timestamp",
    "today_in",
    "utc_now",
]

ISO_DATE_FMT = "%Y-%m-%d"
DEFAULT_DUE_DAYS = 30

RELATIVE_KEYWORDS = frozenset({"now", "today", "tomorrow", "yesterday"})


def utc_now() -> datetime:
    """Current instant as a naive UTC datetime."""
    return datetime.now(UTC).replace(tzinfo=None)


def today_in(timezone: str = "UTC") -> date:
    """Calendar date "today" in the given IANA timezone."""
    return datetime.now(ZoneInfo(timezone)).date()


def parse_timestamp(value: str | None) -> pd.Timestamp | None:
    """Parse a free-form date string; None when it is blank or not a date.

    Relative keywords pandas understands (``today``, ``now``) are not dates.
    """
    if value is None or not trim(value):
        return None
    text = trim(value)
    if text.lower() in RELATIVE_KEYWORDS:
        return None
    try:
        with warnings.catch_warnings():
            # dayfirst guessing warns once per cell (e.g. "31/12/2024")
            warnings.simplefilter("ignore", UserWarning)
            ts = pd.to_datetime(text, errors="coerce")
    except (ValueError, TypeError, OverflowError):
        return None
    if ts is None or pd.isna(ts):
        return None
    if ts.tzinfo is not None:
        ts = ts.tz_convert("UTC").tz_localize(None)
    return ts


def default_due_date(today: date | None = None) -> str:
    """Due date used when the cell is blank: today + 30 days."""
    base = today or utc_now().date()
    return (base + timedelta(days=DEFAULT_DUE_DAYS)).strftime(ISO_DATE_FMT)


def normalize_date(value: str | None, today: date | None = None) -> str:
    """Normalize a date cell to ``YYYY-MM-DD``.

    Blank -> today + 30 days. Parseable -> reformatted. Otherwise the raw
    input is returned unchanged; this never raises.
    """
    if value is None or not trim(value):
        return default_due_date(today)
    ts = parse_timestamp(value)
    if ts is None:
        return value
    return ts.strftime(ISO_DATE_FMT)
