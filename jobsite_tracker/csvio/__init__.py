"""CSV import pipeline: raw spreadsheet text -> validated JobSite records."""

from .dates import normalize_date
from .fields import parse_boolean, parse_csv_line
from .parser import REQUIRED_COLUMNS, STAGE_COLUMN_ALIASES, parse_csv
from .template import generate_csv_template

__all__ = [
    "REQUIRED_COLUMNS",
    "STAGE_COLUMN_ALIASES",
    "generate_csv_template",
    "normalize_date",
    "parse_boolean",
    "parse_csv",
    "parse_csv_line",
]
