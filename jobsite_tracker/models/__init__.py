"""Domain models for the job-site tracker.

This package contains the record types shared by the CSV import pipeline,
the derived-data utilities, the storage layer and the CLI.
"""

from .config_models import AppConfig, DatabaseConfig, StorageConfig
from .error_record import ErrorRecord
from .jobsite import STAGE_NAMES, JobSite, Stages
from .parse_outcome import ParseErrorKind, ParseFailure, ParseOutcome, ParseSuccess
from .processing_result import FileStat, ImportResult

__all__ = [
    # Configuration models
    "AppConfig",
    "DatabaseConfig",
    "StorageConfig",
    # Records
    "STAGE_NAMES",
    "JobSite",
    "Stages",
    # Import results
    "ErrorRecord",
    "FileStat",
    "ImportResult",
    "ParseErrorKind",
    "ParseFailure",
    "ParseOutcome",
    "ParseSuccess",
]
