# Shared pytest fixtures
from __future__ import annotations

import tempfile
from datetime import date, datetime
from pathlib import Path

import pytest

from jobsite_tracker.logging.init import reset_logging
from jobsite_tracker.models.jobsite import JobSite, Stages

FIXED_TODAY = date(2025, 1, 10)
FIXED_NOW = datetime(2025, 1, 10, 9, 30)


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("JOBSITES_CONFIG", raising=False)
        yield p


@pytest.fixture(autouse=True)
def clean_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def sample_config_yaml() -> str:
    return """storage:
  backend: json
  path: ./data/jobsites.json
  key: jobsites_data
timezone: UTC
error_log_dir: ./logs
database:
  host: localhost
  port: 5432
  user: appuser
  password: secret
  database: appdb
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "jobsites.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def valid_csv() -> str:
    return (
        "jobName,jobType,location,coordinator,contractor,stage1,stage2,stage3,stage4,stage5,dueDate,notes\n"
        "Alpha Tower,Commercial,1 First Ave,Sarah Johnson,BuildRight,true,true,false,false,false,2025-03-01,\n"
        "Beta Homes,Residential,2 Second St,Mike Lee,HomeCo,yes,no,,,,2025-02-01,phase one\n"
    )


def make_job(
    job_id: str,
    name: str = "Job",
    *,
    due_date: str = "2025-02-01",
    flags: tuple[bool, bool, bool, bool, bool] = (False, False, False, False, False),
    coordinator: str = "",
    contractor: str = "",
    location: str = "",
    job_type: str = "Commercial",
) -> JobSite:
    return JobSite(
        id=job_id,
        job_name=name,
        job_type=job_type,
        location=location,
        coordinator=coordinator,
        contractor=contractor,
        due_date=due_date,
        stages=Stages(*flags),
        created_at="2025-01-01",
        updated_at="2025-01-01",
    )


@pytest.fixture()
def job_factory():
    return make_job
