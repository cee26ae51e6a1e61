from __future__ import annotations

import json
from pathlib import Path

import jsonschema
import pytest

from jobsite_tracker.cli import main as cli_main
from jobsite_tracker.models.error_record import ErrorRecord

"""Error log JSON Lines schema contract."""

SCHEMA_PATH = Path(__file__).parent / "schemas" / "error_log_schema.json"


@pytest.fixture()
def schema() -> dict:
    return json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))


def test_error_log_schema_valid_example(schema):
    record = {
        "timestamp": "2025-01-10T10:12:33Z",
        "file": "sites.csv",
        "row": 4,
        "error_type": "ROW_PARSE_ERROR",
        "message": "Row 4: bad value",
    }
    jsonschema.validate(record, schema)


def test_error_log_schema_rejects_extra_key(schema):
    record = {
        "timestamp": "2025-01-10T10:12:33Z",
        "file": "sites.csv",
        "row": -1,
        "error_type": "MISSING_COLUMNS",
        "message": "Missing required columns: dueDate",
        "extra": "not allowed",
    }
    with pytest.raises(jsonschema.exceptions.ValidationError):
        jsonschema.validate(record, schema)


def test_created_records_match_schema(schema):
    for row in (-1, 2):
        record = json.loads(ErrorRecord.create("a.csv", row, "NO_STAGE_COLUMNS", "x").to_json_line())
        jsonschema.validate(record, schema)


def test_cli_written_error_log_matches_schema(temp_workdir: Path, write_config, schema, capsys):
    (temp_workdir / "missing_cols.csv").write_text("jobName,stage1\nA,true\n", encoding="utf-8")
    (temp_workdir / "no_stages.csv").write_text(
        "jobName,jobType,location,coordinator,contractor,dueDate\nA,B,C,D,E,2025-01-01\n",
        encoding="utf-8",
    )
    (temp_workdir / "short.csv").write_text("jobName\n", encoding="utf-8")

    code = cli_main(["import", "missing_cols.csv", "no_stages.csv", "short.csv"])
    assert code == 2

    logs = list((temp_workdir / "logs").glob("import-errors-*.log"))
    assert len(logs) == 1
    lines = logs[0].read_text(encoding="utf-8").splitlines()
    assert len(lines) == 3
    for raw in lines:
        jsonschema.validate(json.loads(raw), schema)
    types = [json.loads(raw)["error_type"] for raw in lines]
    assert types == ["MISSING_COLUMNS", "NO_STAGE_COLUMNS", "INSUFFICIENT_ROWS"]
