from __future__ import annotations

import json
from pathlib import Path

from jobsite_tracker.cli import main as cli_main
from jobsite_tracker.csvio.template import generate_csv_template
from jobsite_tracker.data.samples import SAMPLE_JOB_SITES

"""End-to-end CLI runs against the JSON file backend."""


def _stored(temp_workdir: Path) -> list[dict]:
    data = json.loads((temp_workdir / "data" / "jobsites.json").read_text(encoding="utf-8"))
    return json.loads(data["jobsites_data"])


def test_template_to_stdout_needs_no_config(temp_workdir: Path, capsys):
    assert cli_main(["template"]) == 0
    assert capsys.readouterr().out == generate_csv_template() + "\n"


def test_template_file_round_trips_through_import(temp_workdir: Path, write_config, capsys):
    assert cli_main(["template", "-o", "out/template.csv"]) == 0
    assert (temp_workdir / "out" / "template.csv").exists()

    assert cli_main(["import", "out/template.csv"]) == 0
    stored = _stored(temp_workdir)
    assert len(stored) == len(SAMPLE_JOB_SITES) + 1
    imported = stored[-1]
    assert imported["jobName"] == "Downtown Office Complex"
    assert imported["location"] == "123 Main St, Downtown"
    assert imported["dueDate"] == "2024-12-31"
    assert imported["stages"] == {
        "stage1": True,
        "stage2": True,
        "stage3": False,
        "stage4": False,
        "stage5": False,
    }
    assert imported["id"].startswith("imported-")


def test_import_without_config_file_uses_defaults(temp_workdir: Path, valid_csv, capsys):
    (temp_workdir / "sites.csv").write_text(valid_csv, encoding="utf-8")
    assert cli_main(["import", "sites.csv"]) == 0
    out = capsys.readouterr().out
    assert f"INFO total job sites: {len(SAMPLE_JOB_SITES) + 2} (was {len(SAMPLE_JOB_SITES)})" in out
    assert (temp_workdir / "data" / "jobsites.json").exists()


def test_list_search_and_sort(temp_workdir: Path, write_config, valid_csv, capsys):
    (temp_workdir / "sites.csv").write_text(valid_csv, encoding="utf-8")
    cli_main(["import", "sites.csv"])
    capsys.readouterr()

    assert cli_main(["list", "--search", "beta homes", "--sort", "name"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("1 project\n")
    assert "Beta Homes" in out
    assert "Alpha Tower" not in out

    assert cli_main(["list", "--search", "no such site"]) == 0
    assert capsys.readouterr().out == "0 projects\n"


def test_list_sort_by_name_orders_rows(temp_workdir: Path, write_config, capsys):
    assert cli_main(["list", "--sort", "name"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == f"{len(SAMPLE_JOB_SITES)} projects"
    names = sorted(j.job_name for j in SAMPLE_JOB_SITES)
    positions = [next(i for i, line in enumerate(out) if name in line) for name in names]
    assert positions == sorted(positions)


def test_stats_reports_counters(temp_workdir: Path, write_config, capsys):
    assert cli_main(["stats"]) == 0
    out = capsys.readouterr().out.splitlines()
    keys = [line.split("=", 1)[0] for line in out]
    assert keys == [
        "total_jobs",
        "completed",
        "in_progress",
        "not_started",
        "overdue",
        "due_within_7_days",
        "average_progress",
    ]
    assert out[0] == f"total_jobs={len(SAMPLE_JOB_SITES)}"


def test_reset_restores_sample_data(temp_workdir: Path, write_config, valid_csv, capsys):
    (temp_workdir / "sites.csv").write_text(valid_csv, encoding="utf-8")
    cli_main(["import", "sites.csv"])
    assert len(_stored(temp_workdir)) == len(SAMPLE_JOB_SITES) + 2

    assert cli_main(["reset"]) == 0
    assert [r["id"] for r in _stored(temp_workdir)] == [j.id for j in SAMPLE_JOB_SITES]


def test_reset_recovers_corrupted_storage(temp_workdir: Path, write_config, capsys):
    (temp_workdir / "data" / "jobsites.json").write_text(
        json.dumps({"jobsites_data": "not json"}), encoding="utf-8"
    )
    assert cli_main(["list"]) == 1
    assert cli_main(["reset"]) == 0
    assert cli_main(["list"]) == 0


def test_env_var_selects_config(temp_workdir: Path, monkeypatch, valid_csv, capsys):
    alt = temp_workdir / "alt.yml"
    alt.write_text("storage:\n  path: ./data/alt.json\n  key: alt\n", encoding="utf-8")
    monkeypatch.setenv("JOBSITES_CONFIG", str(alt))
    (temp_workdir / "sites.csv").write_text(valid_csv, encoding="utf-8")

    assert cli_main(["import", "sites.csv"]) == 0
    data = json.loads((temp_workdir / "data" / "alt.json").read_text(encoding="utf-8"))
    assert list(data) == ["alt"]


def test_show_prints_details_and_stage_checklist(temp_workdir: Path, write_config, capsys):
    assert cli_main(["show", "sample-1"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "Downtown Office Complex (Commercial)"
    assert "location=123 Main St, Downtown" in out
    assert any(line.startswith("due=Dec 31, 2025 (") for line in out)
    assert "progress=40%" in out
    stages = out[out.index("stages:") + 1 : out.index("stages:") + 6]
    assert stages == [
        "  [x] Planning",
        "  [x] Foundation",
        "  [ ] Construction",
        "  [ ] Finishing",
        "  [ ] Inspection",
    ]
    assert out[-1] == "created=2025-01-15 updated=2025-01-15"


def test_show_imported_job_with_unparsed_due_date(temp_workdir: Path, write_config, capsys):
    (temp_workdir / "sites.csv").write_text(
        "jobName,jobType,location,coordinator,contractor,stage1,dueDate\n"
        "Pending,Renovation,L,C,K,yes,TBD\n",
        encoding="utf-8",
    )
    cli_main(["import", "sites.csv"])
    stored_id = _stored(temp_workdir)[-1]["id"]
    capsys.readouterr()

    assert cli_main(["show", stored_id]) == 0
    out = capsys.readouterr().out.splitlines()
    assert "due=TBD (no due date)" in out
    assert "progress=20%" in out


def test_show_unknown_id_is_fatal(temp_workdir: Path, write_config, capsys):
    assert cli_main(["show", "nope"]) == 1
    assert "ERROR show: job site not found: nope" in capsys.readouterr().out
