from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from jobsite_tracker.cli import main as cli_main
from jobsite_tracker.store.backends import StorageError

"""Exit code contract: 0 all success, 2 some files failed, 1 fatal."""


def test_exit_code_all_success(temp_workdir: Path, write_config, valid_csv, capsys):
    (temp_workdir / "a.csv").write_text(valid_csv, encoding="utf-8")
    (temp_workdir / "b.csv").write_text(valid_csv, encoding="utf-8")

    code = cli_main(["import", "a.csv", "b.csv"])

    out = capsys.readouterr().out
    assert code == 0
    assert "SUMMARY files=2/2 success=2 failed=0 rows=4" in out


def test_exit_code_partial_failure(temp_workdir: Path, write_config, valid_csv, capsys):
    (temp_workdir / "good.csv").write_text(valid_csv, encoding="utf-8")
    (temp_workdir / "empty.csv").write_text("", encoding="utf-8")

    code = cli_main(["import", "good.csv", "empty.csv"])

    out = capsys.readouterr().out
    assert code == 2
    assert "SUMMARY files=2/2 success=1 failed=1 rows=2" in out
    assert "ERROR empty.csv: The selected file is empty" in out


def test_exit_code_all_files_failed_is_partial(temp_workdir: Path, write_config, capsys):
    (temp_workdir / "empty.csv").write_text("", encoding="utf-8")
    assert cli_main(["import", "empty.csv"]) == 2


def test_exit_code_missing_file_is_fatal(temp_workdir: Path, write_config, capsys):
    code = cli_main(["import", "nope.csv"])
    out = capsys.readouterr().out
    assert code == 1
    assert "ERROR import: file not found" in out


def test_exit_code_explicit_config_missing(temp_workdir: Path, capsys):
    code = cli_main(["--config", "absent.yml", "stats"])
    out = capsys.readouterr().out
    assert code == 1
    assert "ERROR config:" in out


def test_exit_code_invalid_config(temp_workdir: Path, capsys):
    (temp_workdir / "config" / "jobsites.yml").write_text("storage:\n  backend: mongo\n", encoding="utf-8")
    code = cli_main(["stats"])
    assert code == 1
    assert "ERROR config: config validation failed" in capsys.readouterr().out


def test_exit_code_storage_failure(temp_workdir: Path, write_config, capsys):
    with patch("jobsite_tracker.cli.app.JobSiteRepository.load", side_effect=StorageError("corrupt")):
        code = cli_main(["list"])
    assert code == 1
    assert "ERROR storage: corrupt" in capsys.readouterr().out


def test_usage_error_exits_via_argparse(temp_workdir: Path):
    with pytest.raises(SystemExit) as exc:
        cli_main([])
    assert exc.value.code == 2
