from __future__ import annotations

import argparse
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from dotenv import load_dotenv

from ..config.loader import ConfigError, load_config, resolve_config_path
from ..csvio.dates import today_in
from ..csvio.template import generate_csv_template
from ..logging.error_log import ErrorLogBuffer
from ..logging.init import get_logger, log_summary, set_debug, setup_logging
from ..models.config_models import AppConfig
from ..services.importer import ImportProcessingError, import_files
from ..services.jobsite_utils import (
    calculate_progress,
    format_due_date,
    get_days_until_due,
    search_job_sites,
    sort_job_sites_by_due_date,
    sort_job_sites_by_name,
    sort_job_sites_by_progress,
    stage_checklist,
)
from ..services.stats import compute_dashboard_stats, job_sites_frame
from ..services.summary import render_summary_line
from ..store.backends import JsonFileBackend, PostgresBackend, StorageError
from ..store.repository import JobSiteRepository

"""CLI entrypoint.

Commands:
- import FILE...   parse CSV files and append the job sites to the store
- template         print (or write) the CSV template
- list             list job sites, with optional search and sort
- show ID          one job site with its stage checklist
- stats            dashboard counters
- reset            restore the sample job sites
"""

EXIT_SUCCESS_ALL = 0
EXIT_PARTIAL_FAILURE = 2
EXIT_FATAL = 1

LIST_COLUMNS = ["job_name", "job_type", "location", "coordinator", "due", "status", "progress"]

_SORTERS = {
    "due": sort_job_sites_by_due_date,
    "progress": sort_job_sites_by_progress,
    "name": sort_job_sites_by_name,
}


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env so its values take precedence over the process environment."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


@contextmanager
def _open_repository(cfg: AppConfig, *, load: bool = True) -> Iterator[JobSiteRepository]:
    """Repository over the configured backend, loaded and ready to use."""
    if cfg.storage.backend == "postgres":
        from ..store.connection import postgres_cursor

        with postgres_cursor(cfg.database) as cur:
            backend = PostgresBackend(cur)
            backend.ensure_table()
            repo = JobSiteRepository(backend, key=cfg.storage.key)
            if load:
                repo.load()
            yield repo
    else:
        repo = JobSiteRepository(JsonFileBackend(cfg.storage.path), key=cfg.storage.key)
        if load:
            repo.load()
        yield repo


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="jobsite-tracker", description="Construction job-site tracker")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--config", type=Path, default=None, help="Path to config YAML")
    sub = p.add_subparsers(dest="command", required=True)

    imp = sub.add_parser("import", help="Import job sites from CSV files")
    imp.add_argument("files", nargs="+", type=Path)

    tpl = sub.add_parser("template", help="Print the CSV import template")
    tpl.add_argument("--output", "-o", type=Path, default=None, help="Write to file instead of stdout")

    lst = sub.add_parser("list", help="List job sites")
    lst.add_argument("--search", "-s", default="", help="Case-insensitive text filter")
    lst.add_argument("--sort", choices=sorted(_SORTERS), default="due")

    show = sub.add_parser("show", help="Show one job site")
    show.add_argument("job_id")

    sub.add_parser("stats", help="Show dashboard statistics")
    sub.add_parser("reset", help="Replace stored job sites with the sample data")
    return p.parse_args(argv)


def _cmd_template(args: argparse.Namespace) -> int:
    template = generate_csv_template()
    if args.output is None:
        print(template)
        return EXIT_SUCCESS_ALL
    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(template + "\n", encoding="utf-8")
    print(f"template written: {args.output}")
    return EXIT_SUCCESS_ALL


def _cmd_import(cfg: AppConfig, args: argparse.Namespace) -> int:
    with _open_repository(cfg) as repo:
        before = len(repo.job_sites)
        result = import_files(
            args.files,
            repo,
            error_log=ErrorLogBuffer(cfg.error_log_dir),
            today=today_in(cfg.timezone),
        )
        after = len(repo.job_sites)

    get_logger().info(f"total job sites: {after} (was {before})")
    summary_line = render_summary_line(result.total_files, result)
    log_summary(summary_line.removeprefix("SUMMARY "))

    if result.failed_files > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


def _cmd_list(cfg: AppConfig, args: argparse.Namespace) -> int:
    with _open_repository(cfg) as repo:
        jobs = search_job_sites(repo.job_sites, args.search)
    jobs = _SORTERS[args.sort](jobs)
    print(f"{len(jobs)} {'project' if len(jobs) == 1 else 'projects'}")
    if jobs:
        df = job_sites_frame(jobs)[LIST_COLUMNS]
        print(df.to_string(index=False))
    return EXIT_SUCCESS_ALL


def _due_text(days: int | None) -> str:
    if days is None:
        return "no due date"
    if days < 0:
        return f"{abs(days)} days overdue"
    if days == 0:
        return "Due today"
    if days == 1:
        return "Due tomorrow"
    return f"{days} days remaining"


def _cmd_show(cfg: AppConfig, args: argparse.Namespace) -> int:
    with _open_repository(cfg) as repo:
        job = next((j for j in repo.job_sites if j.id == args.job_id), None)
    if job is None:
        get_logger().error(f"show: job site not found: {args.job_id}")
        return EXIT_FATAL

    print(f"{job.job_name} ({job.job_type})")
    print(f"location={job.location}")
    print(f"coordinator={job.coordinator}")
    print(f"contractor={job.contractor}")
    print(f"due={format_due_date(job.due_date)} ({_due_text(get_days_until_due(job.due_date))})")
    print(f"progress={calculate_progress(job.stages):.0f}%")
    print("stages:")
    for name, done in stage_checklist(job.stages):
        print(f"  [{'x' if done else ' '}] {name}")
    print(f"notes={job.notes}")
    print(f"created={job.created_at} updated={job.updated_at}")
    return EXIT_SUCCESS_ALL


def _cmd_stats(cfg: AppConfig) -> int:
    with _open_repository(cfg) as repo:
        stats = compute_dashboard_stats(repo.job_sites)
    print(f"total_jobs={stats.total_jobs}")
    print(f"completed={stats.completed_jobs}")
    print(f"in_progress={stats.in_progress_jobs}")
    print(f"not_started={stats.not_started_jobs}")
    print(f"overdue={stats.overdue_jobs}")
    print(f"due_within_7_days={stats.urgent_jobs}")
    print(f"average_progress={stats.average_progress:.1f}")
    return EXIT_SUCCESS_ALL


def _cmd_reset(cfg: AppConfig) -> int:
    with _open_repository(cfg, load=False) as repo:
        repo.clear()
        count = len(repo.job_sites)
    get_logger().info(f"job sites reset to {count} sample records")
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None のときのみシステム引数を読む (空リストはテストからの明示呼び出し)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)

    if args.debug:
        set_debug(True)
        logger.debug("debug mode enabled")

    if args.command == "template":
        return _cmd_template(args)

    _load_env_file(Path(".env"), override=True)
    config_path, required = resolve_config_path(args.config)
    try:
        cfg = load_config(config_path, required=required)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL
    logger.debug(f"storage backend={cfg.storage.backend} key={cfg.storage.key}")

    try:
        if args.command == "import":
            return _cmd_import(cfg, args)
        if args.command == "list":
            return _cmd_list(cfg, args)
        if args.command == "show":
            return _cmd_show(cfg, args)
        if args.command == "stats":
            return _cmd_stats(cfg)
        return _cmd_reset(cfg)
    except ImportProcessingError as e:
        logger.error(f"import: {e}")
        return EXIT_FATAL
    except StorageError as e:
        logger.error(f"storage: {e}")
        return EXIT_FATAL
