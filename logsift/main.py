#!/usr/bin/env python3
"""
LogSift - Main Entry Point
Run the terminal UI, or query a log directory from the command line
"""
import argparse
import json
import logging
import sys

from pydantic import ValidationError
from rich.console import Console
from rich.table import Table
from rich.text import Text

from logsift.config import configure_logging, load_settings
from logsift.log_analysis import LogSearchCriteria, list_log_files, search, stats
from logsift.util import format_file_size, format_timestamp

logger = logging.getLogger(__name__)
console = Console()


# ---------------- CLI ----------------

def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="logsift",
        description="LogSift - search and statistics over application log files",
    )
    parser.add_argument("--log-dir", help="Directory of log files (overrides LOGSIFT_LOG_DIR)")

    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("ui", help="Run the terminal UI (default)")

    search_parser = subparsers.add_parser("search", help="Search log entries")
    search_parser.add_argument("--from-date")
    search_parser.add_argument("--to-date")
    search_parser.add_argument("--level", help="ERR, WRN or INF")
    search_parser.add_argument("--search-text")
    search_parser.add_argument("--exception-type")
    search_parser.add_argument("--source-file")
    search_parser.add_argument("--page", type=int, default=1)
    search_parser.add_argument("--page-size", type=int)
    search_parser.add_argument("--json", action="store_true", help="Print JSON instead of tables")

    stats_parser = subparsers.add_parser("stats", help="Show log statistics")
    stats_parser.add_argument("--from-date")
    stats_parser.add_argument("--to-date")
    stats_parser.add_argument("--json", action="store_true", help="Print JSON instead of tables")

    files_parser = subparsers.add_parser("files", help="List log files")
    files_parser.add_argument("--json", action="store_true", help="Print JSON instead of tables")

    return parser.parse_args(argv)


# ---------------- Commands ----------------

def run_search(args, settings) -> int:
    try:
        criteria = LogSearchCriteria(
            from_date=args.from_date,
            to_date=args.to_date,
            level=args.level,
            search_text=args.search_text,
            exception_type=args.exception_type,
            source_file=args.source_file,
            page=args.page,
            page_size=settings.page_size if args.page_size is None else args.page_size,
        )
    except ValidationError as e:
        console.print(f"[red]Invalid search criteria:[/red]\n{e}")
        return 2

    results = search(settings.log_dir, criteria, max_workers=settings.workers)

    if args.json:
        print(json.dumps(results.to_dict(), indent=2))
        return 0

    if not results.results:
        console.print("No log entries found.")
        return 0

    for file_name, entries in results.results.items():
        table = Table(title=file_name, title_justify="left")
        table.add_column("Timestamp")
        table.add_column("Level")
        table.add_column("Exception")
        table.add_column("Message")
        for entry in entries:
            table.add_row(
                format_timestamp(entry.timestamp),
                Text(entry.level.value, style=entry.level.color),
                entry.exception_type or "-",
                Text(entry.message.split("\n", 1)[0]),
            )
        console.print(table)

    console.print(f"Page {criteria.page} | {results.total_count} matching entries")
    return 0


def run_stats(args, settings) -> int:
    try:
        criteria = LogSearchCriteria(from_date=args.from_date, to_date=args.to_date)
    except ValidationError as e:
        console.print(f"[red]Invalid date range:[/red]\n{e}")
        return 2

    summary = stats(settings.log_dir, criteria.from_date, criteria.to_date, max_workers=settings.workers)

    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
        return 0

    table = Table(title="Log Statistics", title_justify="left")
    table.add_column("Metric")
    table.add_column("Count", justify="right")
    table.add_row("Total Entries", str(summary.total_entries))
    table.add_row(Text("Errors", style="red"), str(summary.error_count))
    table.add_row(Text("Warnings", style="yellow"), str(summary.warning_count))
    table.add_row(Text("Info", style="green"), str(summary.info_count))
    console.print(table)

    for title, counts in (
        ("Top Exceptions", summary.common_exceptions),
        ("Top Source Files", summary.common_sources),
    ):
        ranking = Table(title=title, title_justify="left")
        ranking.add_column("Name")
        ranking.add_column("Count", justify="right")
        for name, count in counts.items():
            ranking.add_row(Text(name), str(count))
        console.print(ranking)

    return 0


def run_files(args, settings) -> int:
    files = list_log_files(settings.log_dir)

    if args.json:
        print(json.dumps([info.to_dict() for info in files], indent=2))
        return 0

    table = Table(title=f"Log Files in {settings.log_dir}", title_justify="left")
    table.add_column("Name")
    table.add_column("Size", justify="right")
    table.add_column("Last Modified")
    for info in files:
        table.add_row(Text(info.name), format_file_size(info.size), format_timestamp(info.last_modified))
    console.print(table)
    return 0


# ---------------- Main ----------------

def main(argv=None) -> int:
    args = parse_args(argv)

    overrides = {"log_dir": args.log_dir} if args.log_dir else {}
    settings = load_settings(**overrides)
    configure_logging(settings)
    logger.info(f"Starting LogSift ({args.command or 'ui'}) on {settings.log_dir}")

    if args.command == "search":
        return run_search(args, settings)
    if args.command == "stats":
        return run_stats(args, settings)
    if args.command == "files":
        return run_files(args, settings)

    from logsift.UI import run_app
    run_app(settings)
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\nLogSift terminated by user")
