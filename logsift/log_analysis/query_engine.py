"""
Query Engine Module - Search and statistics over a log directory

Pipeline:
  select files
    → parse each file
      → stamp entries with their file name
        → filter
          → sort newest first, group by file, paginate each group

Every query re-reads the selected files; nothing is cached between calls.
"""
import logging
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from datetime import date, datetime, time, timezone
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from .file_parser import parse_file
from .file_selector import select_files
from .models import GroupedLogResults, LogEntry, LogLevel, LogSearchCriteria, LogStats

logger = logging.getLogger(__name__)

UNKNOWN_SOURCE = "unknown"
TOP_N = 5


def _parse_and_stamp(file_path: str) -> List[LogEntry]:
    entries = parse_file(file_path)
    file_name = Path(file_path).name
    for entry in entries:
        entry.source_file = file_name
    return entries


def collect_entries(
    directory: Union[str, Path],
    criteria,
    max_workers: int = 1,
) -> List[LogEntry]:
    """
    Parse every relevant file of a directory

    Args:
        directory: Log directory
        criteria: Object with optional ``from_date`` / ``to_date``
        max_workers: Files parsed concurrently (1 = sequential)

    Returns:
        All entries, file by file in selection order
    """
    log_files = select_files(directory, criteria)

    if max_workers > 1 and len(log_files) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            per_file = list(executor.map(_parse_and_stamp, log_files))
    else:
        per_file = [_parse_and_stamp(file_path) for file_path in log_files]

    entries: List[LogEntry] = []
    for file_entries in per_file:
        entries.extend(file_entries)
    return entries


def day_bounds(from_date: Optional[date], to_date: Optional[date]):
    """Inclusive UTC instants covering whole calendar days"""
    start = datetime.combine(from_date, time.min, tzinfo=timezone.utc) if from_date else None
    end = (
        datetime.combine(to_date, time(23, 59, 59, 999000), tzinfo=timezone.utc)
        if to_date else None
    )
    return start, end


def _contains(value: Optional[str], needle: str) -> bool:
    return bool(value) and needle.lower() in value.lower()


def filter_entries(entries: Iterable[LogEntry], criteria: LogSearchCriteria) -> List[LogEntry]:
    """Apply date, level and substring filters from the criteria"""
    start, end = day_bounds(criteria.from_date, criteria.to_date)

    filtered = []
    for entry in entries:
        if start and entry.timestamp < start:
            continue
        if end and entry.timestamp > end:
            continue
        if criteria.level and entry.level != criteria.level:
            continue
        if criteria.search_text and not _contains(entry.message, criteria.search_text):
            continue
        if criteria.exception_type and not _contains(entry.exception_type, criteria.exception_type):
            continue
        if criteria.source_file and not _contains(entry.source_file, criteria.source_file):
            continue
        filtered.append(entry)

    return filtered


def group_and_paginate(entries: Iterable[LogEntry], page: int, page_size: int) -> Dict[str, List[LogEntry]]:
    """
    Group entries by source file and cut the same page out of every group

    The page window is applied to each group on its own, not to the merged list.
    """
    groups: Dict[str, List[LogEntry]] = {}
    for entry in entries:
        groups.setdefault(entry.source_file or UNKNOWN_SOURCE, []).append(entry)

    start = (page - 1) * page_size
    end = start + page_size
    return {name: group[start:end] for name, group in groups.items()}


def top_counts(values: Iterable[Optional[str]], limit: int = TOP_N) -> Dict[str, int]:
    """Most frequent values, ties kept in first-seen order"""
    counter = Counter(value for value in values if value)
    ranked = sorted(counter.items(), key=lambda item: item[1], reverse=True)
    return dict(ranked[:limit])


def search(
    directory: Union[str, Path],
    criteria: LogSearchCriteria,
    max_workers: int = 1,
) -> GroupedLogResults:
    """
    Search a log directory

    Args:
        directory: Log directory
        criteria: Filters and pagination
        max_workers: Files parsed concurrently

    Returns:
        GroupedLogResults; total_count counts every filtered entry before pagination
    """
    try:
        entries = collect_entries(directory, criteria, max_workers=max_workers)
        filtered = filter_entries(entries, criteria)
        filtered.sort(key=lambda entry: entry.timestamp, reverse=True)

        results = group_and_paginate(filtered, criteria.page, criteria.page_size)
        logger.info(
            f"Search in {directory} matched {len(filtered)} entries across {len(results)} files"
        )
        return GroupedLogResults(results=results, total_count=len(filtered))

    except Exception as e:
        logger.exception(f"Error searching logs in {directory}: {e}")
        return GroupedLogResults(results={}, total_count=0)


def stats(
    directory: Union[str, Path],
    from_date: Optional[Union[date, str]] = None,
    to_date: Optional[Union[date, str]] = None,
    max_workers: int = 1,
) -> LogStats:
    """
    Compute aggregate statistics for a log directory

    Args:
        directory: Log directory
        from_date: First day included (date or YYYY-MM-DD)
        to_date: Last day included (date or YYYY-MM-DD)
        max_workers: Files parsed concurrently

    Returns:
        LogStats with level counts and top exception types / source files
    """
    try:
        criteria = LogSearchCriteria(from_date=from_date, to_date=to_date)
        entries = collect_entries(directory, criteria, max_workers=max_workers)
        filtered = filter_entries(entries, criteria)

        level_counts = Counter(entry.level for entry in filtered)
        return LogStats(
            total_entries=len(filtered),
            error_count=level_counts[LogLevel.ERR],
            warning_count=level_counts[LogLevel.WRN],
            info_count=level_counts[LogLevel.INF],
            common_exceptions=top_counts(entry.exception_type for entry in filtered),
            common_sources=top_counts(entry.source_file for entry in filtered),
        )

    except Exception as e:
        logger.exception(f"Error getting log stats for {directory}: {e}")
        return LogStats()
