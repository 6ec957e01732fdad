"""
Unit tests for search and statistics
"""
from datetime import datetime, timezone
from unittest.mock import patch

import pytest

from logsift.log_analysis.models import LogEntry, LogLevel, LogSearchCriteria, LogStats
from logsift.log_analysis.query_engine import (
    collect_entries,
    group_and_paginate,
    search,
    stats,
    top_counts,
)


def make_entry(hour, source_file=None, level=LogLevel.INF):
    return LogEntry(
        timestamp=datetime(2024, 1, 1, hour, tzinfo=timezone.utc),
        level=level,
        message=f"entry at {hour}",
        source_file=source_file,
    )


@pytest.fixture
def paged_dir(tmp_path, write_log):
    write_log(tmp_path, "a.log", [f"2024-05-01 0{i}:00:00.000 [INF] a{i}" for i in range(5)])
    write_log(tmp_path, "b.log", [f"2024-05-01 1{i}:00:00.000 [WRN] b{i}" for i in range(2)])
    return tmp_path


# --- End to end ---

def test_single_day_search(sample_log_dir):
    criteria = LogSearchCriteria(fromDate="2024-01-01", toDate="2024-01-01")

    grouped = search(sample_log_dir, criteria)

    assert grouped.total_count == 4
    assert list(grouped.results) == ["2024-01-01.log"]
    assert len(grouped.results["2024-01-01.log"]) == 4
    levels = [entry.level for entry in grouped.results["2024-01-01.log"]]
    assert levels.count(LogLevel.ERR) == 3
    assert levels.count(LogLevel.WRN) == 1


def test_results_sorted_newest_first(sample_log_dir):
    grouped = search(sample_log_dir, LogSearchCriteria())

    entries = grouped.results["2024-01-01.log"]
    timestamps = [entry.timestamp for entry in entries]
    assert timestamps == sorted(timestamps, reverse=True)
    # Grouping follows the order of the newest entry
    assert list(grouped.results) == ["2024-01-02.log", "2024-01-01.log"]


def test_source_file_is_stamped_with_file_name(sample_log_dir):
    grouped = search(sample_log_dir, LogSearchCriteria())

    for file_name, entries in grouped.results.items():
        assert all(entry.source_file == file_name for entry in entries)


def test_day_boundaries_are_inclusive(tmp_path, write_log):
    write_log(tmp_path, "boundaries.log", [
        "2023-12-31 23:59:59.999 [INF] before",
        "2024-01-01 00:00:00.000 [INF] first instant",
        "2024-01-01 23:59:59.999 [INF] last instant",
        "2024-01-02 00:00:00.000 [INF] after",
    ])
    criteria = LogSearchCriteria(fromDate="2024-01-01", toDate="2024-01-01")

    grouped = search(tmp_path, criteria)

    assert grouped.total_count == 2
    assert [entry.message for entry in grouped.results["boundaries.log"]] == [
        "last instant",
        "first instant",
    ]


def test_offsets_are_compared_in_utc(tmp_path, write_log):
    write_log(tmp_path, "zones.log", [
        "2024-01-02 01:00:00.000 +02:00 [INF] still the first in UTC",
        "2024-01-01 23:00:00.000 -02:00 [INF] already the second in UTC",
    ])
    criteria = LogSearchCriteria(fromDate="2024-01-01", toDate="2024-01-01")

    grouped = search(tmp_path, criteria)

    assert grouped.total_count == 1
    assert grouped.results["zones.log"][0].message == "still the first in UTC"


def test_inverted_range_is_empty(sample_log_dir):
    criteria = LogSearchCriteria(fromDate="2024-01-02", toDate="2024-01-01")

    grouped = search(sample_log_dir, criteria)

    assert grouped.total_count == 0
    assert grouped.results == {}


def test_missing_directory(tmp_path):
    grouped = search(tmp_path / "nope", LogSearchCriteria())

    assert grouped.total_count == 0
    assert grouped.results == {}


# --- Pagination ---

def test_pagination_is_per_group(paged_dir):
    grouped = search(paged_dir, LogSearchCriteria(page=1, pageSize=2))

    assert grouped.total_count == 7
    assert [entry.message for entry in grouped.results["a.log"]] == ["a4", "a3"]
    assert [entry.message for entry in grouped.results["b.log"]] == ["b1", "b0"]


def test_later_pages(paged_dir):
    second = search(paged_dir, LogSearchCriteria(page=2, pageSize=2))
    third = search(paged_dir, LogSearchCriteria(page=3, pageSize=2))

    assert [entry.message for entry in second.results["a.log"]] == ["a2", "a1"]
    assert second.results["b.log"] == []
    assert [entry.message for entry in third.results["a.log"]] == ["a0"]
    assert third.total_count == 7


def test_page_never_exceeds_page_size(paged_dir):
    for page_size in (1, 2, 3, 10):
        grouped = search(paged_dir, LogSearchCriteria(pageSize=page_size))
        assert all(len(entries) <= page_size for entries in grouped.results.values())
        assert grouped.total_count == 7


def test_group_without_source_file_is_unknown():
    groups = group_and_paginate([make_entry(1), make_entry(2, "x.log")], page=1, page_size=10)

    assert list(groups) == ["unknown", "x.log"]


# --- Filters ---

def test_level_filter(sample_log_dir):
    grouped = search(sample_log_dir, LogSearchCriteria(level="WRN"))

    assert grouped.total_count == 1
    assert grouped.results["2024-01-01.log"][0].message == "Slow response from payment gateway"


def test_search_text_is_case_insensitive(sample_log_dir):
    grouped = search(sample_log_dir, LogSearchCriteria(searchText="HEALTH"))

    assert grouped.total_count == 1
    assert grouped.results["2024-01-02.log"][0].message == "Health check ok"


def test_search_text_covers_continuation_lines(sample_log_dir):
    grouped = search(sample_log_dir, LogSearchCriteria(searchText="orders.run"))

    assert grouped.total_count == 1


def test_exception_type_filter(sample_log_dir):
    grouped = search(sample_log_dir, LogSearchCriteria(exceptionType="invalidoperation"))

    assert grouped.total_count == 2
    assert all(
        entry.exception_type == "System.InvalidOperationException"
        for entry in grouped.results["2024-01-01.log"]
    )


def test_source_file_filter(sample_log_dir):
    grouped = search(sample_log_dir, LogSearchCriteria(sourceFile="01-02"))

    assert grouped.total_count == 2
    assert list(grouped.results) == ["2024-01-02.log"]


def test_filters_combine(sample_log_dir):
    criteria = LogSearchCriteria(level="ERR", searchText="again", fromDate="2024-01-01")

    grouped = search(sample_log_dir, criteria)

    assert grouped.total_count == 1


# --- Statistics ---

def test_stats_over_everything(sample_log_dir):
    summary = stats(sample_log_dir)

    assert summary.total_entries == 6
    assert summary.error_count == 3
    assert summary.warning_count == 1
    assert summary.info_count == 2
    assert summary.common_exceptions == {
        "System.InvalidOperationException": 2,
        "System.TimeoutException": 1,
    }
    assert summary.common_sources == {"2024-01-01.log": 4, "2024-01-02.log": 2}
    assert list(summary.common_sources) == ["2024-01-01.log", "2024-01-02.log"]


def test_stats_with_date_strings(sample_log_dir):
    summary = stats(sample_log_dir, "2024-01-02", "2024-01-02")

    assert summary.total_entries == 2
    assert summary.info_count == 2
    assert summary.common_exceptions == {}


def test_top_counts_tie_break_by_first_occurrence():
    values = ["B", "A", "C", "D", "E", "F"] + ["A"] * 4 + ["B"] * 4 + ["C"] * 2 + ["D", "E", None]

    ranked = top_counts(values)

    assert ranked == {"B": 5, "A": 5, "C": 3, "D": 2, "E": 2}
    assert list(ranked) == ["B", "A", "C", "D", "E"]


# --- Failures and concurrency ---

def test_search_degrades_to_empty_on_error(sample_log_dir):
    with patch("logsift.log_analysis.query_engine.select_files", side_effect=OSError("boom")):
        grouped = search(sample_log_dir, LogSearchCriteria())

    assert grouped.results == {}
    assert grouped.total_count == 0


def test_stats_degrades_to_empty_on_error(sample_log_dir):
    with patch("logsift.log_analysis.query_engine.select_files", side_effect=OSError("boom")):
        summary = stats(sample_log_dir)

    assert summary == LogStats()


def test_parallel_parsing_matches_sequential(sample_log_dir, paged_dir):
    for directory in (sample_log_dir, paged_dir):
        sequential = collect_entries(directory, LogSearchCriteria())
        parallel = collect_entries(directory, LogSearchCriteria(), max_workers=4)

        assert [entry.to_dict() for entry in parallel] == [entry.to_dict() for entry in sequential]

    assert search(paged_dir, LogSearchCriteria(pageSize=2), max_workers=4).total_count == 7
