"""
Unit tests for header line parsing
"""
from datetime import datetime, timedelta, timezone

import pytest

from logsift.log_analysis.formats import LogFormatName
from logsift.log_analysis.line_parser import (
    map_log_level,
    parse_header_line,
    parse_header_line_outcome,
    parse_timestamp,
)
from logsift.log_analysis.models import LogLevel


def utc(*args):
    return datetime(*args, tzinfo=timezone.utc)


def assert_recent(timestamp):
    assert abs(datetime.now(timezone.utc) - timestamp) < timedelta(minutes=1)


class TestDialects:
    """One well-formed header line per dialect"""

    def test_standard_with_offset(self):
        entry = parse_header_line(
            "2024-01-01 10:00:00.123 +02:00 [ERR] Something broke  ",
            LogFormatName.STANDARD,
        )
        assert entry.timestamp == utc(2024, 1, 1, 8, 0, 0, 123000)
        assert entry.level == LogLevel.ERR
        assert entry.message == "Something broke"

    def test_standard_without_offset_is_utc(self):
        entry = parse_header_line("2024-01-01 10:00:00.123 [WRN] Disk low", LogFormatName.STANDARD)
        assert entry.timestamp == utc(2024, 1, 1, 10, 0, 0, 123000)
        assert entry.level == LogLevel.WRN
        assert entry.message == "Disk low"

    def test_serilog(self):
        entry = parse_header_line("2024-03-05 14:30:00 Warning Cache miss ratio high", LogFormatName.SERILOG)
        assert entry.timestamp == utc(2024, 3, 5, 14, 30)
        assert entry.level == LogLevel.WRN
        assert entry.message == "Cache miss ratio high"

    def test_nlog_decimal_comma(self):
        entry = parse_header_line("2024-03-05 14:30:00,250 [Fatal] Crash", LogFormatName.NLOG)
        assert entry.timestamp == utc(2024, 3, 5, 14, 30, 0, 250000)
        assert entry.level == LogLevel.ERR
        assert entry.message == "Crash"

    def test_log4net_extra_whitespace(self):
        entry = parse_header_line("2024-03-05  14:30:00,250  [DEBUG]  Verbose details", LogFormatName.LOG4NET)
        assert entry.timestamp == utc(2024, 3, 5, 14, 30, 0, 250000)
        assert entry.level == LogLevel.INF
        assert entry.message == "Verbose details"


@pytest.mark.parametrize("raw, expected", [
    ("ERR", LogLevel.ERR),
    ("ERROR", LogLevel.ERR),
    ("Fatal", LogLevel.ERR),
    ("severe", LogLevel.ERR),
    ("WRN", LogLevel.WRN),
    ("Warning", LogLevel.WRN),
    ("warn", LogLevel.WRN),
    ("INF", LogLevel.INF),
    ("Information", LogLevel.INF),
    ("info", LogLevel.INF),
    ("Debug", LogLevel.INF),
    ("TRACE", LogLevel.INF),
    ("Verbose", LogLevel.INF),
    ("Notice", LogLevel.INF),
])
def test_map_log_level(raw, expected):
    assert map_log_level(raw) == expected


def test_parse_timestamp_unknown_format():
    assert parse_timestamp("yesterday") is None


def test_unmatched_line_uses_defaults():
    outcome = parse_header_line_outcome("garbage line", LogFormatName.STANDARD)

    assert outcome.defaulted
    assert outcome.reason == "no field match"
    assert outcome.entry.level == LogLevel.INF
    assert outcome.entry.message == "garbage line"
    assert_recent(outcome.entry.timestamp)


def test_unparseable_timestamp_keeps_other_fields():
    outcome = parse_header_line_outcome("2024-13-45 10:00:00.123 [ERR] bad clock", LogFormatName.STANDARD)

    assert outcome.reason.startswith("unparseable timestamp")
    assert outcome.entry.level == LogLevel.ERR
    assert outcome.entry.message == "bad clock"
    assert_recent(outcome.entry.timestamp)


def test_empty_message_keeps_raw_line():
    line = "2024-01-01 10:00:00.123 [ERR]"
    outcome = parse_header_line_outcome(line, LogFormatName.STANDARD)

    assert outcome.reason == "empty message"
    assert outcome.entry.message == line
    assert outcome.entry.level == LogLevel.ERR


def test_well_formed_line_is_not_defaulted():
    outcome = parse_header_line_outcome("2024-01-01 10:00:00.123 [INF] ok", LogFormatName.STANDARD)
    assert not outcome.defaulted


class TestExceptionExtraction:
    """Exception type and source reference extraction"""

    def test_windows_path(self):
        entry = parse_header_line(
            r"2024-01-01 10:00:00.123 [ERR] System.InvalidOperationException: Sequence contains "
            r"no elements in C:\src\App\OrderService.cs:line 42",
            LogFormatName.STANDARD,
        )
        assert entry.exception_type == "System.InvalidOperationException"
        assert entry.source_file == "OrderService.cs"

    def test_unix_path(self):
        entry = parse_header_line(
            "2024-01-01 10:00:00,123 [Error] App.PaymentException: declined in /app/src/handler.cs:line 7",
            LogFormatName.NLOG,
        )
        assert entry.exception_type == "App.PaymentException"
        assert entry.source_file == "handler.cs"

    def test_exception_without_dotted_type(self):
        entry = parse_header_line(
            "2024-01-01 10:00:00.123 [ERR] Exception: something odd",
            LogFormatName.STANDARD,
        )
        assert entry.exception_type is None
        assert entry.source_file is None

    def test_no_extraction_without_exception_word(self):
        entry = parse_header_line(
            "2024-01-01 10:00:00.123 [ERR] Failed in /src/a.cs:line 3",
            LogFormatName.STANDARD,
        )
        assert entry.exception_type is None
        assert entry.source_file is None
