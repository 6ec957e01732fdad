"""
Format Registry - Supported log dialects and format detection

Each dialect is a pair of patterns: one that recognises the first line of a
new entry, and one that pulls (timestamp, level, message) out of that line.
"""
import re
from enum import Enum
from typing import NamedTuple, Iterable, Mapping
from types import MappingProxyType


class LogFormatName(Enum):
    """Closed set of supported log dialects"""
    STANDARD = "standard"
    SERILOG = "serilog"
    NLOG = "nlog"
    LOG4NET = "log4net"


class LogFormat(NamedTuple):
    """A named log dialect"""
    name: LogFormatName
    start_pattern: re.Pattern
    parse_pattern: re.Pattern


# Number of leading lines inspected when detecting a file's format
DETECTION_SAMPLE_SIZE = 10

# Registry order is the detection order
LOG_FORMATS: Mapping[LogFormatName, LogFormat] = MappingProxyType({
    # "2024-01-01 10:00:00.123 +02:00 [ERR] Message"
    LogFormatName.STANDARD: LogFormat(
        name=LogFormatName.STANDARD,
        start_pattern=re.compile(
            r'^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\.\d{3}.*\[(ERR|WRN|INF)\]'
        ),
        parse_pattern=re.compile(
            r'^(\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\.\d{3}(?: [+-]\d{2}:\d{2})?)'
            r'.*?\[(ERR|WRN|INF)\](.*)'
        ),
    ),

    # "2024-01-01 10:00:00 Error Message"
    LogFormatName.SERILOG: LogFormat(
        name=LogFormatName.SERILOG,
        start_pattern=re.compile(r'^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2} \w+ '),
        parse_pattern=re.compile(r'^(\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}) (\w+) (.*)'),
    ),

    # "2024-01-01 10:00:00,123 [Error] Message"
    LogFormatName.NLOG: LogFormat(
        name=LogFormatName.NLOG,
        start_pattern=re.compile(r'^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2},\d{3} \['),
        parse_pattern=re.compile(
            r'^(\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2},\d{3}) \[(\w+)\] (.*)'
        ),
    ),

    # "2024-01-01  10:00:00,123  [ERROR]  Message"
    LogFormatName.LOG4NET: LogFormat(
        name=LogFormatName.LOG4NET,
        start_pattern=re.compile(
            r'^\d{4}-\d{2}-\d{2}\s+\d{2}:\d{2}:\d{2},\d{3}\s+\[\w+\]'
        ),
        parse_pattern=re.compile(
            r'^(\d{4}-\d{2}-\d{2}\s+\d{2}:\d{2}:\d{2},\d{3})\s+\[(\w+)\]\s+(.*)'
        ),
    ),
})


def get_format(name: LogFormatName) -> LogFormat:
    """Look up a registered dialect by name"""
    return LOG_FORMATS[name]


def detect_format(sample_lines: Iterable[str]) -> LogFormatName:
    """
    Pick the dialect of a file from its first lines.

    Lines are checked in order against every dialect in registry order; the
    first dialect whose start pattern matches any sampled line wins.
    Falls back to STANDARD when nothing matches.
    """
    for index, line in enumerate(sample_lines):
        if index >= DETECTION_SAMPLE_SIZE:
            break
        for name, log_format in LOG_FORMATS.items():
            if log_format.start_pattern.match(line):
                return name

    return LogFormatName.STANDARD
