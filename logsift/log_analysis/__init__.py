"""
Log Analysis Package - Log parsing and query engine

This package turns a directory of free-form application log files into
structured entries and answers queries over them:
- Multi-format detection (standard, serilog, nlog, log4net)
- Multi-line entry reconstruction with stack trace capture
- Level normalization to ERR / WRN / INF
- Filtered, grouped, paginated search and aggregate statistics

Package Structure:
- models: Data models (LogEntry, LogLevel, LogSearchCriteria, GroupedLogResults, LogStats)
- formats: Format registry and detection (LogFormatName, LOG_FORMATS, detect_format)
- line_parser: Header line parsing (parse_header_line, map_log_level)
- file_parser: Whole-file parsing (parse_file, EntryAccumulator)
- file_selector: Picking relevant files (select_files, list_log_files)
- query_engine: Search and statistics (search, stats)
"""

from .models import (
    LogLevel,
    LogEntry,
    LogSearchCriteria,
    GroupedLogResults,
    LogStats,
    LogFileInfo,
)
from .formats import LogFormatName, LogFormat, LOG_FORMATS, detect_format
from .line_parser import parse_header_line, map_log_level
from .file_parser import parse_file, parse_lines, EntryAccumulator
from .file_selector import select_files, list_log_files
from .query_engine import search, stats

__all__ = [
    # Data models
    'LogLevel',
    'LogEntry',
    'LogSearchCriteria',
    'GroupedLogResults',
    'LogStats',
    'LogFileInfo',

    # Formats
    'LogFormatName',
    'LogFormat',
    'LOG_FORMATS',
    'detect_format',

    # Parsing
    'parse_header_line',
    'map_log_level',
    'parse_file',
    'parse_lines',
    'EntryAccumulator',

    # Querying
    'select_files',
    'list_log_files',
    'search',
    'stats',
]
