"""
Log Search Package - Search and statistics over a directory of log files

This package provides the interactive front end to the query engine:
- Search by date range, level, message text, exception type and file
- Results grouped by file with per-group pagination
- Aggregate statistics (level counts, top exceptions, top files)
- Entry details including captured stack traces
- Export of the current page (JSON format)

Package Structure:
- view: Main view orchestration (LogSearchView)
- components: UI panels and controls (LogSearchPanel, LogControlPanel, LogStatsPanel, etc.)
- log_table: Results table widget (LogResultsTable)
"""

from .view import LogSearchView

from .components import (
    LogSearchPanel,
    LogControlPanel,
    LogStatsPanel,
    LogEntryDetailsPanel,
    LogFilesPanel,
)
from .log_table import LogResultsTable

__all__ = [
    # Main view
    'LogSearchView',

    # UI components
    'LogSearchPanel',
    'LogControlPanel',
    'LogStatsPanel',
    'LogEntryDetailsPanel',
    'LogFilesPanel',
    'LogResultsTable',
]
