"""
Log Search Components Module - UI widgets and panels

Handles:
- Search criteria inputs
- Pagination and export controls
- Statistics panel
- Entry details panel
- Log directory file list
"""
from typing import List, Optional

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.reactive import reactive
from textual.widgets import Button, Input, Label, Select, Static

from logsift.log_analysis.models import LogEntry, LogFileInfo, LogLevel, LogStats
from logsift.util import format_file_size, format_timestamp


LEVEL_OPTIONS = [("All levels", "")] + [(level.value, level.value) for level in LogLevel]


class LogSearchPanel(Horizontal):
    """Criteria inputs for searching the log directory"""

    def compose(self) -> ComposeResult:
        """Compose the search panel"""
        yield Label("[bold]Search:[/bold]", classes="control-label")
        yield Input(placeholder="From (YYYY-MM-DD)", id="from-date-input")
        yield Input(placeholder="To (YYYY-MM-DD)", id="to-date-input")
        yield Select(LEVEL_OPTIONS, value="", allow_blank=False, id="level-select")
        yield Input(placeholder="Message text...", id="search-text-input")
        yield Input(placeholder="Exception type...", id="exception-type-input")
        yield Input(placeholder="Source file...", id="source-file-input")
        yield Button("Search", id="search-btn", variant="primary")
        yield Button("Clear", id="clear-search-btn", variant="default")

    def get_params(self) -> dict:
        """Raw criteria values as typed, keyed by their boundary names"""
        return {
            "fromDate": self.query_one("#from-date-input", Input).value,
            "toDate": self.query_one("#to-date-input", Input).value,
            "level": self.query_one("#level-select", Select).value,
            "searchText": self.query_one("#search-text-input", Input).value,
            "exceptionType": self.query_one("#exception-type-input", Input).value,
            "sourceFile": self.query_one("#source-file-input", Input).value,
        }

    def clear_inputs(self) -> None:
        for input_id in (
            "#from-date-input",
            "#to-date-input",
            "#search-text-input",
            "#exception-type-input",
            "#source-file-input",
        ):
            self.query_one(input_id, Input).value = ""
        self.query_one("#level-select", Select).value = ""


class LogControlPanel(Horizontal):
    """Pagination and export controls"""

    page: reactive[int] = reactive(1)
    total_count: reactive[int] = reactive(0)

    def compose(self) -> ComposeResult:
        """Compose the control panel"""
        yield Button("◀ Previous", id="prev-page-btn", variant="default")
        yield Static(self._format_page(), id="page-info")
        yield Button("Next ▶", id="next-page-btn", variant="default")
        yield Button("⟳ Refresh", id="refresh-btn", variant="primary")
        yield Button("💾 Export", id="export-btn", variant="success")

    def _format_page(self) -> str:
        return f"Page {self.page} | {self.total_count} matching entries"

    def watch_page(self, value: int) -> None:
        self._update_display()

    def watch_total_count(self, value: int) -> None:
        self._update_display()

    def _update_display(self) -> None:
        try:
            page_info = self.query_one("#page-info", Static)
        except NoMatches:
            # Not composed yet
            return
        page_info.update(self._format_page())


class LogStatsPanel(Vertical):
    """Display aggregate statistics for the selected date range"""

    def compose(self) -> ComposeResult:
        """Compose the stats panel"""
        yield Label("[bold]Log Statistics[/bold]", classes="panel-title")
        yield Static("No statistics available", id="stats-content")

    def show_stats(self, stats: LogStats) -> None:
        """
        Display statistics

        Args:
            stats: LogStats from the query engine
        """
        self.query_one("#stats-content", Static).update(self.format_stats(stats))

    @staticmethod
    def format_stats(stats: LogStats) -> Text:
        def percentage(part: int) -> int:
            return round(part / stats.total_entries * 100) if stats.total_entries else 0

        text = Text()
        text.append(f"Total Entries: {stats.total_entries}\n")
        text.append(f"Errors: {stats.error_count} ({percentage(stats.error_count)}%)\n", style="red")
        text.append(f"Warnings: {stats.warning_count} ({percentage(stats.warning_count)}%)\n", style="yellow")
        text.append(f"Info: {stats.info_count} ({percentage(stats.info_count)}%)\n", style="green")

        text.append("\nTop Exceptions\n", style="bold")
        if not stats.common_exceptions:
            text.append("  none\n", style="dim")
        for name, count in stats.common_exceptions.items():
            text.append(f"  {name}: {count}\n")

        text.append("\nTop Source Files\n", style="bold")
        if not stats.common_sources:
            text.append("  none\n", style="dim")
        for name, count in stats.common_sources.items():
            text.append(f"  {name}: {count}\n")

        return text


class LogEntryDetailsPanel(Vertical):
    """Detailed view of selected log entry"""

    def compose(self) -> ComposeResult:
        """Compose the details panel"""
        yield Label("[bold]Entry Details[/bold]", classes="panel-title")
        yield Static("Select a log entry to view details", id="entry-details-content")

    def show_entry_details(self, entry: LogEntry) -> None:
        """
        Display details for a log entry

        Args:
            entry: LogEntry object to display
        """
        # Text, not markup: messages routinely contain "[...]"
        details = Text()
        details.append("Timestamp: ", style="bold")
        details.append(f"{format_timestamp(entry.timestamp)} UTC\n")
        details.append("Level: ", style="bold")
        details.append(f"{entry.level.value}\n", style=entry.level.color)
        details.append("File: ", style="bold")
        details.append(f"{entry.source_file or 'N/A'}\n")
        details.append("Exception: ", style="bold")
        details.append(f"{entry.exception_type or 'N/A'}\n")
        details.append("\nMessage:\n", style="bold")
        details.append(f"{entry.message}\n")
        if entry.stack_trace:
            details.append("\nStack Trace:\n", style="bold")
            details.append(entry.stack_trace, style="dim")

        self.query_one("#entry-details-content", Static).update(details)

    def clear_details(self) -> None:
        """Clear the details display"""
        self.query_one("#entry-details-content", Static).update("Select a log entry to view details")


class LogFilesPanel(Vertical):
    """Files currently in the log directory"""

    def compose(self) -> ComposeResult:
        yield Label("[bold]Log Files[/bold]", classes="panel-title")
        yield Static("No log files found", id="files-content")

    def show_files(self, files: List[LogFileInfo], directory: Optional[str] = None) -> None:
        text = Text()
        if directory:
            text.append(f"{directory}\n", style="dim")
        if not files:
            text.append("No log files found")
        for info in files:
            text.append(info.name, style="bold")
            text.append(
                f"  {format_file_size(info.size)} | {format_timestamp(info.last_modified)}\n"
            )
        self.query_one("#files-content", Static).update(text)
