"""
Log Table Module - DataTable for displaying grouped search results

Handles:
- One row per entry, grouped by source file
- Color-coded log levels
- Row selection for the details panel
"""
from typing import Dict, List, Optional

from textual.widgets import DataTable
from rich.text import Text

from logsift.log_analysis.models import GroupedLogResults, LogEntry
from logsift.util import format_timestamp


class LogResultsTable(DataTable):
    """
    DataTable for displaying search results

    Entries arrive grouped by file; each group is already paginated by the
    query engine, so the table shows exactly what it is given.
    """

    def __init__(self, **kwargs):
        """Initialize the results table"""
        super().__init__(**kwargs)
        self.entries: List[LogEntry] = []
        self.entry_map: dict = {}  # Maps row_key to LogEntry
        self.max_message_length = 120

    def on_mount(self) -> None:
        """Initialize table columns when mounted"""
        self.cursor_type = "row"
        self.zebra_stripes = True

        self.add_columns(
            "File",
            "Timestamp",
            "Level",
            "Exception",
            "Message"
        )

    def show_results(self, grouped: GroupedLogResults) -> None:
        """
        Replace the table contents with a page of grouped results

        Args:
            grouped: Search results from the query engine
        """
        self.clear_entries()

        for file_name, entries in grouped.results.items():
            for entry in entries:
                row_key = self.add_row(*self._format_entry(file_name, entry))
                self.entry_map[row_key] = entry
                self.entries.append(entry)

    def clear_entries(self) -> None:
        """Clear all entries from the table"""
        self.clear()
        self.entries.clear()
        self.entry_map.clear()

    def _format_entry(self, file_name: str, entry: LogEntry) -> tuple:
        level_text = Text(entry.level.value, style=entry.level.color)

        # First line only, the details panel shows the rest
        message = entry.message.split("\n", 1)[0]
        if len(message) > self.max_message_length:
            message = message[:self.max_message_length - 3] + "..."

        return (
            file_name,
            format_timestamp(entry.timestamp),
            level_text,
            entry.exception_type or "-",
            Text(message),
        )

    def get_selected_entry(self) -> Optional[LogEntry]:
        """
        Get the currently selected log entry

        Returns:
            Selected LogEntry or None
        """
        if self.row_count == 0:
            return None

        row_key = self.coordinate_to_cell_key(self.cursor_coordinate).row_key
        return self.entry_map.get(row_key)

    def get_group_sizes(self) -> Dict[str, int]:
        """Number of rows shown per source file"""
        sizes: Dict[str, int] = {}
        for entry in self.entries:
            name = entry.source_file or "unknown"
            sizes[name] = sizes.get(name, 0) + 1
        return sizes
