"""
Log Search View Module - Main UI orchestration

Handles:
- Main view composition and layout
- Turning panel inputs into search criteria
- Running searches in a background worker
- Pagination, refresh and export
- Event handlers for all UI interactions
"""
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from pydantic import ValidationError
from textual import on, work
from textual.app import ComposeResult
from textual.containers import Container, Horizontal, Vertical
from textual.widgets import Button, DataTable, Input, Label

from logsift.log_analysis import list_log_files, search, stats
from logsift.log_analysis.models import GroupedLogResults, LogSearchCriteria
from .components import (
    LogSearchPanel,
    LogControlPanel,
    LogStatsPanel,
    LogEntryDetailsPanel,
    LogFilesPanel,
)
from .log_table import LogResultsTable

logger = logging.getLogger(__name__)


class LogSearchView(Vertical):
    """
    Search view over a directory of log files

    Features:
    - Date, level, text, exception and file filters
    - Results grouped by file, each group paginated
    - Statistics for the selected date range
    - Entry details with stack traces
    - Export of the current page
    """

    def __init__(
        self,
        log_directory: Path,
        export_directory: Path,
        page_size: int = 20,
        workers: int = 1,
        **kwargs,
    ):
        """
        Initialize the search view

        Args:
            log_directory: Directory containing log files
            export_directory: Where exports are written
            page_size: Entries per file group and page
            workers: Files parsed concurrently per query
        """
        super().__init__(**kwargs)
        self.log_directory = Path(log_directory)
        self.export_directory = Path(export_directory)
        self.page_size = page_size
        self.max_workers = workers

        # State
        self.page = 1
        self.last_params: dict = {}
        self.last_results: Optional[GroupedLogResults] = None

    def compose(self) -> ComposeResult:
        """Compose the search view layout"""
        with Container(id="log-search-controls"):
            with Horizontal(id="log-search-panel-row"):
                yield LogSearchPanel(id="log-search-panel")

            with Horizontal(id="log-control-panel-row"):
                yield LogControlPanel(id="log-control-panel")

        with Horizontal(id="log-search-content"):
            with Vertical(classes="main-panel", id="log-main-panel"):
                yield Label("[bold]Log Entries[/bold]", classes="section-title")
                yield LogResultsTable(id="log-results-table")

            with Vertical(classes="right-panel", id="log-sidebar"):
                yield LogStatsPanel(id="log-stats-panel")
                yield LogEntryDetailsPanel(id="log-entry-details-panel")
                yield LogFilesPanel(id="log-files-panel")

    def on_mount(self) -> None:
        """Run an unfiltered search when the view is mounted"""
        self.run_search(reset_page=True)

    def build_criteria(self) -> Optional[LogSearchCriteria]:
        """
        Build criteria from the search panel

        Returns:
            LogSearchCriteria, or None when the inputs are invalid
        """
        panel = self.query_one("#log-search-panel", LogSearchPanel)
        params = panel.get_params()
        params.update(page=self.page, pageSize=self.page_size)

        try:
            return LogSearchCriteria.model_validate(params)
        except ValidationError as e:
            fields = ", ".join(str(error["loc"][0]) for error in e.errors())
            self.notify(f"Invalid search criteria: {fields}", severity="error")
            return None

    def run_search(self, reset_page: bool = False) -> None:
        """Validate the current inputs and start a background search"""
        if reset_page:
            self.page = 1

        criteria = self.build_criteria()
        if criteria is None:
            return

        self._load_results(criteria)

    @work(exclusive=True, thread=True)
    def _load_results(self, criteria: LogSearchCriteria) -> None:
        """
        Query the log directory in a background thread

        Args:
            criteria: Validated search criteria
        """
        results = search(self.log_directory, criteria, max_workers=self.max_workers)
        summary = stats(
            self.log_directory,
            criteria.from_date,
            criteria.to_date,
            max_workers=self.max_workers,
        )
        files = list_log_files(self.log_directory)

        # Update UI on main thread
        self.app.call_from_thread(self._update_with_results, criteria, results, summary, files)

    def _update_with_results(self, criteria, results, summary, files) -> None:
        """Update every panel with the results of a query (main thread)"""
        self.last_results = results

        table = self.query_one("#log-results-table", LogResultsTable)
        table.show_results(results)

        controls = self.query_one("#log-control-panel", LogControlPanel)
        controls.page = criteria.page
        controls.total_count = results.total_count

        self.query_one("#log-stats-panel", LogStatsPanel).show_stats(summary)
        self.query_one("#log-files-panel", LogFilesPanel).show_files(files, str(self.log_directory))
        self.query_one("#log-entry-details-panel", LogEntryDetailsPanel).clear_details()

    # Event Handlers

    @on(Button.Pressed, "#search-btn")
    @on(Input.Submitted)
    def handle_search(self) -> None:
        """Start a new search from page one"""
        self.run_search(reset_page=True)

    @on(Button.Pressed, "#clear-search-btn")
    def handle_clear_search(self) -> None:
        """Reset all criteria and search again"""
        self.query_one("#log-search-panel", LogSearchPanel).clear_inputs()
        self.run_search(reset_page=True)

    @on(Button.Pressed, "#refresh-btn")
    def handle_refresh(self) -> None:
        """Re-run the current page"""
        self.run_search()
        self.notify("Results refreshed", severity="information")

    @on(Button.Pressed, "#next-page-btn")
    def handle_next_page(self) -> None:
        self.change_page(1)

    @on(Button.Pressed, "#prev-page-btn")
    def handle_prev_page(self) -> None:
        self.change_page(-1)

    def change_page(self, delta: int) -> None:
        """Move every file group to another page"""
        table = self.query_one("#log-results-table", LogResultsTable)
        largest_group = max(table.get_group_sizes().values(), default=0)

        if delta > 0 and largest_group < self.page_size:
            self.notify("Already on the last page", severity="warning")
            return
        if self.page + delta < 1:
            return

        self.page += delta
        self.run_search()

    @on(Button.Pressed, "#export-btn")
    def handle_export(self) -> None:
        """Handle export button"""
        self.export_results()

    @on(DataTable.RowHighlighted, "#log-results-table")
    def handle_row_highlighted(self) -> None:
        """Show the highlighted entry in the details panel"""
        table = self.query_one("#log-results-table", LogResultsTable)
        entry = table.get_selected_entry()

        if entry:
            details_panel = self.query_one("#log-entry-details-panel", LogEntryDetailsPanel)
            details_panel.show_entry_details(entry)

    def export_results(self) -> Optional[Path]:
        """
        Export the current page of results to a JSON file

        Returns:
            Path of the export file, or None when nothing was exported
        """
        if not self.last_results or not self.last_results.results:
            self.notify("No log entries to export", severity="warning")
            return None

        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        export_file = self.export_directory / f"export_{timestamp}.json"

        try:
            self.export_directory.mkdir(parents=True, exist_ok=True)
            export_data = {
                'exported_at': datetime.now().isoformat(),
                'log_directory': str(self.log_directory),
                'page': self.page,
                'page_size': self.page_size,
                **self.last_results.to_dict(),
            }

            with open(export_file, 'w', encoding='utf-8') as f:
                json.dump(export_data, f, indent=2, default=str)

        except OSError as e:
            logger.error(f"Export to {export_file} failed: {e}")
            self.notify(f"Export failed: {e}", severity="error")
            return None

        logger.info(f"Exported search results to {export_file}")
        self.notify(f"Exported results to {export_file.name}", severity="information")
        return export_file
