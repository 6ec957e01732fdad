"""
LogSift Main Application - Log search UI using Textual
"""
from pathlib import Path
from typing import Optional

from textual.app import App, ComposeResult
from textual.widgets import Header, Footer

from logsift.config import Settings, load_settings
from logsift.UI.views.log_search import LogSearchView


class LogSiftApp(App):
    """Log directory search - Terminal UI Application"""

    TITLE = "LogSift - Log Search"
    CSS_PATH = "logsift.tcss"

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
        ("ctrl+r", "refresh", "Refresh"),
        ("ctrl+n", "next_page", "Next Page"),
        ("ctrl+b", "prev_page", "Previous Page"),
        ("ctrl+e", "export", "Export"),
    ]

    def __init__(self, settings: Optional[Settings] = None, **kwargs):
        super().__init__(**kwargs)
        self.settings = settings or load_settings()

    def compose(self) -> ComposeResult:
        """Compose the main UI layout"""
        yield Header(show_clock=True)
        yield LogSearchView(
            log_directory=Path(self.settings.log_dir),
            export_directory=Path(self.settings.app_log_dir),
            page_size=self.settings.page_size,
            workers=self.settings.workers,
            id="log-search-view",
        )
        yield Footer()

    @property
    def search_view(self) -> LogSearchView:
        return self.query_one("#log-search-view", LogSearchView)

    def action_refresh(self) -> None:
        self.search_view.run_search()

    def action_next_page(self) -> None:
        self.search_view.change_page(1)

    def action_prev_page(self) -> None:
        self.search_view.change_page(-1)

    def action_export(self) -> None:
        self.search_view.export_results()


def run_app(settings: Optional[Settings] = None) -> None:
    """Entry point to run the LogSift application"""
    app = LogSiftApp(settings=settings)
    app.run()


if __name__ == "__main__":
    run_app()
