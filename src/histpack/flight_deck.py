"""Flight Deck - a TUI for running and watching history extractions."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, replace
from datetime import datetime
from pathlib import Path
from typing import Iterator

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal, Vertical
from textual.message import Message
from textual.widgets import (
    Button,
    DataTable,
    DirectoryTree,
    Footer,
    Header,
    Input,
    Label,
    Log,
    ProgressBar,
    Rule,
    Static,
)

from histpack.exceptions import HistpackError
from histpack.extractor import HistoryExtractor
from histpack.models import ExtractionProgress
from histpack.sources import get_source


@dataclass(frozen=True)
class ExtractionStats:
    """Statistics tracked during an extraction run."""

    total_commits: int = 0
    matching_commits: int = 0
    processed_commits: int = 0
    generated_files: int = 0
    current_file: str = ""
    status: str = "idle"
    start_time: datetime | None = None
    end_time: datetime | None = None

    @property
    def elapsed(self) -> str:
        if not self.start_time:
            return "00:00"
        end = self.end_time or datetime.now()
        minutes, seconds = divmod(int((end - self.start_time).total_seconds()), 60)
        return f"{minutes:02d}:{seconds:02d}"

    @property
    def rate(self) -> str:
        if not self.start_time or self.processed_commits == 0:
            return "-- commits/s"
        elapsed = ((self.end_time or datetime.now()) - self.start_time).total_seconds()
        if elapsed == 0:
            return "-- commits/s"
        return f"{self.processed_commits / elapsed:.1f} commits/s"

    @classmethod
    def from_progress(cls, progress: ExtractionProgress) -> ExtractionStats:
        return cls(
            total_commits=progress.total_commits,
            matching_commits=progress.matching_commits,
            processed_commits=progress.processed_commits,
            generated_files=progress.generated_files,
            current_file=progress.current_file_path or "",
            status="complete" if progress.is_complete else "running",
            start_time=progress.start_time,
            end_time=progress.current_time if progress.is_complete else None,
        )


class StatsPanel(Static):
    """Real-time statistics display."""

    def compose(self) -> ComposeResult:
        yield Static(id="stats-content")

    def on_mount(self) -> None:
        self.update_display(ExtractionStats())

    def update_display(self, stats: ExtractionStats) -> None:
        content = self.query_one("#stats-content", Static)
        status_color = {
            "idle": "dim",
            "loading": "yellow",
            "running": "green",
            "complete": "cyan",
            "error": "red",
        }.get(stats.status, "white")

        content.update(f"""[b]STATUS[/b]  [{status_color}]{stats.status.upper()}[/]

[b]TIME[/b]    {stats.elapsed}  {stats.rate}

[b]COMMITS[/b]
  Total       [cyan]{stats.total_commits:,}[/]
  Matching    [blue]{stats.matching_commits:,}[/]
  Processed   [green]{stats.processed_commits:,}[/]

[b]OUTPUT[/b]
  Files       [magenta]{stats.generated_files:,}[/]""")


class CurrentFileDisplay(Static):
    """Display for the part file currently being written."""

    def compose(self) -> ComposeResult:
        yield Static("[dim]Waiting for repository...[/]", id="current-file-content")

    def update_file(self, file: str) -> None:
        content = self.query_one("#current-file-content", Static)
        if file:
            name = Path(file).name
            display = name if len(name) < 50 else "..." + name[-47:]
            content.update(f"[bold cyan]>[/] {display}")
        else:
            content.update("[dim]Waiting for repository...[/]")


class PartFileTable(DataTable):
    """Generated part files and how many commits each holds."""

    def on_mount(self) -> None:
        _, _, self._commits_column = self.add_columns("Part", "File", "Commits")
        self.cursor_type = "row"
        self._counts: dict[str, int] = {}

    def record_commit(self, path: str) -> None:
        """Count a commit written to ``path``, adding a row for new parts."""
        if path not in self._counts:
            self._counts[path] = 0
            self.add_row(str(len(self._counts)), Path(path).name, "0", key=path)
            self.scroll_end()
        self._counts[path] += 1
        self.update_cell(path, self._commits_column, str(self._counts[path]))

    def clear(self, columns: bool = False) -> PartFileTable:
        self._counts = {}
        return super().clear(columns)


class FlightDeck(App):
    """The histpack Flight Deck - extraction console."""

    # Messages for thread-safe communication
    class StatsUpdated(Message):
        def __init__(self, stats: ExtractionStats) -> None:
            self.stats = stats
            super().__init__()

    class LogMessage(Message):
        def __init__(self, message: str) -> None:
            self.message = message
            super().__init__()

    class CommitWritten(Message):
        def __init__(self, path: str) -> None:
            self.path = path
            super().__init__()

    CSS = """
    Screen {
        background: $surface;
    }

    #main-container {
        layout: horizontal;
        height: 100%;
    }

    #left-panel {
        width: 38;
        background: $surface-darken-1;
        border-right: solid $primary-darken-2;
        padding: 1;
    }

    #center-panel {
        width: 1fr;
        padding: 1;
    }

    #right-panel {
        width: 30;
        background: $surface-darken-1;
        border-left: solid $primary-darken-2;
        padding: 1;
    }

    StatsPanel {
        height: auto;
        padding: 1;
        background: $surface-darken-2;
        border: round $primary;
        margin-bottom: 1;
    }

    CurrentFileDisplay {
        height: 3;
        padding: 1;
        background: $boost;
        border: round $secondary;
        margin-bottom: 1;
    }

    #action-buttons {
        layout: horizontal;
        height: 3;
        margin-top: 1;
    }

    #action-buttons Button {
        margin-right: 1;
    }

    PartFileTable {
        height: 1fr;
        border: round $primary-darken-1;
    }

    #progress-bar {
        width: 100%;
        margin-bottom: 1;
    }

    #log-panel {
        height: 12;
        border: round $primary-darken-2;
        background: $surface-darken-2;
    }

    .section-title {
        text-style: bold;
        margin-bottom: 1;
    }

    DirectoryTree {
        height: 100%;
        border: round $primary-darken-1;
        background: $surface-darken-2;
    }
    """

    BINDINGS = [
        Binding("e", "extract", "Extract", show=True),
        Binding("c", "clear", "Clear", show=True),
        Binding("q", "quit", "Quit", show=True),
    ]

    TITLE = "histpack Flight Deck"
    SUB_TITLE = "History Extraction Console"

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Container(id="main-container"):
            with Vertical(id="left-panel"):
                yield Label("MISSION CONTROL", classes="section-title")
                yield StatsPanel()
                yield CurrentFileDisplay()
                yield Rule()
                yield Label("Repository")
                yield Input(placeholder="Path to Git repository...", id="repo-input")
                yield Label("Output directory")
                yield Input(value="history", id="output-input")
                yield Label("Author pattern")
                yield Input(placeholder="name, email or glob...", id="author-input")
                with Horizontal(id="action-buttons"):
                    yield Button("EXTRACT", id="extract-btn", variant="success")
                    yield Button("Clear", id="clear-btn", variant="warning")

            with Vertical(id="center-panel"):
                yield Label("OUTPUT FILES", classes="section-title")
                yield ProgressBar(id="progress-bar", show_eta=False)
                yield PartFileTable(id="part-table")
                yield Rule()
                yield Label("SYSTEM LOG", classes="section-title")
                yield Log(id="log-panel", highlight=True, auto_scroll=True)

            with Vertical(id="right-panel"):
                yield Label("FILE BROWSER", classes="section-title")
                yield DirectoryTree(Path.cwd(), id="dir-tree")

        yield Footer()

    def on_mount(self) -> None:
        self._log("Flight Deck initialized")
        self._log("Pick a repository and author pattern, then press EXTRACT")

    def _log(self, message: str) -> None:
        timestamp = datetime.now().strftime("%H:%M:%S")
        self.query_one("#log-panel", Log).write_line(f"[{timestamp}] {message}")

    # Message handlers for thread-safe updates
    def on_flight_deck_stats_updated(self, event: StatsUpdated) -> None:
        stats = event.stats
        self.query_one(StatsPanel).update_display(stats)
        self.query_one(CurrentFileDisplay).update_file(stats.current_file)
        bar = self.query_one("#progress-bar", ProgressBar)
        bar.update(total=max(stats.matching_commits, 1), progress=stats.processed_commits)

    def on_flight_deck_log_message(self, event: LogMessage) -> None:
        self._log(event.message)

    def on_flight_deck_commit_written(self, event: CommitWritten) -> None:
        self.query_one("#part-table", PartFileTable).record_commit(event.path)

    def on_directory_tree_directory_selected(
        self, event: DirectoryTree.DirectorySelected
    ) -> None:
        self.query_one("#repo-input", Input).value = str(event.path)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "extract-btn":
            self.action_extract()
        elif event.button.id == "clear-btn":
            self.action_clear()

    def action_clear(self) -> None:
        self.query_one(StatsPanel).update_display(ExtractionStats())
        self.query_one(CurrentFileDisplay).update_file("")
        self.query_one("#part-table", PartFileTable).clear()
        self.query_one("#log-panel", Log).clear()
        self.query_one("#progress-bar", ProgressBar).update(progress=0)
        self._log("Cleared - ready for new run")

    def action_extract(self) -> None:
        repo = self.query_one("#repo-input", Input).value.strip()
        output = self.query_one("#output-input", Input).value.strip()
        author = self.query_one("#author-input", Input).value.strip()
        if not repo or not output or not author:
            self._log("[red]ERROR: Repository, output directory and author are required[/]")
            return
        self.run_extraction(repo, output, author)

    @work(exclusive=True, thread=True)
    def run_extraction(self, repo: str, output: str, author: str) -> None:
        """Run the extraction in a background thread."""
        stats = ExtractionStats(status="loading", start_time=datetime.now())
        self.post_message(self.StatsUpdated(stats))
        self.post_message(self.LogMessage(f"Opening repository: {repo}"))

        def on_progress(progress: ExtractionProgress) -> None:
            self.post_message(self.StatsUpdated(ExtractionStats.from_progress(progress)))
            if progress.current_file_path and not progress.is_complete:
                self.post_message(self.CommitWritten(progress.current_file_path))

        try:
            source = get_source(Path(repo))
            if source is None:
                self.post_message(self.StatsUpdated(replace(stats, status="error")))
                self.post_message(self.LogMessage("[red]ERROR: Not a Git repository[/]"))
                return

            with HistoryExtractor(source) as extractor:
                self.post_message(self.LogMessage(f"Source: {source.source_type}"))
                self.post_message(self.LogMessage("[green]Extraction running...[/]"))
                result = extractor.extract(author, output, on_progress)
        except (HistpackError, OSError) as e:
            self.post_message(self.StatsUpdated(replace(stats, status="error")))
            self.post_message(self.LogMessage(f"[red]ERROR: {e}[/]"))
            return

        if not result.has_commits:
            self.post_message(self.LogMessage("No commits matched the author pattern"))
        self.post_message(
            self.LogMessage(
                f"[cyan]COMPLETE: {result.matching_commits} commits -> "
                f"{result.generated_files} files in {output}[/]"
            )
        )


class DeckLogHandler(logging.Handler):
    """Forwards log records to the Flight Deck system log."""

    def __init__(self, app: FlightDeck) -> None:
        super().__init__()
        self.app = app

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.app.post_message(FlightDeck.LogMessage(self.format(record)))
        except Exception:
            self.handleError(record)


@contextmanager
def route_logging(app: FlightDeck) -> Iterator[DeckLogHandler]:
    """Replace the root handlers with a DeckLogHandler while active.

    Anything written to stderr would draw over the TUI.
    """
    root = logging.getLogger()
    saved = root.handlers[:]
    handler = DeckLogHandler(app)
    root.handlers = [handler]
    try:
        yield handler
    finally:
        root.handlers = saved


def main() -> None:
    """Run the Flight Deck TUI."""
    app = FlightDeck()
    with route_logging(app):
        app.run()


if __name__ == "__main__":
    main()
