"""pyps - interactive snapshot viewer built on Textual."""

from textual.app import App, ComposeResult
from textual.containers import Container
from textual.widgets import DataTable, Footer, Static

from pyps.config import PsConfig
from pyps.errors import PypsError
from pyps.models import ProcessTable
from pyps.render import (
    DEFAULT_COLUMNS,
    USER_COLUMNS,
    Column,
    Selection,
    own_terminal,
    select,
)
from pyps.table import ProcessTableBuilder


class SnapshotHeader(Static):
    """Header line summarizing the current snapshot."""

    DEFAULT_CSS = """
    SnapshotHeader {
        height: auto;
        padding: 0 1;
        background: $surface;
    }
    """

    def show(self, shown: int, total: int, selection: Selection, long_lines: bool) -> None:
        """Update the summary text."""
        mode = "long" if long_lines else "short"
        self.update(
            f"{shown}/{total} processes  selection: {selection.value}  commands: {mode}"
        )


class ProcessView(Container):
    """Container for the process data table."""

    DEFAULT_CSS = """
    ProcessView {
        height: 1fr;
        border: solid $primary;
    }
    """

    def __init__(self, columns: tuple[Column, ...], *args, **kwargs) -> None:
        """Initialize ProcessView with the columns to display."""
        super().__init__(*args, **kwargs)
        self._columns = columns
        self.shown = 0

    def compose(self) -> ComposeResult:
        """Compose the process table."""
        yield DataTable(id="process-table")

    def on_mount(self) -> None:
        """Add the columns when mounted."""
        self._table()

    def _table(self) -> DataTable:
        """Return the data table, adding its columns on first use."""
        table = self.query_one("#process-table", DataTable)
        if not table.columns:
            table.cursor_type = "row"
            for column in self._columns:
                table.add_column(column.header, key=column.header.lower())
        return table

    def show(self, entries) -> None:
        """Replace the table contents with a new set of entries."""
        table = self._table()
        table.clear()
        for entry in entries:
            table.add_row(
                *(column.value(entry) for column in self._columns),
                key=entry.record.pid,
            )
        self.shown = table.row_count


class PyPsApp(App):
    """Browse one process table snapshot at a time."""

    TITLE = "pyps"
    SUB_TITLE = "Process Snapshot"

    CSS = """
    Screen {
        layout: vertical;
    }
    """

    BINDINGS = [
        ("q", "quit", "Quit"),
        ("r", "snapshot", "Refresh"),
        ("x", "toggle_long", "Long commands"),
        ("a", "toggle_all", "All/TTY"),
    ]

    def __init__(
        self,
        config: PsConfig | None = None,
        selection: Selection = Selection.ALL,
        user_columns: bool = False,
    ) -> None:
        """Initialize the PyPsApp."""
        super().__init__()
        self._config = config or PsConfig()
        self._selection = selection
        self._columns = USER_COLUMNS if user_columns else DEFAULT_COLUMNS
        self._own_tty = own_terminal(self._config)
        self.current_table: ProcessTable | None = None

    @property
    def ps_config(self) -> PsConfig:
        """Options used for the next snapshot."""
        return self._config

    @property
    def current_selection(self) -> Selection:
        """Which processes are currently shown."""
        return self._selection

    def compose(self) -> ComposeResult:
        """Compose the application layout."""
        yield SnapshotHeader(id="snapshot-header")
        yield ProcessView(self._columns)
        yield Footer()

    def on_mount(self) -> None:
        """Take the first snapshot."""
        self.call_after_refresh(self.action_snapshot)

    def action_snapshot(self) -> None:
        """Take a new snapshot and display it."""
        try:
            self.current_table = ProcessTableBuilder(self._config).build()
        except PypsError as exc:
            self.notify(str(exc), severity="error")
            return
        self._show()

    def action_toggle_long(self) -> None:
        """Switch between short names and full command lines."""
        self._config = self._config.with_options(
            long_command_lines=not self._config.long_command_lines
        )
        self.action_snapshot()

    def action_toggle_all(self) -> None:
        """Switch between all processes and those on this terminal."""
        if self._selection is Selection.ALL:
            self._selection = Selection.TTY
        else:
            self._selection = Selection.ALL
        self._show()

    def _show(self) -> None:
        """Display the current table under the current selection."""
        if self.current_table is None:
            return
        entries = select(self.current_table, self._selection, self._own_tty)
        self.query_one(ProcessView).show(entries)
        self.query_one("#snapshot-header", SnapshotHeader).show(
            len(entries),
            len(self.current_table),
            self._selection,
            self._config.long_command_lines,
        )
