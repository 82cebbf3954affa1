"""LeaderboardModal - Modal for viewing the JSONL leaderboard in the terminal."""

import logging
from collections.abc import Mapping, Sequence
from typing import Any, ClassVar

from rich.style import Style
from rich.text import Text
from textual import work
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Center, Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, DataTable, LoadingIndicator, Static

from ranktable.render import export_page
from ranktable.services.config import ViewSettings
from ranktable.services.leaderboard import (
    COLUMNS,
    FALLBACK_ACCESSORS,
    FALLBACK_COLUMNS,
    NUMERIC_COLUMNS,
    PLACEHOLDER,
    LoadError,
    ParseResult,
    Record,
    build_accessors,
    load_records,
    resolve_links,
    sort_records,
)
from ranktable.services.leaderboard.columns import (
    LINK_COLUMN,
    SCALED_COLUMNS,
    Accessor,
    load_failed_row,
    no_data_row,
)
from ranktable.services.leaderboard.fields import display_text, is_blank

_log = logging.getLogger(__name__)

RANK_STYLE = "bold #8BE9FD"
TEAM_STYLE = "bold"
NUMERIC_STYLE = "bold"
SCALED_STYLE = "bold #F1FA8C"
OVERALL_STYLE = "bold #3273dc"
GITHUB_STYLE = "bold #F8F8F2"
HUGGINGFACE_STYLE = "bold #BD93F9"

COLUMN_WIDTHS: dict[str, int] = {
    "Rank": 5,
    "Team": 16,
    "Model": 22,
    "Submission Time": 17,
    "Link": 20,
}
NUMERIC_WIDTH = 8


class LeaderboardModal(ModalScreen[None]):
    """Modal for viewing the leaderboard loaded from a JSONL source.

    Returns None on close (view-only modal).

    Layout:
    +------------------------------------------------------------------+
    |                           Leaderboard                            |
    +------------------------------------------------------------------+
    | Rank | Team  | Model  | EC    | ED    | ... | Overall | Link     |
    |------+-------+--------+-------+-------+-----+---------+----------|
    |  1   | Alpha | gpt-4o | 51.17 | 19.12 | ... | 48.20   | GitHub   |
    | ...                                                              |
    +------------------------------------------------------------------+
    | 12 entries                                 [Export HTML] [Close] |
    +------------------------------------------------------------------+
    """

    DEFAULT_CSS = """
    LeaderboardModal {
        align: center middle;
        background: black 50%;
    }

    LeaderboardModal #container {
        width: 95%;
        height: 90%;
        border: round #BD93F9;
        background: $surface;
        padding: 0 1;
    }

    LeaderboardModal .modal-title {
        width: 100%;
        text-align: center;
        text-style: bold;
        padding: 1 0;
    }

    LeaderboardModal #leaderboard-table {
        height: 1fr;
        display: none;
    }

    LeaderboardModal #buttons {
        height: auto;
        align: right middle;
    }

    LeaderboardModal #status-text {
        width: 1fr;
        color: $text-muted;
    }
    """

    BINDINGS: ClassVar[list[Binding]] = [
        Binding("escape", "close", "Close", show=False),
        Binding("r", "retry", "Reload", show=False),
        Binding("e", "export", "Export HTML", show=False),
    ]

    def __init__(self, settings: ViewSettings | None = None) -> None:
        super().__init__()
        self._settings = settings or ViewSettings()
        self._error: str | None = None

    def compose(self) -> ComposeResult:
        with Vertical(id="container"):
            yield Static(self._settings.page_title, classes="modal-title")

            with Center(id="loading-container"):
                yield LoadingIndicator(id="loading")
                yield Static("Loading leaderboard...", id="loading-text")

            yield DataTable(id="leaderboard-table")

            with Horizontal(id="buttons"):
                yield Static("", id="status-text")
                yield Button("Export HTML", id="export-btn")
                yield Button("Close", id="close-btn", variant="primary")

    def on_mount(self) -> None:
        self._load_leaderboard()

    @work(exclusive=True, thread=True)
    def _load_leaderboard(self) -> None:
        try:
            result = load_records(self._settings.data_source, timeout=self._settings.timeout)
            self.app.call_from_thread(self._show_leaderboard, result)
        except LoadError as e:
            _log.error("Failed to render leaderboard: %s", e)
            self.app.call_from_thread(self._show_error, str(e))

    def _show_leaderboard(self, result: ParseResult) -> None:
        if not self.is_mounted:
            return
        self._error = None
        self.query_one("#loading-container").display = False

        rows = sort_records(
            result.records, compute_missing=self._settings.compute_missing_overall
        )
        if not rows:
            self._show_fallback(no_data_row())
            self._set_status("No entries")
            return

        table = self._reset_table(COLUMNS)
        accessors = build_accessors(
            self._settings.precision, self._settings.compute_missing_overall
        )
        for rank, record in enumerate(rows, start=1):
            table.add_row(*self._build_row_cells(rank, record, accessors))

        status = f"{len(rows)} entries"
        if result.skipped_count:
            status += f" ({result.skipped_count} malformed lines skipped)"
        self._set_status(status)

    def _build_row_cells(
        self, rank: int, record: Record, accessors: Mapping[str, Accessor]
    ) -> list[Text]:
        cells: list[Text] = []
        for column in COLUMNS:
            if column == "Rank":
                cells.append(Text(str(rank), style=RANK_STYLE, justify="center"))
            elif column == LINK_COLUMN:
                cells.append(self._link_cell(record))
            else:
                cells.append(self._value_cell(column, accessors[column](record)))
        return cells

    def _value_cell(self, column: str, value: Any) -> Text:
        if column in NUMERIC_COLUMNS and not is_blank(value):
            style = NUMERIC_STYLE
            if column in SCALED_COLUMNS:
                style = SCALED_STYLE
            elif column == "Overall":
                style = OVERALL_STYLE
            return Text(str(value), style=style, justify="center")
        text = display_text(value)
        if column == "Team" and text != PLACEHOLDER:
            return Text(text, style=TEAM_STYLE)
        return Text(text)

    def _link_cell(self, record: Record) -> Text:
        links = resolve_links(record)
        if not links:
            return Text(PLACEHOLDER)
        cell = Text()
        if links.github:
            cell.append("GitHub", style=Style.parse(GITHUB_STYLE) + Style(link=links.github))
        if links.github and links.huggingface:
            cell.append(" ")
        if links.huggingface:
            cell.append(
                "HuggingFace",
                style=Style.parse(HUGGINGFACE_STYLE) + Style(link=links.huggingface),
            )
        return cell

    def _show_error(self, message: str) -> None:
        if not self.is_mounted:
            return
        self._error = message
        self.query_one("#loading-container").display = False
        self._show_fallback(load_failed_row(message))
        self._set_status("Press 'r' to retry.")

    def _show_fallback(self, row: Record) -> None:
        table = self._reset_table(FALLBACK_COLUMNS)
        table.add_row(
            *(display_text(FALLBACK_ACCESSORS[c](row)) for c in FALLBACK_COLUMNS)
        )

    def _reset_table(self, columns: Sequence[str]) -> DataTable:
        table = self.query_one("#leaderboard-table", DataTable)
        table.display = True
        table.clear(columns=True)
        for column in columns:
            width = COLUMN_WIDTHS.get(column)
            if width is None and column in NUMERIC_COLUMNS:
                width = NUMERIC_WIDTH
            table.add_column(column, key=column, width=width)
        table.cursor_type = "row"
        table.zebra_stripes = True
        return table

    def _set_status(self, message: str) -> None:
        self.query_one("#status-text", Static).update(message)

    def action_retry(self) -> None:
        loading_text = "Loading leaderboard..."
        if self._error:
            loading_text = f"Retrying after: {self._error}"
        self.query_one("#loading-text", Static).update(loading_text)
        self.query_one("#loading-container").display = True
        self.query_one("#leaderboard-table").display = False
        self._load_leaderboard()

    @work(exclusive=True, thread=True, group="export")
    def _export_page(self) -> None:
        try:
            path = export_page(self._settings)
        except OSError as e:
            _log.error("Failed to export leaderboard page: %s", e)
            self.app.call_from_thread(
                self.notify, f"Export failed: {e}", severity="error"
            )
            return
        self.app.call_from_thread(self.notify, f"Wrote {path}", title="Export")

    def action_export(self) -> None:
        self._export_page()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "close-btn":
            self.dismiss(None)
        elif event.button.id == "export-btn":
            self.action_export()

    def action_close(self) -> None:
        self.dismiss(None)
