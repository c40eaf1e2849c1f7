"""
Textual front end for the log viewer.

Implements the navigator's ViewPort on top of textual: a "Logs" region for
the record list, a modal zoom screen for one record and a modal search
input. Records arrive on a thread worker; it only posts messages, and
all drawing happens on the UI loop.
"""

import logging
import threading
from collections.abc import Iterable, Sequence

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, VerticalScroll
from textual.message import Message
from textual.screen import ModalScreen
from textual.widgets import Footer, Input, Label, Static

from ..feed import FeedStore
from ..ingest import Ingestor, IngestStats
from ..models.log_record import LogRecord
from ..models.view_state import Action, Mode
from ..navigator import Navigator
from ..render.renderer import render_expanded, render_list
from ..utils.config import Config, get_config


logger = logging.getLogger(__name__)

SEARCH_PROMPT = "Search Pattern: "


class RecordsAppended(Message):
    """Posted by the ingestion thread when the feed has grown."""


class IngestFinished(Message):
    """Posted by the ingestion thread once the input is exhausted."""

    def __init__(self, stats: IngestStats) -> None:
        super().__init__()
        self.stats = stats


class SearchScreen(ModalScreen[None]):
    """Bottom-centred input for a search pattern."""

    CSS = """
    SearchScreen { align: center bottom; }
    #search-container { width: 80%; height: 3; margin-bottom: 3; border: round $accent; background: $surface; layout: horizontal; }
    #search-prompt { width: auto; padding: 0 1; }
    #search-input { width: 1fr; border: none; height: 1; padding: 0; }
    """

    # App bindings stop at a modal screen, so the overlay carries its own
    BINDINGS = [
        Binding("escape", "app.dispatch('dismiss')", "Cancel", id=Action.DISMISS.value),
    ]

    def compose(self) -> ComposeResult:
        with Container(id="search-container"):
            yield Label(SEARCH_PROMPT, id="search-prompt")
            yield Input(id="search-input")

    def on_mount(self) -> None:
        self.query_one(Input).focus()

    def on_input_changed(self, event: Input.Changed) -> None:
        self.app.navigator.update_search(event.value)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        navigator = self.app.navigator
        navigator.update_search(event.value)
        navigator.dispatch(Action.CONFIRM)


class ZoomScreen(ModalScreen[None]):
    """Centred panel showing every field of one record."""

    CSS = """
    ZoomScreen { align: center middle; }
    #zoom-container { width: 50%; height: 50%; border: round $primary; background: $surface; }
    """

    BINDINGS = [
        Binding("escape", "app.dispatch('dismiss')", "Back", id=Action.DISMISS.value),
        Binding("q", "app.dispatch('quit')", "Quit", id=Action.QUIT.value),
    ]

    def __init__(self, record: LogRecord, indent: int = 2):
        super().__init__()
        self.record = record
        self.indent = indent

    def compose(self) -> ComposeResult:
        with VerticalScroll(id="zoom-container"):
            yield Static(render_expanded(self.record, self.indent), id="zoom-body")

    def on_mount(self) -> None:
        container = self.query_one("#zoom-container")
        container.border_title = self.record.message
        container.focus()


class LogViewerApp(App):
    """Interactive viewer over a stream of JSON log lines."""

    TITLE = "logpeek"

    CSS = """
    #log-pane { height: 1fr; border: round $primary; }
    #logs { width: 100%; }
    """

    BINDINGS = [
        Binding("q", "dispatch('quit')", "Quit", id=Action.QUIT.value),
        Binding("ctrl+c", "dispatch('quit')", "Quit", show=False, priority=True),
        Binding("k", "dispatch('move_up')", "Up", id=Action.MOVE_UP.value),
        Binding("j", "dispatch('move_down')", "Down", id=Action.MOVE_DOWN.value),
        Binding("question_mark", "dispatch('open_search')", "Search",
                id=Action.OPEN_SEARCH.value, key_display="?"),
        Binding("enter", "dispatch('confirm')", "Zoom", id=Action.CONFIRM.value),
        Binding("escape", "dispatch('dismiss')", "Back", id=Action.DISMISS.value),
    ]

    def __init__(self, lines: Iterable[str], config: Config | None = None):
        super().__init__()
        self.viewer_config = config or get_config()
        self.source_lines = lines

        self.feed = FeedStore()
        self.navigator = Navigator(self.feed, self)
        self.ingestor = Ingestor(self.feed, self._request_redraw)

        self.input_closed = False
        self._redraw_pending = threading.Event()
        self._log_view: Static | None = None

    def compose(self) -> ComposeResult:
        self._log_view = Static(id="logs")
        with Container(id="log-pane"):
            yield self._log_view
        yield Footer()

    def on_mount(self) -> None:
        self.set_keymap({action.value: key for action, key in self.viewer_config.keys.items()})
        self.query_one("#log-pane").border_title = "Logs"
        # Region size is only known after the first layout
        self.call_after_refresh(self.navigator.redraw)

        self.run_worker(self._ingest, name="ingest", thread=True, exclusive=True)

    def on_resize(self) -> None:
        self.navigator.redraw()

    # --- ingestion worker ---

    def _ingest(self) -> None:
        stats = self.ingestor.run(self.ingestor.follow(self.source_lines))
        self.post_message(IngestFinished(stats))

    def _request_redraw(self) -> None:
        # Coalesce bursts of appends into a single redraw
        if not self._redraw_pending.is_set():
            self._redraw_pending.set()
            self.post_message(RecordsAppended())

    # --- UI loop ---

    def on_records_appended(self, message: RecordsAppended) -> None:
        self._redraw_pending.clear()
        self.navigator.on_append()
        self._update_subtitle()

    def on_ingest_finished(self, message: IngestFinished) -> None:
        self.input_closed = True
        self.navigator.on_append()
        self._update_subtitle()

    def action_dispatch(self, name: str) -> None:
        self.navigator.dispatch(Action(name))

    def _update_subtitle(self) -> None:
        parts = [self.navigator.mode.value, f"{len(self.feed)} records"]
        active = self.navigator.state.active_list
        if active is not None:
            parts.append(f"{len(active)} shown")
        if self.input_closed:
            parts.append("input closed")
        self.sub_title = " · ".join(parts)

    # --- ViewPort ---

    def redraw(self, records: Sequence[LogRecord], cursor: int, mode: Mode) -> None:
        if self._log_view is None:
            return
        height = self._log_view.size.height or max(self.size.height - 3, 1)
        text = render_list(records, cursor, height)
        text.no_wrap = True
        text.overflow = "ellipsis"
        self._log_view.update(text)
        self._update_subtitle()

    def open_zoom(self, record: LogRecord) -> None:
        self.push_screen(ZoomScreen(record, self.viewer_config.indent))

    def close_zoom(self) -> None:
        self.pop_screen()

    def open_search(self) -> None:
        self.push_screen(SearchScreen())

    def close_search(self) -> None:
        self.pop_screen()

    def quit(self) -> None:
        logger.info("Quit requested")
        self.ingestor.stop()
        self.exit(return_code=0)
