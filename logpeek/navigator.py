"""
Navigation state machine for the log viewer.

Owns the ViewState and maps (mode, action) pairs to transitions. Drawing is
delegated to a ViewPort, so the same machine drives the textual app and the
test doubles.
"""

import logging
from collections.abc import Callable, Sequence
from typing import Protocol

from .feed import FeedStore
from .models.log_record import LogRecord
from .models.view_state import Action, Mode, ViewState


logger = logging.getLogger(__name__)


class ViewPort(Protocol):
    """What the navigator needs from the terminal UI."""

    def redraw(self, records: Sequence[LogRecord], cursor: int, mode: Mode) -> None: ...

    def open_zoom(self, record: LogRecord) -> None: ...

    def close_zoom(self) -> None: ...

    def open_search(self) -> None: ...

    def close_search(self) -> None: ...

    def quit(self) -> None: ...


class Navigator:
    """
    Interaction state machine.

    Modes and transitions:

        LIVE --open_search--> SEARCHING --confirm--> FILTERED
          ^                       |                     |
          |                     dismiss                 |
          +------- dismiss -------+----<-- dismiss -----+
        LIVE | FILTERED --select--> ZOOMED --dismiss--> previous mode

    Pairs missing from the transition table are ignored. Only the UI loop
    calls into the navigator, so the state needs no locking.
    """

    def __init__(self, feed: FeedStore, view: ViewPort):
        self.feed = feed
        self.view = view
        self.state = ViewState()

        self._transitions: dict[tuple[Mode, Action], Callable[[], None]] = {
            (Mode.LIVE, Action.OPEN_SEARCH): self._open_search,
            (Mode.FILTERED, Action.OPEN_SEARCH): self._open_search,
            (Mode.SEARCHING, Action.CONFIRM): self._confirm_search,
            (Mode.SEARCHING, Action.SELECT): self._confirm_search,
            (Mode.SEARCHING, Action.DISMISS): self._cancel_search,
            (Mode.LIVE, Action.MOVE_UP): self._move_up,
            (Mode.LIVE, Action.MOVE_DOWN): self._move_down,
            (Mode.FILTERED, Action.MOVE_UP): self._move_up,
            (Mode.FILTERED, Action.MOVE_DOWN): self._move_down,
            (Mode.LIVE, Action.SELECT): self._zoom,
            (Mode.LIVE, Action.CONFIRM): self._zoom,
            (Mode.FILTERED, Action.SELECT): self._zoom,
            (Mode.FILTERED, Action.CONFIRM): self._zoom,
            (Mode.ZOOMED, Action.DISMISS): self._unzoom,
            (Mode.FILTERED, Action.DISMISS): self._clear_filter,
            (Mode.LIVE, Action.DISMISS): self._follow_tail,
        }
        for mode in Mode:
            self._transitions[(mode, Action.QUIT)] = self.view.quit

    @property
    def mode(self) -> Mode:
        return self.state.mode

    @property
    def cursor(self) -> int:
        return self.state.cursor

    def active_records(self) -> Sequence[LogRecord]:
        """The list currently being navigated."""
        if self.state.active_list is None:
            return self.feed.snapshot()
        return self.state.active_list

    def dispatch(self, action: Action) -> bool:
        """
        Apply the transition bound to ``action`` in the current mode.

        Returns:
            True if a transition ran, False if the action is ignored here
        """
        transition = self._transitions.get((self.state.mode, action))
        if transition is None:
            return False

        logger.debug("%s in %s", action.value, self.state.mode.value)
        transition()
        return True

    def update_search(self, text: str) -> None:
        """Record what has been typed into the search input so far."""
        if self.state.mode == Mode.SEARCHING:
            self.state.search_buffer = text

    def on_append(self) -> None:
        """Called on the UI loop after the feed has grown."""
        if self.state.mode == Mode.LIVE:
            self.redraw()

    def redraw(self) -> None:
        records = self.active_records()
        self.state.clamp_cursor(len(records))
        self.view.redraw(records, self.state.cursor, self.state.mode)

    # --- transitions ---

    def _open_search(self) -> None:
        state = self.state
        state.previous_mode = state.mode
        if state.active_list is None:
            state.active_list = self.feed.snapshot()
        state.search_buffer = ""
        state.mode = Mode.SEARCHING
        self.view.open_search()
        self.redraw()

    def _confirm_search(self) -> None:
        state = self.state
        pattern = state.search_buffer
        records = state.active_list if state.active_list is not None else self.feed.snapshot()

        state.active_list = [record for record in records if record.matches(pattern)]
        state.clamp_cursor(len(state.active_list))
        state.search_buffer = ""
        state.mode = Mode.FILTERED
        logger.info("Search %r matched %d of %d records", pattern, len(state.active_list), len(records))

        self.view.close_search()
        self.redraw()

    def _cancel_search(self) -> None:
        state = self.state
        state.search_buffer = ""
        state.mode = state.previous_mode
        if state.mode == Mode.LIVE:
            state.active_list = None

        self.view.close_search()
        self.redraw()

    def _move_up(self) -> None:
        # Up the screen is back in time
        if self.state.cursor < len(self.active_records()) - 1:
            self.state.cursor += 1
            self.redraw()

    def _move_down(self) -> None:
        if self.state.cursor > 0:
            self.state.cursor -= 1
            self.redraw()

    def _zoom(self) -> None:
        state = self.state
        records = self.active_records()
        index = len(records) - (state.cursor + 1)
        if index < 0 or index >= len(records):
            return

        state.zoomed = records[index]
        state.previous_mode = state.mode
        state.mode = Mode.ZOOMED
        self.view.open_zoom(state.zoomed)

    def _unzoom(self) -> None:
        state = self.state
        state.zoomed = None
        state.mode = state.previous_mode

        self.view.close_zoom()
        self.redraw()

    def _clear_filter(self) -> None:
        state = self.state
        state.active_list = None
        state.cursor = 0
        state.mode = Mode.LIVE
        self.redraw()

    def _follow_tail(self) -> None:
        self.state.cursor = 0
        self.redraw()
