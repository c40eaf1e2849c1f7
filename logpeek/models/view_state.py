"""
View State data model.

Holds everything the navigator needs to know about what the user is looking
at: the interaction mode, the cursor, and the list being navigated.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from .log_record import LogRecord


class Mode(Enum):
    """Interaction modes of the viewer."""
    LIVE = "live"              # Following the full feed
    FILTERED = "filtered"      # Navigating a search result snapshot
    SEARCHING = "searching"    # Typing a search pattern
    ZOOMED = "zoomed"          # Showing one record expanded


class Action(Enum):
    """User intents that keystrokes are bound to."""
    QUIT = "quit"
    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    OPEN_SEARCH = "open_search"
    CONFIRM = "confirm"
    SELECT = "select"
    DISMISS = "dismiss"


@dataclass
class ViewState:
    """
    Navigation state owned by the UI loop.

    ``cursor`` counts from the newest record of ``active_list``, so 0 is
    always the most recent entry. ``active_list`` is None while live, meaning
    "the full feed"; otherwise it is an owned snapshot that does not change
    when new records arrive.
    """

    mode: Mode = Mode.LIVE
    cursor: int = 0
    active_list: Sequence[LogRecord] | None = None
    search_buffer: str = ""

    # Mode to return to when an overlay closes
    previous_mode: Mode = Mode.LIVE

    # Record shown while zoomed
    zoomed: LogRecord | None = None

    @property
    def is_live(self) -> bool:
        return self.active_list is None

    def clamp_cursor(self, length: int) -> None:
        """Keep the cursor inside ``[0, length - 1]`` (0 for an empty list)."""
        if length <= 0:
            self.cursor = 0
        else:
            self.cursor = max(0, min(self.cursor, length - 1))
