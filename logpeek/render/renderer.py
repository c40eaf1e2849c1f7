"""
Render engine.

Turns a LogRecord into the styled text drawn for it: a packed single-line
row for the list view, or an expanded pretty-printed block for the zoom view.
"""

import json
from collections.abc import Sequence

from rich.text import Text

from ..models.log_record import Level, LogRecord
from .colorizer import DEBUG_THEME, ERROR_THEME, STANDARD_THEME, Theme, colorize


CURSOR_MARKER = "> "
NO_MARKER = ""


def theme_for(level: Level) -> Theme:
    """Pick the packed-row theme for a severity."""
    if level == Level.ERROR:
        return ERROR_THEME
    if level == Level.DEBUG:
        return DEBUG_THEME
    return STANDARD_THEME


def _dumps(value, indent: int | None = None) -> str:
    # Failure here means a record holds fields that cannot be serialized,
    # which parse_record never produces; let it propagate.
    if indent is None:
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    return json.dumps(value, ensure_ascii=False, indent=indent)


def render_packed(record: LogRecord) -> Text:
    """
    Render a record as a list row.

    Error records show every field. Other records show only ``level`` and
    ``msg`` followed by a count of the fields left out.
    """
    if record.is_error():
        return colorize(_dumps(record.fields), ERROR_THEME)

    text = colorize(_dumps(record.promoted), theme_for(record.level))
    text.append(
        f" ... {record.hidden_field_count} hidden fields",
        style=DEBUG_THEME.value,
    )
    return text


def render_expanded(record: LogRecord, indent: int = 2) -> Text:
    """Render every field of a record, pretty-printed, for the zoom view."""
    theme = ERROR_THEME if record.is_error() else STANDARD_THEME
    return colorize(_dumps(record.fields, indent=indent), theme)


def visible_window(length: int, cursor: int, height: int) -> range:
    """
    Work out which list indexes fit in a region of ``height`` rows.

    The window is anchored to the newest record and slides back just far
    enough to keep the cursor row (``length - cursor - 1``) in view.
    """
    if length <= 0 or height <= 0:
        return range(0)

    selected = length - (cursor + 1)
    stop = length
    if selected < stop - height:
        stop = selected + height
    start = max(0, stop - height)
    return range(start, stop)


def render_list(records: Sequence[LogRecord], cursor: int, height: int) -> Text:
    """Render the visible part of a record list, marking the cursor row."""
    selected = len(records) - (cursor + 1)
    lines = []
    for index in visible_window(len(records), cursor, height):
        line = Text(CURSOR_MARKER if index == selected else NO_MARKER, style="bold")
        line.append_text(render_packed(records[index]))
        lines.append(line)
    return Text("\n").join(lines)
