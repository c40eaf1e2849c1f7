# Viewer models package
from .log_record import Level, LogRecord, ParseError, parse_log_line, parse_record
from .view_state import Action, Mode, ViewState

__all__ = [
    "Level",
    "LogRecord",
    "ParseError",
    "parse_log_line",
    "parse_record",
    "Action",
    "Mode",
    "ViewState",
]
