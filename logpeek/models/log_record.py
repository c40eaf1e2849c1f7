"""
Log Record data model.

Represents a single structured (JSON) log line read from the input stream.
"""

import json
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ParseError(ValueError):
    """Raised when a line cannot be decoded into a LogRecord."""


class Level(IntEnum):
    """Severity levels, ordered by rank."""
    TRACE = 0
    DEBUG = 1
    INFO = 2
    WARN = 3
    ERROR = 4
    FATAL = 5

    @classmethod
    def from_value(cls, value: Any) -> "Level":
        """
        Decode a JSON ``level`` value.

        Accepts the usual spellings case-insensitively (``warning`` for WARN,
        ``panic`` and ``critical`` for FATAL).

        Raises:
            ParseError: If the value is not a string naming a known level
        """
        if not isinstance(value, str):
            raise ParseError(f"level must be a string, got {type(value).__name__}")

        level = _LEVEL_NAMES.get(value.strip().lower())
        if level is None:
            raise ParseError(f"unknown level: {value!r}")
        return level

    @property
    def label(self) -> str:
        return self.name.lower()


_LEVEL_NAMES = {
    "trace": Level.TRACE,
    "debug": Level.DEBUG,
    "info": Level.INFO,
    "warn": Level.WARN,
    "warning": Level.WARN,
    "error": Level.ERROR,
    "fatal": Level.FATAL,
    "panic": Level.FATAL,
    "critical": Level.FATAL,
}

# Fields always shown in the packed view
PROMOTED_FIELDS = ("level", "msg")


@dataclass(frozen=True)
class LogRecord:
    """
    Represents a single log record decoded from one input line.

    Example line: {"level":"error","msg":"boom","code":500}

    ``fields`` holds every original field (``level`` and ``msg`` included) in
    the order they appeared on the line.
    """

    level: Level                    # Decoded from "level"
    message: str                    # Text of "msg"
    fields: dict[str, Any] = field(repr=False)
    raw: str = field(repr=False)    # Original line, used for searching

    def matches(self, pattern: str) -> bool:
        """Case-sensitive literal substring test against the raw line."""
        return pattern in self.raw

    def is_error(self) -> bool:
        return self.level == Level.ERROR

    @property
    def promoted(self) -> dict[str, Any]:
        """The ``{level, msg}`` projection shown in packed rows."""
        return {name: self.fields[name] for name in PROMOTED_FIELDS}

    @property
    def hidden_field_count(self) -> int:
        """Number of fields left out of the packed view."""
        return max(len(self.fields) - len(PROMOTED_FIELDS), 0)

    def __str__(self) -> str:
        return f"[{self.level.label}] {self.message}"


def _reject_constant(name: str):
    raise ParseError(f"invalid JSON: {name} is not a JSON value")


def parse_record(line: str | bytes) -> LogRecord:
    """
    Decode one input line into a LogRecord.

    Args:
        line: A single serialized JSON object (bytes are decoded as UTF-8)

    Returns:
        The decoded LogRecord

    Raises:
        ParseError: If the line is not a JSON object, or ``level``/``msg``
            are missing or cannot be decoded
    """
    if isinstance(line, bytes):
        try:
            line = line.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ParseError(f"invalid UTF-8: {e}") from e

    raw = line.rstrip("\r\n")
    try:
        fields = json.loads(raw, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise ParseError(f"invalid JSON: {e.msg}") from e

    if not isinstance(fields, dict):
        raise ParseError("line is not a JSON object")

    for name in PROMOTED_FIELDS:
        if name not in fields:
            raise ParseError(f"missing required field: {name}")

    message = fields["msg"]
    if not isinstance(message, str):
        raise ParseError("msg must be a string")

    return LogRecord(
        level=Level.from_value(fields["level"]),
        message=message,
        fields=fields,
        raw=raw,
    )


def parse_log_line(line: str | bytes) -> LogRecord | None:
    """
    Parse a single log line into a LogRecord.

    Args:
        line: Raw log line

    Returns:
        LogRecord if parsing succeeded, None otherwise
    """
    if not line.strip():
        return None

    try:
        return parse_record(line)
    except ParseError:
        return None
