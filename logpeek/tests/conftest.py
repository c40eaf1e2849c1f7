"""
Shared fixtures for the logpeek tests.
"""

import json

import pytest

from logpeek.feed import FeedStore
from logpeek.models.log_record import LogRecord, parse_record
from logpeek.utils.config import KEY_SETTINGS, reset_config


ERROR_LINE = '{"level":"error","msg":"boom","code":500}'
INFO_LINE = '{"level":"info","msg":"ok"}'

ENV_VARS = ["LOGPEEK_LOG_FILE", "LOGPEEK_LOG_LEVEL", "LOGPEEK_INDENT"] + [
    env_var for env_var, _ in KEY_SETTINGS.values()
]


def make_record(level: str = "info", msg: str = "hello", **extra) -> LogRecord:
    """Build a record the same way ingestion does, from a serialized line."""
    return parse_record(json.dumps({"level": level, "msg": msg, **extra}, separators=(",", ":")))


def styles_of(text, substring):
    """Collect the styles of the spans fully covering the first occurrence of a substring."""
    start = text.plain.index(substring)
    end = start + len(substring)
    return {str(span.style) for span in text.spans if span.start <= start and span.end >= end}


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Isolate configuration from the environment and any .env file."""
    for name in ENV_VARS:
        # setenv first so teardown also removes values a .env file loads
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    reset_config()
    yield tmp_path
    reset_config()


@pytest.fixture
def scenario_feed() -> FeedStore:
    """Feed holding an error record followed by an info record."""
    feed = FeedStore()
    feed.append(parse_record(ERROR_LINE))
    feed.append(parse_record(INFO_LINE))
    return feed


class FakeView:
    """Records every ViewPort call made by the navigator."""

    def __init__(self):
        self.calls: list[str] = []
        self.records = []
        self.cursor = None
        self.mode = None
        self.zoomed = None
        self.quit_requested = False

    def redraw(self, records, cursor, mode):
        self.calls.append("redraw")
        self.records = list(records)
        self.cursor = cursor
        self.mode = mode

    def open_zoom(self, record):
        self.calls.append("open_zoom")
        self.zoomed = record

    def close_zoom(self):
        self.calls.append("close_zoom")
        self.zoomed = None

    def open_search(self):
        self.calls.append("open_search")

    def close_search(self):
        self.calls.append("close_search")

    def quit(self):
        self.calls.append("quit")
        self.quit_requested = True


@pytest.fixture
def fake_view() -> FakeView:
    return FakeView()
