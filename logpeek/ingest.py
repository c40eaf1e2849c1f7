"""
Ingestion task.

Reads newline-delimited JSON from a stream, turns each line into a LogRecord
and appends it to the feed. Runs on a worker thread; the only thing it tells
the UI is that a redraw is wanted.
"""

import logging
import os
import select
import threading
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass

from .feed import FeedStore
from .models.log_record import parse_log_line


logger = logging.getLogger(__name__)

READ_CHUNK_SIZE = 65536


@dataclass
class IngestStats:
    """Counters for one ingestion run."""
    accepted: int = 0
    discarded: int = 0

    @property
    def total(self) -> int:
        return self.accepted + self.discarded


class Ingestor:
    """
    Feeds parsed records from a line stream into a FeedStore.

    Attributes:
        feed: Store the records are appended to
        request_redraw: Called after each successful append; must only
            schedule a redraw, never draw from this thread
        stats: Accepted/discarded line counters
    """

    def __init__(self, feed: FeedStore, request_redraw: Callable[[], None] | None = None):
        self.feed = feed
        self.request_redraw = request_redraw
        self.stats = IngestStats()
        self._stopped = threading.Event()

    def stop(self) -> None:
        """Stop after the line currently being read."""
        self._stopped.set()

    @property
    def stopped(self) -> bool:
        return self._stopped.is_set()

    def ingest_line(self, line: str | bytes) -> bool:
        """
        Parse one line and append it if it is a valid record.

        Returns:
            True if the line was appended, False if it was discarded
        """
        record = parse_log_line(line)
        if record is None:
            self.stats.discarded += 1
            logger.debug("Discarded unparsable line %d", self.stats.total)
            return False

        self.feed.append(record)
        self.stats.accepted += 1
        if self.request_redraw is not None:
            self.request_redraw()
        return True

    def follow(
        self, stream: Iterable[str | bytes], poll_interval: float = 0.1
    ) -> Iterator[str | bytes]:
        """
        Yield lines from ``stream`` while staying responsive to ``stop``.

        Streams backed by a file descriptor are polled with ``select`` and
        read in raw chunks, so a quiet pipe never blocks a stop request.
        Anything else (lists, in-memory streams) is iterated directly.
        """
        try:
            fd = stream.fileno()
        except (AttributeError, OSError):
            yield from stream
            return

        pending = b""
        while not self.stopped:
            ready, _, _ = select.select([fd], [], [], poll_interval)
            if not ready:
                continue
            chunk = os.read(fd, READ_CHUNK_SIZE)
            if not chunk:
                break
            *lines, pending = (pending + chunk).split(b"\n")
            yield from lines

        if pending and not self.stopped:
            yield pending

    def run(self, lines: Iterable[str | bytes]) -> IngestStats:
        """
        Consume ``lines`` until it is exhausted or ``stop`` is called.

        Returns:
            Counters for the run
        """
        logger.info("Ingestion started")
        for line in lines:
            if self.stopped:
                break
            self.ingest_line(line)

        logger.info(
            "Ingestion finished: %d accepted, %d discarded",
            self.stats.accepted,
            self.stats.discarded,
        )
        return self.stats
