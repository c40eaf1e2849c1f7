"""
Feed store.

Append-only, ordered storage for ingested records. One ingestion thread
writes; the UI loop reads. Readers only ever see records whose append has
completed.
"""

import threading
from collections.abc import Iterator, Sequence

from .models.log_record import LogRecord


class FeedSnapshot(Sequence):
    """
    A point-in-time, read-only view of the feed.

    Holds the shared backing list plus the length published when the
    snapshot was taken. Since the backing list is only ever appended to,
    the first ``length`` entries never change.
    """

    def __init__(self, records: list[LogRecord], length: int):
        self._records = records
        self._length = length

    def __len__(self) -> int:
        return self._length

    def __getitem__(self, index):
        if isinstance(index, slice):
            return [self._records[i] for i in range(*index.indices(self._length))]
        if index < 0:
            index += self._length
        if not 0 <= index < self._length:
            raise IndexError("feed snapshot index out of range")
        return self._records[index]

    def __iter__(self) -> Iterator[LogRecord]:
        for index in range(self._length):
            yield self._records[index]

    def __repr__(self) -> str:
        return f"FeedSnapshot(length={self._length})"


class FeedStore:
    """
    Ordered, append-only sequence of LogRecords.

    ``append`` stores the record and then publishes the new length under a
    lock; ``snapshot`` reads the published length under the same lock.
    """

    def __init__(self):
        self._records: list[LogRecord] = []
        self._length = 0
        self._lock = threading.Lock()

    def append(self, record: LogRecord) -> int:
        """
        Add a record to the end of the feed.

        Returns:
            The new length of the feed
        """
        with self._lock:
            self._records.append(record)
            self._length = len(self._records)
            return self._length

    def snapshot(self) -> FeedSnapshot:
        """Get a stable view of every record appended so far."""
        with self._lock:
            return FeedSnapshot(self._records, self._length)

    def __len__(self) -> int:
        with self._lock:
            return self._length
