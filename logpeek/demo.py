"""
Demo log generator.

Writes a steady stream of JSON log lines, mostly debug chatter with the
occasional error, so the viewer can be tried out:

    python -m logpeek demo | python -m logpeek view
"""

import json
import random
import time
from collections.abc import Iterator
from datetime import datetime, timezone
from typing import Any, TextIO


def make_record(rng: random.Random, error_ratio: float = 0.2) -> dict[str, Any]:
    """Build one demo record in the shape of a structured logger's JSON output."""
    timestamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
    if rng.random() < error_ratio:
        return {
            "error": "something went wrong",
            "level": "error",
            "msg": "oof",
            "time": timestamp,
        }
    return {
        "level": "debug",
        "msg": "nothing to worry about",
        "time": timestamp,
    }


def generate_lines(
    count: int | None = None,
    error_ratio: float = 0.2,
    seed: int | None = None,
) -> Iterator[str]:
    """
    Yield serialized demo records.

    Args:
        count: Number of lines to produce (None for an endless stream)
        error_ratio: Probability of each record being an error
        seed: Seed for reproducible output
    """
    rng = random.Random(seed)
    produced = 0
    while count is None or produced < count:
        yield json.dumps(make_record(rng, error_ratio), separators=(",", ":"))
        produced += 1


def run_demo(
    out: TextIO,
    interval: float = 0.5,
    count: int | None = None,
    error_ratio: float = 0.2,
) -> int:
    """
    Write demo lines to ``out``, pausing ``interval`` seconds between them.

    Returns:
        Number of lines written
    """
    written = 0
    for line in generate_lines(count, error_ratio):
        if written and interval > 0:
            time.sleep(interval)
        out.write(line + "\n")
        out.flush()
        written += 1
    return written
