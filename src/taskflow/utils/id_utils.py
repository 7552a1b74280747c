"""Identifier generation for stored entities.

Ids look like ``1718000000000-0003-9f2c1a``: creation time in milliseconds,
a per-millisecond sequence number and a random suffix. They sort by creation
order within a process and stay unique when several entities are created in
the same millisecond.
"""

from __future__ import annotations

import secrets
import threading
import time

_SEQUENCE_LIMIT = 10_000


class IdGenerator:
    """Thread-safe generator of time-ordered unique ids."""

    def __init__(self, clock=None):
        self._clock = clock or (lambda: time.time_ns() // 1_000_000)
        self._lock = threading.Lock()
        self._last_ms = -1
        self._sequence = 0

    def _next_slot(self) -> tuple[int, int]:
        with self._lock:
            now_ms = self._clock()
            # Never step backwards, even if the wall clock does
            if now_ms <= self._last_ms:
                now_ms = self._last_ms
                self._sequence += 1
                if self._sequence >= _SEQUENCE_LIMIT:
                    now_ms += 1
                    self._sequence = 0
            else:
                self._sequence = 0
            self._last_ms = now_ms
            return now_ms, self._sequence

    def __call__(self) -> str:
        now_ms, sequence = self._next_slot()
        return f"{now_ms:013d}-{sequence:04d}-{secrets.token_hex(3)}"


_default_generator = IdGenerator()


def generate_id() -> str:
    """Generate a new unique, creation-ordered id.

    Returns:
        Id string (e.g., "1718000000000-0000-9f2c1a")
    """
    return _default_generator()

