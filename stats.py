"""Thread-safe request and traffic counters shared by all handler tasks."""

from __future__ import annotations

import threading
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class StatsSnapshot:
    requests_handled: int
    bytes_received: int
    bytes_sent: int


class StatsRegistry:
    """Three monotonic counters guarded by a single lock.

    Every mutation and every snapshot takes the same lock, so a reader never
    sees a partially updated triple.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._requests_handled = 0
        self._bytes_received = 0
        self._bytes_sent = 0

    def increment_requests(self) -> None:
        with self._lock:
            self._requests_handled += 1

    def add_bytes_received(self, count: int) -> None:
        with self._lock:
            self._bytes_received += max(0, count)

    def add_bytes_sent(self, count: int) -> None:
        with self._lock:
            self._bytes_sent += max(0, count)

    def record_request(self, bytes_in: int) -> None:
        """Count one request and its received bytes in one critical section."""
        with self._lock:
            self._requests_handled += 1
            self._bytes_received += max(0, bytes_in)

    def snapshot(self) -> StatsSnapshot:
        with self._lock:
            return StatsSnapshot(
                requests_handled=self._requests_handled,
                bytes_received=self._bytes_received,
                bytes_sent=self._bytes_sent,
            )
