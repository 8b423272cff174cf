"""Test doubles shared across the suite."""

from __future__ import annotations

import threading


class FakeClock:
    """Manually advanced clock; safe to share between threads."""

    def __init__(self, start: float = 1_700_000_000.0):
        self._lock = threading.Lock()
        self._t = start

    def now_epoch(self) -> float:
        with self._lock:
            return self._t

    def monotonic(self) -> float:
        with self._lock:
            return self._t

    def advance(self, seconds: float) -> None:
        with self._lock:
            self._t += seconds


class StubReader:
    """Reader whose reads take exactly `cost_ms` on the fake clock."""

    def __init__(self, clock: FakeClock, cost_ms: float = 5.0, error: Exception | None = None):
        self.clock = clock
        self.cost_ms = cost_ms
        self.error = error
        self.paths: list[str] = []

    def read(self, path: str) -> int:
        self.paths.append(path)
        self.clock.advance(self.cost_ms / 1000.0)
        if self.error is not None:
            raise self.error
        return 0


class RecordingSink:
    def __init__(self):
        self.received = []

    def handle(self, snapshot, stamp_epoch):
        self.received.append((snapshot, stamp_epoch))


