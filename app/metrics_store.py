from __future__ import annotations

import threading

from domain.models import MetricsSnapshot


class MetricsStore:
    """
    Holds the snapshot of the last completed window.

    Readers get an immutable copy: all four fields come from the same update.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._current = MetricsSnapshot()

    def update(self, avg: float, max_: float, min_: float, rate: float) -> None:
        snap = MetricsSnapshot(
            avg_read_ms=float(avg),
            max_read_ms=float(max_),
            min_read_ms=float(min_),
            rate_per_second=float(rate),
        )
        with self._lock:
            self._current = snap

    def get_current(self) -> MetricsSnapshot:
        with self._lock:
            return self._current
