from __future__ import annotations

import logging
import threading
from typing import List, Optional, Sequence

from domain.models import MetricsSnapshot, Sample, WindowAccumulator
from domain.ports import Clock, SampleSource, SnapshotSink

from .metrics_store import MetricsStore

logger = logging.getLogger(__name__)


class RateAggregator:
    """
    Drains the sample channel and publishes one snapshot per window.

    - waits on the channel with timeout = time left until the next tick
    - on tick: publishes {avg, max, min, rate} and resets the window;
      rate is reads per second whatever the window length
    - an idle window publishes all zeros (no carry-over)
    """

    def __init__(
        self,
        source: SampleSource,
        store: MetricsStore,
        clock: Clock,
        *,
        window_sec: float = 1.0,
        sinks: Optional[Sequence[SnapshotSink]] = None,
    ):
        if window_sec <= 0:
            raise ValueError("window_sec must be > 0")

        self.source = source
        self.store = store
        self.clock = clock
        self.window_sec = float(window_sec)
        self.sinks: List[SnapshotSink] = list(sinks or [])

        self._window = WindowAccumulator()
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

        self.total_samples = 0
        self.total_windows = 0

    def start(self) -> None:
        if self._thread is not None:
            return
        self._thread = threading.Thread(target=self.run, name="rate-aggregator", daemon=True)
        self._thread.start()

    def shutdown(self, timeout: float = 2.0) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=timeout)
            self._thread = None

    def run(self) -> None:
        next_tick = self.clock.monotonic() + self.window_sec

        while not self._stop.is_set():
            remaining = next_tick - self.clock.monotonic()
            if remaining <= 0:
                self.tick()
                next_tick += self.window_sec

                # fell behind by more than a window: drop missed ticks
                now = self.clock.monotonic()
                if next_tick <= now:
                    next_tick = now + self.window_sec
                continue

            sample = self.source.get(timeout=remaining)
            if sample is not None:
                self.add(sample)

    def add(self, sample: Sample) -> None:
        self._window.add(sample)
        self.total_samples += 1

    def tick(self) -> MetricsSnapshot:
        snap = self._window.to_snapshot(self.window_sec)
        self._window = WindowAccumulator()

        self.store.update(snap.avg_read_ms, snap.max_read_ms, snap.min_read_ms, snap.rate_per_second)
        self.total_windows += 1

        stamp = self.clock.now_epoch()
        for sink in self.sinks:
            try:
                sink.handle(snap, stamp)
            except Exception:
                logger.exception("snapshot sink %s failed", type(sink).__name__)
        return snap
