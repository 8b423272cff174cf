from __future__ import annotations

import logging
import threading
from typing import Optional

from domain.errors import AlreadyRunning
from domain.models import Sample
from domain.ports import Clock, FileReader, SampleSink

logger = logging.getLogger(__name__)


class WorkloadRunner:
    """
    Single-instance background reader of the target file.

    - start() is rejected with AlreadyRunning while a run is active
    - stop() only signals the run; it does not wait for the thread
    - a failed read is logged and its elapsed time is still emitted
    """

    def __init__(
        self,
        target_path: str,
        reader: FileReader,
        sink: SampleSink,
        clock: Clock,
    ):
        self.target_path = target_path
        self.reader = reader
        self.sink = sink
        self.clock = clock

        self._lock = threading.Lock()
        self._running = False
        self._cancel: Optional[threading.Event] = None
        self._thread: Optional[threading.Thread] = None
        self.interval_sec: Optional[float] = None

        self._counts_lock = threading.Lock()
        self.total_reads = 0
        self.total_errors = 0

    @property
    def running(self) -> bool:
        with self._lock:
            return self._running

    def start(self, interval_sec: float) -> None:
        if not 0 <= interval_sec <= threading.TIMEOUT_MAX:
            raise ValueError(f"interval out of range: {interval_sec!r}s")

        with self._lock:
            if self._running:
                raise AlreadyRunning()

            cancel = threading.Event()
            t = threading.Thread(
                target=self._loop,
                args=(float(interval_sec), cancel),
                name="workload-runner",
                daemon=True,
            )
            self._cancel = cancel
            self._thread = t
            self.interval_sec = float(interval_sec)
            self._running = True
            t.start()

        logger.info("workload started: path=%s interval=%.3fs", self.target_path, interval_sec)

    def stop(self) -> None:
        with self._lock:
            if not self._running:
                return
            assert self._cancel is not None
            self._cancel.set()
            self._running = False

        logger.info("workload stopped")

    def join(self, timeout: Optional[float] = None) -> None:
        t = self._thread
        if t is not None:
            t.join(timeout=timeout)

    def read_once(self) -> Sample:
        t0 = self.clock.monotonic()
        failed = False
        try:
            self.reader.read(self.target_path)
        except OSError as e:
            failed = True
            logger.error("read of %s failed: %s", self.target_path, e)
        elapsed_ms = (self.clock.monotonic() - t0) * 1000.0

        # a run left over after stop() may overlap the next one
        with self._counts_lock:
            self.total_reads += 1
            if failed:
                self.total_errors += 1
        return Sample(latency_ms=elapsed_ms, count=1)

    def _loop(self, interval_sec: float, cancel: threading.Event) -> None:
        try:
            while not cancel.is_set():
                self.sink.put(self.read_once())
                # interruptible sleep: stop() wakes us up
                if cancel.wait(interval_sec):
                    return
        except Exception:
            logger.exception("workload runner died")
        finally:
            with self._lock:
                # only the current run owns the running flag
                if self._cancel is cancel:
                    self._running = False
