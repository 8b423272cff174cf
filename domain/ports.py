from __future__ import annotations

from typing import Optional, Protocol

from .models import MetricsSnapshot, Sample


class Clock(Protocol):
    def now_epoch(self) -> float: ...

    def monotonic(self) -> float: ...


class FileReader(Protocol):
    def read(self, path: str) -> int:
        """Reads the whole file, returns the number of bytes read."""
        ...


class SampleSource(Protocol):
    def get(self, timeout: Optional[float] = None) -> Optional[Sample]: ...


class SampleSink(Protocol):
    def put(self, sample: Sample) -> None: ...


class SnapshotSink(Protocol):
    def handle(self, snapshot: MetricsSnapshot, stamp_epoch: float) -> None: ...
