from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class Sample:
    latency_ms: float
    count: int = 1


@dataclass
class WindowAccumulator:
    sum_latency: float = 0.0
    count: float = 0.0
    max_latency: float = 0.0
    min_latency: float = 0.0

    def add(self, sample: Sample) -> None:
        lat = float(sample.latency_ms)
        # empty window = no bound yet, the first sample sets both
        if self.count == 0 or lat > self.max_latency:
            self.max_latency = lat
        if self.count == 0 or lat < self.min_latency:
            self.min_latency = lat
        self.sum_latency += lat
        self.count += sample.count

    @property
    def avg_latency(self) -> float:
        return self.sum_latency / self.count if self.sum_latency > 0 else 0.0

    def to_snapshot(self, window_sec: float = 1.0) -> MetricsSnapshot:
        return MetricsSnapshot(
            avg_read_ms=self.avg_latency,
            max_read_ms=self.max_latency,
            min_read_ms=self.min_latency,
            rate_per_second=self.count / window_sec,
        )


@dataclass(frozen=True)
class MetricsSnapshot:
    avg_read_ms: float = 0.0
    max_read_ms: float = 0.0
    min_read_ms: float = 0.0
    rate_per_second: float = 0.0

    def to_wire(self) -> dict[str, float]:
        return {
            "avg-read-ms": self.avg_read_ms,
            "max-read-ms": self.max_read_ms,
            "min-read-ms": self.min_read_ms,
            "rate-second": self.rate_per_second,
        }
