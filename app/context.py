from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from config import AppConfig
from domain.ports import Clock, FileReader, SnapshotSink

from .aggregator import RateAggregator
from .channel import SampleChannel
from .metrics_store import MetricsStore
from .runner import WorkloadRunner


@dataclass
class LoadTestContext:
    """Everything the HTTP layer needs; built once per process."""

    config: AppConfig
    store: MetricsStore
    channel: SampleChannel
    aggregator: RateAggregator
    runner: WorkloadRunner
    sinks: List[SnapshotSink] = field(default_factory=list)

    @classmethod
    def build(
        cls,
        cfg: AppConfig,
        *,
        clock: Clock,
        reader: FileReader,
        sinks: Optional[List[SnapshotSink]] = None,
    ) -> "LoadTestContext":
        store = MetricsStore()
        channel = SampleChannel(maxsize=cfg.channel_size)
        sinks = list(sinks or [])

        aggregator = RateAggregator(
            source=channel,
            store=store,
            clock=clock,
            window_sec=cfg.window_sec,
            sinks=sinks,
        )
        runner = WorkloadRunner(
            target_path=cfg.target_path,
            reader=reader,
            sink=channel,
            clock=clock,
        )
        return cls(
            config=cfg,
            store=store,
            channel=channel,
            aggregator=aggregator,
            runner=runner,
            sinks=sinks,
        )

    def start(self) -> None:
        self.aggregator.start()

    def shutdown(self) -> None:
        self.runner.stop()
        self.aggregator.shutdown()
