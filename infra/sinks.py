from __future__ import annotations
from datetime import datetime, timezone
from domain.ports import SnapshotSink
from domain.models import MetricsSnapshot

class PrintSink(SnapshotSink):
    def handle(self, snapshot: MetricsSnapshot, stamp_epoch: float) -> None:
        stamp = datetime.fromtimestamp(stamp_epoch, tz=timezone.utc).strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]

        if snapshot.rate_per_second == 0:
            line = f"[{stamp}] No reads in this window."
        else:
            line = (
                f"[{stamp}] reads={snapshot.rate_per_second:,.0f}/s "
                f"avg={snapshot.avg_read_ms:.3f}ms "
                f"max={snapshot.max_read_ms:.3f}ms "
                f"min={snapshot.min_read_ms:.3f}ms"
            )

        print(line, flush=True)
