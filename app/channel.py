from __future__ import annotations

from queue import Empty, Queue
from typing import Optional

from domain.models import Sample


class SampleChannel:
    """
    Bounded FIFO between the runner and the aggregator.

    - put() blocks while the queue is full (backpressure, no drops)
    - get() returns None when the timeout expires
    """

    def __init__(self, maxsize: int = 1000):
        self.maxsize = int(maxsize)
        self._q: Queue[Sample] = Queue(maxsize=self.maxsize)

    def put(self, sample: Sample) -> None:
        self._q.put(sample)

    def get(self, timeout: Optional[float] = None) -> Optional[Sample]:
        try:
            return self._q.get(timeout=timeout)
        except Empty:
            return None

    def qsize(self) -> int:
        return self._q.qsize()
