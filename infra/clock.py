import time

from domain.ports import Clock

# epoch seconds (float) + monotonic seconds for elapsed time
class SystemClock(Clock):
    def now_epoch(self) -> float:
        return time.time()

    def monotonic(self) -> float:
        return time.perf_counter()
