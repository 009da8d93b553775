import threading
import time
from datetime import datetime, timezone


class SystemClock:
    """Wall clock in whole Unix seconds"""

    def __call__(self) -> int:
        return int(time.time())


class MonotonicClock:
    """Wraps a clock so successive readings never go backwards"""

    def __init__(self, source=None):
        self.source = source or SystemClock()
        self._last = 0
        self._lock = threading.Lock()

    def __call__(self) -> int:
        with self._lock:
            self._last = max(self._last, int(self.source()))
            return self._last


class FixedClock:
    """Manually advanced clock for tests and replays"""

    def __init__(self, start: int = 1_700_000_000):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: int = 1) -> int:
        self.now += seconds
        return self.now


def to_utc_datetime(timestamp: int) -> datetime:
    """Convert Unix seconds to an aware UTC datetime"""
    return datetime.fromtimestamp(timestamp, tz=timezone.utc)
