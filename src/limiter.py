import threading
import time


class TokenBucket:
    """Process-wide token bucket.

    Holds at most ``burst`` tokens and refills at ``rate`` tokens per second.
    Every caller shares the same bucket; there is no per-client partitioning.
    """

    def __init__(self, rate=1.0, burst=3, clock=time.monotonic):
        if rate <= 0 or burst < 1:
            raise ValueError("rate must be positive and burst at least 1")
        self.rate = float(rate)
        self.burst = int(burst)
        self._clock = clock
        self._tokens = float(self.burst)
        self._updated = clock()
        self._lock = threading.Lock()

    def _refill(self, now):
        elapsed = max(0.0, now - self._updated)
        self._tokens = min(self.burst, self._tokens + elapsed * self.rate)
        self._updated = now

    def allow(self):
        """Take one token if one is available."""
        with self._lock:
            self._refill(self._clock())
            if self._tokens >= 1:
                self._tokens -= 1
                return True
            return False

