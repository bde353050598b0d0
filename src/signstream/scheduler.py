"""Rate limiting for classifier calls."""

import math
import threading


def should_infer(now, last_infer_time, min_interval_ms, window_full) -> bool:
    """True iff the window is full and at least ``min_interval_ms`` passed since the last run."""
    if not window_full:
        return False
    return now - last_infer_time >= min_interval_ms


class InferenceScheduler:
    """
    Throttles inference to at most one call per ``min_interval_ms``.
    The decision and the timestamp update happen under one lock so two
    callers can never both win the same slot.
    """

    def __init__(self, min_interval_ms=200.0):
        if min_interval_ms <= 0:
            raise ValueError("min_interval_ms must be positive.")
        self.min_interval_ms = float(min_interval_ms)
        self.last_infer_time = -math.inf
        self._lock = threading.Lock()

    def try_acquire(self, now, window_full) -> bool:
        with self._lock:
            # a clock that steps backwards never wins a slot
            if now < self.last_infer_time:
                return False
            if not should_infer(now, self.last_infer_time, self.min_interval_ms, window_full):
                return False
            self.last_infer_time = now
            return True

    def reset(self):
        with self._lock:
            self.last_infer_time = -math.inf
