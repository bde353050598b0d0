from collections import deque
from typing import Optional, Tuple

from .events import PredictionEvent


class PredictionHistory:
    """Bounded log of emitted events, oldest dropped first."""

    def __init__(self, capacity=50):
        self.capacity = capacity
        self._events = deque(maxlen=capacity)

    def append(self, event: PredictionEvent):
        self._events.append(event)

    def clear(self):
        self._events.clear()

    def snapshot(self) -> Tuple[PredictionEvent, ...]:
        return tuple(self._events)

    def latest(self) -> Optional[PredictionEvent]:
        return self._events[-1] if self._events else None

    def __len__(self):
        return len(self._events)
