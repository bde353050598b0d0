"""Collapses repeated detections of one gesture into a single event."""

import math
from dataclasses import dataclass
from typing import Optional, Tuple

from .events import ClassificationResult, PredictionEvent


@dataclass(frozen=True)
class DedupState:
    last_label: Optional[str] = None
    last_timestamp: float = -math.inf


def dedup_step(
    state: DedupState,
    result: ClassificationResult,
    now: float,
    dedup_window_ms: float,
) -> Tuple[DedupState, Optional[PredictionEvent]]:
    """
    Pure transition for one accepted result.

    The same label seen again within ``dedup_window_ms`` of the last emitted
    event is a continuation of that gesture and yields no event. Anything else
    emits and becomes the new reference point.
    """
    if result.label == state.last_label and now - state.last_timestamp < dedup_window_ms:
        return state, None

    event = PredictionEvent(label=result.label, confidence=result.probability, timestamp=now)
    return DedupState(last_label=result.label, last_timestamp=now), event


class PredictionDeduplicator:
    def __init__(self, dedup_window_ms=1000.0):
        self.dedup_window_ms = float(dedup_window_ms)
        self.state = DedupState()

    def accept(self, result: ClassificationResult, now: float) -> Optional[PredictionEvent]:
        self.state, event = dedup_step(self.state, result, now, self.dedup_window_ms)
        return event

    def reset(self):
        self.state = DedupState()
