"""Value types shared across the pipeline and the classifier port."""

from dataclasses import dataclass
from typing import Optional, Protocol, Sequence

import numpy as np


@dataclass(frozen=True)
class ClassificationResult:
    """Top label of one predict() call."""
    label: str
    probability: float
    index: int


@dataclass(frozen=True)
class PredictionEvent:
    """One accepted, non-duplicate detection."""
    label: str
    confidence: float
    timestamp: float  # ms on the pipeline clock

    def to_dict(self):
        return {"label": self.label, "confidence": self.confidence, "timestamp": self.timestamp}


class Classifier(Protocol):
    """Maps a full (window_size, frame_dim) window to a distribution over labels."""

    def predict(self, window: np.ndarray) -> Sequence[float]:
        ...


class LandmarkSource(Protocol):
    """Yields one landmark vector per captured frame, or None when no hand is visible."""

    def next_frame(self) -> Optional[np.ndarray]:
        ...


def select_prediction(probs, labels) -> ClassificationResult:
    """
    Pick the most probable label. np.argmax returns the first maximum,
    so ties resolve to the lowest index.
    """
    arr = np.asarray(probs, dtype=np.float64).reshape(-1)
    if arr.shape[0] != len(labels):
        raise ValueError(f"Classifier returned {arr.shape[0]} scores for {len(labels)} labels")
    if not np.all(np.isfinite(arr)):
        raise ValueError("Classifier returned non-finite scores")
    idx = int(np.argmax(arr))
    return ClassificationResult(label=labels[idx], probability=float(arr[idx]), index=idx)
