"""Exponentially decayed confidence signal for UI consumption."""

from typing import Optional

from .events import ClassificationResult


class ConfidenceSmoother:
    """
    Holds the displayed confidence and the current gesture label.

    A confident result replaces the value outright. Any other tick multiplies it
    by ``decay_factor``; once it falls under ``clear_threshold`` the current
    label is dropped. This keeps the label from flickering when raw confidence
    hovers around the acceptance threshold.
    """

    def __init__(self, accept_threshold=0.6, clear_threshold=0.4, decay_factor=0.9):
        self.accept_threshold = accept_threshold
        self.clear_threshold = clear_threshold
        self.decay_factor = decay_factor
        self.current = 0.0
        self.label: Optional[str] = None

    def is_accepted(self, result: Optional[ClassificationResult]) -> bool:
        return result is not None and result.probability >= self.accept_threshold

    def update(self, result: Optional[ClassificationResult] = None) -> bool:
        """Advance one tick. Returns True when ``result`` was accepted."""
        if self.is_accepted(result):
            self.current = min(1.0, max(0.0, float(result.probability)))
            self.label = result.label
            return True

        self.current = max(0.0, self.current * self.decay_factor)
        if self.current < self.clear_threshold:
            self.label = None
        return False

    def reset(self):
        self.current = 0.0
        self.label = None
