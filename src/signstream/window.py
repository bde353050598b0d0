# src/signstream/window.py
from collections import deque
from typing import Optional

import numpy as np

from .errors import MalformedFrame


def validate_frame(frame, dim: int, clamp: bool = False) -> np.ndarray:
    """
    Normalize one landmark vector to a flat float32 array of length ``dim``.
    Raises MalformedFrame for any other shape or for NaN/inf coordinates.
    """
    try:
        arr = np.asarray(frame, dtype=np.float32)
    except (TypeError, ValueError) as exc:
        raise MalformedFrame(f"Frame is not numeric: {exc}") from exc

    if arr.ndim != 1 or arr.shape[0] != dim:
        raise MalformedFrame(f"Expected frame of length {dim}, got shape {arr.shape}")
    if not np.all(np.isfinite(arr)):
        raise MalformedFrame("Frame contains non-finite coordinates")

    if clamp:
        arr = np.clip(arr, 0.0, 1.0)
    # never alias the caller's buffer
    return arr.copy()


class SequenceWindow:
    """Fixed-capacity FIFO of the most recent landmark frames."""

    def __init__(self, size=30, dim=42, clamp=False):
        self.size = size
        self.dim = dim
        self.clamp = clamp
        self._frames = deque(maxlen=size)

    def push(self, frame) -> np.ndarray:
        # validate before touching the buffer so a bad frame leaves it as-is
        arr = validate_frame(frame, self.dim, clamp=self.clamp)
        self._frames.append(arr)
        return arr

    def is_full(self) -> bool:
        return len(self._frames) == self.size

    def snapshot(self) -> Optional[np.ndarray]:
        """Return a (size, dim) copy of the window, or None while it is filling."""
        if not self.is_full():
            return None
        return np.stack(list(self._frames)).astype(np.float32)

    def reset(self):
        self._frames.clear()

    def __len__(self):
        return len(self._frames)
