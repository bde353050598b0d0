"""Central configuration for the gesture pipeline."""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Load environment variables from a .env file if available.
load_dotenv()


def _env_bool(name, default):
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


# ------------------------ WINDOW / INFERENCE ------------------------
# Override these with environment variables if you need different values.
WINDOW_SIZE = int(os.getenv("WINDOW_SIZE", "30"))             # frames per prediction window
FRAME_DIM = int(os.getenv("FRAME_DIM", "42"))                 # 21 hand points x (x, y)
MIN_INFER_INTERVAL_MS = float(os.getenv("MIN_INFER_INTERVAL_MS", "200"))
ACCEPT_THRESHOLD = float(os.getenv("ACCEPT_THRESHOLD", "0.6"))  # softmax minimum for accepting a prediction
CLEAR_THRESHOLD = float(os.getenv("CLEAR_THRESHOLD", "0.4"))
DECAY_FACTOR = float(os.getenv("DECAY_FACTOR", "0.9"))
DEDUP_WINDOW_MS = float(os.getenv("DEDUP_WINDOW_MS", "1000"))
HISTORY_SIZE = int(os.getenv("HISTORY_SIZE", "50"))
# Consecutive "no hand" frames before the window is discarded.
MISSED_FRAMES_RESET = int(os.getenv("MISSED_FRAMES_RESET", str(WINDOW_SIZE)))
CLAMP_FRAMES = _env_bool("CLAMP_FRAMES", "false")

# ------------------------ MODEL / IO ------------------------
MODEL_PATH = os.getenv("MODEL_PATH", "models/classifier.pth")
LABEL_MAP_PATH = os.getenv("LABEL_MAP_PATH", "label_map.json")
DEFAULT_LABELS = ("hello", "thankyou")
CAMERA_INDEX = int(os.getenv("CAMERA_INDEX", "0"))
PORT = int(os.getenv("PORT", "5000"))


@dataclass
class PipelineConfig:
    window_size: int = WINDOW_SIZE
    frame_dim: int = FRAME_DIM
    min_infer_interval_ms: float = MIN_INFER_INTERVAL_MS
    accept_threshold: float = ACCEPT_THRESHOLD
    clear_threshold: float = CLEAR_THRESHOLD
    decay_factor: float = DECAY_FACTOR
    dedup_window_ms: float = DEDUP_WINDOW_MS
    history_size: int = HISTORY_SIZE
    missed_frames_reset: int = MISSED_FRAMES_RESET
    clamp_frames: bool = CLAMP_FRAMES

    def __post_init__(self):
        for name in ("window_size", "frame_dim", "history_size", "missed_frames_reset"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be positive.")
        if self.min_infer_interval_ms <= 0:
            raise ValueError("min_infer_interval_ms must be positive.")
        if self.dedup_window_ms < 0:
            raise ValueError("dedup_window_ms must not be negative.")
        for name in ("accept_threshold", "clear_threshold"):
            if not 0.0 <= getattr(self, name) <= 1.0:
                raise ValueError(f"{name} must be within [0, 1].")
        if not 0.0 < self.decay_factor <= 1.0:
            raise ValueError("decay_factor must be within (0, 1].")
