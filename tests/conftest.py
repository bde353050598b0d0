import numpy as np
import pytest

from signstream.config import PipelineConfig
from signstream.pipeline import GesturePipeline

LABELS = ("hello", "thankyou")


def make_frame(value=0.5, dim=42):
    return np.full(dim, value, dtype=np.float32)


class FakeClassifier:
    """Returns queued distributions; raises when given an exception."""

    def __init__(self, outputs=None):
        self.outputs = list(outputs or [])
        self.calls = []

    def queue(self, *outputs):
        self.outputs.extend(outputs)

    def predict(self, window):
        self.calls.append(np.array(window))
        out = self.outputs.pop(0) if self.outputs else [0.0, 0.0]
        if isinstance(out, Exception):
            raise out
        return out


@pytest.fixture
def config():
    return PipelineConfig(
        window_size=30,
        frame_dim=42,
        min_infer_interval_ms=200,
        accept_threshold=0.6,
        clear_threshold=0.4,
        decay_factor=0.9,
        dedup_window_ms=1000,
        history_size=50,
        missed_frames_reset=30,
        clamp_frames=False,
    )


@pytest.fixture
def classifier():
    return FakeClassifier()


@pytest.fixture
def pipeline(classifier, config):
    pipe = GesturePipeline(classifier, LABELS, config, clock=lambda: 0.0)
    pipe.start()
    return pipe


def fill_window(pipe, start_ms=0.0, count=29):
    """Push frames that stay below the scheduler's trigger point."""
    for i in range(count):
        pipe.process_frame(make_frame(), now=start_ms + i)
