import itertools

import pytest

from signstream.infer import run
from signstream.pipeline import GesturePipeline

from conftest import LABELS, FakeClassifier, make_frame


class FakeSource:
    def __init__(self, frames):
        self.frames = list(frames)
        self.preview = None
        self.reads = 0

    def next_frame(self):
        self.reads += 1
        return self.frames.pop(0) if self.frames else None


def ms_clock():
    ticks = itertools.count()
    return lambda: float(next(ticks))


def test_run_drains_events_and_stops(config, capsys):
    classifier = FakeClassifier([[0.9, 0.1]])
    pipe = GesturePipeline(classifier, LABELS, config, clock=ms_clock())
    source = FakeSource([make_frame() for _ in range(30)])

    frames = run(pipe, source, show=False, max_frames=35)

    assert frames == 35
    assert source.reads == 35
    assert len(classifier.calls) == 1
    assert not pipe.running
    assert pipe.drain_events() == []
    assert [e.label for e in pipe.history.snapshot()] == ["hello"]
    assert "Gesture: hello (90.0%)" in capsys.readouterr().out


def test_run_stops_pipeline_when_source_fails(config):
    class BrokenSource(FakeSource):
        def next_frame(self):
            raise RuntimeError("camera gone")

    pipe = GesturePipeline(FakeClassifier(), LABELS, config)
    with pytest.raises(RuntimeError):
        run(pipe, BrokenSource([]), show=False, max_frames=5)
    assert not pipe.running
