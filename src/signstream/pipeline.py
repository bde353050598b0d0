"""
Streaming gesture pipeline: window -> throttle -> classifier -> smoother -> dedup -> history.

One GesturePipeline instance owns all per-session state. Ticks may arrive from
more than one thread; state is mutated only under ``_lock`` and the classifier
call itself runs outside it, guarded by the ``busy`` flag.
"""

import logging
import queue
import threading
import time
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .config import PipelineConfig
from .dedup import PredictionDeduplicator
from .errors import ClassifierFailure, MalformedFrame, WindowNotReady
from .events import Classifier, ClassificationResult, PredictionEvent, select_prediction
from .history import PredictionHistory
from .scheduler import InferenceScheduler
from .smoothing import ConfidenceSmoother
from .window import SequenceWindow

logger = logging.getLogger(__name__)


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


@dataclass
class TickResult:
    """What one call to process_frame did."""
    inferred: bool
    confidence: float
    current_label: Optional[str]
    result: Optional[ClassificationResult] = None
    event: Optional[PredictionEvent] = None
    error: Optional[Exception] = None


@dataclass
class PipelineState:
    window: SequenceWindow
    scheduler: InferenceScheduler
    smoother: ConfidenceSmoother
    dedup: PredictionDeduplicator
    running: bool = False
    busy: bool = False
    session: int = 0
    missed_frames: int = 0
    events: "queue.Queue[PredictionEvent]" = field(default_factory=queue.Queue)


class GesturePipeline:
    def __init__(
        self,
        classifier: Classifier,
        labels: Sequence[str],
        config: Optional[PipelineConfig] = None,
        clock=monotonic_ms,
    ):
        self.config = config or PipelineConfig()
        self.classifier = classifier
        self.labels = tuple(labels)
        self.clock = clock
        cfg = self.config
        self.state = PipelineState(
            window=SequenceWindow(cfg.window_size, cfg.frame_dim, clamp=cfg.clamp_frames),
            scheduler=InferenceScheduler(cfg.min_infer_interval_ms),
            smoother=ConfidenceSmoother(cfg.accept_threshold, cfg.clear_threshold, cfg.decay_factor),
            dedup=PredictionDeduplicator(cfg.dedup_window_ms),
        )
        self.history = PredictionHistory(cfg.history_size)
        self._lock = threading.Lock()

    # ------------------------ LIFECYCLE ------------------------
    @property
    def running(self) -> bool:
        return self.state.running

    def start(self):
        with self._lock:
            if self.state.running:
                return
            self._reset_session()
            self.state.running = True
        logger.info("Gesture detection started")

    def stop(self):
        """Stop detection. An in-flight prediction is discarded; history is kept."""
        with self._lock:
            self.state.running = False
            self._reset_session()
        logger.info("Gesture detection stopped")

    def dispose(self):
        self.stop()
        self.history.clear()
        self.drain_events()

    def _reset_session(self):
        st = self.state
        st.session += 1
        st.missed_frames = 0
        st.window.reset()
        st.scheduler.reset()
        st.smoother.reset()
        st.dedup.reset()

    # ------------------------ OUTPUTS ------------------------
    @property
    def confidence(self) -> float:
        return self.state.smoother.current

    @property
    def current_label(self) -> Optional[str]:
        return self.state.smoother.label

    def drain_events(self) -> List[PredictionEvent]:
        """Return queued events in emission order and empty the channel."""
        drained = []
        try:
            while True:
                drained.append(self.state.events.get_nowait())
        except queue.Empty:
            return drained

    def clear_history(self):
        self.history.clear()
        logger.info("Prediction history cleared")

    # ------------------------ TICK ------------------------
    def process_frame(self, frame, now: Optional[float] = None) -> Optional[TickResult]:
        """
        Feed one landmark frame (or None for "no hand") and maybe run inference.
        Returns None when the pipeline is not running.
        """
        if now is None:
            now = self.clock()
        st = self.state

        with self._lock:
            if not st.running:
                return None

            self._ingest(frame)

            if st.busy:
                # the in-flight tick owns the smoother update
                return self._tick_result(inferred=False)

            if not st.scheduler.try_acquire(now, st.window.is_full()):
                st.smoother.update(None)
                return self._tick_result(inferred=False)

            window = st.window.snapshot()
            if window is None:
                raise WindowNotReady("Scheduler admitted a tick before the window was full")
            st.busy = True
            session = st.session

        try:
            result, error = self._classify(window), None
        except ClassifierFailure as exc:
            logger.warning("Skipping tick: %s", exc)
            result, error = None, exc
        except BaseException:
            with self._lock:
                st.busy = False
            raise

        with self._lock:
            # the flag belongs to this call, not to a session
            st.busy = False
            if error is not None:
                return self._tick_result(inferred=True, error=error)
            if st.session != session or not st.running:
                logger.debug("Discarding prediction from a stopped session")
                return self._tick_result(inferred=True)

            event = None
            if st.smoother.update(result):
                event = st.dedup.accept(result, now)
                if event is not None:
                    self.history.append(event)
                    st.events.put(event)
                    logger.info("Detected %s (%.1f%%)", event.label, event.confidence * 100)
            return self._tick_result(inferred=True, result=result, event=event)

    def _ingest(self, frame):
        st = self.state
        if frame is None:
            st.missed_frames += 1
            if st.missed_frames >= self.config.missed_frames_reset and len(st.window):
                logger.debug("No hand for %d frames, resetting window", st.missed_frames)
                st.window.reset()
            return

        try:
            st.window.push(frame)
        except MalformedFrame as exc:
            logger.debug("Dropping frame: %s", exc)
            return
        st.missed_frames = 0

    def _classify(self, window) -> ClassificationResult:
        try:
            probs = self.classifier.predict(window)
            return select_prediction(probs, self.labels)
        except Exception as exc:  # noqa: BLE001
            raise ClassifierFailure(f"Classifier failed: {exc}", cause=exc) from exc

    def _tick_result(self, inferred, result=None, event=None, error=None) -> TickResult:
        smoother = self.state.smoother
        return TickResult(
            inferred=inferred,
            confidence=smoother.current,
            current_label=smoother.label,
            result=result,
            event=event,
            error=error,
        )
