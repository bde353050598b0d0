"""Streaming hand-gesture recognition from landmark frames."""

__version__ = "0.1.0"

from .config import PipelineConfig
from .dedup import PredictionDeduplicator, dedup_step
from .errors import ClassifierFailure, MalformedFrame, ModelLoadError, SignStreamError, WindowNotReady
from .events import Classifier, ClassificationResult, LandmarkSource, PredictionEvent, select_prediction
from .history import PredictionHistory
from .pipeline import GesturePipeline, TickResult
from .scheduler import InferenceScheduler, should_infer
from .smoothing import ConfidenceSmoother
from .window import SequenceWindow, validate_frame

__all__ = [
    "PipelineConfig",
    "PredictionDeduplicator",
    "dedup_step",
    "ClassifierFailure",
    "MalformedFrame",
    "ModelLoadError",
    "SignStreamError",
    "WindowNotReady",
    "Classifier",
    "ClassificationResult",
    "LandmarkSource",
    "PredictionEvent",
    "select_prediction",
    "PredictionHistory",
    "GesturePipeline",
    "TickResult",
    "InferenceScheduler",
    "should_infer",
    "ConfidenceSmoother",
    "SequenceWindow",
    "validate_frame",
]
