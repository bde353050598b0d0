# src/signstream/model.py
import json
import logging
import os
from typing import Callable, List, Sequence, Tuple

import numpy as np
import torch
import torch.nn as nn

from .config import DEFAULT_LABELS, LABEL_MAP_PATH, MODEL_PATH, PipelineConfig
from .errors import ModelLoadError

logger = logging.getLogger(__name__)

DEVICE = torch.device("cuda" if torch.cuda.is_available() else "cpu")


class GestureLSTM(nn.Module):
    def __init__(self, input_size=42, hidden_size=64, num_layers=2, num_classes=2, dropout=0.2):
        super(GestureLSTM, self).__init__()
        self.hidden_size = hidden_size
        self.num_layers = num_layers

        # LSTM layers
        self.lstm = nn.LSTM(
            input_size=input_size,
            hidden_size=hidden_size,
            num_layers=num_layers,
            batch_first=True,
            dropout=dropout
        )

        # classifier
        self.fc = nn.Sequential(
            nn.Linear(hidden_size, 16),
            nn.ReLU(),
            nn.Linear(16, num_classes),
        )

    def forward(self, x):
        # x: [batch_size, seq_length, input_size]
        h0 = torch.zeros(self.num_layers, x.size(0), self.hidden_size).to(x.device)
        c0 = torch.zeros(self.num_layers, x.size(0), self.hidden_size).to(x.device)

        out, _ = self.lstm(x, (h0, c0))  # out: [batch, seq_len, hidden]
        out = out[:, -1, :]               # take last time step
        out = self.fc(out)                # [batch, num_classes]
        return out


class TorchClassifier:
    """Classifier port backed by a GestureLSTM. Returns softmax probabilities."""

    def __init__(self, model: GestureLSTM, window_size: int, frame_dim: int, device=DEVICE):
        self.model = model.to(device)
        self.model.eval()
        self.window_size = window_size
        self.frame_dim = frame_dim
        self.device = device

    def predict(self, window) -> np.ndarray:
        arr = np.asarray(window, dtype=np.float32)
        if arr.shape != (self.window_size, self.frame_dim):
            raise ValueError(
                f"Expected window of shape ({self.window_size}, {self.frame_dim}), got {arr.shape}"
            )
        seq = torch.from_numpy(arr).unsqueeze(0).to(self.device)
        with torch.no_grad():
            logits = self.model(seq)
            probs = torch.softmax(logits, dim=1)
        return probs[0].cpu().numpy()


# ------------------------ LABELS ------------------------
def load_label_map(path=LABEL_MAP_PATH) -> Tuple[str, ...]:
    """Read {"0": "hello", ...} and return labels ordered by index."""
    if not os.path.exists(path):
        logger.info("Label map %s not found; using default labels %s", path, DEFAULT_LABELS)
        return DEFAULT_LABELS
    with open(path, "r") as f:
        label_map = json.load(f)
    idx_to_label = {int(k): v for k, v in label_map.items()}
    if sorted(idx_to_label) != list(range(len(idx_to_label))):
        raise ValueError(f"Label map {path} must use contiguous indices starting at 0.")
    return tuple(idx_to_label[i] for i in range(len(idx_to_label)))


# ------------------------ MODEL SOURCE ------------------------
LoadAttempt = Tuple[str, Callable[[], TorchClassifier]]


def build_model(config: PipelineConfig, num_classes: int) -> GestureLSTM:
    return GestureLSTM(input_size=config.frame_dim, num_classes=num_classes)


def load_persisted(config: PipelineConfig, labels: Sequence[str], path=MODEL_PATH) -> TorchClassifier:
    if not os.path.exists(path):
        raise FileNotFoundError(f"No saved model at {path}")
    model = build_model(config, len(labels))
    model.load_state_dict(torch.load(path, map_location=DEVICE))
    return TorchClassifier(model, config.window_size, config.frame_dim)


def build_default(config: PipelineConfig, labels: Sequence[str]) -> TorchClassifier:
    """Untrained network with the right shapes; predictions are meaningless until trained."""
    return TorchClassifier(build_model(config, len(labels)), config.window_size, config.frame_dim)


def default_loaders(config: PipelineConfig, labels: Sequence[str], path=MODEL_PATH) -> List[LoadAttempt]:
    return [
        ("persisted", lambda: load_persisted(config, labels, path)),
        ("default", lambda: build_default(config, labels)),
    ]


def resolve_classifier(attempts: Sequence[LoadAttempt]):
    """Run loaders in order and return the first classifier that loads."""
    failures = []
    for name, loader in attempts:
        try:
            classifier = loader()
        except Exception as exc:  # noqa: BLE001
            logger.info("Model source '%s' unavailable: %s", name, exc)
            failures.append(f"{name}: {exc}")
            continue
        logger.info("Using model source '%s'", name)
        return classifier
    raise ModelLoadError("No model source succeeded (" + "; ".join(failures) + ")")
