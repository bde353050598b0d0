# src/signstream/camera_live.py
import logging

import cv2
import mediapipe as mp

from .config import CAMERA_INDEX
from .keypoints import extract_hand_keypoints
from .utils import draw_landmarks

logger = logging.getLogger(__name__)

mp_hands = mp.solutions.hands


class CameraLandmarkSource:
    """
    Landmark source backed by a webcam and MediaPipe Hands.
    next_frame() returns a 42-value vector, or None when no hand is visible
    or the camera dropped a frame. The last annotated image is kept in
    ``preview`` for display.
    """

    def __init__(self, camera_index=CAMERA_INDEX, mirror=True):
        self.camera_index = camera_index
        self.mirror = mirror
        self.preview = None
        self._cap = None
        self._hands = None

    def open(self):
        self._cap = cv2.VideoCapture(self.camera_index)
        if not self._cap.isOpened():
            raise RuntimeError(f"Could not open camera {self.camera_index}")
        self._hands = mp_hands.Hands(
            static_image_mode=False,
            max_num_hands=1,
            model_complexity=1,
            min_detection_confidence=0.7,
            min_tracking_confidence=0.5,
        )
        logger.info("Camera %d opened", self.camera_index)
        return self

    def is_open(self):
        return self._cap is not None and self._cap.isOpened()

    def next_frame(self):
        ret, frame = self._cap.read()
        if not ret:
            return None

        if self.mirror:
            frame = cv2.flip(frame, 1)
        rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        results = self._hands.process(rgb)

        self.preview = draw_landmarks(frame, results)
        return extract_hand_keypoints(results)

    def close(self):
        if self._hands is not None:
            self._hands.close()
            self._hands = None
        if self._cap is not None:
            self._cap.release()
            self._cap = None
        logger.info("Camera %d released", self.camera_index)

    def __enter__(self):
        return self.open()

    def __exit__(self, exc_type, exc, tb):
        self.close()
