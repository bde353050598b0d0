from typing import Optional

import numpy as np

# 21 MediaPipe hand landmarks, (x, y) each
HAND_POINTS = 21
KEYPOINT_VECTOR_LENGTH = HAND_POINTS * 2


def _landmark_array(hand_landmarks):
    coords = np.array([[lmk.x, lmk.y] for lmk in hand_landmarks.landmark], dtype=np.float32)
    return coords


def extract_hand_keypoints(results) -> Optional[np.ndarray]:
    """
    Flatten the first detected hand to [x0, y0, x1, y1, ...].
    Returns None when MediaPipe saw no hand.
    """
    hands = getattr(results, "multi_hand_landmarks", None)
    if not hands:
        return None

    coords = _landmark_array(hands[0])
    if coords.shape != (HAND_POINTS, 2):
        return None
    return coords.flatten().astype(np.float32)
