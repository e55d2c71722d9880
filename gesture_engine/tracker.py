"""
Hand landmark detection using MediaPipe.
"""
import cv2
import mediapipe as mp
import numpy as np
from typing import Optional, Tuple

from .landmarks import frame_from_mediapipe
from .types import HandFrame


# Skeleton edges for drawing
HAND_CONNECTIONS = [
    (0, 1), (1, 2), (2, 3), (3, 4),
    (0, 5), (5, 6), (6, 7), (7, 8),
    (0, 9), (9, 10), (10, 11), (11, 12),
    (0, 13), (13, 14), (14, 15), (15, 16),
    (0, 17), (17, 18), (18, 19), (19, 20),
    (5, 9), (9, 13), (13, 17),
]


def to_display_px(x: float, y: float, frame_wh: Tuple[int, int], mirror: bool) -> Tuple[int, int]:
    """Map a normalized model-space point to pixels, mirroring for selfie view."""
    width, height = frame_wh
    if mirror:
        x = 1.0 - x
    return int(x * width), int(y * height)


class HandsTracker:
    """Hand landmark tracker using MediaPipe Hands."""

    def __init__(self, max_num_hands: int = 2, model_complexity: int = 1,
                 min_detection_conf: float = 0.5, min_tracking_conf: float = 0.5):
        """
        Initialize the hands tracker.

        Args:
            max_num_hands: Maximum number of hands to detect
            model_complexity: MediaPipe model complexity (0 or 1)
            min_detection_conf: Minimum confidence for hand detection
            min_tracking_conf: Minimum confidence for hand tracking
        """
        self.mp_hands = mp.solutions.hands
        self.hands = self.mp_hands.Hands(
            static_image_mode=False,
            max_num_hands=max_num_hands,
            model_complexity=model_complexity,
            min_detection_confidence=min_detection_conf,
            min_tracking_confidence=min_tracking_conf
        )

    def process(self, frame_bgr: np.ndarray) -> Optional[HandFrame]:
        """
        Process a camera frame and return the first detected hand.

        Args:
            frame_bgr: Un-mirrored input frame in BGR format

        Returns:
            Validated HandFrame, or None if no hand detected

        Raises:
            InvalidHandFrameError: MediaPipe reported a malformed hand
        """
        # Convert BGR to RGB for MediaPipe
        frame_rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)
        results = self.hands.process(frame_rgb)

        if not results.multi_hand_landmarks:
            return None

        handedness = results.multi_handedness[0] if results.multi_handedness else None
        return frame_from_mediapipe(results.multi_hand_landmarks[0], handedness)

    def close(self) -> None:
        self.hands.close()

    @staticmethod
    def draw_landmarks(frame: np.ndarray, hand: HandFrame, mirror: bool = False) -> np.ndarray:
        """
        Draw the hand skeleton on the frame.

        Args:
            frame: Frame to draw on (already flipped if mirror is True)
            hand: Landmarks in model space
            mirror: Mirror x to match a flipped display

        Returns:
            Frame with landmarks drawn
        """
        height, width = frame.shape[:2]
        points = [to_display_px(lm.x, lm.y, (width, height), mirror) for lm in hand.landmarks]

        for start, end in HAND_CONNECTIONS:
            cv2.line(frame, points[start], points[end], (136, 255, 0), 2)

        for i, (px, py) in enumerate(points):
            # Fingertips in red, joints in green
            color = (0, 0, 255) if i in (4, 8, 12, 16, 20) else (0, 255, 0)
            cv2.circle(frame, (px, py), 4, color, -1)

        return frame
