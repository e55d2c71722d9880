"""
Hand Gesture Recognition Engine

Turns per-frame MediaPipe hand landmarks into a stable, rate-limited stream
of labeled gesture events with confidence scores.
"""

__version__ = "0.1.0"

from .errors import GestureEngineError, InvalidHandFrameError
from .types import (
    LM,
    Landmark,
    Handedness,
    HandFrame,
    FingerState,
    GestureLabel,
    GestureEvent,
    GestureSinkProto,
)
from .config import load_config, Cfg
from .landmarks import build_hand_frame, frame_from_mediapipe, finger_state, mirror_frame
from .classifier import classify_gesture, is_thumbs_up, is_ok_sign
from .confidence import estimate_confidence
from .gestures import (
    TrackingState,
    StabilizerState,
    GestureStabilizer,
    GestureProcessor,
    majority_label,
    iter_events,
)
from .sink_mock import MockSink

__all__ = [
    "GestureEngineError",
    "InvalidHandFrameError",
    "LM",
    "Landmark",
    "Handedness",
    "HandFrame",
    "FingerState",
    "GestureLabel",
    "GestureEvent",
    "GestureSinkProto",
    "load_config",
    "Cfg",
    "build_hand_frame",
    "frame_from_mediapipe",
    "finger_state",
    "mirror_frame",
    "classify_gesture",
    "is_thumbs_up",
    "is_ok_sign",
    "estimate_confidence",
    "TrackingState",
    "StabilizerState",
    "GestureStabilizer",
    "GestureProcessor",
    "majority_label",
    "iter_events",
    "MockSink",
]
