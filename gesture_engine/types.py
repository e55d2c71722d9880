"""
Type definitions for hand gesture recognition system.
"""
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Optional, Protocol, Tuple, Union, runtime_checkable

import numpy as np

from .errors import InvalidHandFrameError


NUM_LANDMARKS = 21

# Closed range every emitted confidence must fall in
CONFIDENCE_FLOOR = 0.5
CONFIDENCE_CEILING = 0.95


class LM:
    """MediaPipe hand landmark indices."""
    WRIST = 0
    THUMB_CMC, THUMB_MCP, THUMB_IP, THUMB_TIP = 1, 2, 3, 4
    INDEX_MCP, INDEX_PIP, INDEX_DIP, INDEX_TIP = 5, 6, 7, 8
    MIDDLE_MCP, MIDDLE_PIP, MIDDLE_DIP, MIDDLE_TIP = 9, 10, 11, 12
    RING_MCP, RING_PIP, RING_DIP, RING_TIP = 13, 14, 15, 16
    PINKY_MCP, PINKY_PIP, PINKY_DIP, PINKY_TIP = 17, 18, 19, 20

    # Index, middle, ring, pinky
    FINGER_TIPS = (8, 12, 16, 20)
    FINGER_PIPS = (6, 10, 14, 18)
    FINGER_MCPS = (5, 9, 13, 17)


class Handedness(Enum):
    """Which hand the tracker reported."""
    LEFT = "Left"
    RIGHT = "Right"

    @classmethod
    def parse(cls, value: Union["Handedness", str]) -> "Handedness":
        """Accept an enum member or a case-insensitive 'left'/'right' label."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            for member in cls:
                if member.value.lower() == value.strip().lower():
                    return member
        raise InvalidHandFrameError(f"Unknown handedness: {value!r}")


class GestureLabel(Enum):
    """Closed set of gestures the classifier can produce."""
    FIST = "fist"
    OPEN_PALM = "open_palm"
    THUMBS_UP = "thumbs_up"
    POINTING = "pointing"
    PEACE = "peace"
    OK_SIGN = "ok_sign"
    ROCK_ON = "rock_on"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Landmark:
    """A single normalized hand landmark."""
    x: float  # [0..1], left to right in image space
    y: float  # [0..1], smaller is higher on screen
    z: Optional[float] = None  # relative depth, uncalibrated

    @property
    def depth(self) -> float:
        return self.z if self.z is not None else 0.0


@dataclass(frozen=True)
class HandFrame:
    """
    Validated landmarks for one detected hand.

    Always holds exactly 21 finite landmarks in MediaPipe order; anything
    else raises InvalidHandFrameError on construction. Use
    HandFrame.from_points() (see landmarks.py) to build one from raw
    tracker output.
    """
    landmarks: Tuple[Landmark, ...]
    handedness: Handedness

    def __post_init__(self):
        if len(self.landmarks) != NUM_LANDMARKS:
            raise InvalidHandFrameError(
                f"Expected {NUM_LANDMARKS} landmarks, got {len(self.landmarks)}"
            )
        if not isinstance(self.handedness, Handedness):
            raise InvalidHandFrameError(f"Unknown handedness: {self.handedness!r}")
        if not all(isinstance(lm, Landmark) for lm in self.landmarks):
            raise InvalidHandFrameError("Hand frame landmarks must be Landmark instances")

        try:
            coords = self.as_array()
        except (TypeError, ValueError):
            raise InvalidHandFrameError("Hand frame has non-numeric coordinates") from None
        bad = np.flatnonzero(~np.isfinite(coords).all(axis=1))
        if bad.size:
            raise InvalidHandFrameError(f"Landmark {int(bad[0])} has non-finite coordinates")

    def __getitem__(self, index: int) -> Landmark:
        return self.landmarks[index]

    def __len__(self) -> int:
        return len(self.landmarks)

    def as_array(self) -> np.ndarray:
        """Return landmarks as a (21, 3) array, missing depth as 0."""
        return np.array([(lm.x, lm.y, lm.depth) for lm in self.landmarks], dtype=np.float64)

    @property
    def palm_anchor(self) -> Tuple[float, float]:
        """Middle finger MCP, used by overlays to position the gesture label."""
        lm = self.landmarks[LM.MIDDLE_MCP]
        return (lm.x, lm.y)

    @classmethod
    def from_points(cls, points, handedness: Union[Handedness, str] = Handedness.RIGHT) -> "HandFrame":
        from .landmarks import build_hand_frame
        return build_hand_frame(points, handedness)


class FingerState(NamedTuple):
    """Extended/not-extended flag per finger, thumb to pinky."""
    thumb: bool
    index: bool
    middle: bool
    ring: bool
    pinky: bool

    @property
    def count(self) -> int:
        return sum(self)


@dataclass(frozen=True)
class GestureEvent:
    """A confirmed, debounced gesture emitted by the stabilizer."""
    label: GestureLabel
    confidence: float
    landmarks: HandFrame
    emitted_at: float  # driving loop timestamp in seconds

    def __post_init__(self):
        if self.label is GestureLabel.UNKNOWN:
            raise ValueError("GestureEvent cannot carry the UNKNOWN label")
        if not CONFIDENCE_FLOOR <= self.confidence <= CONFIDENCE_CEILING:
            raise ValueError(
                f"confidence {self.confidence} outside [{CONFIDENCE_FLOOR}, {CONFIDENCE_CEILING}]"
            )


@runtime_checkable
class GestureSinkProto(Protocol):
    """Abstract protocol for consumers of emitted gesture events."""

    async def on_gesture(self, event: GestureEvent) -> None:
        """Handle a confirmed gesture event."""
        ...
