"""
Temporal stabilization that turns per-frame labels into gesture events.
"""
import logging
from collections import Counter, deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Deque, Iterable, Iterator, Optional, Tuple, Union

from .classifier import classify_gesture
from .config import Cfg, ConfidenceConfig, StabilizerConfig
from .confidence import estimate_confidence
from .errors import InvalidHandFrameError
from .landmarks import build_hand_frame, finger_state
from .types import GestureEvent, GestureLabel, Handedness, HandFrame

logger = logging.getLogger(__name__)


class TrackingState(Enum):
    """Stabilizer phase."""
    IDLE = "idle"  # empty buffer
    TRACKING = "tracking"  # 1..buffer_size labels buffered


@dataclass
class StabilizerState:
    """Rolling label window and last emission time for one session."""
    capacity: int
    last_emission: Optional[float] = None
    buffer: Deque[GestureLabel] = field(init=False)

    def __post_init__(self):
        self.buffer = deque(maxlen=self.capacity)


def majority_label(buffer: Iterable[GestureLabel], required_count: int) -> Optional[GestureLabel]:
    """
    Return the most frequent label if it appears at least required_count times.

    Ties go to the label that entered the buffer first.

    Args:
        buffer: Buffered labels, oldest first
        required_count: Minimum occurrences for a candidate

    Returns:
        Candidate label or None
    """
    counts = Counter(buffer)
    if not counts:
        return None
    # Counter keeps first-seen order and max() returns the first maximum
    best = max(counts, key=counts.__getitem__)
    return best if counts[best] >= required_count else None


class GestureStabilizer:
    """
    Majority vote over recent labels plus an emission cooldown.

    Features:
    - Fixed-size label window, oldest entry dropped first
    - Candidate only when one label reaches the required count
    - Cooldown between emitted events while a gesture is held
    - Any no-hand or unknown frame empties the window
    """

    def __init__(self, cfg: Optional[StabilizerConfig] = None,
                 confidence_cfg: Optional[ConfidenceConfig] = None):
        """Initialize stabilizer with an empty window."""
        self.cfg = cfg or StabilizerConfig()
        self.confidence_cfg = confidence_cfg or ConfidenceConfig()
        self.state = StabilizerState(capacity=self.cfg.buffer_size)

    @property
    def status(self) -> TrackingState:
        return TrackingState.TRACKING if self.state.buffer else TrackingState.IDLE

    def candidate(self) -> Optional[GestureLabel]:
        """Label currently confirmed by the majority vote, if any."""
        return majority_label(self.state.buffer, self.cfg.required_count)

    def clear(self) -> None:
        """Drop buffered labels (hand lost, unknown pose or rejected frame)."""
        self.state.buffer.clear()

    def reset(self) -> None:
        """Start a fresh session: empty window and no previous emission."""
        self.state = StabilizerState(capacity=self.cfg.buffer_size)

    def _cooled_down(self, t_now: float) -> bool:
        if self.state.last_emission is None:
            return True
        elapsed_ms = (t_now - self.state.last_emission) * 1000
        return elapsed_ms > self.cfg.cooldown_ms

    def update(self, label: GestureLabel, frame: HandFrame, t_now: float) -> Optional[GestureEvent]:
        """
        Feed one classified frame and return an event if one is due.

        Args:
            label: Per-frame classification
            frame: The frame the label came from
            t_now: Current timestamp in seconds

        Returns:
            GestureEvent if a confirmed gesture is past its cooldown, None otherwise
        """
        if label is GestureLabel.UNKNOWN:
            self.clear()
            return None

        self.state.buffer.append(label)

        candidate = self.candidate()
        if candidate is None or not self._cooled_down(t_now):
            return None

        event = GestureEvent(
            label=candidate,
            confidence=estimate_confidence(frame, self.confidence_cfg),
            landmarks=frame,
            emitted_at=t_now,
        )
        self.state.last_emission = t_now
        logger.info("Gesture %s (confidence %.2f)", event.label.value, event.confidence)
        return event


class GestureProcessor:
    """
    Main gesture processor: classifier followed by the stabilizer.

    One instance drives one detection session. It is not thread-safe; run
    one processor per camera.
    """

    def __init__(self, cfg: Optional[Cfg] = None):
        """Initialize gesture processor with configuration."""
        self.cfg = cfg or Cfg()
        self.stabilizer = GestureStabilizer(self.cfg.stabilizer, self.cfg.confidence)
        self.last_label: Optional[GestureLabel] = None

    def process_frame(self, frame: Optional[HandFrame], t_now: float) -> Optional[GestureEvent]:
        """
        Process a frame and return the emitted event, if any.

        Args:
            frame: Validated hand frame (None if no hand detected)
            t_now: Current timestamp in seconds

        Returns:
            GestureEvent or None
        """
        if frame is None:
            self.last_label = None
            self.stabilizer.clear()
            return None

        fingers = finger_state(frame)
        label = classify_gesture(frame, fingers, self.cfg.classifier)
        self.last_label = label

        return self.stabilizer.update(label, frame, t_now)

    def process_landmarks(self, points: Optional[Iterable[Any]],
                          handedness: Union[Handedness, str], t_now: float) -> Optional[GestureEvent]:
        """
        Validate raw tracker output, then process it.

        Args:
            points: 21 raw landmarks, or None if no hand detected
            handedness: Handedness enum or 'Left'/'Right' label
            t_now: Current timestamp in seconds

        Returns:
            GestureEvent or None

        Raises:
            InvalidHandFrameError: the frame was malformed. The stabilizer
                is reset to idle before the error propagates.
        """
        if points is None:
            return self.process_frame(None, t_now)

        try:
            frame = build_hand_frame(points, handedness)
        except InvalidHandFrameError as e:
            logger.warning("Rejected hand frame: %s", e)
            self.last_label = None
            self.stabilizer.clear()
            raise

        return self.process_frame(frame, t_now)

    def reset(self) -> None:
        """Reset session state (detection stopped or restarted)."""
        self.last_label = None
        self.stabilizer.reset()


def iter_events(processor: GestureProcessor,
                timed_frames: Iterable[Tuple[float, Optional[HandFrame]]]) -> Iterator[GestureEvent]:
    """
    Drive a processor over (timestamp, frame) pairs and yield emitted events.

    Frames must arrive in non-decreasing timestamp order.
    """
    for t_now, frame in timed_frames:
        event = processor.process_frame(frame, t_now)
        if event is not None:
            yield event
