"""
Hand landmark validation and finger-state extraction.
"""
from typing import Any, Iterable, Optional, Union

from .errors import InvalidHandFrameError
from .types import LM, NUM_LANDMARKS, FingerState, Handedness, HandFrame, Landmark


def _coerce_landmark(point: Any, index: int) -> Landmark:
    """Convert a Landmark, (x, y[, z]) tuple or MediaPipe landmark into a Landmark."""
    if isinstance(point, Landmark):
        raw = (point.x, point.y, point.z)
    elif hasattr(point, "x") and hasattr(point, "y"):
        raw = (point.x, point.y, getattr(point, "z", None))
    else:
        try:
            seq = tuple(point)
        except TypeError:
            raise InvalidHandFrameError(f"Landmark {index} is not a point: {point!r}") from None
        if len(seq) == 2:
            raw = (seq[0], seq[1], None)
        elif len(seq) == 3:
            raw = seq
        else:
            raise InvalidHandFrameError(
                f"Landmark {index} must have 2 or 3 coordinates, got {len(seq)}"
            )

    try:
        x, y = float(raw[0]), float(raw[1])
        z = None if raw[2] is None else float(raw[2])
    except (TypeError, ValueError):
        raise InvalidHandFrameError(f"Landmark {index} has non-numeric coordinates: {raw!r}") from None

    return Landmark(x=x, y=y, z=z)


def build_hand_frame(points: Iterable[Any], handedness: Union[Handedness, str] = Handedness.RIGHT) -> HandFrame:
    """
    Validate raw tracker output and build a HandFrame.

    Args:
        points: 21 landmarks as Landmark objects, (x, y) / (x, y, z) tuples
            or objects exposing x, y and optionally z attributes
        handedness: Handedness enum or 'Left'/'Right' label

    Returns:
        Validated HandFrame

    Raises:
        InvalidHandFrameError: wrong landmark count, non-numeric or
            non-finite coordinates, or unknown handedness
    """
    if points is None:
        raise InvalidHandFrameError("No landmarks supplied")
    try:
        points = list(points)
    except TypeError:
        raise InvalidHandFrameError(
            f"Landmarks must be a sequence of points, got {type(points).__name__}"
        ) from None
    if len(points) != NUM_LANDMARKS:
        raise InvalidHandFrameError(f"Expected {NUM_LANDMARKS} landmarks, got {len(points)}")

    hand = Handedness.parse(handedness)
    landmarks = tuple(_coerce_landmark(p, i) for i, p in enumerate(points))
    return HandFrame(landmarks=landmarks, handedness=hand)


def frame_from_mediapipe(hand_landmarks: Any, handedness: Optional[Any] = None) -> HandFrame:
    """
    Convert one MediaPipe Hands detection into a HandFrame.

    Args:
        hand_landmarks: An entry of results.multi_hand_landmarks
        handedness: Matching entry of results.multi_handedness, if any.
            The hand is assumed to be a right hand when it is missing.

    Returns:
        Validated HandFrame in un-mirrored model space

    Raises:
        InvalidHandFrameError: the detection carries no usable landmarks
    """
    label = Handedness.RIGHT.value
    classification = getattr(handedness, "classification", None)
    if classification:
        label = classification[0].label

    points = getattr(hand_landmarks, "landmark", None)
    if points is None:
        raise InvalidHandFrameError("MediaPipe detection has no landmark list")

    return build_hand_frame(points, label)


def finger_state(frame: HandFrame) -> FingerState:
    """
    Determine which fingers are extended.

    Index to pinky are extended only when tip, PIP and MCP rise
    monotonically (tip.y < pip.y < mcp.y), which rejects half-curled
    fingers. The thumb extends sideways, so it is compared on x: for a
    right hand the tip must be right of the IP joint, for a left hand
    left of it.

    Args:
        frame: Validated hand frame

    Returns:
        FingerState in thumb to pinky order
    """
    thumb_tip = frame[LM.THUMB_TIP]
    thumb_ip = frame[LM.THUMB_IP]
    if frame.handedness is Handedness.RIGHT:
        thumb_up = thumb_tip.x > thumb_ip.x
    else:
        thumb_up = thumb_tip.x < thumb_ip.x

    others = []
    for tip_idx, pip_idx, mcp_idx in zip(LM.FINGER_TIPS, LM.FINGER_PIPS, LM.FINGER_MCPS):
        tip_y, pip_y, mcp_y = frame[tip_idx].y, frame[pip_idx].y, frame[mcp_idx].y
        others.append(tip_y < pip_y < mcp_y)

    return FingerState(thumb_up, *others)


def tip_above_pip(frame: HandFrame, tip_idx: int, pip_idx: int) -> bool:
    """Looser extension test: only the tip needs to be above the PIP joint."""
    return frame[tip_idx].y < frame[pip_idx].y


def mirror_frame(frame: HandFrame) -> HandFrame:
    """
    Mirror a frame horizontally and swap its handedness.

    A mirrored right hand looks like a left hand, so the result classifies
    the same as the input.
    """
    mirrored = tuple(Landmark(x=1.0 - lm.x, y=lm.y, z=lm.z) for lm in frame.landmarks)
    hand = Handedness.LEFT if frame.handedness is Handedness.RIGHT else Handedness.RIGHT
    return HandFrame(landmarks=mirrored, handedness=hand)
