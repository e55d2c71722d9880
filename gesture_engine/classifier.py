"""
Single-frame gesture classification from finger states and tip geometry.

Thresholds are loose on purpose: per-frame misses are absorbed by the
stabilizer's majority vote, so ambiguous poses always fall back to
UNKNOWN instead of a guess.
"""
import logging
import math
from typing import Optional

from .config import ClassifierConfig
from .landmarks import finger_state, tip_above_pip
from .types import LM, FingerState, GestureLabel, HandFrame

logger = logging.getLogger(__name__)


def is_thumbs_up(frame: HandFrame, cfg: Optional[ClassifierConfig] = None) -> bool:
    """
    Check that an extended thumb actually points up.

    The thumb tip must sit above both the thumb MCP and the index MCP and
    stand clear of the index knuckle horizontally. A thumb that only sticks
    out sideways fails this check.

    Args:
        frame: Validated hand frame
        cfg: Classifier thresholds, defaults if None

    Returns:
        True if the thumb is held vertically
    """
    cfg = cfg or ClassifierConfig()
    thumb_tip = frame[LM.THUMB_TIP]
    thumb_mcp = frame[LM.THUMB_MCP]
    index_mcp = frame[LM.INDEX_MCP]

    above_knuckles = thumb_tip.y < thumb_mcp.y and thumb_tip.y < index_mcp.y
    clear_of_index = abs(thumb_tip.x - index_mcp.x) > cfg.thumb_offset_min
    return above_knuckles and clear_of_index


def is_ok_sign(frame: HandFrame, cfg: Optional[ClassifierConfig] = None) -> bool:
    """
    Check for an OK sign: thumb and index tips touching, other fingers raised.

    The remaining fingers use the plain tip-above-PIP test, and two of the
    three are enough.

    Args:
        frame: Validated hand frame
        cfg: Classifier thresholds, defaults if None

    Returns:
        True if the frame looks like an OK sign
    """
    cfg = cfg or ClassifierConfig()
    thumb_tip = frame[LM.THUMB_TIP]
    index_tip = frame[LM.INDEX_TIP]
    pinch_dist = math.hypot(thumb_tip.x - index_tip.x, thumb_tip.y - index_tip.y)

    raised = [
        tip_above_pip(frame, LM.MIDDLE_TIP, LM.MIDDLE_PIP),
        tip_above_pip(frame, LM.RING_TIP, LM.RING_PIP),
        tip_above_pip(frame, LM.PINKY_TIP, LM.PINKY_PIP),
    ]
    return pinch_dist < cfg.ok_distance_max and sum(raised) >= 2


def classify_gesture(frame: HandFrame, fingers: Optional[FingerState] = None,
                     cfg: Optional[ClassifierConfig] = None) -> GestureLabel:
    """
    Map one frame to exactly one gesture label.

    Args:
        frame: Validated hand frame
        fingers: Finger states for the frame; computed if None
        cfg: Classifier thresholds, defaults if None

    Returns:
        The matching GestureLabel, or GestureLabel.UNKNOWN
    """
    cfg = cfg or ClassifierConfig()
    if fingers is None:
        fingers = finger_state(frame)
    count = fingers.count

    logger.debug("Fingers up: %s count=%d handedness=%s",
                 [int(f) for f in fingers], count, frame.handedness.value)

    if count == 0:
        return GestureLabel.FIST
    if count == 5:
        return GestureLabel.OPEN_PALM
    if count == 1 and fingers.index:
        return GestureLabel.POINTING
    if count == 1 and fingers.thumb:
        # A sideways thumb is not a thumbs up
        return GestureLabel.THUMBS_UP if is_thumbs_up(frame, cfg) else GestureLabel.UNKNOWN
    if count == 2 and fingers.index and fingers.middle:
        return GestureLabel.PEACE
    if count == 2 and fingers.index and fingers.pinky:
        return GestureLabel.ROCK_ON
    if is_ok_sign(frame, cfg):
        return GestureLabel.OK_SIGN

    return GestureLabel.UNKNOWN
