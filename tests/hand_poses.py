"""
Synthetic hand poses for tests.

All poses are right hands in un-mirrored model space: wrist at the bottom,
fingers pointing up (smaller y), thumb on the right (larger x).
"""
import sys
from pathlib import Path
from typing import Dict, List, Optional, Tuple

sys.path.insert(0, str(Path(__file__).parent.parent))

from gesture_engine.types import Handedness, HandFrame, Landmark

Point = Tuple[float, float]

# x position and MCP height for index, middle, ring, pinky
FINGER_BASES = [(0.58, 0.60), (0.50, 0.58), (0.43, 0.60), (0.37, 0.63)]

WRIST = (0.50, 0.85)
THUMB_CMC = (0.58, 0.80)
THUMB_MCP = (0.63, 0.74)
THUMB_IP = (0.67, 0.68)
THUMB_TIP_SIDEWAYS = (0.72, 0.63)  # extended, but level with the knuckles
THUMB_TIP_UP = (0.70, 0.45)  # extended and raised above the knuckles
THUMB_TIP_FOLDED = (0.60, 0.68)  # tucked across the palm


def _finger(x: float, mcp_y: float, extended: bool) -> List[Point]:
    """MCP, PIP, DIP, TIP for one finger."""
    if extended:
        return [(x, mcp_y), (x, mcp_y - 0.12), (x, mcp_y - 0.18), (x, mcp_y - 0.24)]
    return [(x, mcp_y), (x, mcp_y - 0.07), (x - 0.01, mcp_y - 0.02), (x - 0.01, mcp_y + 0.02)]


def make_points(fingers: str = "00000", thumb_tip: Optional[Point] = None,
                overrides: Optional[Dict[int, Point]] = None) -> List[Point]:
    """
    Build 21 (x, y) points.

    Args:
        fingers: five '0'/'1' flags, thumb to pinky
        thumb_tip: explicit thumb tip, otherwise sideways when the thumb
            flag is set and folded when it is not
        overrides: landmark index -> point replacements
    """
    flags = [c == "1" for c in fingers]
    if thumb_tip is None:
        thumb_tip = THUMB_TIP_SIDEWAYS if flags[0] else THUMB_TIP_FOLDED

    points = [WRIST, THUMB_CMC, THUMB_MCP, THUMB_IP, thumb_tip]
    for (x, mcp_y), extended in zip(FINGER_BASES, flags[1:]):
        points.extend(_finger(x, mcp_y, extended))

    for idx, pt in (overrides or {}).items():
        points[idx] = pt
    return points


def make_frame(fingers: str = "00000", thumb_tip: Optional[Point] = None,
               overrides: Optional[Dict[int, Point]] = None, z: float = 0.0,
               handedness: Handedness = Handedness.RIGHT) -> HandFrame:
    points = make_points(fingers, thumb_tip, overrides)
    return HandFrame(
        landmarks=tuple(Landmark(x, y, z) for x, y in points),
        handedness=handedness,
    )


def fist() -> HandFrame:
    return make_frame("00000")


def open_palm() -> HandFrame:
    return make_frame("11111")


def pointing() -> HandFrame:
    return make_frame("01000")


def peace() -> HandFrame:
    return make_frame("01100")


def rock_on() -> HandFrame:
    return make_frame("01001")


def thumbs_up() -> HandFrame:
    return make_frame("10000", thumb_tip=THUMB_TIP_UP)


def thumb_sideways() -> HandFrame:
    return make_frame("10000", thumb_tip=THUMB_TIP_SIDEWAYS)


def ok_sign() -> HandFrame:
    # Index curls over to meet the thumb; middle, ring and pinky stay up
    return make_frame(
        "10111",
        thumb_tip=(0.68, 0.60),
        overrides={7: (0.63, 0.55), 8: (0.66, 0.58)},
    )


def unknown_pose() -> HandFrame:
    # Thumb, index and middle: no rule matches
    return make_frame("11100")
