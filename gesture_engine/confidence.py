"""
Landmark quality scoring for emitted gesture events.
"""
from typing import Optional

import numpy as np

from .config import ConfidenceConfig
from .types import HandFrame


def estimate_confidence(frame: HandFrame, cfg: Optional[ConfidenceConfig] = None) -> float:
    """
    Score how trustworthy a frame's landmarks are.

    Each landmark counts as visible when it lies strictly inside the central
    band of the image on both axes, and as stable when its relative depth is
    small. The score is a ratio over all 21 points, so one stray landmark can
    only move it by a small step.

    Args:
        frame: Validated hand frame
        cfg: Scoring settings, defaults if None

    Returns:
        Confidence in [cfg.min_confidence, cfg.max_confidence]
    """
    cfg = cfg or ConfidenceConfig()
    pts = frame.as_array()
    xy = pts[:, :2]

    visible = np.all((xy > cfg.visible_min) & (xy < cfg.visible_max), axis=1)
    stable = np.abs(pts[:, 2]) < cfg.stable_z_max

    visibility_ratio = float(visible.mean())
    stability_ratio = float(stable.mean())

    score = (cfg.base
             + cfg.visibility_weight * visibility_ratio
             + cfg.stability_weight * stability_ratio)
    return float(np.clip(score, cfg.min_confidence, cfg.max_confidence))
