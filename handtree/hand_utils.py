"""
HandTree Landmark Processing Utilities.
=======================================

Turns whatever the detector hands us into a validated `HandFrame`.
Raw camera coordinates cannot be compared across frames because they depend on:
1. How close the hand is to the camera (Scale).
2. How many hands are in view (Selection).

This module fixes both: it derives a per-frame scale and picks the main hand.
"""

import numpy as np
from typing import Any, Optional, Sequence

from handtree.core.errors import TransientFrameFault
from handtree.core.types import (
    HandFrame, Point2D, NUM_LANDMARKS, WRIST, MIDDLE_MCP, THUMB_TIP, INDEX_TIP
)


def hand_scale(coords: np.ndarray) -> float:
    """2-D distance Wrist(0) -> Middle MCP(9)."""
    return float(np.linalg.norm(coords[MIDDLE_MCP, :2] - coords[WRIST, :2]))


def build_hand_frame(landmark_list: Any,
                     scale_hint: Optional[float] = None) -> HandFrame:
    """
    Validates and packs 21 landmarks into a HandFrame.

    Steps:
    1. Convert to NumPy (MediaPipe objects or raw x/y[/z] rows).
    2. Validate shape and values.
    3. Derive the scale unless the source already supplied one.

    Raises:
        TransientFrameFault: wrong point count, non-finite values or zero scale.
    """
    # 1. Data Structuring
    try:
        if len(landmark_list) and hasattr(landmark_list[0], 'x'):
            coords = np.array([[lm.x, lm.y, getattr(lm, 'z', 0.0)] for lm in landmark_list],
                              dtype=np.float64)
        else:
            coords = np.array(landmark_list, dtype=np.float64)
            if coords.ndim == 2 and coords.shape[1] == 2:
                coords = np.hstack([coords, np.zeros((coords.shape[0], 1))])
    except (TypeError, ValueError) as e:
        raise TransientFrameFault(f"Unreadable landmarks: {e}") from e

    # 2. Validation
    if coords.shape != (NUM_LANDMARKS, 3):
        raise TransientFrameFault(f"Expected {NUM_LANDMARKS} landmarks, got shape {coords.shape}")
    if not np.all(np.isfinite(coords)):
        raise TransientFrameFault("Landmarks contain non-finite values")

    # 3. Scale
    scale = hand_scale(coords) if scale_hint is None else float(scale_hint)
    if not np.isfinite(scale) or scale <= 0:
        raise TransientFrameFault(f"Degenerate hand scale: {scale}")

    coords.setflags(write=False)
    return HandFrame(coords=coords, scale=scale)


def select_main_hand(frames: Optional[Sequence[HandFrame]]) -> Optional[HandFrame]:
    """The hand closest to the camera (largest projected scale) drives the scene."""
    if not frames:
        return None
    return max(frames, key=lambda f: f.scale)


def pinch_centroid(frame: HandFrame) -> Point2D:
    """Midpoint between Thumb tip(4) and Index tip(8)."""
    thumb, index = frame.landmark(THUMB_TIP), frame.landmark(INDEX_TIP)
    return Point2D((thumb.x + index.x) / 2.0, (thumb.y + index.y) / 2.0)
