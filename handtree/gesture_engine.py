"""
HandTree Pose Classifier (The Referee).
======================================

This module maps one HandFrame to one instantaneous `Pose`.
It is pure geometry: no model, no history, no hidden state.

How a finger is judged:
Each non-thumb finger compares the wrist distance of its tip with the wrist
distance of its PIP joint. A tip clearly further out than the joint means
"extended"; a tip pulled back to the joint or closer means "curled". The two
predicates are deliberately NOT complementary: a finger in between is neither,
and poses that need it fall through to UNKNOWN instead of guessing.

Priority (first match wins):
PINCH > POINTING > FIST > OPEN > UNKNOWN
"""

from typing import Optional, Tuple

import numpy as np

from handtree.config import CONFIG
from handtree.core.types import (
    HandFrame, Pose, FINGER_JOINTS, WRIST, THUMB_TIP, INDEX_TIP
)


_TIPS = [tip for tip, _ in FINGER_JOINTS]
_PIPS = [pip for _, pip in FINGER_JOINTS]


class PoseClassifier:
    """
    Stateless geometric classifier.

    Attributes:
        t_extended (float): Tip must reach beyond pip * t_extended.
        t_curled (float): Tip must stay inside pip * t_curled.
        t_pinch (float): Max thumb-index distance, in hand-scale units.
        strict_pinch (bool): Pinch also requires middle/ring/pinky extended.
    """
    def __init__(self, t_extended=None, t_curled=None, t_pinch=None, strict_pinch=None):
        self.t_extended = CONFIG["T_EXTENDED"] if t_extended is None else t_extended
        self.t_curled = CONFIG["T_CURLED"] if t_curled is None else t_curled
        self.t_pinch = CONFIG["T_PINCH"] if t_pinch is None else t_pinch
        self.strict_pinch = CONFIG["PINCH_REQUIRE_OPEN_FINGERS"] if strict_pinch is None else strict_pinch

    def finger_states(self, frame: HandFrame) -> Tuple[np.ndarray, np.ndarray]:
        """
        Returns (extended, curled) boolean arrays ordered index, middle, ring, pinky.
        """
        xy = frame.coords[:, :2]
        wrist = xy[WRIST]
        d_tip = np.linalg.norm(xy[_TIPS] - wrist, axis=1)
        d_pip = np.linalg.norm(xy[_PIPS] - wrist, axis=1)
        return d_tip > d_pip * self.t_extended, d_tip < d_pip * self.t_curled

    def pinch_distance(self, frame: HandFrame) -> float:
        """Thumb tip(4) to Index tip(8), normalized by hand scale."""
        xy = frame.coords[:, :2]
        return float(np.linalg.norm(xy[THUMB_TIP] - xy[INDEX_TIP])) / frame.scale

    def classify(self, frame: Optional[HandFrame]) -> Pose:
        if frame is None:
            return Pose.UNKNOWN

        extended, curled = self.finger_states(frame)

        # --- RULE 1: PINCH (Navigation drag) ---
        if self.pinch_distance(frame) < self.t_pinch:
            if not self.strict_pinch or extended[1:].all():
                return Pose.PINCH

        # --- RULE 2: POINTING (Arms the click) ---
        if extended[0] and curled[1:].all():
            return Pose.POINTING

        # --- RULE 3: FIST ---
        if curled.all():
            return Pose.FIST

        # --- RULE 4: OPEN ---
        if extended.all():
            return Pose.OPEN

        return Pose.UNKNOWN
