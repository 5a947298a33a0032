"""
HandTree Kinematics (Motion Integrator).
=======================================

Maps pinch drags to continuous scene signals.

Key Logic: "Anchor & Delta"
1. While navigating, the previous pinch centroid and hand scale act as anchors.
2. Horizontal centroid delta sets the rotation velocity.
3. Scale delta (hand moving toward / away from the camera) nudges the zoom.

Outside navigation the velocity coasts down geometrically and snaps to zero,
so the scene always comes to rest in a bounded number of frames.
"""
from dataclasses import dataclass, replace
from typing import Optional

from handtree.config import CONFIG
from handtree.core.types import HandFrame, Point2D
from handtree.hand_utils import pinch_centroid


@dataclass(frozen=True)
class MotionState:
    rotation_velocity: float = 0.0
    zoom: float = 0.5
    last_centroid: Optional[Point2D] = None
    last_scale: Optional[float] = None


class MotionIntegrator:
    def __init__(self, rotation_sensitivity=None, zoom_sensitivity=None,
                 decay=None, epsilon=None):
        self.rotation_sensitivity = (CONFIG["ROTATION_SENSITIVITY"]
                                     if rotation_sensitivity is None else rotation_sensitivity)
        self.zoom_sensitivity = (CONFIG["ZOOM_SENSITIVITY"]
                                 if zoom_sensitivity is None else zoom_sensitivity)
        self.decay_rate = CONFIG["INERTIA_DECAY"] if decay is None else decay
        self.epsilon = CONFIG["INERTIA_EPSILON"] if epsilon is None else epsilon

    def initial_state(self, zoom: Optional[float] = None) -> MotionState:
        return MotionState(zoom=CONFIG["ZOOM_INITIAL"] if zoom is None else zoom)

    def navigate(self, motion: MotionState, frame: HandFrame) -> MotionState:
        """One pinch-drag step. Deltas need an anchor from the previous frame."""
        centroid = pinch_centroid(frame)
        velocity = motion.rotation_velocity
        zoom = motion.zoom

        if motion.last_centroid is not None:
            dx = centroid.x - motion.last_centroid.x
            velocity = -dx * self.rotation_sensitivity

        if motion.last_scale is not None:
            d_scale = frame.scale - motion.last_scale
            zoom = clamp_unit(zoom + d_scale * self.zoom_sensitivity)

        return MotionState(rotation_velocity=velocity, zoom=zoom,
                           last_centroid=centroid, last_scale=frame.scale)

    def decay(self, motion: MotionState) -> MotionState:
        """Inertia: one frame of geometric decay with snap-to-zero."""
        if motion.rotation_velocity == 0.0:
            return motion
        velocity = motion.rotation_velocity * self.decay_rate
        if abs(velocity) < self.epsilon:
            velocity = 0.0
        return replace(motion, rotation_velocity=velocity)

    def release(self, motion: MotionState) -> MotionState:
        """Navigation ended: drop the anchors, let the velocity coast."""
        return replace(motion, last_centroid=None, last_scale=None)

    def halt(self, motion: MotionState) -> MotionState:
        """Hand lost: drop the anchors and stop the spin. Zoom is kept."""
        return replace(motion, rotation_velocity=0.0, last_centroid=None, last_scale=None)


def clamp_unit(value: float) -> float:
    return max(0.0, min(1.0, value))
