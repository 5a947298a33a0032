"""
HandTree State Management.
One immutable value owns everything that survives between ticks.
Each pipeline stage receives it explicitly and returns a new one.
"""
from dataclasses import dataclass, field, replace

from handtree.config import CONFIG
from handtree.core.kinematics import MotionState
from handtree.core.stabilizer import PoseFilterState
from handtree.core.types import InteractionMode, Pose


@dataclass(frozen=True)
class ControllerState:
    # --- POSE HISTORY ---
    pose_filter: PoseFilterState = field(default_factory=PoseFilterState)
    last_raw_pose: Pose = Pose.UNKNOWN  # Diagnostics only (HUD / labs)

    # --- LOGIC FLAGS ---
    mode: InteractionMode = InteractionMode.IDLE
    photo_focus: bool = False

    # --- PHYSICS ---
    motion: MotionState = field(default_factory=lambda: MotionState(zoom=CONFIG["ZOOM_INITIAL"]))

    @property
    def stable_pose(self) -> Pose:
        return self.pose_filter.stable


def reset_for_hand_lost(state: ControllerState, motion: MotionState) -> ControllerState:
    """Unconditional reset: debounce history, mode and photo focus."""
    return replace(state,
                   pose_filter=PoseFilterState(),
                   last_raw_pose=Pose.UNKNOWN,
                   mode=InteractionMode.IDLE,
                   photo_focus=False,
                   motion=motion)
