"""
HandTree Controller.
Acts as the central nervous system: one synchronous call chain per tick.

    state', update = controller.step(state, frame_or_none)   # detection tick
    state', update = controller.coast(state)                  # every render frame

Neither method keeps state of its own; the caller owns ControllerState.
"""

import logging
from dataclasses import replace
from typing import Optional, Tuple

from handtree.control.arbiter import ModeArbiter
from handtree.core.kinematics import MotionIntegrator
from handtree.core.stabilizer import PoseStabilizer
from handtree.core.state_manager import ControllerState, reset_for_hand_lost
from handtree.core.types import HandFrame, InteractionMode, Pose, SceneUpdate
from handtree.gesture_engine import PoseClassifier

logger = logging.getLogger(__name__)


class GestureController:
    def __init__(self, classifier=None, stabilizer=None, arbiter=None, integrator=None):
        self.classifier = classifier or PoseClassifier()
        self.stabilizer = stabilizer or PoseStabilizer()
        self.arbiter = arbiter or ModeArbiter()
        self.integrator = integrator or MotionIntegrator()

    def initial_state(self) -> ControllerState:
        return ControllerState(motion=self.integrator.initial_state())

    def step(self, state: ControllerState,
             frame: Optional[HandFrame]) -> Tuple[ControllerState, SceneUpdate]:
        if frame is None:
            return self.hand_lost(state)

        # 1. Classify -> Debounce
        raw = self.classifier.classify(frame)
        pose_filter = self.stabilizer.update(state.pose_filter, raw)

        # 2. Arbitrate
        decision = self.arbiter.arbitrate(state.mode, state.photo_focus,
                                          state.stable_pose, pose_filter.stable)

        # 3. Integrate motion
        # Only a raw PINCH drives the drag. A released hand whose stable pose is
        # still PINCH (debounce pending) lets go of the anchors and coasts.
        motion = state.motion
        if decision.navigating and raw == Pose.PINCH:
            motion = self.integrator.navigate(motion, frame)
        elif decision.navigating or decision.navigation_ended:
            motion = self.integrator.release(motion)

        new_state = replace(state, pose_filter=pose_filter, last_raw_pose=raw,
                            mode=decision.mode, photo_focus=decision.photo_focus,
                            motion=motion)
        return new_state, self._diff(state, new_state, decision.tree_state)

    def hand_lost(self, state: ControllerState) -> Tuple[ControllerState, SceneUpdate]:
        if state.mode != InteractionMode.IDLE:
            logger.debug("Hand lost in %s", state.mode.name)
        new_state = reset_for_hand_lost(state, self.integrator.halt(state.motion))
        return new_state, self._diff(state, new_state)

    def coast(self, state: ControllerState) -> Tuple[ControllerState, SceneUpdate]:
        """Render-frame physics. An active drag owns the velocity, so no decay while it runs."""
        if state.mode == InteractionMode.NAVIGATION and state.last_raw_pose == Pose.PINCH:
            return state, SceneUpdate()
        new_state = replace(state, motion=self.integrator.decay(state.motion))
        return new_state, self._diff(state, new_state)

    @staticmethod
    def _diff(old: ControllerState, new: ControllerState, tree_state=None) -> SceneUpdate:
        """Only values that actually changed make it to the scene."""
        old_m, new_m = old.motion, new.motion
        return SceneUpdate(
            tree_state=tree_state,
            zoom=new_m.zoom if new_m.zoom != old_m.zoom else None,
            rotation=(new_m.rotation_velocity
                      if new_m.rotation_velocity != old_m.rotation_velocity else None),
            photo_focus=new.photo_focus if new.photo_focus != old.photo_focus else None,
        )
