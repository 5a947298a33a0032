"""
HandTree Mode Arbiter (The State Machine).
=========================================

Decides, once per detection tick, which interaction mode is active and which
discrete effects fire. Exactly one mode is active at a time, so navigation and
selection can never overlap.

Transition table (stable pose in, PINCH beats everything):

    any          + PINCH     -> NAVIGATION   (selection suppressed)
    NAVIGATION   + not PINCH -> IDLE         (anchors dropped, then re-evaluated)
    IDLE/ARMED   + POINTING  -> CLICK_ARMED
    CLICK_ARMED  + FIST      -> IDLE         (photo focus toggled: the click)
    IDLE         + FIST      -> IDLE         (FORMED, on the edge only)
    IDLE/ARMED   + OPEN      -> IDLE         (CHAOS on the edge, focus cleared)
    CLICK_ARMED  + UNKNOWN   -> IDLE         (disarmed)

Why arm first?
FIST ends both the click and the bulk "form" gesture. The only thing that
tells them apart is whether POINTING came right before it.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from handtree.core.types import InteractionMode, Pose, TreeState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Decision:
    mode: InteractionMode
    photo_focus: bool
    tree_state: Optional[TreeState] = None
    navigation_ended: bool = False

    @property
    def navigating(self) -> bool:
        return self.mode == InteractionMode.NAVIGATION


class ModeArbiter:
    def arbitrate(self,
                  mode: InteractionMode,
                  photo_focus: bool,
                  previous_stable: Pose,
                  stable: Pose) -> Decision:
        # 1. NAVIGATION (Highest priority)
        if stable == Pose.PINCH:
            if mode != InteractionMode.NAVIGATION:
                logger.debug("Mode %s -> NAVIGATION", mode.name)
            return Decision(InteractionMode.NAVIGATION, photo_focus=False)

        navigation_ended = mode == InteractionMode.NAVIGATION
        if navigation_ended:
            mode = InteractionMode.IDLE

        edge = stable != previous_stable
        tree_state = None
        new_mode = mode

        # 2. SELECTION (Arm -> Click)
        if stable == Pose.POINTING:
            new_mode = InteractionMode.CLICK_ARMED

        elif stable == Pose.FIST:
            new_mode = InteractionMode.IDLE
            if mode == InteractionMode.CLICK_ARMED:
                photo_focus = not photo_focus
                logger.info("Click: photo focus %s", "ON" if photo_focus else "OFF")
            elif edge:
                tree_state = TreeState.FORMED

        # 3. DISPERSE
        elif stable == Pose.OPEN:
            new_mode = InteractionMode.IDLE
            photo_focus = False
            if edge:
                tree_state = TreeState.CHAOS

        # 4. NOISE
        else:
            new_mode = InteractionMode.IDLE

        if new_mode != mode or navigation_ended:
            logger.debug("Mode %s -> %s",
                         "NAVIGATION" if navigation_ended else mode.name, new_mode.name)

        return Decision(new_mode, photo_focus, tree_state, navigation_ended)
