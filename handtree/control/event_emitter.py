"""
HandTree Event Emitter (The Actuator).
=====================================

Decouples the gesture core from whatever renders the scene.
The emitter has no logic of its own: it walks a SceneUpdate and calls the
matching listener method for every slot that is set.

Features:
- **Fire and forget:** A failing listener is logged, never propagated.
- **Callback adapter:** Plain functions can stand in for a listener class.
- **Mock listener:** Prints instead of rendering (CLI / tests).
"""

import logging
from typing import Callable, Optional

from handtree.core.interfaces import ISceneListener
from handtree.core.types import SceneUpdate, TreeState

logger = logging.getLogger(__name__)


# =============================================================================
# ADAPTERS
# =============================================================================
class CallbackListener(ISceneListener):
    """Wraps up to four plain callables. Missing ones are silently skipped."""
    def __init__(self,
                 on_state_change: Optional[Callable[[TreeState], None]] = None,
                 on_zoom_change: Optional[Callable[[float], None]] = None,
                 on_rotate_change: Optional[Callable[[float], None]] = None,
                 on_photo_focus_change: Optional[Callable[[bool], None]] = None):
        self._state = on_state_change
        self._zoom = on_zoom_change
        self._rotate = on_rotate_change
        self._focus = on_photo_focus_change

    def on_state_change(self, state):
        if self._state: self._state(state)
    def on_zoom_change(self, factor):
        if self._zoom: self._zoom(factor)
    def on_rotate_change(self, velocity):
        if self._rotate: self._rotate(velocity)
    def on_photo_focus_change(self, focused):
        if self._focus: self._focus(focused)


class MockSceneListener(ISceneListener):
    """
    Silent-ish implementation for the demo app and headless runs.
    Prints discrete events; continuous signals are only remembered.
    """
    def __init__(self):
        self.tree_state = TreeState.CHAOS
        self.zoom = 0.5
        self.rotation = 0.0
        self.photo_focus = False

    def on_state_change(self, state):
        self.tree_state = state
        print(f"[MOCK] Tree {state.value}")
    def on_zoom_change(self, factor): self.zoom = factor
    def on_rotate_change(self, velocity): self.rotation = velocity
    def on_photo_focus_change(self, focused):
        self.photo_focus = focused
        print(f"[MOCK] Photo focus {'ON' if focused else 'OFF'}")


# =============================================================================
# EMITTER
# =============================================================================
class EventEmitter:
    def __init__(self, listener: ISceneListener):
        self.listener = listener

    def dispatch(self, update: SceneUpdate) -> None:
        if update.tree_state is not None:
            self._fire(self.listener.on_state_change, update.tree_state)
        if update.zoom is not None:
            self._fire(self.listener.on_zoom_change, update.zoom)
        if update.rotation is not None:
            self._fire(self.listener.on_rotate_change, update.rotation)
        if update.photo_focus is not None:
            self._fire(self.listener.on_photo_focus_change, update.photo_focus)

    @staticmethod
    def _fire(callback, value):
        try:
            callback(value)
        except Exception:
            logger.exception("Scene listener %s failed", getattr(callback, "__name__", callback))
