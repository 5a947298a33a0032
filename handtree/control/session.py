"""
HandTree Session (The Scheduler Boundary).
=========================================

The host calls `tick(now)` once per render frame. Two cadences share that call:

1. **Fast:** Inertia decay runs on every tick.
2. **Slow:** Every DETECTION_INTERVAL seconds a new HandFrame is pulled and the
   full classify -> debounce -> arbitrate -> integrate chain runs.

The throttle is an elapsed-time guard on the caller's thread. There is no
parallelism and no locking: ControllerState is only ever touched here.

Failure policy: nothing raised below this line reaches the host.
Source / detector failures disable gestures for the session; a bad frame
counts as "hand lost" for one tick.
"""

import logging
from typing import Callable, Optional

from handtree.config import CONFIG
from handtree.control.controller import GestureController
from handtree.control.event_emitter import EventEmitter
from handtree.core.errors import DetectorUnavailable, SourceUnavailable, TransientFrameFault
from handtree.core.interfaces import ILandmarkSource, ISceneListener
from handtree.core.types import HandFrame, SceneUpdate
from handtree.hand_utils import select_main_hand

logger = logging.getLogger(__name__)

STATUS_READY = ""
STATUS_NO_CAMERA = "Camera unavailable"
STATUS_NO_DETECTOR = "Detector unavailable"


class GestureSession:
    """
    Attributes:
        state (ControllerState): The single owner of all cross-tick state.
        status (str): One-time user-facing status; empty while healthy.
        main_hand (HandFrame): Hand used on the last detection tick (HUD).
    """
    def __init__(self,
                 listener: ISceneListener,
                 source_factory: Callable[[], ILandmarkSource],
                 controller: Optional[GestureController] = None,
                 detection_interval: Optional[float] = None):
        self.controller = controller or GestureController()
        self.emitter = EventEmitter(listener)
        self.interval = (CONFIG["DETECTION_INTERVAL"]
                         if detection_interval is None else detection_interval)

        self.state = self.controller.initial_state()
        self.status = STATUS_READY
        self.main_hand: Optional[HandFrame] = None
        self.source: Optional[ILandmarkSource] = None
        self.closed = False
        self._last_detection: Optional[float] = None

        self._open_source(source_factory)

    def _open_source(self, source_factory):
        try:
            self.source = source_factory()
        except SourceUnavailable as e:
            logger.error("Landmark source unavailable, gestures disabled: %s", e)
            self.status = STATUS_NO_CAMERA
        except DetectorUnavailable as e:
            logger.error("Hand detector unavailable, gestures disabled: %s", e)
            self.status = STATUS_NO_DETECTOR

    @property
    def active(self) -> bool:
        return self.source is not None and not self.closed

    def tick(self, now: float) -> SceneUpdate:
        """One render frame. Returns the update that was dispatched."""
        if self.closed:
            return SceneUpdate()

        # 1. Physics (every frame)
        self.state, update = self.controller.coast(self.state)

        # 2. Perception (throttled)
        if self.active and (self._last_detection is None
                            or now - self._last_detection >= self.interval):
            self._last_detection = now
            self.state, detected = self._detect()
            update = update.merge(detected)

        if not update.is_empty:
            self.emitter.dispatch(update)
        return update

    def _detect(self):
        try:
            frame = select_main_hand(self.source.read())
            self.main_hand = frame
            return self.controller.step(self.state, frame)
        except TransientFrameFault as e:
            logger.warning("Skipping frame: %s", e)
        except Exception:
            logger.exception("Gesture pipeline failed on this frame")
        self.main_hand = None
        return self.controller.hand_lost(self.state)

    def close(self) -> None:
        """Session teardown. Synchronous and idempotent."""
        if self.closed:
            return
        self.closed = True
        if self.source is not None:
            try:
                self.source.release()
            finally:
                self.source = None
