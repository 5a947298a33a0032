"""
HandTree Perception Layer (Camera + MediaPipe Hands).
====================================================

The only module that touches hardware. It produces zero or more HandFrames per
call to `read()` and maps startup failures onto the session's error taxonomy:

- camera cannot be opened      -> SourceUnavailable
- MediaPipe fails to construct -> DetectorUnavailable

Landmarks are reported in raw camera space (not mirrored). Mirroring is a
preview concern and lives in the HUD.
"""

import logging
import threading
from typing import List, Optional, Tuple

import cv2
import numpy as np

from handtree.config import CONFIG
from handtree.core.errors import DetectorUnavailable, SourceUnavailable
from handtree.core.interfaces import ILandmarkSource
from handtree.core.types import HandFrame
from handtree.hand_utils import build_hand_frame

logger = logging.getLogger(__name__)


class ThreadedCamera:
    """
    Non-blocking Camera Reader.

    cv2.VideoCapture.read() blocks until the next frame arrives. Running the
    I/O in a daemon thread means the render loop always gets the freshest
    frame available without waiting on the sensor.

    Once the stream ends, `read()` reports (False, None) so the pipeline sees
    "no hand" instead of the last frozen image.
    """
    JOIN_TIMEOUT = 1.0

    def __init__(self, src: int = 0, width: int = 640, height: int = 480, fps: int = 30):
        self.cap = cv2.VideoCapture(src)
        if not self.cap.isOpened():
            self.cap.release()
            raise SourceUnavailable(f"Failed to open camera {src}")

        self.cap.set(cv2.CAP_PROP_FRAME_WIDTH, width)
        self.cap.set(cv2.CAP_PROP_FRAME_HEIGHT, height)
        self.cap.set(cv2.CAP_PROP_FPS, fps)

        self.ret, self.frame = self.cap.read()
        self.running = True
        self.lock = threading.Lock()

        # Start the I/O thread
        self.thread = threading.Thread(target=self._reader, daemon=True)
        self.thread.start()

    def _reader(self):
        """Background thread loop for frame grabbing."""
        while self.running:
            ret, frame = self.cap.read()
            if not ret:
                logger.warning("Camera stream ended")
                break
            # Lock ensures we don't read a half-written frame
            with self.lock:
                self.ret, self.frame = ret, frame

        # Stream gone (or stopped): never serve a stale frame
        self.running = False
        with self.lock:
            self.ret, self.frame = False, None

    def read(self) -> Tuple[bool, Optional[np.ndarray]]:
        """Returns the most recent frame. Non-blocking."""
        with self.lock:
            return self.ret, self.frame.copy() if self.frame is not None else None

    def release(self):
        """Stops the thread, waits for it, then releases hardware."""
        self.running = False
        if self.thread.is_alive() and self.thread is not threading.current_thread():
            self.thread.join(timeout=self.JOIN_TIMEOUT)
        self.cap.release()


class MediaPipeLandmarkSource(ILandmarkSource):
    """
    Webcam -> MediaPipe Hands -> HandFrames.

    Attributes:
        last_frame (np.ndarray): Latest BGR image as captured, for the HUD.
        last_landmarks (list): Raw MediaPipe landmark lists of that image.
    """
    def __init__(self, camera_index=None):
        self.last_frame: Optional[np.ndarray] = None
        self.last_landmarks: list = []
        self.hands = None

        index = CONFIG["CAMERA_INDEX"] if camera_index is None else camera_index

        # 1. Camera first: without it there is nothing to detect on
        self.camera = ThreadedCamera(
            index,
            CONFIG["CAMERA_WIDTH"], CONFIG["CAMERA_HEIGHT"], CONFIG["CAMERA_FPS"])

        # 2. Detector
        try:
            import mediapipe as mp
            self.hands = mp.solutions.hands.Hands(
                static_image_mode=False,
                max_num_hands=CONFIG["MAX_NUM_HANDS"],
                min_detection_confidence=CONFIG["MIN_DETECTION_CONFIDENCE"],
                min_tracking_confidence=CONFIG["MIN_TRACKING_CONFIDENCE"],
                model_complexity=CONFIG["MODEL_COMPLEXITY"],
            )
        except (ImportError, RuntimeError, OSError) as e:
            self.camera.release()
            raise DetectorUnavailable(f"MediaPipe Hands failed to initialize: {e}") from e
        except Exception:
            self.camera.release()
            raise

        logger.info("Landmark source online (camera %s)", index)

    def read(self) -> Optional[List[HandFrame]]:
        ret, frame = self.camera.read()
        if not ret or frame is None:
            self.last_frame = None
            self.last_landmarks = []
            return None

        # MediaPipe requires RGB; OpenCV uses BGR.
        self.last_frame = frame
        results = self.hands.process(cv2.cvtColor(frame, cv2.COLOR_BGR2RGB))

        self.last_landmarks = list(results.multi_hand_landmarks or [])
        return [build_hand_frame(hand.landmark) for hand in self.last_landmarks]

    def release(self) -> None:
        if self.hands is not None:
            self.hands.close()
            self.hands = None
        if self.camera is not None:
            self.camera.release()
            self.camera = None
