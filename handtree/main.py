"""
HandTree - Main Entry Point.
===========================

Demo host for the gesture core. It plays the role the 3-D scene normally plays:
1. Opens the Perception Layer (Camera + MediaPipe) through a GestureSession.
2. Drives `session.tick()` once per preview frame (the render loop).
3. Prints scene events through the mock listener.
4. Renders the debug HUD.

Usage:
    $ python -m handtree.main
"""
import logging
import time

import cv2
import numpy as np

from handtree.config import CONFIG, validate_config
from handtree.control.event_emitter import MockSceneListener
from handtree.control.session import GestureSession
from handtree.ui.hud import HUD
from handtree.vision.landmark_source import MediaPipeLandmarkSource


def main():
    """
    Main Event Loop.
    """
    # 1. Boot Sequence
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
    validate_config(CONFIG)
    print("🎄 HANDTREE GESTURE CORE: ONLINE")
    print("   -> Pinch + Move   = Rotate / Zoom")
    print("   -> Point, then Fist = Photo focus")
    print("   -> Fist / Open    = Form / Disperse tree")
    print("   -> Press 'ESC' to Exit, 'V' to Toggle Visuals")

    # 2. Initialize Subsystems
    hud = HUD()
    listener = MockSceneListener()
    session = GestureSession(listener, MediaPipeLandmarkSource)
    if session.status:
        print(f"⚠️ {session.status}: running without gestures")

    window_name = "HandTree"
    cv2.namedWindow(window_name)
    blank = np.zeros((CONFIG["CAMERA_HEIGHT"], CONFIG["CAMERA_WIDTH"], 3), dtype=np.uint8)

    prev_time = 0
    show_visuals = True

    try:
        while True:
            now = time.monotonic()
            session.tick(now)

            src = session.source
            frame = src.last_frame if src is not None and src.last_frame is not None else blank
            frame = hud.prepare(frame)

            if show_visuals:
                hud.render(frame, session)

            # Performance Monitoring
            fps = 1/(now-prev_time) if (now-prev_time)>0 else 0
            prev_time = now
            hud.draw_fps(frame, fps)

            cv2.imshow(window_name, frame)

            # Input Handling
            k = cv2.waitKey(1)
            if k == 27: break # ESC
            elif k == ord('v'): show_visuals = not show_visuals

    finally:
        # Graceful Shutdown
        session.close()
        cv2.destroyAllWindows()
        print("🔴 SYSTEM OFFLINE")

if __name__ == "__main__":
    main()
