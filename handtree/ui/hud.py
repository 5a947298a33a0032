"""
HandTree HUD.
Debug overlay for the camera preview: skeleton colored by mode, mode/pose panel.

Landmarks arrive in raw camera space. When the preview is mirrored (selfie
view) the HUD flips the image and the landmark X together so they stay aligned.
"""

import cv2
import numpy as np
import mediapipe as mp

from handtree.config import CONFIG
from handtree.core.types import InteractionMode, NUM_LANDMARKS
from handtree.hand_utils import pinch_centroid


class HUD:
    def __init__(self, mirror=None):
        self.connections = mp.solutions.hands.HAND_CONNECTIONS
        self.mirror = CONFIG["MIRROR_PREVIEW"] if mirror is None else mirror

        # --- THEME COLORS (BGR) ---
        self.C_GREEN = (68, 255, 0)      # IDLE
        self.C_CYAN = (255, 255, 0)      # NAVIGATION
        self.C_PINK = (102, 51, 255)     # CLICK_ARMED
        self.C_GOLD = (0, 215, 255)      # Panel title
        self.C_GREY = (204, 204, 204)    # Panel subtitle
        self.C_WHITE = (255, 255, 255)
        self.C_DARK = (0, 0, 0)

    def mode_color(self, mode: InteractionMode):
        if mode == InteractionMode.NAVIGATION:
            return self.C_CYAN
        if mode == InteractionMode.CLICK_ARMED:
            return self.C_PINK
        return self.C_GREEN

    def prepare(self, frame):
        """Returns a drawable copy of the camera image, mirrored if configured."""
        return cv2.flip(frame, 1) if self.mirror else frame.copy()

    def to_pixel(self, x, y, w, h):
        if self.mirror:
            x = 1.0 - x
        return int(x * w), int(y * h)

    def _draw_glass_panel(self, img, x, y, w, h, color, alpha=0.7):
        """Draws a semi-transparent background."""
        if y+h > img.shape[0] or x+w > img.shape[1] or x < 0 or y < 0: return

        sub_img = img[y:y+h, x:x+w]
        fill = np.full(sub_img.shape, color, dtype=np.uint8)
        img[y:y+h, x:x+w] = cv2.addWeighted(sub_img, 1 - alpha, fill, alpha, 1.0)

    def render(self, frame, session):
        """Draws on `frame` in place. `frame` must already come from prepare()."""
        h, w, _ = frame.shape
        state = session.state
        hand = session.main_hand

        # 1. SKELETON
        if hand is not None:
            color = self.mode_color(state.mode)
            pts = []
            for i in range(NUM_LANDMARKS):
                lm = hand.landmark(i)
                pts.append(self.to_pixel(lm.x, lm.y, w, h))
            for a, b in self.connections:
                cv2.line(frame, pts[a], pts[b], color, 4)
            for p in pts:
                cv2.circle(frame, p, 4, self.C_WHITE, 2)

            # Drag anchor
            if state.mode == InteractionMode.NAVIGATION:
                c = pinch_centroid(hand)
                cv2.circle(frame, self.to_pixel(c.x, c.y, w, h), 10, self.C_CYAN, -1)

        # 2. STATUS PANEL
        if hand is None:
            title, subtitle = "Scanning...", InteractionMode.IDLE.value
        else:
            title, subtitle = f"Mode: {state.mode.value}", state.last_raw_pose.value

        self._draw_glass_panel(frame, 10, 10, 220, 50, self.C_DARK)
        cv2.putText(frame, title, (20, 30), cv2.FONT_HERSHEY_SIMPLEX, 0.5, self.C_GOLD, 2)
        cv2.putText(frame, subtitle, (20, 48), cv2.FONT_HERSHEY_SIMPLEX, 0.4, self.C_GREY, 1)

        # 3. SESSION STATUS (one-time errors)
        if session.status:
            cv2.putText(frame, session.status, (20, h - 20),
                        cv2.FONT_HERSHEY_SIMPLEX, 0.6, self.C_PINK, 2)

    def draw_fps(self, frame, fps):
        cv2.putText(frame, f"{int(fps)} FPS", (frame.shape[1]-100, 40),
                    cv2.FONT_HERSHEY_PLAIN, 1.2, self.C_GREEN, 1)
