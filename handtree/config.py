"""
HandTree Configuration Management.
==================================

This module defines the tunable parameter space of the gesture core.
The parameters are organized into the same "Layer Cake" as the pipeline:
Detection cadence -> Classifier -> Debounce -> Motion Physics -> Hardware.

! WARNING !
Classifier thresholds are ratios, not pixels. They only make sense relative
to each other (T_CURLED must stay at or below T_EXTENDED).
Changing the Physics layer affects the "feel" of the scene immediately.
"""

from typing import Any, Dict

# --- MASTER CONFIGURATION ---
CONFIG = {
    # =========================================================
    # LAYER 0: CADENCE (The Throttle)
    # =========================================================
    "DETECTION_INTERVAL": 0.025,    # Seconds between landmark reads (~40 Hz)

    # =========================================================
    # LAYER 1: POSE CLASSIFIER (The Referee)
    # =========================================================
    "T_EXTENDED": 1.15,             # tip/pip wrist-distance ratio above which a finger is "out"
    "T_CURLED": 1.05,               # ratio below which a finger is "in"
    "T_PINCH": 0.35,                # thumb-index distance / hand scale
    "PINCH_REQUIRE_OPEN_FINGERS": True,  # Strict pinch: middle/ring/pinky must be out

    # =========================================================
    # LAYER 2: DEBOUNCE (Hysteresis)
    # =========================================================
    "CONFIRM_WINDOW": 2,            # K: consecutive identical raw poses to commit

    # =========================================================
    # LAYER 3: MOTION PHYSICS (Inertia & Zoom)
    # =========================================================
    "ROTATION_SENSITIVITY": 12.0,   # velocity = -dx * sensitivity
    "INERTIA_DECAY": 0.90,          # Per-frame multiplier when not navigating
    "INERTIA_EPSILON": 0.001,       # |velocity| below this snaps to 0
    "ZOOM_SENSITIVITY": 6.0,        # zoom += d_scale * sensitivity
    "ZOOM_INITIAL": 0.5,            # 0 = Far, 1 = Close

    # =========================================================
    # LAYER 4: HARDWARE (Camera & Detector)
    # =========================================================
    "CAMERA_INDEX": 0,              # OpenCV device ID
    "CAMERA_WIDTH": 640,
    "CAMERA_HEIGHT": 480,
    "CAMERA_FPS": 30,
    "MIRROR_PREVIEW": True,         # Selfie view for the preview only (landmarks stay raw)
    "MAX_NUM_HANDS": 2,             # Detected; only the largest one is used
    "MIN_DETECTION_CONFIDENCE": 0.5,
    "MIN_TRACKING_CONFIDENCE": 0.5,
    "MODEL_COMPLEXITY": 1,          # 0=Fast, 1=Balanced
}


def validate_config(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """
    Sanity-checks a configuration dict before it reaches the pipeline.

    Raises:
        ValueError: naming the first offending key.
    """
    def require(key: str, ok: bool, rule: str):
        if not ok:
            raise ValueError(f"Invalid config {key}={cfg.get(key)!r}: {rule}")

    require("DETECTION_INTERVAL", cfg["DETECTION_INTERVAL"] > 0, "must be > 0")
    require("T_EXTENDED", cfg["T_EXTENDED"] > 0, "must be > 0")
    require("T_CURLED", 0 < cfg["T_CURLED"] <= cfg["T_EXTENDED"], "must be in (0, T_EXTENDED]")
    require("T_PINCH", cfg["T_PINCH"] > 0, "must be > 0")
    require("CONFIRM_WINDOW",
            isinstance(cfg["CONFIRM_WINDOW"], int) and cfg["CONFIRM_WINDOW"] >= 1,
            "must be an int >= 1")
    require("INERTIA_DECAY", 0 < cfg["INERTIA_DECAY"] < 1, "must be in (0, 1)")
    require("INERTIA_EPSILON", cfg["INERTIA_EPSILON"] > 0, "must be > 0")
    require("ZOOM_INITIAL", 0.0 <= cfg["ZOOM_INITIAL"] <= 1.0, "must be in [0, 1]")
    return cfg
