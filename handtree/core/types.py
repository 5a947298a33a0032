"""
HandTree Types.
Central definition of Data Contracts to prevent circular imports.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import numpy as np

# --- LANDMARK INDICES (MediaPipe Hand topology) ---
WRIST = 0
THUMB_TIP = 4
INDEX_PIP, INDEX_TIP = 6, 8
MIDDLE_MCP = 9
MIDDLE_PIP, MIDDLE_TIP = 10, 12
RING_PIP, RING_TIP = 14, 16
PINKY_PIP, PINKY_TIP = 18, 20
NUM_LANDMARKS = 21

# (tip, pip) pairs for the four non-thumb fingers: index, middle, ring, pinky
FINGER_JOINTS = (
    (INDEX_TIP, INDEX_PIP),
    (MIDDLE_TIP, MIDDLE_PIP),
    (RING_TIP, RING_PIP),
    (PINKY_TIP, PINKY_PIP),
)

# --- GEOMETRY TYPES ---
@dataclass(frozen=True)
class Point2D:
    x: float
    y: float

@dataclass(frozen=True)
class Landmark:
    x: float
    y: float
    z: float = 0.0

@dataclass(frozen=True, eq=False)
class HandFrame:
    """
    One detection tick worth of hand data.

    Attributes:
        coords: (21, 3) float array of normalized x, y and relative z.
        scale: Wrist -> middle MCP distance. Every classifier distance is
            divided by it so thresholds do not depend on hand size.
    """
    coords: np.ndarray
    scale: float

    def landmark(self, idx: int) -> Landmark:
        x, y, z = self.coords[idx]
        return Landmark(float(x), float(y), float(z))

# --- GESTURE TYPES ---
class Pose(Enum):
    OPEN = "OPEN"
    FIST = "FIST"
    PINCH = "PINCH"
    POINTING = "POINTING"
    UNKNOWN = "UNKNOWN"

class InteractionMode(Enum):
    IDLE = "IDLE"
    NAVIGATION = "NAVIGATION"
    CLICK_ARMED = "CLICK_ARMED"

class TreeState(Enum):
    CHAOS = "CHAOS"
    FORMED = "FORMED"

# --- OUTPUT TYPES ---
@dataclass(frozen=True)
class SceneUpdate:
    """
    Everything the scene has to hear about after one tick.
    One slot per callback; None means "nothing to report".
    """
    tree_state: Optional[TreeState] = None
    zoom: Optional[float] = None
    rotation: Optional[float] = None
    photo_focus: Optional[bool] = None

    @property
    def is_empty(self) -> bool:
        return (self.tree_state is None and self.zoom is None
                and self.rotation is None and self.photo_focus is None)

    def merge(self, later: "SceneUpdate") -> "SceneUpdate":
        """Combines two updates of the same frame. Slots set by `later` win."""
        return SceneUpdate(
            tree_state=later.tree_state if later.tree_state is not None else self.tree_state,
            zoom=later.zoom if later.zoom is not None else self.zoom,
            rotation=later.rotation if later.rotation is not None else self.rotation,
            photo_focus=later.photo_focus if later.photo_focus is not None else self.photo_focus,
        )
