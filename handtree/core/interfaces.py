"""
HandTree Core Interfaces.
Defines the abstract contracts for the two external collaborators:
the landmark source (input) and the scene (output).
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from handtree.core.types import HandFrame, TreeState


class ILandmarkSource(ABC):
    """
    Abstract Protocol for hand-landmark input.
    """
    @abstractmethod
    def read(self) -> Optional[Sequence[HandFrame]]:
        """All hands seen in the newest camera frame. None or empty = hand lost."""

    @abstractmethod
    def release(self) -> None:
        """Frees camera and detector. Must be safe to call twice."""


class ISceneListener(ABC):
    """
    Abstract Protocol for the presentation layer.
    """
    @abstractmethod
    def on_state_change(self, state: TreeState) -> None: pass
    @abstractmethod
    def on_zoom_change(self, factor: float) -> None: pass
    @abstractmethod
    def on_rotate_change(self, velocity: float) -> None: pass
    @abstractmethod
    def on_photo_focus_change(self, focused: bool) -> None: pass
