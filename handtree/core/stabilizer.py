"""
HandTree Stabilization Layer (The Debouncer).
Dual-speed hysteresis: discrete poses wait for K confirmations, PINCH does not.
"""
from dataclasses import dataclass

from handtree.config import CONFIG
from handtree.core.types import Pose


@dataclass(frozen=True)
class PoseFilterState:
    stable: Pose = Pose.UNKNOWN     # The debounced pose everyone downstream sees
    candidate: Pose = Pose.UNKNOWN  # Raw pose currently collecting confirmations
    count: int = 0                  # Consecutive ticks the candidate has been seen


class PoseStabilizer:
    def __init__(self, confirm_window=None):
        self.k = CONFIG["CONFIRM_WINDOW"] if confirm_window is None else confirm_window

    def update(self, state: PoseFilterState, raw: Pose) -> PoseFilterState:
        # Bypass: drag manipulation must not lag behind the hand
        if raw == Pose.PINCH:
            return PoseFilterState(stable=Pose.PINCH)

        if raw == state.stable:
            return PoseFilterState(stable=state.stable)

        count = state.count + 1 if raw == state.candidate else 1
        if count >= self.k:
            return PoseFilterState(stable=raw)
        return PoseFilterState(stable=state.stable, candidate=raw, count=count)

    def reset(self) -> PoseFilterState:
        return PoseFilterState()
