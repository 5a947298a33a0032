import unittest
import random

from handtree.core.stabilizer import PoseStabilizer, PoseFilterState
from handtree.core.types import Pose

def run(stabilizer, poses, state=None):
    """Feeds a raw sequence, returns the stable pose after every tick."""
    state = state or PoseFilterState()
    out = []
    for raw in poses:
        state = stabilizer.update(state, raw)
        out.append(state.stable)
    return out, state

class TestPoseStabilizer(unittest.TestCase):
    def setUp(self):
        self.stab = PoseStabilizer(confirm_window=3)

    def test_initial_state(self):
        self.assertEqual(PoseFilterState().stable, Pose.UNKNOWN)
        self.assertEqual(self.stab.reset(), PoseFilterState())

    def test_pinch_bypass(self):
        """PINCH is committed on the very tick it is seen."""
        out, _ = run(self.stab, [Pose.OPEN, Pose.OPEN, Pose.OPEN, Pose.PINCH])
        self.assertEqual(out, [Pose.UNKNOWN, Pose.UNKNOWN, Pose.OPEN, Pose.PINCH])

    def test_k_consecutive(self):
        out, _ = run(self.stab, [Pose.FIST] * 3)
        self.assertEqual(out, [Pose.UNKNOWN, Pose.UNKNOWN, Pose.FIST])

    def test_interrupted_run_restarts(self):
        """Alternating candidates never accumulate."""
        seq = [Pose.OPEN, Pose.FIST, Pose.OPEN, Pose.FIST, Pose.OPEN, Pose.OPEN]
        out, state = run(self.stab, seq)
        self.assertTrue(all(p == Pose.UNKNOWN for p in out))
        self.assertEqual(state.candidate, Pose.OPEN)
        self.assertEqual(state.count, 2)

    def test_stable_reading_clears_votes(self):
        _, state = run(self.stab, [Pose.OPEN] * 3)
        out, state = run(self.stab, [Pose.FIST, Pose.FIST, Pose.OPEN, Pose.FIST, Pose.FIST], state)
        self.assertTrue(all(p == Pose.OPEN for p in out))
        self.assertEqual(state.count, 2)

    def test_leaving_pinch_is_debounced(self):
        _, state = run(self.stab, [Pose.PINCH])
        out, _ = run(self.stab, [Pose.OPEN] * 3, state)
        self.assertEqual(out, [Pose.PINCH, Pose.PINCH, Pose.OPEN])

    def test_window_of_one(self):
        out, _ = run(PoseStabilizer(confirm_window=1), [Pose.OPEN, Pose.FIST])
        self.assertEqual(out, [Pose.OPEN, Pose.FIST])

    def test_random_sequences(self):
        """
        For random raw streams: PINCH shows up immediately, and any other change
        is backed by the last K raw poses all being the new pose.
        """
        rng = random.Random(1234)
        poses = list(Pose)
        for k in (1, 2, 3):
            stab = PoseStabilizer(confirm_window=k)
            seq = [rng.choice(poses) for _ in range(500)]
            out, _ = run(stab, seq)
            prev = Pose.UNKNOWN
            for i, (raw, stable) in enumerate(zip(seq, out)):
                if raw == Pose.PINCH:
                    self.assertEqual(stable, Pose.PINCH)
                if stable != prev and stable != Pose.PINCH:
                    self.assertGreaterEqual(i + 1, k)
                    self.assertTrue(all(p == stable for p in seq[i - k + 1:i + 1]))
                prev = stable

if __name__ == '__main__':
    unittest.main()
