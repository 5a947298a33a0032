import unittest

from handtree.core.kinematics import MotionState
from handtree.core.stabilizer import PoseFilterState
from handtree.core.state_manager import ControllerState, reset_for_hand_lost
from handtree.core.types import InteractionMode, Pose

class TestStateManager(unittest.TestCase):
    def setUp(self):
        """Runs before every test."""
        self.state = ControllerState()

    def test_initial_state(self):
        """Verify the system starts idle, unfocused and with a neutral zoom."""
        self.assertEqual(self.state.mode, InteractionMode.IDLE)
        self.assertEqual(self.state.stable_pose, Pose.UNKNOWN)
        self.assertFalse(self.state.photo_focus)
        self.assertEqual(self.state.motion.zoom, 0.5)
        self.assertEqual(self.state.motion.rotation_velocity, 0.0)

    def test_state_is_immutable(self):
        with self.assertRaises(AttributeError):
            self.state.mode = InteractionMode.NAVIGATION

    def test_hand_lost_reset(self):
        """Debounce history, mode and focus are cleared; motion is whatever the caller passes."""
        busy = ControllerState(
            pose_filter=PoseFilterState(stable=Pose.PINCH, candidate=Pose.OPEN, count=1),
            last_raw_pose=Pose.OPEN,
            mode=InteractionMode.NAVIGATION,
            photo_focus=True,
            motion=MotionState(rotation_velocity=0.3, zoom=0.8),
        )
        halted = MotionState(zoom=0.8)
        reset = reset_for_hand_lost(busy, halted)

        self.assertEqual(reset.pose_filter, PoseFilterState())
        self.assertEqual(reset.last_raw_pose, Pose.UNKNOWN)
        self.assertEqual(reset.mode, InteractionMode.IDLE)
        self.assertFalse(reset.photo_focus)
        self.assertIs(reset.motion, halted)
        # The input state is left untouched
        self.assertEqual(busy.mode, InteractionMode.NAVIGATION)

if __name__ == '__main__':
    unittest.main()
