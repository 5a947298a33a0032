import unittest
from unittest import mock

from handtree.control.event_emitter import CallbackListener, EventEmitter, MockSceneListener
from handtree.core.interfaces import ISceneListener
from handtree.core.types import SceneUpdate, TreeState

class TestEventEmitter(unittest.TestCase):
    def setUp(self):
        self.listener = mock.create_autospec(ISceneListener, instance=True)
        self.emitter = EventEmitter(self.listener)

    def test_only_set_slots_fire(self):
        self.emitter.dispatch(SceneUpdate(zoom=0.7))
        self.listener.on_zoom_change.assert_called_once_with(0.7)
        self.listener.on_state_change.assert_not_called()
        self.listener.on_rotate_change.assert_not_called()
        self.listener.on_photo_focus_change.assert_not_called()

    def test_all_slots(self):
        self.emitter.dispatch(SceneUpdate(TreeState.FORMED, 0.1, -0.2, False))
        self.listener.on_state_change.assert_called_once_with(TreeState.FORMED)
        self.listener.on_zoom_change.assert_called_once_with(0.1)
        self.listener.on_rotate_change.assert_called_once_with(-0.2)
        # False is a value, not "unset"
        self.listener.on_photo_focus_change.assert_called_once_with(False)

    def test_zero_rotation_is_a_value(self):
        self.emitter.dispatch(SceneUpdate(rotation=0.0))
        self.listener.on_rotate_change.assert_called_once_with(0.0)

    def test_empty_update(self):
        self.assertTrue(SceneUpdate().is_empty)
        self.emitter.dispatch(SceneUpdate())
        self.assertEqual(self.listener.method_calls, [])

    def test_merge_later_wins(self):
        early = SceneUpdate(rotation=0.5, zoom=0.2)
        late = SceneUpdate(rotation=0.0, photo_focus=True)
        self.assertEqual(early.merge(late),
                         SceneUpdate(zoom=0.2, rotation=0.0, photo_focus=True))

class TestListeners(unittest.TestCase):
    def test_callback_listener_partial(self):
        """Missing callbacks are skipped."""
        got = []
        listener = CallbackListener(on_photo_focus_change=got.append)
        EventEmitter(listener).dispatch(SceneUpdate(TreeState.CHAOS, 0.4, 0.1, True))
        self.assertEqual(got, [True])

    def test_mock_listener_tracks_scene(self):
        listener = MockSceneListener()
        with mock.patch("builtins.print"):
            EventEmitter(listener).dispatch(SceneUpdate(TreeState.FORMED, 0.9, 0.3, True))
        self.assertEqual(listener.tree_state, TreeState.FORMED)
        self.assertEqual(listener.zoom, 0.9)
        self.assertEqual(listener.rotation, 0.3)
        self.assertTrue(listener.photo_focus)

if __name__ == '__main__':
    unittest.main()
