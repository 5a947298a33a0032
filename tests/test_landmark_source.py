import threading
import time
import unittest
from types import SimpleNamespace
from unittest import mock

import mediapipe as mp
import numpy as np

from handtree.core.errors import DetectorUnavailable, SourceUnavailable
from handtree.vision.landmark_source import MediaPipeLandmarkSource, ThreadedCamera
from synthetic_hands import hand_coords

IMAGE = np.zeros((4, 6, 3), dtype=np.uint8)


class FakeCapture:
    """Stands in for cv2.VideoCapture: serves `frames`, then reports the stream gone."""
    def __init__(self, frames=(), opened=True):
        self.frames = list(frames)
        self.opened = opened
        self.released = False
        self.reader_alive_at_release = None
        self.camera = None

    def isOpened(self):
        return self.opened

    def set(self, prop, value):
        return True

    def read(self):
        if self.frames:
            return True, self.frames.pop(0)
        return False, None

    def release(self):
        if self.camera is not None:
            self.reader_alive_at_release = self.camera.thread.is_alive()
        self.released = True


class LiveCapture(FakeCapture):
    """A stream that never ends."""
    def read(self):
        time.sleep(0.001)
        return True, IMAGE


class TestThreadedCamera(unittest.TestCase):
    def open(self, capture):
        with mock.patch("cv2.VideoCapture", return_value=capture):
            cam = ThreadedCamera(0)
        capture.camera = cam
        self.addCleanup(cam.release)
        return cam

    def test_unopened_camera(self):
        capture = FakeCapture(opened=False)
        with mock.patch("cv2.VideoCapture", return_value=capture):
            with self.assertRaises(SourceUnavailable):
                ThreadedCamera(0)
        self.assertTrue(capture.released)

    def test_stream_end_is_reported(self):
        """A dropped camera must read as 'no frame', not the last frozen image."""
        cam = self.open(FakeCapture([IMAGE] * 3))
        cam.thread.join(timeout=1.0)
        self.assertFalse(cam.thread.is_alive())

        ret, frame = cam.read()
        self.assertFalse(ret)
        self.assertIsNone(frame)

    def test_release_stops_reader_before_hardware(self):
        capture = LiveCapture()
        cam = self.open(capture)
        ret, frame = cam.read()
        self.assertTrue(ret)

        cam.release()
        self.assertTrue(capture.released)
        self.assertFalse(capture.reader_alive_at_release)
        self.assertFalse(cam.thread.is_alive())


class FakeCamera:
    def __init__(self, frames):
        self.frames = list(frames)
        self.releases = 0

    def read(self):
        if self.frames:
            return True, self.frames.pop(0)
        return False, None

    def release(self):
        self.releases += 1


def detection_result(coords):
    landmarks = [SimpleNamespace(x=x, y=y, z=z) for x, y, z in coords]
    return SimpleNamespace(multi_hand_landmarks=[SimpleNamespace(landmark=landmarks)])


class TestMediaPipeLandmarkSource(unittest.TestCase):
    def open(self, camera, hands=None, hands_error=None):
        patches = [
            mock.patch("handtree.vision.landmark_source.ThreadedCamera", return_value=camera),
            mock.patch.object(mp.solutions.hands, "Hands",
                              return_value=hands, side_effect=hands_error),
        ]
        for p in patches:
            p.start()
            self.addCleanup(p.stop)
        return MediaPipeLandmarkSource(camera_index=0)

    def test_detector_failure_is_reported(self):
        camera = FakeCamera([])
        with self.assertRaises(DetectorUnavailable):
            self.open(camera, hands_error=RuntimeError("graph failed"))
        self.assertEqual(camera.releases, 1)

    def test_programming_errors_are_not_masked(self):
        camera = FakeCamera([])
        with self.assertRaises(AttributeError):
            self.open(camera, hands_error=AttributeError("no such attribute"))
        self.assertEqual(camera.releases, 1)

    def test_landmarks_are_not_mirrored(self):
        image = IMAGE.copy()
        image[:, 0] = 255  # mark the left column
        hands = mock.MagicMock()
        hands.process.return_value = detection_result(hand_coords())
        source = self.open(FakeCamera([image]), hands=hands)

        frames = source.read()
        self.assertEqual(len(frames), 1)
        np.testing.assert_allclose(frames[0].coords, hand_coords())
        self.assertEqual(source.last_frame[0, 0, 0], 255)
        self.assertEqual(len(source.last_landmarks), 1)

    def test_camera_drop_reads_as_no_hand(self):
        hands = mock.MagicMock()
        hands.process.return_value = detection_result(hand_coords())
        source = self.open(FakeCamera([IMAGE]), hands=hands)
        self.assertEqual(len(source.read()), 1)

        self.assertIsNone(source.read())
        self.assertIsNone(source.last_frame)
        self.assertEqual(source.last_landmarks, [])

    def test_release_is_idempotent(self):
        camera = FakeCamera([])
        hands = mock.MagicMock()
        source = self.open(camera, hands=hands)
        source.release()
        source.release()
        hands.close.assert_called_once_with()
        self.assertEqual(camera.releases, 1)


if __name__ == '__main__':
    unittest.main()
