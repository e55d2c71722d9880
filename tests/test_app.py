"""
Test cases for the demo loop with a fake camera and tracker.
"""
import asyncio
import unittest
import sys
from pathlib import Path
from unittest import mock

import numpy as np

# Add project root and tests dir to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent))

from gesture_engine.config import Cfg
from gesture_engine.errors import InvalidHandFrameError
from gesture_engine.gestures import GestureProcessor, TrackingState
from gesture_engine.sink_mock import MockSink
from gesture_engine.types import GestureLabel

import hand_poses

try:
    from gesture_engine import main as app_main
except ImportError:
    app_main = None


@unittest.skipIf(app_main is None, "camera extra (opencv-python, mediapipe) not installed")
class TestGestureRecognitionApp(unittest.TestCase):
    """Test polling and shutdown without a real camera."""

    def setUp(self):
        self.frame = np.zeros((480, 640, 3), dtype=np.uint8)
        self.tracker = mock.Mock()

        app = app_main.GestureRecognitionApp.__new__(app_main.GestureRecognitionApp)
        app.config = Cfg()
        app.tracker = self.tracker
        app.sink = MockSink()
        app.processor = GestureProcessor(app.config)
        app.last_event = None
        app.cap = mock.MagicMock()
        app.cap.read.return_value = (True, self.frame)
        self.app = app

    def test_rejected_detection_counts_as_no_hand(self):
        pointing = hand_poses.pointing()
        self.tracker.process.side_effect = [
            pointing, pointing, InvalidHandFrameError("Landmark 4 has non-finite coordinates"),
            pointing, pointing, pointing,
        ]

        async def drive(times):
            return [await self.app.poll(self.frame, t) for t in times]

        hands = asyncio.run(drive([0.0, 0.1, 0.2]))
        self.assertIsNone(hands[2])
        self.assertEqual(self.app.processor.stabilizer.status, TrackingState.IDLE)
        self.assertEqual(self.app.sink.events, [])

        asyncio.run(drive([0.3, 0.4, 0.5]))
        self.assertEqual([e.label for e in self.app.sink.events], [GestureLabel.POINTING])
        self.assertEqual(self.app.sink.events[0].emitted_at, 0.5)

    def test_quit_key_releases_camera(self):
        self.tracker.process.return_value = None
        with mock.patch.object(app_main.cv2, "imshow"), \
                mock.patch.object(app_main.cv2, "waitKey", return_value=ord('q')), \
                mock.patch.object(app_main.cv2, "destroyAllWindows"):
            asyncio.run(self.app.run())

        self.app.cap.release.assert_called_once()
        self.tracker.close.assert_called_once()

    def test_unexpected_error_still_releases_camera(self):
        self.tracker.process.side_effect = RuntimeError("tracker failed")
        with mock.patch.object(app_main.cv2, "imshow"), \
                mock.patch.object(app_main.cv2, "waitKey", return_value=-1), \
                mock.patch.object(app_main.cv2, "destroyAllWindows"):
            with self.assertRaises(RuntimeError):
                asyncio.run(self.app.run())

        self.app.cap.release.assert_called_once()
        self.tracker.close.assert_called_once()


if __name__ == '__main__':
    unittest.main()
