"""
Demo application: webcam -> MediaPipe -> gesture engine -> sink.
"""
import asyncio
import logging
import sys
import time
from typing import Optional

import cv2

from .config import load_config
from .errors import InvalidHandFrameError
from .gestures import GestureProcessor
from .sink_mock import MockSink
from .tracker import HandsTracker, to_display_px
from .types import GestureEvent, GestureSinkProto, HandFrame

logger = logging.getLogger(__name__)


class GestureRecognitionApp:
    """Main application class for hand gesture recognition."""

    def __init__(self, config_path: Optional[str] = None, sink: Optional[GestureSinkProto] = None):
        """Initialize the application with configuration."""
        self.config = load_config(config_path)
        logging.basicConfig(level=self.config.logging.level)

        self.tracker = HandsTracker(
            max_num_hands=self.config.mediapipe.max_num_hands,
            model_complexity=self.config.mediapipe.model_complexity,
            min_detection_conf=self.config.mediapipe.min_detection_confidence,
            min_tracking_conf=self.config.mediapipe.min_tracking_confidence
        )
        self.sink = sink or MockSink()
        self.processor = GestureProcessor(self.config)
        self.last_event: Optional[GestureEvent] = None

        # Initialize camera
        self.cap = cv2.VideoCapture(self.config.camera.index)
        self.cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.config.camera.width)
        self.cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.config.camera.height)
        self.cap.set(cv2.CAP_PROP_FPS, self.config.camera.fps)

        if not self.cap.isOpened():
            raise RuntimeError(f"Failed to open camera {self.config.camera.index}")

    async def poll(self, frame, t_now: float) -> Optional[HandFrame]:
        """
        Feed one camera frame through tracker and engine.

        Args:
            frame: Raw, un-mirrored BGR frame
            t_now: Monotonic timestamp in seconds

        Returns:
            The detected hand, or None if no usable hand was found
        """
        try:
            hand = self.tracker.process(frame)
        except InvalidHandFrameError as e:
            logger.warning("Rejected hand frame: %s", e)
            hand = None

        # A missing hand clears the stabilizer back to idle
        event = self.processor.process_frame(hand, t_now)
        if event is not None and event.confidence >= self.config.display.min_confidence:
            self.last_event = event
            await self.sink.on_gesture(event)
        return hand

    async def run(self):
        """Run the main application loop."""
        logger.info("Starting %s", self.config.display.window_name)
        logger.info("Press 'q' to quit, 'r' to reset the session")

        poll_s = self.config.camera.poll_interval_ms / 1000.0
        last_poll = float("-inf")
        hand = None

        try:
            while True:
                ret, frame = self.cap.read()
                if not ret:
                    logger.error("Failed to read frame from camera")
                    break

                t_now = time.monotonic()
                if t_now - last_poll >= poll_s:
                    last_poll = t_now
                    hand = await self.poll(frame, t_now)

                display = cv2.flip(frame, 1) if self.config.display.mirror else frame
                self._draw_overlay(display, hand)
                cv2.imshow(self.config.display.window_name, display)

                key = cv2.waitKey(1) & 0xFF
                if key == ord('q'):
                    break
                if key == ord('r'):
                    self.processor.reset()
                    self.last_event = None
                    logger.info("🔄 Session reset")
        finally:
            self.close()

    def _draw_overlay(self, display, hand) -> None:
        mirror = self.config.display.mirror
        status_text = "No hand detected"

        if hand is not None:
            if self.config.display.show_landmarks:
                self.tracker.draw_landmarks(display, hand, mirror=mirror)
            label = self.processor.last_label
            status_text = f"Frame: {label.value if label else '-'} ({hand.handedness.value})"

        cv2.putText(display, status_text, (10, 30), cv2.FONT_HERSHEY_SIMPLEX, 0.7, (255, 255, 255), 2)

        if self.last_event is not None:
            event = self.last_event
            h, w = display.shape[:2]
            ax, ay = event.landmarks.palm_anchor
            px, py = to_display_px(ax, ay, (w, h), mirror)
            text = f"{event.label.value} {event.confidence * 100:.0f}%"
            cv2.putText(display, text, (px, py), cv2.FONT_HERSHEY_SIMPLEX, 0.8, (0, 255, 0), 2)

        cv2.putText(display, "Press 'q' to quit, 'r' to reset", (10, display.shape[0] - 20),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.5, (255, 255, 255), 1)

    def close(self) -> None:
        """Release camera and windows."""
        if self.cap.isOpened():
            self.cap.release()
        self.tracker.close()
        self.processor.reset()
        cv2.destroyAllWindows()


async def main():
    """Entry point for the application."""
    config_path = sys.argv[1] if len(sys.argv) > 1 else None

    try:
        app = GestureRecognitionApp(config_path=config_path)
        await app.run()
    except KeyboardInterrupt:
        logger.info("Application interrupted by user")


def run():
    asyncio.run(main())


if __name__ == "__main__":
    run()
