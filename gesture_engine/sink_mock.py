"""
Mock event sink for exercising the gesture engine without a UI.
"""
import logging
from typing import List

from .types import GestureEvent

logger = logging.getLogger(__name__)


class MockSink:
    """Mock sink that logs events instead of rendering them."""

    def __init__(self):
        """Initialize the mock sink."""
        self.events: List[GestureEvent] = []

    @property
    def event_count(self) -> int:
        return len(self.events)

    async def on_gesture(self, event: GestureEvent) -> None:
        """Record and log the event."""
        self.events.append(event)
        logger.info("[MockSink] %s confidence=%.2f (event #%d)",
                    event.label.value, event.confidence, self.event_count)

    def reset_counters(self) -> None:
        """Forget recorded events for testing."""
        self.events.clear()
