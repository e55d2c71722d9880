"""
Exceptions raised by the gesture engine.
"""


class GestureEngineError(Exception):
    """Base class for gesture engine errors."""


class InvalidHandFrameError(GestureEngineError, ValueError):
    """A landmark frame violated the input contract and was rejected."""
