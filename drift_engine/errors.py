"""
Exception types raised by the drift engine.

Numeric edge cases (zero baselines) and warming-up history are not errors;
they are handled by numeric policy and the BASELINE_WARMUP reason code.
"""

from typing import Optional


class DriftEngineError(Exception):
    """Base class for all drift engine errors."""


class InvalidInputError(DriftEngineError):
    """
    Engine input could not be interpreted.

    Raised instead of producing a degenerate DriftResult from malformed
    metric windows (non-numeric, NaN, negative totals, missing revenue).
    """

    def __init__(self, message: str, field: Optional[str] = None, reason: Optional[str] = None):
        super().__init__(message)
        self.field = field
        self.reason = reason


class UnknownEngineError(DriftEngineError):
    """Raised when an engine identifier has no registered engine."""


class StorageError(DriftEngineError):
    """Raised by alert store implementations when a read or write fails."""
