"""Alert history storage interface and the in-memory implementation."""

from .base import AlertStore
from .memory import InMemoryAlertStore

__all__ = ["AlertStore", "InMemoryAlertStore"]
