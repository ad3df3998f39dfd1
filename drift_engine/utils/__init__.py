"""Utility modules for logging."""

from drift_engine.utils.logging import business_context, configure_logging

__all__ = ["business_context", "configure_logging"]
