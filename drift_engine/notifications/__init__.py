"""Notification rendering for drift status changes and weekly pulses."""

from .status import cap_reasons, normalize_status, status_for_email
from .templates import render_status_email, render_weekly_pulse_email

__all__ = [
    "render_status_email",
    "render_weekly_pulse_email",
    "normalize_status",
    "status_for_email",
    "cap_reasons",
]
