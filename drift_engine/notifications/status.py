"""Status and reason normalization at the rendering boundary."""

from collections.abc import Sequence
from enum import Enum
from typing import Any, Optional

from drift_engine.models.drift import DriftReason
from drift_engine.models.enums import DriftStatus, EmailStatus

DEFAULT_REASON_CAP = 3


def normalize_status(raw: Any) -> DriftStatus:
    """Parse a stored status leniently; anything unknown reads as stable."""
    if isinstance(raw, Enum):
        raw = raw.value
    value = str(raw or "").strip().lower()
    try:
        return DriftStatus(value)
    except ValueError:
        return DriftStatus.STABLE


def status_for_email(status: Any) -> EmailStatus:
    """Map any status onto the three states templates render; watch becomes softening."""
    normalized = normalize_status(status)
    if normalized == DriftStatus.WATCH:
        return EmailStatus.SOFTENING
    return EmailStatus(normalized.value)


def cap_reasons(reasons: Optional[Sequence[DriftReason]], n: int = DEFAULT_REASON_CAP) -> list[DriftReason]:
    return list(reasons or [])[:n]
