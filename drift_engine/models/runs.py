"""
Batch run models.

A BusinessJob is everything the runner needs to score one business: the
already aggregated engine payload plus the context used for alerting and
summaries. A BusinessRunResult reports what happened, including failures,
so one bad business never hides the others.
"""

from datetime import date
from typing import Any, Optional

from pydantic import BaseModel, Field

from .alerts import ChangeDecision
from .drift import DriftResult
from .enums import EngineId
from .summary import ExecutiveSummary, StatusEmail


class BusinessJob(BaseModel):
    """
    Input of one business for one batch run.

    Attributes:
        business_id: Business identifier
        business_name: Display name used in summaries and emails
        connected_sources: Types of sources with an active connection
        payload: Aggregated engine input fields
        monthly_revenue_cents: Typical monthly revenue for impact estimates
        window_start: First day of the current window
        window_end: Last day of the current window
        force_notify: Notify even when nothing changed (manual test sends)
    """

    business_id: str
    business_name: Optional[str] = None
    connected_sources: list[str] = Field(default_factory=list)
    payload: dict[str, Any] = Field(default_factory=dict)
    monthly_revenue_cents: Optional[float] = None
    window_start: Optional[date] = None
    window_end: Optional[date] = None
    force_notify: bool = False


class BusinessRunResult(BaseModel):
    """Outcome of one business in a batch run."""

    business_id: str
    ok: bool = True
    engine: Optional[EngineId] = None
    drift: Optional[DriftResult] = None
    decision: Optional[ChangeDecision] = None
    alert_written: bool = False
    summary: Optional[ExecutiveSummary] = None
    email: Optional[StatusEmail] = None
    error: Optional[str] = None
    error_type: Optional[str] = None
