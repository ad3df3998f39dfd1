"""
Executive-facing output models.

Summaries, projections and rendered emails are derived per notification
and never persisted by the engine. Currency is formatted here for display
only; the raw cents value travels alongside it.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .alerts import AlertRecord
from .enums import Confidence, DriftStatus, EmailStatus, RiskLabel


class Driver(BaseModel):
    """One metric shown to the executive with its baseline and change."""

    model_config = ConfigDict(frozen=True)

    label: str
    value: str
    baseline: str
    delta: str


class Impact(BaseModel):
    """Estimated monthly revenue impact. Both fields are None without data."""

    model_config = ConfigDict(frozen=True)

    est_monthly_cents: Optional[int] = None
    est_monthly: Optional[str] = Field(default=None, description="Formatted currency amount")


class ExecutiveSummary(BaseModel):
    """
    Headline, confidence, drivers, impact and next steps for one business.

    Attributes:
        business_id: Business the summary describes
        business_name: Display name of the business
        status: Drift status of the run
        headline: One-line description of the most prominent signal
        confidence: How much the comparison can be trusted
        drivers: Metrics behind the status, with baseline and change
        impact: Estimated monthly revenue impact
        next_steps: Ordered actions for the owner
        details_path: Relative link to the business detail page
    """

    model_config = ConfigDict(frozen=True)

    business_id: str
    business_name: str
    status: DriftStatus
    headline: str
    confidence: Confidence
    drivers: list[Driver] = Field(default_factory=list)
    impact: Impact = Field(default_factory=Impact)
    next_steps: list[str] = Field(default_factory=list)
    details_path: str


class RiskProjection(BaseModel):
    """Conservative revenue-at-risk band for the next 30 days, cents."""

    model_config = ConfigDict(frozen=True)

    label: RiskLabel
    low_cents: int = Field(ge=0)
    high_cents: int = Field(ge=0)
    estimated_impact_cents: int = Field(ge=0, description="Midpoint of the band")


class StatusEmail(BaseModel):
    """A rendered status notification, ready for an external mail sender."""

    model_config = ConfigDict(frozen=True)

    status: EmailStatus
    subject: str
    text: str


class PortfolioEntry(BaseModel):
    """
    One business in a weekly portfolio pulse.

    Attributes:
        business_id: Business the entry describes
        business_name: Display name of the business
        last_alert: Most recent persisted alert, None when never scored
    """

    model_config = ConfigDict(frozen=True)

    business_id: str
    business_name: str
    last_alert: Optional[AlertRecord] = None
