"""
Engine input models.

The metric aggregator hands the engines plain records of window totals and
averages. These models validate them once at the engine boundary: numeric
fields reject NaN and infinity, rates are clamped to [0, 1], and absent
revenue figures are rejected rather than coerced to zero.
"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def _clamp_rate(v: Optional[float]) -> Optional[float]:
    if v is None:
        return None
    return max(0.0, min(1.0, float(v)))


class MetricWindow(BaseModel):
    """
    Aggregated counts and averages for one time range of one business.

    Every metric is optional; which ones are populated depends on the
    connected sources. Currency fields are minor units (cents).

    Attributes:
        start: First day of the window (inclusive)
        end: Last day of the window (inclusive)
        days: Number of days the window covers
        review_count: Total reviews received in the window
        sentiment_avg: Mean review sentiment, 0..1
        engagement: Mean engagement rate, 0..1
        net_revenue_cents: Net revenue after refunds
        gross_revenue_cents: Gross revenue before refunds
        refunds_cents: Total refunded amount
        refund_rate: refunds / gross, 0..1
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False, extra="ignore")

    start: Optional[date] = None
    end: Optional[date] = None
    days: Optional[int] = Field(default=None, ge=1)
    review_count: Optional[float] = Field(default=None, ge=0)
    sentiment_avg: Optional[float] = None
    engagement: Optional[float] = Field(default=None, ge=0)
    net_revenue_cents: Optional[float] = None
    gross_revenue_cents: Optional[float] = Field(default=None, ge=0)
    refunds_cents: Optional[float] = Field(default=None, ge=0)
    refund_rate: Optional[float] = None

    @field_validator("sentiment_avg", "refund_rate")
    @classmethod
    def clamp_unit_interval(cls, v: Optional[float]) -> Optional[float]:
        """Clamp ratio fields into [0, 1]."""
        return _clamp_rate(v)

    @model_validator(mode="after")
    def validate_bounds(self) -> "MetricWindow":
        """Ensure the window does not end before it starts."""
        if self.start and self.end and self.end < self.start:
            raise ValueError("Window end must not be before window start")
        return self


class LegacyInput(BaseModel):
    """
    Review, sentiment and engagement inputs for the legacy engine.

    Review counts are required. Sentiment is optional; when either side is
    missing the sentiment signal is skipped. Engagement is the one family
    where an absent value means zero, which in turn excludes engagement from
    scoring because there is nothing to regress against.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False, extra="ignore")

    baseline_review_count_per_14d: float = Field(
        ge=0, description="Baseline review count normalized to a 14-day equivalent"
    )
    current_review_count_14d: float = Field(ge=0, description="Reviews in the current 14 days")
    baseline_sentiment_avg: Optional[float] = Field(default=None, description="0..1")
    current_sentiment_avg: Optional[float] = Field(default=None, description="0..1")
    baseline_engagement: float = Field(default=0.0, ge=0, description="0..1")
    current_engagement: float = Field(default=0.0, ge=0, description="0..1")

    @field_validator("baseline_engagement", "current_engagement", mode="before")
    @classmethod
    def absent_engagement_is_zero(cls, v):
        """Treat a missing engagement figure as zero."""
        return 0.0 if v is None else v

    @field_validator("baseline_sentiment_avg", "current_sentiment_avg")
    @classmethod
    def clamp_sentiment(cls, v: Optional[float]) -> Optional[float]:
        """Clamp sentiment averages into [0, 1]."""
        return _clamp_rate(v)


class RevenueInput(BaseModel):
    """
    Net revenue and refund-rate inputs for the revenue engine.

    Net revenue for both windows is required: a missing figure would read as
    a total collapse (or a total recovery), so it is rejected instead.
    Refund rates are optional; if either is absent the refund signal is
    unavailable for this run.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False, extra="ignore")

    baseline_net_revenue_cents_14d: float = Field(
        description="Baseline net revenue normalized to a 14-day equivalent, cents"
    )
    current_net_revenue_cents_14d: float = Field(description="Net revenue in the current 14 days, cents")
    baseline_refund_rate: Optional[float] = Field(default=None, description="0..1")
    current_refund_rate: Optional[float] = Field(default=None, description="0..1")
    baseline_gross_revenue_cents: Optional[float] = Field(
        default=None, ge=0, description="Total gross activity across the baseline window, cents"
    )
    prior_net_revenue_cents_14d: Optional[float] = Field(
        default=None, description="Net revenue in the 14 days before the current window, cents"
    )
    prior_refund_rate: Optional[float] = Field(default=None, description="0..1")

    @field_validator("baseline_refund_rate", "current_refund_rate", "prior_refund_rate")
    @classmethod
    def clamp_refund_rate(cls, v: Optional[float]) -> Optional[float]:
        """Clamp refund rates into [0, 1]."""
        return _clamp_rate(v)

    @property
    def has_refund_signal(self) -> bool:
        return self.baseline_refund_rate is not None and self.current_refund_rate is not None
