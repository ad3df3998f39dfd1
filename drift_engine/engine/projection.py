"""
Risk Projection — 30-day outlook from drift signals.

Short, human-readable statements of what could happen over the next month
if a signal persists, and a conservative revenue-at-risk band sized by the
strongest signal seen.

Version: projection_v1
"""

import math
from typing import Optional

from drift_engine.config import DriftConfig
from drift_engine.models.drift import DriftMeta, LegacyMeta, RevenueMeta
from drift_engine.models.enums import RiskLabel
from drift_engine.models.summary import RiskProjection

from .numeric import round_half_up

# Share of monthly revenue at risk per band: (low, high)
RISK_BANDS: dict[RiskLabel, tuple[float, float]] = {
    RiskLabel.LOW: (0.0, 0.01),
    RiskLabel.MODERATE: (0.01, 0.03),
    RiskLabel.HIGH: (0.03, 0.07),
}


def project_risk(meta: Optional[DriftMeta], config: Optional[DriftConfig] = None) -> list[str]:
    """
    Forward-looking statements for the signals in a result's metadata.

    Args:
        meta: Engine metadata of the run
        config: Thresholds; defaults to the production constants

    Returns:
        Zero or more sentences, strongest tier per signal family
    """
    cfg = config or DriftConfig()
    out: list[str] = []

    if isinstance(meta, LegacyMeta):
        if meta.review_drop >= cfg.review_drop_high:
            out.append("Demand may soften over the next 2–4 weeks unless review volume rebounds.")
        elif meta.review_drop >= cfg.review_drop_low:
            out.append("Watch demand signals; review volume is trending down.")

        if meta.engagement_drop >= cfg.engagement_drop_high:
            out.append("Repeat visits and returning customers may drop within 2–3 weeks.")
        elif meta.engagement_drop >= cfg.engagement_drop_low:
            out.append("Engagement is cooling; consider a quick reactivation push.")

        sentiment = meta.sentiment_delta if meta.sentiment_delta is not None else 0.0
        if sentiment <= -cfg.sentiment_drop_high:
            out.append("Brand perception risk is elevated; address top issues immediately.")
        elif sentiment <= -cfg.sentiment_drop_low:
            out.append("Sentiment is trending down; review recent feedback and respond fast.")

    elif isinstance(meta, RevenueMeta):
        delta_pct = meta.revenue.delta_pct if meta.revenue.delta_pct is not None else 0.0
        if delta_pct <= -cfg.revenue_drop_high:
            out.append("Revenue may keep sliding over the next 2–4 weeks unless demand recovers.")
        elif delta_pct <= -cfg.revenue_drop_low:
            out.append("Revenue velocity is running below baseline; watch the next two weeks closely.")

        refund_delta = meta.refunds.delta if meta.refunds and meta.refunds.delta is not None else 0.0
        if refund_delta >= cfg.refund_rise_high:
            out.append("Refunds are eroding margin; expect a visible hit within 30 days if unresolved.")
        elif refund_delta >= cfg.refund_rise_low:
            out.append("Refund rate is creeping up; check recent orders for a common cause.")

    return out


def risk_label_for(meta: Optional[DriftMeta], config: Optional[DriftConfig] = None) -> RiskLabel:
    """Band chosen by the strongest signal in the metadata."""
    cfg = config or DriftConfig()

    if isinstance(meta, LegacyMeta):
        sentiment = meta.sentiment_delta if meta.sentiment_delta is not None else 0.0
        severe = (
            meta.review_drop >= cfg.review_drop_high
            or meta.engagement_drop >= cfg.engagement_drop_high
            or sentiment <= -cfg.sentiment_drop_high
        )
        moderate = (
            meta.review_drop >= cfg.review_drop_low
            or meta.engagement_drop >= cfg.engagement_drop_low
            or sentiment <= -cfg.sentiment_drop_low
        )
    elif isinstance(meta, RevenueMeta):
        delta_pct = meta.revenue.delta_pct if meta.revenue.delta_pct is not None else 0.0
        refund_delta = meta.refunds.delta if meta.refunds and meta.refunds.delta is not None else 0.0
        severe = delta_pct <= -cfg.revenue_drop_high or refund_delta >= cfg.refund_rise_high
        moderate = delta_pct <= -cfg.revenue_drop_low or refund_delta >= cfg.refund_rise_low
    else:
        return RiskLabel.LOW

    if severe:
        return RiskLabel.HIGH
    if moderate:
        return RiskLabel.MODERATE
    return RiskLabel.LOW


def estimate_revenue_impact(
    monthly_revenue_cents: Optional[float],
    meta: Optional[DriftMeta],
    config: Optional[DriftConfig] = None,
) -> RiskProjection:
    """
    Conservative monthly revenue-at-risk band, in cents.

    Args:
        monthly_revenue_cents: Typical monthly revenue; unknown reads as 0
        meta: Engine metadata of the run
        config: Thresholds; defaults to the production constants

    Returns:
        RiskProjection with the band bounds and its midpoint

    Example:
        >>> estimate_revenue_impact(1_000_000, result.meta).label
        <RiskLabel.HIGH: 'High'>
    """
    base_cents = 0
    if monthly_revenue_cents is not None:
        base_cents = max(0, math.floor(monthly_revenue_cents))

    label = risk_label_for(meta, config)
    low, high = RISK_BANDS[label]

    low_cents = round_half_up(base_cents * low)
    high_cents = round_half_up(base_cents * high)

    return RiskProjection(
        label=label,
        low_cents=low_cents,
        high_cents=high_cents,
        estimated_impact_cents=round_half_up((low_cents + high_cents) / 2),
    )
