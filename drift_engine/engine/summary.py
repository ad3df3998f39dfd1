"""
Executive Summary Generator.

Turns a DriftResult plus optional monthly revenue into what the owner
reads: a headline, a confidence tier, the metrics driving the status, an
estimated monthly revenue impact and next steps.

This is the only layer that formats currency and percentages; engines
work in raw cents and ratios.

Version: executive_summary_v1
"""

from collections.abc import Sequence
from typing import Optional

from drift_engine.models.drift import DriftMeta, DriftReason, DriftResult, RevenueMeta
from drift_engine.models.enums import (
    Confidence,
    DriftStatus,
    EngineId,
    ReasonCode,
)
from drift_engine.models.summary import Driver, ExecutiveSummary, Impact
from drift_engine.notifications.status import normalize_status

from .numeric import round_half_up

MISSING = "—"

STABLE_HEADLINE = "No material risk signals detected."
GENERIC_HEADLINE = "Material change detected vs baseline."

DEFAULT_DETAILS_PATH = "/alerts/{business_id}"

# Coarse classification -> script. Not customized per reason code.
NEXT_STEPS: dict[str, list[str]] = {
    "stable": [
        "No action needed. Monitoring continues.",
    ],
    "refund": [
        "Review refunds and disputes for the last 14 days and identify the top drivers.",
        "Check for recent policy, fulfillment, or product changes that could trigger refunds.",
        "Confirm there are no duplicate charges or payment flow issues.",
    ],
    "drift": [
        "Review the last 14 days vs baseline and confirm the change is real (not a one-off).",
        "Look for a single driver (pricing, traffic, conversion, refunds) before taking action.",
        "If the signal persists for 2–3 days, treat as actionable.",
    ],
}


# =============================================================================
# Formatting
# =============================================================================


def format_pct(value: Optional[float]) -> str:
    if value is None:
        return MISSING
    return f"{value * 100:.1f}%"


def format_money_cents(cents: Optional[float]) -> str:
    """USD display string; negative amounts read as -$1,234.56."""
    if cents is None:
        return MISSING
    sign = "-" if cents < 0 else ""
    return f"{sign}${abs(cents) / 100:,.2f}"


# =============================================================================
# Summary parts
# =============================================================================


def compute_confidence(reasons: Sequence[DriftReason], meta: Optional[DriftMeta]) -> Confidence:
    """
    Conservative confidence tier.

    LOW while the baseline is warming up. MEDIUM when at least one revenue
    metric (refund rate or net revenue) has both a baseline and a current
    value. LOW otherwise. HIGH is never produced by these rules.
    """
    if any(r.code == ReasonCode.BASELINE_WARMUP.value for r in reasons):
        return Confidence.LOW

    if not isinstance(meta, RevenueMeta):
        return Confidence.LOW

    refunds = meta.refunds
    refund_pair = (
        refunds is not None
        and refunds.baseline_refund_rate is not None
        and refunds.current_refund_rate is not None
    )
    revenue_pair = (
        meta.revenue.baseline_net_revenue_cents_14d is not None
        and meta.revenue.current_net_revenue_cents_14d is not None
    )
    if refund_pair or revenue_pair:
        return Confidence.MEDIUM
    return Confidence.LOW


def build_headline(status: DriftStatus, reasons: Sequence[DriftReason]) -> str:
    """The first-detected reason, not necessarily the most severe one."""
    if normalize_status(status) == DriftStatus.STABLE:
        return STABLE_HEADLINE
    if reasons:
        top = reasons[0]
        if top.detail:
            return top.detail
        if top.code:
            return top.code
    return GENERIC_HEADLINE


def build_drivers(meta: Optional[DriftMeta]) -> list[Driver]:
    """Refund rate then net revenue, each only when its current value exists."""
    if meta is None or meta.engine != EngineId.REVENUE_V1:
        return []

    drivers: list[Driver] = []

    refunds = meta.refunds
    if refunds is not None and refunds.current_refund_rate is not None:
        delta = refunds.delta
        if delta is None and refunds.baseline_refund_rate is not None:
            delta = refunds.current_refund_rate - refunds.baseline_refund_rate
        drivers.append(Driver(
            label="Refund rate (14d)",
            value=format_pct(refunds.current_refund_rate),
            baseline=format_pct(refunds.baseline_refund_rate),
            delta=MISSING if delta is None else f"{delta * 100:+.1f}%",
        ))

    revenue = meta.revenue
    if revenue.current_net_revenue_cents_14d is not None:
        drivers.append(Driver(
            label="Net revenue (14d)",
            value=format_money_cents(revenue.current_net_revenue_cents_14d),
            baseline=format_money_cents(revenue.baseline_net_revenue_cents_14d),
            delta=MISSING if revenue.delta_pct is None else f"{revenue.delta_pct * 100:+.0f}%",
        ))

    return drivers


def estimate_monthly_impact(
    monthly_revenue_cents: Optional[float],
    meta: Optional[DriftMeta],
) -> Impact:
    """
    monthly revenue x revenue delta, only when both are known.

    Never fabricates a figure from partial data.
    """
    if monthly_revenue_cents is None or not isinstance(meta, RevenueMeta):
        return Impact()
    delta_pct = meta.revenue.delta_pct
    if delta_pct is None:
        return Impact()

    cents = round_half_up(monthly_revenue_cents * delta_pct)
    return Impact(est_monthly_cents=cents, est_monthly=format_money_cents(cents))


def next_steps_for(status: DriftStatus, reasons: Sequence[DriftReason]) -> list[str]:
    if normalize_status(status) == DriftStatus.STABLE:
        key = "stable"
    elif any("REFUND" in r.code for r in reasons):
        key = "refund"
    else:
        key = "drift"
    return list(NEXT_STEPS[key])


def executive_summary(
    result: DriftResult,
    business_id: str,
    business_name: Optional[str] = None,
    monthly_revenue_cents: Optional[float] = None,
    details_path_template: str = DEFAULT_DETAILS_PATH,
) -> ExecutiveSummary:
    """
    Build the executive summary for one business.

    Args:
        result: Drift result of the run
        business_id: Business identifier, also used in the details link
        business_name: Display name; defaults to the identifier
        monthly_revenue_cents: Typical monthly revenue for the impact estimate
        details_path_template: Path template with a {business_id} placeholder

    Returns:
        ExecutiveSummary ready for rendering

    Example:
        >>> summary = executive_summary(result, "biz_1", monthly_revenue_cents=5_000_000)
        >>> summary.impact.est_monthly
        '-$5,000.00'
    """
    reasons = list(result.reasons)
    return ExecutiveSummary(
        business_id=business_id,
        business_name=business_name or business_id,
        status=result.status,
        headline=build_headline(result.status, reasons),
        confidence=compute_confidence(reasons, result.meta),
        drivers=build_drivers(result.meta),
        impact=estimate_monthly_impact(monthly_revenue_cents, result.meta),
        next_steps=next_steps_for(result.status, reasons),
        details_path=details_path_template.format(business_id=business_id),
    )
