"""
Revenue Engine — Net Revenue Velocity and Refund Rate Drift.

Scores a business connected to a payments source from net revenue and
refund rate over the current 14 days against a 14-day-equivalent baseline.

Unlike the legacy engine, one strong signal is enough: a 25%+ revenue drop
or a 5-point refund-rate rise is decision-worthy on its own.

Version: revenue_v1
"""

from typing import Any, Optional

from drift_engine.config import DriftConfig
from drift_engine.models.drift import (
    DriftReason,
    DriftResult,
    RefundBlock,
    RevenueBlock,
    RevenueMeta,
)
from drift_engine.models.enums import DriftStatus, EngineId, ReasonCode
from drift_engine.models.inputs import RevenueInput

from .base import DriftEngine, warmup_reason
from .numeric import clamp, direction_for, pct_delta, round_half_up


class RevenueEngine(DriftEngine):
    """
    Net revenue / refund rate drift engine.

    Example:
        >>> engine = RevenueEngine()
        >>> result = engine.compute({
        ...     "baseline_net_revenue_cents_14d": 100_000,
        ...     "current_net_revenue_cents_14d": 70_000,
        ... })
        >>> result.status.value, result.meta.direction.value
        ('attention', 'down')
    """

    engine_id = EngineId.REVENUE_V1
    input_model = RevenueInput

    def _compute(self, data: RevenueInput) -> DriftResult:
        cfg = self.config
        reasons: list[DriftReason] = []

        baseline_net = data.baseline_net_revenue_cents_14d
        current_net = data.current_net_revenue_cents_14d
        baseline_rate = data.baseline_refund_rate
        current_rate = data.current_refund_rate

        warmup = self._is_warming_up(data)
        if warmup:
            reasons.append(warmup_reason())
            # No history to compare refund behaviour against
            if current_rate is not None:
                baseline_rate = current_rate

        delta_pct = pct_delta(current_net, baseline_net)
        refund_delta: Optional[float] = None
        if baseline_rate is not None and current_rate is not None:
            refund_delta = current_rate - baseline_rate

        if delta_pct <= -cfg.revenue_drop_high:
            reasons.append(DriftReason(
                code=ReasonCode.REV_VELOCITY_DROP_25.value,
                detail=f"Revenue velocity down {cfg.revenue_drop_high:.0%}+ vs baseline",
                delta=delta_pct,
            ))
        elif delta_pct <= -cfg.revenue_drop_low:
            reasons.append(DriftReason(
                code=ReasonCode.REV_VELOCITY_DROP_10.value,
                detail=f"Revenue velocity down {cfg.revenue_drop_low:.0%}+ vs baseline",
                delta=delta_pct,
            ))

        if refund_delta is not None:
            if refund_delta >= cfg.refund_rise_high:
                reasons.append(DriftReason(
                    code=ReasonCode.REFUND_RATE_UP_5.value,
                    detail=f"Refund rate up {cfg.refund_rise_high:.0%}+ vs baseline",
                    delta=refund_delta,
                ))
            elif refund_delta >= cfg.refund_rise_low:
                reasons.append(DriftReason(
                    code=ReasonCode.REFUND_RATE_UP_2.value,
                    detail=f"Refund rate up {cfg.refund_rise_low:.0%}+ vs baseline",
                    delta=refund_delta,
                ))

        status = self._status(delta_pct, refund_delta)
        revenue_penalty, refund_penalty = self._penalties(delta_pct, refund_delta)
        mri_raw = 100 - (revenue_penalty + refund_penalty)

        mri_prev: Optional[int] = None
        trend_confirmed: Optional[bool] = None
        if data.prior_net_revenue_cents_14d is not None:
            prior_delta = pct_delta(data.prior_net_revenue_cents_14d, baseline_net)
            prior_refund_delta: Optional[float] = None
            if data.prior_refund_rate is not None and baseline_rate is not None:
                prior_refund_delta = data.prior_refund_rate - baseline_rate
            mri_prev = int(clamp(100 - sum(self._penalties(prior_delta, prior_refund_delta)), 0, 100))
            trend_confirmed = status != DriftStatus.STABLE and (
                prior_delta <= -cfg.trend_confirm_drop
                or (prior_refund_delta is not None and prior_refund_delta >= cfg.refund_rise_low)
            )

        refunds: Optional[RefundBlock] = None
        if baseline_rate is not None or current_rate is not None:
            refunds = RefundBlock(
                baseline_refund_rate=baseline_rate,
                current_refund_rate=current_rate,
                delta=refund_delta,
            )

        meta = RevenueMeta(
            direction=direction_for(delta_pct, cfg.direction_band),
            mri_score=int(clamp(mri_raw, 0, 100)),
            mri_raw=mri_raw,
            mri_prev=mri_prev,
            components={"revenue": revenue_penalty, "refunds": refund_penalty},
            warmup=warmup,
            revenue=RevenueBlock(
                baseline_net_revenue_cents_14d=baseline_net,
                current_net_revenue_cents_14d=current_net,
                delta_pct=delta_pct,
            ),
            refunds=refunds,
            trend_confirmed=trend_confirmed,
        )

        return DriftResult(status=status, reasons=tuple(reasons), meta=meta)

    def _is_warming_up(self, data: RevenueInput) -> bool:
        """Baseline gross activity (net when gross is unknown) below the minimum."""
        minimum = self.config.warmup_min_gross_cents
        if minimum <= 0:
            return False
        activity = data.baseline_gross_revenue_cents
        if activity is None:
            activity = data.baseline_net_revenue_cents_14d
        return activity < minimum

    def _status(self, delta_pct: float, refund_delta: Optional[float]) -> DriftStatus:
        # Any single signal may escalate on its own
        cfg = self.config
        rise = refund_delta if refund_delta is not None else 0.0
        if delta_pct <= -cfg.revenue_drop_high or rise >= cfg.refund_rise_high:
            return DriftStatus.ATTENTION
        if delta_pct <= -cfg.revenue_drop_low or rise >= cfg.refund_rise_low:
            return DriftStatus.SOFTENING
        return DriftStatus.STABLE

    def _penalties(self, delta_pct: float, refund_delta: Optional[float]) -> tuple[int, int]:
        """Revenue penalty (up to its weight) and refund penalty (up to its weight)."""
        cfg = self.config
        revenue_penalty = 0
        if delta_pct < 0:
            revenue_penalty = round_half_up(
                clamp(-delta_pct / cfg.revenue_penalty_span, 0.0, 1.0) * cfg.revenue_penalty_weight
            )
        refund_penalty = 0
        if refund_delta is not None and refund_delta > 0:
            refund_penalty = round_half_up(
                clamp(refund_delta / cfg.refund_penalty_span, 0.0, 1.0) * cfg.refund_penalty_weight
            )
        return revenue_penalty, refund_penalty


def compute_revenue_v1(payload: Any, config: Optional[DriftConfig] = None) -> DriftResult:
    """Functional entry point for the revenue engine."""
    return RevenueEngine(config).compute(payload)
