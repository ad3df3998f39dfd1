"""
Legacy Engine — Review, Sentiment and Engagement Drift.

Scores a business from review frequency, review sentiment and engagement,
comparing the current 14 days against a baseline normalized to a 14-day
equivalent.

Status requires cross-signal confirmation: ``attention`` needs at least two
signal families in their high tier. A single high-tier hit on its own is
``softening``, exactly like any low-tier hit.

Version: legacy_v1
"""

from typing import Any, Optional

from drift_engine.config import DriftConfig
from drift_engine.models.drift import DriftReason, DriftResult, LegacyMeta
from drift_engine.models.enums import DriftDirection, DriftStatus, EngineId, ReasonCode
from drift_engine.models.inputs import LegacyInput

from .base import DriftEngine, warmup_reason
from .numeric import clamp, direction_for, drop_ratio, pct_change, round_half_up

# MRI penalty weights; they sum to 100
REVIEW_WEIGHT = 40
ENGAGEMENT_WEIGHT = 30
SENTIMENT_WEIGHT = 30

# Corroborating high-tier families needed for attention
ATTENTION_MIN_HITS = 2


class LegacyEngine(DriftEngine):
    """
    Review/engagement/sentiment drift engine.

    Example:
        >>> engine = LegacyEngine()
        >>> result = engine.compute({
        ...     "baseline_review_count_per_14d": 10,
        ...     "current_review_count_14d": 7,
        ... })
        >>> result.status.value
        'softening'
    """

    engine_id = EngineId.LEGACY_V1
    input_model = LegacyInput

    def _compute(self, data: LegacyInput) -> DriftResult:
        cfg = self.config
        reasons: list[DriftReason] = []

        baseline_reviews = data.baseline_review_count_per_14d
        current_reviews = data.current_review_count_14d
        baseline_sentiment = data.baseline_sentiment_avg
        current_sentiment = data.current_sentiment_avg

        warmup = cfg.warmup_min_reviews > 0 and baseline_reviews < cfg.warmup_min_reviews
        if warmup:
            reasons.append(warmup_reason())
            if current_sentiment is not None:
                baseline_sentiment = current_sentiment

        review_drop = drop_ratio(current_reviews, baseline_reviews)

        sentiment_delta: Optional[float] = None
        if baseline_sentiment is not None and current_sentiment is not None:
            sentiment_delta = current_sentiment - baseline_sentiment

        # Zero baseline engagement has nothing to regress against
        engagement_scored = data.baseline_engagement > 0
        engagement_drop = (
            drop_ratio(data.current_engagement, data.baseline_engagement)
            if engagement_scored
            else 0.0
        )

        hits = 0

        if review_drop >= cfg.review_drop_high:
            hits += 1
            reasons.append(DriftReason(
                code=ReasonCode.REV_FREQ_DROP_30.value,
                detail=f"Review frequency down {cfg.review_drop_high:.0%}+",
                delta=-review_drop,
            ))
        elif review_drop >= cfg.review_drop_low:
            reasons.append(DriftReason(
                code=ReasonCode.REV_FREQ_DROP_15.value,
                detail=f"Review frequency down {cfg.review_drop_low:.0%}–{cfg.review_drop_high:.0%}",
                delta=-review_drop,
            ))

        if sentiment_delta is not None:
            if sentiment_delta <= -cfg.sentiment_drop_high:
                hits += 1
                reasons.append(DriftReason(
                    code=ReasonCode.SENTIMENT_DROP_50.value,
                    detail=f"Sentiment down {cfg.sentiment_drop_high:.2f}+",
                    delta=sentiment_delta,
                ))
            elif sentiment_delta <= -cfg.sentiment_drop_low:
                reasons.append(DriftReason(
                    code=ReasonCode.SENTIMENT_DROP_25.value,
                    detail=f"Sentiment down {cfg.sentiment_drop_low:.2f}–{cfg.sentiment_drop_high:.2f}",
                    delta=sentiment_delta,
                ))

        if engagement_scored:
            if engagement_drop >= cfg.engagement_drop_high:
                hits += 1
                reasons.append(DriftReason(
                    code=ReasonCode.ENG_DROP_30.value,
                    detail=f"Engagement down {cfg.engagement_drop_high:.0%}+",
                    delta=-engagement_drop,
                ))
            elif engagement_drop >= cfg.engagement_drop_low:
                reasons.append(DriftReason(
                    code=ReasonCode.ENG_DROP_15.value,
                    detail=f"Engagement down {cfg.engagement_drop_low:.0%}–{cfg.engagement_drop_high:.0%}",
                    delta=-engagement_drop,
                ))

        has_signal = any(not r.is_warmup for r in reasons)
        if hits >= ATTENTION_MIN_HITS:
            status = DriftStatus.ATTENTION
        elif has_signal:
            status = DriftStatus.SOFTENING
        else:
            status = DriftStatus.STABLE

        penalty_reviews = round_half_up(review_drop * REVIEW_WEIGHT)
        penalty_engagement = round_half_up(engagement_drop * ENGAGEMENT_WEIGHT)
        penalty_sentiment = round_half_up(max(0.0, -(sentiment_delta or 0.0)) * SENTIMENT_WEIGHT)
        mri_raw = 100 - (penalty_reviews + penalty_engagement + penalty_sentiment)

        meta = LegacyMeta(
            direction=self._direction(current_reviews, baseline_reviews),
            mri_score=int(clamp(mri_raw, 0, 100)),
            mri_raw=mri_raw,
            components={
                "reviews": penalty_reviews,
                "engagement": penalty_engagement,
                "sentiment": penalty_sentiment,
            },
            warmup=warmup,
            review_drop=review_drop,
            engagement_drop=engagement_drop,
            sentiment_delta=sentiment_delta,
        )

        return DriftResult(status=status, reasons=tuple(reasons), meta=meta)

    def _direction(self, current_reviews: float, baseline_reviews: float) -> DriftDirection:
        """Trend of review volume, the legacy engine's primary demand signal."""
        if baseline_reviews <= 0:
            return DriftDirection.FLAT
        return direction_for(pct_change(current_reviews, baseline_reviews), self.config.direction_band)


def compute_legacy_v1(payload: Any, config: Optional[DriftConfig] = None) -> DriftResult:
    """Functional entry point for the legacy engine."""
    return LegacyEngine(config).compute(payload)
