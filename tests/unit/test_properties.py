"""
Property-based tests using Hypothesis for the drift engine.

These tests verify the score bounds, status/reason consistency,
determinism and change-detection invariants across arbitrary inputs.
"""

import hypothesis.strategies as st
from hypothesis import given, settings

from drift_engine.engine.change_detector import detect_change
from drift_engine.engine.legacy import LegacyEngine
from drift_engine.engine.numeric import clamp01, drop_ratio, round_half_up
from drift_engine.engine.revenue import RevenueEngine
from drift_engine.models.alerts import LastAlertState
from drift_engine.models.enums import DriftStatus, ReasonCode
from drift_engine.models.inputs import LegacyInput, RevenueInput

cents = st.floats(min_value=0, max_value=1e10, allow_nan=False, allow_infinity=False)
rates = st.one_of(st.none(), st.floats(min_value=-1.0, max_value=2.0, allow_nan=False))
counts = st.floats(min_value=0, max_value=1e6, allow_nan=False, allow_infinity=False)
unit = st.floats(min_value=0.0, max_value=1.0, allow_nan=False)

REVENUE_FAMILY = {ReasonCode.REV_VELOCITY_DROP_25.value, ReasonCode.REV_VELOCITY_DROP_10.value}
REFUND_FAMILY = {ReasonCode.REFUND_RATE_UP_5.value, ReasonCode.REFUND_RATE_UP_2.value}


revenue_inputs = st.builds(
    RevenueInput,
    baseline_net_revenue_cents_14d=cents,
    current_net_revenue_cents_14d=cents,
    baseline_refund_rate=rates,
    current_refund_rate=rates,
    baseline_gross_revenue_cents=st.one_of(st.none(), cents),
    prior_net_revenue_cents_14d=st.one_of(st.none(), cents),
    prior_refund_rate=rates,
)

legacy_inputs = st.builds(
    LegacyInput,
    baseline_review_count_per_14d=counts,
    current_review_count_14d=counts,
    baseline_sentiment_avg=st.one_of(st.none(), unit),
    current_sentiment_avg=st.one_of(st.none(), unit),
    baseline_engagement=unit,
    current_engagement=unit,
)


# =============================================================================
# Revenue engine
# =============================================================================


@given(payload=revenue_inputs)
@settings(max_examples=200)
def test_prop_revenue_mri_bounds(payload: RevenueInput):
    """Property: mri_score ∈ [0, 100] for any valid revenue input."""
    result = RevenueEngine().compute(payload)
    assert 0 <= result.meta.mri_score <= 100
    if result.meta.mri_prev is not None:
        assert 0 <= result.meta.mri_prev <= 100


@given(payload=revenue_inputs)
@settings(max_examples=200)
def test_prop_revenue_stable_iff_no_signals(payload: RevenueInput):
    """Property: status is stable exactly when no drift signal fired."""
    result = RevenueEngine().compute(payload)
    assert (result.status == DriftStatus.STABLE) == (len(result.signal_reasons) == 0)


@given(payload=revenue_inputs)
@settings(max_examples=200)
def test_prop_revenue_one_reason_per_family(payload: RevenueInput):
    """Property: at most one revenue-tier and one refund-tier reason."""
    codes = RevenueEngine().compute(payload).reason_codes
    assert len([c for c in codes if c in REVENUE_FAMILY]) <= 1
    assert len([c for c in codes if c in REFUND_FAMILY]) <= 1


@given(payload=revenue_inputs)
@settings(max_examples=100)
def test_prop_revenue_warmup_reason_first(payload: RevenueInput):
    """Property: a warmup reason, when present, is always first."""
    codes = RevenueEngine().compute(payload).reason_codes
    if ReasonCode.BASELINE_WARMUP.value in codes:
        assert codes.index(ReasonCode.BASELINE_WARMUP.value) == 0


@given(payload=revenue_inputs)
@settings(max_examples=100)
def test_prop_revenue_deterministic(payload: RevenueInput):
    """Property: identical input and config give identical results."""
    assert RevenueEngine().compute(payload) == RevenueEngine().compute(payload)


# =============================================================================
# Legacy engine
# =============================================================================


@given(payload=legacy_inputs)
@settings(max_examples=200)
def test_prop_legacy_mri_and_drops_bounded(payload: LegacyInput):
    """Property: score in [0, 100], drop ratios in [0, 1]."""
    meta = LegacyEngine().compute(payload).meta
    assert 0 <= meta.mri_score <= 100
    assert 0.0 <= meta.review_drop <= 1.0
    assert 0.0 <= meta.engagement_drop <= 1.0


@given(payload=legacy_inputs)
@settings(max_examples=200)
def test_prop_legacy_status_consistent(payload: LegacyInput):
    """Property: stable iff no signal; attention needs two reasons."""
    result = LegacyEngine().compute(payload)
    assert (result.status == DriftStatus.STABLE) == (len(result.signal_reasons) == 0)
    if result.status == DriftStatus.ATTENTION:
        assert len(result.signal_reasons) >= 2


# =============================================================================
# Numeric policy and change detection
# =============================================================================


@given(current=st.floats(allow_nan=False, allow_infinity=False, min_value=-1e9, max_value=1e9), baseline=counts)
@settings(max_examples=100)
def test_prop_drop_ratio_bounded(current: float, baseline: float):
    """Property: drop_ratio ∈ [0, 1] for any finite input."""
    assert 0.0 <= drop_ratio(current, baseline) <= 1.0


@given(k=st.integers(min_value=-10**6, max_value=10**6))
@settings(max_examples=100)
def test_prop_round_half_up_within_half(k: int):
    """Property: rounding moves an eighth-step value by at most one half; halves go up."""
    n = k / 8
    assert abs(round_half_up(n) - n) <= 0.5
    if k % 4 == 0 and k % 8 != 0:
        assert round_half_up(n) == n + 0.5


@given(n=st.floats(allow_nan=False))
@settings(max_examples=100)
def test_prop_clamp01_bounded(n: float):
    """Property: clamp01 output ∈ [0, 1]."""
    assert 0.0 <= clamp01(n) <= 1.0


@given(
    status=st.sampled_from([s.value for s in DriftStatus]),
    codes=st.lists(st.sampled_from([c.value for c in ReasonCode]), max_size=5, unique=True),
    data=st.data(),
)
@settings(max_examples=100)
def test_prop_change_detection_ignores_order(status, codes, data):
    """Property: any permutation of the stored reason set is not a change."""
    shuffled = data.draw(st.permutations(codes))
    last = LastAlertState(status=status, reason_codes=tuple(codes))
    assert detect_change(status, shuffled, last).changed is False
