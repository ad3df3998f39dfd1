"""
Numeric policy shared by the scoring engines.

Zero baselines are a defined case, never an exception: both-zero means no
change, and a positive current against a zero baseline is an unmeasurable
change that callers clamp.
"""

import math

from drift_engine.models.enums import DriftDirection

# Returned by pct_change when the baseline is zero but the current value is not
UNMEASURABLE_CHANGE = 999.0


def clamp(n: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, n))


def clamp01(n: float) -> float:
    return clamp(n, 0.0, 1.0)


def round_half_up(n: float) -> int:
    """Round to the nearest integer, halves away from negative infinity."""
    return int(math.floor(n + 0.5))


def pct_change(current: float, baseline: float) -> float:
    """
    Relative change of current vs baseline.

    Returns 0 when both are zero and UNMEASURABLE_CHANGE when only the
    baseline is zero.
    """
    if baseline == 0:
        return 0.0 if current == 0 else UNMEASURABLE_CHANGE
    return (current - baseline) / baseline


def drop_ratio(current: float, baseline: float) -> float:
    """
    Fractional drop of current below baseline, clamped to [0, 1].

    With no baseline there is nothing to regress against: an empty current
    window reads as a full drop, any activity reads as no drop.
    """
    if baseline > 0:
        return clamp01(-pct_change(current, baseline))
    return 1.0 if current == 0 else 0.0


def pct_delta(current: float, baseline: float) -> float:
    """Revenue delta; a non-positive baseline yields 1 for positive current, else 0."""
    if baseline <= 0:
        return 1.0 if current > 0 else 0.0
    return (current - baseline) / baseline


def direction_for(delta_pct: float, band: float) -> DriftDirection:
    if delta_pct > band:
        return DriftDirection.UP
    if delta_pct < -band:
        return DriftDirection.DOWN
    return DriftDirection.FLAT
