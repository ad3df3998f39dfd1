"""
Drift computation and alerting engine.

Components:
    LegacyEngine: Review/engagement/sentiment scoring (legacy_v1)
    RevenueEngine: Net revenue/refund rate scoring (revenue_v1)
    select_engine_id / get_engine / compute_drift: Engine selection and dispatch
    AlertChangeDetector / detect_change: Status transition deduplication
    executive_summary: Headline, confidence, drivers, impact and next steps
    project_risk / estimate_revenue_impact: 30-day outlook
    DriftRunner: Batch driver with per-business failure isolation

Example:
    >>> from drift_engine.engine import compute_drift, executive_summary
    >>> result = compute_drift("revenue_v1", {
    ...     "baseline_net_revenue_cents_14d": 100_000,
    ...     "current_net_revenue_cents_14d": 70_000,
    ... })
    >>> executive_summary(result, "biz_1").headline
    'Revenue velocity down 25%+ vs baseline'
"""

from .base import DriftEngine
from .change_detector import AlertChangeDetector, detect_change
from .legacy import LegacyEngine, compute_legacy_v1
from .projection import estimate_revenue_impact, project_risk
from .revenue import RevenueEngine, compute_revenue_v1
from .runner import DriftRunner
from .selector import compute_drift, get_engine, select_engine_id
from .summary import executive_summary
from .windows import aggregate_legacy_input, aggregate_revenue_input, compute_windows

__all__ = [
    "DriftEngine",
    "LegacyEngine",
    "RevenueEngine",
    "compute_legacy_v1",
    "compute_revenue_v1",
    "select_engine_id",
    "get_engine",
    "compute_drift",
    "AlertChangeDetector",
    "detect_change",
    "executive_summary",
    "project_risk",
    "estimate_revenue_impact",
    "compute_windows",
    "aggregate_revenue_input",
    "aggregate_legacy_input",
    "DriftRunner",
]
