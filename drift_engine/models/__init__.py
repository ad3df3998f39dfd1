"""
Pydantic v2 data models for the drift engine.

Model Organization:
    - enums: Enumeration types for consistent classification
    - inputs: Aggregated metric windows and per-engine inputs
    - drift: Drift reasons, engine metadata and results
    - alerts: Alert history and change-detection decisions
    - summary: Executive summaries, projections and rendered emails
    - runs: Batch run jobs and per-business outcomes

Usage:
    >>> from drift_engine.models import RevenueInput
    >>> payload = RevenueInput(
    ...     baseline_net_revenue_cents_14d=100_000,
    ...     current_net_revenue_cents_14d=70_000,
    ... )
"""

from .alerts import AlertRecord, ChangeDecision, LastAlertState
from .drift import (
    DriftMeta,
    DriftReason,
    DriftResult,
    LegacyMeta,
    RefundBlock,
    RevenueBlock,
    RevenueMeta,
)
from .enums import (
    Confidence,
    DriftDirection,
    DriftStatus,
    EmailStatus,
    EngineId,
    ReasonCode,
    RiskLabel,
    SourceType,
)
from .inputs import LegacyInput, MetricWindow, RevenueInput
from .runs import BusinessJob, BusinessRunResult
from .summary import Driver, ExecutiveSummary, Impact, PortfolioEntry, RiskProjection, StatusEmail

__all__ = [
    # Enums
    "Confidence",
    "DriftDirection",
    "DriftStatus",
    "EmailStatus",
    "EngineId",
    "ReasonCode",
    "RiskLabel",
    "SourceType",
    # Inputs
    "LegacyInput",
    "MetricWindow",
    "RevenueInput",
    # Results
    "DriftMeta",
    "DriftReason",
    "DriftResult",
    "LegacyMeta",
    "RefundBlock",
    "RevenueBlock",
    "RevenueMeta",
    # Alerts
    "AlertRecord",
    "ChangeDecision",
    "LastAlertState",
    # Batch runs
    "BusinessJob",
    "BusinessRunResult",
    # Summaries
    "Driver",
    "ExecutiveSummary",
    "Impact",
    "PortfolioEntry",
    "RiskProjection",
    "StatusEmail",
]
