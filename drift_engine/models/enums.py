"""
Enumeration types for the drift engine.

All enums inherit from str so that results serialize to plain JSON strings
and compare equal to the raw values stored by external collaborators.
"""

from enum import Enum


class DriftStatus(str, Enum):
    """
    Health state of a business for one run.

    WATCH is only produced by legacy data paths; consumers that understand
    three states map it to SOFTENING at the rendering boundary.
    """

    STABLE = "stable"
    WATCH = "watch"
    SOFTENING = "softening"
    ATTENTION = "attention"


class EmailStatus(str, Enum):
    """The three states that notification templates understand."""

    STABLE = "stable"
    SOFTENING = "softening"
    ATTENTION = "attention"


class DriftDirection(str, Enum):
    """Trend direction of the primary metric vs baseline."""

    UP = "up"
    FLAT = "flat"
    DOWN = "down"


class EngineId(str, Enum):
    """Identifier of the scoring engine that produced a result."""

    LEGACY_V1 = "legacy_v1"
    REVENUE_V1 = "revenue_v1"


class Confidence(str, Enum):
    """
    Confidence tier of an executive summary.

    HIGH is reserved; no current rule produces it.
    """

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class SourceType(str, Enum):
    """Upstream data source types a business can connect."""

    STRIPE_REVENUE = "stripe_revenue"
    CSV_REVIEWS = "csv_reviews"
    GOOGLE_REVIEWS = "google_reviews"
    CSV_ENGAGEMENT = "csv_engagement"
    KLAVIYO = "klaviyo"


class RiskLabel(str, Enum):
    """Coarse revenue-at-risk band used by projections."""

    LOW = "Low"
    MODERATE = "Moderate"
    HIGH = "High"


class ReasonCode(str, Enum):
    """
    Stable taxonomy of drift reasons.

    The numeric suffix names the tier threshold that fired (percent for
    ratios, hundredths for sentiment).
    """

    # Legacy engine
    REV_FREQ_DROP_30 = "REV_FREQ_DROP_30"
    REV_FREQ_DROP_15 = "REV_FREQ_DROP_15"
    SENTIMENT_DROP_50 = "SENTIMENT_DROP_50"
    SENTIMENT_DROP_25 = "SENTIMENT_DROP_25"
    ENG_DROP_30 = "ENG_DROP_30"
    ENG_DROP_15 = "ENG_DROP_15"

    # Revenue engine
    REV_VELOCITY_DROP_25 = "REV_VELOCITY_DROP_25"
    REV_VELOCITY_DROP_10 = "REV_VELOCITY_DROP_10"
    REFUND_RATE_UP_5 = "REFUND_RATE_UP_5"
    REFUND_RATE_UP_2 = "REFUND_RATE_UP_2"

    # Cross-engine
    BASELINE_WARMUP = "BASELINE_WARMUP"
