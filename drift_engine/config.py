"""
Configuration management using pydantic-settings.

Settings are loaded from environment variables (12-factor app). Engines never
read them directly: callers build a DriftConfig once and pass it into each
engine call, so a computation is a pure function of (input, config).
"""

from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DriftConfig(BaseModel):
    """
    Thresholds and policy knobs for one drift computation.

    Defaults match the production constants. Tier thresholds and the
    two-signal attention rule of the legacy engine are product contract;
    they are exposed here so tests and backfills can pin them explicitly,
    not so they can be tuned per business.
    """

    model_config = ConfigDict(frozen=True)

    # Legacy engine tiers
    review_drop_high: float = Field(default=0.30, ge=0.0, le=1.0)
    review_drop_low: float = Field(default=0.15, ge=0.0, le=1.0)
    sentiment_drop_high: float = Field(default=0.50, ge=0.0, le=1.0)
    sentiment_drop_low: float = Field(default=0.25, ge=0.0, le=1.0)
    engagement_drop_high: float = Field(default=0.30, ge=0.0, le=1.0)
    engagement_drop_low: float = Field(default=0.15, ge=0.0, le=1.0)

    # Revenue engine tiers
    revenue_drop_high: float = Field(default=0.25, ge=0.0, le=1.0)
    revenue_drop_low: float = Field(default=0.10, ge=0.0, le=1.0)
    refund_rise_high: float = Field(default=0.05, ge=0.0, le=1.0)
    refund_rise_low: float = Field(default=0.02, ge=0.0, le=1.0)
    direction_band: float = Field(default=0.05, ge=0.0, le=1.0)

    # MRI score shaping
    revenue_penalty_span: float = Field(default=0.35, gt=0.0)
    revenue_penalty_weight: int = Field(default=70, ge=0, le=100)
    refund_penalty_span: float = Field(default=0.08, gt=0.0)
    refund_penalty_weight: int = Field(default=30, ge=0, le=100)

    # Baseline warmup guard
    warmup_min_gross_cents: int = Field(
        default=10_000, ge=0, description="Minimum baseline gross activity ($100)"
    )
    warmup_min_reviews: float = Field(
        default=0.0, ge=0.0, description="Minimum baseline reviews per 14d (0 disables)"
    )

    # Trend confirmation against the prior window
    trend_confirm_drop: float = Field(default=0.10, ge=0.0, le=1.0)

    @classmethod
    def from_settings(cls, settings: "Settings") -> "DriftConfig":
        """Build an engine config from the process settings."""
        return cls(**settings.model_dump(include=set(cls.model_fields)))


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: str = Field(default="info", description="Log level")
    log_format: str = Field(default="json", description="Log format (json|console)")

    # Windows
    baseline_days: int = Field(default=60, ge=14, le=365, description="Baseline window length")
    current_days: int = Field(default=14, ge=1, le=90, description="Current window length")

    # Rendering boundary
    reason_cap: int = Field(default=3, ge=1, description="Max reasons handed to rendering")
    details_path_template: str = Field(
        default="/alerts/{business_id}", description="Details link path template"
    )
    site_url: str = Field(default="http://localhost:3000", description="Public site base URL")

    # Engine thresholds (see DriftConfig)
    review_drop_high: float = Field(default=0.30, description="Legacy review drop high tier")
    review_drop_low: float = Field(default=0.15, description="Legacy review drop low tier")
    sentiment_drop_high: float = Field(default=0.50, description="Legacy sentiment drop high tier")
    sentiment_drop_low: float = Field(default=0.25, description="Legacy sentiment drop low tier")
    engagement_drop_high: float = Field(default=0.30, description="Legacy engagement drop high tier")
    engagement_drop_low: float = Field(default=0.15, description="Legacy engagement drop low tier")
    revenue_drop_high: float = Field(default=0.25, description="Revenue velocity drop high tier")
    revenue_drop_low: float = Field(default=0.10, description="Revenue velocity drop low tier")
    refund_rise_high: float = Field(default=0.05, description="Refund rate rise high tier")
    refund_rise_low: float = Field(default=0.02, description="Refund rate rise low tier")
    direction_band: float = Field(default=0.05, description="Flat band for trend direction")
    revenue_penalty_span: float = Field(default=0.35, description="Revenue drop that costs the full revenue weight")
    revenue_penalty_weight: int = Field(default=70, description="MRI points carried by revenue")
    refund_penalty_span: float = Field(default=0.08, description="Refund rise that costs the full refund weight")
    refund_penalty_weight: int = Field(default=30, description="MRI points carried by refunds")
    warmup_min_gross_cents: int = Field(
        default=10_000, description="Baseline gross cents below which history is warming up"
    )
    warmup_min_reviews: float = Field(
        default=0.0, description="Baseline reviews per 14d below which history is warming up"
    )
    trend_confirm_drop: float = Field(
        default=0.10, description="Prior-window revenue drop that confirms a trend"
    )

    # Development
    dev_mode: bool = Field(default=False, description="Development mode")

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Restrict log format to known renderers."""
        if v.lower() not in {"json", "console"}:
            raise ValueError("log_format must be 'json' or 'console'")
        return v.lower()


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Uses lru_cache to ensure singleton behavior.
    """
    return Settings()


def get_drift_config() -> DriftConfig:
    """Engine config derived from the cached settings."""
    return DriftConfig.from_settings(get_settings())
