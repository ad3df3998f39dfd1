"""
Drift result models.

A DriftResult is the complete, immutable output of one engine for one
business for one run. Engine-specific metadata is a tagged union keyed by
the engine identifier: consumers switch on ``meta.engine`` instead of
probing for optional fields.
"""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .enums import DriftDirection, DriftStatus, EmailStatus, EngineId, ReasonCode


class DriftReason(BaseModel):
    """
    One triggered threshold.

    Attributes:
        code: Stable taxonomy key (see ReasonCode)
        detail: Human-readable description used as a headline
        delta: Signed magnitude that crossed the threshold
    """

    model_config = ConfigDict(frozen=True)

    code: str = Field(description="Stable taxonomy key")
    detail: str = Field(default="", description="Human-readable description")
    delta: Optional[float] = Field(default=None, description="Signed magnitude of the signal")

    @property
    def is_warmup(self) -> bool:
        return self.code == ReasonCode.BASELINE_WARMUP.value


class RevenueBlock(BaseModel):
    """Net revenue comparison, cents. delta_pct is negative when declining."""

    model_config = ConfigDict(frozen=True)

    baseline_net_revenue_cents_14d: Optional[float] = None
    current_net_revenue_cents_14d: Optional[float] = None
    delta_pct: Optional[float] = None


class RefundBlock(BaseModel):
    """Refund rate comparison. delta is positive when worsening."""

    model_config = ConfigDict(frozen=True)

    baseline_refund_rate: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    current_refund_rate: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    delta: Optional[float] = None


class _MetaBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    direction: DriftDirection = DriftDirection.FLAT
    mri_score: int = Field(ge=0, le=100, description="Composite health score, higher is healthier")
    mri_raw: int = Field(description="Score before clamping to [0, 100]")
    mri_prev: Optional[int] = Field(default=None, ge=0, le=100)
    components: dict[str, int] = Field(default_factory=dict, description="Per-signal penalties")
    warmup: bool = Field(default=False, description="Baseline history was too thin to compare")


class LegacyMeta(_MetaBase):
    """Metadata of the review/engagement/sentiment engine."""

    engine: Literal["legacy_v1"] = "legacy_v1"
    review_drop: float = Field(ge=0.0, le=1.0)
    engagement_drop: float = Field(ge=0.0, le=1.0)
    sentiment_delta: Optional[float] = Field(default=None, ge=-1.0, le=1.0)


class RevenueMeta(_MetaBase):
    """Metadata of the net revenue / refund rate engine."""

    engine: Literal["revenue_v1"] = "revenue_v1"
    revenue: RevenueBlock
    refunds: Optional[RefundBlock] = None
    trend_confirmed: Optional[bool] = Field(
        default=None, description="Prior window corroborates the current drift"
    )


DriftMeta = Annotated[Union[LegacyMeta, RevenueMeta], Field(discriminator="engine")]


class DriftResult(BaseModel):
    """
    Status, ordered reasons and metadata produced by one engine run.

    Reasons keep insertion order: the first-detected signal comes first and
    becomes the executive headline. A BASELINE_WARMUP reason is informational
    and never counts as a drift signal.
    """

    model_config = ConfigDict(frozen=True)

    status: DriftStatus
    reasons: tuple[DriftReason, ...] = ()
    meta: DriftMeta

    @model_validator(mode="after")
    def validate_status_matches_reasons(self) -> "DriftResult":
        """Stable iff no drift signal fired."""
        has_signals = bool(self.signal_reasons)
        if self.status == DriftStatus.STABLE and has_signals:
            raise ValueError("A stable result cannot carry drift reasons")
        if self.status in (DriftStatus.SOFTENING, DriftStatus.ATTENTION) and not has_signals:
            raise ValueError(f"A {self.status.value} result needs at least one drift reason")
        return self

    @property
    def engine(self) -> EngineId:
        return EngineId(self.meta.engine)

    @property
    def reason_codes(self) -> list[str]:
        return [r.code for r in self.reasons]

    @property
    def signal_reasons(self) -> list[DriftReason]:
        return [r for r in self.reasons if not r.is_warmup]

    def email_status(self) -> EmailStatus:
        """Status restricted to the three states templates understand."""
        if self.status == DriftStatus.WATCH:
            return EmailStatus.SOFTENING
        return EmailStatus(self.status.value)
