"""
Alert history and change-detection models.

An AlertRecord is written only when a business's status or reason set
changed since the last stored record. Persistence belongs to an AlertStore
implementation; these models only describe what gets stored.
"""

from datetime import date, datetime
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .drift import DriftMeta, DriftReason
from .enums import DriftStatus


class AlertRecord(BaseModel):
    """
    A persisted status transition for one business.

    Attributes:
        alert_id: Unique identifier for this record
        business_id: Business the record belongs to
        status: Status computed for the run
        reasons: Reasons computed for the run, insertion order
        window_start: First day of the current window
        window_end: Last day of the current window
        meta: Engine metadata of the run
        created_at: When the record was created
    """

    alert_id: str = Field(default_factory=lambda: str(uuid4()))
    business_id: str = Field(description="Business the record belongs to")
    status: DriftStatus
    reasons: list[DriftReason] = Field(default_factory=list)
    window_start: Optional[date] = None
    window_end: Optional[date] = None
    meta: Optional[DriftMeta] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)

    @field_validator("business_id")
    @classmethod
    def validate_business_id_not_empty(cls, v: str) -> str:
        """Ensure business id is not empty."""
        if not v or not v.strip():
            raise ValueError("business_id must not be empty")
        return v.strip()

    @property
    def reason_codes(self) -> list[str]:
        return [r.code for r in self.reasons]


class LastAlertState(BaseModel):
    """The (status, reason codes) pair remembered between runs."""

    model_config = ConfigDict(frozen=True)

    status: DriftStatus
    reason_codes: tuple[str, ...] = ()

    @classmethod
    def from_record(cls, record: AlertRecord) -> "LastAlertState":
        return cls(status=record.status, reason_codes=tuple(record.reason_codes))


class ChangeDecision(BaseModel):
    """
    Outcome of comparing a fresh result against the stored one.

    Attributes:
        changed: Whether a notification should fire
        forced: The caller bypassed the comparison (manual test trigger)
        first_run: No previous state existed
        status_changed: Status differs from the stored one
        reasons_changed: Reason set differs from the stored one
        status: Status to persist for the next run
        reason_codes: Reason codes to persist for the next run
        previous_status: Stored status before this run, if any
    """

    model_config = ConfigDict(frozen=True)

    changed: bool
    forced: bool = False
    first_run: bool = False
    status_changed: bool = False
    reasons_changed: bool = False
    status: DriftStatus
    reason_codes: tuple[str, ...] = ()
    previous_status: Optional[DriftStatus] = None

    @property
    def material(self) -> bool:
        """A real transition, as opposed to one only forced by the caller."""
        return self.first_run or self.status_changed or self.reasons_changed
