"""
Scoring engine base class.

Engines are pure: the same input and config always produce an identical
DriftResult. They never fetch, persist or send anything.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, ClassVar, Optional

import structlog
from pydantic import BaseModel, ValidationError

from drift_engine.config import DriftConfig
from drift_engine.errors import InvalidInputError
from drift_engine.models.drift import DriftReason, DriftResult
from drift_engine.models.enums import EngineId, ReasonCode


WARMUP_DETAIL = "Baseline history is still building; comparisons are provisional."


def warmup_reason() -> DriftReason:
    return DriftReason(code=ReasonCode.BASELINE_WARMUP.value, detail=WARMUP_DETAIL)


class DriftEngine(ABC):
    """
    Common contract of the interchangeable scoring engines.

    Subclasses declare their engine identifier and input model and implement
    ``_compute`` on a validated input.

    Attributes:
        config: Thresholds and policy knobs for every computation
    """

    engine_id: ClassVar[EngineId]
    input_model: ClassVar[type[BaseModel]]

    def __init__(self, config: Optional[DriftConfig] = None):
        self.config = config or DriftConfig()
        self.logger = structlog.get_logger()

    def compute(self, payload: Any) -> DriftResult:
        """
        Validate the payload and compute a DriftResult.

        Args:
            payload: An instance of ``input_model`` or a mapping with its fields

        Returns:
            DriftResult for the two windows

        Raises:
            InvalidInputError: If the payload is malformed
        """
        data = self.parse_input(payload)
        result = self._compute(data)

        self.logger.debug(
            "drift_computed",
            engine=self.engine_id.value,
            status=result.status.value,
            reasons=result.reason_codes,
            mri_score=result.meta.mri_score,
        )
        return result

    @classmethod
    def parse_input(cls, payload: Any) -> BaseModel:
        """Coerce a payload into the engine's input model."""
        if isinstance(payload, cls.input_model):
            return payload
        if not isinstance(payload, Mapping):
            raise InvalidInputError(
                f"{cls.engine_id.value} input must be a mapping, got {type(payload).__name__}",
                reason="not_a_mapping",
            )
        try:
            return cls.input_model.model_validate(dict(payload))
        except ValidationError as e:
            err = e.errors()[0]
            field = ".".join(str(part) for part in err["loc"])
            raise InvalidInputError(
                f"Invalid {cls.engine_id.value} input: {field}: {err['msg']}",
                field=field,
                reason=err["type"],
            ) from e

    @abstractmethod
    def _compute(self, data: Any) -> DriftResult:
        """Compute the result for an already validated input."""
