"""
Engine Selector — pick the scoring engine for a business.

A business with a connected payments source is scored on revenue; every
other business falls back to the review/engagement engine.
"""

from collections.abc import Iterable
from typing import Any, Optional, Union

from drift_engine.config import DriftConfig
from drift_engine.errors import UnknownEngineError
from drift_engine.models.drift import DriftResult
from drift_engine.models.enums import EngineId, SourceType

from .base import DriftEngine
from .legacy import LegacyEngine
from .revenue import RevenueEngine

ENGINE_REGISTRY: dict[EngineId, type[DriftEngine]] = {
    EngineId.LEGACY_V1: LegacyEngine,
    EngineId.REVENUE_V1: RevenueEngine,
}

REVENUE_SOURCES = frozenset({SourceType.STRIPE_REVENUE.value})


def select_engine_id(connected_source_types: Iterable[Union[str, SourceType]]) -> EngineId:
    """
    Choose the engine from the business's connected source types.

    Args:
        connected_source_types: Types of sources with an active connection

    Returns:
        REVENUE_V1 when a revenue source is connected, LEGACY_V1 otherwise
    """
    types = {t.value if isinstance(t, SourceType) else str(t) for t in connected_source_types}
    if types & REVENUE_SOURCES:
        return EngineId.REVENUE_V1
    return EngineId.LEGACY_V1


def get_engine(
    engine_id: Union[str, EngineId],
    config: Optional[DriftConfig] = None,
) -> DriftEngine:
    """
    Instantiate the engine registered for an identifier.

    Raises:
        UnknownEngineError: If no engine is registered under the identifier
    """
    try:
        key = EngineId(engine_id)
    except ValueError as e:
        raise UnknownEngineError(f"Unknown drift engine '{engine_id}'") from e
    return ENGINE_REGISTRY[key](config)


def compute_drift(
    engine_id: Union[str, EngineId],
    payload: Any,
    config: Optional[DriftConfig] = None,
) -> DriftResult:
    """Dispatch a payload to the named engine."""
    return get_engine(engine_id, config).compute(payload)
