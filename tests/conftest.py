"""
Pytest configuration and shared fixtures for the drift engine test suite.

Data factories for engine inputs and results, an in-memory mock of the
alert store that records calls, and reusable fixtures across unit, golden
and property-based tests.
"""

from datetime import date, timedelta
from typing import Optional

import pytest

from drift_engine.config import DriftConfig, Settings
from drift_engine.engine.revenue import RevenueEngine
from drift_engine.errors import StorageError
from drift_engine.models.alerts import AlertRecord
from drift_engine.models.drift import DriftResult
from drift_engine.models.inputs import LegacyInput, RevenueInput
from drift_engine.models.runs import BusinessJob
from drift_engine.storage.base import AlertStore


# ---------------------------------------------------------------------------
# Pydantic model factories: reusable across all test suites
# ---------------------------------------------------------------------------


def make_revenue_input(
    baseline_net: float = 100_000,
    current_net: float = 100_000,
    baseline_refund_rate: Optional[float] = 0.03,
    current_refund_rate: Optional[float] = 0.03,
    **overrides,
) -> RevenueInput:
    """Factory function for creating test RevenueInput objects."""
    defaults = dict(
        baseline_net_revenue_cents_14d=baseline_net,
        current_net_revenue_cents_14d=current_net,
        baseline_refund_rate=baseline_refund_rate,
        current_refund_rate=current_refund_rate,
    )
    defaults.update(overrides)
    return RevenueInput(**defaults)


def make_legacy_input(
    baseline_reviews: float = 10,
    current_reviews: float = 10,
    baseline_sentiment: Optional[float] = 0.8,
    current_sentiment: Optional[float] = 0.8,
    baseline_engagement: float = 0.4,
    current_engagement: float = 0.4,
    **overrides,
) -> LegacyInput:
    """Factory function for creating test LegacyInput objects."""
    defaults = dict(
        baseline_review_count_per_14d=baseline_reviews,
        current_review_count_14d=current_reviews,
        baseline_sentiment_avg=baseline_sentiment,
        current_sentiment_avg=current_sentiment,
        baseline_engagement=baseline_engagement,
        current_engagement=current_engagement,
    )
    defaults.update(overrides)
    return LegacyInput(**defaults)


def make_revenue_result(
    baseline_net: float = 100_000,
    current_net: float = 70_000,
    config: Optional[DriftConfig] = None,
    **overrides,
) -> DriftResult:
    """Factory function for a DriftResult computed by the revenue engine."""
    payload = make_revenue_input(baseline_net=baseline_net, current_net=current_net, **overrides)
    return RevenueEngine(config).compute(payload)


def make_job(
    business_id: str = "biz_001",
    connected_sources: Optional[list[str]] = None,
    payload: Optional[dict] = None,
    **overrides,
) -> BusinessJob:
    """Factory function for creating test BusinessJob objects."""
    today = date(2026, 3, 31)
    defaults = dict(
        business_id=business_id,
        business_name=f"Business {business_id}",
        connected_sources=connected_sources if connected_sources is not None else ["stripe_revenue"],
        payload=payload if payload is not None else {
            "baseline_net_revenue_cents_14d": 100_000,
            "current_net_revenue_cents_14d": 70_000,
        },
        window_start=today - timedelta(days=13),
        window_end=today,
    )
    defaults.update(overrides)
    return BusinessJob(**defaults)


# ---------------------------------------------------------------------------
# Mock storage: reusable mock for pure unit tests
# ---------------------------------------------------------------------------


class MockAlertStore(AlertStore):
    """
    In-memory mock of AlertStore for unit tests.

    Records every call so tests can assert on reads and writes, and can be
    told to fail to exercise error isolation.
    """

    def __init__(self, fail_on_write: bool = False, fail_on_read: bool = False):
        self.alerts: dict[str, list[AlertRecord]] = {}
        self.reads: list[str] = []
        self.writes: list[AlertRecord] = []
        self.fail_on_write = fail_on_write
        self.fail_on_read = fail_on_read

    def read_last_alert(self, business_id: str) -> Optional[AlertRecord]:
        self.reads.append(business_id)
        if self.fail_on_read:
            raise StorageError("read failed")
        history = self.alerts.get(business_id, [])
        return history[-1] if history else None

    def write_alert(self, record: AlertRecord) -> str:
        if self.fail_on_write:
            raise StorageError("write failed")
        self.writes.append(record)
        self.alerts.setdefault(record.business_id, []).append(record)
        return record.alert_id

    def list_alerts(self, business_id: str, limit: Optional[int] = None) -> list[AlertRecord]:
        history = list(reversed(self.alerts.get(business_id, [])))
        return history[:limit] if limit is not None else history


# ---------------------------------------------------------------------------
# Pytest fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_store():
    """Fresh MockAlertStore for each test."""
    return MockAlertStore()


@pytest.fixture
def test_settings():
    """Settings isolated from the process environment."""
    return Settings(_env_file=None, site_url="https://drift.example.com")


@pytest.fixture
def attention_result():
    """Revenue result with a 30% revenue drop."""
    return make_revenue_result(baseline_net=100_000, current_net=70_000)


@pytest.fixture
def stable_result():
    """Revenue result with no drift."""
    return make_revenue_result(baseline_net=100_000, current_net=100_000)
