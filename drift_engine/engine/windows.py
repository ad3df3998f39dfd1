"""
Window Builder — baseline, current and prior windows from daily snapshots.

Reduces daily snapshot rows (``{"snapshot_date": ..., "metrics": {...}}``)
into MetricWindow aggregates and then into engine inputs. Fetching the rows
is the caller's job; this module only does arithmetic on what it is given.

Windows are inclusive on both ends. The prior window is the block of
``current_days`` immediately before the current window.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any, Optional

from drift_engine.errors import InvalidInputError
from drift_engine.models.inputs import LegacyInput, MetricWindow, RevenueInput

DEFAULT_BASELINE_DAYS = 60
DEFAULT_CURRENT_DAYS = 14


@dataclass(frozen=True)
class DateRange:
    start: date
    end: date

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


@dataclass(frozen=True)
class ReportingWindows:
    """Baseline, current and prior ranges for one run."""

    baseline: DateRange
    current: DateRange
    prior: DateRange

    @property
    def earliest(self) -> date:
        return min(self.baseline.start, self.prior.start)


def compute_windows(
    today: date,
    baseline_days: int = DEFAULT_BASELINE_DAYS,
    current_days: int = DEFAULT_CURRENT_DAYS,
) -> ReportingWindows:
    """
    Build inclusive windows ending today.

    Args:
        today: Last day of the baseline and current windows
        baseline_days: Length of the baseline window
        current_days: Length of the current and prior windows

    Returns:
        ReportingWindows

    Example:
        >>> w = compute_windows(date(2026, 3, 31))
        >>> w.current.start, w.prior.end
        (datetime.date(2026, 3, 18), datetime.date(2026, 3, 17))
    """
    if baseline_days < 1 or current_days < 1:
        raise ValueError("Window lengths must be at least one day")

    current_start = today - timedelta(days=current_days - 1)
    prior_end = current_start - timedelta(days=1)
    return ReportingWindows(
        baseline=DateRange(today - timedelta(days=baseline_days - 1), today),
        current=DateRange(current_start, today),
        prior=DateRange(prior_end - timedelta(days=current_days - 1), prior_end),
    )


# =============================================================================
# Row helpers
# =============================================================================


def _row_date(row: Mapping[str, Any]) -> Optional[date]:
    raw = row.get("snapshot_date")
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    if isinstance(raw, str) and raw:
        return date.fromisoformat(raw[:10])
    return None


def _metric(row: Mapping[str, Any], key: str) -> Optional[float]:
    """A numeric metric from a row, or None when absent or not a number."""
    value = (row.get("metrics") or {}).get(key)
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = float(value)
        except ValueError:
            return None
    if isinstance(value, (int, float)) and value == value and abs(value) != float("inf"):
        return float(value)
    return None


def _sum(rows: list[Mapping[str, Any]], key: str) -> Optional[float]:
    """Total of a metric, or None when no row reported it."""
    values = [v for v in (_metric(r, key) for r in rows) if v is not None]
    if not values:
        return None
    return sum(values)


def _mean(rows: list[Mapping[str, Any]], key: str) -> Optional[float]:
    values = [v for v in (_metric(r, key) for r in rows) if v is not None]
    if not values:
        return None
    return sum(values) / len(values)


def rows_in_range(rows: Iterable[Mapping[str, Any]], window: DateRange) -> list[Mapping[str, Any]]:
    selected = []
    for row in rows:
        day = _row_date(row)
        if day is not None and window.contains(day):
            selected.append(row)
    return selected


def summarize_window(rows: Iterable[Mapping[str, Any]], window: DateRange) -> MetricWindow:
    """
    Aggregate the snapshot rows that fall inside a window.

    Totals are sums, sentiment and engagement are means of the days that
    reported them. A metric no row reported stays None rather than 0.
    Refund rate is refunds over gross and stays None when either is unknown
    or there was no gross revenue to measure it against.
    """
    selected = rows_in_range(rows, window)

    gross = _sum(selected, "revenue_cents")
    refunds = _sum(selected, "refunds_cents")
    refund_rate = None
    if gross is not None and gross > 0 and refunds is not None:
        refund_rate = min(1.0, max(0.0, refunds / gross))

    return MetricWindow(
        start=window.start,
        end=window.end,
        days=window.days,
        review_count=_sum(selected, "review_count"),
        sentiment_avg=_mean(selected, "sentiment_avg"),
        engagement=_mean(selected, "engagement"),
        net_revenue_cents=_sum(selected, "net_revenue_cents"),
        gross_revenue_cents=gross,
        refunds_cents=refunds,
        refund_rate=refund_rate,
    )


# =============================================================================
# Engine inputs
# =============================================================================


def _per_current_window(total: float, baseline: MetricWindow, current: MetricWindow) -> float:
    if not baseline.days or not current.days:
        raise InvalidInputError("Windows need a day count to normalize the baseline", field="days")
    return total / baseline.days * current.days


def _require(value: Optional[float], field: str, window: str) -> float:
    if value is None:
        raise InvalidInputError(
            f"No snapshot in the {window} window reported {field}",
            field=field,
            reason="missing",
        )
    return value


def revenue_input_from_windows(
    baseline: MetricWindow,
    current: MetricWindow,
    prior: Optional[MetricWindow] = None,
) -> RevenueInput:
    """
    Revenue engine input with the baseline normalized to the current window length.

    Raises:
        InvalidInputError: If either window has no net revenue figure
    """
    baseline_net = _require(baseline.net_revenue_cents, "net_revenue_cents", "baseline")
    current_net = _require(current.net_revenue_cents, "net_revenue_cents", "current")
    baseline_net = _per_current_window(baseline_net, baseline, current)

    prior_net = prior.net_revenue_cents if prior is not None else None
    prior_rate = prior.refund_rate if prior is not None else None

    return RevenueInput(
        baseline_net_revenue_cents_14d=baseline_net,
        current_net_revenue_cents_14d=current_net,
        baseline_refund_rate=baseline.refund_rate,
        current_refund_rate=current.refund_rate,
        baseline_gross_revenue_cents=baseline.gross_revenue_cents,
        prior_net_revenue_cents_14d=prior_net,
        prior_refund_rate=prior_rate,
    )


def legacy_input_from_windows(
    baseline: MetricWindow,
    current: MetricWindow,
) -> LegacyInput:
    """
    Legacy engine input with baseline review volume per current-window length.

    Raises:
        InvalidInputError: If either window has no review count
    """
    baseline_reviews = _require(baseline.review_count, "review_count", "baseline")
    current_reviews = _require(current.review_count, "review_count", "current")
    return LegacyInput(
        baseline_review_count_per_14d=_per_current_window(baseline_reviews, baseline, current),
        current_review_count_14d=current_reviews,
        baseline_sentiment_avg=baseline.sentiment_avg,
        current_sentiment_avg=current.sentiment_avg,
        baseline_engagement=baseline.engagement,
        current_engagement=current.engagement,
    )


def aggregate_revenue_input(
    rows: Iterable[Mapping[str, Any]],
    windows: ReportingWindows,
) -> RevenueInput:
    """
    Reduce revenue snapshots into a RevenueInput.

    The prior window is only used when it has at least one snapshot.
    """
    rows = list(rows)
    prior_rows = rows_in_range(rows, windows.prior)
    return revenue_input_from_windows(
        summarize_window(rows, windows.baseline),
        summarize_window(rows, windows.current),
        summarize_window(prior_rows, windows.prior) if prior_rows else None,
    )


def aggregate_legacy_input(
    review_rows: Iterable[Mapping[str, Any]],
    windows: ReportingWindows,
    engagement_rows: Iterable[Mapping[str, Any]] = (),
) -> LegacyInput:
    """Reduce review and engagement snapshots into a LegacyInput."""
    rows = list(review_rows) + list(engagement_rows)
    return legacy_input_from_windows(
        summarize_window(rows, windows.baseline),
        summarize_window(rows, windows.current),
    )
