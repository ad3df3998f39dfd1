"""
Status email rendering.

Produces subject and plain-text body for the daily status notification
and the weekly portfolio pulse. Delivery is somebody else's job; this module only renders. Templates know
three states, so ``watch`` is mapped to ``softening`` before rendering and
at most three reasons are listed.
"""

from collections.abc import Sequence
from datetime import date
from typing import Any, Optional, Union

from drift_engine.models.drift import DriftReason
from drift_engine.models.enums import EmailStatus
from drift_engine.models.summary import PortfolioEntry, StatusEmail

from .status import DEFAULT_REASON_CAP, cap_reasons, status_for_email

STATUS_LINES: dict[EmailStatus, str] = {
    EmailStatus.ATTENTION: "Action Needed 🔴",
    EmailStatus.SOFTENING: "Trending Down 🟠",
    EmailStatus.STABLE: "Stable ✅",
}

EXECUTIVE_PROMPTS: dict[EmailStatus, str] = {
    EmailStatus.ATTENTION: "Executive prompt: What decision do we make in the next 24–48 hours?",
    EmailStatus.SOFTENING: "Executive prompt: What’s the fastest intervention to stop the slide?",
    EmailStatus.STABLE: "Executive prompt: What are we missing?",
}

PULSE_PROMPTS: dict[EmailStatus, str] = {
    EmailStatus.ATTENTION: "🔴 Portfolio Risk Detected - What requires action this week?",
    EmailStatus.SOFTENING: "🟠 Portfolio Trending Down - Where can we intervene quickly?",
    EmailStatus.STABLE: "✅ Portfolio Stable - What are we missing?",
}

# Severity rank, most severe first when sorted descending
SEVERITY: dict[EmailStatus, int] = {
    EmailStatus.ATTENTION: 2,
    EmailStatus.SOFTENING: 1,
    EmailStatus.STABLE: 0,
}


def _day(value: Union[date, str, None]) -> str:
    if value is None:
        return "—"
    return value.isoformat() if isinstance(value, date) else str(value)


def render_status_email(
    business_name: str,
    status: Any,
    reasons: Optional[Sequence[DriftReason]],
    window_start: Union[date, str, None],
    window_end: Union[date, str, None],
    business_id: Optional[str] = None,
    base_url: str = "",
    reason_cap: int = DEFAULT_REASON_CAP,
) -> StatusEmail:
    """
    Render the daily status notification.

    Args:
        business_name: Display name of the business
        status: Any drift status; mapped onto the three email states
        reasons: Reasons of the run, insertion order
        window_start: First day of the current window
        window_end: Last day of the current window
        business_id: Adds a business-specific details link when given
        base_url: Public site URL the details link is built on
        reason_cap: Maximum number of reasons listed

    Returns:
        StatusEmail with subject and body
    """
    email_status = status_for_email(status)
    status_line = STATUS_LINES[email_status]
    subject = f"{status_line} - {business_name}"

    reason_lines = [
        f"- {r.detail or r.code or 'Signal detected'}" for r in cap_reasons(reasons, reason_cap)
    ]

    base = base_url.rstrip("/")
    details_url = f"{base}/alerts/{business_id}" if business_id else f"{base}/alerts"

    sections = [
        f"Drift Alert — {status_line}",
        f"Business: {business_name}\nWindow: {_day(window_start)} → {_day(window_end)}",
    ]
    if reason_lines:
        sections.append("Signals:\n" + "\n".join(reason_lines))
    sections.append(EXECUTIVE_PROMPTS[email_status])
    sections.append(f"Open Drift:\n{details_url}")
    sections.append("—\nShort. Specific. Actionable.")

    return StatusEmail(status=email_status, subject=subject, text="\n\n".join(sections))


def _entry_status(entry: PortfolioEntry) -> EmailStatus:
    return status_for_email(entry.last_alert.status if entry.last_alert else None)


def _first_reason(entry: PortfolioEntry) -> str:
    reasons = entry.last_alert.reasons if entry.last_alert else []
    if not reasons:
        return "Signal detected"
    return reasons[0].detail or reasons[0].code or "Signal detected"


def render_weekly_pulse_email(
    entries: Sequence[PortfolioEntry],
    window_start: Union[date, str, None],
    window_end: Union[date, str, None],
    base_url: str = "",
    top_n: int = DEFAULT_REASON_CAP,
) -> StatusEmail:
    """
    Render the weekly portfolio pulse.

    The pulse takes the most severe status across the portfolio for its
    header, counts every status, and lists the most severe non-stable
    businesses with the first reason of their last alert. Businesses of
    equal severity keep their input order.

    Args:
        entries: Businesses in the portfolio with their latest alert
        window_start: First day of the week covered
        window_end: Last day of the week covered
        base_url: Public site URL the links are built on
        top_n: Maximum number of businesses listed

    Returns:
        StatusEmail carrying the portfolio's top status
    """
    statuses = [_entry_status(e) for e in entries]
    top = max(statuses, key=SEVERITY.__getitem__, default=EmailStatus.STABLE)
    status_line = STATUS_LINES[top]
    base = base_url.rstrip("/")

    ranked = sorted(zip(entries, statuses), key=lambda pair: SEVERITY[pair[1]], reverse=True)
    top_items = [
        f"- {entry.business_name} — {status.value.upper()} — {_first_reason(entry)}\n"
        f"  {base}/alerts/{entry.business_id}"
        for entry, status in ranked
        if status != EmailStatus.STABLE
    ][:top_n]

    mix = " · ".join(
        f"{statuses.count(s)} {s.value.capitalize()}"
        for s in (EmailStatus.ATTENTION, EmailStatus.SOFTENING, EmailStatus.STABLE)
    )

    sections = [
        f"Drift Weekly Pulse — {status_line}",
        f"Week: {_day(window_start)} → {_day(window_end)}\n"
        f"Portfolio: {len(entries)} business(es)\n"
        f"Status mix: {mix}",
        PULSE_PROMPTS[top],
        "Top items:\n" + "\n".join(top_items) if top_items else "Top items: None this week.",
        f"Open Drift:\n{base}/alerts",
        "—\nShort. Specific. Actionable.",
    ]

    return StatusEmail(
        status=top,
        subject=f"Weekly Pulse: {status_line}",
        text="\n\n".join(sections),
    )
