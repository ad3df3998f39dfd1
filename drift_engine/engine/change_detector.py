"""
Alert Change-Detector — Status Transition Deduplication.

Decides whether a freshly computed drift result is different enough from
the last stored one to warrant a new alert and notification. A result is a
change when its status differs or its reason-code set differs (order is
ignored). The first run for a business is always a change.

A caller may force a notification (manual test sends). Forcing reports a
change but never writes history that did not really change.

Version: change_detector_v1
"""

import threading
import weakref
from collections.abc import Iterable
from datetime import date
from typing import Optional, Union

import structlog

from drift_engine.models.alerts import AlertRecord, ChangeDecision, LastAlertState
from drift_engine.models.drift import DriftResult
from drift_engine.models.enums import DriftStatus
from drift_engine.storage.base import AlertStore


def detect_change(
    status: Union[str, DriftStatus],
    reason_codes: Iterable[str],
    last_state: Optional[LastAlertState] = None,
    force_notify: bool = False,
) -> ChangeDecision:
    """
    Compare a new (status, reason codes) pair against the stored one.

    Args:
        status: Newly computed status
        reason_codes: Newly computed reason codes, any order
        last_state: Stored pair from the previous run, None on first run
        force_notify: Report a change regardless of the comparison

    Returns:
        ChangeDecision carrying the pair to persist for the next run

    Example:
        >>> last = LastAlertState(status="attention", reason_codes=("A", "B"))
        >>> detect_change("attention", ["B", "A"], last).changed
        False
    """
    new_status = DriftStatus(status)
    codes = tuple(reason_codes)

    first_run = last_state is None
    status_changed = False
    reasons_changed = False
    if not first_run:
        status_changed = new_status != last_state.status
        reasons_changed = sorted(codes) != sorted(last_state.reason_codes)

    return ChangeDecision(
        changed=force_notify or first_run or status_changed or reasons_changed,
        forced=force_notify,
        first_run=first_run,
        status_changed=status_changed,
        reasons_changed=reasons_changed,
        status=new_status,
        reason_codes=codes,
        previous_status=None if first_run else last_state.status,
    )


class AlertChangeDetector:
    """
    Read-compare-write change detection against an AlertStore.

    Evaluations for the same business are serialized with a per-business
    lock so two concurrent runs cannot both read the old state and both
    write a transition. Different businesses never contend. A lock lives
    only while some evaluation holds it, so the lock table does not grow
    with the number of businesses seen.

    Attributes:
        store: Alert history backend

    Example:
        >>> detector = AlertChangeDetector(store=InMemoryAlertStore())
        >>> decision, record = detector.evaluate("biz_1", result)
        >>> decision.first_run
        True
    """

    def __init__(self, store: AlertStore):
        self.store = store
        self.logger = structlog.get_logger()
        self._locks: weakref.WeakValueDictionary[str, threading.Lock] = weakref.WeakValueDictionary()
        self._locks_guard = threading.Lock()

    def evaluate(
        self,
        business_id: str,
        result: DriftResult,
        window_start: Optional[date] = None,
        window_end: Optional[date] = None,
        force_notify: bool = False,
        dry_run: bool = False,
    ) -> tuple[ChangeDecision, Optional[AlertRecord]]:
        """
        Decide whether the result is a change and persist it if so.

        Args:
            business_id: Business the result belongs to
            result: Freshly computed drift result
            window_start: First day of the current window
            window_end: Last day of the current window
            force_notify: Report a change without altering history semantics
            dry_run: Compare only, never write

        Returns:
            (decision, written record or None)
        """
        with self._lock_for(business_id):
            last = self.store.read_last_alert(business_id)
            last_state = LastAlertState.from_record(last) if last else None

            decision = detect_change(
                result.status,
                result.reason_codes,
                last_state=last_state,
                force_notify=force_notify,
            )

            record: Optional[AlertRecord] = None
            if decision.material and not dry_run:
                record = AlertRecord(
                    business_id=business_id,
                    status=result.status,
                    reasons=list(result.reasons),
                    window_start=window_start,
                    window_end=window_end,
                    meta=result.meta,
                )
                self.store.write_alert(record)

        self.logger.info(
            "alert_change_evaluated",
            business_id=business_id,
            status=decision.status.value,
            previous_status=decision.previous_status.value if decision.previous_status else None,
            changed=decision.changed,
            forced=decision.forced,
            alert_written=record is not None,
        )

        return decision, record

    def _lock_for(self, business_id: str) -> threading.Lock:
        with self._locks_guard:
            lock = self._locks.get(business_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[business_id] = lock
            return lock
