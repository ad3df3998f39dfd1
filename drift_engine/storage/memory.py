"""In-process alert store for local runs and tests."""

import threading
from collections import defaultdict
from typing import Optional

import structlog

from drift_engine.errors import StorageError
from drift_engine.models.alerts import AlertRecord

from .base import AlertStore

logger = structlog.get_logger()


class InMemoryAlertStore(AlertStore):
    """
    Thread-safe dictionary-backed AlertStore.

    History lives only as long as the instance.
    """

    def __init__(self):
        self._alerts: dict[str, list[AlertRecord]] = defaultdict(list)
        self._lock = threading.Lock()

    def read_last_alert(self, business_id: str) -> Optional[AlertRecord]:
        with self._lock:
            history = self._alerts.get(business_id)
            return history[-1] if history else None

    def write_alert(self, record: AlertRecord) -> str:
        with self._lock:
            history = self._alerts[record.business_id]
            if any(r.alert_id == record.alert_id for r in history):
                raise StorageError(f"Alert {record.alert_id} already exists")
            history.append(record)

        logger.debug(
            "alert_written",
            business_id=record.business_id,
            alert_id=record.alert_id,
            status=record.status.value,
        )
        return record.alert_id

    def list_alerts(self, business_id: str, limit: Optional[int] = None) -> list[AlertRecord]:
        with self._lock:
            newest_first = list(reversed(self._alerts.get(business_id, [])))
        return newest_first[:limit] if limit is not None else newest_first
