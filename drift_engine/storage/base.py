"""
Abstract alert store interface.

The drift engine never owns persistence. Whatever database the surrounding
service uses is wrapped in an AlertStore so the change detector can do its
read-compare-write cycle against it.
"""

from abc import ABC, abstractmethod
from typing import Optional

from drift_engine.models.alerts import AlertRecord


class AlertStore(ABC):
    """
    Contract for persisting per-business alert history.

    Implementations should ensure:
    - Records for one business are returned newest first
    - Writes are atomic per record
    - Failures surface as StorageError
    """

    @abstractmethod
    def read_last_alert(self, business_id: str) -> Optional[AlertRecord]:
        """
        Read the most recent alert record for a business.

        Args:
            business_id: Business identifier

        Returns:
            The newest AlertRecord, or None when the business has no history

        Raises:
            StorageError: If the read fails
        """

    @abstractmethod
    def write_alert(self, record: AlertRecord) -> str:
        """
        Persist a new alert record.

        Args:
            record: Record to append to the business's history

        Returns:
            The stored record's alert_id

        Raises:
            StorageError: If the write fails
        """

    @abstractmethod
    def list_alerts(self, business_id: str, limit: Optional[int] = None) -> list[AlertRecord]:
        """
        List alert records for a business, newest first.

        Args:
            business_id: Business identifier
            limit: Maximum number of records to return

        Returns:
            List of AlertRecord instances
        """
