"""
Contract: Document Repository

The document record store. Holds at most one non-deleted record per
(driver, docType, side).
"""

from abc import ABC, abstractmethod
from datetime import datetime

from src.core.entities.document import DriverDocument


class IDocumentRepository(ABC):
    """Port: Document Record Store."""

    @abstractmethod
    def get(self, document_id: str, include_deleted: bool = False) -> DriverDocument | None:
        """Find a record by id."""
        ...

    @abstractmethod
    def find_active(self, driver_id: str, doc_type: str, side: str) -> DriverDocument | None:
        """Find the non-deleted record for (driver, docType, side)."""
        ...

    @abstractmethod
    def list_for_driver(self, driver_id: str, vehicle_type: str | None = None) -> list[DriverDocument]:
        """Non-deleted records of a driver, newest first; optionally scoped to a vehicle type."""
        ...

    @abstractmethod
    def save_upload(
        self,
        driver_id: str,
        doc_type: str,
        side: str,
        vehicle_type: str,
        storage_ref: str,
        extracted_data: dict,
    ) -> tuple[DriverDocument, bool]:
        """
        Create the record for (driver, docType, side) or replace the existing one.

        A replaced record keeps its id; status goes back to pending and
        remarks are cleared.

        Returns:
            (record, created)
        """
        ...

    @abstractmethod
    def set_status(self, document_id: str, status: str, remarks: str) -> DriverDocument | None:
        """Write status + remarks. Returns None if the record does not exist."""
        ...

    @abstractmethod
    def mark_resend(self, document_id: str, requested_at: datetime) -> DriverDocument | None:
        """Reset to pending, clear remarks and record the resend request."""
        ...

    @abstractmethod
    def list_by_status(self, status: str) -> list[DriverDocument]:
        """Non-deleted records with the given status, oldest first."""
        ...

    @abstractmethod
    def count_by_status(self) -> dict[str, int]:
        """Non-deleted record counts keyed by stored status."""
        ...

    @abstractmethod
    def count_for_driver(self, driver_id: str) -> int:
        """Number of non-deleted records of a driver."""
        ...

    @abstractmethod
    def soft_delete(self, document_id: str) -> bool:
        """Hide a record from listings and aggregation, keeping it for audit. False if absent."""
        ...
