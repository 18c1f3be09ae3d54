"""
Use Case: Query Documents

Read-only views over the document store: a driver's documents, the admin
pending queue, single-document lookup and per-status counts.
"""

import logging

from src.core.entities.document import DocStatus, DriverDocument
from src.core.entities.verification_result import DriverDocuments
from src.core.exceptions import NotFoundError, ValidationError
from src.core.interfaces.document_repository import IDocumentRepository
from src.core.interfaces.driver_directory import IDriverDirectory
from src.core.rules.requirement_catalog import RequirementCatalog

logger = logging.getLogger(__name__)


class QueryDocumentsUseCase:

    def __init__(
        self,
        documents: IDocumentRepository,
        drivers: IDriverDirectory,
        catalog: RequirementCatalog,
    ):
        self._documents = documents
        self._drivers = drivers
        self._catalog = catalog

    def list_for_driver(self, driver_id: str) -> DriverDocuments:
        """
        Every active document of a driver with the stored aggregate.

        A known driver without documents gets an empty list; only an
        unknown driver is an error.
        """
        if not driver_id or driver_id in ("undefined", "null"):
            raise ValidationError("Invalid driver ID")

        driver = self._drivers.get(driver_id)
        if driver is None:
            raise NotFoundError("Driver not found")

        documents = self._documents.list_for_driver(driver_id)
        logger.debug(f"Driver {driver_id}: {len(documents)} documents, status={driver.document_status}")
        return DriverDocuments(
            verification=driver.verification(),
            documents=documents,
            required_types=self._catalog.required_types(driver.vehicle_type),
        )

    def get_document(self, document_id: str) -> DriverDocument:
        document = self._documents.get(document_id)
        if document is None:
            raise NotFoundError("Document not found.")
        return document

    def list_pending(self) -> list[DriverDocument]:
        """Admin review queue, oldest first."""
        return self._documents.list_by_status(DocStatus.PENDING.value)

    def stats(self) -> dict[str, int]:
        """Active document counts per status (aliases folded in)."""
        counts = {s.value: 0 for s in DocStatus}
        counts["unknown"] = 0
        for raw, n in self._documents.count_by_status().items():
            status = DocStatus.coerce(raw)
            counts[status.value if status else "unknown"] += n
        counts["total"] = sum(counts.values())
        return counts
