"""
Use Case: Remove Document Image

Admin moderation: the record is soft-deleted (kept for audit, invisible
everywhere else) and its stored file is removed. The driver has to upload
that document again.
"""

import logging

from src.core.entities.verification_result import ReviewResult
from src.core.exceptions import NotFoundError, StorageError
from src.core.interfaces.document_repository import IDocumentRepository
from src.core.interfaces.storage_service import IStorageService
from src.core.use_cases.recompute_status import RecomputeDriverStatusUseCase

logger = logging.getLogger(__name__)


class RemoveDocumentImageUseCase:

    def __init__(
        self,
        documents: IDocumentRepository,
        storage: IStorageService,
        recompute: RecomputeDriverStatusUseCase,
    ):
        self._documents = documents
        self._storage = storage
        self._recompute = recompute

    def execute(self, document_id: str) -> ReviewResult:
        document = self._documents.get(document_id)
        if document is None or not self._documents.soft_delete(document_id):
            raise NotFoundError("Document not found")

        if document.storage_ref:
            try:
                self._storage.delete(document.storage_ref)
            except StorageError as e:
                logger.warning(f"Record {document_id} deleted but file {document.storage_ref} was kept: {e}")

        logger.info(f"Document {document_id} ({document.doc_type}/{document.side}) removed by admin")

        verification = self._recompute.refresh(document.driver_id)
        removed = self._documents.get(document_id, include_deleted=True)
        return ReviewResult(document=removed or document, verification=verification)
