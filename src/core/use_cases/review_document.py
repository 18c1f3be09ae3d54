"""
Use Case: Review Document

Admin sets an explicit status + remarks on one document. "verified" is
accepted as an alias of "approved" and normalized here, the single entry
point for review statuses.
"""

import logging

from src.core.entities.document import DocStatus
from src.core.entities.verification_result import ReviewResult
from src.core.exceptions import NotFoundError, ValidationError
from src.core.interfaces.document_repository import IDocumentRepository
from src.core.use_cases.recompute_status import RecomputeDriverStatusUseCase

logger = logging.getLogger(__name__)


class ReviewDocumentUseCase:

    def __init__(self, documents: IDocumentRepository, recompute: RecomputeDriverStatusUseCase):
        self._documents = documents
        self._recompute = recompute

    def execute(self, document_id: str, status: str, remarks: str | None = None) -> ReviewResult:
        try:
            new_status = DocStatus.parse(status)
        except ValueError:
            raise ValidationError(
                "Invalid status. Must be: pending, approved, rejected, or verified"
            ) from None

        document = self._documents.get(document_id)
        if document is None:
            raise NotFoundError("Document not found")

        document = self._documents.set_status(document_id, new_status.value, (remarks or "").strip())
        if document is None:
            raise NotFoundError("Document not found")

        logger.info(f"Document {document_id} ({document.doc_type}/{document.side}) → {document.status}")

        verification = self._recompute.refresh(document.driver_id)
        return ReviewResult(document=document, verification=verification)
