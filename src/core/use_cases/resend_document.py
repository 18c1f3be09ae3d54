"""
Use Case: Resend Document

A driver reacts to a rejection: the document goes back to pending without a
new upload. The stored file stays referenced until the next upload replaces it.
"""

import logging
from datetime import datetime, timezone

from src.core.entities.document import DriverDocument
from src.core.exceptions import AuthorizationError, NotFoundError
from src.core.interfaces.document_repository import IDocumentRepository
from src.core.use_cases.recompute_status import RecomputeDriverStatusUseCase

logger = logging.getLogger(__name__)


class ResendDocumentUseCase:

    def __init__(self, documents: IDocumentRepository, recompute: RecomputeDriverStatusUseCase):
        self._documents = documents
        self._recompute = recompute

    def execute(self, document_id: str, requester_id: str) -> DriverDocument:
        existing = self._documents.get(document_id)
        if existing is None:
            raise NotFoundError("Document not found.")

        if str(existing.driver_id) != str(requester_id):
            logger.warning(f"Driver {requester_id} tried to resend document {document_id} owned by {existing.driver_id}")
            raise AuthorizationError("Not allowed.")

        document = self._documents.mark_resend(document_id, requested_at=datetime.now(timezone.utc))
        if document is None:
            raise NotFoundError("Document not found.")

        logger.info(
            f"Document {document_id} ({document.doc_type}/{document.side}) reset to pending "
            f"by driver {requester_id} (resend #{document.resend_count})"
        )
        self._recompute.refresh(document.driver_id)
        return document
