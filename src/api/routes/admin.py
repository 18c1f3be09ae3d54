"""
Routes: admin document review.

Every route requires the admin API key (X-API-Key).
"""

from fastapi import APIRouter, Depends

from src.api.dependencies import ServiceContainer, get_container, require_admin
from src.api.routes.documents import document_response, driver_response, verification_response
from src.api.schemas.requests import DriverUpsertRequest, ReviewRequest
from src.api.schemas.responses import (
    DocumentResponse,
    DocumentStatsResponse,
    DriverResponse,
    PendingDocumentsResponse,
    ReviewResponse,
)

router = APIRouter(prefix="/admin", dependencies=[Depends(require_admin)])


@router.get("/documents/pending", response_model=PendingDocumentsResponse)
def pending_documents(container: ServiceContainer = Depends(get_container)):
    """Review queue, oldest first."""
    docs = container.queries.list_pending()
    return PendingDocumentsResponse(
        total=len(docs),
        documents=[document_response(d, container) for d in docs],
    )


@router.get("/documents/stats", response_model=DocumentStatsResponse)
def document_stats(container: ServiceContainer = Depends(get_container)):
    return DocumentStatsResponse(**container.queries.stats())


@router.get("/documents/{document_id}", response_model=DocumentResponse)
def get_document(document_id: str, container: ServiceContainer = Depends(get_container)):
    return document_response(container.queries.get_document(document_id), container)


@router.patch("/documents/{document_id}/status", response_model=ReviewResponse)
def review_document(
    document_id: str,
    body: ReviewRequest,
    container: ServiceContainer = Depends(get_container),
):
    """Approve / reject a document ("verified" is accepted as "approved")."""
    result = container.review.execute(document_id, body.status, body.remarks)
    return ReviewResponse(
        message="Document status updated successfully",
        document=document_response(result.document, container),
        driver=verification_response(result.verification),
    )


@router.delete("/documents/{document_id}/image", response_model=ReviewResponse)
def delete_document_image(document_id: str, container: ServiceContainer = Depends(get_container)):
    """Remove a document's image; the record is soft-deleted and the driver must re-upload."""
    result = container.remove_image.execute(document_id)
    return ReviewResponse(
        message="Document image deleted successfully",
        document=document_response(result.document, container),
        driver=verification_response(result.verification),
    )


@router.put("/drivers/{driver_id}", response_model=DriverResponse)
def upsert_driver(
    driver_id: str,
    body: DriverUpsertRequest,
    container: ServiceContainer = Depends(get_container),
):
    driver = container.manage.register(driver_id, name=body.name, phone=body.phone, vehicle_type=body.vehicle_type)
    return driver_response(driver)
