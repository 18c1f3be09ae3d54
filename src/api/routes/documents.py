"""
Routes: driver-facing document endpoints.

POST /drivers/me/documents            — upload one side of one document
GET  /drivers/{driver_id}/documents   — list a driver's documents + aggregate
POST /documents/{document_id}/resend  — reset a document to pending
PUT  /drivers/me/vehicle-type         — change vehicle category
GET  /drivers/me                      — profile with fresh aggregate
"""

import json
import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from src.api.dependencies import (
    Caller,
    ServiceContainer,
    current_driver_id,
    get_caller,
    get_container,
)
from src.api.schemas.requests import VehicleTypeRequest
from src.api.schemas.responses import (
    DocumentResponse,
    DriverDocumentsResponse,
    DriverProfileResponse,
    DriverResponse,
    ResendResponse,
    UploadResponse,
    VerificationResponse,
)
from src.core.entities.document import DriverDocument
from src.core.entities.driver import Driver, DriverVerification
from src.core.exceptions import AuthorizationError, StorageError
from src.core.use_cases.submit_document import UploadedFile

logger = logging.getLogger(__name__)

router = APIRouter()


# ── Mapping helpers (shared with admin routes) ──

def document_response(doc: DriverDocument, container: ServiceContainer) -> DocumentResponse:
    image_url = None
    if doc.storage_ref and not doc.deleted:
        try:
            image_url = container.storage.get_url(
                doc.storage_ref, expires_seconds=container.settings.presign_expires_seconds
            )
        except StorageError as e:
            logger.warning(f"No image URL for document {doc.id}: {e}")
    return DocumentResponse(
        id=doc.id,
        driver_id=doc.driver_id,
        doc_type=doc.doc_type,
        side=doc.side,
        vehicle_type=doc.vehicle_type,
        status=doc.status,
        remarks=doc.remarks,
        extracted_data=doc.extracted_data,
        storage_ref=doc.storage_ref,
        image_url=image_url,
        deleted=doc.deleted,
        resend_count=doc.resend_count,
        resend_requested_at=doc.resend_requested_at,
        created_at=doc.created_at,
        updated_at=doc.updated_at,
    )


def verification_response(v: DriverVerification | None) -> VerificationResponse | None:
    if v is None:
        return None
    return VerificationResponse(
        driver_id=v.driver_id,
        vehicle_type=v.vehicle_type,
        document_status=v.document_status,
        is_verified=v.is_verified,
    )


def driver_response(d: Driver) -> DriverResponse:
    return DriverResponse(
        id=d.id,
        name=d.name,
        phone=d.phone,
        vehicle_type=d.vehicle_type,
        document_status=d.document_status,
        is_verified=d.is_verified,
    )


def parse_extracted_data(raw: str | None) -> dict:
    """extractedData arrives as a JSON string; bad JSON is stored as {} rather than failing the upload."""
    if raw is None or not raw.strip():
        return {}
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.warning(f"extractedData JSON parse failed, storing empty object: {e}")
        return {}
    if not isinstance(parsed, dict):
        logger.warning(f"extractedData is a {type(parsed).__name__}, storing empty object")
        return {}
    return parsed


# ── Routes ──

@router.post("/drivers/me/documents", response_model=UploadResponse)
def upload_document(
    document: UploadFile = File(...),
    doc_type: str = Form("", alias="docType"),
    vehicle_type: str = Form("", alias="vehicleType"),
    doc_side: str | None = Form(None, alias="docSide"),
    extracted_data: str | None = Form(None, alias="extractedData"),
    driver_id: str = Depends(current_driver_id),
    container: ServiceContainer = Depends(get_container),
):
    """
    Upload a driver document (DL, Aadhaar, PAN, ...).

    Multipart fields: document (file), docType, vehicleType, docSide, extractedData (JSON).
    """
    # One byte past the limit is enough for the size check to reject it
    limit = container.settings.max_upload_bytes
    content = document.file.read(limit + 1) if limit else document.file.read()
    upload = UploadedFile(
        content=content,
        filename=document.filename or "",
        content_type=document.content_type or "application/octet-stream",
    )
    result = container.submit.execute(
        driver_id=driver_id,
        doc_type=doc_type,
        vehicle_type=vehicle_type,
        file=upload,
        side=doc_side,
        extracted_data=parse_extracted_data(extracted_data),
    )
    doc = result.document
    return UploadResponse(
        message=f"{doc.doc_type} {doc.side} uploaded successfully",
        created=result.created,
        document=document_response(doc, container),
        driver=verification_response(result.verification),
    )


@router.get("/drivers/{driver_id}/documents", response_model=DriverDocumentsResponse)
def list_driver_documents(
    driver_id: str,
    caller: Caller = Depends(get_caller),
    container: ServiceContainer = Depends(get_container),
):
    """All active documents of a driver. Drivers see their own; admins see any."""
    if not caller.is_admin and not caller.driver_id:
        raise HTTPException(status_code=401, detail="User not authenticated")
    if driver_id == "me" and caller.driver_id:
        driver_id = caller.driver_id
    if not caller.is_admin and caller.driver_id != driver_id:
        raise AuthorizationError("Not allowed.")

    result = container.queries.list_for_driver(driver_id)
    v = result.verification
    return DriverDocumentsResponse(
        message="Documents retrieved successfully" if result.documents else "No documents found for this driver.",
        driver_id=v.driver_id,
        vehicle_type=v.vehicle_type,
        document_status=v.document_status,
        is_verified=v.is_verified,
        required_documents=list(result.required_types),
        docs=[document_response(d, container) for d in result.documents],
    )


@router.post("/documents/{document_id}/resend", response_model=ResendResponse)
def resend_document(
    document_id: str,
    driver_id: str = Depends(current_driver_id),
    container: ServiceContainer = Depends(get_container),
):
    """Mark a document for re-upload (back to pending)."""
    doc = container.resend.execute(document_id, requester_id=driver_id)
    driver = container.drivers.get(doc.driver_id)
    return ResendResponse(
        message="Document ready for re-upload",
        document=document_response(doc, container),
        driver=verification_response(driver.verification() if driver else None),
    )


@router.put("/drivers/me/vehicle-type", response_model=DriverResponse)
def update_vehicle_type(
    body: VehicleTypeRequest,
    driver_id: str = Depends(current_driver_id),
    container: ServiceContainer = Depends(get_container),
):
    driver = container.manage.change_vehicle_type(driver_id, body.vehicle_type)
    return driver_response(driver)


@router.get("/drivers/me", response_model=DriverProfileResponse)
def get_profile(
    driver_id: str = Depends(current_driver_id),
    container: ServiceContainer = Depends(get_container),
):
    profile = container.manage.profile(driver_id)
    return DriverProfileResponse(
        driver=driver_response(profile.driver),
        document_count=profile.document_count,
        requirements=profile.requirements,
    )
