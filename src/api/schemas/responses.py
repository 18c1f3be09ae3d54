"""
Pydantic schemas — API response models.
"""

from datetime import datetime

from pydantic import BaseModel


class VerificationResponse(BaseModel):
    driver_id: str
    vehicle_type: str | None = None
    document_status: str
    is_verified: bool


class DocumentResponse(BaseModel):
    id: str
    driver_id: str
    doc_type: str
    side: str
    vehicle_type: str
    status: str
    remarks: str = ""
    extracted_data: dict = {}
    storage_ref: str | None = None
    image_url: str | None = None
    deleted: bool = False
    resend_count: int = 0
    resend_requested_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class UploadResponse(BaseModel):
    message: str
    created: bool
    document: DocumentResponse
    driver: VerificationResponse | None = None


class DriverDocumentsResponse(BaseModel):
    message: str
    driver_id: str
    vehicle_type: str | None = None
    document_status: str
    is_verified: bool
    required_documents: list[str] = []
    docs: list[DocumentResponse] = []


class ResendResponse(BaseModel):
    message: str
    document: DocumentResponse
    driver: VerificationResponse | None = None


class ReviewResponse(BaseModel):
    message: str
    document: DocumentResponse
    driver: VerificationResponse | None = None


class DriverResponse(BaseModel):
    id: str
    name: str = ""
    phone: str = ""
    vehicle_type: str | None = None
    document_status: str
    is_verified: bool


class DriverProfileResponse(BaseModel):
    driver: DriverResponse
    document_count: int
    requirements: dict[str, str] = {}


class PendingDocumentsResponse(BaseModel):
    total: int
    documents: list[DocumentResponse]


class DocumentStatsResponse(BaseModel):
    pending: int = 0
    approved: int = 0
    rejected: int = 0
    unknown: int = 0
    total: int = 0
