"""
Database Models — SQLAlchemy.

Tables:
  - drivers: profile slice + aggregate verification fields
  - driver_documents: one row per submitted document (type + side)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Column, String, Integer, Boolean, DateTime, Text, JSON,
    ForeignKey, Index, text,
)
from sqlalchemy.orm import DeclarativeBase

from src.core.entities.document import DEFAULT_SIDE, DocStatus, DriverDocument
from src.core.entities.driver import Driver


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DriverRecord(Base):
    """A driver as seen by the verification service."""
    __tablename__ = "drivers"

    id = Column(String(64), primary_key=True)
    name = Column(String(120), default="")
    phone = Column(String(32), default="", index=True)
    vehicle_type = Column(String(20), nullable=True)

    # Aggregate: written only by the status aggregator
    document_status = Column(String(20), default=DocStatus.PENDING.value, nullable=False)
    is_verified = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime(timezone=True), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    def __repr__(self):
        return f"<Driver {self.id} [{self.vehicle_type}] {self.document_status}>"

    def to_entity(self) -> Driver:
        return Driver(
            id=self.id,
            name=self.name or "",
            phone=self.phone or "",
            vehicle_type=self.vehicle_type,
            document_status=self.document_status or DocStatus.PENDING.value,
            is_verified=bool(self.is_verified),
        )


class DriverDocumentRecord(Base):
    """One document submission; replaced in place on re-upload."""
    __tablename__ = "driver_documents"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    driver_id = Column(String(64), ForeignKey("drivers.id"), nullable=False, index=True)
    doc_type = Column(String(50), nullable=False)
    side = Column(String(10), nullable=False, default=DEFAULT_SIDE)
    vehicle_type = Column(String(20), nullable=True)

    status = Column(String(20), nullable=False, default=DocStatus.PENDING.value, index=True)
    remarks = Column(Text, default="")
    extracted_data = Column(JSON, default=dict)
    storage_ref = Column(String(500), nullable=True)

    # Soft delete (moderation); excluded from aggregation and listings
    deleted = Column(Boolean, nullable=False, default=False)
    deleted_at = Column(DateTime(timezone=True), nullable=True)

    resend_requested_at = Column(DateTime(timezone=True), nullable=True, index=True)
    resend_count = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), default=_utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    __table_args__ = (
        # At most one live record per (driver, docType, side)
        Index(
            "uq_driver_documents_active",
            "driver_id", "doc_type", "side",
            unique=True,
            sqlite_where=text("deleted = 0"),
            postgresql_where=text("deleted = false"),
        ),
    )

    def __repr__(self):
        return f"<DriverDocument {self.id} {self.doc_type}/{self.side} [{self.status}]>"

    def to_entity(self) -> DriverDocument:
        return DriverDocument(
            id=self.id,
            driver_id=self.driver_id,
            doc_type=self.doc_type,
            side=self.side or DEFAULT_SIDE,
            vehicle_type=self.vehicle_type or "",
            status=self.status or DocStatus.PENDING.value,
            remarks=self.remarks or "",
            extracted_data=dict(self.extracted_data or {}),
            storage_ref=self.storage_ref,
            deleted=bool(self.deleted),
            resend_requested_at=self.resend_requested_at,
            resend_count=self.resend_count or 0,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )
