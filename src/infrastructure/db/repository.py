"""
Repositories — SQLAlchemy adapters for the document store and driver directory.

Handles:
  - Creating/replacing document records (one live record per driver/type/side)
  - Status writes from review and resend
  - Driver aggregate writes from the status aggregator
  - Admin queue and counts
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import asc, desc, func
from sqlalchemy.orm import Session, sessionmaker

from src.core.entities.document import DocStatus, DriverDocument
from src.core.entities.driver import Driver
from src.core.interfaces.document_repository import IDocumentRepository
from src.core.interfaces.driver_directory import IDriverDirectory
from src.infrastructure.db.database import get_db
from src.infrastructure.db.models import DriverDocumentRecord, DriverRecord

logger = logging.getLogger(__name__)


class DocumentRepository(IDocumentRepository):
    """Repository for driver documents."""

    def __init__(self, session_factory: Optional[sessionmaker] = None):
        self._factory = session_factory

    @staticmethod
    def _active(db: Session):
        return db.query(DriverDocumentRecord).filter(DriverDocumentRecord.deleted.is_(False))

    def get(self, document_id: str, include_deleted: bool = False) -> Optional[DriverDocument]:
        with get_db(self._factory) as db:
            query = db.query(DriverDocumentRecord) if include_deleted else self._active(db)
            record = query.filter(DriverDocumentRecord.id == document_id).first()
            return record.to_entity() if record else None

    def find_active(self, driver_id: str, doc_type: str, side: str) -> Optional[DriverDocument]:
        with get_db(self._factory) as db:
            record = self._active(db).filter_by(driver_id=driver_id, doc_type=doc_type, side=side).first()
            return record.to_entity() if record else None

    def list_for_driver(self, driver_id: str, vehicle_type: str = None) -> list[DriverDocument]:
        with get_db(self._factory) as db:
            query = self._active(db).filter_by(driver_id=driver_id)
            if vehicle_type:
                query = query.filter_by(vehicle_type=vehicle_type)
            records = query.order_by(desc(DriverDocumentRecord.created_at), desc(DriverDocumentRecord.id)).all()
            return [r.to_entity() for r in records]

    def save_upload(
        self,
        driver_id: str,
        doc_type: str,
        side: str,
        vehicle_type: str,
        storage_ref: str,
        extracted_data: dict,
    ) -> tuple[DriverDocument, bool]:
        with get_db(self._factory) as db:
            record = self._active(db).filter_by(driver_id=driver_id, doc_type=doc_type, side=side).first()
            created = record is None
            if created:
                record = DriverDocumentRecord(
                    driver_id=driver_id,
                    doc_type=doc_type,
                    side=side,
                    vehicle_type=vehicle_type,
                    status=DocStatus.PENDING.value,
                    remarks="",
                    extracted_data=extracted_data,
                    storage_ref=storage_ref,
                )
                db.add(record)
            else:
                logger.debug(f"Replacing document {record.id} ({doc_type}/{side}) for driver {driver_id}")
                record.storage_ref = storage_ref
                record.extracted_data = extracted_data
                record.vehicle_type = vehicle_type
                record.status = DocStatus.PENDING.value
                record.remarks = ""
            db.flush()
            return record.to_entity(), created

    def set_status(self, document_id: str, status: str, remarks: str) -> Optional[DriverDocument]:
        with get_db(self._factory) as db:
            record = self._active(db).filter(DriverDocumentRecord.id == document_id).first()
            if record is None:
                return None
            record.status = status
            record.remarks = remarks or ""
            db.flush()
            return record.to_entity()

    def mark_resend(self, document_id: str, requested_at: datetime) -> Optional[DriverDocument]:
        with get_db(self._factory) as db:
            record = self._active(db).filter(DriverDocumentRecord.id == document_id).first()
            if record is None:
                return None
            record.status = DocStatus.PENDING.value
            record.remarks = ""
            record.resend_requested_at = requested_at
            record.resend_count = (record.resend_count or 0) + 1
            db.flush()
            return record.to_entity()

    def soft_delete(self, document_id: str) -> bool:
        """Moderation hook: hide a record from aggregation but keep it for audit."""
        with get_db(self._factory) as db:
            record = self._active(db).filter(DriverDocumentRecord.id == document_id).first()
            if record is None:
                return False
            record.deleted = True
            record.deleted_at = datetime.now(timezone.utc)
            logger.info(f"Soft-deleted document {document_id}")
            return True

    def list_by_status(self, status: str) -> list[DriverDocument]:
        with get_db(self._factory) as db:
            records = (
                self._active(db)
                .filter_by(status=status)
                .order_by(asc(DriverDocumentRecord.created_at), asc(DriverDocumentRecord.id))
                .all()
            )
            return [r.to_entity() for r in records]

    def count_by_status(self) -> dict[str, int]:
        with get_db(self._factory) as db:
            rows = (
                db.query(DriverDocumentRecord.status, func.count(DriverDocumentRecord.id))
                .filter(DriverDocumentRecord.deleted.is_(False))
                .group_by(DriverDocumentRecord.status)
                .all()
            )
            return {status: count for status, count in rows}

    def count_for_driver(self, driver_id: str) -> int:
        with get_db(self._factory) as db:
            return self._active(db).filter_by(driver_id=driver_id).count()


class DriverDirectory(IDriverDirectory):
    """Repository for drivers (local mirror of the profile subsystem)."""

    def __init__(self, session_factory: Optional[sessionmaker] = None):
        self._factory = session_factory

    def get(self, driver_id: str) -> Optional[Driver]:
        with get_db(self._factory) as db:
            record = db.get(DriverRecord, driver_id)
            return record.to_entity() if record else None

    def update_verification(self, driver_id: str, document_status: str, is_verified: bool) -> None:
        with get_db(self._factory) as db:
            updated = (
                db.query(DriverRecord)
                .filter(DriverRecord.id == driver_id)
                .update(
                    {
                        DriverRecord.document_status: document_status,
                        DriverRecord.is_verified: is_verified,
                        DriverRecord.updated_at: datetime.now(timezone.utc),
                    },
                    synchronize_session=False,
                )
            )
            if not updated:
                logger.warning(f"Aggregate not written: driver {driver_id} vanished")

    def set_vehicle_type(self, driver_id: str, vehicle_type: str) -> Optional[Driver]:
        with get_db(self._factory) as db:
            record = db.get(DriverRecord, driver_id)
            if record is None:
                return None
            record.vehicle_type = vehicle_type
            db.flush()
            return record.to_entity()

    def upsert(self, driver_id: str, name: str, phone: str, vehicle_type: Optional[str]) -> Driver:
        with get_db(self._factory) as db:
            record = db.get(DriverRecord, driver_id)
            if record is None:
                record = DriverRecord(
                    id=driver_id,
                    document_status=DocStatus.PENDING.value,
                    is_verified=False,
                )
                db.add(record)
            if name:
                record.name = name
            if phone:
                record.phone = phone
            if vehicle_type:
                record.vehicle_type = vehicle_type
            db.flush()
            return record.to_entity()
