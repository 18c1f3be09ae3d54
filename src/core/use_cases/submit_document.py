"""
Use Case: Submit Document — upload pipeline.

Validate → resolve driver → store file → create/replace record → drop old file → recompute.

The file is stored before any record is touched, so a storage failure
leaves no partial write. A stored file whose record write then fails is an
orphan that can be cleaned up later; the error still reaches the caller.
Every upload gets its own key, and a replaced record's old file is removed
only after the record points at the new one.
"""

import logging
import os
import re
import uuid
from dataclasses import dataclass

from src.core.entities.document import DEFAULT_SIDE, SIDES, normalize_tag
from src.core.entities.verification_result import SubmissionResult
from src.core.exceptions import (
    InternalError,
    NotFoundError,
    StorageError,
    ValidationError,
    VerificationError,
)
from src.core.interfaces.document_repository import IDocumentRepository
from src.core.interfaces.driver_directory import IDriverDirectory
from src.core.interfaces.storage_service import IStorageService
from src.core.rules.requirement_catalog import RequirementCatalog
from src.core.use_cases.recompute_status import RecomputeDriverStatusUseCase

logger = logging.getLogger(__name__)


@dataclass
class UploadedFile:
    """Incoming file handle."""
    content: bytes
    filename: str = ""
    content_type: str = "application/octet-stream"

    @property
    def extension(self) -> str:
        return os.path.splitext(self.filename or "")[1].lower()


class SubmitDocumentUseCase:
    """
    Use Case: a driver uploads one side of one document.

    Dependency Injection: every collaborator comes in through the constructor.
    """

    def __init__(
        self,
        documents: IDocumentRepository,
        drivers: IDriverDirectory,
        storage: IStorageService,
        catalog: RequirementCatalog,
        recompute: RecomputeDriverStatusUseCase,
        max_upload_bytes: int | None = None,
    ):
        self._documents = documents
        self._drivers = drivers
        self._storage = storage
        self._catalog = catalog
        self._recompute = recompute
        self._max_upload_bytes = max_upload_bytes

    def execute(
        self,
        driver_id: str,
        doc_type: str,
        vehicle_type: str,
        file: UploadedFile,
        side: str | None = None,
        extracted_data: dict | None = None,
    ) -> SubmissionResult:
        # ── 1. Normalize ───────────────────────────────────
        doc_type_n = normalize_tag(doc_type)
        vehicle_type_n = normalize_tag(vehicle_type)
        side_n = normalize_tag(side) or DEFAULT_SIDE

        # ── 2. Validate ────────────────────────────────────
        if not doc_type_n or not vehicle_type_n:
            raise ValidationError("docType and vehicleType are required.")

        allowed = self._catalog.required_types(vehicle_type_n)
        if allowed and doc_type_n not in allowed:
            raise ValidationError(
                f"Invalid docType '{doc_type}' for vehicleType '{vehicle_type}'. "
                f"Allowed: {', '.join(allowed)}"
            )
        if side_n not in SIDES:
            raise ValidationError(f"Invalid side '{side}'. Allowed: {', '.join(SIDES)}")

        if file is None or not file.content:
            raise ValidationError("No file uploaded.")
        if self._max_upload_bytes and len(file.content) > self._max_upload_bytes:
            raise ValidationError(f"File too large (max {self._max_upload_bytes} bytes).")

        if extracted_data is not None and not isinstance(extracted_data, dict):
            raise ValidationError("extractedData must be an object.")

        # ── 3. Resolve driver ──────────────────────────────
        driver = self._drivers.get(driver_id)
        if driver is None:
            raise NotFoundError(f"Driver {driver_id} not found")

        # ── 4. Store file (no record touched yet) ──────────
        # Fresh key per upload: the file a reviewed record points at is never overwritten
        previous = self._documents.find_active(driver_id, doc_type_n, side_n)
        key = self._storage_key(driver_id, driver.phone, doc_type_n, side_n, file.extension)
        try:
            ref = self._storage.upload(file.content, key, content_type=file.content_type)
        except StorageError:
            logger.error(f"Storage write failed for driver {driver_id} {doc_type_n}/{side_n}")
            raise

        # ── 5. Create or replace record ────────────────────
        try:
            document, created = self._documents.save_upload(
                driver_id=driver_id,
                doc_type=doc_type_n,
                side=side_n,
                vehicle_type=vehicle_type_n,
                storage_ref=ref.key,
                extracted_data=dict(extracted_data or {}),
            )
        except VerificationError:
            raise
        except Exception as e:
            logger.exception(f"Record write failed after storing {ref.key}")
            raise InternalError(f"Could not save document record: {e}") from e

        logger.info(
            f"{'Created' if created else 'Replaced'} document {document.id} "
            f"({doc_type_n}/{side_n}) for driver {driver_id} [{vehicle_type_n}]"
        )

        # ── 6. Drop the superseded file ────────────────────
        if previous is not None and previous.storage_ref and previous.storage_ref != ref.key:
            self._discard(previous.storage_ref)

        # ── 7. Recompute aggregate ─────────────────────────
        verification = self._recompute.refresh(driver_id)

        return SubmissionResult(document=document, verification=verification, created=created)

    def _discard(self, key: str) -> None:
        """Best-effort delete; a leftover file is only an orphan."""
        try:
            self._storage.delete(key)
        except StorageError as e:
            logger.warning(f"Could not delete superseded file {key}: {e}")

    @staticmethod
    def _storage_key(driver_id: str, phone: str, doc_type: str, side: str, ext: str) -> str:
        """<driver>/<phone>.<docType>.<side>.<token><ext>; a new key for every upload."""
        safe_phone = re.sub(r"[^0-9+]", "", phone or "") or "unknown"
        safe_driver = re.sub(r"[^A-Za-z0-9_-]", "_", driver_id)
        safe_doc_type = re.sub(r"\s+", "_", doc_type)
        safe_ext = ext if re.fullmatch(r"\.[a-z0-9]{1,8}", ext or "") else ""
        return f"{safe_driver}/{safe_phone}.{safe_doc_type}.{side}.{uuid.uuid4().hex[:12]}{safe_ext}"
