"""
Entity: Driver Document

One submitted document (type + side) for one driver.
Pure model — no framework or database dependency.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


DEFAULT_SIDE = "front"
SIDES = ("front", "back")


def normalize_tag(value) -> str:
    """Trim + lowercase a free-form tag (docType, side, vehicleType)."""
    if value is None:
        return ""
    return str(value).strip().lower()


class DocStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

    @classmethod
    def coerce(cls, value) -> "DocStatus | None":
        """
        Map a raw status to the enum, resolving aliases.

        Returns None for values that are not a recognized status.
        """
        tag = normalize_tag(value)
        tag = _STATUS_ALIASES.get(tag, tag)
        try:
            return cls(tag)
        except ValueError:
            return None

    @classmethod
    def parse(cls, value) -> "DocStatus":
        """Strict variant of ``coerce``: raises ValueError on unknown values."""
        status = cls.coerce(value)
        if status is None:
            raise ValueError(f"Unknown document status: {value!r}")
        return status


_STATUS_ALIASES = {
    "verified": DocStatus.APPROVED.value,
}


@dataclass
class DriverDocument:
    """Domain entity: one document record."""
    id: str
    driver_id: str
    doc_type: str
    side: str = DEFAULT_SIDE
    vehicle_type: str = ""
    status: str = DocStatus.PENDING.value   # stored value, see DocStatus.coerce
    remarks: str = ""
    extracted_data: dict = field(default_factory=dict)
    storage_ref: str | None = None          # key in the storage backend
    deleted: bool = False
    resend_requested_at: datetime | None = None
    resend_count: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def doc_status(self) -> DocStatus | None:
        return DocStatus.coerce(self.status)
