"""
Entity: Verification Results

Values returned by the document use cases: the touched record(s) together
with the driver's refreshed aggregate, so a caller can render both at once.
"""

from dataclasses import dataclass, field

from src.core.entities.document import DriverDocument
from src.core.entities.driver import Driver, DriverVerification


@dataclass
class SubmissionResult:
    """Upload outcome."""
    document: DriverDocument
    verification: DriverVerification | None
    created: bool = True          # False when an existing record was replaced


@dataclass
class ReviewResult:
    """Admin review outcome."""
    document: DriverDocument
    verification: DriverVerification | None


@dataclass
class DriverDocuments:
    """All active documents of a driver plus the aggregate."""
    verification: DriverVerification
    documents: list[DriverDocument] = field(default_factory=list)
    required_types: tuple[str, ...] = ()


@dataclass
class DriverProfile:
    """Driver profile with a freshly recomputed aggregate."""
    driver: Driver
    verification: DriverVerification
    document_count: int = 0
    requirements: dict[str, str] = field(default_factory=dict)   # docType -> per-type status
