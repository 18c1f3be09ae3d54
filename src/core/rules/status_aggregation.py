"""
Status Aggregation — driver-level status from per-document statuses.

Pure function over a snapshot of records; the use case in
``src/core/use_cases/recompute_status.py`` loads and persists around it.

Per required docType:
    1. missing   — no record of that type
    2. rejected  — any record rejected (wins over everything else)
    3. pending   — any record pending or with an unrecognized status
    4. approved  — every record approved

Driver level:
    approved  iff every required type is approved
    rejected  iff any required type is rejected
    pending   otherwise (missing types count as pending)
"""

from collections.abc import Iterable
from dataclasses import dataclass, field

from src.core.entities.document import DocStatus, DriverDocument, normalize_tag


MISSING = "missing"


@dataclass
class AggregateOutcome:
    """Driver-level status plus the per-type breakdown it came from."""
    document_status: DocStatus
    is_verified: bool
    by_type: dict[str, str] = field(default_factory=dict)

    @property
    def missing(self) -> list[str]:
        return [t for t, s in self.by_type.items() if s == MISSING]


def classify_type(documents: Iterable[DriverDocument]) -> DocStatus:
    """Status of one docType group. Assumes the group is non-empty."""
    result = DocStatus.APPROVED
    for doc in documents:
        status = doc.doc_status
        if status is DocStatus.REJECTED:
            return DocStatus.REJECTED
        if status is not DocStatus.APPROVED:
            result = DocStatus.PENDING
    return result


def aggregate_status(required: Iterable[str], documents: Iterable[DriverDocument]) -> AggregateOutcome:
    """
    Compute the aggregate for one driver.

    Args:
        required: Required docTypes for the driver's vehicle category.
        documents: Non-deleted records scoped to that category.
    """
    required = [normalize_tag(t) for t in required]
    groups: dict[str, list[DriverDocument]] = {}
    for doc in documents:
        if doc.deleted:
            continue
        doc_type = normalize_tag(doc.doc_type)
        if doc_type:
            groups.setdefault(doc_type, []).append(doc)

    if not groups:
        return AggregateOutcome(
            document_status=DocStatus.PENDING,
            is_verified=False,
            by_type={t: MISSING for t in required},
        )

    by_type: dict[str, str] = {}
    for doc_type in required:
        group = groups.get(doc_type)
        by_type[doc_type] = classify_type(group).value if group else MISSING

    statuses = set(by_type.values())
    if required and statuses == {DocStatus.APPROVED.value}:
        return AggregateOutcome(DocStatus.APPROVED, True, by_type)
    if DocStatus.REJECTED.value in statuses:
        return AggregateOutcome(DocStatus.REJECTED, False, by_type)
    return AggregateOutcome(DocStatus.PENDING, False, by_type)
