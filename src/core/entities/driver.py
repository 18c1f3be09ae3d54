"""
Entity: Driver

The slice of the driver profile this service reads, plus the aggregate
verification fields only the status aggregator writes.
"""

from dataclasses import dataclass

from src.core.entities.document import DocStatus


@dataclass
class DriverVerification:
    """Aggregate verification state of a driver."""
    driver_id: str
    vehicle_type: str | None
    document_status: str = DocStatus.PENDING.value
    is_verified: bool = False


@dataclass
class Driver:
    """Domain entity: Driver."""
    id: str
    name: str = ""
    phone: str = ""
    vehicle_type: str | None = None
    document_status: str = DocStatus.PENDING.value
    is_verified: bool = False

    def verification(self) -> DriverVerification:
        return DriverVerification(
            driver_id=self.id,
            vehicle_type=self.vehicle_type,
            document_status=self.document_status or DocStatus.PENDING.value,
            is_verified=bool(self.is_verified),
        )
