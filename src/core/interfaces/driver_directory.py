"""
Contract: Driver Directory

Access to the driver profile owned by the profile subsystem.
"""

from abc import ABC, abstractmethod

from src.core.entities.driver import Driver


class IDriverDirectory(ABC):
    """Port: Driver Directory."""

    @abstractmethod
    def get(self, driver_id: str) -> Driver | None:
        """Load a driver, or None if unknown."""
        ...

    @abstractmethod
    def update_verification(self, driver_id: str, document_status: str, is_verified: bool) -> None:
        """Write the aggregate fields. Only the status aggregator calls this."""
        ...

    @abstractmethod
    def set_vehicle_type(self, driver_id: str, vehicle_type: str) -> Driver | None:
        """Change the driver's vehicle category. Returns None if unknown."""
        ...

    @abstractmethod
    def upsert(self, driver_id: str, name: str, phone: str, vehicle_type: str | None) -> Driver:
        """Create or update the profile fields (never the aggregate fields)."""
        ...
