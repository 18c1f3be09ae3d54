"""
Use Case: Manage Driver

Profile-side operations that change which requirements apply to a driver.
None of them write documentStatus / isVerified directly; each one hands
off to the status aggregator instead.
"""

import logging

from src.core.entities.document import normalize_tag
from src.core.entities.driver import Driver
from src.core.entities.verification_result import DriverProfile
from src.core.exceptions import NotFoundError, ValidationError
from src.core.interfaces.document_repository import IDocumentRepository
from src.core.interfaces.driver_directory import IDriverDirectory
from src.core.rules.requirement_catalog import RequirementCatalog
from src.core.use_cases.recompute_status import RecomputeDriverStatusUseCase

logger = logging.getLogger(__name__)


class ManageDriverUseCase:

    def __init__(
        self,
        drivers: IDriverDirectory,
        documents: IDocumentRepository,
        catalog: RequirementCatalog,
        recompute: RecomputeDriverStatusUseCase,
    ):
        self._drivers = drivers
        self._documents = documents
        self._catalog = catalog
        self._recompute = recompute

    def _check_vehicle_type(self, vehicle_type: str | None) -> str:
        normalized = normalize_tag(vehicle_type)
        if not normalized:
            raise ValidationError("Vehicle type is required")
        if not self._catalog.is_known_vehicle_type(normalized):
            raise ValidationError(
                f"Invalid vehicle type. Must be: {', '.join(self._catalog.vehicle_types())}"
            )
        return normalized

    def change_vehicle_type(self, driver_id: str, vehicle_type: str) -> Driver:
        """Switch category; documents submitted under the old one stop counting."""
        normalized = self._check_vehicle_type(vehicle_type)
        driver = self._drivers.set_vehicle_type(driver_id, normalized)
        if driver is None:
            raise NotFoundError("Driver not found")

        logger.info(f"Driver {driver_id} vehicle type set to {normalized}")
        verification = self._recompute.refresh(driver_id)
        if verification is not None:
            driver.document_status = verification.document_status
            driver.is_verified = verification.is_verified
        return driver

    def register(self, driver_id: str, name: str = "", phone: str = "", vehicle_type: str | None = None) -> Driver:
        """Create or update a directory entry."""
        if not driver_id or not driver_id.strip():
            raise ValidationError("Driver ID is required")
        normalized = self._check_vehicle_type(vehicle_type) if vehicle_type else None

        driver = self._drivers.upsert(driver_id.strip(), name=name or "", phone=phone or "", vehicle_type=normalized)
        logger.info(f"Registered driver {driver.id} ({driver.vehicle_type or 'no vehicle type'})")

        verification = self._recompute.refresh(driver.id)
        if verification is not None:
            driver.document_status = verification.document_status
            driver.is_verified = verification.is_verified
        return driver

    def profile(self, driver_id: str) -> DriverProfile:
        """Profile with an up-to-date aggregate and per-requirement breakdown."""
        self._recompute.refresh(driver_id)

        driver = self._drivers.get(driver_id)
        if driver is None:
            raise NotFoundError("Driver not found")

        _, outcome = self._recompute.evaluate(driver_id)
        return DriverProfile(
            driver=driver,
            verification=driver.verification(),
            document_count=self._documents.count_for_driver(driver_id),
            requirements=outcome.by_type if outcome else {},
        )
