"""
Use Case: Recompute Driver Status

Reads every active document of the driver's current vehicle category and
rewrites the driver's documentStatus / isVerified. The only writer of those
two fields.

Concurrent runs for the same driver are last-write-wins: each run is a pure
function of the snapshot it read, and the next mutation triggers another run.
"""

import logging

from src.core.entities.document import normalize_tag
from src.core.entities.driver import Driver, DriverVerification
from src.core.interfaces.document_repository import IDocumentRepository
from src.core.interfaces.driver_directory import IDriverDirectory
from src.core.rules.requirement_catalog import RequirementCatalog
from src.core.rules.status_aggregation import AggregateOutcome, aggregate_status

logger = logging.getLogger(__name__)


class RecomputeDriverStatusUseCase:
    """Status Aggregator."""

    def __init__(
        self,
        drivers: IDriverDirectory,
        documents: IDocumentRepository,
        catalog: RequirementCatalog,
    ):
        self._drivers = drivers
        self._documents = documents
        self._catalog = catalog

    def evaluate(self, driver_id: str) -> tuple[Driver | None, AggregateOutcome | None]:
        """
        Compute the aggregate without persisting it.

        The outcome is None when aggregation does not apply: unknown driver,
        no vehicle type, or a vehicle type without requirements.
        """
        driver = self._drivers.get(driver_id)
        if driver is None:
            logger.warning(f"Recompute skipped: driver {driver_id} not found")
            return None, None

        vehicle_type = normalize_tag(driver.vehicle_type)
        if not vehicle_type:
            logger.info(f"Recompute skipped: driver {driver_id} has no vehicle type")
            return driver, None

        required = self._catalog.required_types(vehicle_type)
        if not required:
            logger.info(f"Recompute skipped: no requirements for vehicle type '{vehicle_type}' (driver {driver_id})")
            return driver, None

        documents = self._documents.list_for_driver(driver_id, vehicle_type=vehicle_type)
        return driver, aggregate_status(required, documents)

    def execute(self, driver_id: str) -> DriverVerification | None:
        """
        Recompute and persist.

        Returns the driver's aggregate after the run (unchanged on a no-op),
        or None if the driver does not exist.
        """
        driver, outcome = self.evaluate(driver_id)
        if driver is None:
            return None
        if outcome is None:
            return driver.verification()

        self._drivers.update_verification(
            driver_id,
            document_status=outcome.document_status.value,
            is_verified=outcome.is_verified,
        )
        logger.info(
            f"Driver {driver_id} [{driver.vehicle_type}] → status={outcome.document_status.value} "
            f"verified={outcome.is_verified} missing={outcome.missing}"
        )
        return DriverVerification(
            driver_id=driver_id,
            vehicle_type=driver.vehicle_type,
            document_status=outcome.document_status.value,
            is_verified=outcome.is_verified,
        )

    def refresh(self, driver_id: str) -> DriverVerification | None:
        """
        Recompute after a document mutation.

        The mutation is already committed, so a failure here is logged and
        swallowed: the caller still gets its success, and the next mutation
        corrects the stored aggregate.
        """
        try:
            return self.execute(driver_id)
        except Exception:
            logger.exception(f"Recompute failed for driver {driver_id}; stored aggregate may be stale")
            return None
