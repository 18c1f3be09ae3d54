"""
Seed test drivers into the directory.

Creates N drivers per vehicle type with pending status so the upload /
review flow can be exercised locally.

Usage:
    python -m scripts.seed_drivers [--per-type 3] [--vehicle-type bike]
"""
import argparse
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

# Add project root to path
ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))
load_dotenv(os.path.join(ROOT, ".env"))

from src.api.dependencies import build_container
from src.config.logging_setup import setup_logging

logger = logging.getLogger("seed_drivers")


def seed(per_type: int, vehicle_types: list[str]) -> int:
    container = build_container()
    container.init_db()

    created = 0
    for vehicle_type in vehicle_types:
        for i in range(1, per_type + 1):
            driver_id = f"test-{vehicle_type}-{i:03d}"
            phone = f"+9190000{len(vehicle_type)}{i:04d}"
            driver = container.manage.register(
                driver_id,
                name=f"Test {vehicle_type.title()} Driver {i}",
                phone=phone,
                vehicle_type=vehicle_type,
            )
            required = ", ".join(container.catalog.required_types(vehicle_type))
            logger.info(f"{driver.id} [{driver.vehicle_type}] {driver.document_status} needs: {required}")
            created += 1
    return created


def main():
    parser = argparse.ArgumentParser(description="Seed test drivers")
    parser.add_argument("--per-type", type=int, default=3)
    parser.add_argument("--vehicle-type", action="append", dest="vehicle_types")
    args = parser.parse_args()

    setup_logging(os.getenv("LOG_LEVEL", "info"))
    vehicle_types = args.vehicle_types or ["bike", "auto", "car"]
    count = seed(args.per_type, vehicle_types)
    print(f"Seeded {count} drivers")


if __name__ == "__main__":
    main()
