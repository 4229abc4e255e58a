"""Application entry point."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional, Sequence

from car_sharing.config import AppConfig
from car_sharing.db.connection import get_connection
from car_sharing.db.migrations import apply_migrations, get_schema_version
from car_sharing.logging_config import configure_logging, get_logger
from car_sharing.paths import get_config_path, get_db_path
from car_sharing.repositories import RentalRepo
from car_sharing.services.car_sharing_service import CarSharingService
from car_sharing.utils.config_store import load_store_settings


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Prepare the car sharing database and report the fleet."
    )
    parser.add_argument("--db", type=Path, help="SQLite database file")
    parser.add_argument(
        "--config", type=Path, help="JSON config file (default: app data dir)"
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Migrate the database and log a short fleet summary."""
    args = _parse_args(argv)
    settings = load_store_settings(args.config or get_config_path())
    configure_logging(settings.log_level)
    logger = get_logger(__name__)

    config = AppConfig()
    db_path = args.db or settings.database_path or get_db_path()
    logger.info("Starting %s with database %s", config.app_name, db_path)

    connection = get_connection(db_path, timeout=settings.db_timeout_seconds)
    try:
        apply_migrations(connection)
        service = CarSharingService(connection)
        stations = service.find_all_stations()
        cars = service.find_all_cars()
        open_rentals = RentalRepo(connection).count_open()
        logger.info(
            "Schema v%s: %d stations, %d cars, %d open rentals",
            get_schema_version(connection),
            len(stations),
            len(cars),
            open_rentals,
        )
        for station in stations:
            parked = sorted(car.plate for car in service.find_cars_stationed_at(station))
            logger.info("Station %s (%s): %s", station.id, station.title, parked)
    finally:
        connection.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
