"""Repository for car persistence."""

from __future__ import annotations

import sqlite3
from typing import List, Optional

from car_sharing.domain.models import Car
from car_sharing.logging_config import get_logger
from car_sharing.repositories.mappers import car_from_row, car_to_record
from car_sharing.repositories.upsert import upsert

CAR_SELECT = """
    SELECT
        c.plate,
        c.mileage,
        c.model,
        c.location_id,
        s.title AS location_title
    FROM cars c
    LEFT JOIN stations s ON s.id = c.location_id
"""


class CarRepo:
    """Upsert and lookups for cars, keyed by plate."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._connection = connection
        self._connection.row_factory = sqlite3.Row
        self._logger = get_logger(self.__class__.__name__)

    def save(self, car: Car) -> Car:
        try:
            _plate, created = upsert(
                self._connection,
                "cars",
                car_to_record(car),
                key="plate",
            )
        except Exception:
            self._logger.exception("Failed to save car plate=%s", car.plate)
            raise
        self._logger.debug(
            "%s car plate=%s", "Created" if created else "Replaced", car.plate
        )
        return car

    def get_by_plate(self, plate: str) -> Optional[Car]:
        try:
            row = self._connection.execute(
                f"{CAR_SELECT} WHERE c.plate = ?",
                (plate,),
            ).fetchone()
        except Exception:
            self._logger.exception("Failed to get car plate=%s", plate)
            raise
        return car_from_row(row) if row else None

    def list_all(self) -> List[Car]:
        try:
            rows = self._connection.execute(
                f"{CAR_SELECT} ORDER BY c.plate"
            ).fetchall()
        except Exception:
            self._logger.exception("Failed to list cars")
            raise
        return [car_from_row(row) for row in rows]

    def list_at_station(self, station_id: int) -> List[Car]:
        try:
            rows = self._connection.execute(
                f"{CAR_SELECT} WHERE c.location_id = ? ORDER BY c.plate",
                (station_id,),
            ).fetchall()
        except Exception:
            self._logger.exception(
                "Failed to list cars at station id=%s", station_id
            )
            raise
        return [car_from_row(row) for row in rows]
