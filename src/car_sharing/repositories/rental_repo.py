"""Repository for rental persistence."""

from __future__ import annotations

import sqlite3
from dataclasses import replace
from typing import List, Optional

from car_sharing.domain.models import Rental
from car_sharing.logging_config import get_logger
from car_sharing.repositories.mappers import rental_from_row, rental_to_record
from car_sharing.repositories.upsert import upsert

RENTAL_SELECT = """
    SELECT
        r.id,
        r.beginning,
        r.end_date,
        r.driven_km,
        r.car_plate,
        r.rental_station_id,
        r.return_station_id,
        c.mileage AS car_mileage,
        c.model AS car_model,
        c.location_id AS car_location_id,
        cl.title AS car_location_title,
        rs.title AS rental_station_title,
        ts.title AS return_station_title
    FROM rentals r
    JOIN cars c ON c.plate = r.car_plate
    LEFT JOIN stations cl ON cl.id = c.location_id
    JOIN stations rs ON rs.id = r.rental_station_id
    LEFT JOIN stations ts ON ts.id = r.return_station_id
"""


class RentalRepo:
    """Upsert and lookups for rentals.

    Loaded rentals carry their car and stations as they are stored at read
    time. Saving a rental writes only the rental row; cars and stations are
    saved through their own repositories.
    """

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._connection = connection
        self._connection.row_factory = sqlite3.Row
        self._logger = get_logger(self.__class__.__name__)

    def save(self, rental: Rental) -> Rental:
        try:
            rental_id, created = upsert(
                self._connection,
                "rentals",
                rental_to_record(rental),
                key="id",
            )
        except Exception:
            self._logger.exception("Failed to save rental id=%s", rental.id)
            raise
        self._logger.debug(
            "%s rental id=%s", "Created" if created else "Replaced", rental_id
        )
        return replace(rental, id=rental_id)

    def get_by_id(self, rental_id: int) -> Optional[Rental]:
        try:
            row = self._connection.execute(
                f"{RENTAL_SELECT} WHERE r.id = ?",
                (rental_id,),
            ).fetchone()
        except Exception:
            self._logger.exception("Failed to get rental id=%s", rental_id)
            raise
        return rental_from_row(row) if row else None

    def list_all(self) -> List[Rental]:
        try:
            rows = self._connection.execute(
                f"{RENTAL_SELECT} ORDER BY r.id"
            ).fetchall()
        except Exception:
            self._logger.exception("Failed to list rentals")
            raise
        return [rental_from_row(row) for row in rows]

    def list_for_car(
        self,
        plate: str,
        *,
        exclude_rental_id: Optional[int] = None,
    ) -> List[Rental]:
        params: list[object] = [plate]
        exclude_clause = ""
        if exclude_rental_id is not None:
            exclude_clause = "AND r.id <> ?"
            params.append(exclude_rental_id)
        try:
            rows = self._connection.execute(
                f"""
                {RENTAL_SELECT}
                WHERE r.car_plate = ?
                  {exclude_clause}
                ORDER BY r.beginning
                """,
                params,
            ).fetchall()
        except Exception:
            self._logger.exception("Failed to list rentals for car plate=%s", plate)
            raise
        return [rental_from_row(row) for row in rows]

    def count_open(self) -> int:
        try:
            row = self._connection.execute(
                "SELECT COUNT(*) AS open_count FROM rentals WHERE end_date IS NULL"
            ).fetchone()
        except Exception:
            self._logger.exception("Failed to count open rentals")
            raise
        return int(row["open_count"]) if row else 0
