"""Repository for station persistence."""

from __future__ import annotations

import sqlite3
from dataclasses import replace
from typing import List, Optional

from car_sharing.domain.models import Station
from car_sharing.logging_config import get_logger
from car_sharing.repositories.mappers import station_from_row, station_to_record
from car_sharing.repositories.upsert import upsert


class StationRepo:
    """Upsert and lookups for stations."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._connection = connection
        self._connection.row_factory = sqlite3.Row
        self._logger = get_logger(self.__class__.__name__)

    def save(self, station: Station) -> Station:
        try:
            station_id, created = upsert(
                self._connection,
                "stations",
                station_to_record(station),
                key="id",
            )
        except Exception:
            self._logger.exception("Failed to save station id=%s", station.id)
            raise
        self._logger.debug(
            "%s station id=%s", "Created" if created else "Replaced", station_id
        )
        return replace(station, id=station_id)

    def get_by_id(self, station_id: int) -> Optional[Station]:
        try:
            row = self._connection.execute(
                "SELECT * FROM stations WHERE id = ?",
                (station_id,),
            ).fetchone()
        except Exception:
            self._logger.exception("Failed to get station id=%s", station_id)
            raise
        return station_from_row(row) if row else None

    def list_all(self) -> List[Station]:
        try:
            rows = self._connection.execute(
                "SELECT * FROM stations ORDER BY id"
            ).fetchall()
        except Exception:
            self._logger.exception("Failed to list stations")
            raise
        return [station_from_row(row) for row in rows]
