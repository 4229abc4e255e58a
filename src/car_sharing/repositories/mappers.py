"""SQLite row mappers for domain models."""

from __future__ import annotations

import sqlite3
from datetime import datetime
from typing import Any, Dict, Optional

from dateutil import parser

from car_sharing.domain.models import Car, Rental, Station


def _row_value(row: sqlite3.Row, key: str) -> Any:
    return row[key] if key in row.keys() else None


def to_timestamp(value: Optional[datetime]) -> Optional[str]:
    """Serialize a datetime with a fixed width so stored values sort in time order."""
    if value is None:
        return None
    return value.isoformat(timespec="microseconds")


def from_timestamp(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    return parser.isoparse(value)


def _station_or_none(station_id: Optional[int], title: Optional[str]) -> Optional[Station]:
    if station_id is None:
        return None
    return Station(id=station_id, title=title)


def station_from_row(row: sqlite3.Row) -> Station:
    return Station(id=row["id"], title=_row_value(row, "title"))


def station_to_record(station: Station) -> Dict[str, Any]:
    return {
        "id": station.id,
        "title": station.title,
    }


def car_from_row(row: sqlite3.Row) -> Car:
    return Car(
        plate=row["plate"],
        mileage=float(row["mileage"]),
        model=_row_value(row, "model"),
        location=_station_or_none(
            _row_value(row, "location_id"),
            _row_value(row, "location_title"),
        ),
    )


def car_to_record(car: Car) -> Dict[str, Any]:
    return {
        "plate": car.plate,
        "mileage": float(car.mileage),
        "model": car.model,
        "location_id": car.location.id if car.location else None,
    }


def rental_from_row(row: sqlite3.Row) -> Rental:
    """Build a rental from a row joined with its car and stations."""
    car = Car(
        plate=row["car_plate"],
        mileage=float(row["car_mileage"]),
        model=_row_value(row, "car_model"),
        location=_station_or_none(
            _row_value(row, "car_location_id"),
            _row_value(row, "car_location_title"),
        ),
    )
    driven_km = _row_value(row, "driven_km")
    return Rental(
        id=row["id"],
        beginning=from_timestamp(row["beginning"]),
        end=from_timestamp(_row_value(row, "end_date")),
        driven_km=float(driven_km) if driven_km is not None else None,
        car=car,
        rental_station=Station(
            id=row["rental_station_id"],
            title=_row_value(row, "rental_station_title"),
        ),
        return_station=_station_or_none(
            _row_value(row, "return_station_id"),
            _row_value(row, "return_station_title"),
        ),
    )


def rental_to_record(rental: Rental) -> Dict[str, Any]:
    return {
        "id": rental.id,
        "beginning": to_timestamp(rental.beginning),
        "end_date": to_timestamp(rental.end),
        "driven_km": rental.driven_km,
        "car_plate": rental.car.plate,
        "rental_station_id": rental.rental_station.id,
        "return_station_id": (
            rental.return_station.id if rental.return_station else None
        ),
    }
