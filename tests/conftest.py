from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

import pytest

from car_sharing.db.connection import get_connection
from car_sharing.db.migrations import apply_migrations
from car_sharing.domain.models import Car, Rental, Station
from car_sharing.services.car_sharing_service import CarSharingService

FIXED_NOW = datetime(2022, 6, 1, 12, 0)


@dataclass
class Fleet:
    stations: list[Station]
    cars: list[Car]
    rentals: list[Rental]


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "car_sharing.db"


@pytest.fixture
def connection(db_path: Path):
    conn = get_connection(db_path)
    apply_migrations(conn)
    yield conn
    conn.close()


@pytest.fixture
def service(connection) -> CarSharingService:
    return CarSharingService(connection, clock=lambda: FIXED_NOW)


@pytest.fixture
def make_rental() -> Callable[..., Rental]:
    """Build an open rental, or a closed one when ``end`` is given."""

    def _make(
        car: Car,
        station: Station,
        beginning: datetime,
        end: Optional[datetime] = None,
        driven_km: float = 10.0,
        return_station: Optional[Station] = None,
    ) -> Rental:
        if end is None:
            return Rental(id=None, beginning=beginning, car=car, rental_station=station)
        return Rental(
            id=None,
            beginning=beginning,
            end=end,
            car=car,
            rental_station=station,
            return_station=return_station or station,
            driven_km=driven_km,
        )

    return _make


@pytest.fixture
def fleet(service: CarSharingService, make_rental) -> Fleet:
    stations = [
        service.save(Station(id=None, title=title))
        for title in ("Wien Nord", "Wien Mitte", "St. Pölten")
    ]
    cars = [
        service.save(car)
        for car in (
            Car("W-123ER", 123, "X1", stations[0]),
            Car("P-VN3X", 0, "Model X", stations[0]),
            Car("KS-SHV234", 1_234, "C4", stations[1]),
            Car("W-456UI", 10_234, "Passat", None),
        )
    ]
    rentals = [
        service.save(rental)
        for rental in (
            make_rental(
                cars[0],
                stations[0],
                datetime(2021, 12, 31, 12, 30),
                datetime(2022, 1, 2, 10, 0),
                driven_km=2_000.0,
            ),
            make_rental(
                cars[1],
                stations[0],
                datetime(2021, 8, 1, 0, 0),
                datetime(2021, 8, 1, 10, 0),
                driven_km=400.0,
                return_station=stations[1],
            ),
            make_rental(cars[0], stations[0], datetime(2022, 1, 3, 0, 0)),
        )
    ]
    return Fleet(stations=stations, cars=cars, rentals=rentals)
