"""Facade over stations, cars and rentals."""

from __future__ import annotations

import sqlite3
from datetime import datetime
from typing import Callable, Optional, Union

from car_sharing.db.unit_of_work import UnitOfWork
from car_sharing.domain.models import Car, Rental, Station
from car_sharing.domain.validation import validate_car
from car_sharing.logging_config import get_logger
from car_sharing.repositories import CarRepo, RentalRepo, StationRepo
from car_sharing.services.availability_service import AvailabilityService
from car_sharing.services.errors import ValidationError
from car_sharing.services.rental_service import RentalService

Entity = Union[Station, Car, Rental]


class CarSharingService:
    """Entry point used by application code.

    Every call is one bounded operation on the connection: writes run in
    their own unit of work, reads run outside any transaction.
    """

    def __init__(
        self,
        connection: sqlite3.Connection,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._connection = connection
        self._connection.row_factory = sqlite3.Row
        self._station_repo = StationRepo(connection)
        self._car_repo = CarRepo(connection)
        self._rental_repo = RentalRepo(connection)
        self._availability = AvailabilityService(connection)
        self._rental_service = RentalService(connection, clock=clock)
        self._logger = get_logger(self.__class__.__name__)

    def save(self, entity: Entity) -> Entity:
        if isinstance(entity, Rental):
            return self._rental_service.save(entity)
        if isinstance(entity, Car):
            return self._save_car(entity)
        if isinstance(entity, Station):
            with UnitOfWork(self._connection) as uow:
                return uow.stations.save(entity)
        raise TypeError(f"Cannot save {type(entity).__name__}.")

    def _save_car(self, car: Car) -> Car:
        violations = validate_car(car)
        if violations:
            self._logger.warning(
                "Rejected car plate=%s: %s", car.plate, "; ".join(violations)
            )
            raise ValidationError(violations)
        with UnitOfWork(self._connection) as uow:
            return uow.cars.save(car)

    def find_all_stations(self) -> list[Station]:
        return self._station_repo.list_all()

    def find_all_cars(self) -> list[Car]:
        return self._car_repo.list_all()

    def find_all_rentals(self) -> list[Rental]:
        return self._rental_repo.list_all()

    def find_station_by_id(self, station_id: int) -> Optional[Station]:
        return self._station_repo.get_by_id(station_id)

    def find_car_by_plate(self, plate: str) -> Optional[Car]:
        return self._car_repo.get_by_plate(plate)

    def find_rental_by_id(self, rental_id: int) -> Optional[Rental]:
        return self._rental_repo.get_by_id(rental_id)

    def find_cars_stationed_at(self, station: Station) -> set[Car]:
        if station.id is None:
            return set()
        return set(self._car_repo.list_at_station(station.id))

    def is_car_available(
        self,
        car: Car,
        start: datetime,
        end: Optional[datetime] = None,
    ) -> bool:
        return self._availability.is_available(car, start, end)

    def finish(
        self,
        rental: Rental,
        station: Optional[Station],
        driven_km: float,
    ) -> Rental:
        return self._rental_service.finish(rental, station, driven_km)
