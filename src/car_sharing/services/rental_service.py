"""Rental service for booking and return rules."""

from __future__ import annotations

import math
import numbers
import sqlite3
from dataclasses import replace
from datetime import datetime
from typing import Callable, Optional

from car_sharing.db.unit_of_work import UnitOfWork
from car_sharing.domain.models import Rental, Station
from car_sharing.domain.validation import validate_rental
from car_sharing.logging_config import get_logger
from car_sharing.repositories.mappers import rental_to_record
from car_sharing.services.availability_service import AvailabilityService
from car_sharing.services.errors import (
    CarNotAvailableError,
    IllegalStateError,
    InvalidArgumentError,
    ValidationError,
)


class RentalService:
    """Service for the rental lifecycle.

    A rental is saved open (no end, driven km or return station) and closed
    exactly once by :meth:`finish`, which also moves the car to the return
    station and adds the driven distance to its mileage.
    """

    def __init__(
        self,
        connection: sqlite3.Connection,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._connection = connection
        self._connection.row_factory = sqlite3.Row
        self._availability = AvailabilityService(connection)
        self._clock = clock or datetime.now
        self._logger = get_logger(self.__class__.__name__)

    def save(self, rental: Rental) -> Rental:
        violations = validate_rental(rental)
        if violations:
            self._logger.warning(
                "Rejected rental id=%s: %s", rental.id, "; ".join(violations)
            )
            raise ValidationError(violations)

        with UnitOfWork(self._connection) as uow:
            if rental.id is not None:
                stored = uow.rentals.get_by_id(rental.id)
                if stored is not None and stored.is_closed:
                    # finished rentals are immutable, identical re-saves excepted
                    if rental_to_record(stored) == rental_to_record(rental):
                        return stored
                    raise IllegalStateError(
                        f"Rental {rental.id} is finished and cannot be changed."
                    )
            if not self._availability.is_available(
                rental.car,
                rental.beginning,
                rental.end,
                exclude_rental_id=rental.id,
            ):
                raise CarNotAvailableError(
                    f"Car {rental.car.plate} is not available from "
                    f"{rental.beginning.isoformat()} to "
                    f"{rental.end.isoformat() if rental.end else 'open end'}."
                )
            return uow.rentals.save(rental)

    def finish(
        self,
        rental: Rental,
        station: Optional[Station],
        driven_km: float,
    ) -> Rental:
        """Close an open rental at ``station`` after ``driven_km`` kilometres.

        Returns the closed rental; its ``car`` carries the new mileage and
        location. The rental passed in is left untouched.
        """
        if station is None:
            raise InvalidArgumentError("A return station is required.")
        if station.id is None:
            raise InvalidArgumentError("The return station must be saved first.")
        if (
            isinstance(driven_km, bool)
            or not isinstance(driven_km, numbers.Real)
            or not math.isfinite(driven_km)
            or driven_km <= 0
        ):
            raise InvalidArgumentError(
                f"Driven km must be a positive finite number, got {driven_km!r}."
            )
        if rental.end is not None:
            raise IllegalStateError(f"Rental {rental.id} is already finished.")
        if rental.id is None:
            raise IllegalStateError("Only saved rentals can be finished.")

        driven_km = float(driven_km)
        with UnitOfWork(self._connection) as uow:
            stored = uow.rentals.get_by_id(rental.id)
            if stored is None:
                raise IllegalStateError(f"Rental {rental.id} does not exist.")
            if stored.end is not None:
                raise IllegalStateError(f"Rental {rental.id} is already finished.")

            # stored.car was read under the write lock
            car = stored.car
            updated_car = replace(
                car,
                mileage=car.mileage + driven_km,
                location=station,
            )
            closed = replace(
                stored,
                end=self._clock(),
                driven_km=driven_km,
                return_station=station,
                car=updated_car,
            )
            violations = validate_rental(closed)
            if violations:
                raise ValidationError(violations)

            closed = uow.rentals.save(closed)
            uow.cars.save(updated_car)

        self._logger.info(
            "Finished rental id=%s: car plate=%s mileage %.1f -> %.1f at station id=%s",
            closed.id,
            updated_car.plate,
            car.mileage,
            updated_car.mileage,
            station.id,
        )
        return closed
