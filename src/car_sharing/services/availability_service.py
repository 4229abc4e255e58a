"""Availability checks for cars over rental intervals."""

from __future__ import annotations

import sqlite3
from datetime import datetime
from typing import Optional

from car_sharing.domain.models import Car, Rental
from car_sharing.domain.validation import is_naive
from car_sharing.logging_config import get_logger
from car_sharing.repositories.rental_repo import RentalRepo
from car_sharing.services.errors import InvalidArgumentError


def intervals_overlap(
    first_start: datetime,
    first_end: Optional[datetime],
    second_start: datetime,
    second_end: Optional[datetime],
) -> bool:
    """Half-open overlap test where a missing end extends indefinitely.

    ``[a, b)`` and ``[c, d)`` overlap iff ``a < d`` and ``c < b``, so intervals
    that only touch at an endpoint do not overlap.
    """
    second_starts_in_time = first_end is None or second_start < first_end
    first_starts_in_time = second_end is None or first_start < second_end
    return second_starts_in_time and first_starts_in_time


class AvailabilityService:
    """Service deciding whether a car is free for a proposed interval."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._connection = connection
        self._connection.row_factory = sqlite3.Row
        self._rental_repo = RentalRepo(connection)
        self._logger = get_logger(self.__class__.__name__)

    def find_conflicts(
        self,
        car: Car,
        start: datetime,
        end: Optional[datetime],
        exclude_rental_id: Optional[int] = None,
    ) -> list[Rental]:
        if not (is_naive(start) and is_naive(end)):
            raise InvalidArgumentError(
                "Availability is checked with naive local times only."
            )
        rentals = self._rental_repo.list_for_car(
            car.plate, exclude_rental_id=exclude_rental_id
        )
        return [
            rental
            for rental in rentals
            if intervals_overlap(rental.beginning, rental.end, start, end)
        ]

    def is_available(
        self,
        car: Car,
        start: datetime,
        end: Optional[datetime],
        exclude_rental_id: Optional[int] = None,
    ) -> bool:
        conflicts = self.find_conflicts(
            car, start, end, exclude_rental_id=exclude_rental_id
        )
        if conflicts:
            self._logger.info(
                "Car plate=%s is taken by rental ids=%s",
                car.plate,
                [rental.id for rental in conflicts],
            )
        return not conflicts
