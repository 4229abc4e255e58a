"""Structural checks run before an entity is persisted.

Each validator returns the list of violated rules; an empty list means the
entity may be saved. Validators never touch the store.

Timestamps are naive local times; aware datetimes are rejected because they
cannot be ordered against the stored ones.
"""

from __future__ import annotations

import math
import numbers
from datetime import datetime
from typing import Optional

from car_sharing.config import PLATE_MAX_LENGTH, PLATE_MIN_LENGTH
from car_sharing.domain.models import Car, Rental


def is_naive(value: Optional[datetime]) -> bool:
    return value is None or value.utcoffset() is None


def is_distance(value: object) -> bool:
    """True for a finite, non-negative real number (bools excluded)."""
    return (
        not isinstance(value, bool)
        and isinstance(value, numbers.Real)
        and math.isfinite(value)
        and value >= 0
    )


def validate_rental(rental: Rental) -> list[str]:
    violations: list[str] = []
    if rental.beginning is None:
        violations.append("beginning is required")
    if rental.car is None:
        violations.append("car is required")
    if rental.rental_station is None:
        violations.append("rental station is required")

    naive = is_naive(rental.beginning) and is_naive(rental.end)
    if not naive:
        violations.append("beginning and end must be naive local times")

    if (
        naive
        and rental.end is not None
        and rental.beginning is not None
        and not rental.end > rental.beginning
    ):
        violations.append("end must be after beginning")

    close_fields = (rental.driven_km, rental.end, rental.return_station)
    set_count = sum(value is not None for value in close_fields)
    if set_count not in (0, len(close_fields)):
        violations.append(
            "driven km, end and return station must be all set or all unset"
        )

    if rental.driven_km is not None and not is_distance(rental.driven_km):
        violations.append("driven km must be a finite, non-negative number")
    return violations


def validate_car(car: Car) -> list[str]:
    violations: list[str] = []
    plate = car.plate or ""
    if not PLATE_MIN_LENGTH <= len(plate) <= PLATE_MAX_LENGTH:
        violations.append(
            f"plate must have {PLATE_MIN_LENGTH} to {PLATE_MAX_LENGTH} characters"
        )
    if not is_distance(car.mileage):
        violations.append("mileage must be a finite, non-negative number")
    return violations
