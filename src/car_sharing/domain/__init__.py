"""Domain models for CarSharing."""

from car_sharing.domain.models import Car, Rental, Station
from car_sharing.domain.validation import validate_car, validate_rental

__all__ = [
    "Car",
    "Rental",
    "Station",
    "validate_car",
    "validate_rental",
]
