"""Repositories for data access."""

from car_sharing.repositories.car_repo import CarRepo
from car_sharing.repositories.mappers import (
    car_from_row,
    car_to_record,
    rental_from_row,
    rental_to_record,
    station_from_row,
    station_to_record,
)
from car_sharing.repositories.rental_repo import RentalRepo
from car_sharing.repositories.station_repo import StationRepo
from car_sharing.repositories.upsert import upsert

__all__ = [
    "CarRepo",
    "car_from_row",
    "car_to_record",
    "RentalRepo",
    "rental_from_row",
    "rental_to_record",
    "StationRepo",
    "station_from_row",
    "station_to_record",
    "upsert",
]
