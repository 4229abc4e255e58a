"""Domain dataclasses for stations, cars and rentals.

Entities compare equal when they share the same identity key (``Station.id``,
``Car.plate``, ``Rental.id``). An entity whose key is still ``None`` is only
equal to itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(slots=True, eq=False)
class Station:
    id: Optional[int]
    title: str

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Station):
            return NotImplemented
        return self.id is not None and self.id == other.id

    def __hash__(self) -> int:
        return hash((Station, self.id)) if self.id is not None else id(self)


@dataclass(slots=True, eq=False)
class Car:
    plate: str
    mileage: float
    model: Optional[str]
    location: Optional[Station] = None

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Car):
            return NotImplemented
        return self.plate is not None and self.plate == other.plate

    def __hash__(self) -> int:
        return hash((Car, self.plate))


@dataclass(slots=True, eq=False)
class Rental:
    id: Optional[int]
    beginning: datetime
    car: Car
    rental_station: Station
    end: Optional[datetime] = None
    driven_km: Optional[float] = None
    return_station: Optional[Station] = None

    @property
    def is_open(self) -> bool:
        """True while the car is still checked out."""
        return (
            self.end is None
            and self.driven_km is None
            and self.return_station is None
        )

    @property
    def is_closed(self) -> bool:
        return (
            self.end is not None
            and self.driven_km is not None
            and self.return_station is not None
        )

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Rental):
            return NotImplemented
        return self.id is not None and self.id == other.id

    def __hash__(self) -> int:
        return hash((Rental, self.id)) if self.id is not None else id(self)
