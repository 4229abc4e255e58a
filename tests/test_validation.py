import math
from datetime import datetime, timedelta, timezone

import pytest

from car_sharing.domain.models import Car, Rental, Station
from car_sharing.domain.validation import validate_car, validate_rental

STATION = Station(id=1, title="Wien Nord")
OTHER_STATION = Station(id=2, title="Wien Mitte")
CAR = Car("W-123ER", 123.0, "X1", STATION)
BEGINNING = datetime(2022, 1, 1, 0, 0)


def _rental(**overrides) -> Rental:
    fields = dict(id=None, beginning=BEGINNING, car=CAR, rental_station=STATION)
    fields.update(overrides)
    return Rental(**fields)


def test_open_rental_is_valid():
    assert validate_rental(_rental()) == []


def test_closed_rental_is_valid():
    rental = _rental(
        end=datetime(2022, 1, 2),
        driven_km=10.0,
        return_station=OTHER_STATION,
    )

    assert validate_rental(rental) == []


@pytest.mark.parametrize(
    "end",
    [datetime(2021, 12, 31), BEGINNING],
    ids=["before", "equal"],
)
def test_end_must_be_after_beginning(end):
    rental = _rental(end=end, driven_km=10.0, return_station=STATION)

    assert validate_rental(rental) == ["end must be after beginning"]


@pytest.mark.parametrize(
    "overrides",
    [
        {"driven_km": 10.0},
        {"end": datetime(2022, 1, 2)},
        {"return_station": STATION},
        {"driven_km": 10.0, "return_station": STATION},
        {"end": datetime(2022, 1, 2), "return_station": STATION},
    ],
)
def test_partially_closed_rental_is_invalid(overrides):
    violations = validate_rental(_rental(**overrides))

    assert violations == [
        "driven km, end and return station must be all set or all unset"
    ]


def test_missing_references_are_reported():
    rental = Rental(id=None, beginning=None, car=None, rental_station=None)

    assert validate_rental(rental) == [
        "beginning is required",
        "car is required",
        "rental station is required",
    ]


def test_negative_driven_km_is_invalid():
    rental = _rental(
        end=datetime(2022, 1, 2), driven_km=-1.0, return_station=STATION
    )

    assert validate_rental(rental) == [
        "driven km must be a finite, non-negative number"
    ]


@pytest.mark.parametrize("plate", ["W-12", "W-123ER", "KS-SHV234"])
def test_plate_length_bounds_are_inclusive(plate):
    assert validate_car(Car(plate, 0.0, "Model T")) == []


@pytest.mark.parametrize("plate", ["", "W-1", "KS-SHV2345"])
def test_plate_length_outside_bounds_is_invalid(plate):
    assert validate_car(Car(plate, 0.0, "Model T")) == [
        "plate must have 4 to 9 characters"
    ]


def test_negative_mileage_is_invalid():
    assert validate_car(Car("W-123ER", -0.5, "X1")) == [
        "mileage must be a finite, non-negative number"
    ]


def test_entities_compare_by_identity_key():
    assert Station(id=1, title="a") == Station(id=1, title="b")
    assert Station(id=None, title="a") != Station(id=None, title="a")
    assert Car("W-123ER", 1.0, "X1") == Car("W-123ER", 999.0, "Golf")
    assert len({Car("W-123ER", 1.0, "X1"), Car("W-123ER", 2.0, "X1")}) == 1
    assert _rental(id=7) == _rental(id=7, driven_km=3.0)
    assert _rental(id=7) != _rental(id=8)


@pytest.mark.parametrize("driven_km", [math.nan, math.inf, -math.inf, True, "10"])
def test_driven_km_must_be_a_finite_number(driven_km):
    rental = _rental(
        end=datetime(2022, 1, 2), driven_km=driven_km, return_station=STATION
    )

    assert validate_rental(rental) == [
        "driven km must be a finite, non-negative number"
    ]


@pytest.mark.parametrize("mileage", [math.nan, math.inf])
def test_mileage_must_be_finite(mileage):
    assert validate_car(Car("W-123ER", mileage, "X1")) == [
        "mileage must be a finite, non-negative number"
    ]


@pytest.mark.parametrize(
    "overrides",
    [
        {"beginning": datetime(2022, 1, 1, tzinfo=timezone.utc)},
        {
            "end": datetime(2022, 1, 2, tzinfo=timezone(timedelta(hours=1))),
            "driven_km": 10.0,
            "return_station": STATION,
        },
    ],
    ids=["aware-beginning", "aware-end"],
)
def test_aware_datetimes_are_rejected(overrides):
    assert validate_rental(_rental(**overrides)) == [
        "beginning and end must be naive local times"
    ]
