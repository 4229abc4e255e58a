import sqlite3
from dataclasses import replace
from datetime import datetime

import pytest

from car_sharing.db.unit_of_work import UnitOfWork
from car_sharing.domain.models import Car, Rental, Station
from car_sharing.repositories import CarRepo, RentalRepo, StationRepo, upsert


class TestUpsert:
    def test_generated_key_is_returned_on_insert(self, connection):
        with UnitOfWork(connection):
            key, created = upsert(
                connection, "stations", {"id": None, "title": "Wien Nord"}, key="id"
            )

        assert created is True
        assert StationRepo(connection).get_by_id(key).title == "Wien Nord"

    def test_existing_key_is_replaced(self, connection):
        with UnitOfWork(connection):
            key, _ = upsert(
                connection, "stations", {"id": None, "title": "Wien Nord"}, key="id"
            )
        with UnitOfWork(connection):
            same_key, created = upsert(
                connection, "stations", {"id": key, "title": "Wien Süd"}, key="id"
            )

        assert (same_key, created) == (key, False)
        assert [station.title for station in StationRepo(connection).list_all()] == [
            "Wien Süd"
        ]

    def test_unknown_explicit_key_is_inserted(self, connection):
        with UnitOfWork(connection):
            key, created = upsert(
                connection, "stations", {"id": 42, "title": "Linz"}, key="id"
            )

        assert (key, created) == (42, True)
        assert StationRepo(connection).get_by_id(42) == Station(id=42, title="Linz")


class TestSave:
    def test_station_save_is_last_write_wins(self, service):
        station = service.save(Station(id=None, title="Wien Nord"))

        service.save(replace(station, title="Wien Nord Bahnhof"))
        service.save(replace(station, title="Wien Praterstern"))

        assert len(service.find_all_stations()) == 1
        assert service.find_station_by_id(station.id).title == "Wien Praterstern"

    def test_car_save_replaces_by_plate(self, service, fleet):
        service.save(Car("W-123ER", 500.0, "X3", fleet.stations[2]))

        stored = service.find_car_by_plate("W-123ER")
        assert (stored.mileage, stored.model, stored.location) == (
            500.0,
            "X3",
            fleet.stations[2],
        )
        assert len(service.find_all_cars()) == len(fleet.cars)

    def test_saving_does_not_mutate_the_argument(self, service):
        station = Station(id=None, title="Wien Nord")

        saved = service.save(station)

        assert station.id is None
        assert saved.id is not None

    def test_rental_save_twice_keeps_one_row(self, service, fleet):
        rental = fleet.rentals[2]

        service.save(rental)
        service.save(replace(rental, beginning=datetime(2022, 1, 4, 8, 0)))

        assert len(service.find_all_rentals()) == len(fleet.rentals)
        assert service.find_rental_by_id(rental.id).beginning == datetime(
            2022, 1, 4, 8, 0
        )

    def test_save_rejects_unknown_types(self, service):
        with pytest.raises(TypeError):
            service.save("W-123ER")


class TestUnitOfWork:
    def test_failure_rolls_back_every_write(self, connection):
        with pytest.raises(RuntimeError, match="boom"):
            with UnitOfWork(connection) as uow:
                station = uow.stations.save(Station(id=None, title="Wien Nord"))
                uow.cars.save(Car("W-123ER", 1.0, "X1", station))
                raise RuntimeError("boom")

        assert StationRepo(connection).list_all() == []
        assert CarRepo(connection).list_all() == []

    def test_store_errors_propagate_and_roll_back(self, connection):
        ghost_car = Car("GHOST-1", 0.0, "None")
        station = Station(id=None, title="Wien Nord")

        with pytest.raises(sqlite3.IntegrityError):
            with UnitOfWork(connection) as uow:
                station = uow.stations.save(station)
                uow.rentals.save(
                    Rental(
                        id=None,
                        beginning=datetime(2022, 1, 1),
                        car=ghost_car,
                        rental_station=station,
                    )
                )

        assert StationRepo(connection).list_all() == []
        assert RentalRepo(connection).list_all() == []

    def test_nested_units_are_refused(self, connection):
        with UnitOfWork(connection):
            with pytest.raises(RuntimeError):
                UnitOfWork(connection).__enter__()

    def test_schema_checks_back_the_invariants(self, connection):
        with pytest.raises(sqlite3.IntegrityError):
            with UnitOfWork(connection) as uow:
                uow.cars.save(Car("W-1", 0.0, "too short"))


class TestLookups:
    def test_missing_rows_return_none(self, connection):
        assert StationRepo(connection).get_by_id(404) is None
        assert CarRepo(connection).get_by_plate("NOPE-404") is None
        assert RentalRepo(connection).get_by_id(404) is None

    def test_list_for_car_skips_excluded_rental(self, connection, fleet):
        repo = RentalRepo(connection)

        rentals = repo.list_for_car("W-123ER", exclude_rental_id=fleet.rentals[0].id)

        assert rentals == [fleet.rentals[2]]

    def test_count_open(self, connection, fleet):
        assert RentalRepo(connection).count_open() == 1
