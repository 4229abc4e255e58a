"""Database migrations for SQLite schema versioning."""

from __future__ import annotations

from dataclasses import dataclass
import sqlite3

from car_sharing.db.connection import transaction


@dataclass(frozen=True)
class Migration:
    version: int
    script: str


MIGRATIONS: list[Migration] = [
    Migration(
        version=1,
        script="""
        CREATE TABLE IF NOT EXISTS stations (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            title TEXT
        );

        CREATE TABLE IF NOT EXISTS cars (
            plate TEXT PRIMARY KEY
                CHECK (length(plate) BETWEEN 4 AND 9),
            mileage REAL NOT NULL DEFAULT 0 CHECK (mileage >= 0),
            model TEXT,
            location_id INTEGER,
            FOREIGN KEY (location_id) REFERENCES stations(id)
        );

        CREATE TABLE IF NOT EXISTS rentals (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            beginning TEXT NOT NULL,
            end_date TEXT,
            driven_km REAL CHECK (driven_km IS NULL OR driven_km >= 0),
            car_plate TEXT NOT NULL,
            rental_station_id INTEGER NOT NULL,
            return_station_id INTEGER,
            FOREIGN KEY (car_plate) REFERENCES cars(plate),
            FOREIGN KEY (rental_station_id) REFERENCES stations(id),
            FOREIGN KEY (return_station_id) REFERENCES stations(id),
            CHECK (end_date IS NULL OR end_date > beginning),
            CHECK (
                (driven_km IS NULL AND end_date IS NULL AND return_station_id IS NULL)
                OR (driven_km IS NOT NULL AND end_date IS NOT NULL
                    AND return_station_id IS NOT NULL)
            )
        );

        CREATE INDEX IF NOT EXISTS idx_cars_location_id
            ON cars(location_id);
        CREATE INDEX IF NOT EXISTS idx_rentals_car_plate
            ON rentals(car_plate);
        CREATE INDEX IF NOT EXISTS idx_rentals_beginning
            ON rentals(beginning);
        CREATE INDEX IF NOT EXISTS idx_rentals_end_date
            ON rentals(end_date);
        """,
    ),
]


def _fetch_schema_version(connection: sqlite3.Connection) -> int:
    connection.execute(
        """
        CREATE TABLE IF NOT EXISTS app_meta (
            schema_version INTEGER NOT NULL
        );
        """
    )
    row = connection.execute(
        "SELECT schema_version FROM app_meta LIMIT 1"
    ).fetchone()
    if row is None:
        connection.execute("INSERT INTO app_meta (schema_version) VALUES (0)")
        return 0
    return int(row[0])


def apply_migrations(connection: sqlite3.Connection) -> None:
    """Apply pending database migrations."""
    with transaction(connection):
        current_version = _fetch_schema_version(connection)

    for migration in MIGRATIONS:
        if migration.version <= current_version:
            continue

        with transaction(connection):
            connection.executescript(migration.script)
            connection.execute(
                "UPDATE app_meta SET schema_version = ?",
                (migration.version,),
            )

        current_version = migration.version


def get_schema_version(connection: sqlite3.Connection) -> int:
    """Return the applied schema version, 0 for an empty database."""
    with transaction(connection):
        return _fetch_schema_version(connection)
