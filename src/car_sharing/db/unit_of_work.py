"""Unit of work binding the repositories to one SQLite transaction."""

from __future__ import annotations

import sqlite3
from types import TracebackType
from typing import ContextManager, Optional

from car_sharing.db.connection import transaction
from car_sharing.repositories import CarRepo, RentalRepo, StationRepo


class UnitOfWork:
    """One atomic write against the store.

    Entering begins an immediate transaction, so writers on other connections
    wait for this one to finish. Leaving commits, or rolls back and re-raises
    when the block failed. A unit of work is used for a single operation and
    never shared between unrelated calls.
    """

    def __init__(self, connection: sqlite3.Connection) -> None:
        self.connection = connection
        self.stations = StationRepo(connection)
        self.cars = CarRepo(connection)
        self.rentals = RentalRepo(connection)
        self._scope: Optional[ContextManager[sqlite3.Connection]] = None

    def __enter__(self) -> UnitOfWork:
        if self._scope is not None or self.connection.in_transaction:
            raise RuntimeError("A transaction is already open on this connection.")
        scope = transaction(self.connection, immediate=True)
        scope.__enter__()
        self._scope = scope
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> bool:
        scope, self._scope = self._scope, None
        if scope is None:
            return False
        return bool(scope.__exit__(exc_type, exc, tb))
