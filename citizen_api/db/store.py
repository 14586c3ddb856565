"""The owned store handed to every service: engine plus snapshot writer."""
from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.engine import Row
from sqlalchemy.sql import Executable

from citizen_api.db.engine import ExecutionResult, Params, StorageEngine, Transaction
from citizen_api.db.persistence import PersistenceCoordinator


class CitizenStore:
    """
    Reads go straight to the engine. Writes go through ``mutation()``, which
    holds the database lock across commit and snapshot flush so that a
    mutation and its flush are never interleaved with another caller.
    """

    def __init__(self, engine: StorageEngine, persistence: PersistenceCoordinator) -> None:
        self.engine = engine
        self.persistence = persistence

    @property
    def snapshot_path(self):
        return self.persistence.path

    def query(self, statement: Executable | str, params: Params = None) -> list[Row]:
        return self.engine.query(statement, params)

    def execute(self, statement: Executable | str, params: Params = None) -> ExecutionResult:
        with self.mutation() as tx:
            return tx.execute(statement, params)

    @contextmanager
    def mutation(self) -> Iterator[Transaction]:
        """
        Open a write transaction. On normal exit the transaction commits and
        the snapshot is rewritten; an exception rolls back and skips the
        flush. A snapshot failure raises after the commit, so the in-memory
        change stays applied.
        """
        with self.engine.lock:
            with self.engine.batch() as tx:
                yield tx
            self.persistence.persist()

    def close(self) -> None:
        self.engine.close()
