"""In-memory SQLite engine that owns the canonical copy of the data."""
from __future__ import annotations

import logging
import sqlite3
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator, Mapping

from sqlalchemy import Engine, create_engine, text
from sqlalchemy.engine import Connection, Row
from sqlalchemy.exc import IntegrityError
from sqlalchemy.pool import StaticPool
from sqlalchemy.sql import Executable

from citizen_api.core.errors import (
    ConstraintViolationError,
    PersistenceError,
    UninitializedError,
)

logger = logging.getLogger(__name__)

Params = Mapping[str, Any] | None


@dataclass(frozen=True)
class ExecutionResult:
    rowcount: int
    lastrowid: int | None


def _as_statement(statement: Executable | str) -> Executable:
    return text(statement) if isinstance(statement, str) else statement


def _run(conn: Connection, statement: Executable | str, params: Params):
    try:
        if params:
            return conn.execute(_as_statement(statement), dict(params))
        return conn.execute(_as_statement(statement))
    except IntegrityError as exc:
        raise ConstraintViolationError(str(exc.orig)) from exc


class Transaction:
    """Handle yielded by ``StorageEngine.batch``; every call shares one transaction."""

    def __init__(self, conn: Connection) -> None:
        self._conn = conn

    @property
    def connection(self) -> Connection:
        return self._conn

    def execute(self, statement: Executable | str, params: Params = None) -> ExecutionResult:
        result = _run(self._conn, statement, params)
        return ExecutionResult(rowcount=result.rowcount, lastrowid=result.lastrowid)

    def query(self, statement: Executable | str, params: Params = None) -> list[Row]:
        return list(_run(self._conn, statement, params).all())


class StorageEngine:
    """
    Wraps a single ``sqlite3`` in-memory connection behind a SQLAlchemy engine.

    The connection is created empty or from snapshot bytes by ``open`` and is
    shared through a ``StaticPool``. Every operation takes ``lock`` so the
    engine can be used from FastAPI's worker threads one caller at a time.
    """

    def __init__(self) -> None:
        self.lock = threading.RLock()
        self._raw: sqlite3.Connection | None = None
        self._engine: Engine | None = None
        self._active: Transaction | None = None

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    def open(self, snapshot: bytes | None = None) -> None:
        with self.lock:
            if self._engine is not None:
                raise RuntimeError("StorageEngine is already open")
            raw = sqlite3.connect(":memory:", check_same_thread=False)
            try:
                if snapshot:
                    raw.deserialize(snapshot)
                raw.execute("SELECT count(*) FROM sqlite_master").fetchone()
                raw.execute("PRAGMA foreign_keys = ON")
            except sqlite3.DatabaseError as exc:
                raw.close()
                raise PersistenceError(f"Snapshot is not a valid database: {exc}") from exc
            self._raw = raw
            self._engine = create_engine(
                "sqlite://",
                creator=lambda: raw,
                poolclass=StaticPool,
                future=True,
            )
            logger.info("Storage engine opened (%s)", "snapshot" if snapshot else "empty")

    def close(self) -> None:
        with self.lock:
            if self._engine is None:
                return
            self._engine.dispose()
            self._raw.close()
            self._engine = None
            self._raw = None
            logger.info("Storage engine closed")

    def _require_engine(self) -> Engine:
        if self._engine is None:
            raise UninitializedError("Database not initialized")
        return self._engine

    def execute(self, statement: Executable | str, params: Params = None) -> ExecutionResult:
        """Run one mutating statement in its own transaction."""
        with self.batch() as tx:
            return tx.execute(statement, params)

    def query(self, statement: Executable | str, params: Params = None) -> list[Row]:
        with self.lock:
            engine = self._require_engine()
            if self._active is not None:
                return self._active.query(statement, params)
            with engine.connect() as conn:
                return list(_run(conn, statement, params).all())

    @contextmanager
    def batch(self) -> Iterator[Transaction]:
        """
        Group several statements: all of them commit together, or an
        exception rolls every one of them back.

        A batch opened while another one is active on the same thread joins
        the outer transaction.
        """
        with self.lock:
            engine = self._require_engine()
            if self._active is not None:
                yield self._active
                return
            with engine.begin() as conn:
                self._active = Transaction(conn)
                try:
                    yield self._active
                finally:
                    self._active = None

    def serialize(self) -> bytes:
        with self.lock:
            self._require_engine()
            return self._raw.serialize()
