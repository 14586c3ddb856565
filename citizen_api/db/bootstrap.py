"""
Startup sequence for the store.

Loading is written as a coroutine (the snapshot read is pushed to a thread
with ``asyncio.to_thread``) but the service entry point needs a plain
blocking guarantee that the store is ready before it accepts commands.
``SynchronousBootstrap`` runs the coroutine on its own event loop in a worker
thread and parks the caller on a condition variable until the load reports
success or failure.
"""

from __future__ import annotations

import asyncio
import logging
import os
import threading

from citizen_api.db.engine import StorageEngine
from citizen_api.db.persistence import PersistenceCoordinator, load_snapshot
from citizen_api.db.schema import ensure_schema
from citizen_api.db.store import CitizenStore

logger = logging.getLogger(__name__)


async def load_store(snapshot_path: str | os.PathLike) -> CitizenStore:
    """Open the engine from the snapshot (or empty), apply schema/seed and flush once."""
    snapshot = await asyncio.to_thread(load_snapshot, snapshot_path)
    engine = StorageEngine()
    engine.open(snapshot)
    try:
        ensure_schema(engine)
        persistence = PersistenceCoordinator(engine, snapshot_path)
        persistence.persist()
    except BaseException:
        engine.close()
        raise
    return CitizenStore(engine, persistence)


class SynchronousBootstrap:
    """One-shot readiness gate around ``load_store``."""

    def __init__(self, snapshot_path: str | os.PathLike) -> None:
        self.snapshot_path = snapshot_path
        self._cond = threading.Condition()
        self._started = False
        self._done = False
        self._store: CitizenStore | None = None
        self._error: BaseException | None = None

    @property
    def store(self) -> CitizenStore | None:
        return self._store

    def _run(self) -> None:
        store = None
        error = None
        try:
            store = asyncio.run(load_store(self.snapshot_path))
        except BaseException as exc:  # handed back to the waiting caller
            error = exc
        with self._cond:
            self._store = store
            self._error = error
            self._done = True
            self._cond.notify_all()

    def ensure_database(self) -> CitizenStore:
        """
        Block until the store is loaded and return it. Calling again after a
        successful load returns the same store without doing anything. A load
        failure is re-raised here and leaves the bootstrap ready to retry.
        """
        with self._cond:
            if self._store is not None:
                return self._store
            if not self._started:
                self._started = True
                self._done = False
                logger.info("Loading store from %s", self.snapshot_path)
                threading.Thread(target=self._run, name="store-bootstrap", daemon=True).start()
            while not self._done:
                self._cond.wait()
            if self._error is not None:
                error, self._error = self._error, None
                self._started = False
                logger.error("Store bootstrap failed: %s", error)
                raise error
            logger.info("Store ready")
            return self._store

    def shutdown(self) -> None:
        with self._cond:
            if self._store is not None:
                self._store.close()
            self._store = None
            self._started = False
            self._done = False
