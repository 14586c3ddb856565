"""
Whole-store snapshot persistence.

The engine keeps everything in memory; after each successful mutation the
complete database image is written over a single snapshot file. Writes go to
a temporary file next to the snapshot and are moved into place with
``os.replace`` so readers never observe a half-written file.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from citizen_api.core.errors import PersistenceError
from citizen_api.db.engine import StorageEngine

logger = logging.getLogger(__name__)


def load_snapshot(path: str | os.PathLike) -> bytes | None:
    """Return the snapshot bytes, or None when no snapshot has been written yet."""
    snapshot = Path(path)
    try:
        if not snapshot.exists():
            return None
        return snapshot.read_bytes()
    except OSError as exc:
        raise PersistenceError(f"Failed to read snapshot {snapshot}: {exc}") from exc


def write_atomic(path: Path, data: bytes) -> None:
    directory = path.parent
    directory.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=directory)
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise


class PersistenceCoordinator:
    """Flushes the engine to ``path`` on demand."""

    def __init__(self, engine: StorageEngine, path: str | os.PathLike) -> None:
        self.engine = engine
        self.path = Path(path)

    def persist(self) -> int:
        """Serialize the whole store and replace the snapshot. Returns bytes written."""
        with self.engine.lock:
            data = self.engine.serialize()
            try:
                write_atomic(self.path, data)
            except OSError as exc:
                logger.error("Snapshot write to %s failed: %s", self.path, exc)
                raise PersistenceError(f"Failed to write snapshot {self.path}: {exc}") from exc
        logger.debug("Snapshot written to %s (%d bytes)", self.path, len(data))
        return len(data)
