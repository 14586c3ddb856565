"""Storage core: engine, schema, snapshot persistence and bootstrap."""

from .bootstrap import SynchronousBootstrap, load_store
from .engine import StorageEngine
from .models import Base
from .persistence import PersistenceCoordinator
from .store import CitizenStore

__all__ = [
    "Base",
    "CitizenStore",
    "PersistenceCoordinator",
    "StorageEngine",
    "SynchronousBootstrap",
    "load_store",
]
