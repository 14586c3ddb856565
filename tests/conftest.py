from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Make the citizen_api package importable during local test runs
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from citizen_api.db.bootstrap import SynchronousBootstrap  # noqa: E402
from citizen_api.services.registry import build_services  # noqa: E402


@pytest.fixture()
def snapshot_path(tmp_path):
    return tmp_path / "store.sqlite"


@pytest.fixture()
def bootstrap(snapshot_path):
    """Bootstrap bound to a temporary snapshot; closes the store on teardown."""
    boot = SynchronousBootstrap(snapshot_path)
    yield boot
    boot.shutdown()


@pytest.fixture()
def store(bootstrap):
    return bootstrap.ensure_database()


@pytest.fixture()
def services(store):
    return build_services(store)


@pytest.fixture()
def persist_calls(store, monkeypatch):
    """Count snapshot flushes while still writing them."""
    calls = []
    original = store.persistence.persist

    def counting():
        calls.append(1)
        return original()

    monkeypatch.setattr(store.persistence, "persist", counting)
    return calls
