"""Table creation and baseline seed data."""
from __future__ import annotations

import logging

from sqlalchemy import func, insert, select

from citizen_api.db.engine import StorageEngine
from citizen_api.db.models import Base, Scheme

logger = logging.getLogger(__name__)

DEFAULT_SCHEMES = (
    {
        "title": "Farmers Support Scheme",
        "description": "Subsidies and financial assistance for farmers",
        "department": "Agriculture",
    },
    {
        "title": "Healthcare Assistance",
        "description": "Financial support for critical healthcare",
        "department": "Health",
    },
    {
        "title": "Education Scholarship",
        "description": "Scholarships for higher education",
        "department": "Education",
    },
)


def create_all(engine: StorageEngine) -> None:
    """Create missing tables; existing tables and rows are left untouched."""
    with engine.batch() as tx:
        Base.metadata.create_all(bind=tx.connection, checkfirst=True)


def seed_if_empty(engine: StorageEngine) -> int:
    """Insert the default schemes when the table is empty. Returns rows inserted."""
    with engine.batch() as tx:
        count = tx.query(select(func.count()).select_from(Scheme))[0][0]
        if count:
            return 0
        for row in DEFAULT_SCHEMES:
            tx.execute(insert(Scheme).values(**row))
    logger.info("Seeded %d default schemes", len(DEFAULT_SCHEMES))
    return len(DEFAULT_SCHEMES)


def ensure_schema(engine: StorageEngine) -> None:
    create_all(engine)
    seed_if_empty(engine)
