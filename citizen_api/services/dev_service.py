"""
Demo data helpers, only wired up outside production.
"""

from __future__ import annotations

import logging
from datetime import timedelta

from citizen_api.core.utils import utcnow
from citizen_api.db.store import CitizenStore
from citizen_api.domain.tracking import random_base36
from citizen_api.repositories.sql_repository import SQLRepository

logger = logging.getLogger(__name__)

DEMO_TRACKING_PREFIX = "DBT-PCR-"
DEMO_FIRST_TRACKING_ID = "DBT-PCR-5K7M2N9P"
DEMO_CLEANUP_NAME = "John Doe"

DEMO_APPLICANTS = (
    ("Aarav Sharma", "SC", 50000),
    ("Priya Verma", "ST", 75000),
    ("Vikram Singh", "OBC", 60000),
    ("Ananya Iyer", "SC", 45000),
    ("Rohan Gupta", "OBC", 52000),
    ("Neha Patel", "ST", 68000),
    ("Siddharth Rao", "SC", 40000),
    ("Ishita Bose", "OBC", 55000),
    ("Kunal Mehta", "SC", 61000),
    ("Meera Nair", "ST", 70000),
    ("Devansh Kulkarni", "OBC", 48000),
)

FALLBACK_SCHEME = {
    "title": "General Assistance",
    "description": "Seeded scheme for demo data",
    "department": "General",
}


def demo_tracking_ids(count: int) -> list[str]:
    ids = [DEMO_FIRST_TRACKING_ID]
    while len(ids) < count:
        candidate = f"{DEMO_TRACKING_PREFIX}{random_base36(8).upper()}"
        if candidate not in ids:
            ids.append(candidate)
    return ids[:count]


class DevService:
    def __init__(self, store: CitizenStore) -> None:
        self.store = store
        self.repository = SQLRepository(store)

    def seed_applications(self) -> dict:
        """
        Insert the demo applicants in one batch. The first tracking id is
        fixed, so running this twice fails on the unique constraint and
        leaves the store untouched.
        """
        now = utcnow()
        tracking_ids = demo_tracking_ids(len(DEMO_APPLICANTS))
        with self.store.mutation() as tx:
            scheme_id = self.repository.first_scheme_id(tx)
            if scheme_id is None:
                scheme_id = self.repository.insert_scheme(tx, now=now, **FALLBACK_SCHEME)
            for index, (name, category, amount) in enumerate(DEMO_APPLICANTS):
                user_id = self.repository.insert_user(tx, name, None, None, now)
                applied = (now - timedelta(days=index + 1)).date().isoformat()
                self.repository.insert_application(
                    tx,
                    tracking_id=tracking_ids[index],
                    user_id=user_id,
                    scheme_id=scheme_id,
                    data={
                        "applicantName": name,
                        "category": category,
                        "appliedDate": applied,
                        "amount": amount,
                    },
                    status="in_review" if index % 3 == 0 else "submitted",
                    now=now,
                )
        logger.info("Seeded %d demo applications", len(DEMO_APPLICANTS))
        return {"inserted": len(DEMO_APPLICANTS), "trackingIds": tracking_ids}

    def delete_john_doe(self) -> dict:
        """Drop demo applications mentioning John Doe and the John Doe users."""
        with self.store.mutation() as tx:
            self.repository.delete_applications_mentioning(tx, DEMO_CLEANUP_NAME)
            user_ids = self.repository.user_ids_named(tx, DEMO_CLEANUP_NAME)
            for user_id in user_ids:
                self.repository.detach_user_applications(tx, user_id)
            self.repository.delete_users_named(tx, DEMO_CLEANUP_NAME)
        return {"removedUsers": len(user_ids)}
