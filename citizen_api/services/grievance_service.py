"""Grievance use cases: filing, status changes and citizen feedback."""
from __future__ import annotations

import logging
from typing import Optional

from citizen_api.core.errors import NotFoundError, ValidationFailureError
from citizen_api.core.utils import next_timestamp, optional_text, require_text, utcnow
from citizen_api.db.store import CitizenStore
from citizen_api.domain.statuses import GRIEVANCE_INITIAL_STATUS, GRIEVANCE_POLICY, StatusPolicy
from citizen_api.repositories.sql_repository import SQLRepository
from citizen_api.services.user_service import NewUser, resolve_user_id

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5


def validate_rating(rating) -> int:
    if isinstance(rating, bool) or not isinstance(rating, int):
        raise ValidationFailureError("rating must be an integer")
    if not MIN_RATING <= rating <= MAX_RATING:
        raise ValidationFailureError(f"rating must be between {MIN_RATING} and {MAX_RATING}")
    return rating


class GrievanceService:
    def __init__(self, store: CitizenStore, *, policy: StatusPolicy = GRIEVANCE_POLICY) -> None:
        self.store = store
        self.repository = SQLRepository(store)
        self.policy = policy

    def create_grievance(
        self,
        subject: str,
        description: str,
        *,
        user_id: Optional[int] = None,
        user: Optional[NewUser] = None,
    ) -> dict:
        subject = require_text(subject, "subject")
        description = require_text(description, "description")
        now = utcnow()
        with self.store.mutation() as tx:
            owner_id = resolve_user_id(self.repository, tx, now, user_id=user_id, user=user)
            grievance_id = self.repository.insert_grievance(
                tx,
                user_id=owner_id,
                subject=subject,
                description=description,
                status=GRIEVANCE_INITIAL_STATUS,
                now=now,
            )
            created = self.repository.get_grievance(grievance_id, tx)
        logger.info("Grievance %s opened", grievance_id)
        return created

    def get_grievance(self, grievance_id: int) -> dict:
        grievance = self.repository.get_grievance(grievance_id)
        if not grievance:
            raise NotFoundError("Grievance not found")
        return grievance

    def list_grievances(self) -> list[dict]:
        return self.repository.list_grievances()

    def update_status(self, grievance_id: int, status: Optional[str] = None) -> dict:
        with self.store.mutation() as tx:
            existing = self.repository.get_grievance(grievance_id, tx)
            if not existing:
                raise NotFoundError("Grievance not found")
            target = existing["status"] if status is None else self.policy.check_transition(existing["status"], status)
            self.repository.update_grievance_status(tx, grievance_id, target, next_timestamp(existing["updated_at"]))
            updated = self.repository.get_grievance(grievance_id, tx)
        logger.info("Grievance %s status %s -> %s", grievance_id, existing["status"], target)
        return updated

    def delete_grievance(self, grievance_id: int) -> None:
        """Feedback rows go with the grievance (ON DELETE CASCADE)."""
        with self.store.mutation() as tx:
            if not self.repository.delete_grievance(tx, grievance_id):
                raise NotFoundError("Grievance not found")

    # -------------------------- feedback --------------------------
    def add_feedback(self, grievance_id: int, rating: int, comments: Optional[str] = None) -> dict:
        rating = validate_rating(rating)
        with self.store.mutation() as tx:
            if not self.repository.get_grievance(grievance_id, tx):
                raise NotFoundError("Grievance not found")
            feedback_id = self.repository.insert_feedback(tx, grievance_id, rating, optional_text(comments), utcnow())
            return self.repository.get_feedback(feedback_id, tx)

    def list_feedback(self, grievance_id: int) -> list[dict]:
        self.get_grievance(grievance_id)
        return self.repository.list_feedback(grievance_id)
