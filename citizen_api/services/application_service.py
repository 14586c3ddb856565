"""
Benefit application use cases: submission, tracking and status changes.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional

from citizen_api.core.errors import NotFoundError, ValidationFailureError
from citizen_api.core.utils import next_timestamp, utcnow
from citizen_api.db.store import CitizenStore
from citizen_api.domain.statuses import (
    APPLICATION_INITIAL_STATUS,
    APPLICATION_POLICY,
    StatusPolicy,
)
from citizen_api.domain.tracking import generate_tracking_id
from citizen_api.repositories.sql_repository import SQLRepository
from citizen_api.services.user_service import NewUser, resolve_user_id

logger = logging.getLogger(__name__)


class ApplicationService:
    """
    Applications start as ``submitted``. ``update_status`` accepts any known
    status from any other unless a stricter ``StatusPolicy`` is injected.
    """

    def __init__(
        self,
        store: CitizenStore,
        *,
        policy: StatusPolicy = APPLICATION_POLICY,
        tracking_ids: Callable[[], str] = generate_tracking_id,
    ) -> None:
        self.store = store
        self.repository = SQLRepository(store)
        self.policy = policy
        self.tracking_ids = tracking_ids

    def create_application(
        self,
        scheme_id: int,
        data: Mapping[str, Any],
        *,
        user_id: Optional[int] = None,
        user: Optional[NewUser] = None,
    ) -> dict:
        if not isinstance(data, Mapping):
            raise ValidationFailureError("data must be an object")
        now = utcnow()
        tracking_id = self.tracking_ids()
        with self.store.mutation() as tx:
            owner_id = resolve_user_id(self.repository, tx, now, user_id=user_id, user=user)
            application_id = self.repository.insert_application(
                tx,
                tracking_id=tracking_id,
                user_id=owner_id,
                scheme_id=scheme_id,
                data=dict(data),
                status=APPLICATION_INITIAL_STATUS,
                now=now,
            )
            created = self.repository.get_application(application_id, tx)
        logger.info("Application %s submitted for scheme %s", tracking_id, scheme_id)
        return created

    def get_application(self, application_id: int) -> dict:
        application = self.repository.get_application(application_id)
        if not application:
            raise NotFoundError("Application not found")
        return application

    def get_by_tracking_id(self, tracking_id: str) -> dict:
        application = self.repository.get_application_by_tracking_id((tracking_id or "").strip())
        if not application:
            raise NotFoundError("Application not found")
        return application

    def list_applications(self) -> list[dict]:
        return self.repository.list_applications()

    def update_status(self, application_id: int, status: Optional[str] = None) -> dict:
        """
        Overwrite the status and refresh ``updated_at``. Without a status only
        the timestamp moves.
        """
        with self.store.mutation() as tx:
            existing = self.repository.get_application(application_id, tx)
            if not existing:
                raise NotFoundError("Application not found")
            target = existing["status"] if status is None else self.policy.check_transition(existing["status"], status)
            self.repository.update_application_status(
                tx, application_id, target, next_timestamp(existing["updated_at"])
            )
            updated = self.repository.get_application(application_id, tx)
        logger.info("Application %s status %s -> %s", existing["tracking_id"], existing["status"], target)
        return updated
