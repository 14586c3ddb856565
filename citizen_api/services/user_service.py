"""Citizen records referenced by applications and grievances."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from citizen_api.core.errors import NotFoundError
from citizen_api.core.utils import optional_text, require_text
from citizen_api.db.store import CitizenStore
from citizen_api.repositories.sql_repository import Executor, SQLRepository


@dataclass
class NewUser:
    """A person submitting for the first time; stored before the record that references them."""

    name: str
    email: Optional[str] = None
    phone: Optional[str] = None


def resolve_user_id(
    repository: SQLRepository,
    tx: Executor,
    now: datetime,
    user_id: int | None = None,
    user: NewUser | None = None,
) -> int | None:
    """
    An explicit ``user_id`` wins; otherwise ``user`` is inserted as a new row.
    Unknown ids are left to the foreign key, a duplicate e-mail to the unique
    constraint.
    """
    if user_id:
        return user_id
    if user is None:
        return None
    return repository.insert_user(
        tx,
        require_text(user.name, "name"),
        optional_text(user.email),
        optional_text(user.phone),
        now,
    )


class UserService:
    def __init__(self, store: CitizenStore) -> None:
        self.store = store
        self.repository = SQLRepository(store)

    def get_user(self, user_id: int) -> dict:
        user = self.repository.get_user(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    def list_users(self) -> list[dict]:
        return self.repository.list_users()

    def delete_user(self, user_id: int) -> None:
        """Remove the person; their applications and grievances stay, unlinked."""
        with self.store.mutation() as tx:
            if not self.repository.delete_user(tx, user_id):
                raise NotFoundError("User not found")
