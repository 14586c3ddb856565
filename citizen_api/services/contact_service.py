"""Contact form messages."""
from __future__ import annotations

from typing import Optional

from citizen_api.core.utils import optional_text, require_text, utcnow
from citizen_api.db.store import CitizenStore
from citizen_api.repositories.sql_repository import SQLRepository


class ContactService:
    def __init__(self, store: CitizenStore) -> None:
        self.store = store
        self.repository = SQLRepository(store)

    def create_message(self, name: str, message: str, email: Optional[str] = None) -> dict:
        name = require_text(name, "name")
        message = require_text(message, "message")
        with self.store.mutation() as tx:
            message_id = self.repository.insert_contact_message(tx, name, optional_text(email), message, utcnow())
            return self.repository.get_contact_message(message_id, tx)

    def list_messages(self) -> list[dict]:
        return self.repository.list_contact_messages()
