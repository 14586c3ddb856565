"""Welfare scheme catalogue use cases."""

from __future__ import annotations

from typing import Optional

from citizen_api.core.errors import NotFoundError
from citizen_api.core.utils import optional_text, require_text, utcnow
from citizen_api.db.store import CitizenStore
from citizen_api.repositories.sql_repository import SQLRepository


class SchemeService:
    """List, create, edit and remove schemes."""

    def __init__(self, store: CitizenStore) -> None:
        self.store = store
        self.repository = SQLRepository(store)

    def list_schemes(self) -> list[dict]:
        return self.repository.list_schemes()

    def get_scheme(self, scheme_id: int) -> dict:
        scheme = self.repository.get_scheme(scheme_id)
        if not scheme:
            raise NotFoundError("Scheme not found")
        return scheme

    def create_scheme(self, title: str, description: str, department: Optional[str] = None) -> dict:
        title = require_text(title, "title")
        description = require_text(description, "description")
        with self.store.mutation() as tx:
            scheme_id = self.repository.insert_scheme(tx, title, description, optional_text(department), utcnow())
            return self.repository.get_scheme(scheme_id, tx)

    def update_scheme(
        self,
        scheme_id: int,
        *,
        title: Optional[str] = None,
        description: Optional[str] = None,
        department: Optional[str] = None,
    ) -> dict:
        """Fields left as None keep their stored value."""
        with self.store.mutation() as tx:
            existing = self.repository.get_scheme(scheme_id, tx)
            if not existing:
                raise NotFoundError("Scheme not found")
            merged = {
                "title": require_text(title, "title") if title is not None else existing["title"],
                "description": (
                    require_text(description, "description") if description is not None else existing["description"]
                ),
                "department": optional_text(department) if department is not None else existing["department"],
            }
            self.repository.update_scheme(tx, scheme_id, **merged)
            return self.repository.get_scheme(scheme_id, tx)

    def delete_scheme(self, scheme_id: int) -> None:
        """Applications pointing at the scheme are kept with ``scheme_id`` cleared."""
        with self.store.mutation() as tx:
            before = self.repository.count_schemes(scheme_id, tx)
            self.repository.delete_scheme(tx, scheme_id)
            after = self.repository.count_schemes(scheme_id, tx)
            if before == 0 or after == before:
                raise NotFoundError("Scheme not found")
