"""High-level data access helpers over the citizen store."""
from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Protocol

from sqlalchemy import Text, cast, delete, desc, func, insert, select, update
from sqlalchemy.engine import Row

from citizen_api.db.engine import ExecutionResult
from citizen_api.db.models import (
    Application,
    ContactMessage,
    Grievance,
    GrievanceFeedback,
    Scheme,
    User,
)
from citizen_api.db.store import CitizenStore

UNCATEGORIZED_SECTOR = "Uncategorized"


class Executor(Protocol):
    def execute(self, statement, params=None) -> ExecutionResult: ...

    def query(self, statement, params=None) -> list[Row]: ...


def _to_dict(row: Row | None) -> Optional[dict]:
    return dict(row._mapping) if row is not None else None


def _first(rows: list[Row]) -> Optional[dict]:
    return _to_dict(rows[0]) if rows else None


class SQLRepository:
    """
    CRUD helpers. Reads run against the store directly; writes take the
    transaction handle from ``store.mutation()`` so a service can group
    several statements into one committed, persisted unit.
    """

    def __init__(self, store: CitizenStore) -> None:
        self.store = store

    def _db(self, tx: Executor | None) -> Executor:
        return tx if tx is not None else self.store

    # -------------------------- users --------------------------
    def get_user(self, user_id: int, tx: Executor | None = None) -> Optional[dict]:
        return _first(self._db(tx).query(select(User).where(User.id == user_id)))

    def list_users(self) -> list[dict]:
        return [_to_dict(r) for r in self.store.query(select(User).order_by(desc(User.id)))]

    def insert_user(self, tx: Executor, name: str, email: str | None, phone: str | None, now: datetime) -> int:
        result = tx.execute(insert(User).values(name=name, email=email, phone=phone, created_at=now))
        return int(result.lastrowid)

    def delete_user(self, tx: Executor, user_id: int) -> int:
        return tx.execute(delete(User).where(User.id == user_id)).rowcount

    def user_ids_named(self, tx: Executor, name: str) -> list[int]:
        return [int(r[0]) for r in tx.query(select(User.id).where(User.name == name))]

    def delete_users_named(self, tx: Executor, name: str) -> int:
        return tx.execute(delete(User).where(User.name == name)).rowcount

    # -------------------------- schemes --------------------------
    def get_scheme(self, scheme_id: int, tx: Executor | None = None) -> Optional[dict]:
        return _first(self._db(tx).query(select(Scheme).where(Scheme.id == scheme_id)))

    def list_schemes(self) -> list[dict]:
        return [_to_dict(r) for r in self.store.query(select(Scheme).order_by(desc(Scheme.id)))]

    def count_schemes(self, scheme_id: int, tx: Executor | None = None) -> int:
        stmt = select(func.count()).select_from(Scheme).where(Scheme.id == scheme_id)
        return int(self._db(tx).query(stmt)[0][0])

    def insert_scheme(
        self, tx: Executor, title: str, description: str, department: str | None, now: datetime
    ) -> int:
        result = tx.execute(
            insert(Scheme).values(title=title, description=description, department=department, created_at=now)
        )
        return int(result.lastrowid)

    def update_scheme(self, tx: Executor, scheme_id: int, **values: Any) -> int:
        return tx.execute(update(Scheme).where(Scheme.id == scheme_id).values(**values)).rowcount

    def delete_scheme(self, tx: Executor, scheme_id: int) -> int:
        return tx.execute(delete(Scheme).where(Scheme.id == scheme_id)).rowcount

    def first_scheme_id(self, tx: Executor | None = None) -> Optional[int]:
        rows = self._db(tx).query(select(Scheme.id).order_by(Scheme.id).limit(1))
        return int(rows[0][0]) if rows else None

    # -------------------------- applications --------------------------
    def get_application(self, application_id: int, tx: Executor | None = None) -> Optional[dict]:
        stmt = select(Application).where(Application.id == application_id)
        return _first(self._db(tx).query(stmt))

    def get_application_by_tracking_id(self, tracking_id: str) -> Optional[dict]:
        stmt = select(Application).where(Application.tracking_id == tracking_id)
        return _first(self.store.query(stmt))

    def list_applications(self) -> list[dict]:
        stmt = select(Application).order_by(desc(Application.id))
        return [_to_dict(r) for r in self.store.query(stmt)]

    def count_applications(self) -> int:
        return int(self.store.query(select(func.count()).select_from(Application))[0][0])

    def insert_application(
        self,
        tx: Executor,
        *,
        tracking_id: str,
        user_id: int | None,
        scheme_id: int | None,
        data: dict,
        status: str,
        now: datetime,
    ) -> int:
        result = tx.execute(
            insert(Application).values(
                tracking_id=tracking_id,
                user_id=user_id,
                scheme_id=scheme_id,
                data=data,
                status=status,
                created_at=now,
                updated_at=now,
            )
        )
        return int(result.lastrowid)

    def update_application_status(self, tx: Executor, application_id: int, status: str, now: datetime) -> int:
        stmt = (
            update(Application)
            .where(Application.id == application_id)
            .values(status=status, updated_at=now)
        )
        return tx.execute(stmt).rowcount

    def delete_applications_mentioning(self, tx: Executor, needle: str) -> int:
        # data is stored as JSON text, so a LIKE over the column matches any value
        stmt = delete(Application).where(cast(Application.data, Text).like(f"%{needle}%"))
        return tx.execute(stmt).rowcount

    def detach_user_applications(self, tx: Executor, user_id: int) -> int:
        stmt = update(Application).where(Application.user_id == user_id).values(user_id=None)
        return tx.execute(stmt).rowcount

    # -------------------------- grievances --------------------------
    def get_grievance(self, grievance_id: int, tx: Executor | None = None) -> Optional[dict]:
        return _first(self._db(tx).query(select(Grievance).where(Grievance.id == grievance_id)))

    def list_grievances(self) -> list[dict]:
        return [_to_dict(r) for r in self.store.query(select(Grievance).order_by(desc(Grievance.id)))]

    def insert_grievance(
        self, tx: Executor, *, user_id: int | None, subject: str, description: str, status: str, now: datetime
    ) -> int:
        result = tx.execute(
            insert(Grievance).values(
                user_id=user_id,
                subject=subject,
                description=description,
                status=status,
                created_at=now,
                updated_at=now,
            )
        )
        return int(result.lastrowid)

    def update_grievance_status(self, tx: Executor, grievance_id: int, status: str, now: datetime) -> int:
        stmt = update(Grievance).where(Grievance.id == grievance_id).values(status=status, updated_at=now)
        return tx.execute(stmt).rowcount

    def delete_grievance(self, tx: Executor, grievance_id: int) -> int:
        return tx.execute(delete(Grievance).where(Grievance.id == grievance_id)).rowcount

    # -------------------------- grievance feedback --------------------------
    def get_feedback(self, feedback_id: int, tx: Executor | None = None) -> Optional[dict]:
        stmt = select(GrievanceFeedback).where(GrievanceFeedback.id == feedback_id)
        return _first(self._db(tx).query(stmt))

    def list_feedback(self, grievance_id: int) -> list[dict]:
        stmt = (
            select(GrievanceFeedback)
            .where(GrievanceFeedback.grievance_id == grievance_id)
            .order_by(desc(GrievanceFeedback.id))
        )
        return [_to_dict(r) for r in self.store.query(stmt)]

    def insert_feedback(
        self, tx: Executor, grievance_id: int, rating: int, comments: str | None, now: datetime
    ) -> int:
        result = tx.execute(
            insert(GrievanceFeedback).values(
                grievance_id=grievance_id, rating=rating, comments=comments, created_at=now
            )
        )
        return int(result.lastrowid)

    # -------------------------- contact messages --------------------------
    def get_contact_message(self, message_id: int, tx: Executor | None = None) -> Optional[dict]:
        stmt = select(ContactMessage).where(ContactMessage.id == message_id)
        return _first(self._db(tx).query(stmt))

    def list_contact_messages(self) -> list[dict]:
        stmt = select(ContactMessage).order_by(desc(ContactMessage.id))
        return [_to_dict(r) for r in self.store.query(stmt)]

    def insert_contact_message(
        self, tx: Executor, name: str, email: str | None, message: str, now: datetime
    ) -> int:
        result = tx.execute(
            insert(ContactMessage).values(name=name, email=email, message=message, created_at=now)
        )
        return int(result.lastrowid)

    # -------------------------- reports --------------------------
    def benefit_distribution(self) -> list[dict]:
        sector = func.coalesce(Scheme.department, UNCATEGORIZED_SECTOR).label("sector")
        count = func.count(Application.id).label("count")
        stmt = (
            select(sector, count)
            .select_from(Scheme)
            .outerjoin(Application, Application.scheme_id == Scheme.id)
            .group_by(sector)
            .order_by(desc(count), sector.asc())
        )
        return [{"sector": str(name), "count": int(total)} for name, total in self.store.query(stmt)]
