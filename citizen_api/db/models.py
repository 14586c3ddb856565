"""SQLAlchemy models for the citizen services store."""
from __future__ import annotations

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    JSON,
    String,
    Text,
    func,
)
from sqlalchemy.orm import declarative_base

from citizen_api.domain.statuses import APPLICATION_STATUSES, GRIEVANCE_STATUSES

Base = declarative_base()


def _status_check(name: str, values: tuple[str, ...]) -> CheckConstraint:
    allowed = ", ".join(f"'{value}'" for value in values)
    return CheckConstraint(f"status IN ({allowed})", name=name)


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    email = Column(String(255), unique=True, nullable=True)
    phone = Column(String(32), nullable=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)


class Scheme(Base):
    __tablename__ = "schemes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    department = Column(String(128), nullable=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)


class Application(Base):
    __tablename__ = "applications"
    __table_args__ = (_status_check("ck_applications_status", APPLICATION_STATUSES),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    tracking_id = Column(String(64), unique=True, nullable=False)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    scheme_id = Column(Integer, ForeignKey("schemes.id", ondelete="SET NULL"), nullable=True)
    data = Column(JSON, nullable=False, default=dict)
    status = Column(String(32), nullable=False, server_default="submitted")
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), nullable=False)


class Grievance(Base):
    __tablename__ = "grievances"
    __table_args__ = (_status_check("ck_grievances_status", GRIEVANCE_STATUSES),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    subject = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    status = Column(String(32), nullable=False, server_default="open")
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), nullable=False)


class GrievanceFeedback(Base):
    __tablename__ = "grievance_feedback"
    __table_args__ = (CheckConstraint("rating BETWEEN 1 AND 5", name="ck_grievance_feedback_rating"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    grievance_id = Column(Integer, ForeignKey("grievances.id", ondelete="CASCADE"), nullable=False)
    rating = Column(Integer, nullable=False)
    comments = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)


class ContactMessage(Base):
    __tablename__ = "contact_messages"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    email = Column(String(255), nullable=True)
    message = Column(Text, nullable=False)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
