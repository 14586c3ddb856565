"""Request bodies accepted by the HTTP layer."""
from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, Field

from citizen_api.services.user_service import NewUser

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"

ApplicationStatus = Literal["submitted", "in_review", "approved", "rejected"]
GrievanceStatus = Literal["open", "in_progress", "resolved", "closed"]


class UserIn(BaseModel):
    name: str = Field(min_length=2)
    email: Optional[str] = Field(default=None, pattern=EMAIL_PATTERN)
    phone: Optional[str] = None

    def to_new_user(self) -> NewUser:
        return NewUser(name=self.name, email=self.email, phone=self.phone)


class SchemeCreate(BaseModel):
    title: str = Field(min_length=2)
    description: str = Field(min_length=5)
    department: Optional[str] = None


class SchemeUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=2)
    description: Optional[str] = Field(default=None, min_length=5)
    department: Optional[str] = None


class ApplicationCreate(BaseModel):
    user: Optional[UserIn] = None
    userId: Optional[int] = Field(default=None, gt=0)
    schemeId: int = Field(gt=0)
    data: dict[str, Any]


class ApplicationUpdate(BaseModel):
    status: Optional[ApplicationStatus] = None


class GrievanceCreate(BaseModel):
    user: Optional[UserIn] = None
    userId: Optional[int] = Field(default=None, gt=0)
    subject: str = Field(min_length=3)
    description: str = Field(min_length=5)


class GrievanceUpdate(BaseModel):
    status: Optional[GrievanceStatus] = None


class FeedbackCreate(BaseModel):
    rating: int = Field(ge=1, le=5)
    comments: Optional[str] = None


class ContactCreate(BaseModel):
    name: str = Field(min_length=2)
    email: Optional[str] = Field(default=None, pattern=EMAIL_PATTERN)
    message: str = Field(min_length=5)
