"""
Pydantic schemas for user requests and responses.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from messenger.config import settings
from messenger.utils.datetime_utils import ensure_utc


class UserCreate(BaseModel):
    """Schema for registering a user."""

    login: str = Field(..., min_length=1, max_length=50, description="Unique login")
    password: str = Field(..., min_length=1, max_length=255, description="Password")
    phone: str = Field(..., min_length=1, max_length=50, description="Phone number")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"login": "alice", "password": "secret", "phone": "555-0100"}
        }
    )


class UserStatusUpdate(BaseModel):
    """Schema for setting or clearing the status text."""

    status: Optional[str] = Field(
        None,
        max_length=settings.status_max_length,
        description="New status, null clears it"
    )


class UserResponse(BaseModel):
    """Public user profile."""

    model_config = ConfigDict(from_attributes=True)

    login: str
    phone: str
    status: Optional[str] = None
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def normalize_created_at(cls, v: datetime) -> datetime:
        return ensure_utc(v)
