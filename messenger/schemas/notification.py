"""
Pydantic schemas for notification responses.
"""
from datetime import datetime
from typing import List

from pydantic import BaseModel, field_serializer, field_validator

from messenger.utils.datetime_utils import ensure_utc, to_iso_utc


class NotificationResponse(BaseModel):
    """A consumed notification resolved to its message."""

    message_id: int
    chat_id: int
    author: str
    text: str
    timestamp: datetime

    @field_validator("timestamp")
    @classmethod
    def normalize_timestamp(cls, v: datetime) -> datetime:
        return ensure_utc(v)

    @field_serializer("timestamp")
    def serialize_timestamp(self, v: datetime) -> str:
        return to_iso_utc(v)


class NotificationListResponse(BaseModel):
    """Notifications returned by one read; they are no longer pending."""

    data: List[NotificationResponse]
    total: int


class NotificationCountResponse(BaseModel):
    """Pending notification count."""

    pending: int
