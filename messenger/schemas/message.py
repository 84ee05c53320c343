"""
Pydantic schemas for message requests and responses.
"""
from datetime import datetime
from typing import Optional, List

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from messenger.utils.datetime_utils import ensure_utc, to_iso_utc


# ============================================================================
# Request Schemas
# ============================================================================

class MessageCreate(BaseModel):
    """Schema for posting a message."""

    text: str = Field(..., min_length=1, description="Message text")

    @field_validator("text")
    @classmethod
    def validate_text(cls, v: str) -> str:
        """Ensure text is not whitespace only."""
        if len(v.strip()) == 0:
            raise ValueError("Text cannot be empty or whitespace only")
        return v


class MessageUpdate(BaseModel):
    """Schema for editing a message."""

    text: str = Field(..., min_length=1, description="Replacement text")

    @field_validator("text")
    @classmethod
    def validate_text(cls, v: str) -> str:
        """Ensure text is not whitespace only."""
        if len(v.strip()) == 0:
            raise ValueError("Text cannot be empty or whitespace only")
        return v


# ============================================================================
# Response Schemas
# ============================================================================

class MessageResponse(BaseModel):
    """Stored message."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    chat_id: int
    author: str
    text: str
    timestamp: datetime
    edited_at: Optional[datetime] = None

    @field_validator("timestamp", "edited_at")
    @classmethod
    def normalize_timestamps(cls, v: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(v)

    @field_serializer("timestamp", "edited_at")
    def serialize_timestamps(self, v: Optional[datetime]) -> Optional[str]:
        return to_iso_utc(v)


class MessagePage(BaseModel):
    """
    One page of a chat's history.

    depth 0 holds the newest messages; each further depth steps one page
    back in time. Messages inside a page are in ascending (timestamp, id)
    order.
    """

    chat_id: int
    depth: int
    page_size: int
    total: int
    has_earlier: bool
    messages: List[MessageResponse]


class MessageDeleteResponse(BaseModel):
    """Result of deleting a message."""

    message_id: int
    notifications_deleted: int
