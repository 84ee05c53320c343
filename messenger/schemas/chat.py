"""
Pydantic schemas for chat requests and responses.
"""
from datetime import datetime
from typing import Optional, List

from pydantic import BaseModel, Field, field_validator

from messenger.utils.datetime_utils import ensure_utc


# ============================================================================
# Request Schemas
# ============================================================================

class ChatCreate(BaseModel):
    """Schema for creating a chat."""

    members: List[str] = Field(
        ...,
        min_length=1,
        description="Logins to add; the creator is always added and may be omitted"
    )


class ChatMemberAdd(BaseModel):
    """Schema for adding a member to a chat."""

    login: str = Field(..., min_length=1, max_length=50, description="Login to add")


# ============================================================================
# Response Schemas
# ============================================================================

class ChatResponse(BaseModel):
    """Chat with its member list."""

    id: int
    initial_sender: str
    created_at: datetime
    members: List[str]

    @field_validator("created_at")
    @classmethod
    def normalize_created_at(cls, v: datetime) -> datetime:
        return ensure_utc(v)


class ChatSummary(BaseModel):
    """Chat entry in a user's chat list."""

    id: int
    initial_sender: str
    created_at: datetime
    last_message_at: Optional[datetime] = None
    member_count: int

    @field_validator("created_at", "last_message_at")
    @classmethod
    def normalize_timestamps(cls, v: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(v)


class ChatListResponse(BaseModel):
    """User's chats, most recently active first."""

    data: List[ChatSummary]
    total: int


class ChatMembersResponse(BaseModel):
    """Member logins of a chat."""

    chat_id: int
    initial_sender: str
    members: List[str]


class ChatDeleteResponse(BaseModel):
    """Result of deleting a chat."""

    chat_id: int
    messages_deleted: int
    notifications_deleted: int
