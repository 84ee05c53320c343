"""
Pydantic schemas for requests and typed operation results.
"""
from messenger.schemas.user import UserCreate, UserStatusUpdate, UserResponse
from messenger.schemas.relation import RelationAdd, RelationRow, RelationListResponse
from messenger.schemas.chat import (
    ChatCreate,
    ChatMemberAdd,
    ChatResponse,
    ChatSummary,
    ChatListResponse,
    ChatMembersResponse,
    ChatDeleteResponse,
)
from messenger.schemas.message import (
    MessageCreate,
    MessageUpdate,
    MessageResponse,
    MessagePage,
    MessageDeleteResponse,
)
from messenger.schemas.notification import (
    NotificationResponse,
    NotificationListResponse,
    NotificationCountResponse,
)

__all__ = [
    "UserCreate",
    "UserStatusUpdate",
    "UserResponse",
    "RelationAdd",
    "RelationRow",
    "RelationListResponse",
    "ChatCreate",
    "ChatMemberAdd",
    "ChatResponse",
    "ChatSummary",
    "ChatListResponse",
    "ChatMembersResponse",
    "ChatDeleteResponse",
    "MessageCreate",
    "MessageUpdate",
    "MessageResponse",
    "MessagePage",
    "MessageDeleteResponse",
    "NotificationResponse",
    "NotificationListResponse",
    "NotificationCountResponse",
]
