"""
SQLAlchemy models for the messenger.

All models must be imported here for Alembic auto-generation to work.
"""

# Import Base first
from messenger.models.base import Base, IntegerIDMixin, CreatedAtMixin

# Import all models (order matters for relationships)
from messenger.models.relation import RelationSet, RelationMember, RelationKind
from messenger.models.user import User
from messenger.models.chat import Chat, ChatMember
from messenger.models.message import Message
from messenger.models.notification import Notification

# Export all models and enums
__all__ = [
    # Base classes
    "Base",
    "IntegerIDMixin",
    "CreatedAtMixin",
    # Users and relations
    "User",
    "RelationSet",
    "RelationMember",
    "RelationKind",
    # Chats
    "Chat",
    "ChatMember",
    # Messages
    "Message",
    # Notifications
    "Notification",
]
