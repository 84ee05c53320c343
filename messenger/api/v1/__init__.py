"""
API v1 router exports.
Provides API endpoint routers.
"""
from messenger.api.v1 import users, relationships, chats, messages, notifications

__all__ = [
    "users",
    "relationships",
    "chats",
    "messages",
    "notifications",
]
