"""
Repository layer exports.
Provides database access layer for the application.
"""
from messenger.repositories.base import BaseRepository
from messenger.repositories.user_repo import UserRepository
from messenger.repositories.relation_repo import RelationMemberRepository
from messenger.repositories.chat_repo import ChatRepository, ChatMemberRepository
from messenger.repositories.message_repo import MessageRepository
from messenger.repositories.notification_repo import NotificationRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "RelationMemberRepository",
    "ChatRepository",
    "ChatMemberRepository",
    "MessageRepository",
    "NotificationRepository",
]
