"""
Service layer exports.
Provides business logic for the application.
"""
from messenger.services.user_service import UserService
from messenger.services.relationship_service import RelationshipService
from messenger.services.chat_service import ChatService
from messenger.services.message_service import MessageService
from messenger.services.notification_service import NotificationService

__all__ = [
    "UserService",
    "RelationshipService",
    "ChatService",
    "MessageService",
    "NotificationService",
]
