"""
Notification service for business logic.
Handles fan-out of new messages and consumption of pending notifications.
"""
import logging
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from messenger.core.database import transaction
from messenger.repositories.chat_repo import ChatMemberRepository
from messenger.repositories.message_repo import MessageRepository
from messenger.repositories.notification_repo import NotificationRepository
from messenger.schemas.notification import NotificationResponse

logger = logging.getLogger(__name__)


class NotificationService:
    """Service for per-user notification queues."""

    def __init__(self, db: AsyncSession):
        """Initialize notification service."""
        self.db = db
        self.notification_repo = NotificationRepository(db)
        self.member_repo = ChatMemberRepository(db)
        self.message_repo = MessageRepository(db)

    async def fanout(self, chat_id: int, message_id: int, exclude_author: str) -> int:
        """
        Queue a notification for every current member of a chat except the author.

        Runs inside the caller's transaction and never commits, so a message
        and its notifications are stored together or not at all.

        Args:
            chat_id: Chat the message was posted to
            message_id: Posted message
            exclude_author: Author login, who is not notified

        Returns:
            Number of notifications queued
        """
        members = await self.member_repo.get_member_logins(chat_id)
        recipients = [login for login in members if login != exclude_author]

        created = await self.notification_repo.create_for_recipients(message_id, recipients)
        logger.debug(f"Queued {created} notifications for message {message_id} in chat {chat_id}")
        return created

    async def read_all(self, login: str) -> List[NotificationResponse]:
        """
        Consume every pending notification of a user.

        The returned entries are removed in the same transaction, so each one
        is delivered at most once even if two reads race.

        Args:
            login: Recipient login

        Returns:
            Notifications resolved to their messages, oldest message first
        """
        async with transaction(self.db):
            message_ids = await self.notification_repo.pop_all(login)
            messages = await self.message_repo.get_many_ordered(message_ids)

            notifications = [
                NotificationResponse(
                    message_id=message.id,
                    chat_id=message.chat_id,
                    author=message.author,
                    text=message.text,
                    timestamp=message.timestamp
                )
                for message in messages
            ]

        if notifications:
            logger.info(f"User {login} read {len(notifications)} notifications")

        return notifications

    async def pending_count(self, login: str) -> int:
        """
        Count a user's pending notifications without consuming them.

        Args:
            login: Recipient login

        Returns:
            Number of pending notifications
        """
        async with transaction(self.db):
            return await self.notification_repo.count(recipient_login=login)
