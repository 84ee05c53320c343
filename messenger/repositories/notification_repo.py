"""
Notification repository for database operations.
Handles the per-recipient pending notification queue.
"""
from typing import List

from sqlalchemy import select, insert, delete, and_
from sqlalchemy.ext.asyncio import AsyncSession

from messenger.models.message import Message
from messenger.models.notification import Notification
from messenger.repositories.base import BaseRepository


class NotificationRepository(BaseRepository[Notification]):
    """Repository for notification database operations."""

    def __init__(self, db: AsyncSession):
        super().__init__(Notification, db)

    async def create_for_recipients(self, message_id: int, recipients: List[str]) -> int:
        """
        Queue one notification per recipient for a message.

        Args:
            message_id: Message id
            recipients: Recipient logins

        Returns:
            Number of notifications created
        """
        if not recipients:
            return 0

        await self.db.execute(
            insert(Notification),
            [
                {"recipient_login": login, "message_id": message_id}
                for login in recipients
            ]
        )
        await self.db.flush()
        return len(recipients)

    async def pop_all(self, recipient_login: str) -> List[int]:
        """
        Remove every pending notification of a recipient.

        Uses DELETE ... RETURNING so the rows a caller gets back are exactly
        the rows it deleted; a concurrent reader blocks on the same rows and
        finds them gone.

        Args:
            recipient_login: Recipient login

        Returns:
            Message ids of the removed notifications
        """
        result = await self.db.execute(
            delete(Notification)
            .where(Notification.recipient_login == recipient_login)
            .returning(Notification.message_id)
            .execution_options(synchronize_session=False)
        )
        message_ids = list(result.scalars().all())
        await self.db.flush()
        return message_ids

    async def delete_for_message(self, message_id: int) -> int:
        """
        Delete all notifications referencing a message.

        Args:
            message_id: Message id

        Returns:
            Number of notifications deleted
        """
        result = await self.db.execute(
            delete(Notification)
            .where(Notification.message_id == message_id)
            .execution_options(synchronize_session=False)
        )
        await self.db.flush()
        return result.rowcount

    async def delete_for_recipient_in_chat(self, chat_id: int, recipient_login: str) -> int:
        """
        Delete a recipient's pending notifications for one chat's messages.

        Args:
            chat_id: Chat id
            recipient_login: Recipient login

        Returns:
            Number of notifications deleted
        """
        chat_message_ids = select(Message.id).where(Message.chat_id == chat_id)

        result = await self.db.execute(
            delete(Notification)
            .where(
                and_(
                    Notification.recipient_login == recipient_login,
                    Notification.message_id.in_(chat_message_ids)
                )
            )
            .execution_options(synchronize_session=False)
        )
        await self.db.flush()
        return result.rowcount
