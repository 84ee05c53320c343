"""
Message repository for database operations.
Handles message storage and history pages.
"""
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from messenger.models.message import Message
from messenger.repositories.base import BaseRepository


class MessageRepository(BaseRepository[Message]):
    """Repository for message database operations."""

    def __init__(self, db: AsyncSession):
        super().__init__(Message, db)

    async def get_page_from_newest(
        self,
        chat_id: int,
        limit: int,
        offset: int
    ) -> List[Message]:
        """
        Get one window of a chat's history counted back from the newest message.

        The window skips the newest `offset` messages and takes the next
        `limit`. It is returned in ascending (timestamp, id) order so pages
        read top to bottom like the chat itself.

        Args:
            chat_id: Chat id
            limit: Window size
            offset: Number of newest messages to skip

        Returns:
            Messages in ascending (timestamp, id) order
        """
        result = await self.db.execute(
            select(Message)
            .where(Message.chat_id == chat_id)
            .order_by(Message.timestamp.desc(), Message.id.desc())
            .offset(offset)
            .limit(limit)
        )
        messages = list(result.scalars().all())
        messages.reverse()
        return messages

    async def get_many_ordered(self, message_ids: List[int]) -> List[Message]:
        """
        Get messages by id in (timestamp, id) order.

        Args:
            message_ids: Message ids

        Returns:
            Messages that still exist
        """
        if not message_ids:
            return []

        result = await self.db.execute(
            select(Message)
            .where(Message.id.in_(message_ids))
            .order_by(Message.timestamp.asc(), Message.id.asc())
        )
        return list(result.scalars().all())
