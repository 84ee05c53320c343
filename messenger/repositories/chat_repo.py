"""
Chat repository for database operations.
Handles chats, members, and related queries.
"""
from datetime import datetime
from typing import Optional, List, Tuple, Dict

from sqlalchemy import select, insert, delete, func, and_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from messenger.models.chat import Chat, ChatMember
from messenger.models.message import Message
from messenger.models.notification import Notification
from messenger.repositories.base import BaseRepository


class ChatRepository(BaseRepository[Chat]):
    """Repository for chat database operations."""

    def __init__(self, db: AsyncSession):
        super().__init__(Chat, db)

    async def get_with_members(self, chat_id: int) -> Optional[Chat]:
        """
        Get chat with its members loaded.

        Args:
            chat_id: Chat id

        Returns:
            Chat with members or None
        """
        result = await self.db.execute(
            select(Chat)
            .where(Chat.id == chat_id)
            .options(selectinload(Chat.members))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def create_with_members(
        self,
        initial_sender: str,
        member_logins: List[str]
    ) -> Chat:
        """
        Create chat with members in a single transaction.

        Args:
            initial_sender: Creator login, added as a member
            member_logins: Other member logins (excluding creator)

        Returns:
            Created chat
        """
        chat = await self.create(initial_sender=initial_sender)

        await self.db.execute(
            insert(ChatMember),
            [
                {"chat_id": chat.id, "member_login": login}
                for login in [initial_sender] + member_logins
            ]
        )
        await self.db.flush()
        return chat

    async def get_user_chat_summaries(
        self,
        login: str
    ) -> List[Tuple[Chat, Optional[datetime], int]]:
        """
        Get every chat a user belongs to, most recently active first.

        Chats without messages sort after all chats with messages; ties
        fall back to the newer chat first.

        Args:
            login: Member login

        Returns:
            List of (chat, last_message_at, member_count) tuples
        """
        last_message = (
            select(
                Message.chat_id.label("chat_id"),
                func.max(Message.timestamp).label("last_message_at")
            )
            .group_by(Message.chat_id)
            .subquery()
        )

        member_count = (
            select(
                ChatMember.chat_id.label("chat_id"),
                func.count().label("member_count")
            )
            .group_by(ChatMember.chat_id)
            .subquery()
        )

        query = (
            select(Chat, last_message.c.last_message_at, member_count.c.member_count)
            .join(ChatMember, ChatMember.chat_id == Chat.id)
            .join(member_count, member_count.c.chat_id == Chat.id)
            .outerjoin(last_message, last_message.c.chat_id == Chat.id)
            .where(ChatMember.member_login == login)
            .order_by(
                last_message.c.last_message_at.is_(None),
                last_message.c.last_message_at.desc(),
                Chat.id.desc()
            )
        )

        result = await self.db.execute(query)
        return [
            (row[0], row.last_message_at, row.member_count)
            for row in result.all()
        ]

    async def delete_cascade(self, chat_id: int) -> Dict[str, int]:
        """
        Delete a chat and everything that depends on it.

        Order: notifications for its messages, messages, memberships, chat.

        Args:
            chat_id: Chat id

        Returns:
            Dict with the number of rows removed per table
        """
        message_ids = select(Message.id).where(Message.chat_id == chat_id)

        notifications = await self.db.execute(
            delete(Notification)
            .where(Notification.message_id.in_(message_ids))
            .execution_options(synchronize_session=False)
        )
        messages = await self.db.execute(
            delete(Message)
            .where(Message.chat_id == chat_id)
            .execution_options(synchronize_session=False)
        )
        members = await self.db.execute(
            delete(ChatMember)
            .where(ChatMember.chat_id == chat_id)
            .execution_options(synchronize_session=False)
        )
        deleted = await self.delete(chat_id)

        return {
            "notifications": notifications.rowcount,
            "messages": messages.rowcount,
            "members": members.rowcount,
            "chats": int(deleted),
        }


class ChatMemberRepository(BaseRepository[ChatMember]):
    """Repository for chat membership operations."""

    def __init__(self, db: AsyncSession):
        super().__init__(ChatMember, db)

    async def is_member(self, chat_id: int, login: str) -> bool:
        """
        Check if a login is a member of a chat.

        Args:
            chat_id: Chat id
            login: Login to check

        Returns:
            True if member, False otherwise
        """
        result = await self.db.execute(
            select(func.count())
            .select_from(ChatMember)
            .where(
                and_(
                    ChatMember.chat_id == chat_id,
                    ChatMember.member_login == login
                )
            )
        )
        return (result.scalar() or 0) > 0

    async def add_member(self, chat_id: int, login: str) -> None:
        """
        Insert a membership row.

        Issued as a plain INSERT so a concurrent duplicate surfaces as an
        IntegrityError from the primary key.

        Args:
            chat_id: Chat id
            login: New member login
        """
        await self.db.execute(
            insert(ChatMember).values(chat_id=chat_id, member_login=login)
        )
        await self.db.flush()

    async def remove_member(self, chat_id: int, login: str) -> bool:
        """
        Remove a member from a chat.

        Args:
            chat_id: Chat id
            login: Member login

        Returns:
            True if removed, False if not a member
        """
        result = await self.db.execute(
            delete(ChatMember)
            .where(
                and_(
                    ChatMember.chat_id == chat_id,
                    ChatMember.member_login == login
                )
            )
            .execution_options(synchronize_session=False)
        )
        await self.db.flush()
        return result.rowcount > 0

    async def get_member_logins(self, chat_id: int) -> List[str]:
        """
        Get all member logins of a chat.

        Args:
            chat_id: Chat id

        Returns:
            Logins ordered alphabetically
        """
        result = await self.db.execute(
            select(ChatMember.member_login)
            .where(ChatMember.chat_id == chat_id)
            .order_by(ChatMember.member_login)
        )
        return list(result.scalars().all())
