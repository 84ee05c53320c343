"""
Message service containing business logic for message operations.
Handles posting, editing, deleting and paging through chat history.

Within a chat, messages are totally ordered by (timestamp, id). History is
read in fixed-size pages addressed by depth: depth 0 is the newest page and
every increment steps one page further back.
"""
import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from messenger.config import settings
from messenger.core.database import transaction
from messenger.core.exceptions import (
    NotFoundError,
    NotInChatError,
    OwnerMismatchError,
    ValidationError,
)
from messenger.models.message import Message
from messenger.repositories.chat_repo import ChatRepository, ChatMemberRepository
from messenger.repositories.message_repo import MessageRepository
from messenger.repositories.notification_repo import NotificationRepository
from messenger.schemas.message import MessageResponse, MessagePage, MessageDeleteResponse
from messenger.services.notification_service import NotificationService
from messenger.utils.datetime_utils import utc_now

logger = logging.getLogger(__name__)


class MessageService:
    """Service for message operations with business logic."""

    def __init__(self, db: AsyncSession):
        """
        Initialize message service.

        Args:
            db: Database session
        """
        self.db = db
        self.message_repo = MessageRepository(db)
        self.chat_repo = ChatRepository(db)
        self.member_repo = ChatMemberRepository(db)
        self.notification_repo = NotificationRepository(db)
        self.notification_service = NotificationService(db)

    @staticmethod
    def _validate_text(text: str) -> str:
        if text is None or not text.strip():
            raise ValidationError("Message text cannot be empty")
        if len(text) > settings.max_message_length:
            raise ValidationError(f"Message text exceeds {settings.max_message_length} characters")
        return text

    async def _get_authored_message(self, message_id: int, requester: str) -> Message:
        message = await self.message_repo.get(message_id)
        if not message:
            raise NotFoundError(f"Message {message_id} not found")
        if message.author != requester:
            raise OwnerMismatchError("You can only modify your own messages")
        return message

    async def post_message(self, chat_id: int, author: str, text: str) -> MessageResponse:
        """
        Post a message and notify every other member.

        Args:
            chat_id: Chat id
            author: Author login, must be a member
            text: Message text

        Returns:
            Stored message

        Raises:
            ValidationError: If text is empty or too long
            NotInChatError: If author is not a member (or the chat is gone)
        """
        text = self._validate_text(text)

        async with transaction(self.db):
            if not await self.member_repo.is_member(chat_id, author):
                raise NotInChatError(f"You are not a member of chat {chat_id}")

            message = await self.message_repo.create(
                chat_id=chat_id,
                author=author,
                text=text,
                timestamp=utc_now()
            )
            notified = await self.notification_service.fanout(
                chat_id,
                message.id,
                exclude_author=author
            )
            response = MessageResponse.model_validate(message)

        logger.info(f"New message saved: {response.id} from {author} to chat {chat_id} ({notified} notified)")
        return response

    async def edit_message(self, message_id: int, requester: str, new_text: str) -> MessageResponse:
        """
        Replace a message's text in place; id and timestamp are unchanged.

        Raises:
            NotFoundError: If the message does not exist
            OwnerMismatchError: If requester is not the author
            ValidationError: If the new text is empty or too long
        """
        async with transaction(self.db):
            await self._get_authored_message(message_id, requester)
            new_text = self._validate_text(new_text)

            message = await self.message_repo.update(
                message_id,
                text=new_text,
                edited_at=utc_now()
            )
            response = MessageResponse.model_validate(message)

        logger.info(f"Message {message_id} edited by {requester}")
        return response

    async def delete_message(self, message_id: int, requester: str) -> MessageDeleteResponse:
        """
        Delete a message and every notification referencing it.

        Raises:
            NotFoundError: If the message does not exist
            OwnerMismatchError: If requester is not the author
        """
        async with transaction(self.db):
            await self._get_authored_message(message_id, requester)
            dropped = await self.notification_repo.delete_for_message(message_id)
            await self.message_repo.delete(message_id)

        logger.info(f"Message {message_id} deleted by {requester} ({dropped} notifications dropped)")
        return MessageDeleteResponse(message_id=message_id, notifications_deleted=dropped)

    async def load_page(
        self,
        chat_id: int,
        depth: int,
        reader: Optional[str] = None
    ) -> MessagePage:
        """
        Load one page of a chat's history.

        Page `depth` skips the newest depth * page_size messages and holds up
        to page_size messages before them, in ascending order. Walking depth
        0, 1, 2, ... covers the whole history with no gaps and no overlap; a
        depth past the oldest message gives an empty page.

        Args:
            chat_id: Chat id
            depth: Zero-based page index counted back from the newest page
            reader: If given, must be a member of the chat

        Returns:
            The page, with the chat's total message count

        Raises:
            ValidationError: If depth is negative
            NotFoundError: If the chat does not exist
            NotInChatError: If reader is given and not a member
        """
        if depth < 0:
            raise ValidationError("Page depth cannot be negative")

        page_size = settings.message_page_size
        offset = depth * page_size

        async with transaction(self.db):
            if not await self.chat_repo.get(chat_id):
                raise NotFoundError(f"Chat {chat_id} not found")
            if reader is not None and not await self.member_repo.is_member(chat_id, reader):
                raise NotInChatError(f"You are not a member of chat {chat_id}")

            total = await self.message_repo.count(chat_id=chat_id)
            items = []
            # Depth past the oldest message never reaches the window query
            if offset < total:
                messages = await self.message_repo.get_page_from_newest(chat_id, page_size, offset)
                items = [MessageResponse.model_validate(m) for m in messages]

        return MessagePage(
            chat_id=chat_id,
            depth=depth,
            page_size=page_size,
            total=total,
            has_earlier=offset + len(items) < total,
            messages=items
        )
