"""
Chat service containing business logic for chat operations.
Handles chat creation, membership and deletion.

A chat's initial sender is its only authority: they alone add or remove
members and delete the chat, and they cannot be removed while the chat
exists.
"""
import logging
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from messenger.core.database import transaction
from messenger.core.exceptions import (
    BlockedParticipantError,
    CannotRemoveOwnerError,
    DuplicateMembershipError,
    NotFoundError,
    NotInChatError,
    OwnerOnlyError,
    ValidationError,
)
from messenger.models.chat import Chat
from messenger.models.user import User
from messenger.repositories.chat_repo import ChatRepository, ChatMemberRepository
from messenger.repositories.notification_repo import NotificationRepository
from messenger.repositories.relation_repo import RelationMemberRepository
from messenger.repositories.user_repo import UserRepository
from messenger.schemas.chat import (
    ChatResponse,
    ChatSummary,
    ChatMembersResponse,
    ChatDeleteResponse,
)

logger = logging.getLogger(__name__)


class ChatService:
    """Service for chat operations with business logic."""

    def __init__(self, db: AsyncSession):
        """
        Initialize chat service.

        Args:
            db: Database session
        """
        self.db = db
        self.chat_repo = ChatRepository(db)
        self.member_repo = ChatMemberRepository(db)
        self.user_repo = UserRepository(db)
        self.relation_repo = RelationMemberRepository(db)
        self.notification_repo = NotificationRepository(db)

    async def _get_chat(self, chat_id: int) -> Chat:
        chat = await self.chat_repo.get(chat_id)
        if not chat:
            raise NotFoundError(f"Chat {chat_id} not found")
        return chat

    async def _get_owned_chat(self, chat_id: int, requester: str) -> Chat:
        chat = await self._get_chat(chat_id)
        if chat.initial_sender != requester:
            raise OwnerOnlyError(f"Only {chat.initial_sender} can manage chat {chat_id}")
        return chat

    async def _get_user(self, login: str) -> User:
        user = await self.user_repo.get_by_login(login)
        if not user:
            raise NotFoundError(f"User {login} not found")
        return user

    async def _check_not_blocked(self, owner: User, member: User) -> None:
        if await self.relation_repo.is_blocked_between(owner, member):
            raise BlockedParticipantError(
                f"{member.login} cannot join a chat with {owner.login}: one has blocked the other"
            )

    async def create_chat(self, creator: str, members: List[str]) -> ChatResponse:
        """
        Create a chat owned by the creator.

        Args:
            creator: Creator login, becomes the initial sender
            members: Member logins; the creator's own login is ignored

        Returns:
            Created chat with its member list

        Raises:
            ValidationError: If members is empty, has duplicates or names only the creator
            NotFoundError: If the creator or a member is unknown
            BlockedParticipantError: If the creator and a member block each other
        """
        if len(members) != len(set(members)):
            raise ValidationError("Member list contains duplicates")
        # The creator is always a member
        members = [login for login in members if login != creator]
        if not members:
            raise ValidationError("A chat needs at least one member besides the creator")

        async with transaction(self.db):
            owner = await self._get_user(creator)
            found = await self.user_repo.get_many_by_login(members)

            for login in members:
                member = found.get(login)
                if not member:
                    raise NotFoundError(f"User {login} not found")
                await self._check_not_blocked(owner, member)

            chat = await self.chat_repo.create_with_members(creator, members)
            chat = await self.chat_repo.get_with_members(chat.id)
            response = ChatResponse(
                id=chat.id,
                initial_sender=chat.initial_sender,
                created_at=chat.created_at,
                members=[m.member_login for m in chat.members]
            )

        logger.info(f"User {creator} created chat {response.id} with {len(members)} members")
        return response

    async def add_member(self, chat_id: int, requester: str, new_member: str) -> ChatMembersResponse:
        """
        Add a member to a chat.

        Args:
            chat_id: Chat id
            requester: Acting login, must be the initial sender
            new_member: Login to add

        Returns:
            Updated member list

        Raises:
            NotFoundError: If the chat or new member is unknown
            OwnerOnlyError: If requester is not the initial sender
            DuplicateMembershipError: If new_member is already a member
            BlockedParticipantError: If owner and new member block each other
        """
        duplicate = DuplicateMembershipError(f"{new_member} is already a member of chat {chat_id}")

        async with transaction(self.db, on_conflict=duplicate):
            chat = await self._get_owned_chat(chat_id, requester)
            member = await self._get_user(new_member)

            if await self.member_repo.is_member(chat_id, new_member):
                raise duplicate

            owner = await self._get_user(chat.initial_sender)
            await self._check_not_blocked(owner, member)

            await self.member_repo.add_member(chat_id, new_member)
            logins = await self.member_repo.get_member_logins(chat_id)

        logger.info(f"User {requester} added {new_member} to chat {chat_id}")
        return ChatMembersResponse(chat_id=chat_id, initial_sender=chat.initial_sender, members=logins)

    async def remove_member(self, chat_id: int, requester: str, member: str) -> ChatMembersResponse:
        """
        Remove a member from a chat.

        The removed member's pending notifications for this chat are dropped
        with the membership.

        Raises:
            NotFoundError: If the chat is unknown
            OwnerOnlyError: If requester is not the initial sender
            CannotRemoveOwnerError: If member is the initial sender
            NotInChatError: If member is not in the chat
        """
        async with transaction(self.db):
            chat = await self._get_owned_chat(chat_id, requester)

            if member == chat.initial_sender:
                raise CannotRemoveOwnerError("The chat owner cannot be removed; delete the chat instead")

            if not await self.member_repo.remove_member(chat_id, member):
                raise NotInChatError(f"{member} is not a member of chat {chat_id}")

            dropped = await self.notification_repo.delete_for_recipient_in_chat(chat_id, member)
            logins = await self.member_repo.get_member_logins(chat_id)

        logger.info(f"User {requester} removed {member} from chat {chat_id} ({dropped} notifications dropped)")
        return ChatMembersResponse(chat_id=chat_id, initial_sender=chat.initial_sender, members=logins)

    async def delete_chat(self, chat_id: int, requester: str) -> ChatDeleteResponse:
        """
        Delete a chat with its messages, memberships and notifications.

        Raises:
            NotFoundError: If the chat is unknown
            OwnerOnlyError: If requester is not the initial sender
        """
        async with transaction(self.db):
            await self._get_owned_chat(chat_id, requester)
            counts = await self.chat_repo.delete_cascade(chat_id)

        logger.info(
            f"User {requester} deleted chat {chat_id}: "
            f"{counts['messages']} messages, {counts['members']} members, "
            f"{counts['notifications']} notifications"
        )
        return ChatDeleteResponse(
            chat_id=chat_id,
            messages_deleted=counts["messages"],
            notifications_deleted=counts["notifications"]
        )

    async def list_chats_for(self, login: str) -> List[ChatSummary]:
        """
        List a user's chats, most recently active first.

        Chats without messages come last.

        Args:
            login: Member login

        Returns:
            Chat summaries; empty if the user is in no chat
        """
        async with transaction(self.db):
            rows = await self.chat_repo.get_user_chat_summaries(login)

        return [
            ChatSummary(
                id=chat.id,
                initial_sender=chat.initial_sender,
                created_at=chat.created_at,
                last_message_at=last_message_at,
                member_count=member_count
            )
            for chat, last_message_at, member_count in rows
        ]

    async def list_members(self, chat_id: int, requester: str) -> ChatMembersResponse:
        """
        List the members of a chat.

        Raises:
            NotFoundError: If the chat is unknown
            NotInChatError: If requester is not a member
        """
        async with transaction(self.db):
            chat = await self._get_chat(chat_id)
            logins = await self.member_repo.get_member_logins(chat_id)

        if requester not in logins:
            raise NotInChatError(f"You are not a member of chat {chat_id}")

        return ChatMembersResponse(chat_id=chat_id, initial_sender=chat.initial_sender, members=logins)
