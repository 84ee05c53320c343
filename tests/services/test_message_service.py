"""
Unit tests for MessageService.
Tests posting, author-only edits and deletes, and history paging.
"""
import pytest
from sqlalchemy.exc import OperationalError

from messenger.config import settings
from messenger.core.exceptions import (
    NotFoundError,
    NotInChatError,
    OwnerMismatchError,
    StoreError,
    ValidationError,
)
from messenger.services.message_service import MessageService


class TestPostMessage:
    """Test posting messages."""

    async def test_post_message(self, db_session, group_chat, bob):
        """Test a member can post."""
        message = await MessageService(db_session).post_message(group_chat, bob, "hi all")

        assert message.chat_id == group_chat
        assert message.author == bob
        assert message.text == "hi all"
        assert message.timestamp.tzinfo is not None
        assert message.edited_at is None

    async def test_non_member_cannot_post(self, db_session, group_chat, dave):
        """Test an outsider cannot post."""
        with pytest.raises(NotInChatError):
            await MessageService(db_session).post_message(group_chat, dave, "let me in")

    async def test_post_to_unknown_chat_fails(self, db_session, alice):
        """Test posting to a missing chat is treated as not being a member."""
        with pytest.raises(NotInChatError):
            await MessageService(db_session).post_message(9999, alice, "hello?")

    async def test_failed_fanout_leaves_no_message(self, db_session, group_chat, alice, bob, mocker):
        """Test a post whose notification insert fails stores nothing."""
        service = MessageService(db_session)
        mocker.patch.object(
            service.notification_service.notification_repo,
            "create_for_recipients",
            mocker.AsyncMock(side_effect=OperationalError("INSERT", {}, Exception("database is locked")))
        )

        with pytest.raises(StoreError):
            await service.post_message(group_chat, alice, "lost")

        page = await MessageService(db_session).load_page(group_chat, 0)
        assert page.total == 0
        assert page.messages == []

    @pytest.mark.parametrize("text", ["", "   \n"])
    async def test_post_blank_text_fails(self, db_session, group_chat, alice, text):
        """Test blank messages are rejected."""
        with pytest.raises(ValidationError):
            await MessageService(db_session).post_message(group_chat, alice, text)

    async def test_post_too_long_text_fails(self, db_session, group_chat, alice):
        """Test oversized messages are rejected."""
        text = "x" * (settings.max_message_length + 1)

        with pytest.raises(ValidationError):
            await MessageService(db_session).post_message(group_chat, alice, text)


class TestEditAndDelete:
    """Test author-only edits and deletes."""

    async def test_author_edits_message(self, db_session, group_chat, bob):
        """Test editing keeps id and timestamp and sets edited_at."""
        service = MessageService(db_session)
        original = await service.post_message(group_chat, bob, "helo")

        edited = await service.edit_message(original.id, bob, "hello")

        assert edited.id == original.id
        assert edited.text == "hello"
        assert edited.timestamp == original.timestamp
        assert edited.edited_at is not None

        page = await service.load_page(group_chat, 0)
        assert [m.text for m in page.messages] == ["hello"]

    async def test_other_user_cannot_edit(self, db_session, group_chat, alice, bob):
        """Test only the author may edit, even the chat owner cannot."""
        service = MessageService(db_session)
        message = await service.post_message(group_chat, bob, "mine")

        with pytest.raises(OwnerMismatchError):
            await service.edit_message(message.id, alice, "yours now")

    async def test_edit_unknown_message_fails(self, db_session, alice):
        """Test editing a missing message fails."""
        with pytest.raises(NotFoundError):
            await MessageService(db_session).edit_message(9999, alice, "text")

    async def test_edit_with_blank_text_fails(self, db_session, group_chat, bob):
        """Test an edit cannot blank a message."""
        service = MessageService(db_session)
        message = await service.post_message(group_chat, bob, "keep me")

        with pytest.raises(ValidationError):
            await service.edit_message(message.id, bob, "  ")

    async def test_author_deletes_message(self, db_session, group_chat, alice):
        """Test deleting removes the message from history."""
        service = MessageService(db_session)
        keep = await service.post_message(group_chat, alice, "keep")
        drop = await service.post_message(group_chat, alice, "drop")

        result = await service.delete_message(drop.id, alice)

        assert result.message_id == drop.id
        assert result.notifications_deleted == 2
        page = await service.load_page(group_chat, 0)
        assert [m.id for m in page.messages] == [keep.id]
        assert page.total == 1

    async def test_other_user_cannot_delete(self, db_session, group_chat, alice, bob):
        """Test only the author may delete."""
        service = MessageService(db_session)
        message = await service.post_message(group_chat, alice, "owner's words")

        with pytest.raises(OwnerMismatchError):
            await service.delete_message(message.id, bob)

    async def test_delete_unknown_message_fails(self, db_session, alice):
        """Test deleting a missing message fails."""
        with pytest.raises(NotFoundError):
            await MessageService(db_session).delete_message(9999, alice)


class TestLoadPage:
    """Test history paging."""

    async def test_pages_walk_back_from_newest(self, db_session, group_chat, alice):
        """Test 25 messages split into pages of 10, 10 and 5 newest first."""
        assert settings.message_page_size == 10
        service = MessageService(db_session)
        posted = [
            (await service.post_message(group_chat, alice, f"message {i}")).id
            for i in range(25)
        ]

        pages = [await service.load_page(group_chat, depth) for depth in range(4)]

        assert [len(p.messages) for p in pages] == [10, 10, 5, 0]
        assert [m.id for m in pages[0].messages] == posted[15:25]
        assert [m.id for m in pages[1].messages] == posted[5:15]
        assert [m.id for m in pages[2].messages] == posted[0:5]
        assert [p.has_earlier for p in pages] == [True, True, False, False]
        assert all(p.total == 25 for p in pages)

        # Concatenating pages oldest first rebuilds the whole history
        history = [m.id for p in reversed(pages) for m in p.messages]
        assert history == posted

    async def test_page_messages_are_ascending(self, db_session, group_chat, alice, bob):
        """Test messages inside a page are oldest first."""
        service = MessageService(db_session)
        for i in range(3):
            await service.post_message(group_chat, alice if i % 2 == 0 else bob, f"m{i}")

        page = await service.load_page(group_chat, 0)

        keys = [(m.timestamp, m.id) for m in page.messages]
        assert keys == sorted(keys)
        assert [m.text for m in page.messages] == ["m0", "m1", "m2"]

    async def test_empty_chat_has_empty_first_page(self, db_session, group_chat):
        """Test a chat without messages returns an empty page."""
        page = await MessageService(db_session).load_page(group_chat, 0)

        assert page.messages == []
        assert page.total == 0
        assert page.has_earlier is False

    async def test_huge_depth_returns_empty_page(self, db_session, group_chat, alice):
        """Test a depth far beyond the history is an empty page, not an error."""
        service = MessageService(db_session)
        await service.post_message(group_chat, alice, "only one")

        page = await service.load_page(group_chat, 10**18)

        assert page.messages == []
        assert page.total == 1
        assert page.has_earlier is False

    async def test_negative_depth_fails(self, db_session, group_chat):
        """Test negative depth is rejected."""
        with pytest.raises(ValidationError):
            await MessageService(db_session).load_page(group_chat, -1)

    async def test_unknown_chat_fails(self, db_session):
        """Test paging a missing chat fails."""
        with pytest.raises(NotFoundError):
            await MessageService(db_session).load_page(9999, 0)

    async def test_reader_must_be_member(self, db_session, group_chat, bob, dave):
        """Test a reader outside the chat cannot page its history."""
        service = MessageService(db_session)

        page = await service.load_page(group_chat, 0, reader=bob)
        assert page.chat_id == group_chat

        with pytest.raises(NotInChatError):
            await service.load_page(group_chat, 0, reader=dave)
