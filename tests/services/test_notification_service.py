"""
Unit tests for NotificationService.
Tests fan-out on post and consume-once reads.
"""
from messenger.services.message_service import MessageService
from messenger.services.notification_service import NotificationService


class TestNotificationService:
    """Test notification queues."""

    async def test_post_notifies_every_member_but_author(self, db_session, group_chat, alice, bob, carol):
        """Test each other member gets exactly one notification."""
        await MessageService(db_session).post_message(group_chat, alice, "standup in 5")
        service = NotificationService(db_session)

        assert await service.pending_count(alice) == 0
        assert await service.pending_count(bob) == 1
        assert await service.pending_count(carol) == 1

    async def test_read_all_consumes_notifications(self, db_session, group_chat, alice, bob):
        """Test a read returns pending notifications once, oldest first."""
        messages = MessageService(db_session)
        first = await messages.post_message(group_chat, alice, "first")
        second = await messages.post_message(group_chat, alice, "second")
        service = NotificationService(db_session)

        notifications = await service.read_all(bob)

        assert [n.message_id for n in notifications] == [first.id, second.id]
        assert notifications[0].chat_id == group_chat
        assert notifications[0].author == alice
        assert notifications[0].text == "first"
        assert notifications[0].timestamp.tzinfo is not None

        assert await service.read_all(bob) == []
        assert await service.pending_count(bob) == 0

    async def test_read_is_per_recipient(self, db_session, group_chat, alice, bob, carol):
        """Test one member reading leaves the others' queues intact."""
        await MessageService(db_session).post_message(group_chat, alice, "ping")
        service = NotificationService(db_session)

        await service.read_all(bob)

        assert await service.pending_count(carol) == 1

    async def test_author_gets_nothing_for_own_messages(self, db_session, group_chat, alice):
        """Test authors are not notified of their own posts."""
        await MessageService(db_session).post_message(group_chat, alice, "talking to myself")

        assert await NotificationService(db_session).read_all(alice) == []

    async def test_deleted_message_is_not_delivered(self, db_session, group_chat, alice, bob):
        """Test deleting a message withdraws its pending notifications."""
        messages = MessageService(db_session)
        kept = await messages.post_message(group_chat, alice, "kept")
        withdrawn = await messages.post_message(group_chat, alice, "oops")
        await messages.delete_message(withdrawn.id, alice)

        notifications = await NotificationService(db_session).read_all(bob)

        assert [n.message_id for n in notifications] == [kept.id]

    async def test_edited_message_is_delivered_with_new_text(self, db_session, group_chat, alice, bob):
        """Test a notification resolves to the message's current text."""
        messages = MessageService(db_session)
        message = await messages.post_message(group_chat, alice, "draft")
        await messages.edit_message(message.id, alice, "final")

        notifications = await NotificationService(db_session).read_all(bob)

        assert [n.text for n in notifications] == ["final"]

    async def test_member_added_later_gets_only_later_messages(
        self, db_session, group_chat, alice, dave
    ):
        """Test fan-out targets members at post time."""
        from messenger.services.chat_service import ChatService

        messages = MessageService(db_session)
        await messages.post_message(group_chat, alice, "before")
        await ChatService(db_session).add_member(group_chat, alice, dave)
        after = await messages.post_message(group_chat, alice, "after")

        notifications = await NotificationService(db_session).read_all(dave)

        assert [n.message_id for n in notifications] == [after.id]

    async def test_user_with_no_notifications(self, db_session, alice):
        """Test an empty queue reads as empty."""
        service = NotificationService(db_session)

        assert await service.read_all(alice) == []
        assert await service.pending_count(alice) == 0
