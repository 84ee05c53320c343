"""
Unit tests for RelationshipService.
Tests contact and block list rules, including the confirmation-gated move
between the two lists.
"""
import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import OperationalError

from messenger.core.exceptions import (
    AlreadyRelatedError,
    ConfirmationRequiredError,
    NotFoundError,
    NotInListError,
    SelfReferenceError,
    StoreError,
)
from messenger.services.relationship_service import RelationshipService
from messenger.services.user_service import UserService


class TestContacts:
    """Test contact list operations."""

    async def test_add_contact(self, db_session, alice, bob):
        """Test adding a contact returns the entry and lists it."""
        service = RelationshipService(db_session)

        row = await service.add_contact(alice, bob)

        assert row.login == bob
        assert [r.login for r in await service.list_contacts(alice)] == [bob]
        # Relations are one-directional
        assert await service.list_contacts(bob) == []

    async def test_contacts_are_listed_with_status(self, db_session, alice, bob, carol):
        """Test contact rows carry the contact's current status, ordered by login."""
        service = RelationshipService(db_session)
        await service.add_contact(alice, carol)
        await service.add_contact(alice, bob)
        await UserService(db_session).update_status(bob, "busy")

        rows = await service.list_contacts(alice)

        assert [(r.login, r.status) for r in rows] == [(bob, "busy"), (carol, None)]

    async def test_add_contact_twice_fails(self, db_session, alice, bob):
        """Test adding an existing contact fails and leaves one entry."""
        service = RelationshipService(db_session)
        await service.add_contact(alice, bob)

        with pytest.raises(AlreadyRelatedError):
            await service.add_contact(alice, bob)

        assert len(await service.list_contacts(alice)) == 1

    async def test_add_self_fails(self, db_session, alice):
        """Test a user cannot add themselves."""
        service = RelationshipService(db_session)

        with pytest.raises(SelfReferenceError):
            await service.add_contact(alice, alice)
        with pytest.raises(SelfReferenceError):
            await service.add_block(alice, alice)

    async def test_add_unknown_target_fails(self, db_session, alice):
        """Test adding an unregistered login fails."""
        with pytest.raises(NotFoundError):
            await RelationshipService(db_session).add_contact(alice, "ghost")

    async def test_unknown_owner_fails(self, db_session, bob):
        """Test operations for an unregistered owner fail."""
        service = RelationshipService(db_session)

        with pytest.raises(NotFoundError):
            await service.add_contact("ghost", bob)
        with pytest.raises(NotFoundError):
            await service.list_contacts("ghost")

    async def test_remove_contact(self, db_session, alice, bob):
        """Test removing a contact."""
        service = RelationshipService(db_session)
        await service.add_contact(alice, bob)

        await service.remove_contact(alice, bob)

        assert await service.list_contacts(alice) == []

    async def test_remove_missing_contact_fails(self, db_session, alice, bob):
        """Test removing a login that is not a contact fails."""
        with pytest.raises(NotInListError):
            await RelationshipService(db_session).remove_contact(alice, bob)

    async def test_concurrent_duplicate_insert_maps_to_already_related(
        self, db_session, alice, bob, mocker
    ):
        """Test a primary-key violation from a racing add is reported as AlreadyRelatedError."""
        service = RelationshipService(db_session)
        await service.add_contact(alice, bob)

        # Simulate the other request passing the membership check first
        mocker.patch.object(service.member_repo, "contains", mocker.AsyncMock(return_value=False))

        with pytest.raises(AlreadyRelatedError):
            await service.add_contact(alice, bob)

        mocker.stopall()
        assert len(await service.list_contacts(alice)) == 1

    async def test_mutations_lock_the_owner_row(self, db_session, alice, bob, mocker):
        """Test list mutations serialize per owner by locking the owner's user row."""
        service = RelationshipService(db_session)
        lock = mocker.spy(service.user_repo, "get_by_login_for_update")

        await service.add_contact(alice, bob)
        await service.add_block(alice, bob, confirm_remove_from_contact=True)
        await service.remove_block(alice, bob)
        await service.list_contacts(alice)

        assert [call.args[0] for call in lock.call_args_list] == [alice, alice, alice]

    async def test_owner_lock_query_selects_for_update(self, db_session, alice, mocker):
        """Test the owner lookup used by mutations is a SELECT ... FOR UPDATE."""
        service = RelationshipService(db_session)
        execute = mocker.spy(db_session, "execute")

        owner = await service.user_repo.get_by_login_for_update(alice)

        assert owner.login == alice
        statement = execute.call_args.args[0]
        assert "FOR UPDATE" in str(statement.compile(dialect=postgresql.dialect()))

    async def test_store_failure_is_wrapped(self, db_session, alice, mocker):
        """Test a driver failure surfaces as StoreError."""
        service = RelationshipService(db_session)
        mocker.patch.object(
            service.member_repo,
            "list_with_status",
            mocker.AsyncMock(side_effect=OperationalError("SELECT", {}, Exception("disk I/O error")))
        )

        with pytest.raises(StoreError):
            await service.list_contacts(alice)


class TestBlocks:
    """Test block list operations and the contact/block boundary."""

    async def test_add_and_remove_block(self, db_session, alice, bob):
        """Test blocking and unblocking a user."""
        service = RelationshipService(db_session)

        await service.add_block(alice, bob)
        assert [r.login for r in await service.list_blocks(alice)] == [bob]

        await service.remove_block(alice, bob)
        assert await service.list_blocks(alice) == []

    async def test_remove_missing_block_fails(self, db_session, alice, bob):
        """Test unblocking a login that is not blocked fails."""
        with pytest.raises(NotInListError):
            await RelationshipService(db_session).remove_block(alice, bob)

    async def test_block_contact_requires_confirmation(self, db_session, alice, bob):
        """Test blocking a contact is refused until confirmed and changes nothing."""
        service = RelationshipService(db_session)
        await service.add_contact(alice, bob)

        with pytest.raises(ConfirmationRequiredError):
            await service.add_block(alice, bob)

        assert [r.login for r in await service.list_contacts(alice)] == [bob]
        assert await service.list_blocks(alice) == []

    async def test_confirmed_block_moves_contact(self, db_session, alice, bob):
        """Test a confirmed block moves the login off the contact list."""
        service = RelationshipService(db_session)
        await service.add_contact(alice, bob)

        await service.add_block(alice, bob, confirm_remove_from_contact=True)

        assert await service.list_contacts(alice) == []
        assert [r.login for r in await service.list_blocks(alice)] == [bob]

    async def test_confirmed_contact_moves_block(self, db_session, alice, bob):
        """Test a confirmed contact add moves the login off the block list."""
        service = RelationshipService(db_session)
        await service.add_block(alice, bob)

        with pytest.raises(ConfirmationRequiredError):
            await service.add_contact(alice, bob)

        await service.add_contact(alice, bob, confirm_remove_from_block=True)

        assert [r.login for r in await service.list_contacts(alice)] == [bob]
        assert await service.list_blocks(alice) == []

    async def test_block_twice_fails_before_confirmation_check(self, db_session, alice, bob):
        """Test re-blocking reports AlreadyRelatedError even with confirm set."""
        service = RelationshipService(db_session)
        await service.add_block(alice, bob)

        with pytest.raises(AlreadyRelatedError):
            await service.add_block(alice, bob, confirm_remove_from_contact=True)

    async def test_is_blocked_between_checks_both_directions(self, db_session, alice, bob, carol):
        """Test block detection is symmetric."""
        service = RelationshipService(db_session)
        await service.add_block(bob, alice)

        assert await service.is_blocked_between(alice, bob) is True
        assert await service.is_blocked_between(bob, alice) is True
        assert await service.is_blocked_between(alice, carol) is False
