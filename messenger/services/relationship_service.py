"""
Relationship service containing business logic for contact and block lists.

Each user owns one contact set and one block set. A login is never in both
of a user's sets, and a user is never in their own sets. Moving a login
across the two sets is a two-phase call: the first attempt raises
ConfirmationRequiredError, and the caller repeats it with the confirm flag.

Mutations lock the owner's user row first, so concurrent changes to one
user's two sets run one after the other and the cross-set check holds.
"""
import logging
from typing import List, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from messenger.core.database import transaction
from messenger.core.exceptions import (
    AlreadyRelatedError,
    ConfirmationRequiredError,
    NotFoundError,
    NotInListError,
    SelfReferenceError,
)
from messenger.models.relation import RelationKind
from messenger.models.user import User
from messenger.repositories.relation_repo import RelationMemberRepository
from messenger.repositories.user_repo import UserRepository
from messenger.schemas.relation import RelationRow

logger = logging.getLogger(__name__)

LIST_NAMES = {
    RelationKind.CONTACT: "contact list",
    RelationKind.BLOCK: "block list",
}


class RelationshipService:
    """Service for contact and block list operations."""

    def __init__(self, db: AsyncSession):
        """
        Initialize relationship service.

        Args:
            db: Database session
        """
        self.db = db
        self.user_repo = UserRepository(db)
        self.member_repo = RelationMemberRepository(db)

    async def _get_owner(self, login: str, lock: bool = False) -> User:
        if lock:
            owner = await self.user_repo.get_by_login_for_update(login)
        else:
            owner = await self.user_repo.get_by_login(login)
        if not owner:
            raise NotFoundError(f"User {login} not found")
        return owner

    @staticmethod
    def _set_ids(owner: User, kind: RelationKind) -> Tuple[int, int]:
        """Return (target set id, opposite set id) for a relation kind."""
        if kind == RelationKind.CONTACT:
            return owner.contact_set_id, owner.block_set_id
        return owner.block_set_id, owner.contact_set_id

    async def _add(
        self,
        owner_login: str,
        target_login: str,
        kind: RelationKind,
        confirm: bool
    ) -> RelationRow:
        opposite = RelationKind.BLOCK if kind == RelationKind.CONTACT else RelationKind.CONTACT
        already = AlreadyRelatedError(f"{target_login} is already on your {LIST_NAMES[kind]}")

        async with transaction(self.db, on_conflict=already):
            if target_login == owner_login:
                raise SelfReferenceError(f"You cannot add yourself to your {LIST_NAMES[kind]}")

            owner = await self._get_owner(owner_login, lock=True)
            target = await self.user_repo.get_by_login(target_login)
            if not target:
                raise NotFoundError(f"User {target_login} does not exist")

            set_id, opposite_set_id = self._set_ids(owner, kind)

            if await self.member_repo.contains(set_id, target_login):
                raise already

            if await self.member_repo.contains(opposite_set_id, target_login):
                if not confirm:
                    raise ConfirmationRequiredError(
                        f"{target_login} is on your {LIST_NAMES[opposite]} and will be "
                        f"removed from it; confirm to continue"
                    )
                await self.member_repo.remove(opposite_set_id, target_login)
                logger.info(f"User {owner_login} moved {target_login} off the {LIST_NAMES[opposite]}")

            await self.member_repo.add(set_id, target_login)
            row = RelationRow(login=target.login, status=target.status)

        logger.info(f"User {owner_login} added {target_login} to the {LIST_NAMES[kind]}")
        return row

    async def _remove(self, owner_login: str, target_login: str, kind: RelationKind) -> None:
        async with transaction(self.db):
            owner = await self._get_owner(owner_login, lock=True)
            set_id, _ = self._set_ids(owner, kind)

            if not await self.member_repo.remove(set_id, target_login):
                raise NotInListError(f"{target_login} is not on your {LIST_NAMES[kind]}")

        logger.info(f"User {owner_login} removed {target_login} from the {LIST_NAMES[kind]}")

    async def _list(self, owner_login: str, kind: RelationKind) -> List[RelationRow]:
        async with transaction(self.db):
            owner = await self._get_owner(owner_login)
            set_id, _ = self._set_ids(owner, kind)
            rows = await self.member_repo.list_with_status(set_id)

        return [RelationRow(login=login, status=status) for login, status in rows]

    async def add_contact(
        self,
        owner_login: str,
        target_login: str,
        confirm_remove_from_block: bool = False
    ) -> RelationRow:
        """
        Add a login to the owner's contact list.

        Args:
            owner_login: List owner
            target_login: Login to add
            confirm_remove_from_block: Allow moving the login off the block list

        Returns:
            The added entry

        Raises:
            SelfReferenceError: If target is the owner
            NotFoundError: If either login is unknown
            AlreadyRelatedError: If target is already a contact
            ConfirmationRequiredError: If target is blocked and not confirmed
        """
        return await self._add(owner_login, target_login, RelationKind.CONTACT, confirm_remove_from_block)

    async def add_block(
        self,
        owner_login: str,
        target_login: str,
        confirm_remove_from_contact: bool = False
    ) -> RelationRow:
        """
        Add a login to the owner's block list.

        Mirror image of add_contact: a current contact is only moved here
        when confirm_remove_from_contact is set.
        """
        return await self._add(owner_login, target_login, RelationKind.BLOCK, confirm_remove_from_contact)

    async def remove_contact(self, owner_login: str, target_login: str) -> None:
        """
        Remove a login from the contact list.

        Raises:
            NotInListError: If the login is not a contact
        """
        await self._remove(owner_login, target_login, RelationKind.CONTACT)

    async def remove_block(self, owner_login: str, target_login: str) -> None:
        """
        Remove a login from the block list.

        Raises:
            NotInListError: If the login is not blocked
        """
        await self._remove(owner_login, target_login, RelationKind.BLOCK)

    async def list_contacts(self, owner_login: str) -> List[RelationRow]:
        """List the owner's contacts with their status text."""
        return await self._list(owner_login, RelationKind.CONTACT)

    async def list_blocks(self, owner_login: str) -> List[RelationRow]:
        """List the owner's blocked logins."""
        return await self._list(owner_login, RelationKind.BLOCK)

    async def is_blocked_between(self, first_login: str, second_login: str) -> bool:
        """
        Check whether either user has blocked the other.

        Raises:
            NotFoundError: If either login is unknown
        """
        async with transaction(self.db):
            first = await self._get_owner(first_login)
            second = await self._get_owner(second_login)
            return await self.member_repo.is_blocked_between(first, second)
