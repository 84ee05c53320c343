"""
User repository for database operations.
Handles registration rows and login lookups.
"""
from typing import Optional, List, Dict

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from messenger.models.relation import RelationKind, RelationSet
from messenger.models.user import User
from messenger.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for user database operations."""

    def __init__(self, db: AsyncSession):
        super().__init__(User, db)

    async def get_by_login(self, login: str) -> Optional[User]:
        """
        Get user by login.

        Args:
            login: User login

        Returns:
            User or None if not registered
        """
        result = await self.db.execute(
            select(User).where(User.login == login)
        )
        return result.scalar_one_or_none()

    async def get_by_login_for_update(self, login: str) -> Optional[User]:
        """
        Get user by login and lock its row until the transaction ends.

        Contact and block mutations for one owner take this lock first, so
        two of them never interleave their cross-set checks.

        Args:
            login: User login

        Returns:
            Locked user or None if not registered
        """
        result = await self.db.execute(
            select(User)
            .where(User.login == login)
            .with_for_update()
        )
        return result.scalar_one_or_none()

    async def get_many_by_login(self, logins: List[str]) -> Dict[str, User]:
        """
        Get several users in one query.

        Args:
            logins: Logins to look up

        Returns:
            Dict of login -> User for the logins that exist
        """
        if not logins:
            return {}

        result = await self.db.execute(
            select(User).where(User.login.in_(logins))
        )
        return {user.login: user for user in result.scalars().all()}

    async def login_exists(self, login: str) -> bool:
        """Check whether a login is registered."""
        result = await self.db.execute(
            select(User.id).where(User.login == login)
        )
        return result.scalar_one_or_none() is not None

    async def create_with_relation_sets(
        self,
        login: str,
        password: str,
        phone: str
    ) -> User:
        """
        Create a user together with its empty block and contact sets.

        Args:
            login: Unique login
            password: Password
            phone: Phone number

        Returns:
            Created user
        """
        block_set = RelationSet(kind=RelationKind.BLOCK)
        contact_set = RelationSet(kind=RelationKind.CONTACT)
        self.db.add_all([block_set, contact_set])
        await self.db.flush()

        return await self.create(
            login=login,
            password=password,
            phone=phone,
            block_set_id=block_set.id,
            contact_set_id=contact_set.id
        )

    async def update_status(self, login: str, status: Optional[str]) -> Optional[User]:
        """
        Set or clear a user's status text.

        Args:
            login: User login
            status: New status, None clears it

        Returns:
            Updated user or None if not found
        """
        result = await self.db.execute(
            update(User)
            .where(User.login == login)
            .values(status=status)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            return None

        await self.db.flush()
        user = await self.get_by_login(login)
        await self.db.refresh(user)
        return user
