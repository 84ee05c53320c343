"""
Relation repository for database operations.
Handles contact/block set membership rows.
"""
from typing import List, Tuple, Optional

from sqlalchemy import select, insert, delete, func, and_, or_
from sqlalchemy.ext.asyncio import AsyncSession

from messenger.models.relation import RelationMember
from messenger.models.user import User
from messenger.repositories.base import BaseRepository


class RelationMemberRepository(BaseRepository[RelationMember]):
    """Repository for relation set membership."""

    def __init__(self, db: AsyncSession):
        super().__init__(RelationMember, db)

    async def contains(self, set_id: int, login: str) -> bool:
        """
        Check if a login is a member of a relation set.

        Args:
            set_id: Relation set id
            login: Member login

        Returns:
            True if the membership row exists
        """
        result = await self.db.execute(
            select(func.count())
            .select_from(RelationMember)
            .where(
                and_(
                    RelationMember.set_id == set_id,
                    RelationMember.member_login == login
                )
            )
        )
        return (result.scalar() or 0) > 0

    async def add(self, set_id: int, login: str) -> None:
        """
        Insert a membership row.

        Issued as a plain INSERT so a concurrent duplicate surfaces as an
        IntegrityError from the primary key.

        Args:
            set_id: Relation set id
            login: Member login
        """
        await self.db.execute(
            insert(RelationMember).values(set_id=set_id, member_login=login)
        )
        await self.db.flush()

    async def remove(self, set_id: int, login: str) -> bool:
        """
        Delete a membership row.

        Args:
            set_id: Relation set id
            login: Member login

        Returns:
            True if a row was deleted
        """
        result = await self.db.execute(
            delete(RelationMember)
            .where(
                and_(
                    RelationMember.set_id == set_id,
                    RelationMember.member_login == login
                )
            )
            .execution_options(synchronize_session=False)
        )
        await self.db.flush()
        return result.rowcount > 0

    async def list_with_status(self, set_id: int) -> List[Tuple[str, Optional[str]]]:
        """
        List members of a set with their current status text.

        Args:
            set_id: Relation set id

        Returns:
            List of (login, status) tuples ordered by login
        """
        result = await self.db.execute(
            select(RelationMember.member_login, User.status)
            .join(User, User.login == RelationMember.member_login)
            .where(RelationMember.set_id == set_id)
            .order_by(RelationMember.member_login)
        )
        return [(row.member_login, row.status) for row in result.all()]

    async def is_blocked_between(self, first: User, second: User) -> bool:
        """
        Check whether either user has the other in their block set.

        Args:
            first: One user
            second: The other user

        Returns:
            True if a block exists in either direction
        """
        result = await self.db.execute(
            select(func.count())
            .select_from(RelationMember)
            .where(
                or_(
                    and_(
                        RelationMember.set_id == first.block_set_id,
                        RelationMember.member_login == second.login
                    ),
                    and_(
                        RelationMember.set_id == second.block_set_id,
                        RelationMember.member_login == first.login
                    )
                )
            )
        )
        return (result.scalar() or 0) > 0
