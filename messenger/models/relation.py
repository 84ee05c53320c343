"""
RelationSet and RelationMember models.

Each user owns exactly one contact set and one block set. A login may be a
member of at most one of a given user's two sets; that rule spans two rows
and is enforced by RelationshipService under a lock on the owner's user
row, while the composite primary key of RelationMember guarantees a login
appears in one set only once.
"""
import enum
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String, Enum as SQLEnum, func
from sqlalchemy.orm import Mapped, mapped_column

from messenger.models.base import Base, IntegerIDMixin, CreatedAtMixin


class RelationKind(str, enum.Enum):
    """Enum for relation set kinds."""
    CONTACT = "contact"
    BLOCK = "block"


class RelationSet(Base, IntegerIDMixin, CreatedAtMixin):
    """A user's contact set or block set."""

    __tablename__ = "relation_sets"

    kind: Mapped[RelationKind] = mapped_column(
        SQLEnum(RelationKind, name="relation_kind", native_enum=False),
        nullable=False,
        doc="Set kind: 'contact' or 'block'"
    )

    def __repr__(self) -> str:
        return f"<RelationSet(id={self.id}, kind={self.kind})>"


class RelationMember(Base):
    """Membership of one login in one relation set."""

    __tablename__ = "relation_members"

    # Composite primary key
    set_id: Mapped[int] = mapped_column(
        ForeignKey("relation_sets.id", ondelete="CASCADE"),
        primary_key=True,
        doc="Relation set"
    )

    member_login: Mapped[str] = mapped_column(
        String(50),
        ForeignKey("users.login", ondelete="CASCADE"),
        primary_key=True,
        doc="Login of the related user"
    )

    added_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        doc="When the login was added to the set"
    )

    def __repr__(self) -> str:
        return f"<RelationMember(set_id={self.set_id}, member_login={self.member_login})>"


Index("idx_relation_members_login", RelationMember.member_login)
