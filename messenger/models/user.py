"""
User model.

A user is created together with its two relation sets (contacts and blocks)
and is never deleted.
"""
from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from messenger.models.base import Base, IntegerIDMixin, CreatedAtMixin


class User(Base, IntegerIDMixin, CreatedAtMixin):
    """Registered user, addressed everywhere else by login."""

    __tablename__ = "users"

    login: Mapped[str] = mapped_column(
        String(50),
        unique=True,
        nullable=False,
        index=True,
        doc="Unique login used as the user's public handle"
    )

    password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        doc="Password as supplied at registration"
    )

    phone: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        doc="Phone number"
    )

    status: Mapped[str | None] = mapped_column(
        String(140),
        nullable=True,
        doc="Free-form status shown in other users' contact lists"
    )

    contact_set_id: Mapped[int] = mapped_column(
        ForeignKey("relation_sets.id"),
        unique=True,
        nullable=False,
        doc="This user's contact set"
    )

    block_set_id: Mapped[int] = mapped_column(
        ForeignKey("relation_sets.id"),
        unique=True,
        nullable=False,
        doc="This user's block set"
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, login={self.login})>"
