"""
Chat and ChatMember models.

A chat is owned by its initial sender, who is always one of its members.
Chats have no soft-delete state: deleting a chat removes its rows.
"""
from datetime import datetime
from typing import List

from sqlalchemy import DateTime, ForeignKey, Index, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from messenger.models.base import Base, IntegerIDMixin, CreatedAtMixin


class Chat(Base, IntegerIDMixin, CreatedAtMixin):
    """Group chat owned by its initial sender."""

    __tablename__ = "chats"

    initial_sender: Mapped[str] = mapped_column(
        String(50),
        ForeignKey("users.login"),
        nullable=False,
        index=True,
        doc="Login of the creator, sole authority over membership and deletion"
    )

    # Relationships
    members: Mapped[List["ChatMember"]] = relationship(
        back_populates="chat",
        order_by="ChatMember.member_login",
        lazy="select"
    )

    def __repr__(self) -> str:
        return f"<Chat(id={self.id}, initial_sender={self.initial_sender})>"


class ChatMember(Base):
    """Membership of one login in one chat."""

    __tablename__ = "chat_members"

    # Composite primary key
    chat_id: Mapped[int] = mapped_column(
        ForeignKey("chats.id", ondelete="CASCADE"),
        primary_key=True,
        doc="Chat ID"
    )

    member_login: Mapped[str] = mapped_column(
        String(50),
        ForeignKey("users.login", ondelete="CASCADE"),
        primary_key=True,
        doc="Member login"
    )

    joined_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        doc="When the login joined the chat"
    )

    chat: Mapped["Chat"] = relationship(back_populates="members")

    def __repr__(self) -> str:
        return f"<ChatMember(chat_id={self.chat_id}, member_login={self.member_login})>"


Index("idx_chat_members_login", ChatMember.member_login)
