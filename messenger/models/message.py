"""
Message model.

Messages in a chat are totally ordered by (timestamp, id).
"""
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from messenger.models.base import Base, IntegerIDMixin


class Message(Base, IntegerIDMixin):
    """Chat message; only its author may edit or delete it."""

    __tablename__ = "messages"

    chat_id: Mapped[int] = mapped_column(
        ForeignKey("chats.id", ondelete="CASCADE"),
        nullable=False,
        doc="Chat the message belongs to"
    )

    author: Mapped[str] = mapped_column(
        String(50),
        ForeignKey("users.login"),
        nullable=False,
        doc="Login of the author"
    )

    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        doc="Server-assigned post time"
    )

    text: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        doc="Message text"
    )

    edited_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        doc="Last edit time, null if never edited"
    )

    def __repr__(self) -> str:
        return f"<Message(id={self.id}, chat_id={self.chat_id}, author={self.author})>"


# History pages scan by chat in (timestamp, id) order
Index("idx_messages_chat_timestamp_id", Message.chat_id, Message.timestamp, Message.id)
