"""
Notification model - one pending entry per (recipient, message).
"""
from sqlalchemy import ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from messenger.models.base import Base, IntegerIDMixin, CreatedAtMixin


class Notification(Base, IntegerIDMixin, CreatedAtMixin):
    """Pending notification; removed when its recipient reads it."""

    __tablename__ = "notifications"

    recipient_login: Mapped[str] = mapped_column(
        String(50),
        ForeignKey("users.login", ondelete="CASCADE"),
        nullable=False,
        doc="Login of the user to notify"
    )

    message_id: Mapped[int] = mapped_column(
        ForeignKey("messages.id", ondelete="CASCADE"),
        nullable=False,
        doc="Message that triggered the notification"
    )

    __table_args__ = (
        UniqueConstraint("recipient_login", "message_id", name="uq_notifications_recipient_message"),
    )

    def __repr__(self) -> str:
        return f"<Notification(id={self.id}, recipient_login={self.recipient_login}, message_id={self.message_id})>"


Index("idx_notifications_recipient", Notification.recipient_login)
Index("idx_notifications_message", Notification.message_id)
