"""
Base model classes and mixins for SQLAlchemy ORM.
Provides common functionality for all database models.
"""
from datetime import datetime

from sqlalchemy import DateTime, func
from sqlalchemy.ext.asyncio import AsyncAttrs
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(AsyncAttrs, DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Includes AsyncAttrs mixin for async relationship access.
    All models should inherit from this class.
    """
    pass


class IntegerIDMixin:
    """
    Mixin for autoincrement integer primary key.

    The store assigns ids; they increase monotonically, which is what
    breaks timestamp ties in message ordering.
    """

    id: Mapped[int] = mapped_column(
        primary_key=True,
        autoincrement=True,
        doc="Store-assigned unique id"
    )


class CreatedAtMixin:
    """Mixin for a created_at timestamp."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        doc="Timestamp when the record was created"
    )
