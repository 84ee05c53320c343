"""
Database configuration and session management.
Uses SQLAlchemy 2.0 with async support.
"""
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, AsyncIterator, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker

from messenger.config import settings
from messenger.core.exceptions import MessengerError, StoreError

logger = logging.getLogger(__name__)


# Create async engine
engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,
    pool_pre_ping=True,
    pool_size=settings.db_pool_size,
    max_overflow=settings.db_max_overflow,
)

# Create async session factory
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency for getting async database sessions.

    Yields:
        AsyncSession: Database session

    Example:
        ```python
        @router.get("/contacts")
        async def list_contacts(db: AsyncSession = Depends(get_db)):
            return await RelationshipService(db).list_contacts("alice")
        ```
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


@asynccontextmanager
async def transaction(
    session: AsyncSession,
    on_conflict: Optional[MessengerError] = None
) -> AsyncIterator[AsyncSession]:
    """
    Run one service operation as a single unit of work.

    Commits when the block exits normally and rolls back on any exception,
    so a failed operation never leaves partial state behind.

    Args:
        session: Session the operation runs on
        on_conflict: Error raised instead of a uniqueness violation. Without
            it an IntegrityError is reported as StoreError.

    Raises:
        MessengerError: Domain errors raised inside the block, unchanged
        StoreError: Any other persistence failure
    """
    try:
        yield session
        await session.commit()
    except MessengerError:
        await session.rollback()
        raise
    except IntegrityError as exc:
        await session.rollback()
        if on_conflict is not None:
            logger.info(f"Uniqueness conflict converted to {on_conflict.kind.value}: {on_conflict.detail}")
            raise on_conflict from exc
        logger.error(f"Integrity error, transaction rolled back: {exc}")
        raise StoreError("Store rejected the operation") from exc
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.error(f"Store failure, transaction rolled back: {exc}")
        raise StoreError(f"Store failure: {type(exc).__name__}") from exc
    except Exception:
        await session.rollback()
        raise
