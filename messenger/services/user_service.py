"""
User service containing business logic for registration and profiles.
"""
import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from messenger.config import settings
from messenger.core.database import transaction
from messenger.core.exceptions import DuplicateLoginError, NotFoundError, ValidationError
from messenger.repositories.user_repo import UserRepository
from messenger.schemas.user import UserResponse

logger = logging.getLogger(__name__)


class UserService:
    """Service for user operations."""

    def __init__(self, db: AsyncSession):
        """
        Initialize user service.

        Args:
            db: Database session
        """
        self.db = db
        self.user_repo = UserRepository(db)

    async def register_user(self, login: str, password: str, phone: str) -> UserResponse:
        """
        Register a user with empty contact and block sets.

        Args:
            login: Unique login
            password: Password
            phone: Phone number

        Returns:
            Created user profile

        Raises:
            ValidationError: If a field is empty or the login is too long
            DuplicateLoginError: If the login is taken
        """
        login = (login or "").strip()
        if not login or not password or not (phone or "").strip():
            raise ValidationError("Login, password and phone are required")
        if len(login) > settings.login_max_length:
            raise ValidationError(f"Login must be at most {settings.login_max_length} characters")

        taken = DuplicateLoginError(f"Login {login} is already taken")
        async with transaction(self.db, on_conflict=taken):
            if await self.user_repo.login_exists(login):
                raise taken

            user = await self.user_repo.create_with_relation_sets(
                login=login,
                password=password,
                phone=phone.strip()
            )
            response = UserResponse.model_validate(user)

        logger.info(f"New user registered: {login} (ID: {user.id})")
        return response

    async def get_user(self, login: str) -> UserResponse:
        """
        Get a user's profile.

        Raises:
            NotFoundError: If the login is not registered
        """
        async with transaction(self.db):
            user = await self.user_repo.get_by_login(login)
            if not user:
                raise NotFoundError(f"User {login} not found")
            return UserResponse.model_validate(user)

    async def update_status(self, login: str, status: Optional[str]) -> UserResponse:
        """
        Set or clear a user's status text.

        Args:
            login: User login
            status: New status; None or blank clears it

        Returns:
            Updated profile

        Raises:
            ValidationError: If the status is longer than status_max_length
            NotFoundError: If the login is not registered
        """
        status = status.strip() if status else None
        if status and len(status) > settings.status_max_length:
            raise ValidationError(f"Status must be at most {settings.status_max_length} characters")

        async with transaction(self.db):
            user = await self.user_repo.update_status(login, status or None)
            if not user:
                raise NotFoundError(f"User {login} not found")
            response = UserResponse.model_validate(user)

        logger.info(f"User {login} updated status")
        return response
