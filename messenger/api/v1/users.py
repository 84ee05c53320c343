"""
User API routes.
Provides endpoints for registration, profiles and status text.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from messenger.core.database import get_db
from messenger.dependencies import get_current_login
from messenger.schemas.user import UserCreate, UserStatusUpdate, UserResponse
from messenger.services.user_service import UserService

router = APIRouter()


@router.post(
    "/",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a user"
)
async def register_user(
    user_data: UserCreate,
    db: AsyncSession = Depends(get_db)
):
    """Register a user; empty contact and block lists are created with it."""
    return await UserService(db).register_user(
        login=user_data.login,
        password=user_data.password,
        phone=user_data.phone
    )


@router.put(
    "/me/status",
    response_model=UserResponse,
    summary="Set or clear your status"
)
async def update_status(
    status_data: UserStatusUpdate,
    current_login: str = Depends(get_current_login),
    db: AsyncSession = Depends(get_db)
):
    return await UserService(db).update_status(current_login, status_data.status)


@router.get(
    "/{login}",
    response_model=UserResponse,
    summary="Get a user profile"
)
async def get_user(
    login: str,
    db: AsyncSession = Depends(get_db)
):
    return await UserService(db).get_user(login)
