"""
Notification API routes.

GET / consumes: the notifications it returns are removed from the queue.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from messenger.core.database import get_db
from messenger.dependencies import get_current_login
from messenger.schemas.notification import NotificationListResponse, NotificationCountResponse
from messenger.services.notification_service import NotificationService

router = APIRouter()


@router.get(
    "/",
    response_model=NotificationListResponse,
    summary="Read and clear your notifications"
)
async def read_notifications(
    current_login: str = Depends(get_current_login),
    db: AsyncSession = Depends(get_db)
):
    notifications = await NotificationService(db).read_all(current_login)
    return NotificationListResponse(data=notifications, total=len(notifications))


@router.get(
    "/count",
    response_model=NotificationCountResponse,
    summary="Count pending notifications"
)
async def count_notifications(
    current_login: str = Depends(get_current_login),
    db: AsyncSession = Depends(get_db)
):
    pending = await NotificationService(db).pending_count(current_login)
    return NotificationCountResponse(pending=pending)
