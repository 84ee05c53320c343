"""
Message API routes.
Provides endpoints for editing and deleting your own messages.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from messenger.core.database import get_db
from messenger.dependencies import get_current_login
from messenger.schemas.message import MessageUpdate, MessageResponse, MessageDeleteResponse
from messenger.services.message_service import MessageService

router = APIRouter()


@router.put(
    "/{message_id}",
    response_model=MessageResponse,
    summary="Edit a message"
)
async def edit_message(
    message_id: int,
    message_data: MessageUpdate,
    current_login: str = Depends(get_current_login),
    db: AsyncSession = Depends(get_db)
):
    return await MessageService(db).edit_message(message_id, current_login, message_data.text)


@router.delete(
    "/{message_id}",
    response_model=MessageDeleteResponse,
    summary="Delete a message"
)
async def delete_message(
    message_id: int,
    current_login: str = Depends(get_current_login),
    db: AsyncSession = Depends(get_db)
):
    return await MessageService(db).delete_message(message_id, current_login)
