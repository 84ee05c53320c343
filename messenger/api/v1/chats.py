"""
Chat API routes.
Provides endpoints for creating chats, managing members and chat history.
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from messenger.core.database import get_db
from messenger.dependencies import get_current_login
from messenger.schemas.chat import (
    ChatCreate,
    ChatMemberAdd,
    ChatResponse,
    ChatListResponse,
    ChatMembersResponse,
    ChatDeleteResponse,
)
from messenger.schemas.message import MessageCreate, MessageResponse, MessagePage
from messenger.services.chat_service import ChatService
from messenger.services.message_service import MessageService

router = APIRouter()


@router.post(
    "/",
    response_model=ChatResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a chat"
)
async def create_chat(
    chat_data: ChatCreate,
    current_login: str = Depends(get_current_login),
    db: AsyncSession = Depends(get_db)
):
    """
    Create a chat owned by the acting user.

    - **members**: logins to add; you are added automatically
    """
    return await ChatService(db).create_chat(current_login, chat_data.members)


@router.get(
    "/",
    response_model=ChatListResponse,
    summary="List your chats",
    description="Chats you belong to, most recently active first."
)
async def list_chats(
    current_login: str = Depends(get_current_login),
    db: AsyncSession = Depends(get_db)
):
    chats = await ChatService(db).list_chats_for(current_login)
    return ChatListResponse(data=chats, total=len(chats))


@router.delete(
    "/{chat_id}",
    response_model=ChatDeleteResponse,
    summary="Delete a chat"
)
async def delete_chat(
    chat_id: int,
    current_login: str = Depends(get_current_login),
    db: AsyncSession = Depends(get_db)
):
    return await ChatService(db).delete_chat(chat_id, current_login)


@router.get(
    "/{chat_id}/members",
    response_model=ChatMembersResponse,
    summary="List chat members"
)
async def list_members(
    chat_id: int,
    current_login: str = Depends(get_current_login),
    db: AsyncSession = Depends(get_db)
):
    return await ChatService(db).list_members(chat_id, current_login)


@router.post(
    "/{chat_id}/members",
    response_model=ChatMembersResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a chat member"
)
async def add_member(
    chat_id: int,
    member_data: ChatMemberAdd,
    current_login: str = Depends(get_current_login),
    db: AsyncSession = Depends(get_db)
):
    return await ChatService(db).add_member(chat_id, current_login, member_data.login)


@router.delete(
    "/{chat_id}/members/{login}",
    response_model=ChatMembersResponse,
    summary="Remove a chat member"
)
async def remove_member(
    chat_id: int,
    login: str,
    current_login: str = Depends(get_current_login),
    db: AsyncSession = Depends(get_db)
):
    return await ChatService(db).remove_member(chat_id, current_login, login)


@router.post(
    "/{chat_id}/messages",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Post a message"
)
async def post_message(
    chat_id: int,
    message_data: MessageCreate,
    current_login: str = Depends(get_current_login),
    db: AsyncSession = Depends(get_db)
):
    return await MessageService(db).post_message(chat_id, current_login, message_data.text)


@router.get(
    "/{chat_id}/messages",
    response_model=MessagePage,
    summary="Load a page of chat history"
)
async def load_page(
    chat_id: int,
    depth: int = Query(0, ge=0, description="0 is the newest page; increment to load earlier messages"),
    current_login: str = Depends(get_current_login),
    db: AsyncSession = Depends(get_db)
):
    return await MessageService(db).load_page(chat_id, depth, reader=current_login)
