"""
Relationship API routes.
Provides endpoints for the acting user's contact and block lists.

Adding a login that sits on the opposite list answers 409 with error
"confirmation_required"; repeat the request with "confirm": true to move it.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from messenger.core.database import get_db
from messenger.dependencies import get_current_login
from messenger.schemas.relation import RelationAdd, RelationRow, RelationListResponse
from messenger.services.relationship_service import RelationshipService

router = APIRouter()


@router.get("/contacts", response_model=RelationListResponse, summary="List contacts")
async def list_contacts(
    current_login: str = Depends(get_current_login),
    db: AsyncSession = Depends(get_db)
):
    rows = await RelationshipService(db).list_contacts(current_login)
    return RelationListResponse(data=rows, total=len(rows))


@router.post(
    "/contacts",
    response_model=RelationRow,
    status_code=status.HTTP_201_CREATED,
    summary="Add a contact"
)
async def add_contact(
    relation_data: RelationAdd,
    current_login: str = Depends(get_current_login),
    db: AsyncSession = Depends(get_db)
):
    return await RelationshipService(db).add_contact(
        current_login,
        relation_data.login,
        confirm_remove_from_block=relation_data.confirm
    )


@router.delete(
    "/contacts/{login}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove a contact"
)
async def remove_contact(
    login: str,
    current_login: str = Depends(get_current_login),
    db: AsyncSession = Depends(get_db)
):
    await RelationshipService(db).remove_contact(current_login, login)


@router.get("/blocks", response_model=RelationListResponse, summary="List blocked users")
async def list_blocks(
    current_login: str = Depends(get_current_login),
    db: AsyncSession = Depends(get_db)
):
    rows = await RelationshipService(db).list_blocks(current_login)
    return RelationListResponse(data=rows, total=len(rows))


@router.post(
    "/blocks",
    response_model=RelationRow,
    status_code=status.HTTP_201_CREATED,
    summary="Block a user"
)
async def add_block(
    relation_data: RelationAdd,
    current_login: str = Depends(get_current_login),
    db: AsyncSession = Depends(get_db)
):
    return await RelationshipService(db).add_block(
        current_login,
        relation_data.login,
        confirm_remove_from_contact=relation_data.confirm
    )


@router.delete(
    "/blocks/{login}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Unblock a user"
)
async def remove_block(
    login: str,
    current_login: str = Depends(get_current_login),
    db: AsyncSession = Depends(get_db)
):
    await RelationshipService(db).remove_block(current_login, login)
