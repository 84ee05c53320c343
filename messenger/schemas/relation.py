"""
Pydantic schemas for contact and block lists.
"""
from typing import Optional, List

from pydantic import BaseModel, ConfigDict, Field


class RelationAdd(BaseModel):
    """Schema for adding a login to the contact or block list."""

    login: str = Field(..., min_length=1, max_length=50, description="Login to add")
    confirm: bool = Field(
        default=False,
        description="Move the login out of the opposite list if it is there"
    )

    model_config = ConfigDict(
        json_schema_extra={"example": {"login": "bob", "confirm": False}}
    )


class RelationRow(BaseModel):
    """One entry of a contact or block list."""

    login: str
    status: Optional[str] = None


class RelationListResponse(BaseModel):
    """Contact or block list."""

    data: List[RelationRow]
    total: int
