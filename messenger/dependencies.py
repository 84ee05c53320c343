"""
Dependency injection for FastAPI routes.
Provides reusable dependencies for the acting user and database sessions.
"""
from typing import Optional
from fastapi import Header, HTTPException, status


async def get_current_login(
    x_user_login: Optional[str] = Header(None)
) -> str:
    """
    Dependency to get the login of the acting user.

    The menu/session layer in front of this server has already identified
    the user and forwards the login in the X-User-Login header.

    Raises:
        HTTPException: 401 if the header is missing or blank
    """
    if not x_user_login or not x_user_login.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing X-User-Login header",
        )
    return x_user_login.strip()
