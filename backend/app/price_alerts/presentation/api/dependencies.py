"""Shared FastAPI dependencies."""

from dataclasses import dataclass
from typing import Annotated, Optional

from fastapi import Header, HTTPException, status


@dataclass(frozen=True)
class CurrentUser:
    """The acting user, as asserted by the upstream auth layer."""

    id: str
    email: str


async def get_current_user(
    x_user_id: Annotated[Optional[str], Header()] = None,
    x_user_email: Annotated[Optional[str], Header()] = None,
) -> CurrentUser:
    """Read the authenticated user from the headers set by the auth proxy.

    Raises:
        HTTPException: 401 if either header is missing.
    """
    if not x_user_id or not x_user_email:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    return CurrentUser(id=x_user_id.strip(), email=x_user_email.strip())
