"""Caller identity taken from the upstream auth gateway.

The gateway authenticates the user and forwards their ID in the X-User-Id
header. This service trusts that header and never sees credentials.
"""

from typing import Annotated, Optional
from uuid import UUID

from fastapi import Depends, Header

from vidnest.interface.error import AuthenticationRequiredError


def _parse(value: str) -> str:
    try:
        return str(UUID(value))
    except ValueError:
        raise AuthenticationRequiredError("X-User-Id is not a valid user ID")


async def require_actor(
    x_user_id: Annotated[Optional[str], Header()] = None,
) -> str:
    """Authenticated user ID, or 401 when the header is missing."""
    if not x_user_id:
        raise AuthenticationRequiredError("Authentication required")
    return _parse(x_user_id)


async def optional_viewer(
    x_user_id: Annotated[Optional[str], Header()] = None,
) -> Optional[str]:
    """User ID for personalising read endpoints; anonymous when absent."""
    if not x_user_id:
        return None
    return _parse(x_user_id)


Actor = Annotated[str, Depends(require_actor)]
Viewer = Annotated[Optional[str], Depends(optional_viewer)]
