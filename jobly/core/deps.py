"""
FastAPI dependencies for authentication and authorization.

These dependencies are used to protect endpoints and extract user context.
A missing, malformed or expired token is treated as "not logged in".
"""

from dataclasses import dataclass
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError

from jobly.core.exceptions import UnauthorizedError
from jobly.core.security import decode_token

# HTTP Bearer token scheme (Authorization: Bearer <token>)
security = HTTPBearer(auto_error=False)


@dataclass
class CurrentUser:
    """Claims of a verified access token."""
    username: str
    is_admin: bool = False


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[CurrentUser]:
    """
    Return the token's user if a valid token was sent, otherwise None.

    An invalid token is not an error here; routes that need a user
    depend on get_current_user instead.
    """
    if not credentials:
        return None

    try:
        payload = decode_token(credentials.credentials)
    except JWTError:
        return None

    username = payload.get("sub")
    if username is None:
        return None

    return CurrentUser(username=username, is_admin=bool(payload.get("is_admin")))


async def get_current_user(
    user: Optional[CurrentUser] = Depends(get_optional_user),
) -> CurrentUser:
    """
    Require a logged-in user.

    Raises:
        UnauthorizedError: If no valid token was provided
    """
    if user is None:
        raise UnauthorizedError()
    return user


async def require_admin(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    """
    Require a logged-in admin.

    Raises:
        UnauthorizedError: If the user is not an admin
    """
    if not user.is_admin:
        raise UnauthorizedError("Only authorized for admins")
    return user


async def require_admin_or_self(
    username: str,
    user: CurrentUser = Depends(get_current_user),
) -> CurrentUser:
    """
    Require an admin, or the user named by the {username} path parameter.

    Raises:
        UnauthorizedError: If the user is neither
    """
    if user.username != username and not user.is_admin:
        raise UnauthorizedError("Not authorized")
    return user
