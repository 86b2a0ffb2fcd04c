"""
Authentication — Cognito bearer tokens and permission guards for the internal surface.

The public surface is unauthenticated. Internal routes resolve the caller's
account from the access token and check a ``SECURABLE:PERMISSION`` grant
before any engine call.
Version: 1.0.0
"""
import logging
from typing import Optional

import httpx
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError

from app.core.cognito import verify_cognito_token, extract_user_info
from app.core.exceptions import PermissionDeniedError

logger = logging.getLogger(__name__)
security = HTTPBearer(auto_error=False)

ADMIN_GROUP = "admin"


def _unauthorized(message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={"code": "unauthorized", "message": message},
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> dict:
    """
    Validate the Cognito access token and return the caller identity.

    Returned keys: ``user_id``, ``username``, ``email``, ``account_id``,
    ``groups``, ``permissions``.
    """
    if not credentials:
        raise _unauthorized("Missing bearer token")

    try:
        payload = await verify_cognito_token(credentials.credentials)
    except JWTError as e:
        logger.warning(f"Authentication failed - JWT error: {e}")
        raise _unauthorized("Invalid or expired token")
    except httpx.HTTPError as e:
        logger.error(f"Authentication failed - JWKS unavailable: {e}")
        raise _unauthorized("Authentication failed")

    user_info = extract_user_info(payload)
    if not user_info.get("id"):
        logger.warning("Authentication failed - missing user ID in token")
        raise _unauthorized("Invalid token: missing user ID")

    logger.debug(
        f"Authentication successful - user_id: {user_info['id']}, "
        f"account_id: {user_info.get('account_id')}"
    )

    return {
        "user_id": user_info["id"],
        "username": user_info.get("username"),
        "email": user_info.get("email"),
        "account_id": user_info.get("account_id"),
        "groups": user_info.get("groups", []),
        "permissions": user_info.get("permissions", []),
    }


def has_permission(user: dict, securable: str, permission: str) -> bool:
    if ADMIN_GROUP in user.get("groups", []):
        return True
    return f"{securable}:{permission}" in user.get("permissions", [])


def require_permission(securable: str, permission: str):
    """
    Dependency factory requiring a permission on a securable.

    Also requires the token to name an account, since every internal
    procedure is scoped to one.

    Usage:
        @router.get("/search/products")
        async def products(user: dict = Depends(require_permission("SEARCH", "READ"))):
            ...
    """
    async def check_permission(user: dict = Depends(get_current_user)) -> dict:
        if user.get("account_id") is None:
            logger.warning(f"Access denied - user {user.get('user_id')} has no account")
            raise PermissionDeniedError(securable, permission)

        if not has_permission(user, securable, permission):
            logger.warning(
                f"Access denied - user {user.get('user_id')} lacks {securable}:{permission}. "
                f"Has: {user.get('permissions')}"
            )
            raise PermissionDeniedError(securable, permission)

        return user

    return check_permission
