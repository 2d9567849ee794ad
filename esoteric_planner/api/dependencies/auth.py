"""
Authentication Dependencies

FastAPI dependencies for user authentication and authorization.

Dependency Hierarchy:
=====================
    get_current_user_token()  ← JWT from Authorization: Bearer, else the auth cookie
           │
           ▼
    get_current_user()        ← Load the User row (401 if it no longer exists)
           │
           ▼
    get_current_admin()       ← 403 unless user.is_admin

Type Aliases:
=============
    CurrentUser  - Authenticated User model
    AdminUser    - Authenticated User model with is_admin

Usage:
======
    from esoteric_planner.api.dependencies.auth import CurrentUser, AdminUser

    @router.get("/user")
    async def get_me(current_user: CurrentUser):
        return UserResponse.model_validate(current_user)
"""

from typing import Annotated, Optional
import uuid

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from esoteric_planner.config.settings import settings
from esoteric_planner.shared.core.exceptions import AuthenticationError, AuthorizationError
from esoteric_planner.shared.core.logging import log_context
from esoteric_planner.shared.models.user import User
from esoteric_planner.shared.repositories.user_repository import UserRepository
from esoteric_planner.shared.utils.security import SecurityUtils
from esoteric_planner.api.dependencies.database import DbSession


# Security scheme for Bearer tokens; the cookie is the fallback
security = HTTPBearer(auto_error=False)


async def get_current_user_token(
    request: Request,
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)] = None,
) -> dict:
    """
    Extract and validate the JWT.

    Returns:
        Decoded token payload

    Raises:
        AuthenticationError: If token is missing or invalid
    """
    token = credentials.credentials if credentials else request.cookies.get(settings.AUTH_COOKIE_NAME)
    if not token:
        raise AuthenticationError("Unauthorized")

    try:
        return SecurityUtils.decode_access_token(
            token,
            settings.SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
        )
    except ValueError as e:
        raise AuthenticationError(str(e)) from e


async def get_current_user(
    token: Annotated[dict, Depends(get_current_user_token)],
    db: DbSession,
) -> User:
    """
    Load the authenticated user.

    Raises:
        AuthenticationError: If the token carries no valid user_id or the user is gone
    """
    try:
        user_id = uuid.UUID(str(token.get("user_id")))
    except ValueError as e:
        raise AuthenticationError("Invalid token payload") from e

    user = await UserRepository(db).get(user_id)
    if user is None:
        raise AuthenticationError("User not found")

    log_context(user_id=str(user.id))
    return user


async def get_current_admin(
    user: Annotated[User, Depends(get_current_user)],
) -> User:
    """
    Raises:
        AuthorizationError: If the user is not an admin
    """
    if not user.is_admin:
        raise AuthorizationError("Admin access required")
    return user


# ═══════════════════════════════════════════════════════════════════════════════
# TYPE ALIASES
# ═══════════════════════════════════════════════════════════════════════════════

# Authenticated user (most common dependency)
CurrentUser = Annotated[User, Depends(get_current_user)]

# Admin-only endpoints
AdminUser = Annotated[User, Depends(get_current_admin)]
