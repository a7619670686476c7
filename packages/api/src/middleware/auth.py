# This project was developed with assistance from AI tools.
"""
JWT authentication middleware for staff sessions.

Validates HS256 Bearer tokens issued by ``/api/auth/login``, rejects tokens
revoked by logout, and provides FastAPI dependencies for route-level auth.

Set AUTH_DISABLED=true to bypass validation (tests / local dev).
"""

import logging
from typing import Annotated

import jwt
from db import InMemoryStore, get_store
from db.enums import PermissionAction, PermissionResource, UserRole
from fastapi import Depends, HTTPException, Request, status

from ..core.auth import decode_token, permissions_for
from ..core.config import settings
from ..schemas.auth import UserContext

logger = logging.getLogger(__name__)


def _extract_token(request: Request) -> str | None:
    """Extract Bearer token from Authorization header."""
    auth = request.headers.get("Authorization")
    if auth and auth.startswith("Bearer "):
        return auth[7:]
    return None


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _resolve_role(role: str) -> UserRole:
    try:
        return UserRole(role)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="No recognized role assigned",
        ) from exc


_DISABLED_USER = UserContext(
    user_id="dev-user",
    role=UserRole.ADMIN,
    email="dev@verify.local",
    name="Dev User",
    permissions=permissions_for(UserRole.ADMIN),
)


async def get_current_user(
    request: Request,
    store: InMemoryStore = Depends(get_store),
) -> UserContext:
    """FastAPI dependency: validate JWT and return UserContext.

    When AUTH_DISABLED=true, returns a dev admin user without token validation.
    """
    if settings.AUTH_DISABLED:
        return _DISABLED_USER

    token = _extract_token(request)
    if not token:
        raise _unauthorized("Missing authentication token")

    try:
        payload = decode_token(token)
    except jwt.ExpiredSignatureError as exc:
        raise _unauthorized("Token has expired") from exc
    except jwt.InvalidTokenError as exc:
        raise _unauthorized("Invalid token") from exc

    if payload.jti and payload.jti in store.revoked_tokens:
        raise _unauthorized("Token has been revoked")

    user = store.users.get(payload.sub)
    if user is not None and not user.is_active:
        raise _unauthorized("Account is disabled")

    role = _resolve_role(payload.role)
    return UserContext(
        user_id=payload.sub,
        role=role,
        email=payload.email,
        name=payload.name,
        permissions=permissions_for(role),
        token_id=payload.jti or None,
    )


# Type alias for use in route signatures
CurrentUser = Annotated[UserContext, Depends(get_current_user)]


def require_roles(*allowed_roles: UserRole):
    """Dependency factory: restrict a route to specific roles.

    Usage:
        @router.get("/admin-only", dependencies=[Depends(require_roles(UserRole.ADMIN))])
    """

    async def _check(user: CurrentUser) -> UserContext:
        if user.role not in allowed_roles:
            logger.warning(
                "RBAC denied: user=%s role=%s attempted route requiring %s",
                user.user_id,
                user.role.value,
                [r.value for r in allowed_roles],
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions",
            )
        return user

    return _check


def require_permission(resource: PermissionResource, action: PermissionAction):
    """Dependency factory: require one resource/action permission."""

    async def _check(user: CurrentUser) -> UserContext:
        if not user.can(resource, action):
            logger.warning(
                "Permission denied: user=%s role=%s needs %s:%s",
                user.user_id,
                user.role.value,
                resource.value,
                action.value,
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions",
            )
        return user

    return _check
