# This project was developed with assistance from AI tools.
"""Pure auth utility functions with no FastAPI or HTTP dependencies.

Role permissions, password hashing, and staff session tokens. Kept apart
from ``middleware/auth.py`` so services and the seeder can use them without
pulling in request handling.
"""

import hashlib
import hmac
import uuid
from datetime import datetime, timedelta

import jwt
from db import User, utcnow
from db.enums import PermissionAction, PermissionResource, UserRole

from ..schemas.auth import PermissionItem, TokenPayload, UserContext
from .config import settings

_ALL_ACTIONS = list(PermissionAction)
_READ_UPDATE = [PermissionAction.READ, PermissionAction.UPDATE]

ROLE_PERMISSIONS: dict[UserRole, list[PermissionItem]] = {
    UserRole.ADMIN: [
        PermissionItem(resource=resource, actions=_ALL_ACTIONS) for resource in PermissionResource
    ],
    UserRole.SUPERVISOR: [
        PermissionItem(resource=resource, actions=_READ_UPDATE) for resource in PermissionResource
    ],
    UserRole.AGENT: [
        PermissionItem(
            resource=PermissionResource.VERIFICATIONS,
            actions=[PermissionAction.CREATE, PermissionAction.READ, PermissionAction.UPDATE],
        ),
        PermissionItem(resource=PermissionResource.CUSTOMERS, actions=[PermissionAction.READ]),
    ],
}


def permissions_for(role: UserRole) -> list[PermissionItem]:
    return list(ROLE_PERMISSIONS.get(role, []))


def hash_password(password: str) -> str:
    """SHA-256 digest of a demo password. Demo accounts only."""
    return hashlib.sha256(password.encode()).hexdigest()


def verify_password(password: str, password_hash: str) -> bool:
    return hmac.compare_digest(hash_password(password), password_hash)


def build_user_context(user: User, token_id: str | None = None) -> UserContext:
    return UserContext(
        user_id=user.id,
        role=user.role,
        email=user.email,
        name=user.name,
        permissions=permissions_for(user.role),
        token_id=token_id,
    )


def issue_token(user: User, now: datetime | None = None) -> tuple[str, TokenPayload, datetime]:
    """Sign a staff session token. Returns (token, claims, expires_at)."""
    now = now or utcnow()
    expires_at = now + timedelta(hours=settings.JWT_TTL_HOURS)
    claims = TokenPayload(
        sub=user.id,
        email=user.email,
        name=user.name,
        role=user.role.value,
        jti=uuid.uuid4().hex,
        exp=int(expires_at.timestamp()),
    )
    token = jwt.encode(claims.model_dump(), settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)
    return token, claims, expires_at


def decode_token(token: str) -> TokenPayload:
    """Validate signature and expiry. Raises jwt.InvalidTokenError subclasses."""
    payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    return TokenPayload(**payload)
