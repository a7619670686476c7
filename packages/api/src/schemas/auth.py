# This project was developed with assistance from AI tools.
"""Authentication and authorization schemas."""

from datetime import datetime

from db.enums import PermissionAction, PermissionResource, UserRole
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..services.validation import validate_email


class PermissionItem(BaseModel):
    """Actions a role may perform on one resource."""

    resource: PermissionResource
    actions: list[PermissionAction]


class UserContext(BaseModel):
    """Injected by auth middleware into every authenticated request."""

    model_config = ConfigDict(frozen=True)

    user_id: str
    role: UserRole
    email: str
    name: str
    permissions: list[PermissionItem] = Field(default_factory=list)
    token_id: str | None = None

    def can(self, resource: PermissionResource, action: PermissionAction) -> bool:
        return any(p.resource == resource and action in p.actions for p in self.permissions)


class TokenPayload(BaseModel):
    """Decoded staff session token claims."""

    sub: str
    email: str = ""
    name: str = ""
    role: str = ""
    jti: str = ""
    exp: int | None = None


class LoginRequest(BaseModel):
    email: str
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def _check_email(cls, value: str) -> str:
        ok, message, normalized = validate_email(value)
        if not ok:
            raise ValueError(message)
        return normalized


class UserResponse(BaseModel):
    """Staff user as returned by /auth endpoints."""

    id: str
    email: str
    name: str
    role: UserRole
    permissions: list[PermissionItem]
    is_active: bool = True
    last_login: datetime | None = None


class LoginResponse(BaseModel):
    user: UserResponse
    token: str
    expires_at: datetime
