# This project was developed with assistance from AI tools.
"""Staff authentication routes (demo accounts)."""

import logging

from db import InMemoryStore, User, get_store
from fastapi import APIRouter, Depends, HTTPException, status

from ..core.auth import issue_token, permissions_for
from ..middleware.auth import CurrentUser
from ..schemas.auth import LoginRequest, LoginResponse, UserResponse
from ..services.staff import authenticate, revoke_token

logger = logging.getLogger(__name__)

router = APIRouter()


def _user_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        email=user.email,
        name=user.name,
        role=user.role,
        permissions=permissions_for(user.role),
        is_active=user.is_active,
        last_login=user.last_login,
    )


@router.post("/login", response_model=LoginResponse)
async def login(
    body: LoginRequest,
    store: InMemoryStore = Depends(get_store),
) -> LoginResponse:
    """Exchange demo credentials for a bearer token."""
    user = authenticate(store, body.email, body.password)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )
    token, _, expires_at = issue_token(user)
    logger.info("User %s signed in", user.id)
    return LoginResponse(user=_user_response(user), token=token, expires_at=expires_at)


@router.get("/me", response_model=UserResponse)
async def me(
    user: CurrentUser,
    store: InMemoryStore = Depends(get_store),
) -> UserResponse:
    record = store.users.get(user.user_id)
    if record is not None:
        return _user_response(record)
    return UserResponse(
        id=user.user_id,
        email=user.email,
        name=user.name,
        role=user.role,
        permissions=user.permissions,
    )


@router.post("/logout")
async def logout(
    user: CurrentUser,
    store: InMemoryStore = Depends(get_store),
) -> dict:
    """Revoke the presented token. Later requests with it get 401."""
    revoked = revoke_token(store, user.token_id)
    return {"success": True, "revoked": revoked}
