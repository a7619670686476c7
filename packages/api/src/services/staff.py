# This project was developed with assistance from AI tools.
"""Staff sign-in against the demo user table."""

import logging

from db import InMemoryStore, User, utcnow

from ..core.auth import verify_password

logger = logging.getLogger(__name__)


def find_user_by_email(store: InMemoryStore, email: str) -> User | None:
    wanted = email.strip().lower()
    for user in store.users.values():
        if user.email.lower() == wanted:
            return user
    return None


def authenticate(store: InMemoryStore, email: str, password: str) -> User | None:
    """Return the user if the credentials match an active account, else None."""
    user = find_user_by_email(store, email)
    if user is None or not user.is_active:
        logger.info("Login rejected for %s", email)
        return None
    if not verify_password(password, user.password_hash):
        logger.info("Login rejected for %s", email)
        return None
    user.last_login = utcnow()
    return user


def revoke_token(store: InMemoryStore, token_id: str | None) -> bool:
    """Revoke a session token by its jti. Returns False if there was nothing to revoke."""
    if not token_id:
        return False
    store.revoked_tokens.add(token_id)
    return True
