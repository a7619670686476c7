# This project was developed with assistance from AI tools.
"""Persona factories for functional tests.

Each function returns a UserContext with the permissions
``core/auth.py:permissions_for()`` grants that role. IDs and emails match
the seeded demo users so ownership checks line up with fixture data.
"""

from db.enums import UserRole

from src.core.auth import permissions_for
from src.schemas.auth import UserContext

# Fixed IDs for cross-test referencing
ADMIN_USER_ID = "usr_admin"
AGENT_USER_ID = "usr_agent1"
SUPERVISOR_USER_ID = "usr_supervisor"


def admin() -> UserContext:
    return UserContext(
        user_id=ADMIN_USER_ID,
        role=UserRole.ADMIN,
        email="admin@example.com",
        name="Admin User",
        permissions=permissions_for(UserRole.ADMIN),
    )


def agent() -> UserContext:
    return UserContext(
        user_id=AGENT_USER_ID,
        role=UserRole.AGENT,
        email="agent1@example.com",
        name="Alex Rivera",
        permissions=permissions_for(UserRole.AGENT),
    )


def supervisor() -> UserContext:
    return UserContext(
        user_id=SUPERVISOR_USER_ID,
        role=UserRole.SUPERVISOR,
        email="supervisor@example.com",
        name="Morgan Lee",
        permissions=permissions_for(UserRole.SUPERVISOR),
    )
