# This project was developed with assistance from AI tools.
"""In-process store backing the API.

A single ``InMemoryStore`` instance plays the role a database session plays
in a persistent deployment. ``get_store`` is the FastAPI dependency; tests
call ``reset_store`` for a clean instance.
"""

import logging
import uuid
from collections.abc import Iterator
from datetime import UTC, datetime

from .models import (
    AuditEvent,
    BorrowerSession,
    Campaign,
    CustomerFinancialProfile,
    CustomerFlag,
    CustomerNote,
    Transaction,
    User,
    VerificationRequest,
)

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    """Timezone-aware current time."""
    return datetime.now(UTC)


class InMemoryStore:
    """Dict-backed tables for every record the platform keeps."""

    def __init__(self) -> None:
        self.users: dict[str, User] = {}
        self.verifications: dict[str, VerificationRequest] = {}
        self.customers: dict[str, CustomerFinancialProfile] = {}
        self.transactions: dict[str, list[Transaction]] = {}
        self.notes: list[CustomerNote] = []
        self.flags: list[CustomerFlag] = []
        self.campaigns: dict[str, Campaign] = {}
        self.borrower_sessions: dict[str, BorrowerSession] = {}
        self.audit_events: list[AuditEvent] = []
        self.filter_state: dict[str, dict] = {}
        self.revoked_tokens: set[str] = set()
        self.seeded_at: datetime | None = None

    @staticmethod
    def next_id(prefix: str) -> str:
        return f"{prefix}_{uuid.uuid4().hex[:12]}"

    # -- verifications --

    def add_verification(self, verification: VerificationRequest) -> VerificationRequest:
        self.verifications[verification.id] = verification
        return verification

    def get_verification(self, verification_id: str) -> VerificationRequest | None:
        return self.verifications.get(verification_id)

    def find_verification_by_token(self, token: str) -> VerificationRequest | None:
        for verification in self.verifications.values():
            if verification.verification_token == token:
                return verification
        return None

    def iter_verifications(self) -> Iterator[VerificationRequest]:
        return iter(list(self.verifications.values()))

    # -- borrower sessions --

    def get_borrower_session(self, token: str) -> BorrowerSession:
        """Return the wizard session for a token, creating it on first use."""
        session = self.borrower_sessions.get(token)
        if session is None:
            session = BorrowerSession(token=token)
            self.borrower_sessions[token] = session
        return session

    def drop_borrower_session(self, token: str) -> None:
        self.borrower_sessions.pop(token, None)

    # -- customers --

    def get_customer(self, customer_id: str) -> CustomerFinancialProfile | None:
        return self.customers.get(customer_id)

    def get_transactions(self, customer_id: str) -> list[Transaction]:
        return self.transactions.get(customer_id, [])

    # -- lifecycle --

    def clear(self) -> None:
        """Drop every record. Used by force re-seeding and tests."""
        self.__init__()


_store: InMemoryStore | None = None


def get_store() -> InMemoryStore:
    """FastAPI dependency: return the process-wide store."""
    global _store  # noqa: PLW0603
    if _store is None:
        _store = InMemoryStore()
    return _store


def reset_store() -> InMemoryStore:
    """Replace the process-wide store with an empty one and return it."""
    global _store  # noqa: PLW0603
    _store = InMemoryStore()
    logger.debug("Store reset")
    return _store
