# This project was developed with assistance from AI tools.
"""Borrower audit trail.

Append-only events with a SHA-256 hash chain for tamper evidence. Each
event's ``prev_hash`` is the hash of the event before it; the first event
links to ``"genesis"``. When the trail is capped, the oldest events are
dropped and verification starts from the first retained event.
"""

import hashlib
import json
import logging

from db import AuditEvent, InMemoryStore, utcnow
from db.config import store_settings
from db.enums import AuditEventType

logger = logging.getLogger(__name__)

GENESIS = "genesis"


def _compute_hash(event_id: int, timestamp: str, event_data: dict | None) -> str:
    """Compute SHA-256 hash of an audit event's key fields."""
    payload = f"{event_id}|{timestamp}|{json.dumps(event_data, sort_keys=True, default=str)}"
    return hashlib.sha256(payload.encode()).hexdigest()


def _hash_event(event: AuditEvent) -> str:
    return _compute_hash(event.id, event.timestamp.isoformat(), event.event_data)


def write_audit_event(
    store: InMemoryStore,
    *,
    event_type: AuditEventType | str,
    token: str | None = None,
    path: str | None = None,
    event_data: dict | None = None,
) -> AuditEvent:
    """Append one audit event linked to the previous one.

    Args:
        store: Store holding the trail.
        event_type: Event category (page view, consent change, ...).
        token: Borrower verification token the event belongs to, if any.
        path: Wizard path the event happened on.
        event_data: Arbitrary JSON-serializable payload.

    Returns:
        The appended AuditEvent (with prev_hash set).
    """
    events = store.audit_events
    prev = events[-1] if events else None
    audit = AuditEvent(
        id=prev.id + 1 if prev else 1,
        event_type=AuditEventType(event_type),
        timestamp=utcnow(),
        token=token,
        path=path,
        event_data=event_data,
        prev_hash=_hash_event(prev) if prev else GENESIS,
    )
    events.append(audit)

    overflow = len(events) - store_settings.MAX_AUDIT_EVENTS
    if overflow > 0:
        del events[:overflow]
    return audit


def verify_audit_chain(store: InMemoryStore) -> dict:
    """Verify the integrity of the audit event hash chain.

    Returns:
        {"status": "OK", "events_checked": N} on success, or
        {"status": "TAMPERED", "first_break_id": id, "events_checked": N}
        if a mismatch is found.
    """
    events = store.audit_events
    if not events:
        return {"status": "OK", "events_checked": 0}

    for i, event in enumerate(events):
        if i == 0:
            # Older events may have been trimmed; only id 1 must link to genesis.
            if event.id != 1:
                continue
            expected = GENESIS
        else:
            expected = _hash_event(events[i - 1])

        if event.prev_hash != expected:
            logger.warning("Audit chain break at event %d", event.id)
            return {
                "status": "TAMPERED",
                "first_break_id": event.id,
                "events_checked": i + 1,
            }

    return {"status": "OK", "events_checked": len(events)}


def get_audit_chain_length(store: InMemoryStore) -> int:
    return len(store.audit_events)


def get_events_by_token(store: InMemoryStore, token: str) -> list[AuditEvent]:
    """Return all audit events for one borrower token, oldest first."""
    return sorted(
        (e for e in store.audit_events if e.token == token),
        key=lambda e: e.timestamp,
    )
