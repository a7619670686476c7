# This project was developed with assistance from AI tools.
"""Shared fixtures for API unit tests."""

from unittest.mock import MagicMock

import pytest
from db import InMemoryStore, get_store
from fastapi.testclient import TestClient

from src.core.config import settings
from src.main import app as real_app
from src.services.notifications import NotificationService, get_notification_service
from src.services.seed.seeder import seed_demo_data


@pytest.fixture
def store() -> InMemoryStore:
    """Empty store."""
    return InMemoryStore()


@pytest.fixture
def seeded_store() -> InMemoryStore:
    """Store loaded with the demo fixtures."""
    store = InMemoryStore()
    seed_demo_data(store)
    return store


@pytest.fixture
def notifier() -> MagicMock:
    """Stand-in for the debounced link sender."""
    return MagicMock(spec=NotificationService)


@pytest.fixture
def client(monkeypatch, seeded_store, notifier):
    """Full app with auth bypassed, a seeded store, and a mock notifier."""
    monkeypatch.setattr(settings, "AUTH_DISABLED", True)
    real_app.dependency_overrides[get_store] = lambda: seeded_store
    real_app.dependency_overrides[get_notification_service] = lambda: notifier
    yield TestClient(real_app)
    real_app.dependency_overrides.clear()
