# This project was developed with assistance from AI tools.
"""Fixtures for functional tests.

The real app from ``src.main`` is a module singleton. ``_clean_overrides``
ensures dependency_overrides are cleared after every test so persona
configuration from one test never leaks into the next.
"""

from unittest.mock import MagicMock

import pytest
from db import InMemoryStore, get_store
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.main import app as real_app
from src.middleware.auth import get_current_user
from src.schemas.auth import UserContext
from src.services.notifications import NotificationService, get_notification_service
from src.services.seed.seeder import seed_demo_data


@pytest.fixture(autouse=True)
def _clean_overrides():
    """Clear app dependency overrides after each test."""
    yield
    real_app.dependency_overrides.clear()


@pytest.fixture
def app() -> FastAPI:
    """Return the real FastAPI app with all routers mounted."""
    return real_app


@pytest.fixture
def demo_store() -> InMemoryStore:
    """Fresh store with the demo fixtures, shared by every client in a test."""
    store = InMemoryStore()
    seed_demo_data(store)
    return store


@pytest.fixture
def notifier() -> MagicMock:
    return MagicMock(spec=NotificationService)


def configure_app(app: FastAPI, store: InMemoryStore, notifier: MagicMock) -> None:
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_notification_service] = lambda: notifier


@pytest.fixture
def make_client(app, demo_store, notifier):
    """Factory fixture: configure persona + demo store, return TestClient."""

    def _make(user: UserContext) -> TestClient:
        configure_app(app, demo_store, notifier)
        app.dependency_overrides[get_current_user] = lambda: user
        return TestClient(app)

    return _make


@pytest.fixture
def borrower_client(app, demo_store, notifier) -> TestClient:
    """Unauthenticated client for the borrower wizard and public pages."""
    configure_app(app, demo_store, notifier)
    return TestClient(app)
