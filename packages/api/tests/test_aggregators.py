# This project was developed with assistance from AI tools.
"""Tests for the Stripe / Teller connection clients."""

from unittest.mock import patch
from urllib.parse import parse_qs, urlparse

import httpx
import pytest
from db import (
    AggregatorProvider,
    CustomerInfo,
    VerificationRequest,
    VerificationSettings,
    utcnow,
)

from src.core.config import settings
from src.services.aggregators import (
    MOCK_STRIPE_CLIENT_SECRET,
    MOCK_TELLER_CONNECT_URL,
    AggregatorError,
    StripeClient,
    TellerClient,
    get_aggregator,
)

_RealAsyncClient = httpx.AsyncClient


@pytest.fixture
def verification() -> VerificationRequest:
    now = utcnow()
    return VerificationRequest(
        id="ver_900",
        customer_info=CustomerInfo(full_name="Giorgi M", email="giorgi@example.com"),
        settings=VerificationSettings(),
        timeline={"created_at": now, "expires_at": now},
        verification_link="http://localhost/verify/tok-900",
        verification_token="tok-900",
        created_by="admin@example.com",
        customer_id="cust_900",
    )


def _mock_client(handler):
    def factory(**kwargs):
        return _RealAsyncClient(transport=httpx.MockTransport(handler), **kwargs)

    return patch("src.services.aggregators.httpx.AsyncClient", side_effect=factory)


def test_factory_picks_client():
    assert isinstance(get_aggregator(AggregatorProvider.STRIPE), StripeClient)
    assert isinstance(get_aggregator(AggregatorProvider.TELLER), TellerClient)


@pytest.mark.asyncio
async def test_mock_stripe_returns_canned_secret(verification):
    result = await StripeClient(mock=True).initiate("tok-900", verification)
    assert result.provider == AggregatorProvider.STRIPE
    assert result.client_secret == MOCK_STRIPE_CLIENT_SECRET
    assert result.connection_url is None


@pytest.mark.asyncio
async def test_mock_teller_returns_canned_url(verification):
    result = await TellerClient(mock=True).initiate("tok-900", verification)
    assert result.connection_url == MOCK_TELLER_CONNECT_URL
    assert result.client_secret is None


@pytest.mark.asyncio
async def test_live_stripe_creates_session(monkeypatch, verification):
    monkeypatch.setattr(settings, "STRIPE_SECRET_KEY", "sk_test_123")
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["form"] = parse_qs(request.content.decode())
        return httpx.Response(200, json={"id": "fcsess_1", "client_secret": "fcsess_secret"})

    with _mock_client(handler):
        result = await StripeClient(mock=False).initiate("tok-900", verification)

    assert result.client_secret == "fcsess_secret"
    assert seen["path"] == "/v1/financial_connections/sessions"
    assert seen["form"]["account_holder[customer]"] == ["cust_900"]
    assert seen["form"]["permissions[]"] == ["balances", "transactions", "ownership"]


@pytest.mark.asyncio
async def test_live_stripe_http_error_raises(monkeypatch, verification):
    monkeypatch.setattr(settings, "STRIPE_SECRET_KEY", "sk_test_123")

    with _mock_client(lambda request: httpx.Response(402, json={"error": {}})):
        with pytest.raises(AggregatorError) as exc_info:
            await StripeClient(mock=False).initiate("tok-900", verification)

    assert exc_info.value.provider == AggregatorProvider.STRIPE


@pytest.mark.asyncio
async def test_live_stripe_missing_secret_raises(monkeypatch, verification):
    monkeypatch.setattr(settings, "STRIPE_SECRET_KEY", "sk_test_123")

    with _mock_client(lambda request: httpx.Response(200, json={"id": "fcsess_1"})):
        with pytest.raises(AggregatorError, match="client_secret"):
            await StripeClient(mock=False).initiate("tok-900", verification)


@pytest.mark.asyncio
async def test_live_stripe_without_key_raises(monkeypatch, verification):
    monkeypatch.setattr(settings, "STRIPE_SECRET_KEY", None)
    with pytest.raises(AggregatorError, match="not configured"):
        await StripeClient(mock=False).initiate("tok-900", verification)


@pytest.mark.asyncio
async def test_live_teller_builds_connect_url(monkeypatch, verification):
    monkeypatch.setattr(settings, "TELLER_APPLICATION_ID", "app_abc")
    result = await TellerClient(mock=False).initiate("tok-900", verification)

    url = urlparse(result.connection_url)
    assert f"{url.scheme}://{url.netloc}{url.path}" == settings.TELLER_CONNECT_URL
    assert parse_qs(url.query) == {"application_id": ["app_abc"], "nonce": ["tok-900"]}


@pytest.mark.asyncio
async def test_live_teller_without_app_id_raises(monkeypatch, verification):
    monkeypatch.setattr(settings, "TELLER_APPLICATION_ID", None)
    with pytest.raises(AggregatorError):
        await TellerClient(mock=False).initiate("tok-900", verification)
