# This project was developed with assistance from AI tools.
"""Bank data aggregator clients.

Stripe Financial Connections hands the browser a client secret; Teller
Connect hands it a redirect URL. In mock mode both return canned values so
the wizard can be exercised without provider credentials.
"""

import logging
from typing import Protocol
from urllib.parse import urlencode

import httpx
from db import AggregatorProvider, VerificationRequest

from ..core.config import settings
from ..schemas.borrower import ConnectionInitResponse

logger = logging.getLogger(__name__)

MOCK_STRIPE_CLIENT_SECRET = "stripe_client_secret_mock"
MOCK_TELLER_CONNECT_URL = "https://teller.io/connect/mock_url"

_STRIPE_PERMISSIONS = ("balances", "transactions", "ownership")


class AggregatorError(RuntimeError):
    """Provider could not start a bank connection. Always retryable."""

    def __init__(self, provider: AggregatorProvider, message: str) -> None:
        super().__init__(message)
        self.provider = provider


class AggregatorClient(Protocol):
    provider: AggregatorProvider

    async def initiate(
        self, token: str, verification: VerificationRequest
    ) -> ConnectionInitResponse: ...


class StripeClient:
    provider = AggregatorProvider.STRIPE

    def __init__(self, mock: bool | None = None) -> None:
        self.mock = settings.AGGREGATOR_MOCK if mock is None else mock

    async def initiate(
        self, token: str, verification: VerificationRequest
    ) -> ConnectionInitResponse:
        if self.mock:
            return ConnectionInitResponse(
                provider=self.provider, client_secret=MOCK_STRIPE_CLIENT_SECRET
            )
        if not settings.STRIPE_SECRET_KEY:
            raise AggregatorError(self.provider, "Stripe is not configured")

        data: list[tuple[str, str]] = [
            ("account_holder[type]", "customer"),
            ("account_holder[customer]", verification.customer_id or token),
        ]
        data.extend(("permissions[]", p) for p in _STRIPE_PERMISSIONS)
        try:
            async with httpx.AsyncClient(
                base_url=settings.STRIPE_API_BASE,
                timeout=settings.AGGREGATOR_TIMEOUT_SECONDS,
            ) as client:
                response = await client.post(
                    "/v1/financial_connections/sessions",
                    data=data,
                    auth=(settings.STRIPE_SECRET_KEY, ""),
                )
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPError as exc:
            logger.warning("Stripe session creation failed for %s", verification.id, exc_info=True)
            raise AggregatorError(self.provider, "Failed to create Stripe session") from exc

        client_secret = payload.get("client_secret")
        if not client_secret:
            raise AggregatorError(self.provider, "Stripe response missing client_secret")
        return ConnectionInitResponse(provider=self.provider, client_secret=client_secret)


class TellerClient:
    provider = AggregatorProvider.TELLER

    def __init__(self, mock: bool | None = None) -> None:
        self.mock = settings.AGGREGATOR_MOCK if mock is None else mock

    async def initiate(
        self, token: str, verification: VerificationRequest
    ) -> ConnectionInitResponse:
        if self.mock:
            return ConnectionInitResponse(
                provider=self.provider, connection_url=MOCK_TELLER_CONNECT_URL
            )
        if not settings.TELLER_APPLICATION_ID:
            raise AggregatorError(self.provider, "Teller is not configured")
        query = urlencode({"application_id": settings.TELLER_APPLICATION_ID, "nonce": token})
        return ConnectionInitResponse(
            provider=self.provider,
            connection_url=f"{settings.TELLER_CONNECT_URL}?{query}",
        )


def get_aggregator(provider: AggregatorProvider) -> AggregatorClient:
    if provider == AggregatorProvider.STRIPE:
        return StripeClient()
    return TellerClient()


def log_aggregator_status() -> None:
    """Log whether aggregators are mocked or live. Call at startup."""
    if settings.AGGREGATOR_MOCK:
        logger.warning("Bank aggregators: MOCK (canned Stripe secret / Teller URL)")
        return
    logger.warning(
        "Bank aggregators: LIVE (stripe=%s, teller=%s)",
        "configured" if settings.STRIPE_SECRET_KEY else "missing key",
        "configured" if settings.TELLER_APPLICATION_ID else "missing application id",
    )
