"""Pytest configuration and fixtures for the subscription bridge.

Uses app.main:app for HTTP tests. Required settings are set before the app
is imported; the remote subscription service is replaced by
FakeSubscriptionService on app.state (the ASGI transport does not run the
lifespan, so nothing real is wired).
"""

import os

os.environ.setdefault("SOAP_KEY", "test-key")
os.environ.setdefault("TELEMETRY_ENABLED", "false")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from app.domain.enums import SubscriptionOutcome  # noqa: E402
from app.domain.value_objects import SubscriptionRecord  # noqa: E402
from app.main import app  # noqa: E402


class FakeSubscriptionService:
    """In-memory stand-in for SubscriptionServiceClient.

    Each method records its call; set error to make every call raise it.
    """

    def __init__(self) -> None:
        self.validate_outcomes: dict[tuple[int, int], SubscriptionOutcome] = {}
        self.approve_outcome = SubscriptionOutcome.APPROVED
        self.reject_outcome = SubscriptionOutcome.REJECTED
        self.pending: list[SubscriptionRecord] = []
        self.subscribers: list[SubscriptionRecord] = []
        self.error: Exception | None = None
        self.calls: list[tuple[str, tuple[int, ...]]] = []

    def _record(self, name: str, *args: int) -> None:
        self.calls.append((name, args))
        if self.error is not None:
            raise self.error

    async def validate(self, creator_id: int, subscriber_id: int) -> SubscriptionOutcome:
        self._record("validate", creator_id, subscriber_id)
        return self.validate_outcomes.get(
            (creator_id, subscriber_id), SubscriptionOutcome.UNCLASSIFIED
        )

    async def approve(self, creator_id: int, subscriber_id: int) -> SubscriptionOutcome:
        self._record("approve", creator_id, subscriber_id)
        return self.approve_outcome

    async def reject(self, creator_id: int, subscriber_id: int) -> SubscriptionOutcome:
        self._record("reject", creator_id, subscriber_id)
        return self.reject_outcome

    async def list_pending_for_creator(self, subscriber_id: int) -> list[SubscriptionRecord]:
        self._record("list_pending", subscriber_id)
        return list(self.pending)

    async def list_subscribers(self, creator_id: int) -> list[SubscriptionRecord]:
        self._record("list_subscribers", creator_id)
        return list(self.subscribers)


@pytest.fixture
def fake_service() -> FakeSubscriptionService:
    """Fake remote service wired into app.state for the duration of the test."""
    service = FakeSubscriptionService()
    app.state.subscription_client = service
    yield service
    app.state.subscription_client = None


@pytest.fixture
async def client() -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
