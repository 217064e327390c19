"""Pytest configuration and fixtures for custom_domains.

HTTP tests run against custom_domains.main:app through ASGITransport with
the provisioning service overridden to use in-memory fakes, so no Firestore
or provider credentials are needed.
"""

from collections.abc import AsyncIterator
from datetime import UTC, datetime, timedelta

import pytest
from httpx import ASGITransport, AsyncClient

from custom_domains.api.v1.dependencies import get_provisioning_service
from custom_domains.application.services import DomainProvisioningService
from custom_domains.core.limiter import limiter
from custom_domains.main import app
from tests.fakes import (
    FakeEmailClient,
    FakeHostingClient,
    InMemoryDomainConfigRepository,
)

TENANT_HEADERS = {"X-Tenant-ID": "tenant-1"}


class FakeClock:
    """Deterministic clock; advance() moves it forward."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 5, 1, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture
def repo() -> InMemoryDomainConfigRepository:
    return InMemoryDomainConfigRepository()


@pytest.fixture
def hosting() -> FakeHostingClient:
    return FakeHostingClient()


@pytest.fixture
def email() -> FakeEmailClient:
    return FakeEmailClient()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def service(
    repo: InMemoryDomainConfigRepository,
    hosting: FakeHostingClient,
    email: FakeEmailClient,
    clock: FakeClock,
) -> DomainProvisioningService:
    """Provisioning service wired to in-memory fakes."""
    return DomainProvisioningService(repo, hosting, email, clock=clock)


@pytest.fixture(autouse=True)
def _reset_rate_limits() -> None:
    """Rate-limit counters are process-wide; start every test from zero."""
    limiter.reset()


@pytest.fixture
async def client(service: DomainProvisioningService) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against the FastAPI app (ASGI) using the fake-backed service."""
    app.dependency_overrides[get_provisioning_service] = lambda: service
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()
