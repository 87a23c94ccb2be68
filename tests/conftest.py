"""Pytest configuration and fixtures for quote intake tests.

Provides a test client with the settings, quote store and mailer
dependencies overridden, plus fakes and a throwaway SQLite store.
"""

from typing import AsyncGenerator, List, Optional

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from quote_intake.core.config import Settings, get_settings
from quote_intake.core.database import create_session_factory, init_models
from quote_intake.core.exceptions import PersistenceError
from quote_intake.main import app
from quote_intake.services.email_service import get_quote_mailer
from quote_intake.services.quote_store import QuoteStore, get_quote_store


# ── Fakes ────────────────────────────────────────────────────────

class FakeQuoteStore:
    """Records saved quotes; raises PersistenceError when fail is set."""

    def __init__(self):
        self.saved: List = []
        self.fail = False

    async def save(self, quote, metadata):
        if self.fail:
            raise PersistenceError("database is locked")
        self.saved.append((quote, metadata))
        return len(self.saved)


class FakeMailer:
    """Records sent quotes; raises error when one is set."""

    def __init__(self):
        self.sent: List = []
        self.error: Optional[Exception] = None

    async def send_quote(self, quote, submitted_at):
        if self.error is not None:
            raise self.error
        self.sent.append((quote, submitted_at))


class ResendRecorder:
    """httpx MockTransport handler standing in for the Resend API."""

    def __init__(self, status_code: int = 200, body: str = '{"id": "email_123"}'):
        self.requests: List[httpx.Request] = []
        self.status_code = status_code
        self.body = body

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, text=self.body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


# ── Data fixtures ────────────────────────────────────────────────

@pytest.fixture
def valid_payload() -> dict:
    return {
        "name": "Jo Smith",
        "phone": "021 555 123",
        "email": "jo@example.com",
        "pickup": "Auckland",
        "delivery": "Wellington",
        "freightType": ["Frozen", "Chilled"],
    }


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        EMAIL_PROVIDER="resend",
        EMAIL_FROM="quotes@coldfreight.test",
        EMAIL_TO="ops@coldfreight.test",
        RESEND_API_KEY="re_test_key",
        DEBUG_EMAIL_ERRORS=False,
        DATABASE_URL="",
    )


@pytest.fixture
def store() -> FakeQuoteStore:
    return FakeQuoteStore()


@pytest.fixture
def mailer() -> FakeMailer:
    return FakeMailer()


@pytest.fixture
def resend_api() -> ResendRecorder:
    return ResendRecorder()


# ── Store fixtures ───────────────────────────────────────────────

@pytest_asyncio.fixture
async def sqlite_sessions(tmp_path):
    """Session factory bound to a fresh SQLite file with the quotes table."""
    engine, session_factory = create_session_factory(
        f"sqlite+aiosqlite:///{tmp_path / 'quotes.db'}"
    )
    await init_models(engine)

    yield session_factory

    await engine.dispose()


@pytest.fixture
def sqlite_store(sqlite_sessions) -> QuoteStore:
    return QuoteStore(sqlite_sessions)


# ── Client fixtures ──────────────────────────────────────────────

@pytest.fixture
def override_dependencies():
    """Install dependency overrides; cleared after the test."""

    def install(settings, store, mailer):
        app.dependency_overrides[get_settings] = lambda: settings
        app.dependency_overrides[get_quote_store] = lambda: store
        app.dependency_overrides[get_quote_mailer] = lambda: mailer

    yield install

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(
    override_dependencies, test_settings, store, mailer
) -> AsyncGenerator[AsyncClient, None]:
    """Test client wired to the fake store and fake mailer."""
    override_dependencies(test_settings, store, mailer)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def raw_client() -> AsyncGenerator[AsyncClient, None]:
    """Test client with whatever overrides the test installs itself."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
