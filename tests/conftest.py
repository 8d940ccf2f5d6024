"""Shared fixtures: in-memory SQLite database, TestClient, fake notifier."""

import os

# Must be set before any app module reads settings.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ.pop("DATABASE_SSLMODE", None)
os.environ.pop("OPENROUTER_API_KEY", None)

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel

from app.core import auth as core_auth
from app.core.security import TokenCodec
from app.database import engine
from app.main import app
from app.repositories.session_repo import SessionRepository
from app.repositories.subscription_repo import SubscriptionRepository
from app.repositories.user_repo import UserRepository
from app.services.auth_service import AuthService
from tests.fakes import EmailRecorder

TEST_SECRET = "test-secret"


@pytest.fixture(autouse=True)
def reset_db():
    """Fresh schema for every test."""
    SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)
    yield


@pytest.fixture
def session():
    with Session(engine) as s:
        yield s


@pytest.fixture(autouse=True)
def emails(monkeypatch: pytest.MonkeyPatch) -> EmailRecorder:
    """Replace SMTP delivery for the app-wide auth service."""
    recorder = EmailRecorder()
    monkeypatch.setattr(core_auth.auth_service, "notifier", recorder)
    return recorder


@pytest.fixture
def client() -> TestClient:
    """Provide a TestClient for the FastAPI app."""
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def codec() -> TokenCodec:
    return TokenCodec(TEST_SECRET)


@pytest.fixture
def auth(codec: TokenCodec, emails: EmailRecorder) -> AuthService:
    """Service-level AuthService wired to the test database repositories."""
    return AuthService(
        users=UserRepository(),
        sessions=SessionRepository(),
        subscriptions=SubscriptionRepository(),
        codec=codec,
        notifier=emails,
    )
