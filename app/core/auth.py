# app/core/auth.py
from datetime import timedelta

from fastapi import Depends, Header
from sqlmodel import Session

from app.core.config import get_settings
from app.core.email_client import send_verification_email
from app.core.errors import InputValidationError, UnauthorizedError
from app.core.security import TokenCodec
from app.database import get_session
from app.models.user import User
from app.repositories.session_repo import SessionRepository
from app.repositories.subscription_repo import SubscriptionRepository
from app.repositories.user_repo import UserRepository
from app.services.auth_service import AuthService, AuthSettings

settings = get_settings()

BEARER_PREFIX = "Bearer "

auth_service = AuthService(
    users=UserRepository(),
    sessions=SessionRepository(),
    subscriptions=SubscriptionRepository(),
    codec=TokenCodec(settings.JWT_SECRET, settings.JWT_ALG),
    notifier=send_verification_email,
    config=AuthSettings(
        session_ttl=timedelta(days=settings.SESSION_TTL_DAYS),
        verification_code_ttl=timedelta(hours=settings.VERIFICATION_CODE_TTL_HOURS),
    ),
)


def parse_bearer(authorization: str | None) -> str | None:
    """
    Extract the token from an Authorization header value.

    The value must start with the literal "Bearer " (case-sensitive) and
    carry a non-empty token. Returns None otherwise.
    """
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX):].strip()
    return token or None


def require_bearer_token(authorization: str | None = Header(default=None)) -> str:
    """
    Dependency for routes that need the raw token but treat a bad header
    as a client error (logout).

    Raises:
        InputValidationError(400): header missing or malformed.
    """
    token = parse_bearer(authorization)
    if token is None:
        raise InputValidationError("Missing or malformed Authorization header")
    return token


def require_auth(
    authorization: str | None = Header(default=None),
    session: Session = Depends(get_session),
) -> User:
    """
    Enforce authentication.

    Flow:
      1. Parse "Bearer <token>".
      2. Check the session row and the signed claim (AuthService.validate_token).
      3. Return the freshly loaded User.

    Raises:
        UnauthorizedError(401): header missing/malformed or token invalid.
        NotFoundError(404): token valid but the user row is gone.
    """
    token = parse_bearer(authorization)
    if token is None:
        raise UnauthorizedError("Authentication required")
    return auth_service.validate_token(session, token)
