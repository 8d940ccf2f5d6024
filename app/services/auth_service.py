# app/services/auth_service.py
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from app.core.errors import (
    CodeExpiredError,
    ConflictError,
    InvalidCodeError,
    InvalidCredentialsError,
    NotFoundError,
    NotVerifiedError,
    TokenError,
    UnauthorizedError,
)
from app.core.security import (
    TokenCodec,
    ensure_aware,
    generate_verification_code,
    hash_password,
    now_utc,
    verify_password,
)
from app.models.subscription import Subscription
from app.models.user import User, UserSession
from app.repositories.session_repo import SessionRepository
from app.repositories.subscription_repo import SubscriptionRepository
from app.repositories.user_repo import UserRepository
from app.schemas.user import AuthResponse, SubscriptionRead, UserRead

logger = logging.getLogger(__name__)

# (to_email, code) -> None; may raise, failures are logged and ignored.
Notifier = Callable[[str, str], None]


@dataclass
class AuthSettings:
    session_ttl: timedelta = timedelta(days=7)
    verification_code_ttl: timedelta = timedelta(hours=24)


class AuthService:
    """
    Registration, email verification, login sessions and token validation.

    Responsibilities:
      - hash credentials and issue verification codes
      - issue signed session tokens and persist one session row per token
      - validate tokens against BOTH the session row and the signed claim
      - map storage outcomes to the error taxonomy in app.core.errors

    Two ambiguities are intentional and must stay:
      - unknown email and wrong password both raise InvalidCredentialsError
      - a reused code and a wrong code both raise InvalidCodeError
    """

    def __init__(
        self,
        users: UserRepository,
        sessions: SessionRepository,
        subscriptions: SubscriptionRepository,
        codec: TokenCodec,
        notifier: Notifier,
        config: AuthSettings | None = None,
        clock: Callable[[], datetime] = now_utc,
    ):
        self.users = users
        self.sessions = sessions
        self.subscriptions = subscriptions
        self.codec = codec
        self.notifier = notifier
        self.config = config or AuthSettings()
        self.clock = clock

    # ----- views -----

    @staticmethod
    def to_user_read(user: User, subscription: Subscription | None = None) -> UserRead:
        return UserRead(
            id=user.id,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            is_verified=user.is_verified,
            subscription=(
                SubscriptionRead(
                    plan_type=subscription.plan_type,
                    status=subscription.status,
                    current_period_end=ensure_aware(subscription.current_period_end),
                )
                if subscription
                else None
            ),
        )

    # ----- registration / verification -----

    def register(
        self,
        session: Session,
        email: str,
        password: str,
        first_name: str | None = None,
        last_name: str | None = None,
    ) -> User:
        """
        Create an unverified account and try to mail its verification code.

        Raises:
            ConflictError: email already registered (pre-check or unique
                constraint on insert).
        """
        if self.users.get_by_email(session, email) is not None:
            raise ConflictError()

        now = self.clock()
        code = generate_verification_code()
        user = User(
            email=email,
            password_hash=hash_password(password),
            first_name=first_name,
            last_name=last_name,
            is_verified=False,
            verification_code=code,
            verification_code_expires_at=now + self.config.verification_code_ttl,
            created_at=now,
            updated_at=now,
        )

        try:
            user = self.users.create(session, user)
        except IntegrityError:
            # Concurrent registration won the race on the unique email.
            session.rollback()
            raise ConflictError()

        logger.info("Registered user id=%s", user.id)

        try:
            self.notifier(user.email, code)
        except Exception:
            # Account exists either way; delivery is best-effort.
            logger.warning(
                "Failed to send verification email to %s; user registered anyway",
                user.email,
                exc_info=True,
            )

        return user

    def verify_email(self, session: Session, email: str, code: str) -> User:
        """
        Consume a verification code.

        Raises:
            InvalidCodeError: no user holds this (email, code) pair,
                including codes that were already consumed.
            CodeExpiredError: the code matched but its expiry has passed.
        """
        user = self.users.get_by_email_and_code(session, email, code)
        if user is None:
            raise InvalidCodeError()

        expires_at = ensure_aware(user.verification_code_expires_at)
        now = self.clock()
        if expires_at is not None and now > expires_at:
            raise CodeExpiredError()

        user.is_verified = True
        user.verification_code = None
        user.verification_code_expires_at = None
        user.updated_at = now
        user = self.users.update(session, user)

        logger.info("Verified email for user id=%s", user.id)
        return user

    # ----- sessions -----

    def login(self, session: Session, email: str, password: str) -> AuthResponse:
        """
        Check credentials, issue a signed token and persist its session row.

        Raises:
            InvalidCredentialsError: unknown email or wrong password.
            NotVerifiedError: account has not completed verification.
        """
        user = self.users.get_by_email(session, email)
        if user is None:
            raise InvalidCredentialsError()

        if not user.is_verified:
            raise NotVerifiedError()

        if not verify_password(password, user.password_hash):
            raise InvalidCredentialsError()

        subscription = self.subscriptions.get_latest_active(session, user.id)

        now = self.clock()
        expires_at = (now + self.config.session_ttl).replace(microsecond=0)
        token = self.codec.encode(user.id, user.email, int(expires_at.timestamp()))

        self.sessions.delete_expired_for_user(session, user.id, now)
        self.sessions.create(
            session,
            UserSession(
                user_id=user.id,
                session_token=token,
                expires_at=expires_at,
                created_at=now,
            ),
        )

        logger.info("User id=%s logged in", user.id)
        return AuthResponse(
            user=self.to_user_read(user, subscription),
            token=token,
            expires_at=expires_at,
        )

    def logout(self, session: Session, token: str) -> None:
        """Revoke a session token. Unknown tokens are ignored."""
        removed = self.sessions.delete_by_token(session, token)
        logger.info("Logout removed %d session row(s)", removed)

    def validate_token(self, session: Session, token: str) -> User:
        """
        Resolve a bearer token to its user.

        Both checks must pass, judged with the same clock:
          (a) a session row exists for the token with expires_at > now
          (b) the token verifies against the secret with an unexpired claim

        Raises:
            UnauthorizedError: either check failed.
            NotFoundError: the claim's user no longer exists.
        """
        now = self.clock()

        row = self.sessions.get_by_token(session, token)
        if row is None or ensure_aware(row.expires_at) <= now:
            raise UnauthorizedError()

        try:
            claim = self.codec.decode(token, now=now)
        except TokenError:
            raise UnauthorizedError()

        user = self.users.get_by_id(session, claim.user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def get_profile(self, session: Session, user: User) -> UserRead:
        subscription = self.subscriptions.get_latest_active(session, user.id)
        return self.to_user_read(user, subscription)
