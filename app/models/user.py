# app/models/user.py
from datetime import datetime, timezone

from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(SQLModel, table=True):
    """
    Registered account.

    Verification lifecycle (one-way):
      - unverified: is_verified=False, verification_code set (may be expired)
      - verified:   is_verified=True, code and expiry cleared

    The password is only ever stored as a passlib hash.
    """

    __tablename__ = "users"

    id: int | None = Field(default=None, primary_key=True)

    email: str = Field(
        unique=True,
        index=True,
        max_length=255,
        description="Login identifier, stored lower-cased",
    )

    password_hash: str = Field(max_length=255)

    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)

    is_verified: bool = Field(default=False)

    verification_code: str | None = Field(default=None, max_length=6)
    verification_code_expires_at: datetime | None = Field(
        default=None,
        sa_type=DateTime(timezone=True),
    )

    created_at: datetime = Field(
        default_factory=_utcnow,
        sa_type=DateTime(timezone=True),
        description="Creation timestamp (UTC)",
    )
    updated_at: datetime = Field(
        default_factory=_utcnow,
        sa_type=DateTime(timezone=True),
        description="Last modification timestamp (UTC)",
    )


class UserSession(SQLModel, table=True):
    """
    One row per issued session token.

    A token is valid iff its row exists AND expires_at > now.
    Deleted on logout; never renewed (re-login creates a new row).
    """

    __tablename__ = "user_sessions"

    id: int | None = Field(default=None, primary_key=True)

    user_id: int = Field(foreign_key="users.id", index=True)

    session_token: str = Field(
        index=True,
        description="The signed JWT handed to the client",
    )

    expires_at: datetime = Field(sa_type=DateTime(timezone=True))

    created_at: datetime = Field(
        default_factory=_utcnow,
        sa_type=DateTime(timezone=True),
    )
