# app/schemas/user.py
from datetime import datetime

from pydantic import EmailStr, ConfigDict, field_validator
from sqlmodel import SQLModel, Field


def _normalize_email(v: str) -> str:
    return v.strip().lower()


def _normalize_optional_name(v: str | None) -> str | None:
    if v is None:
        return v
    v = v.strip()
    return v or None


class RegisterRequest(SQLModel):
    """
    Payload for account creation.

    Validation rules:
      - email must be a valid EmailStr (stored lower-cased)
      - password must be at least 8 characters
      - blank names are treated as missing
    """

    model_config = ConfigDict(extra="forbid")

    email: EmailStr
    password: str = Field(min_length=8, max_length=128)
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return _normalize_email(v)

    @field_validator("first_name", "last_name")
    @classmethod
    def normalize_name(cls, v: str | None) -> str | None:
        return _normalize_optional_name(v)


class VerifyEmailRequest(SQLModel):
    """Email + the 6-digit code that was mailed on registration."""

    model_config = ConfigDict(extra="forbid")

    email: EmailStr
    verification_code: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return _normalize_email(v)

    @field_validator("verification_code")
    @classmethod
    def six_digits(cls, v: str) -> str:
        v = v.strip()
        if len(v) != 6 or not (v.isascii() and v.isdigit()):
            raise ValueError("verification code must be 6 digits")
        return v


class LoginRequest(SQLModel):
    model_config = ConfigDict(extra="forbid")

    email: EmailStr
    password: str = Field(min_length=1, max_length=128)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return _normalize_email(v)


class RegisterResponse(SQLModel):
    id: int
    email: str


class SubscriptionRead(SQLModel):
    """Subscription summary exposed to clients (no billing identifiers)."""

    plan_type: str
    status: str
    current_period_end: datetime | None = None


class UserRead(SQLModel):
    """
    Sanitized user view. Never carries password_hash or verification_code.
    """

    id: int
    email: str
    first_name: str | None = None
    last_name: str | None = None
    is_verified: bool
    subscription: SubscriptionRead | None = None


class AuthResponse(SQLModel):
    """Returned by /auth/login."""

    user: UserRead
    token: str
    expires_at: datetime
