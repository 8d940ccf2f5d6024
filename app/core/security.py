# app/core/security.py
import secrets
from dataclasses import dataclass
from datetime import datetime, timezone

from jose import jwt, JWTError
from passlib.context import CryptContext

from app.core.errors import InvalidSignatureError, TokenExpiredError

# pbkdf2_sha256 is cost-bounded (rounds) and has no 72-byte password limit.
pwd_ctx = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

VERIFICATION_CODE_DIGITS = 6


def now_utc() -> datetime:
    """Single clock source for session rows, claims and verification codes."""
    return datetime.now(timezone.utc)


def ensure_aware(dt: datetime | None) -> datetime | None:
    """Return a timezone-aware UTC datetime. If naive, assume UTC."""
    if dt is None:
        return None
    return dt if dt.tzinfo is not None else dt.replace(tzinfo=timezone.utc)


def hash_password(plain: str) -> str:
    return pwd_ctx.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    if not hashed:
        return False
    try:
        return pwd_ctx.verify(plain, hashed)
    except ValueError:
        # Unrecognized / corrupt hash in the row.
        return False


def generate_verification_code() -> str:
    """Uniformly random, zero-padded 6-digit numeric code."""
    return f"{secrets.randbelow(10 ** VERIFICATION_CODE_DIGITS):0{VERIFICATION_CODE_DIGITS}d}"


@dataclass(frozen=True)
class Claim:
    user_id: int
    email: str
    expires_at: int  # epoch seconds


class TokenCodec:
    """
    Stateless encode/decode of the signed session claim.

    One shared secret, one algorithm, no key rotation. Expiry is checked
    here against the caller's clock rather than the JWT library's, so the
    claim and the session row are judged by the same `now`.
    """

    def __init__(self, secret: str, algorithm: str = "HS256"):
        self.secret = secret
        self.algorithm = algorithm

    def encode(self, user_id: int, email: str, expires_at: int) -> str:
        payload = {
            "sub": str(user_id),
            "email": email,
            "exp": int(expires_at),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode(self, token: str, now: datetime | None = None) -> Claim:
        """
        Verify the signature and return the claim.

        Raises:
            InvalidSignatureError: bad signature, wrong secret, or malformed claim.
            TokenExpiredError: `exp` is not in the future.
        """
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"verify_exp": False, "verify_aud": False},
            )
        except JWTError:
            raise InvalidSignatureError()

        try:
            claim = Claim(
                user_id=int(payload["sub"]),
                email=str(payload["email"]),
                expires_at=int(payload["exp"]),
            )
        except (KeyError, TypeError, ValueError):
            raise InvalidSignatureError("Malformed token claims")

        current = now or now_utc()
        if claim.expires_at <= int(current.timestamp()):
            raise TokenExpiredError()
        return claim
