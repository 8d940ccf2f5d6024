# app/core/errors.py
"""
Error taxonomy shared by services and routers.

Services raise these; `app.main` renders them as the API envelope
`{"success": false, "message": ..., "data": null}` with `status_code`.
Messages are fixed and user-safe; upstream/storage details stay in logs.
"""

from fastapi import status


class AppError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class InputValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid request"


class ConflictError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "User already exists"


class InvalidCodeError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid verification code"


class CodeExpiredError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Verification code has expired"


class InvalidCredentialsError(AppError):
    # Same message for unknown email and wrong password.
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid credentials"


class NotVerifiedError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Please verify your email before logging in"


class UnauthorizedError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid or expired session"


class TokenError(UnauthorizedError):
    """Base for signed-claim decode failures."""


class InvalidSignatureError(TokenError):
    message = "Invalid token signature"


class TokenExpiredError(TokenError):
    message = "Token has expired"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"


class UpstreamUnavailableError(AppError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    message = "Service temporarily unavailable"


class ProviderError(Exception):
    """
    Raised by outbound provider clients (timeout, network, bad status,
    malformed payload). Never rendered directly; callers either skip to
    the next provider or map it to UpstreamUnavailableError.
    """
