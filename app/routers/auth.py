# app/routers/auth.py
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from app.core.auth import auth_service, require_auth, require_bearer_token
from app.database import get_session
from app.models.user import User
from app.schemas.common import ApiResponse
from app.schemas.user import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    RegisterResponse,
    UserRead,
    VerifyEmailRequest,
)

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post(
    "/register",
    response_model=ApiResponse[RegisterResponse],
    status_code=status.HTTP_201_CREATED,
)
def register(
    payload: RegisterRequest,
    session: Session = Depends(get_session),
):
    """
    Create an account and email a 6-digit verification code.

    The account is created even if the email cannot be delivered.
    """
    user = auth_service.register(
        session,
        email=payload.email,
        password=payload.password,
        first_name=payload.first_name,
        last_name=payload.last_name,
    )
    return ApiResponse[RegisterResponse](
        message="Registration successful. Please check your email for the verification code.",
        data=RegisterResponse(id=user.id, email=user.email),
    )


@router.post("/verify-email", response_model=ApiResponse[UserRead])
def verify_email(
    payload: VerifyEmailRequest,
    session: Session = Depends(get_session),
):
    """Consume the verification code and mark the account verified."""
    user = auth_service.verify_email(session, payload.email, payload.verification_code)
    return ApiResponse[UserRead](
        message="Email verified successfully",
        data=auth_service.to_user_read(user),
    )


@router.post("/login", response_model=ApiResponse[AuthResponse])
def login(
    payload: LoginRequest,
    session: Session = Depends(get_session),
):
    """
    Exchange credentials for a session token (valid 7 days).

    Unknown email and wrong password produce the same 401.
    """
    result = auth_service.login(session, payload.email, payload.password)
    return ApiResponse[AuthResponse](message="Login successful", data=result)


@router.post("/logout", response_model=ApiResponse[None])
def logout(
    token: str = Depends(require_bearer_token),
    session: Session = Depends(get_session),
):
    """
    Revoke the bearer token's session.

    Always 200 for a well-formed header, whether or not the session existed.
    """
    auth_service.logout(session, token)
    return ApiResponse[None](message="Logged out successfully")


@router.get("/profile", response_model=ApiResponse[UserRead])
def profile(
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """
    Return the authenticated user's profile and active subscription.

    Auth:
      - Requires "Authorization: Bearer <token>" from /auth/login.
    """
    return ApiResponse[UserRead](
        message="Profile retrieved successfully",
        data=auth_service.get_profile(session, current_user),
    )
