"""Authentication API endpoints."""

import logging
import time
from typing import Annotated
from urllib.parse import quote

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from stockroom.api.dependencies import get_current_user
from stockroom.config import get_settings
from stockroom.database import get_db
from stockroom.models.user import User
from stockroom.schemas.auth import (
    AuthResponse,
    ForgotPasswordRequest,
    MessageResponse,
    ResetPasswordRequest,
    SendOtpRequest,
    UserLogin,
    UserResponse,
    UserSignup,
    VerifyOtpRequest,
)
from stockroom.services.auth import (
    authenticate_user,
    create_access_token,
    create_user,
    get_user_by_email,
    set_password,
)
from stockroom.services.mailer import MailerError, send_otp_email, send_password_reset_email
from stockroom.services.otp import (
    EmailAlreadyRegisteredError,
    OtpVerification,
    consume_verification,
    is_email_verified,
    send_otp,
    verify_otp,
)
from stockroom.services.password_reset import (
    consume_password_reset_token,
    issue_password_reset_token,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])

RESET_REQUESTED_MESSAGE = "If an account exists for this email, a reset link is on the way."
UNKNOWN_ACCOUNT_DELAY_SECONDS = 0.5

OTP_RESPONSES = {
    OtpVerification.VERIFIED: (status.HTTP_200_OK, "Email verified"),
    OtpVerification.ALREADY_VERIFIED: (status.HTTP_200_OK, "Email already verified"),
    OtpVerification.NOT_FOUND: (
        status.HTTP_404_NOT_FOUND,
        "Verification record not found. Please request a new code.",
    ),
    OtpVerification.EXPIRED: (
        status.HTTP_410_GONE,
        "Verification code has expired. Please request a new code.",
    ),
    OtpVerification.MISMATCH: (status.HTTP_400_BAD_REQUEST, "Invalid verification code"),
}


@router.post("/send-otp", response_model=MessageResponse)
def request_otp(
    request: SendOtpRequest,
    db: Annotated[Session, Depends(get_db)],
):
    """Email a verification code to an unregistered address."""
    try:
        otp = send_otp(db, request.email)
    except EmailAlreadyRegisteredError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email is already registered",
        ) from None

    try:
        send_otp_email(request.email, otp)
    except MailerError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unable to send the verification code. Please try again.",
        ) from None

    return MessageResponse(message="Verification code sent")


@router.post("/verify-otp", response_model=MessageResponse)
def confirm_otp(
    request: VerifyOtpRequest,
    db: Annotated[Session, Depends(get_db)],
):
    """Check a verification code."""
    outcome = verify_otp(db, request.email, request.otp)
    status_code, message = OTP_RESPONSES[outcome]
    if not outcome.ok:
        raise HTTPException(status_code=status_code, detail=message)
    return MessageResponse(message=message)


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def signup(
    user_data: UserSignup,
    db: Annotated[Session, Depends(get_db)],
):
    """Create an account. Requires a verified email unless verification is disabled."""
    if get_user_by_email(db, user_data.email):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email is already registered",
        )

    require_verification = get_settings().require_email_verification
    if require_verification and not is_email_verified(db, user_data.email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email address has not been verified",
        )

    try:
        user = create_user(db, user_data.email, user_data.password, user_data.name, commit=False)
        if require_verification:
            consume_verification(db, user_data.email)
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email is already registered",
        ) from None
    db.refresh(user)
    logger.info(f"Created account {user.id}")

    return AuthResponse(
        access_token=create_access_token(user.id, user.email),
        user=UserResponse.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
def login(
    credentials: UserLogin,
    db: Annotated[Session, Depends(get_db)],
):
    """Login with email and password."""
    user = authenticate_user(db, credentials.email, credentials.password)

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return AuthResponse(
        access_token=create_access_token(user.id, user.email),
        user=UserResponse.model_validate(user),
    )


@router.post("/forgot-password", response_model=MessageResponse)
def forgot_password(
    request: ForgotPasswordRequest,
    db: Annotated[Session, Depends(get_db)],
):
    """Email a reset link. The response never reveals whether the account exists."""
    user = get_user_by_email(db, request.email)
    if not user:
        time.sleep(UNKNOWN_ACCOUNT_DELAY_SECONDS)
        return MessageResponse(message=RESET_REQUESTED_MESSAGE)

    token = issue_password_reset_token(db, user)
    reset_link = f"{get_settings().app_url.rstrip('/')}/reset-password?token={quote(token, safe='')}"
    try:
        send_password_reset_email(user.email, reset_link)
    except MailerError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unable to send the reset email. Please try again.",
        ) from None

    return MessageResponse(message=RESET_REQUESTED_MESSAGE)


@router.post("/reset-password", response_model=MessageResponse)
def reset_password(
    request: ResetPasswordRequest,
    db: Annotated[Session, Depends(get_db)],
):
    """Set a new password with a single-use reset token."""
    user_id = consume_password_reset_token(db, request.token)
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Reset link is invalid or has expired.",
        )

    set_password(db, user_id, request.password)
    logger.info(f"Password reset for user {user_id}")
    return MessageResponse(message="Password updated successfully.")


@router.get("/me", response_model=UserResponse)
def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Get current user information."""
    return current_user


@router.post("/logout", response_model=MessageResponse)
def logout(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Logout (client should discard token)."""
    return MessageResponse(message="Logged out successfully")
