"""Email OTP lifecycle for OTP-gated signup."""

import logging
import secrets
from datetime import UTC, datetime, timedelta
from enum import Enum

from sqlalchemy.orm import Session

from stockroom.config import get_settings
from stockroom.models.email_verification import EmailVerification
from stockroom.models.mixins import as_utc
from stockroom.services.auth import get_user_by_email

logger = logging.getLogger(__name__)


class EmailAlreadyRegisteredError(Exception):
    """Raised when a verification code is requested for a registered email."""


class OtpVerification(str, Enum):
    """Outcome of checking a submitted code."""

    VERIFIED = "verified"
    ALREADY_VERIFIED = "already_verified"
    NOT_FOUND = "not_found"
    EXPIRED = "expired"
    MISMATCH = "mismatch"

    @property
    def ok(self) -> bool:
        return self in (OtpVerification.VERIFIED, OtpVerification.ALREADY_VERIFIED)


def generate_otp() -> str:
    """Generate a uniformly random 6-digit code."""
    return f"{secrets.randbelow(900000) + 100000}"


def _normalize(email: str) -> str:
    return email.strip().lower()


def get_verification(db: Session, email: str) -> EmailVerification | None:
    """Get the verification record for an email."""
    return (
        db.query(EmailVerification)
        .filter(EmailVerification.email == _normalize(email))
        .first()
    )


def send_otp(db: Session, email: str, now: datetime | None = None) -> str:
    """Issue a fresh code for ``email``, replacing any earlier one.

    Returns the code so the caller can hand it to the mailer.
    """
    if get_user_by_email(db, email):
        raise EmailAlreadyRegisteredError(email)

    now = now or datetime.now(UTC)
    otp = generate_otp()
    expires_at = now + timedelta(minutes=get_settings().otp_expiry_minutes)

    verification = get_verification(db, email)
    if verification:
        verification.otp = otp
        verification.expires_at = expires_at
        verification.verified = False
    else:
        verification = EmailVerification(
            email=_normalize(email), otp=otp, expires_at=expires_at, verified=False
        )
        db.add(verification)

    db.commit()
    logger.info(f"Issued verification code for {verification.email}")
    return otp


def verify_otp(
    db: Session, email: str, code: str, now: datetime | None = None
) -> OtpVerification:
    """Check a submitted code and mark the email verified on a match."""
    verification = get_verification(db, email)
    if not verification:
        return OtpVerification.NOT_FOUND
    if verification.verified:
        return OtpVerification.ALREADY_VERIFIED

    now = now or datetime.now(UTC)
    if now > as_utc(verification.expires_at):
        return OtpVerification.EXPIRED
    if not secrets.compare_digest(verification.otp.encode(), code.encode()):
        return OtpVerification.MISMATCH

    verification.verified = True
    db.commit()
    return OtpVerification.VERIFIED


def is_email_verified(db: Session, email: str) -> bool:
    """Check whether ``email`` has a verified record."""
    verification = get_verification(db, email)
    return bool(verification and verification.verified)


def consume_verification(db: Session, email: str) -> None:
    """Delete the verification record once the account exists."""
    db.query(EmailVerification).filter(EmailVerification.email == _normalize(email)).delete()
