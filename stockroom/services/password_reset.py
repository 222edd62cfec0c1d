"""Password reset token issuance and single-use consumption."""

import hashlib
import logging
import uuid
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from sqlalchemy.orm import Session

from stockroom.config import get_settings
from stockroom.models.mixins import as_utc
from stockroom.models.password_reset_token import PasswordResetToken
from stockroom.models.user import User

logger = logging.getLogger(__name__)

TOKEN_PURPOSE = "password_reset"


def hash_token(token: str) -> str:
    """SHA-256 hex digest of a raw token."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def issue_password_reset_token(db: Session, user: User, now: datetime | None = None) -> str:
    """Sign a reset token for ``user`` and store its hash.

    Any earlier tokens for the user are removed. Returns the raw token,
    which is never persisted.
    """
    settings = get_settings()
    now = now or datetime.now(UTC)
    expires_at = now + timedelta(minutes=settings.password_reset_expiry_minutes)

    token = jwt.encode(
        {
            "sub": str(user.id),
            "email": user.email,
            "purpose": TOKEN_PURPOSE,
            "jti": uuid.uuid4().hex,
            "exp": expires_at,
        },
        settings.reset_token_secret,
        algorithm=settings.jwt_algorithm,
    )

    db.query(PasswordResetToken).filter(PasswordResetToken.user_id == user.id).delete()
    db.add(PasswordResetToken(user_id=user.id, token_hash=hash_token(token), expires_at=expires_at))
    db.commit()

    return token


def consume_password_reset_token(
    db: Session, token: str, now: datetime | None = None
) -> int | None:
    """Validate ``token`` and mark it used.

    Returns the owning user's id, or None if the token is forged, expired,
    unknown or already used.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token, settings.reset_token_secret, algorithms=[settings.jwt_algorithm]
        )
    except JWTError as e:
        logger.info(f"Rejected password reset token: {e}")
        return None
    if payload.get("purpose") != TOKEN_PURPOSE:
        return None

    record = (
        db.query(PasswordResetToken)
        .filter(PasswordResetToken.token_hash == hash_token(token))
        .first()
    )
    now = now or datetime.now(UTC)
    if not record or record.used or as_utc(record.expires_at) < now:
        return None

    record.used = True
    db.commit()
    return record.user_id
