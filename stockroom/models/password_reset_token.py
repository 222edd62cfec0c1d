"""Password reset token model."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from stockroom.database import Base
from stockroom.models.mixins import TimestampMixin


class PasswordResetToken(Base, TimestampMixin):
    """Single-use password reset token. Only the SHA-256 hash is stored."""

    __tablename__ = "password_reset_tokens"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    token_hash = Column(String(64), unique=True, nullable=False, index=True)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    used = Column(Boolean, nullable=False, default=False)

    # Relationships
    user = relationship("User", backref="password_reset_tokens")
