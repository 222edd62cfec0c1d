"""Email verification (OTP) model."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String

from stockroom.database import Base
from stockroom.models.mixins import TimestampMixin


class EmailVerification(Base, TimestampMixin):
    """Pending email ownership check for a signup."""

    __tablename__ = "email_verifications"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    otp = Column(String(6), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    verified = Column(Boolean, nullable=False, default=False)
