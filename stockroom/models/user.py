"""User model."""

from sqlalchemy import Boolean, Column, Integer, String

from stockroom.database import Base
from stockroom.models.enums import UserRole
from stockroom.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """User model for authentication, profile and notification preferences."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(255), nullable=True)
    phone = Column(String(30), nullable=True)
    avatar = Column(String(500), nullable=True)
    role = Column(String(20), nullable=False, default=UserRole.USER.value)

    # Dashboard notification toggles
    order_alerts = Column(Boolean, nullable=False, default=True)
    low_stock_warnings = Column(Boolean, nullable=False, default=True)
    weekly_reports = Column(Boolean, nullable=False, default=False)
