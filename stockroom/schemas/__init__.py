"""Pydantic schemas for API requests and responses."""

from stockroom.schemas.auth import (
    AuthResponse,
    MessageResponse,
    UserLogin,
    UserResponse,
    UserSignup,
)
from stockroom.schemas.dashboard import DashboardNotification, DashboardStats, ReportStats
from stockroom.schemas.order import OrderResponse
from stockroom.schemas.product import (
    CategoryResponse,
    ProductCreate,
    ProductFilters,
    ProductResponse,
    ProductUpdate,
)
from stockroom.schemas.settings import UserSettingsResponse, UserSettingsUpdate

__all__ = [
    "UserSignup",
    "UserLogin",
    "UserResponse",
    "AuthResponse",
    "MessageResponse",
    "ProductCreate",
    "ProductUpdate",
    "ProductResponse",
    "ProductFilters",
    "CategoryResponse",
    "OrderResponse",
    "DashboardStats",
    "DashboardNotification",
    "ReportStats",
    "UserSettingsResponse",
    "UserSettingsUpdate",
]
