"""SQLAlchemy models."""

from stockroom.models.category import Category
from stockroom.models.email_verification import EmailVerification
from stockroom.models.order import Customer, Order
from stockroom.models.password_reset_token import PasswordResetToken
from stockroom.models.product import Product
from stockroom.models.user import User

__all__ = [
    "User",
    "EmailVerification",
    "PasswordResetToken",
    "Category",
    "Product",
    "Customer",
    "Order",
]
