"""Enums for model fields."""

from enum import Enum


class ProductStatus(str, Enum):
    """Inventory sufficiency derived from stock levels."""

    IN_STOCK = "In Stock"
    LOW_STOCK = "Low Stock"
    OUT_OF_STOCK = "Out of Stock"

    def needs_attention(self) -> bool:
        """Check if the product should be restocked."""
        return self in (ProductStatus.LOW_STOCK, ProductStatus.OUT_OF_STOCK)


class OrderStatus(str, Enum):
    """Order lifecycle states."""

    COMPLETED = "Completed"
    PENDING = "Pending"
    CANCELED = "Canceled"


class UserRole(str, Enum):
    """Roles a user can hold."""

    USER = "user"
    ADMIN = "admin"
