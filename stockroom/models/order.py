"""Customer and order models."""

from sqlalchemy import Column, Float, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from stockroom.database import Base
from stockroom.models.enums import OrderStatus
from stockroom.models.mixins import TimestampMixin


class Customer(Base, TimestampMixin):
    """Customer placing orders."""

    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True)

    # Relationships
    orders = relationship("Order", back_populates="customer")


class Order(Base, TimestampMixin):
    """Order ledger entry. Read-only through the API."""

    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    order_no = Column(String(50), unique=True, nullable=False, index=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False, index=True)
    amount = Column(Float, nullable=False, default=0)
    status = Column(String(20), nullable=False, default=OrderStatus.PENDING.value)

    # Relationships
    customer = relationship("Customer", back_populates="orders")

    @property
    def customer_name(self) -> str:
        """Name of the ordering customer."""
        return self.customer.name if self.customer else ""
