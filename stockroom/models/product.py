"""Product model."""

from sqlalchemy import Column, Float, ForeignKey, Integer, String, Text, event
from sqlalchemy.orm import relationship

from stockroom.database import Base
from stockroom.models.mixins import TimestampMixin
from stockroom.services.stock import derive_status


class Product(Base, TimestampMixin):
    """Stocked product. ``status`` is derived from stock levels on every write."""

    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    sku = Column(String(100), unique=True, nullable=True)
    barcode = Column(String(100), unique=True, nullable=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False, index=True)
    price = Column(Float, nullable=False, default=0)
    cost_price = Column(Float, nullable=False, default=0)
    stock = Column(Integer, nullable=False, default=0)
    min_stock = Column(Integer, nullable=False, default=0)
    unit = Column(String(20), nullable=False, default="pcs")
    supplier = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    location = Column(String(100), nullable=True)
    status = Column(String(20), nullable=False)

    # Relationships
    category = relationship("Category", back_populates="products")

    @property
    def category_name(self) -> str | None:
        """Name of the product's category."""
        return self.category.name if self.category else None

    @property
    def stock_value(self) -> float:
        """Inventory value at cost."""
        return (self.cost_price or 0) * (self.stock or 0)

    def refresh_status(self) -> None:
        """Recompute ``status`` from the current stock levels."""
        self.status = derive_status(self.stock or 0, self.min_stock or 0).value


@event.listens_for(Product, "before_insert")
@event.listens_for(Product, "before_update")
def _sync_product_status(mapper, connection, target: Product) -> None:
    target.refresh_status()
