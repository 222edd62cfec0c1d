"""Category model."""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from stockroom.database import Base
from stockroom.models.mixins import TimestampMixin


class Category(Base, TimestampMixin):
    """Product category, created on demand by name."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), unique=True, nullable=False)

    # Relationships
    products = relationship("Product", back_populates="category")
