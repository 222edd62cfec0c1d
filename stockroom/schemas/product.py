"""Product and category schemas."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from stockroom.models.enums import ProductStatus
from stockroom.services.stock import STOCK_MAX, STOCK_MIN

SortField = Literal["created_at", "name", "price", "stock", "category"]


def _strip_required(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("Must not be blank")
    return value


class ProductCreate(BaseModel):
    """Create a product."""

    name: str = Field(..., min_length=1, max_length=255)
    category: str = Field(..., min_length=1, max_length=255)
    price: float = Field(..., ge=0)
    stock: int = Field(..., ge=STOCK_MIN, le=STOCK_MAX)
    cost_price: float = Field(0, ge=0)
    min_stock: int | None = Field(None, ge=0, le=STOCK_MAX)
    unit: str = Field("pcs", max_length=20)
    sku: str | None = Field(None, max_length=100)
    barcode: str | None = Field(None, max_length=100)
    supplier: str | None = Field(None, max_length=255)
    description: str | None = None
    location: str | None = Field(None, max_length=100)

    @field_validator("name", "category")
    @classmethod
    def not_blank(cls, value: str) -> str:
        return _strip_required(value)


class ProductUpdate(BaseModel):
    """Update a product. Only provided fields change."""

    name: str | None = Field(None, min_length=1, max_length=255)
    category: str | None = Field(None, min_length=1, max_length=255)
    price: float | None = Field(None, ge=0)
    cost_price: float | None = Field(None, ge=0)
    stock: int | None = Field(None, ge=STOCK_MIN, le=STOCK_MAX)
    min_stock: int | None = Field(None, ge=0, le=STOCK_MAX)
    unit: str | None = Field(None, max_length=20)
    sku: str | None = Field(None, max_length=100)
    barcode: str | None = Field(None, max_length=100)
    supplier: str | None = Field(None, max_length=255)
    description: str | None = None
    location: str | None = Field(None, max_length=100)

    @field_validator("name", "category")
    @classmethod
    def not_blank(cls, value: str | None) -> str | None:
        return value if value is None else _strip_required(value)


class ProductResponse(BaseModel):
    """Product response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    sku: str | None
    barcode: str | None
    category: str = Field(validation_alias="category_name")
    price: float
    cost_price: float
    stock: int
    min_stock: int
    unit: str
    supplier: str | None
    description: str | None
    location: str | None
    status: ProductStatus
    created_at: datetime
    updated_at: datetime


class ProductFilters(BaseModel):
    """Search, filter and sort options for product listings."""

    search: str | None = None
    category: str | None = None
    status: ProductStatus | None = None
    min_price: float | None = None
    max_price: float | None = None
    min_stock: int | None = None
    max_stock: int | None = None
    sort_by: SortField = "created_at"
    order: Literal["asc", "desc"] = "desc"


class ProductBulkRequest(BaseModel):
    """Bulk import rows. Rows are loosely typed and coerced on import."""

    products: list[dict[str, Any]]


class ProductImportResponse(BaseModel):
    """Result of a bulk import."""

    success: bool = True
    count: int
    message: str


class DeleteAllResponse(BaseModel):
    """Result of deleting every product."""

    deleted: int


class CategoryResponse(BaseModel):
    """Category response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
