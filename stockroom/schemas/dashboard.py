"""Dashboard, report and notification schemas."""

from typing import Literal

from pydantic import BaseModel, Field

from stockroom.schemas.order import OrderResponse


class DashboardStats(BaseModel):
    """Headline figures for the dashboard."""

    total_revenue: float
    pending_orders: int
    total_orders: int
    completed_orders: int
    low_stock_items: int
    fulfillment_rate: float
    recent_orders: list[OrderResponse]


class CategorySlice(BaseModel):
    """Product count for one category."""

    name: str
    value: int


class ReportStats(BaseModel):
    """Inventory statistics used by reports and the AI summary."""

    total_products: int = Field(0, ge=0)
    total_stock: int = 0
    low_stock_count: int = Field(0, ge=0)
    out_of_stock_count: int = Field(0, ge=0)
    total_stock_value: float = 0
    top_categories: list[str] = Field(default_factory=list)


class ReportSummary(ReportStats):
    """Report statistics plus the full category distribution."""

    category_distribution: list[CategorySlice] = Field(default_factory=list)


class DashboardNotification(BaseModel):
    """Transient dashboard alert derived from orders and products."""

    id: str
    type: Literal["order", "low_stock", "report"]
    title: str
    message: str
    time: str
