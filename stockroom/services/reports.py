"""Dashboard and inventory report statistics."""

from collections import Counter

from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload

from stockroom.models.enums import OrderStatus, ProductStatus
from stockroom.models.order import Customer, Order
from stockroom.models.product import Product
from stockroom.schemas.dashboard import (
    CategorySlice,
    DashboardStats,
    ReportSummary,
)
from stockroom.schemas.order import OrderResponse

RECENT_ORDER_COUNT = 5
TOP_CATEGORY_COUNT = 3


def list_orders(db: Session, search: str | None = None) -> list[Order]:
    """Orders newest first, optionally matching order number or customer name."""
    query = (
        db.query(Order)
        .join(Customer, Order.customer_id == Customer.id)
        .options(joinedload(Order.customer))
    )
    term = (search or "").strip()
    if term:
        pattern = f"%{term}%"
        query = query.filter(or_(Order.order_no.ilike(pattern), Customer.name.ilike(pattern)))
    return query.order_by(Order.created_at.desc(), Order.id.desc()).all()


def list_products(db: Session) -> list[Product]:
    """All products with their categories loaded."""
    return db.query(Product).options(joinedload(Product.category)).order_by(Product.id).all()


def dashboard_stats(orders: list[Order], products: list[Product]) -> DashboardStats:
    """Headline figures for the dashboard."""
    completed = [o for o in orders if o.status == OrderStatus.COMPLETED.value]
    pending = sum(1 for o in orders if o.status == OrderStatus.PENDING.value)
    low_stock = sum(1 for p in products if ProductStatus(p.status).needs_attention())
    rate = round(len(completed) / len(orders) * 100, 1) if orders else 0.0

    return DashboardStats(
        total_revenue=sum(o.amount for o in completed),
        pending_orders=pending,
        total_orders=len(orders),
        completed_orders=len(completed),
        low_stock_items=low_stock,
        fulfillment_rate=rate,
        recent_orders=[OrderResponse.model_validate(o) for o in orders[:RECENT_ORDER_COUNT]],
    )


def report_summary(products: list[Product]) -> ReportSummary:
    """Inventory totals, stock value at cost and category breakdown."""
    counts = Counter(p.category_name for p in products)
    # most_common keeps first-seen order among ties
    ranked = counts.most_common()

    return ReportSummary(
        total_products=len(products),
        total_stock=sum(p.stock for p in products),
        low_stock_count=sum(1 for p in products if p.status == ProductStatus.LOW_STOCK.value),
        out_of_stock_count=sum(
            1 for p in products if p.status == ProductStatus.OUT_OF_STOCK.value
        ),
        total_stock_value=round(sum(p.stock_value for p in products), 2),
        top_categories=[name for name, _ in ranked[:TOP_CATEGORY_COUNT]],
        category_distribution=[CategorySlice(name=name, value=value) for name, value in ranked],
    )
