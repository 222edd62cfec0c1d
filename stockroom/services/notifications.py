"""Dashboard notifications derived from orders, products and user toggles.

Notifications are recomputed on every request and never stored, so they
always reflect the current orders and stock levels.
"""

from collections.abc import Sequence
from datetime import UTC, datetime, timedelta

from stockroom.models.enums import OrderStatus, ProductStatus
from stockroom.models.mixins import as_utc
from stockroom.models.order import Order
from stockroom.models.product import Product
from stockroom.schemas.dashboard import DashboardNotification
from stockroom.schemas.settings import NotificationToggles

MAX_PER_KIND = 3
ORDER_ALERT_WINDOW = timedelta(hours=24)


def format_time_ago(moment: datetime, now: datetime) -> str:
    """Relative time label for a past moment."""
    minutes = int((now - moment).total_seconds() // 60)
    if minutes < 1:
        return "Just now"
    if minutes < 60:
        return f"{minutes}m ago"
    if minutes < 24 * 60:
        return f"{minutes // 60}h ago"
    return moment.date().isoformat()


def _order_alerts(orders: Sequence[Order], now: datetime) -> list[DashboardNotification]:
    recent = [
        order
        for order in orders
        if order.status == OrderStatus.PENDING.value
        and now - as_utc(order.created_at) <= ORDER_ALERT_WINDOW
    ]
    return [
        DashboardNotification(
            id=f"order-{order.order_no}",
            type="order",
            title="New Order",
            message=f"Order #{order.order_no[:8]} from {order.customer_name} - ${order.amount:.2f}",
            time=format_time_ago(as_utc(order.created_at), now),
        )
        for order in recent[:MAX_PER_KIND]
    ]


def _low_stock_warnings(products: Sequence[Product]) -> list[DashboardNotification]:
    flagged = [p for p in products if ProductStatus(p.status).needs_attention()]
    notifications = []
    for product in flagged[:MAX_PER_KIND]:
        out_of_stock = product.status == ProductStatus.OUT_OF_STOCK.value
        notifications.append(
            DashboardNotification(
                id=f"stock-{product.id}",
                type="low_stock",
                title="Out of Stock" if out_of_stock else "Low Stock Warning",
                message=f"{product.name} - {product.stock} units remaining",
                time="Now",
            )
        )
    return notifications


def _weekly_report(orders: Sequence[Order]) -> DashboardNotification:
    revenue = sum(o.amount for o in orders if o.status == OrderStatus.COMPLETED.value)
    return DashboardNotification(
        id="weekly-report",
        type="report",
        title="Weekly Report Ready",
        message=f"Last week: ${revenue:,.2f} revenue, {len(orders)} orders",
        time="Today",
    )


def build_notifications(
    orders: Sequence[Order],
    products: Sequence[Product],
    toggles: NotificationToggles,
    now: datetime | None = None,
) -> list[DashboardNotification]:
    """Build the dashboard alert list for the enabled notification kinds.

    Orders are expected newest first. The weekly report only appears on
    Mondays.
    """
    now = now or datetime.now(UTC)
    notifications: list[DashboardNotification] = []

    if toggles.order_alerts:
        notifications.extend(_order_alerts(orders, now))
    if toggles.low_stock_warnings:
        notifications.extend(_low_stock_warnings(products))
    if toggles.weekly_reports and now.weekday() == 0:
        notifications.append(_weekly_report(orders))

    return notifications
