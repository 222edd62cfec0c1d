"""Dashboard and report API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from stockroom.api.dependencies import get_current_user
from stockroom.api.settings import notification_toggles
from stockroom.database import get_db
from stockroom.models.user import User
from stockroom.schemas.dashboard import DashboardNotification, DashboardStats, ReportSummary
from stockroom.services.notifications import build_notifications
from stockroom.services.reports import dashboard_stats, list_orders, list_products, report_summary

router = APIRouter(prefix="/api/v1", tags=["dashboard"])


@router.get("/dashboard/stats", response_model=DashboardStats)
def get_dashboard_stats(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Revenue, order and stock headline figures."""
    return dashboard_stats(list_orders(db), list_products(db))


@router.get("/dashboard/notifications", response_model=list[DashboardNotification])
def get_dashboard_notifications(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Alerts derived from current orders and stock, filtered by the user's toggles."""
    return build_notifications(
        list_orders(db), list_products(db), notification_toggles(current_user)
    )


@router.get("/reports/summary", response_model=ReportSummary)
def get_report_summary(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Inventory totals, stock value and category breakdown."""
    return report_summary(list_products(db))
