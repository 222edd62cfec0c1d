"""Order ledger API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from stockroom.api.dependencies import get_current_user
from stockroom.database import get_db
from stockroom.models.user import User
from stockroom.schemas.order import OrderResponse
from stockroom.services.reports import list_orders

router = APIRouter(prefix="/api/v1/orders", tags=["orders"])


@router.get("", response_model=list[OrderResponse])
def get_orders(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    search: str | None = None,
):
    """List orders newest first, optionally searching order number or customer."""
    return list_orders(db, search)
