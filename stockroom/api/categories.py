"""Category API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from stockroom.api.dependencies import get_current_user, get_product_service
from stockroom.models.user import User
from stockroom.schemas.product import CategoryResponse
from stockroom.services.product_service import ProductService

router = APIRouter(prefix="/api/v1/categories", tags=["categories"])


@router.get("", response_model=list[CategoryResponse])
def get_categories(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[ProductService, Depends(get_product_service)],
):
    """Get all categories sorted by name."""
    return service.list_categories()
