"""Product API endpoints."""

import logging
from datetime import UTC, datetime
from typing import Annotated, Literal

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile, status
from fastapi.responses import PlainTextResponse, Response
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from stockroom.api.dependencies import get_current_user, get_product_service
from stockroom.database import get_db
from stockroom.models.enums import ProductStatus
from stockroom.models.product import Product
from stockroom.models.user import User
from stockroom.schemas.product import (
    DeleteAllResponse,
    ProductBulkRequest,
    ProductCreate,
    ProductFilters,
    ProductImportResponse,
    ProductResponse,
    ProductUpdate,
    SortField,
)
from stockroom.services.product_import import (
    SAMPLE_CSV,
    NothingToImportError,
    import_products,
    parse_products_csv,
)
from stockroom.services.product_service import ProductService, export_products_csv
from stockroom.services.stock import STOCK_MAX, STOCK_MIN

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/products", tags=["products"])

MAX_IMPORT_BYTES = 5 * 1024 * 1024


def product_filters(
    search: str | None = None,
    category: str | None = None,
    status: ProductStatus | None = None,
    min_price: float | None = None,
    max_price: float | None = None,
    min_stock: Annotated[int | None, Query(ge=STOCK_MIN, le=STOCK_MAX)] = None,
    max_stock: Annotated[int | None, Query(ge=STOCK_MIN, le=STOCK_MAX)] = None,
    sort_by: SortField = "created_at",
    order: Literal["asc", "desc"] = "desc",
) -> ProductFilters:
    """Collect product listing query parameters."""
    return ProductFilters(
        search=search,
        category=category,
        status=status,
        min_price=min_price,
        max_price=max_price,
        min_stock=min_stock,
        max_stock=max_stock,
        sort_by=sort_by,
        order=order,
    )


def get_existing_product(service: ProductService, product_id: int) -> Product:
    """Get a product or raise 404."""
    product = service.get_product(product_id)
    if not product:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
    return product


def _import_result(count: int) -> ProductImportResponse:
    return ProductImportResponse(
        count=count,
        message=f"{count} products imported successfully",
    )


@router.get("", response_model=list[ProductResponse])
def list_products(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[ProductService, Depends(get_product_service)],
    filters: Annotated[ProductFilters, Depends(product_filters)],
):
    """List products with optional search, filters and sorting."""
    return service.list_products(filters)


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
def create_product(
    product_data: ProductCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[ProductService, Depends(get_product_service)],
    db: Annotated[Session, Depends(get_db)],
):
    """Create a product. Unknown categories are created on demand."""
    try:
        return service.create_product(product_data)
    except IntegrityError:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A product with this SKU or barcode already exists",
        ) from None


@router.delete("", response_model=DeleteAllResponse)
def delete_all_products(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[ProductService, Depends(get_product_service)],
):
    """Delete every product."""
    logger.warning(f"User {current_user.id} deleted all products")
    return DeleteAllResponse(deleted=service.delete_all_products())


@router.get("/export")
def export_products(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[ProductService, Depends(get_product_service)],
    filters: Annotated[ProductFilters, Depends(product_filters)],
):
    """Download the filtered product list as CSV."""
    content = export_products_csv(service.list_products(filters))
    filename = f"products_{datetime.now(UTC).date().isoformat()}.csv"
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


@router.post("/bulk", response_model=ProductImportResponse)
def bulk_import_products(
    request: ProductBulkRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Import many products at once from JSON rows."""
    if not request.products:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Products array is required",
        )
    try:
        count = import_products(db, request.products)
    except NothingToImportError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from None
    return _import_result(count)


@router.post("/import", response_model=ProductImportResponse)
async def import_products_csv(
    file: Annotated[UploadFile, File(description="CSV file with a header row")],
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Import products from an uploaded CSV file.

    Note: This endpoint must remain async because UploadFile.read() is async.
    """
    content = await file.read()
    if len(content) > MAX_IMPORT_BYTES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="File too large. Maximum size is 5MB.",
        )
    try:
        text = content.decode("utf-8-sig")
    except UnicodeDecodeError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="CSV file must be UTF-8 encoded",
        ) from None

    try:
        count = import_products(db, parse_products_csv(text))
    except NothingToImportError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from None
    return _import_result(count)


@router.get("/import/template", response_class=PlainTextResponse)
def import_template(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Sample CSV showing the import columns."""
    return PlainTextResponse(
        SAMPLE_CSV,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": "attachment; filename=sample_products.csv"},
    )


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(
    product_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[ProductService, Depends(get_product_service)],
):
    """Get a specific product."""
    return get_existing_product(service, product_id)


@router.patch("/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: int,
    product_data: ProductUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[ProductService, Depends(get_product_service)],
    db: Annotated[Session, Depends(get_db)],
):
    """Update a product. Status is recomputed from the stock levels."""
    product = get_existing_product(service, product_id)
    try:
        return service.update_product(product, product_data)
    except IntegrityError:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A product with this SKU or barcode already exists",
        ) from None


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(
    product_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[ProductService, Depends(get_product_service)],
):
    """Delete a product."""
    service.delete_product(get_existing_product(service, product_id))
