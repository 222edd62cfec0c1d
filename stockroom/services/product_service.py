"""Product catalogue operations: CRUD, querying and export."""

import csv
import io
import logging
from collections.abc import Iterable

from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload

from stockroom.config import get_settings
from stockroom.models.category import Category
from stockroom.models.product import Product
from stockroom.schemas.product import ProductCreate, ProductFilters, ProductUpdate

logger = logging.getLogger(__name__)

EXPORT_HEADERS = [
    "Name",
    "Category",
    "Selling Price",
    "Cost Price",
    "Stock",
    "Status",
    "Profit Margin",
]

SORT_COLUMNS = {
    "created_at": Product.created_at,
    "name": Product.name,
    "price": Product.price,
    "stock": Product.stock,
    "category": Category.name,
}


def profit_margin(price: float, cost_price: float) -> str:
    """Margin over cost as a percentage label, or N/A without a cost."""
    if cost_price <= 0:
        return "N/A"
    return f"{(price - cost_price) / cost_price * 100:.1f}%"


class ProductService:
    """Service for product catalogue operations."""

    def __init__(self, db: Session):
        self.db = db

    def get_or_create_category(self, name: str) -> Category:
        """Find a category by name, creating it if needed."""
        name = name.strip()
        category = self.db.query(Category).filter(Category.name == name).first()
        if not category:
            category = Category(name=name)
            self.db.add(category)
            self.db.flush()
            logger.info(f"Created category '{name}'")
        return category

    def list_categories(self) -> list[Category]:
        """All categories sorted by name."""
        return self.db.query(Category).order_by(Category.name).all()

    def get_product(self, product_id: int) -> Product | None:
        """Get a product by id."""
        return (
            self.db.query(Product)
            .options(joinedload(Product.category))
            .filter(Product.id == product_id)
            .first()
        )

    def list_products(self, filters: ProductFilters | None = None) -> list[Product]:
        """List products matching the given search, filters and sort order."""
        filters = filters or ProductFilters()
        query = (
            self.db.query(Product)
            .join(Category, Product.category_id == Category.id)
            .options(joinedload(Product.category))
        )

        search = (filters.search or "").strip()
        if search:
            pattern = f"%{search}%"
            query = query.filter(or_(Product.name.ilike(pattern), Category.name.ilike(pattern)))
        if filters.category:
            query = query.filter(Category.name == filters.category)
        if filters.status:
            query = query.filter(Product.status == filters.status.value)
        if filters.min_price is not None:
            query = query.filter(Product.price >= filters.min_price)
        if filters.max_price is not None:
            query = query.filter(Product.price <= filters.max_price)
        if filters.min_stock is not None:
            query = query.filter(Product.stock >= filters.min_stock)
        if filters.max_stock is not None:
            query = query.filter(Product.stock <= filters.max_stock)

        column = SORT_COLUMNS[filters.sort_by]
        if filters.order == "desc":
            return query.order_by(column.desc(), Product.id.desc()).all()
        return query.order_by(column.asc(), Product.id.asc()).all()

    def create_product(self, data: ProductCreate) -> Product:
        """Create a product, creating its category on demand."""
        category = self.get_or_create_category(data.category)
        values = data.model_dump(exclude={"category"})
        if values["min_stock"] is None:
            values["min_stock"] = get_settings().default_min_stock

        product = Product(category_id=category.id, **values)
        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)
        return product

    def update_product(self, product: Product, data: ProductUpdate) -> Product:
        """Apply a partial update. Status follows the new stock levels."""
        update_data = data.model_dump(exclude_unset=True)
        category_name = update_data.pop("category", None)
        if category_name is not None:
            product.category_id = self.get_or_create_category(category_name).id

        for field, value in update_data.items():
            if value is None and field in ("name", "price", "cost_price", "stock", "min_stock"):
                continue
            setattr(product, field, value)

        product.refresh_status()
        self.db.commit()
        self.db.refresh(product)
        return product

    def delete_product(self, product: Product) -> None:
        """Delete a product."""
        self.db.delete(product)
        self.db.commit()

    def delete_all_products(self) -> int:
        """Delete every product and return how many were removed."""
        deleted = self.db.query(Product).delete()
        self.db.commit()
        logger.info(f"Deleted all {deleted} products")
        return deleted


def export_products_csv(products: Iterable[Product]) -> str:
    """Render products as CSV with every cell quoted."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    buffer.write(",".join(EXPORT_HEADERS) + "\n")
    for product in products:
        writer.writerow(
            [
                product.name,
                product.category_name or "",
                f"{product.price:.2f}",
                f"{product.cost_price:.2f}",
                str(product.stock),
                product.status,
                profit_margin(product.price, product.cost_price),
            ]
        )
    return buffer.getvalue()
