"""Bulk product import from CSV text or loosely typed rows."""

import csv
import logging
import math
from collections.abc import Iterable, Mapping
from typing import Any

from sqlalchemy.exc import DataError, IntegrityError
from sqlalchemy.orm import Session

from stockroom.config import get_settings
from stockroom.models.category import Category
from stockroom.models.product import Product
from stockroom.services.stock import STOCK_MAX, STOCK_MIN

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "General"
DEFAULT_UNIT = "pcs"

SAMPLE_CSV = """name,category,costPrice,price,stock,minStock,unit,sku,barcode,supplier,location,description
LAPTOP HP PROBOOK,Electronics,800,1200,50,10,pcs,HP-001,8690001234567,HP Distribution,A-1-1,Office laptops
MOUSE LOGITECH,Electronics,15,25,100,20,pcs,LOG-001,,Logitech,A-1-2,
MECHANICAL KEYBOARD,Electronics,45,75,30,5,pcs,KB-001,,,A-1-3,For the engineering team
"""

OPTIONAL_TEXT_FIELDS = ("sku", "barcode", "supplier", "description", "location")


class NothingToImportError(ValueError):
    """Raised when a batch has no importable rows."""


def _key(name: str) -> str:
    return name.strip().lower().replace("_", "")


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _number(value: Any, cast: type = float) -> int | float:
    """Coerce a loosely typed value, treating anything unparseable or out of range as 0."""
    try:
        number = float(_text(value))
    except ValueError:
        return 0
    if not math.isfinite(number):
        return 0
    if cast is int and not STOCK_MIN <= number <= STOCK_MAX:
        return 0
    return cast(number)


def parse_products_csv(text: str) -> list[dict[str, str]]:
    """Parse CSV text whose first row names the columns.

    Header names are matched case-insensitively. Rows without a name are
    dropped; missing trailing values become empty strings.
    """
    lines = text.strip().splitlines()
    if len(lines) < 2:
        return []

    reader = csv.reader(lines)
    headers = [h.strip().lower() for h in next(reader)]
    rows = []
    for values in reader:
        values = [v.strip() for v in values]
        row = {header: values[i] if i < len(values) else "" for i, header in enumerate(headers)}
        if row.get("name", "").strip():
            rows.append(row)
    return rows


def normalize_import_row(raw: Mapping[str, Any], default_min_stock: int = 0) -> dict[str, Any]:
    """Map a raw row onto product fields with defaults and numeric coercion."""
    row = {_key(k): v for k, v in raw.items()}

    min_stock_raw = row.get("minstock")
    if _text(min_stock_raw) == "":
        min_stock = default_min_stock
    else:
        min_stock = _number(min_stock_raw, int)

    normalized = {
        "name": _text(row.get("name")).upper(),
        "category": _text(row.get("category")) or DEFAULT_CATEGORY,
        "price": _number(row.get("price")),
        "cost_price": _number(row.get("costprice")),
        "stock": _number(row.get("stock"), int),
        "min_stock": min_stock,
        "unit": _text(row.get("unit")) or DEFAULT_UNIT,
    }
    for field in OPTIONAL_TEXT_FIELDS:
        normalized[field] = _text(row.get(field)) or None
    return normalized


def _resolve_categories(db: Session, names: set[str]) -> dict[str, Category]:
    """Load categories by name, creating each missing one once."""
    categories = {c.name: c for c in db.query(Category).filter(Category.name.in_(names)).all()}
    for name in sorted(names - categories.keys()):
        category = Category(name=name)
        db.add(category)
        categories[name] = category
    db.flush()
    return categories


def _taken_identifiers(db: Session, products: list[dict[str, Any]]) -> set[tuple[str, str]]:
    """SKUs and barcodes in the batch that already exist in the database."""
    taken = set()
    for field in ("sku", "barcode"):
        column = getattr(Product, field)
        values = {p[field] for p in products if p[field]}
        if values:
            existing = db.query(column).filter(column.in_(values)).all()
            taken.update((field, value) for (value,) in existing)
    return taken


def import_products(
    db: Session, rows: Iterable[Mapping[str, Any]], default_min_stock: int | None = None
) -> int:
    """Insert products from raw rows and return how many were created.

    Rows with an empty name are discarded. Rows whose SKU or barcode is
    already taken, in the database or earlier in the batch, are skipped.
    """
    if default_min_stock is None:
        default_min_stock = get_settings().default_min_stock

    products = [normalize_import_row(row, default_min_stock) for row in rows]
    products = [p for p in products if p["name"]]
    if not products:
        raise NothingToImportError("No valid products to import")

    categories = _resolve_categories(db, {p["category"] for p in products})
    seen = _taken_identifiers(db, products)

    created = 0
    for data in products:
        identifiers = {(field, data[field]) for field in ("sku", "barcode") if data[field]}
        if identifiers & seen:
            logger.info(f"Skipping duplicate product {data['name']}")
            continue
        seen.update(identifiers)

        category = categories[data.pop("category")]
        try:
            with db.begin_nested():
                db.add(Product(category_id=category.id, **data))
        except (IntegrityError, DataError) as e:
            logger.warning(f"Skipping product {data['name']}: {e.orig}")
            continue
        created += 1

    db.commit()
    logger.info(f"Imported {created} of {len(products)} products")
    return created
