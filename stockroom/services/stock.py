"""Stock level rules."""

from stockroom.models.enums import ProductStatus

# Range of the INTEGER stock columns
STOCK_MIN = -(2**31)
STOCK_MAX = 2**31 - 1


def derive_status(stock: int, min_stock: int = 0) -> ProductStatus:
    """Derive a product's status from its stock and minimum stock threshold.

    Out of Stock when nothing is left, Low Stock when at or below the
    threshold, In Stock otherwise.
    """
    if stock <= 0:
        return ProductStatus.OUT_OF_STOCK
    if stock <= min_stock:
        return ProductStatus.LOW_STOCK
    return ProductStatus.IN_STOCK
