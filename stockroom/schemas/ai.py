"""AI assistant request and response schemas."""

from pydantic import BaseModel, Field


class DescriptionRequest(BaseModel):
    """Generate an internal product note."""

    name: str = Field(..., min_length=1, max_length=255)
    category: str | None = Field(None, max_length=255)


class DescriptionResponse(BaseModel):
    """Generated product note."""

    description: str


class SupplierEmailRequest(BaseModel):
    """Generate a purchase order email to a supplier."""

    product_name: str = Field(..., min_length=1, max_length=255)
    quantity: int = Field(..., gt=0)
    supplier_name: str | None = Field(None, max_length=255)
    current_stock: int = 0
    unit: str = Field("pcs", max_length=20)


class SupplierEmailResponse(BaseModel):
    """Generated supplier email."""

    email: str


class ReportSummaryResponse(BaseModel):
    """Generated report summary."""

    summary: str
