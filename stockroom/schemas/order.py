"""Order schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from stockroom.models.enums import OrderStatus


class OrderResponse(BaseModel):
    """Order ledger entry."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(validation_alias="order_no")
    customer: str = Field(validation_alias="customer_name")
    amount: float
    status: OrderStatus
    date: datetime = Field(validation_alias="created_at")
