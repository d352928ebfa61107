"""Order API schemas."""

from datetime import datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, model_validator

from campus_delivery.schemas.checkout import PricedOption

OrderStatusValue = Literal[
    "PENDING", "PLACED", "ACCEPTED", "EN_ROUTE_A", "PICKED_UP", "EN_ROUTE_B", "DELIVERED", "CANCELLED"
]
PaymentStatusValue = Literal["UNPAID", "PAID", "VERIFIED", "REFUNDED"]


class OrderItemResponse(BaseModel):
    id: int
    menu_item_id: int | None
    name: str
    base_price: Decimal
    image_url: str
    category: str
    options: list[PricedOption]
    quantity: int
    unit_price: Decimal
    line_total: Decimal

    model_config = ConfigDict(from_attributes=True)


class OrderResponse(BaseModel):
    id: int
    order_id: str
    customer_id: int
    restaurant_id: int | None
    restaurant_name: str
    status: str
    pickup_lat: float
    pickup_lng: float
    pickup_address: str
    dropoff_lat: float
    dropoff_lng: float
    dropoff_address: str
    distance_km: float
    order_amount: Decimal
    delivery_fee: Decimal
    total_amount: Decimal
    payment_slip_url: str
    payment_status: str
    special_instructions: str
    pickup_time: datetime | None
    dropoff_time: datetime | None
    created_at: datetime
    items: list[OrderItemResponse]

    model_config = ConfigDict(from_attributes=True)


class OrderStatusUpdate(BaseModel):
    status: OrderStatusValue | None = None
    payment_status: PaymentStatusValue | None = None

    @model_validator(mode="after")
    def validate_not_empty(self) -> "OrderStatusUpdate":
        if self.status is None and self.payment_status is None:
            raise ValueError("status or payment_status is required")
        return self
