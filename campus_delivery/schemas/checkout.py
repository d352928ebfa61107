"""Cart verification and checkout schemas."""

from decimal import Decimal

from pydantic import BaseModel, Field


class Coordinate(BaseModel):
    lat: float
    lng: float


class DeliveryLocation(Coordinate):
    address: str = Field(default="", max_length=200)


class OrderDeliveryLocation(DeliveryLocation):
    address: str = Field(min_length=10, max_length=200)


class SelectedOption(BaseModel):
    """Choice picked by the customer for one option group.

    ``additional_price`` is whatever the client last saw; it is only used to
    flag price changes, never to charge.
    """

    option_header: str
    selected: str
    additional_price: Decimal | None = None


class CartItemIn(BaseModel):
    menu_item_id: int
    name: str = ""
    base_price: Decimal | None = None
    quantity: int = Field(ge=1, le=100)
    options: list[SelectedOption] = Field(default_factory=list)


class CartVerifyRequest(BaseModel):
    restaurant_id: int
    items: list[CartItemIn] = Field(min_length=1)
    delivery_location: DeliveryLocation


class PlaceOrderRequest(CartVerifyRequest):
    delivery_location: OrderDeliveryLocation
    payment_slip_url: str = Field(default="", max_length=500)
    special_instructions: str = Field(default="", max_length=500)


class PricedOption(BaseModel):
    option_header: str
    selected: str
    additional_price: Decimal


class VerifiedCartItem(BaseModel):
    """Cart line re-priced from the current menu."""

    menu_item_id: int
    name: str
    base_price: Decimal
    image_url: str
    category: str
    quantity: int
    options: list[PricedOption]
    unit_price: Decimal
    line_total: Decimal
    price_changed: bool = False


class RemovedCartItem(BaseModel):
    menu_item_id: int
    name: str
    quantity: int
    options: list[SelectedOption]
    reason: str


class DeliveryFeeDetails(BaseModel):
    distance_km: float
    base_fee: Decimal
    per_km_rate: Decimal
    delivery_fee: Decimal


class CartValidationResult(BaseModel):
    success: bool
    message: str
    verified_items: list[VerifiedCartItem] = Field(default_factory=list)
    removed_items: list[RemovedCartItem] = Field(default_factory=list)
    order_amount: Decimal = Decimal("0.00")
    delivery_fee_details: DeliveryFeeDetails | None = None
    total_amount: Decimal = Decimal("0.00")


class DeliveryFeeRequest(BaseModel):
    delivery_location: Coordinate
    restaurant_location: Coordinate


class PlaceOrderResponse(BaseModel):
    success: bool = True
    message: str
    order_id: str
