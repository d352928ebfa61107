"""Admin console schemas."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class AdminSettingsRead(BaseModel):
    base_delivery_fee: Decimal
    delivery_fee_per_km: Decimal
    light_theme: str
    dark_theme: str

    model_config = ConfigDict(from_attributes=True)


class AdminSettingsUpdate(BaseModel):
    base_delivery_fee: Decimal | None = Field(default=None, max_digits=10, decimal_places=2)
    delivery_fee_per_km: Decimal | None = Field(default=None, max_digits=10, decimal_places=2)
    light_theme: str | None = Field(default=None, min_length=1, max_length=50)
    dark_theme: str | None = Field(default=None, min_length=1, max_length=50)


class DashboardStats(BaseModel):
    total_restaurants: int
    verified_restaurants: int
    pending_restaurants: int
    total_users: int
    total_customers: int
    restaurant_owners: int
    total_orders: int
    active_orders: int
    delivered_orders: int
    cancelled_orders: int
    delivered_revenue: Decimal
