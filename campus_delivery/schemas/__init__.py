"""Schema exports."""

from campus_delivery.schemas.admin import AdminSettingsRead, AdminSettingsUpdate, DashboardStats
from campus_delivery.schemas.auth import AuthUserResponse, LoginRequest, RegisterRequest, TokenResponse
from campus_delivery.schemas.checkout import (
    CartItemIn,
    CartValidationResult,
    CartVerifyRequest,
    DeliveryFeeDetails,
    DeliveryLocation,
    PlaceOrderRequest,
    RemovedCartItem,
    VerifiedCartItem,
)
from campus_delivery.schemas.menu import MenuItemCreate, MenuItemRead, MenuItemResponse, MenuItemUpdate, OptionGroup
from campus_delivery.schemas.order import OrderResponse, OrderStatusUpdate
from campus_delivery.schemas.restaurant import (
    RestaurantCreate,
    RestaurantRead,
    RestaurantResponse,
    RestaurantUpdate,
)
from campus_delivery.schemas.user import CustomerDetailsUpdate, ProfileResponse, ProfileUpdate, RiderAvailability

__all__ = [
    "AdminSettingsRead",
    "AdminSettingsUpdate",
    "DashboardStats",
    "AuthUserResponse",
    "LoginRequest",
    "RegisterRequest",
    "TokenResponse",
    "CartItemIn",
    "CartValidationResult",
    "CartVerifyRequest",
    "DeliveryFeeDetails",
    "DeliveryLocation",
    "PlaceOrderRequest",
    "RemovedCartItem",
    "VerifiedCartItem",
    "MenuItemCreate",
    "MenuItemRead",
    "MenuItemResponse",
    "MenuItemUpdate",
    "OptionGroup",
    "OrderResponse",
    "OrderStatusUpdate",
    "RestaurantCreate",
    "RestaurantRead",
    "RestaurantResponse",
    "RestaurantUpdate",
    "CustomerDetailsUpdate",
    "ProfileResponse",
    "ProfileUpdate",
    "RiderAvailability",
]
