"""Application models package."""

from campus_delivery.models.admin_settings import AdminSettings
from campus_delivery.models.counter import Counter
from campus_delivery.models.menu import MenuItem
from campus_delivery.models.order import Order, OrderItem
from campus_delivery.models.restaurant import Restaurant
from campus_delivery.models.user import User

__all__ = [
    "AdminSettings", "Counter", "MenuItem", "Order", "OrderItem", "Restaurant", "User",
]
