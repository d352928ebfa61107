"""Order status helpers."""

from __future__ import annotations

from datetime import datetime

from campus_delivery.models.order import ORDER_STATUSES, PAYMENT_STATUSES, Order


def set_status(order: Order, new_status: str, now: datetime) -> None:
    """Set status and stamp pickup/dropoff times.

    Any status in the enum may follow any other; timestamps keep the first
    time a stage was reached.
    """
    if new_status not in ORDER_STATUSES:
        raise ValueError(f"Unknown order status: {new_status}")
    order.status = new_status

    if new_status == "PICKED_UP" and order.pickup_time is None:
        order.pickup_time = now
    elif new_status == "DELIVERED" and order.dropoff_time is None:
        order.dropoff_time = now


def set_payment_status(order: Order, new_status: str) -> None:
    if new_status not in PAYMENT_STATUSES:
        raise ValueError(f"Unknown payment status: {new_status}")
    order.payment_status = new_status
