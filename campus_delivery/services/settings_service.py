"""Admin-configurable settings and dashboard figures."""

from __future__ import annotations

import logging
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from campus_delivery.core.config import settings
from campus_delivery.models import AdminSettings, Order, Restaurant, User
from campus_delivery.models.order import CLOSED_ORDER_STATUSES
from campus_delivery.schemas.admin import AdminSettingsRead, AdminSettingsUpdate, DashboardStats
from campus_delivery.services.cache import ADMIN_SETTINGS_TAG, read_cache

logger = logging.getLogger(__name__)

ADMIN_SETTINGS_ID = 1
DEFAULT_THEME = "default"


def _default_admin_settings() -> AdminSettingsRead:
    return AdminSettingsRead(
        base_delivery_fee=settings.default_base_delivery_fee,
        delivery_fee_per_km=settings.default_delivery_fee_per_km,
        light_theme=DEFAULT_THEME,
        dark_theme=DEFAULT_THEME,
    )


def _load_admin_settings(db: Session) -> AdminSettingsRead:
    row = db.get(AdminSettings, ADMIN_SETTINGS_ID)
    if row is None:
        return _default_admin_settings()
    return AdminSettingsRead.model_validate(row)


def get_admin_settings(db: Session) -> AdminSettingsRead:
    """Fee and theme settings, cached until the next save."""
    return read_cache.get_or_set(
        ADMIN_SETTINGS_TAG,
        (ADMIN_SETTINGS_TAG,),
        lambda: _load_admin_settings(db),
    )


def save_admin_settings(db: Session, payload: AdminSettingsUpdate) -> AdminSettingsRead:
    """Upsert the settings row and drop cached copies.

    Raises:
        ValueError: if either fee is negative.
    """
    for fee in (payload.base_delivery_fee, payload.delivery_fee_per_km):
        if fee is not None and fee < 0:
            raise ValueError("Fees cannot be negative")

    row = db.get(AdminSettings, ADMIN_SETTINGS_ID)
    if row is None:
        defaults = _default_admin_settings()
        row = AdminSettings(id=ADMIN_SETTINGS_ID, **defaults.model_dump())
        db.add(row)

    for field, value in payload.model_dump(exclude_none=True).items():
        setattr(row, field, value)
    db.commit()
    db.refresh(row)
    read_cache.invalidate_tag(ADMIN_SETTINGS_TAG)
    logger.info(
        "Admin settings updated: base_fee=%s per_km=%s", row.base_delivery_fee, row.delivery_fee_per_km
    )
    return AdminSettingsRead.model_validate(row)


def dashboard_stats(db: Session) -> DashboardStats:
    def count(stmt) -> int:
        return int(db.scalar(stmt) or 0)

    revenue = db.scalar(
        select(func.coalesce(func.sum(Order.order_amount + Order.delivery_fee), 0)).where(
            Order.status == "DELIVERED"
        )
    )
    return DashboardStats(
        total_restaurants=count(select(func.count(Restaurant.id))),
        verified_restaurants=count(select(func.count(Restaurant.id)).where(Restaurant.is_verified.is_(True))),
        pending_restaurants=count(select(func.count(Restaurant.id)).where(Restaurant.is_verified.is_(False))),
        total_users=count(select(func.count(User.id))),
        total_customers=count(select(func.count(User.id)).where(User.role == "CUSTOMER")),
        restaurant_owners=count(select(func.count(User.id)).where(User.role == "RESTAURANT")),
        total_orders=count(select(func.count(Order.id))),
        active_orders=count(select(func.count(Order.id)).where(Order.status.not_in(sorted(CLOSED_ORDER_STATUSES)))),
        delivered_orders=count(select(func.count(Order.id)).where(Order.status == "DELIVERED")),
        cancelled_orders=count(select(func.count(Order.id)).where(Order.status == "CANCELLED")),
        delivered_revenue=Decimal(str(revenue or 0)).quantize(Decimal("0.01")),
    )
