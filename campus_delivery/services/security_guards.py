"""Ownership and role guards for restaurant management."""

from __future__ import annotations

from fastapi import HTTPException
from sqlalchemy.orm import Session

from campus_delivery.models import MenuItem, Restaurant, User


def ensure_role(user: User, allowed_roles: set[str]) -> None:
    """Ensure user role is one of allowed roles."""
    if user.role not in allowed_roles:
        raise HTTPException(status_code=403, detail="Forbidden")


def has_restaurant_access(user: User, restaurant: Restaurant) -> bool:
    """Owners manage their own restaurants; the super-admin manages all."""
    return user.is_super_admin or restaurant.owner_id == user.id


def get_managed_restaurant(db: Session, user: User, restaurant_id: int) -> Restaurant:
    restaurant = db.get(Restaurant, restaurant_id)
    if restaurant is None:
        raise HTTPException(status_code=404, detail="Restaurant not found")
    if not has_restaurant_access(user, restaurant):
        raise HTTPException(status_code=403, detail="Forbidden")
    return restaurant


def get_managed_menu_item(db: Session, user: User, item_id: int) -> MenuItem:
    item = db.get(MenuItem, item_id)
    if item is None:
        raise HTTPException(status_code=404, detail="Menu item not found")
    if not has_restaurant_access(user, item.restaurant):
        raise HTTPException(status_code=403, detail="Forbidden")
    return item
