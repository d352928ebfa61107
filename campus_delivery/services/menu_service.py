"""Menu management for restaurant owners."""

from __future__ import annotations

import logging

from fastapi import HTTPException, status
from sqlalchemy import select, update
from sqlalchemy.orm import Session

from campus_delivery.models import MenuItem, OrderItem, Restaurant, User
from campus_delivery.schemas.menu import MenuItemCreate, MenuItemRead, MenuItemResponse, MenuItemUpdate
from campus_delivery.services.availability import is_menu_item_online
from campus_delivery.services.cache import read_cache, restaurant_menu_tag
from campus_delivery.services.image_storage import delete_image, image_in_use
from campus_delivery.services.security_guards import get_managed_menu_item, get_managed_restaurant
from campus_delivery.services.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


def _validate_item_window(item: MenuItem) -> None:
    if (item.online_start is None) != (item.online_end is None):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="online_start and online_end must be provided together",
        )
    if item.force_online_override and (item.online_start is None or item.online_start == item.online_end):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Start and end time cannot be the same")
    headers = [group["option_header"] for group in item.options or []]
    if len(headers) != len(set(headers)):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Option headers must be unique")


def list_menu_for_owner(db: Session, user: User, restaurant_id: int) -> tuple[Restaurant, list[MenuItem]]:
    restaurant = get_managed_restaurant(db, user, restaurant_id)
    items = list(
        db.scalars(
            select(MenuItem).where(MenuItem.restaurant_id == restaurant.id).order_by(MenuItem.category, MenuItem.name)
        )
    )
    return restaurant, items


def add_menu_item(db: Session, user: User, restaurant_id: int, payload: MenuItemCreate) -> MenuItem:
    restaurant = get_managed_restaurant(db, user, restaurant_id)
    with UnitOfWork(db) as uow:
        uow.on_rollback(
            lambda: image_in_use(db, payload.image_url) or delete_image(payload.image_url),
            "delete uploaded menu image",
        )
        data = payload.model_dump(mode="json")
        data["base_price"] = payload.base_price
        item = MenuItem(**data, restaurant_id=restaurant.id)
        db.add(item)

    read_cache.invalidate_tag(restaurant_menu_tag(restaurant_id))
    db.refresh(item)
    logger.info("Menu item %s added to restaurant %s", item.id, restaurant_id)
    return item


def edit_menu_item(db: Session, user: User, item_id: int, payload: MenuItemUpdate) -> MenuItem:
    """Apply a partial update; a replaced image is deleted only after commit."""
    changes = payload.model_dump(exclude_unset=True, mode="json")
    item = get_managed_menu_item(db, user, item_id)
    new_image = changes.get("image_url")
    current_image = item.image_url
    with UnitOfWork(db) as uow:
        if new_image and new_image != current_image:
            uow.on_rollback(
                lambda: image_in_use(db, new_image) or delete_image(new_image),
                "delete uploaded menu image",
            )
            if current_image:
                uow.after_commit(lambda: delete_image(current_image), "delete replaced menu image")

        for field, value in changes.items():
            if value is None and field not in {"online_start", "online_end"}:
                continue
            setattr(item, field, payload.base_price if field == "base_price" else value)
        _validate_item_window(item)

    read_cache.invalidate_tag(restaurant_menu_tag(item.restaurant_id))
    db.refresh(item)
    return item


def delete_menu_item(db: Session, user: User, item_id: int) -> list[str]:
    """Delete a menu item; past orders keep their snapshot of it."""
    item = get_managed_menu_item(db, user, item_id)
    restaurant_id = item.restaurant_id
    image_url = item.image_url

    with UnitOfWork(db) as uow:
        db.execute(
            update(OrderItem)
            .where(OrderItem.menu_item_id == item.id)
            .values(menu_item_id=None)
            .execution_options(synchronize_session=False)
        )
        db.delete(item)
        uow.after_commit(lambda: delete_image(image_url), "delete menu image")

    read_cache.invalidate_tag(restaurant_menu_tag(restaurant_id))
    logger.info("Menu item %s deleted by user_id=%s", item_id, user.id)
    return uow.warnings


def menu_item_response(item, restaurant, now: int) -> MenuItemResponse:
    snapshot = MenuItemRead.model_validate(item)
    return MenuItemResponse(**snapshot.model_dump(), online=is_menu_item_online(snapshot, restaurant, now))
