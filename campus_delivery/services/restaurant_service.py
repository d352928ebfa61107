"""Restaurant registration, management and public listings."""

from __future__ import annotations

import logging

from fastapi import HTTPException, status
from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from campus_delivery.models import MenuItem, Order, OrderItem, Restaurant, User
from campus_delivery.models.restaurant import FORCE_OVERRIDE_VALUES
from campus_delivery.schemas.menu import MenuItemRead
from campus_delivery.schemas.restaurant import RestaurantCreate, RestaurantRead, RestaurantResponse, RestaurantUpdate
from campus_delivery.services.availability import is_restaurant_online
from campus_delivery.services.cache import VERIFIED_RESTAURANTS_TAG, read_cache, restaurant_menu_tag
from campus_delivery.services.email_service import send_restaurant_submission_email
from campus_delivery.services.image_storage import delete_image, image_in_use
from campus_delivery.services.security_guards import get_managed_restaurant
from campus_delivery.services.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


def _invalidate_restaurant(restaurant_id: int) -> None:
    read_cache.invalidate_tag(VERIFIED_RESTAURANTS_TAG)
    read_cache.invalidate_tag(restaurant_menu_tag(restaurant_id))


def count_owned_restaurants(db: Session, owner: User) -> int:
    return int(db.scalar(select(func.count(Restaurant.id)).where(Restaurant.owner_id == owner.id)) or 0)


def create_restaurant(db: Session, owner: User, payload: RestaurantCreate) -> tuple[Restaurant, bool]:
    """Register a new (unverified) restaurant for ``owner``.

    The uploaded logo is deleted if the restaurant is not created. Returns the
    restaurant and whether the confirmation email went out.
    """
    with UnitOfWork(db) as uow:
        uow.on_rollback(
            lambda: image_in_use(db, payload.logo_image_url) or delete_image(payload.logo_image_url),
            "delete uploaded logo",
        )

        if db.scalar(select(Restaurant.id).where(Restaurant.order_code == payload.order_code)) is not None:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Order code already in use.")
        if not owner.is_super_admin and count_owned_restaurants(db, owner) >= owner.max_owned_restaurants:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"You can only own a maximum of {owner.max_owned_restaurants} restaurants.",
            )

        restaurant = Restaurant(**payload.model_dump(), owner_id=owner.id, is_verified=False)
        db.add(restaurant)

    db.refresh(restaurant)
    logger.info("Restaurant %s (%s) created by user_id=%s", restaurant.id, restaurant.order_code, owner.id)
    email_sent = send_restaurant_submission_email(owner.email, owner.username, restaurant)
    return restaurant, email_sent


def update_restaurant(db: Session, user: User, restaurant_id: int, payload: RestaurantUpdate) -> Restaurant:
    restaurant = get_managed_restaurant(db, user, restaurant_id)
    changes = payload.model_dump(exclude_unset=True, exclude_none=True)

    with UnitOfWork(db) as uow:
        new_logo = changes.get("logo_image_url")
        if new_logo and new_logo != restaurant.logo_image_url:
            old_logo = restaurant.logo_image_url
            uow.on_rollback(lambda: image_in_use(db, new_logo) or delete_image(new_logo), "delete uploaded logo")
            uow.after_commit(lambda: delete_image(old_logo), "delete replaced logo")
        for field, value in changes.items():
            setattr(restaurant, field, value)

    _invalidate_restaurant(restaurant.id)
    db.refresh(restaurant)
    return restaurant


def set_force_override(db: Session, user: User, restaurant_id: int, override: int) -> Restaurant:
    if override not in FORCE_OVERRIDE_VALUES:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid override value")
    restaurant = get_managed_restaurant(db, user, restaurant_id)
    restaurant.force_online_override = override
    db.commit()
    db.refresh(restaurant)
    _invalidate_restaurant(restaurant.id)
    logger.info("Restaurant %s override set to %s by user_id=%s", restaurant.id, override, user.id)
    return restaurant


def set_restaurant_verified(db: Session, restaurant_id: int, is_verified: bool) -> Restaurant:
    restaurant = db.get(Restaurant, restaurant_id)
    if restaurant is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Restaurant not found")
    restaurant.is_verified = is_verified
    db.commit()
    db.refresh(restaurant)
    _invalidate_restaurant(restaurant.id)
    return restaurant


def delete_restaurant(db: Session, user: User, restaurant_id: int) -> list[str]:
    """Delete a restaurant with its menu; orders keep their snapshots.

    Returns cleanup warnings; image deletion failures do not undo the delete.
    """
    restaurant = get_managed_restaurant(db, user, restaurant_id)
    item_rows = db.execute(
        select(MenuItem.id, MenuItem.image_url).where(MenuItem.restaurant_id == restaurant.id)
    ).all()
    item_ids = [row.id for row in item_rows]
    image_urls = [restaurant.logo_image_url, *(row.image_url for row in item_rows)]

    with UnitOfWork(db) as uow:
        if item_ids:
            db.execute(
                update(OrderItem)
                .where(OrderItem.menu_item_id.in_(item_ids))
                .values(menu_item_id=None)
                .execution_options(synchronize_session=False)
            )
        db.execute(
            update(Order)
            .where(Order.restaurant_id == restaurant.id)
            .values(restaurant_id=None)
            .execution_options(synchronize_session=False)
        )
        db.delete(restaurant)
        for url in image_urls:
            uow.after_commit(lambda url=url: delete_image(url), f"delete image {url}")

    _invalidate_restaurant(restaurant_id)
    logger.info("Restaurant %s deleted by user_id=%s (%s menu items)", restaurant_id, user.id, len(item_ids))
    return uow.warnings


def list_owned_restaurants(db: Session, user: User) -> list[Restaurant]:
    stmt = select(Restaurant).order_by(Restaurant.name, Restaurant.id)
    if not user.is_super_admin:
        stmt = stmt.where(Restaurant.owner_id == user.id)
    return list(db.scalars(stmt))


def list_verified_restaurants(db: Session) -> list[RestaurantRead]:
    """Snapshots of every verified restaurant; status is evaluated by callers."""

    def load() -> list[RestaurantRead]:
        rows = db.scalars(
            select(Restaurant).where(Restaurant.is_verified.is_(True)).order_by(Restaurant.name, Restaurant.id)
        )
        return [RestaurantRead.model_validate(row) for row in rows]

    return read_cache.get_or_set(VERIFIED_RESTAURANTS_TAG, (VERIFIED_RESTAURANTS_TAG,), load)


def get_public_menu(db: Session, restaurant_id: int) -> tuple[RestaurantRead, list[MenuItemRead]] | None:
    """Verified restaurant with its available items, sorted by category and name."""

    def load() -> tuple[RestaurantRead, list[MenuItemRead]] | tuple[()]:
        restaurant = db.scalar(
            select(Restaurant).where(Restaurant.id == restaurant_id, Restaurant.is_verified.is_(True))
        )
        if restaurant is None:
            return ()
        items = db.scalars(
            select(MenuItem)
            .where(MenuItem.restaurant_id == restaurant_id, MenuItem.available.is_(True))
            .order_by(MenuItem.category, MenuItem.name)
        )
        return RestaurantRead.model_validate(restaurant), [MenuItemRead.model_validate(item) for item in items]

    tag = restaurant_menu_tag(restaurant_id)
    cached = read_cache.get_or_set(tag, (tag,), load)
    return cached or None


def restaurant_response(restaurant, now: int) -> RestaurantResponse:
    """Serialize an ORM row or cached snapshot with its status at ``now``."""
    snapshot = RestaurantRead.model_validate(restaurant)
    return RestaurantResponse(**snapshot.model_dump(), online=is_restaurant_online(snapshot, now))
