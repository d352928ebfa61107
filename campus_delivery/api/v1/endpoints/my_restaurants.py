"""Restaurant-owner management endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from campus_delivery.core.security import get_current_user
from campus_delivery.db.session import get_db
from campus_delivery.models.user import User
from campus_delivery.schemas.menu import MenuItemCreate, MenuItemDeleteResponse, MenuItemResponse, MenuItemUpdate
from campus_delivery.schemas.restaurant import (
    RestaurantCreate,
    RestaurantCreateResponse,
    RestaurantDeleteResponse,
    RestaurantOverrideRequest,
    RestaurantResponse,
    RestaurantUpdate,
)
from campus_delivery.services import menu_service, restaurant_service
from campus_delivery.services.security_guards import ensure_role
from campus_delivery.utils.time import current_minutes

router: APIRouter = APIRouter()
logger = logging.getLogger(__name__)
MANAGER_ROLES: set[str] = {"RESTAURANT", "ADMIN"}


def _require_manager(user: User) -> None:
    ensure_role(user, MANAGER_ROLES)


@router.get("", response_model=list[RestaurantResponse])
def list_my_restaurants(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[RestaurantResponse]:
    _require_manager(current_user)
    now = current_minutes()
    return [
        restaurant_service.restaurant_response(restaurant, now)
        for restaurant in restaurant_service.list_owned_restaurants(db, current_user)
    ]


@router.post("", response_model=RestaurantCreateResponse, status_code=status.HTTP_201_CREATED)
def add_restaurant(
    payload: RestaurantCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> RestaurantCreateResponse:
    _require_manager(current_user)
    try:
        restaurant, email_sent = restaurant_service.create_restaurant(db, current_user, payload)
    except IntegrityError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Order code already in use.") from exc
    return RestaurantCreateResponse(
        restaurant=restaurant_service.restaurant_response(restaurant, current_minutes()),
        email_sent=email_sent,
    )


@router.put("/{restaurant_id}", response_model=RestaurantResponse)
def edit_restaurant(
    restaurant_id: int,
    payload: RestaurantUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> RestaurantResponse:
    _require_manager(current_user)
    restaurant = restaurant_service.update_restaurant(db, current_user, restaurant_id, payload)
    return restaurant_service.restaurant_response(restaurant, current_minutes())


@router.patch("/{restaurant_id}/override", response_model=RestaurantResponse)
def override_online_status(
    restaurant_id: int,
    payload: RestaurantOverrideRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> RestaurantResponse:
    _require_manager(current_user)
    restaurant = restaurant_service.set_force_override(
        db, current_user, restaurant_id, payload.force_online_override
    )
    return restaurant_service.restaurant_response(restaurant, current_minutes())


@router.delete("/{restaurant_id}", response_model=RestaurantDeleteResponse)
def delete_restaurant(
    restaurant_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> RestaurantDeleteResponse:
    _require_manager(current_user)
    warnings = restaurant_service.delete_restaurant(db, current_user, restaurant_id)
    return RestaurantDeleteResponse(
        message="Restaurant deleted successfully",
        warning="; ".join(warnings) if warnings else None,
    )


@router.get("/{restaurant_id}/menu", response_model=list[MenuItemResponse])
def manage_menu(
    restaurant_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[MenuItemResponse]:
    _require_manager(current_user)
    restaurant, items = menu_service.list_menu_for_owner(db, current_user, restaurant_id)
    now = current_minutes()
    return [menu_service.menu_item_response(item, restaurant, now) for item in items]


@router.post("/{restaurant_id}/menu", response_model=MenuItemResponse, status_code=status.HTTP_201_CREATED)
def add_menu_item(
    restaurant_id: int,
    payload: MenuItemCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MenuItemResponse:
    _require_manager(current_user)
    item = menu_service.add_menu_item(db, current_user, restaurant_id, payload)
    return menu_service.menu_item_response(item, item.restaurant, current_minutes())


@router.put("/menu-items/{item_id}", response_model=MenuItemResponse)
def edit_menu_item(
    item_id: int,
    payload: MenuItemUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MenuItemResponse:
    _require_manager(current_user)
    item = menu_service.edit_menu_item(db, current_user, item_id, payload)
    return menu_service.menu_item_response(item, item.restaurant, current_minutes())


@router.delete("/menu-items/{item_id}", response_model=MenuItemDeleteResponse)
def delete_menu_item(
    item_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MenuItemDeleteResponse:
    _require_manager(current_user)
    warnings = menu_service.delete_menu_item(db, current_user, item_id)
    return MenuItemDeleteResponse(
        message="Menu item deleted successfully",
        warning="; ".join(warnings) if warnings else None,
    )
