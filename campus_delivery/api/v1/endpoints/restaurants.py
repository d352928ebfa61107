"""Public restaurant and menu endpoints."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from campus_delivery.db.session import get_db
from campus_delivery.schemas.menu import PublicMenuResponse
from campus_delivery.schemas.restaurant import RestaurantResponse
from campus_delivery.services.availability import is_restaurant_online
from campus_delivery.services.menu_service import menu_item_response
from campus_delivery.services.restaurant_service import get_public_menu, list_verified_restaurants, restaurant_response
from campus_delivery.utils.time import current_minutes

router: APIRouter = APIRouter()


@router.get("", response_model=list[RestaurantResponse])
def list_restaurants(db: Session = Depends(get_db)) -> list[RestaurantResponse]:
    now = current_minutes()
    return [restaurant_response(restaurant, now) for restaurant in list_verified_restaurants(db)]


@router.get("/{restaurant_id}/menu", response_model=PublicMenuResponse)
def public_menu(restaurant_id: int, db: Session = Depends(get_db)) -> PublicMenuResponse:
    menu = get_public_menu(db, restaurant_id)
    if menu is None:
        raise HTTPException(status_code=404, detail="Restaurant not found or not verified.")
    restaurant, items = menu
    now = current_minutes()
    if not is_restaurant_online(restaurant, now):
        return PublicMenuResponse(
            restaurant=restaurant_response(restaurant, now),
            items=[],
            message="Restaurant is currently offline.",
        )
    online_items = [item for item in (menu_item_response(i, restaurant, now) for i in items) if item.online]
    return PublicMenuResponse(
        restaurant=restaurant_response(restaurant, now),
        items=online_items,
        message=None if online_items else "Restaurant has no available menu items.",
    )
