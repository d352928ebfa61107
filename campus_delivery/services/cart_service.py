"""Server-side cart verification.

Both the verify step and order placement go through ``validate_cart`` so the
amount shown before checkout is the amount that gets charged.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from campus_delivery.models import MenuItem, Restaurant
from campus_delivery.schemas.checkout import (
    CartItemIn,
    CartValidationResult,
    Coordinate,
    PricedOption,
    RemovedCartItem,
    VerifiedCartItem,
)
from campus_delivery.services.availability import is_menu_item_online, is_restaurant_online
from campus_delivery.services.delivery_fee import CENT, calculate_delivery_fee_details
from campus_delivery.services.routing import RouteUnavailableError
from campus_delivery.utils.time import current_minutes

logger = logging.getLogger(__name__)

MSG_RESTAURANT_NOT_FOUND = "Restaurant not found"
MSG_RESTAURANT_OFFLINE = "Restaurant is currently offline"
MSG_NOTHING_AVAILABLE = "None of the items in your cart are available"
MSG_ROUTE_FAILED = (
    "Unable to calculate delivery route. The selected location may be too far or not accessible."
)
MSG_ITEMS_CHANGED = "Some items are no longer available or have been modified"
MSG_VERIFIED = "Order verified successfully"

REASON_MISSING = "Item no longer exists in the menu"
REASON_UNAVAILABLE = "Item is currently unavailable"


class _InvalidLine(Exception):
    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


def _removed(line: CartItemIn, reason: str, name: str | None = None) -> RemovedCartItem:
    return RemovedCartItem(
        menu_item_id=line.menu_item_id,
        name=name or line.name,
        quantity=line.quantity,
        options=line.options,
        reason=reason,
    )


def _price_options(line: CartItemIn, groups: list[dict[str, Any]]) -> tuple[list[PricedOption], bool]:
    """Match selected options against the item's groups.

    Returns priced options plus whether the client saw a different option price.
    """
    by_header = {group["option_header"]: group for group in groups}
    selected_headers = {option.option_header for option in line.options}

    missing = [
        group["option_header"]
        for group in groups
        if group.get("required") and group["option_header"] not in selected_headers
    ]
    if missing:
        raise _InvalidLine(f"Required options are missing: {', '.join(missing)}")

    priced: list[PricedOption] = []
    seen: set[str] = set()
    price_changed = False
    for option in line.options:
        if option.option_header in seen:
            raise _InvalidLine(f'Option "{option.option_header}" was selected more than once')
        seen.add(option.option_header)

        group = by_header.get(option.option_header)
        if group is None:
            raise _InvalidLine(f'Option "{option.option_header}" is no longer available')
        choice = next((c for c in group["choices"] if c["name"] == option.selected), None)
        if choice is None:
            raise _InvalidLine(f'Option "{option.option_header}: {option.selected}" is no longer available')

        price = Decimal(str(choice["additional_price"])).quantize(CENT)
        if option.additional_price is not None and option.additional_price != price:
            price_changed = True
        priced.append(PricedOption(option_header=option.option_header, selected=option.selected, additional_price=price))
    return priced, price_changed


def _verify_line(line: CartItemIn, item: MenuItem) -> VerifiedCartItem:
    options, price_changed = _price_options(line, item.options or [])
    base_price = Decimal(item.base_price).quantize(CENT)
    if line.base_price is not None and line.base_price != base_price:
        price_changed = True
    unit_price = base_price + sum((option.additional_price for option in options), Decimal("0"))
    return VerifiedCartItem(
        menu_item_id=item.id,
        name=item.name,
        base_price=base_price,
        image_url=item.image_url,
        category=item.category,
        quantity=line.quantity,
        options=options,
        unit_price=unit_price,
        line_total=(unit_price * line.quantity).quantize(CENT),
        price_changed=price_changed,
    )


def validate_cart(
    db: Session,
    items: list[CartItemIn],
    restaurant_id: int,
    delivery_location: Coordinate,
    now: int | None = None,
) -> CartValidationResult:
    """Re-validate and re-price a submitted cart against the current menu.

    Lines that cannot be ordered are returned in ``removed_items`` with a
    reason. The result is successful as long as at least one line survives
    and a delivery fee can be computed; callers decide whether a partially
    cleaned cart is acceptable.
    """
    restaurant = db.scalar(
        select(Restaurant).where(Restaurant.id == restaurant_id, Restaurant.is_verified.is_(True))
    )
    if restaurant is None:
        return CartValidationResult(success=False, message=MSG_RESTAURANT_NOT_FOUND)

    now = current_minutes() if now is None else now
    if not is_restaurant_online(restaurant, now):
        return CartValidationResult(
            success=False,
            message=MSG_RESTAURANT_OFFLINE,
            removed_items=[_removed(line, MSG_RESTAURANT_OFFLINE) for line in items],
        )

    ids = {line.menu_item_id for line in items}
    menu_items = {
        item.id: item
        for item in db.scalars(
            select(MenuItem).where(MenuItem.id.in_(ids), MenuItem.restaurant_id == restaurant.id)
        )
    }

    verified: list[VerifiedCartItem] = []
    removed: list[RemovedCartItem] = []
    for line in items:
        item = menu_items.get(line.menu_item_id)
        if item is None:
            removed.append(_removed(line, REASON_MISSING))
            continue
        if not is_menu_item_online(item, restaurant, now):
            removed.append(_removed(line, REASON_UNAVAILABLE, item.name))
            continue
        try:
            verified.append(_verify_line(line, item))
        except _InvalidLine as exc:
            removed.append(_removed(line, exc.reason, item.name))

    if not verified:
        return CartValidationResult(success=False, message=MSG_NOTHING_AVAILABLE, removed_items=removed)

    order_amount = sum((line.line_total for line in verified), Decimal("0")).quantize(CENT)
    try:
        fee_details = calculate_delivery_fee_details(
            db,
            Coordinate(lat=restaurant.location_lat, lng=restaurant.location_lng),
            delivery_location,
        )
    except RouteUnavailableError as exc:
        logger.info("[CHECKOUT] Route unavailable for restaurant_id=%s: %s", restaurant.id, exc)
        return CartValidationResult(
            success=False,
            message=MSG_ROUTE_FAILED,
            verified_items=verified,
            removed_items=removed,
            order_amount=order_amount,
        )

    return CartValidationResult(
        success=True,
        message=MSG_ITEMS_CHANGED if removed else MSG_VERIFIED,
        verified_items=verified,
        removed_items=removed,
        order_amount=order_amount,
        delivery_fee_details=fee_details,
        total_amount=order_amount + fee_details.delivery_fee,
    )
