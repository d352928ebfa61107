"""Derived online status for restaurants and menu items.

Every function takes the current time explicitly as minutes since midnight,
so one request evaluates all entities against the same instant. Arguments
only need the relevant attributes, so ORM rows and cached snapshots both
work.
"""

from typing import Any

from campus_delivery.models.restaurant import OVERRIDE_OFFLINE, OVERRIDE_ONLINE


def is_within_window(now: int, start: int, end: int) -> bool:
    """Return True when ``now`` falls inside the ``[start, end)`` window.

    A window whose start is after its end wraps past midnight. ``start == end``
    never matches.
    """
    if start > end:
        return now >= start or now < end
    return start <= now < end


def is_restaurant_online(restaurant: Any, now: int) -> bool:
    if not restaurant.is_verified:
        return False
    if restaurant.force_online_override == OVERRIDE_ONLINE:
        return True
    if restaurant.force_online_override == OVERRIDE_OFFLINE:
        return False
    if restaurant.online_start is None or restaurant.online_end is None:
        return False
    return is_within_window(now, restaurant.online_start, restaurant.online_end)


def is_menu_item_online(item: Any, restaurant: Any, now: int) -> bool:
    """Item status; the restaurant must be online and the item available.

    Without its own override the item simply follows the restaurant.
    """
    if not item.available:
        return False
    if not is_restaurant_online(restaurant, now):
        return False
    if not item.force_online_override:
        return True
    if item.online_start is None or item.online_end is None:
        return True
    return is_within_window(now, item.online_start, item.online_end)
