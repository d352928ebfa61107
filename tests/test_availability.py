"""Online status evaluation for restaurants and menu items."""

from types import SimpleNamespace

import pytest

from campus_delivery.services.availability import is_menu_item_online, is_restaurant_online, is_within_window


def _restaurant(**overrides) -> SimpleNamespace:
    values = {
        "is_verified": True,
        "force_online_override": 0,
        "online_start": 540,
        "online_end": 1260,
    }
    values.update(overrides)
    return SimpleNamespace(**values)


def _item(**overrides) -> SimpleNamespace:
    values = {
        "available": True,
        "force_online_override": False,
        "online_start": None,
        "online_end": None,
    }
    values.update(overrides)
    return SimpleNamespace(**values)


@pytest.mark.parametrize(
    ("now", "expected"),
    [(539, False), (540, True), (720, True), (1259, True), (1260, False), (1300, False)],
)
def test_daytime_window_is_half_open(now: int, expected: bool) -> None:
    assert is_within_window(now, 540, 1260) is expected


@pytest.mark.parametrize(
    ("now", "expected"),
    [(60, True), (0, True), (1320, True), (1439, True), (119, True), (120, False), (600, False), (1319, False)],
)
def test_window_wrapping_past_midnight(now: int, expected: bool) -> None:
    assert is_within_window(now, 1320, 120) is expected


def test_zero_length_window_never_matches() -> None:
    assert not any(is_within_window(now, 600, 600) for now in range(0, 1440))


def test_restaurant_follows_window_without_override() -> None:
    restaurant = _restaurant()

    assert is_restaurant_online(restaurant, 720) is True
    assert is_restaurant_online(restaurant, 1300) is False


def test_restaurant_wraparound_window_scenario() -> None:
    restaurant = _restaurant(online_start=1320, online_end=120)

    assert is_restaurant_online(restaurant, 60) is True
    assert is_restaurant_online(restaurant, 600) is False


def test_override_short_circuits_window() -> None:
    assert is_restaurant_online(_restaurant(force_online_override=1), 1300) is True
    assert is_restaurant_online(_restaurant(force_online_override=-1), 720) is False


def test_unverified_restaurant_is_always_offline() -> None:
    for override in (-1, 0, 1):
        restaurant = _restaurant(is_verified=False, force_online_override=override)
        assert not any(is_restaurant_online(restaurant, now) for now in range(0, 1440, 30))


def test_restaurant_without_window_is_offline() -> None:
    assert is_restaurant_online(_restaurant(online_start=None, online_end=None), 720) is False


def test_item_inherits_restaurant_status() -> None:
    restaurant = _restaurant()

    assert is_menu_item_online(_item(), restaurant, 720) is True
    assert is_menu_item_online(_item(), restaurant, 1300) is False


def test_unavailable_item_is_always_offline() -> None:
    restaurant = _restaurant(force_online_override=1)
    item = _item(available=False)

    assert not any(is_menu_item_online(item, restaurant, now) for now in range(0, 1440, 30))


def test_item_override_uses_own_window() -> None:
    restaurant = _restaurant(force_online_override=1)
    breakfast = _item(force_online_override=True, online_start=420, online_end=660)

    assert is_menu_item_online(breakfast, restaurant, 480) is True
    assert is_menu_item_online(breakfast, restaurant, 720) is False


def test_item_override_without_window_stays_online() -> None:
    restaurant = _restaurant()

    assert is_menu_item_online(_item(force_online_override=True), restaurant, 720) is True


def test_item_window_cannot_revive_offline_restaurant() -> None:
    restaurant = _restaurant(force_online_override=-1)
    item = _item(force_online_override=True, online_start=0, online_end=1439)

    assert is_menu_item_online(item, restaurant, 720) is False
