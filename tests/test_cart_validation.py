"""Server-side cart verification and re-pricing."""

from decimal import Decimal
from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from campus_delivery.db.base import Base
from campus_delivery.models import MenuItem, Restaurant, User
from campus_delivery.schemas.checkout import CartItemIn, Coordinate, SelectedOption
from campus_delivery.services.cart_service import (
    MSG_ITEMS_CHANGED,
    MSG_NOTHING_AVAILABLE,
    MSG_RESTAURANT_NOT_FOUND,
    MSG_RESTAURANT_OFFLINE,
    MSG_ROUTE_FAILED,
    MSG_VERIFIED,
    validate_cart,
)

NOON = 720
DROPOFF = Coordinate(lat=33.0207, lng=73.0)
SIZE_OPTIONS = [
    {
        "option_header": "Size",
        "required": True,
        "choices": [
            {"name": "Regular", "additional_price": "0.00"},
            {"name": "Large", "additional_price": "150.00"},
        ],
    },
    {
        "option_header": "Sauce",
        "required": False,
        "choices": [{"name": "Garlic", "additional_price": "30.00"}],
    },
]


def _build_test_engine(db_file: Path) -> Engine:
    return create_engine(
        f"sqlite:///{db_file}",
        connect_args={"check_same_thread": False},
    )


@pytest.fixture()
def db(tmp_path: Path) -> Session:
    engine = _build_test_engine(tmp_path / "test_cart.db")
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)
    with testing_session_local() as session:
        yield session


def _seed(db: Session, *, verified: bool = True) -> dict[str, int]:
    owner = User(username="owner", email="owner@example.com", password_hash="x", role="RESTAURANT")
    db.add(owner)
    db.flush()
    restaurant = Restaurant(
        name="Campus Grill",
        logo_image_url="https://res.cloudinary.com/demo/image/upload/v1/logo.png",
        accent_color="#112233",
        order_code="CG",
        location_lat=33.0,
        location_lng=73.0,
        location_address="Main Street 1, Campus",
        location_city="Islamabad",
        online_start=540,
        online_end=1260,
        is_verified=verified,
        owner_id=owner.id,
    )
    other = Restaurant(
        name="Other Place",
        logo_image_url="https://res.cloudinary.com/demo/image/upload/v1/other.png",
        accent_color="#445566",
        order_code="OP",
        location_lat=33.1,
        location_lng=73.1,
        location_address="Second Street 2, Campus",
        location_city="Islamabad",
        online_start=0,
        online_end=1439,
        is_verified=True,
        owner_id=owner.id,
    )
    db.add_all([restaurant, other])
    db.flush()
    burger = MenuItem(
        restaurant_id=restaurant.id,
        name="Burger",
        description="Grilled beef burger",
        base_price=Decimal("500.00"),
        image_url="https://res.cloudinary.com/demo/image/upload/v1/burger.png",
        category="Mains",
        options=SIZE_OPTIONS,
    )
    fries = MenuItem(
        restaurant_id=restaurant.id,
        name="Fries",
        description="Salted potato fries",
        base_price=Decimal("200.00"),
        image_url="https://res.cloudinary.com/demo/image/upload/v1/fries.png",
        category="Sides",
        options=[],
    )
    soldout = MenuItem(
        restaurant_id=restaurant.id,
        name="Shake",
        description="Chocolate milk shake",
        base_price=Decimal("300.00"),
        image_url="https://res.cloudinary.com/demo/image/upload/v1/shake.png",
        category="Drinks",
        options=[],
        available=False,
    )
    foreign = MenuItem(
        restaurant_id=other.id,
        name="Pizza",
        description="Cheese pizza slice",
        base_price=Decimal("400.00"),
        image_url="https://res.cloudinary.com/demo/image/upload/v1/pizza.png",
        category="Mains",
        options=[],
    )
    db.add_all([burger, fries, soldout, foreign])
    db.commit()
    return {
        "restaurant": restaurant.id,
        "burger": burger.id,
        "fries": fries.id,
        "soldout": soldout.id,
        "foreign": foreign.id,
    }


def _large_burger(ids: dict[str, int], quantity: int = 2, **kwargs) -> CartItemIn:
    return CartItemIn(
        menu_item_id=ids["burger"],
        name="Burger",
        quantity=quantity,
        options=[SelectedOption(option_header="Size", selected="Large")],
        **kwargs,
    )


def test_valid_cart_is_priced_from_menu(db: Session) -> None:
    ids = _seed(db)
    items = [_large_burger(ids), CartItemIn(menu_item_id=ids["fries"], quantity=1)]

    result = validate_cart(db, items, ids["restaurant"], DROPOFF, now=NOON)

    assert result.success is True
    assert result.message == MSG_VERIFIED
    assert result.removed_items == []
    burger, fries = result.verified_items
    assert burger.unit_price == Decimal("650.00")
    assert burger.line_total == Decimal("1300.00")
    assert burger.options[0].additional_price == Decimal("150.00")
    assert fries.line_total == Decimal("200.00")
    assert result.order_amount == Decimal("1500.00")
    assert result.delivery_fee_details.distance_km == 2.3
    assert result.delivery_fee_details.delivery_fee == Decimal("132.50")
    assert result.total_amount == Decimal("1632.50")


def test_missing_required_option_removes_only_item(db: Session) -> None:
    ids = _seed(db)
    items = [CartItemIn(menu_item_id=ids["burger"], name="Burger", quantity=1)]

    result = validate_cart(db, items, ids["restaurant"], DROPOFF, now=NOON)

    assert result.success is False
    assert result.message == MSG_NOTHING_AVAILABLE
    assert [item.reason for item in result.removed_items] == ["Required options are missing: Size"]


def test_partial_removal_keeps_remaining_items(db: Session) -> None:
    ids = _seed(db)
    items = [
        CartItemIn(menu_item_id=ids["burger"], quantity=1),
        CartItemIn(menu_item_id=ids["fries"], quantity=2),
    ]

    result = validate_cart(db, items, ids["restaurant"], DROPOFF, now=NOON)

    assert result.success is True
    assert result.message == MSG_ITEMS_CHANGED
    assert [item.menu_item_id for item in result.verified_items] == [ids["fries"]]
    assert [item.menu_item_id for item in result.removed_items] == [ids["burger"]]
    assert result.order_amount == Decimal("400.00")


@pytest.mark.parametrize(
    ("options", "reason"),
    [
        (
            [SelectedOption(option_header="Size", selected="Huge")],
            'Option "Size: Huge" is no longer available',
        ),
        (
            [SelectedOption(option_header="Size", selected="Large"), SelectedOption(option_header="Toppings", selected="Egg")],
            'Option "Toppings" is no longer available',
        ),
        (
            [SelectedOption(option_header="Size", selected="Large"), SelectedOption(option_header="Size", selected="Regular")],
            'Option "Size" was selected more than once',
        ),
    ],
)
def test_invalid_options_remove_item(db: Session, options, reason: str) -> None:
    ids = _seed(db)
    items = [
        CartItemIn(menu_item_id=ids["burger"], quantity=1, options=options),
        CartItemIn(menu_item_id=ids["fries"], quantity=1),
    ]

    result = validate_cart(db, items, ids["restaurant"], DROPOFF, now=NOON)

    assert [item.reason for item in result.removed_items] == [reason]


def test_missing_unavailable_and_foreign_items_are_removed(db: Session) -> None:
    ids = _seed(db)
    items = [
        CartItemIn(menu_item_id=9999, name="Ghost", quantity=1),
        CartItemIn(menu_item_id=ids["soldout"], quantity=1),
        CartItemIn(menu_item_id=ids["foreign"], quantity=1),
        CartItemIn(menu_item_id=ids["fries"], quantity=1),
    ]

    result = validate_cart(db, items, ids["restaurant"], DROPOFF, now=NOON)

    reasons = {item.menu_item_id: item.reason for item in result.removed_items}
    assert reasons == {
        9999: "Item no longer exists in the menu",
        ids["soldout"]: "Item is currently unavailable",
        ids["foreign"]: "Item no longer exists in the menu",
    }
    assert result.success is True


def test_client_prices_are_never_trusted(db: Session) -> None:
    ids = _seed(db)
    items = [
        CartItemIn(
            menu_item_id=ids["burger"],
            quantity=1,
            base_price=Decimal("1.00"),
            options=[SelectedOption(option_header="Size", selected="Large", additional_price=Decimal("0.00"))],
        )
    ]

    result = validate_cart(db, items, ids["restaurant"], DROPOFF, now=NOON)

    verified = result.verified_items[0]
    assert verified.base_price == Decimal("500.00")
    assert verified.unit_price == Decimal("650.00")
    assert verified.price_changed is True


def test_matching_client_prices_are_not_flagged(db: Session) -> None:
    ids = _seed(db)
    items = [_large_burger(ids, quantity=1, base_price=Decimal("500.00"))]

    result = validate_cart(db, items, ids["restaurant"], DROPOFF, now=NOON)

    assert result.verified_items[0].price_changed is False


def test_validation_is_idempotent(db: Session) -> None:
    ids = _seed(db)
    items = [_large_burger(ids), CartItemIn(menu_item_id=ids["fries"], quantity=3)]

    first = validate_cart(db, items, ids["restaurant"], DROPOFF, now=NOON)
    second = validate_cart(db, items, ids["restaurant"], DROPOFF, now=NOON)

    assert first.verified_items == second.verified_items
    assert first.delivery_fee_details == second.delivery_fee_details


def test_offline_restaurant_rejects_every_line(db: Session) -> None:
    ids = _seed(db)
    items = [_large_burger(ids), CartItemIn(menu_item_id=ids["fries"], quantity=1)]

    result = validate_cart(db, items, ids["restaurant"], DROPOFF, now=1300)

    assert result.success is False
    assert result.message == MSG_RESTAURANT_OFFLINE
    assert len(result.removed_items) == 2
    assert {item.reason for item in result.removed_items} == {MSG_RESTAURANT_OFFLINE}


def test_unverified_restaurant_is_not_found(db: Session) -> None:
    ids = _seed(db, verified=False)

    result = validate_cart(db, [_large_burger(ids)], ids["restaurant"], DROPOFF, now=NOON)

    assert result.success is False
    assert result.message == MSG_RESTAURANT_NOT_FOUND


def test_unroutable_dropoff_fails_with_route_message(db: Session) -> None:
    ids = _seed(db)

    result = validate_cart(db, [_large_burger(ids)], ids["restaurant"], Coordinate(lat=123.0, lng=73.0), now=NOON)

    assert result.success is False
    assert result.message == MSG_ROUTE_FAILED
    assert result.delivery_fee_details is None
