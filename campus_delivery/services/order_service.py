"""Order placement and tracking."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from campus_delivery.models import Order, OrderItem, Restaurant, User
from campus_delivery.models.order import CLOSED_ORDER_STATUSES
from campus_delivery.schemas.checkout import CartValidationResult, PlaceOrderRequest
from campus_delivery.services.cart_service import MSG_RESTAURANT_NOT_FOUND, validate_cart
from campus_delivery.services.image_storage import delete_image, image_in_use
from campus_delivery.services.order_status import set_payment_status, set_status
from campus_delivery.services.sequence_service import ORDER_ID_SEQUENCE, format_order_id, next_sequence
from campus_delivery.services.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class CheckoutRejectedError(Exception):
    """Raised when a cart does not pass verification at order time."""

    def __init__(self, result: CartValidationResult) -> None:
        super().__init__(result.message)
        self.result = result


def _discard_payment_slip(db: Session, url: str) -> None:
    if not url or image_in_use(db, url):
        return
    try:
        delete_image(url)
    except Exception:
        logger.exception("[CLEANUP] Failed to delete payment slip %s", url)


def place_order(db: Session, customer: User, payload: PlaceOrderRequest, now: int | None = None) -> Order:
    """Verify the cart again and persist the order with item snapshots.

    The cart must verify without any removed lines; otherwise the customer has
    to confirm the cleaned cart first. The uploaded payment slip is deleted
    whenever the order is not created.

    Raises:
        CheckoutRejectedError: when verification fails or changed the cart.
    """
    result = validate_cart(db, payload.items, payload.restaurant_id, payload.delivery_location, now=now)
    restaurant = db.get(Restaurant, payload.restaurant_id) if result.success else None
    if restaurant is None and result.success:
        # Deleted between verification and this lookup.
        result = CartValidationResult(success=False, message=MSG_RESTAURANT_NOT_FOUND)
    if not result.success or result.removed_items:
        _discard_payment_slip(db, payload.payment_slip_url)
        if result.success:
            result = result.model_copy(update={"success": False})
        raise CheckoutRejectedError(result)

    fee_details = result.delivery_fee_details

    with UnitOfWork(db) as uow:
        if payload.payment_slip_url:
            uow.on_rollback(
                lambda: image_in_use(db, payload.payment_slip_url) or delete_image(payload.payment_slip_url),
                "delete payment slip",
            )
        sequence = next_sequence(db, ORDER_ID_SEQUENCE)
        order = Order(
            order_id=format_order_id(restaurant.order_code, sequence),
            customer_id=customer.id,
            restaurant_id=restaurant.id,
            restaurant_name=restaurant.name,
            status="PENDING",
            pickup_lat=restaurant.location_lat,
            pickup_lng=restaurant.location_lng,
            pickup_address=restaurant.location_address,
            dropoff_lat=payload.delivery_location.lat,
            dropoff_lng=payload.delivery_location.lng,
            dropoff_address=payload.delivery_location.address,
            distance_km=fee_details.distance_km,
            order_amount=result.order_amount,
            delivery_fee=fee_details.delivery_fee,
            payment_slip_url=payload.payment_slip_url,
            payment_status="UNPAID",
            special_instructions=payload.special_instructions,
        )
        order.items = [
            OrderItem(
                menu_item_id=line.menu_item_id,
                name=line.name,
                base_price=line.base_price,
                image_url=line.image_url,
                category=line.category,
                options=[option.model_dump(mode="json") for option in line.options],
                quantity=line.quantity,
                unit_price=line.unit_price,
                line_total=line.line_total,
            )
            for line in result.verified_items
        ]
        db.add(order)

    db.refresh(order)
    logger.info("[CHECKOUT] Order %s placed by user_id=%s", order.order_id, customer.id)
    return order


def _orders_query(customer: User):
    return (
        select(Order)
        .options(selectinload(Order.items))
        .where(Order.customer_id == customer.id)
        .order_by(Order.created_at.desc(), Order.id.desc())
    )


def list_active_orders(db: Session, customer: User) -> list[Order]:
    return list(db.scalars(_orders_query(customer).where(Order.status.not_in(sorted(CLOSED_ORDER_STATUSES)))))


def list_customer_orders(db: Session, customer: User) -> list[Order]:
    return list(db.scalars(_orders_query(customer)))


def _can_manage_order(user: User, order: Order) -> bool:
    if user.is_super_admin:
        return True
    return order.restaurant is not None and order.restaurant.owner_id == user.id


def get_order_for_user(db: Session, user: User, order_id: str) -> Order:
    """Fetch an order visible to ``user``; 404 hides orders of other users."""
    order = db.scalar(select(Order).options(selectinload(Order.items)).where(Order.order_id == order_id))
    if order is None or (order.customer_id != user.id and not _can_manage_order(user, order)):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Order not found")
    return order


def update_order_status(
    db: Session,
    actor: User,
    order_id: str,
    new_status: str | None = None,
    payment_status: str | None = None,
) -> Order:
    """Move an order to another status; restaurant owner or admin only."""
    order = db.scalar(select(Order).where(Order.order_id == order_id))
    if order is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Order not found")
    if not _can_manage_order(actor, order):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")

    try:
        if new_status is not None:
            set_status(order, new_status, datetime.now(timezone.utc))
        if payment_status is not None:
            set_payment_status(order, payment_status)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    db.commit()
    db.refresh(order)
    logger.info(
        "Order %s updated by user_id=%s: status=%s payment_status=%s",
        order.order_id,
        actor.id,
        order.status,
        order.payment_status,
    )
    return order
