"""Order tracking endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from campus_delivery.core.security import get_current_user
from campus_delivery.db.session import get_db
from campus_delivery.models.user import User
from campus_delivery.schemas.order import OrderResponse, OrderStatusUpdate
from campus_delivery.services import order_service

router: APIRouter = APIRouter()


@router.get("/active", response_model=list[OrderResponse])
def active_orders(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[OrderResponse]:
    return [OrderResponse.model_validate(order) for order in order_service.list_active_orders(db, current_user)]


@router.get("/me", response_model=list[OrderResponse])
def my_orders(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[OrderResponse]:
    return [OrderResponse.model_validate(order) for order in order_service.list_customer_orders(db, current_user)]


@router.get("/{order_id}", response_model=OrderResponse)
def get_order(
    order_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> OrderResponse:
    return OrderResponse.model_validate(order_service.get_order_for_user(db, current_user, order_id))


@router.patch("/{order_id}/status", response_model=OrderResponse)
def change_order_status(
    order_id: str,
    payload: OrderStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> OrderResponse:
    order = order_service.update_order_status(
        db, current_user, order_id, new_status=payload.status, payment_status=payload.payment_status
    )
    return OrderResponse.model_validate(order)
