"""Cart verification and order placement endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from campus_delivery.core.security import get_current_user
from campus_delivery.db.session import get_db
from campus_delivery.models.user import User
from campus_delivery.schemas.checkout import (
    CartValidationResult,
    CartVerifyRequest,
    DeliveryFeeDetails,
    DeliveryFeeRequest,
    PlaceOrderRequest,
    PlaceOrderResponse,
)
from campus_delivery.services.cart_service import MSG_ROUTE_FAILED, validate_cart
from campus_delivery.services.delivery_fee import calculate_delivery_fee_details
from campus_delivery.services.order_service import CheckoutRejectedError, place_order
from campus_delivery.services.routing import RouteUnavailableError
from campus_delivery.services.security_guards import ensure_role

router: APIRouter = APIRouter()
logger = logging.getLogger(__name__)


def _rejected(result: CartValidationResult) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=result.model_dump(mode="json"))


@router.post("/verify", response_model=CartValidationResult)
def verify_cart(
    payload: CartVerifyRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    ensure_role(current_user, {"CUSTOMER"})
    result = validate_cart(db, payload.items, payload.restaurant_id, payload.delivery_location)
    if not result.success:
        return _rejected(result)
    return result


@router.post("/place-order", response_model=PlaceOrderResponse)
def create_order(
    payload: PlaceOrderRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    ensure_role(current_user, {"CUSTOMER"})
    try:
        order = place_order(db, current_user, payload)
    except CheckoutRejectedError as exc:
        logger.info("[CHECKOUT] Order rejected for user_id=%s: %s", current_user.id, exc.result.message)
        return _rejected(exc.result)
    return PlaceOrderResponse(message="Order created successfully", order_id=order.order_id)


@router.post("/delivery-fee", response_model=DeliveryFeeDetails)
def delivery_fee(payload: DeliveryFeeRequest, db: Session = Depends(get_db)) -> DeliveryFeeDetails:
    try:
        return calculate_delivery_fee_details(db, payload.restaurant_location, payload.delivery_location)
    except RouteUnavailableError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=MSG_ROUTE_FAILED) from exc
