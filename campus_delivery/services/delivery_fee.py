"""Delivery fee calculation from distance and admin settings."""

from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy.orm import Session

from campus_delivery.schemas.checkout import Coordinate, DeliveryFeeDetails
from campus_delivery.services.routing import street_distance_km
from campus_delivery.services.settings_service import get_admin_settings

CENT = Decimal("0.01")


def compute_delivery_fee(distance_km: float, base_fee: Decimal, per_km_rate: Decimal) -> Decimal:
    """``base_fee + per_km_rate * distance_km`` rounded to cents."""
    fee = base_fee + per_km_rate * Decimal(str(distance_km))
    return fee.quantize(CENT, rounding=ROUND_HALF_UP)


def calculate_delivery_fee_details(db: Session, pickup: Coordinate, dropoff: Coordinate) -> DeliveryFeeDetails:
    """Distance and fee breakdown between the restaurant and the drop-off point.

    Raises:
        RouteUnavailableError: if the coordinates cannot be routed at all.
    """
    admin_settings = get_admin_settings(db)
    distance_km = street_distance_km(pickup.lat, pickup.lng, dropoff.lat, dropoff.lng)
    return DeliveryFeeDetails(
        distance_km=distance_km,
        base_fee=admin_settings.base_delivery_fee,
        per_km_rate=admin_settings.delivery_fee_per_km,
        delivery_fee=compute_delivery_fee(
            distance_km, admin_settings.base_delivery_fee, admin_settings.delivery_fee_per_km
        ),
    )
