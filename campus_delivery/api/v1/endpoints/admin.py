"""Super-admin console endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from campus_delivery.core.security import get_current_user
from campus_delivery.db.session import get_db
from campus_delivery.models.user import User
from campus_delivery.schemas.admin import AdminSettingsRead, AdminSettingsUpdate, DashboardStats
from campus_delivery.schemas.restaurant import RestaurantResponse, RestaurantVerifyRequest
from campus_delivery.services import settings_service
from campus_delivery.services.restaurant_service import restaurant_response, set_restaurant_verified
from campus_delivery.services.security_guards import ensure_role
from campus_delivery.utils.time import current_minutes

router: APIRouter = APIRouter()
public_router: APIRouter = APIRouter()


@router.get("/settings", response_model=AdminSettingsRead)
def read_settings(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> AdminSettingsRead:
    ensure_role(current_user, {"ADMIN"})
    return settings_service.get_admin_settings(db)


@router.put("/settings", response_model=AdminSettingsRead)
def update_settings(
    payload: AdminSettingsUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> AdminSettingsRead:
    ensure_role(current_user, {"ADMIN"})
    try:
        return settings_service.save_admin_settings(db, payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.get("/dashboard-stats", response_model=DashboardStats)
def dashboard_stats(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> DashboardStats:
    ensure_role(current_user, {"ADMIN"})
    return settings_service.dashboard_stats(db)


@router.patch("/restaurants/{restaurant_id}/verify", response_model=RestaurantResponse)
def verify_restaurant(
    restaurant_id: int,
    payload: RestaurantVerifyRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> RestaurantResponse:
    ensure_role(current_user, {"ADMIN"})
    restaurant = set_restaurant_verified(db, restaurant_id, payload.is_verified)
    return restaurant_response(restaurant, current_minutes())


@public_router.get("/public", response_model=AdminSettingsRead)
def public_settings(db: Session = Depends(get_db)) -> AdminSettingsRead:
    return settings_service.get_admin_settings(db)
