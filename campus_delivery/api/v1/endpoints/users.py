"""User profile endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from campus_delivery.core.security import get_current_user
from campus_delivery.db.session import get_db
from campus_delivery.models.user import User
from campus_delivery.schemas.auth import AuthUserResponse
from campus_delivery.schemas.user import CustomerDetailsUpdate, ProfileResponse, ProfileUpdate, RiderAvailability
from campus_delivery.services.security_guards import ensure_role
from campus_delivery.services.user_service import (
    get_user_by_email,
    get_user_by_username,
    set_rider_availability,
    update_customer_details,
    update_profile,
)

router: APIRouter = APIRouter()
logger = logging.getLogger(__name__)


@router.patch("/me/customer-details", response_model=AuthUserResponse)
def save_customer_details(
    payload: CustomerDetailsUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> AuthUserResponse:
    ensure_role(current_user, {"CUSTOMER"})
    user = update_customer_details(db, current_user, payload.full_name.strip(), payload.phone_number)
    return AuthUserResponse.model_validate(user)


@router.get("/me/profile", response_model=ProfileResponse)
def read_profile(current_user: User = Depends(get_current_user)) -> ProfileResponse:
    return ProfileResponse.model_validate(current_user)


@router.put("/me/profile", response_model=ProfileResponse)
def save_profile(
    payload: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ProfileResponse:
    changes = payload.model_dump()
    changes["username"] = payload.username.strip()
    changes["email"] = payload.email.strip().lower()

    other = get_user_by_username(db=db, username=changes["username"])
    if other is not None and other.id != current_user.id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Username is already taken")
    other = get_user_by_email(db=db, email=changes["email"])
    if other is not None and other.id != current_user.id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email is already taken")

    user = update_profile(db, current_user, changes)
    logger.info("Profile updated for user_id=%s", user.id)
    return ProfileResponse.model_validate(user)


@router.get("/me/rider-availability", response_model=RiderAvailability)
def read_rider_availability(current_user: User = Depends(get_current_user)) -> RiderAvailability:
    return RiderAvailability(is_rider_available=current_user.is_rider_available)


@router.put("/me/rider-availability", response_model=RiderAvailability)
def save_rider_availability(
    payload: RiderAvailability,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> RiderAvailability:
    user = set_rider_availability(db, current_user, payload.is_rider_available)
    return RiderAvailability(is_rider_available=user.is_rider_available)
