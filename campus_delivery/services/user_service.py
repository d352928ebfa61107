"""User service operations."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from campus_delivery.core.config import settings
from campus_delivery.models.user import User, normalize_user_role


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.scalar(select(User).where(User.email == email).limit(1))


def get_user_by_username(db: Session, username: str) -> User | None:
    return db.scalar(select(User).where(User.username == username).limit(1))


def get_user_by_id(db: Session, user_id: int) -> User | None:
    return db.get(User, user_id)


def create_user(
    db: Session,
    username: str,
    hashed_password: str,
    role: str,
    email: str,
) -> User:
    canonical_role = normalize_user_role(role)
    user = User(
        username=username,
        password_hash=hashed_password,
        role=canonical_role,
        email=email,
        is_active=True,
        max_owned_restaurants=settings.default_max_owned_restaurants,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def update_customer_details(db: Session, user: User, full_name: str, phone_number: str) -> User:
    """Store the delivery contact details used at checkout."""
    user.full_name = full_name
    user.phone_number = phone_number
    db.commit()
    db.refresh(user)
    return user


def update_profile(db: Session, user: User, changes: dict) -> User:
    """Overwrite profile fields; callers check username/email uniqueness first.

    Student and hostel details are cleared when the matching flag is off.
    """
    if not changes.get("is_uni_student"):
        changes.update(university=None, student_id=None)
    if not changes.get("is_hostelite"):
        changes.update(hostel_name=None, room_number=None)
    for field, value in changes.items():
        setattr(user, field, value)
    db.commit()
    db.refresh(user)
    return user


def set_rider_availability(db: Session, user: User, available: bool) -> User:
    user.is_rider_available = available
    db.commit()
    db.refresh(user)
    return user
