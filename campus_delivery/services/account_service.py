"""Account provisioning and login helpers."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.orm import Session

from campus_delivery.core.config import settings
from campus_delivery.core.security import get_password_hash, verify_password
from campus_delivery.models import User

logger = logging.getLogger(__name__)


def ensure_default_admin(db: Session) -> bool:
    """Ensure the bootstrap admin from ``ADMIN_USER``/``ADMIN_PASS`` exists and is active.

    Returns:
        bool: True when at least one admin account is present after this call.
    """
    if settings.admin_user:
        existing_admin = db.scalar(select(User).where(User.username == settings.admin_user).limit(1))
        if existing_admin is not None:
            if not existing_admin.is_active or existing_admin.role != "ADMIN":
                existing_admin.is_active = True
                existing_admin.role = "ADMIN"
                db.commit()
                logger.info("[BOOTSTRAP] Admin '%s' re-activated.", existing_admin.username)
            logger.info("[BOOTSTRAP] Admin exists")
            return True

    if db.scalar(select(User.id).where(User.role == "ADMIN").limit(1)) is not None:
        return True

    if not settings.admin_user or not settings.admin_pass:
        logger.warning("[BOOTSTRAP] ADMIN_USER/ADMIN_PASS not set; no admin account created.")
        return False

    email = settings.admin_user if "@" in settings.admin_user else f"{settings.admin_user}@local"
    db.add(
        User(
            username=settings.admin_user,
            email=email,
            password_hash=get_password_hash(settings.admin_pass),
            role="ADMIN",
            is_active=True,
            max_owned_restaurants=settings.default_max_owned_restaurants,
        )
    )
    db.commit()
    logger.info("[BOOTSTRAP] Created admin account '%s'.", settings.admin_user)
    return True


def authenticate_user(db: Session, email: str, password: str) -> User | None:
    user = db.scalar(select(User).where(User.email == email.strip()).limit(1))
    if user is None or not user.is_active:
        return None
    if not verify_password(password, user.password_hash):
        return None
    user.last_login_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(user)
    return user
