"""Deletion of uploaded images from Cloudinary.

Clients upload images straight to storage; the backend only removes images
that are orphaned by a failed write or replaced by a newer upload.
"""

from __future__ import annotations

import logging
import re

import cloudinary
import cloudinary.uploader
from sqlalchemy import select
from sqlalchemy.orm import Session

from campus_delivery.core.config import settings
from campus_delivery.models import MenuItem, Order, Restaurant

logger = logging.getLogger(__name__)

PUBLIC_ID_PATTERN = re.compile(r"/upload/(?:v\d+/)?([^./]+)")


def extract_public_id(url: str | None) -> str | None:
    if not url:
        return None
    match = PUBLIC_ID_PATTERN.search(url)
    return match.group(1) if match else None


def is_configured() -> bool:
    return bool(
        settings.cloudinary_cloud_name and settings.cloudinary_api_key and settings.cloudinary_api_secret
    )


def image_in_use(db: Session, url: str | None) -> bool:
    """True when a committed restaurant, menu item or order still points at ``url``.

    Upload compensations check this after rollback so a request can only
    discard images nobody else references.
    """
    if not url:
        return False
    referenced = (
        db.scalar(select(Restaurant.id).where(Restaurant.logo_image_url == url).limit(1)) is not None
        or db.scalar(select(MenuItem.id).where(MenuItem.image_url == url).limit(1)) is not None
        or db.scalar(select(Order.id).where(Order.payment_slip_url == url).limit(1)) is not None
    )
    if referenced:
        logger.info("[CLEANUP] Keeping image still in use: %s", url)
    return referenced


def delete_image(url: str | None) -> bool:
    """Delete the image behind ``url``.

    Returns True when there was nothing to delete or the storage confirmed
    the deletion. Errors from the storage API are raised to the caller.
    """
    public_id = extract_public_id(url)
    if public_id is None:
        return True
    if not is_configured():
        logger.info("[CLEANUP] Image storage not configured; skipping delete of %s", public_id)
        return True

    cloudinary.config(
        cloud_name=settings.cloudinary_cloud_name,
        api_key=settings.cloudinary_api_key,
        api_secret=settings.cloudinary_api_secret,
        secure=True,
    )
    result = cloudinary.uploader.destroy(public_id, invalidate=True).get("result")
    if result not in {"ok", "not found"}:
        logger.warning("[CLEANUP] Image %s not deleted: %s", public_id, result)
        return False
    logger.info("[CLEANUP] Deleted image %s", public_id)
    return True
