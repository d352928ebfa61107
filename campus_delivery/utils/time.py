"""Wall-clock helpers expressed as minutes since local midnight."""

from __future__ import annotations

import logging
from datetime import datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from campus_delivery.core.config import settings

logger = logging.getLogger(__name__)

MINUTES_PER_DAY = 24 * 60


def local_now(tz_name: str | None = None) -> datetime:
    """Return the current time in the application timezone.

    Falls back to the server's local time when the zone database does not
    know ``tz_name``.
    """
    name = tz_name or settings.app_timezone
    try:
        return datetime.now(ZoneInfo(name))
    except ZoneInfoNotFoundError:
        logger.warning("Unknown timezone '%s'; using server local time.", name)
        return datetime.now()


def current_minutes(tz_name: str | None = None) -> int:
    """Minutes elapsed since midnight in the application timezone (0-1439)."""
    now = local_now(tz_name)
    return now.hour * 60 + now.minute


def format_minutes(minutes: int) -> str:
    """Render minutes since midnight as ``"09:05 AM"``."""
    minutes = minutes % MINUTES_PER_DAY
    hours, mins = divmod(minutes, 60)
    suffix = "AM" if hours < 12 else "PM"
    display_hour = hours % 12 or 12
    return f"{display_hour:02d}:{mins:02d} {suffix}"
