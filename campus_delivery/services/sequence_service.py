"""Named integer sequences used for human-readable order ids."""

from __future__ import annotations

import logging

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from campus_delivery.models.counter import Counter

logger = logging.getLogger(__name__)

ORDER_ID_SEQUENCE = "orderId"


def _increment(db: Session, name: str) -> int | None:
    return db.scalar(
        update(Counter)
        .where(Counter.name == name)
        .values(sequence_value=Counter.sequence_value + 1)
        .returning(Counter.sequence_value)
        .execution_options(synchronize_session=False)
    )


def next_sequence(db: Session, name: str) -> int:
    """Atomically increment ``name`` and return the new value.

    The first value of a new sequence is 1. The increment is committed
    immediately so a value is never handed out twice, even if the caller's
    own transaction later rolls back; such values are simply skipped.
    """
    value = _increment(db, name)
    if value is None:
        try:
            with db.begin_nested():
                db.add(Counter(name=name, sequence_value=1))
            value = 1
        except IntegrityError:
            # Another request created the row first.
            value = _increment(db, name)
            if value is None:
                raise
    db.commit()
    logger.debug("Sequence %s -> %s", name, value)
    return value


def format_order_id(order_code: str, sequence: int) -> str:
    return f"{order_code}-{sequence}"
