"""Named sequence counters."""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from campus_delivery.db.base import Base


class Counter(Base):
    """One row per named sequence, e.g. ``orderId``."""

    __tablename__ = "counters"

    name: Mapped[str] = mapped_column(String(64), primary_key=True)
    sequence_value: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
