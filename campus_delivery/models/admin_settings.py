"""Admin-configurable settings model."""

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import DateTime, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from campus_delivery.db.base import Base


class AdminSettings(Base):
    """Singleton settings row (id=1)."""

    __tablename__ = "admin_settings"

    id: Mapped[int] = mapped_column(primary_key=True, default=1)
    base_delivery_fee: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    delivery_fee_per_km: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    light_theme: Mapped[str] = mapped_column(String(50), nullable=False, default="default")
    dark_theme: Mapped[str] = mapped_column(String(50), nullable=False, default="default")
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
