"""Restaurant ORM model."""

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Float, ForeignKey, Integer, SmallInteger, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from campus_delivery.db.base import Base

OVERRIDE_UNSET = 0
OVERRIDE_ONLINE = 1
OVERRIDE_OFFLINE = -1
FORCE_OVERRIDE_VALUES = (OVERRIDE_OFFLINE, OVERRIDE_UNSET, OVERRIDE_ONLINE)


class Restaurant(Base):
    """Marketplace restaurant owned by a user.

    Online status is never stored; see ``services.availability``.
    """

    __tablename__ = "restaurants"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(25), nullable=False)
    logo_image_url: Mapped[str] = mapped_column(String(500), nullable=False)
    accent_color: Mapped[str] = mapped_column(String(7), nullable=False)
    order_code: Mapped[str] = mapped_column(String(4), nullable=False, unique=True, index=True)
    location_lat: Mapped[float] = mapped_column(Float, nullable=False)
    location_lng: Mapped[float] = mapped_column(Float, nullable=False)
    location_address: Mapped[str] = mapped_column(String(100), nullable=False)
    location_city: Mapped[str] = mapped_column(String(50), nullable=False)
    online_start: Mapped[int | None] = mapped_column(Integer, nullable=True)
    online_end: Mapped[int | None] = mapped_column(Integer, nullable=True)
    force_online_override: Mapped[int] = mapped_column(SmallInteger, nullable=False, default=OVERRIDE_UNSET)
    is_verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    rating: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    rating_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    owner_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    owner: Mapped["User"] = relationship(back_populates="owned_restaurants")
    menu_items: Mapped[list["MenuItem"]] = relationship(back_populates="restaurant", cascade="all, delete-orphan")
    orders: Mapped[list["Order"]] = relationship(back_populates="restaurant")
