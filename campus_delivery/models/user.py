"""User ORM model."""

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Enum, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from campus_delivery.db.base import Base

USER_ROLES = ("ADMIN", "RESTAURANT", "CUSTOMER")


def normalize_user_role(role: str | None) -> str:
    """Return canonical upper-case role or raise for unknown values."""
    canonical = str(role or "").strip().upper()
    if canonical not in USER_ROLES:
        raise ValueError(f"Unknown role: {role}")
    return canonical


class User(Base):
    """System account; ``ADMIN`` is the super-admin role."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    username: Mapped[str] = mapped_column(String(128), nullable=False, unique=True, index=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(Enum(*USER_ROLES, name="user_role"), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    full_name: Mapped[str | None] = mapped_column(String(50), nullable=True)
    phone_number: Mapped[str | None] = mapped_column(String(11), nullable=True)
    is_uni_student: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    university: Mapped[str | None] = mapped_column(String(100), nullable=True)
    student_id: Mapped[str | None] = mapped_column(String(50), nullable=True)
    is_hostelite: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    hostel_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    room_number: Mapped[str | None] = mapped_column(String(20), nullable=True)
    is_rider_available: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    max_owned_restaurants: Mapped[int] = mapped_column(Integer, nullable=False, default=2)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    last_login_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    owned_restaurants: Mapped[list["Restaurant"]] = relationship(back_populates="owner")
    orders: Mapped[list["Order"]] = relationship(back_populates="customer")

    @property
    def is_super_admin(self) -> bool:
        return self.role == "ADMIN"
