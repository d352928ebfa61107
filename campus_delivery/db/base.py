"""Shared SQLAlchemy base declarative class and model imports."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for ORM models."""


# Import model modules so metadata is populated before create_all.
from campus_delivery.models import admin_settings as _admin_settings  # noqa: E402,F401
from campus_delivery.models import counter as _counter  # noqa: E402,F401
from campus_delivery.models import menu as _menu  # noqa: E402,F401
from campus_delivery.models import order as _order  # noqa: E402,F401
from campus_delivery.models import restaurant as _restaurant  # noqa: E402,F401
from campus_delivery.models import user as _user  # noqa: E402,F401
