"""SQLAlchemy Declarative Base — shared base class for ORM models."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all query store ORM models."""
    pass
