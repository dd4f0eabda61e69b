"""SQLAlchemy declarative base for the SQL-backed remote store."""

from __future__ import annotations

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass
