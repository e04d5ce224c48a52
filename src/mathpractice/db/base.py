"""
mathpractice.db.base

SQLAlchemy declarative base shared by the session and submission tables.
"""

from __future__ import annotations

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass
