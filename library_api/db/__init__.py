"""Database helpers and base objects."""

from .base import Base, metadata
from .session import SessionLocal, engine, get_db, unit_of_work

__all__ = [
    "Base",
    "SessionLocal",
    "engine",
    "get_db",
    "metadata",
    "unit_of_work",
]
