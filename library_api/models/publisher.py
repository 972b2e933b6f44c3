"""ORM model for publishers."""

from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING

from sqlalchemy import Date, DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from library_api.db.base import Base

if TYPE_CHECKING:
    from library_api.models.book import Book


class Publisher(Base):
    """Represents a publishing organization that owns books."""

    __tablename__ = "publishers"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    established_date: Mapped[date] = mapped_column(Date, nullable=False)
    address: Mapped[str] = mapped_column(String(100), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    # Deleting a publisher removes its books too; the service layer refuses
    # to delete publishers that still own books.
    books: Mapped[list["Book"]] = relationship(
        "Book",
        back_populates="publisher",
        cascade="all, delete-orphan",
        order_by="Book.id",
    )
