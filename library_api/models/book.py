"""ORM model for books."""

from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING

from sqlalchemy import Date, DateTime, ForeignKey, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from library_api.db.base import Base
from library_api.models.book_detail import BookDetail

if TYPE_CHECKING:
    from library_api.models.publisher import Publisher


class Book(Base):
    """Represents a published work owned by exactly one publisher."""

    __tablename__ = "books"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    author: Mapped[str] = mapped_column(String(255), nullable=False)
    isbn: Mapped[str] = mapped_column(String(32), nullable=False, unique=True)
    price: Mapped[int | None] = mapped_column(nullable=True)
    publish_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    publisher_id: Mapped[int] = mapped_column(
        ForeignKey("publishers.id", ondelete="CASCADE"), nullable=False, index=True
    )
    publisher: Mapped["Publisher"] = relationship("Publisher", back_populates="books")

    detail: Mapped[BookDetail | None] = relationship(
        "BookDetail",
        back_populates="book",
        uselist=False,
        cascade="all, delete-orphan",
    )

    def ensure_detail(self) -> BookDetail:
        """Return the book's detail, attaching an empty one if none exists yet."""
        if self.detail is None:
            self.detail = BookDetail()
        return self.detail
