"""ORM model for optional descriptive metadata attached to a book."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from library_api.db.base import Base

if TYPE_CHECKING:
    from library_api.models.book import Book


class BookDetail(Base):
    """One-to-one extension of a book; lives and dies with its book."""

    __tablename__ = "book_details"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    book_id: Mapped[int] = mapped_column(
        ForeignKey("books.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    language: Mapped[str | None] = mapped_column(String(64), nullable=True)
    page_count: Mapped[int | None] = mapped_column(nullable=True)
    # Free-text imprint name; unrelated to the Publisher entity
    publisher: Mapped[str | None] = mapped_column(String(255), nullable=True)
    cover_image_url: Mapped[str | None] = mapped_column(String(512), nullable=True)
    edition: Mapped[str | None] = mapped_column(String(64), nullable=True)

    book: Mapped["Book"] = relationship("Book", back_populates="detail")
