"""Database access helpers for books."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import exists, func, select
from sqlalchemy.orm import Session, joinedload

from library_api.models.book import Book
from library_api.repositories.base import BaseRepository


class BookRepository(BaseRepository[Book]):
    """Repository for interacting with book records."""

    def __init__(self) -> None:
        super().__init__(model=Book)

    def _with_relations(self):
        """Select books with publisher and detail joined in the same round trip."""
        return select(Book).options(joinedload(Book.publisher), joinedload(Book.detail))

    def list_all_with_relations(self, session: Session) -> list[Book]:
        statement = self._with_relations().order_by(Book.id)
        return list(session.scalars(statement).all())

    def get_with_relations(self, session: Session, book_id: int) -> Book | None:
        """Fetch a book with its detail and publisher eager-loaded."""
        statement = self._with_relations().where(Book.id == book_id)
        return session.scalars(statement).first()

    def get_by_isbn_with_relations(self, session: Session, isbn: str) -> Book | None:
        statement = self._with_relations().where(Book.isbn == isbn)
        return session.scalars(statement).first()

    def get_by_isbn(self, session: Session, isbn: str) -> Book | None:
        statement = select(Book).where(Book.isbn == isbn)
        return session.scalars(statement).first()

    def exists_by_isbn(self, session: Session, isbn: str) -> bool:
        statement = select(exists().where(Book.isbn == isbn))
        return bool(session.scalar(statement))

    def search_by_author(self, session: Session, author: str) -> list[Book]:
        """Case-insensitive substring match on the author name."""
        statement = (
            self._with_relations()
            .where(Book.author.icontains(author, autoescape=True))
            .order_by(Book.id)
        )
        return list(session.scalars(statement).all())

    def search_by_title(self, session: Session, title: str) -> list[Book]:
        """Case-insensitive substring match on the title."""
        statement = (
            self._with_relations()
            .where(Book.title.icontains(title, autoescape=True))
            .order_by(Book.id)
        )
        return list(session.scalars(statement).all())

    def list_by_publisher_id(self, session: Session, publisher_id: int) -> list[Book]:
        statement = (
            self._with_relations()
            .where(Book.publisher_id == publisher_id)
            .order_by(Book.id)
        )
        return list(session.scalars(statement).all())

    def count_by_publisher_id(self, session: Session, publisher_id: int) -> int:
        statement = select(func.count(Book.id)).where(Book.publisher_id == publisher_id)
        return session.scalar(statement) or 0

    def count_by_publisher_ids(self, session: Session, publisher_ids: Iterable[int]) -> dict[int, int]:
        """Return book counts for many publishers using one grouped query.

        Publishers without books are reported with a count of zero.
        """
        ids = set(publisher_ids)
        if not ids:
            return {}
        statement = (
            select(Book.publisher_id, func.count(Book.id))
            .where(Book.publisher_id.in_(ids))
            .group_by(Book.publisher_id)
        )
        counts = {publisher_id: 0 for publisher_id in ids}
        for publisher_id, count in session.execute(statement):
            counts[publisher_id] = count
        return counts
