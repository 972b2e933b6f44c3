"""Database access helpers for publisher entities."""

from __future__ import annotations

from sqlalchemy import exists, select
from sqlalchemy.orm import Session, joinedload

from library_api.models.publisher import Publisher
from library_api.repositories.base import BaseRepository


class PublisherRepository(BaseRepository[Publisher]):
    """Repository for interacting with publisher records."""

    def __init__(self) -> None:
        super().__init__(model=Publisher)

    def get_by_name(self, session: Session, name: str) -> Publisher | None:
        """Fetch a publisher by unique name."""
        statement = select(Publisher).where(Publisher.name == name)
        result = session.execute(statement)
        return result.scalars().first()

    def get_by_name_with_books(self, session: Session, name: str) -> Publisher | None:
        statement = (
            select(Publisher)
            .options(joinedload(Publisher.books))
            .where(Publisher.name == name)
        )
        return session.scalars(statement).unique().first()

    def exists_by_name(self, session: Session, name: str) -> bool:
        statement = select(exists().where(Publisher.name == name))
        return bool(session.scalar(statement))

    def get_with_books(self, session: Session, publisher_id: int) -> Publisher | None:
        """Fetch a publisher with books joined in the same query to avoid N+1 lookups."""
        statement = (
            select(Publisher)
            .options(joinedload(Publisher.books))
            .where(Publisher.id == publisher_id)
        )
        return session.scalars(statement).unique().first()
