"""Shared repository helpers used by concrete persistence classes."""

from __future__ import annotations

from typing import Generic, TypeVar

from sqlalchemy import exists, select
from sqlalchemy.orm import Session

T = TypeVar("T")


class BaseRepository(Generic[T]):
    """Small abstraction around SQLAlchemy session interactions.

    Repositories only flush; committing belongs to the caller's unit of work.
    """

    def __init__(self, model: type[T]):
        self._model = model

    @property
    def model(self) -> type[T]:
        """Return the SQLAlchemy model handled by the repository."""

        return self._model

    def add(self, session: Session, instance: T) -> T:
        """Stage an instance and flush so generated keys become available."""

        session.add(instance)
        session.flush()
        return instance

    def save(self, session: Session, instance: T) -> T:
        """Insert-or-update: flush pending changes of a tracked instance."""

        if instance not in session:
            session.add(instance)
        session.flush()
        return instance

    def get(self, session: Session, identifier: int) -> T | None:
        """Fetch a single instance by primary key."""

        return session.get(self._model, identifier)

    def exists_by_id(self, session: Session, identifier: int) -> bool:
        statement = select(exists().where(self._model.id == identifier))
        return bool(session.scalar(statement))

    def list_all(self, session: Session) -> list[T]:
        """Return all instances of the model ordered by primary key."""

        statement = select(self._model).order_by(self._model.id)
        return list(session.scalars(statement).all())

    def delete(self, session: Session, instance: T) -> None:
        """Remove an instance, cascading through ORM relationships."""

        session.delete(instance)
        session.flush()
