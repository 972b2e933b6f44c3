"""Publisher management operations."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from library_api.core.errors import (
    DuplicatePublisherNameError,
    PublisherHasBooksError,
    ResourceNotFoundError,
)
from library_api.db.session import unit_of_work
from library_api.models.publisher import Publisher
from library_api.repositories.book import BookRepository
from library_api.repositories.publisher import PublisherRepository
from library_api.schemas.publisher import (
    PublisherPatchRequest,
    PublisherRequest,
    PublisherResponse,
)
from library_api.schemas.summaries import PublisherSimpleResponse
from library_api.services.mappers import to_publisher_response, to_publisher_summary

logger = logging.getLogger(__name__)


class PublisherService:
    """Publisher CRUD; a publisher can only be deleted once it owns no books."""

    def __init__(
        self,
        publisher_repository: PublisherRepository,
        book_repository: BookRepository,
    ) -> None:
        self._publishers = publisher_repository
        self._books = book_repository

    def list_publishers(self, session: Session) -> list[PublisherSimpleResponse]:
        """Summaries with book counts taken from a grouped count, without loading books."""
        publishers = self._publishers.list_all(session)
        counts = self._books.count_by_publisher_ids(session, [p.id for p in publishers])
        return [to_publisher_summary(p, counts[p.id]) for p in publishers]

    def get_publisher(self, session: Session, publisher_id: int) -> PublisherResponse:
        publisher = self._publishers.get_with_books(session, publisher_id)
        if publisher is None:
            raise ResourceNotFoundError("Publisher", "id", publisher_id)
        return to_publisher_response(publisher)

    def get_publisher_by_name(self, session: Session, name: str) -> PublisherResponse:
        publisher = self._publishers.get_by_name_with_books(session, name)
        if publisher is None:
            raise ResourceNotFoundError("Publisher", "name", name)
        return to_publisher_response(publisher)

    def create_publisher(self, session: Session, request: PublisherRequest) -> PublisherResponse:
        with unit_of_work(session):
            self._ensure_name_available(session, request.name)
            publisher = Publisher(
                name=request.name,
                established_date=request.established_date,
                address=request.address,
            )
            self._persist(session, publisher)
            response = to_publisher_response(publisher)

        logger.info("Created publisher id=%s name='%s'", response.id, response.name)
        return response

    def update_publisher(
        self, session: Session, publisher_id: int, request: PublisherRequest
    ) -> PublisherResponse:
        return self._apply(session, publisher_id, request.model_dump())

    def patch_publisher(
        self, session: Session, publisher_id: int, request: PublisherPatchRequest
    ) -> PublisherResponse:
        return self._apply(session, publisher_id, request.model_dump(exclude_unset=True))

    def delete_publisher(self, session: Session, publisher_id: int) -> None:
        with unit_of_work(session):
            publisher = self._publishers.get(session, publisher_id)
            if publisher is None:
                logger.warning("Refusing to delete missing publisher id=%s", publisher_id)
                raise ResourceNotFoundError("Publisher", "id", publisher_id)

            book_count = self._books.count_by_publisher_id(session, publisher_id)
            if book_count > 0:
                logger.warning(
                    "Refusing to delete publisher id=%s: it still owns %s book(s)",
                    publisher_id,
                    book_count,
                )
                raise PublisherHasBooksError(publisher_id, book_count)

            self._publishers.delete(session, publisher)

        logger.info("Deleted publisher id=%s", publisher_id)

    def _apply(self, session: Session, publisher_id: int, data: dict[str, Any]) -> PublisherResponse:
        with unit_of_work(session):
            publisher = self._publishers.get_with_books(session, publisher_id)
            if publisher is None:
                raise ResourceNotFoundError("Publisher", "id", publisher_id)

            new_name = data.get("name")
            if new_name is not None and new_name != publisher.name:
                self._ensure_name_available(session, new_name)

            for field, value in data.items():
                setattr(publisher, field, value)
            self._persist(session, publisher)
            response = to_publisher_response(publisher)

        logger.info("Updated publisher id=%s fields=%s", publisher_id, sorted(data))
        return response

    def _ensure_name_available(self, session: Session, name: str) -> None:
        if self._publishers.exists_by_name(session, name):
            logger.warning("Rejected duplicate publisher name '%s'", name)
            raise DuplicatePublisherNameError(name)

    def _persist(self, session: Session, publisher: Publisher) -> None:
        try:
            self._publishers.save(session, publisher)
        except IntegrityError as exc:
            raise DuplicatePublisherNameError(publisher.name) from exc
