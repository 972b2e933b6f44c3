"""Book catalogue operations."""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from library_api.core.errors import DuplicateIsbnError, ResourceNotFoundError
from library_api.db.session import unit_of_work
from library_api.models.book import Book
from library_api.models.book_detail import BookDetail
from library_api.models.publisher import Publisher
from library_api.repositories.book import BookRepository
from library_api.repositories.publisher import PublisherRepository
from library_api.schemas.book import (
    BookDetailRequest,
    BookPatchRequest,
    BookRequest,
    BookResponse,
)
from library_api.services.mappers import to_book_response

logger = logging.getLogger(__name__)


class BookService:
    """Coordinates book CRUD, partial updates and publisher linkage.

    Every method takes the caller's session. Mutations run inside a single
    unit of work, so a failure at any step leaves the database untouched.
    """

    def __init__(
        self,
        book_repository: BookRepository,
        publisher_repository: PublisherRepository,
    ) -> None:
        self._books = book_repository
        self._publishers = publisher_repository

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_books(self, session: Session) -> list[BookResponse]:
        return self._to_responses(session, self._books.list_all_with_relations(session))

    def get_book(self, session: Session, book_id: int) -> BookResponse:
        book = self._require_book(session, book_id)
        return self._to_responses(session, [book])[0]

    def get_book_by_isbn(self, session: Session, isbn: str) -> BookResponse:
        book = self._books.get_by_isbn_with_relations(session, isbn)
        if book is None:
            raise ResourceNotFoundError("Book", "isbn", isbn)
        return self._to_responses(session, [book])[0]

    def search_by_author(self, session: Session, author: str) -> list[BookResponse]:
        return self._to_responses(session, self._books.search_by_author(session, author))

    def search_by_title(self, session: Session, title: str) -> list[BookResponse]:
        return self._to_responses(session, self._books.search_by_title(session, title))

    def list_by_publisher(self, session: Session, publisher_id: int) -> list[BookResponse]:
        if not self._publishers.exists_by_id(session, publisher_id):
            raise ResourceNotFoundError("Publisher", "id", publisher_id)
        return self._to_responses(session, self._books.list_by_publisher_id(session, publisher_id))

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create_book(self, session: Session, request: BookRequest) -> BookResponse:
        with unit_of_work(session):
            self._ensure_isbn_available(session, request.isbn)
            publisher = self._require_publisher(session, request.publisher_id)

            book = Book(
                title=request.title,
                author=request.author,
                isbn=request.isbn,
                price=request.price,
                publish_date=request.publish_date,
                publisher=publisher,
            )
            if request.detail is not None:
                book.detail = BookDetail(**request.detail.model_dump())

            self._persist(session, book)
            response = self._to_responses(session, [book])[0]

        logger.info(
            "Created book id=%s isbn=%s publisher_id=%s",
            response.id,
            response.isbn,
            request.publisher_id,
        )
        return response

    def update_book(self, session: Session, book_id: int, request: BookRequest) -> BookResponse:
        """Replace every field of a book; a supplied detail overwrites the existing one."""
        with unit_of_work(session):
            book = self._require_book(session, book_id)
            if book.isbn != request.isbn:
                self._ensure_isbn_available(session, request.isbn)
            publisher = self._require_publisher(session, request.publisher_id)

            book.title = request.title
            book.author = request.author
            book.isbn = request.isbn
            book.price = request.price
            book.publish_date = request.publish_date
            book.publisher = publisher

            if request.detail is not None:
                detail = book.ensure_detail()
                for field, value in request.detail.model_dump().items():
                    setattr(detail, field, value)

            self._persist(session, book)
            response = self._to_responses(session, [book])[0]

        logger.info("Updated book id=%s", book_id)
        return response

    def patch_book(self, session: Session, book_id: int, request: BookPatchRequest) -> BookResponse:
        """Apply only the fields present in the request."""
        changes = request.model_dump(exclude_unset=True, exclude={"publisher_id", "detail"})

        with unit_of_work(session):
            book = self._require_book(session, book_id)
            if "isbn" in changes and changes["isbn"] != book.isbn:
                self._ensure_isbn_available(session, changes["isbn"])

            publisher = None
            if "publisher_id" in request.model_fields_set:
                publisher = self._require_publisher(session, request.publisher_id)

            for field, value in changes.items():
                setattr(book, field, value)
            if publisher is not None:
                book.publisher = publisher
            if request.detail is not None:
                self._apply_detail_patch(book, request.detail)

            self._persist(session, book)
            response = self._to_responses(session, [book])[0]

        logger.info(
            "Patched book id=%s fields=%s",
            book_id,
            sorted(request.model_fields_set),
        )
        return response

    def update_book_detail(
        self, session: Session, book_id: int, request: BookDetailRequest
    ) -> BookResponse:
        with unit_of_work(session):
            book = self._require_book(session, book_id)
            self._apply_detail_patch(book, request)
            self._persist(session, book)
            response = self._to_responses(session, [book])[0]

        logger.info("Updated detail of book id=%s", book_id)
        return response

    def delete_book(self, session: Session, book_id: int) -> None:
        with unit_of_work(session):
            book = self._books.get(session, book_id)
            if book is None:
                logger.warning("Refusing to delete missing book id=%s", book_id)
                raise ResourceNotFoundError("Book", "id", book_id)
            self._books.delete(session, book)

        logger.info("Deleted book id=%s", book_id)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _require_book(self, session: Session, book_id: int) -> Book:
        book = self._books.get_with_relations(session, book_id)
        if book is None:
            raise ResourceNotFoundError("Book", "id", book_id)
        return book

    def _require_publisher(self, session: Session, publisher_id: int) -> Publisher:
        publisher = self._publishers.get(session, publisher_id)
        if publisher is None:
            logger.warning("Publisher id=%s not found while linking a book", publisher_id)
            raise ResourceNotFoundError("Publisher", "id", publisher_id)
        return publisher

    def _ensure_isbn_available(self, session: Session, isbn: str) -> None:
        if self._books.exists_by_isbn(session, isbn):
            logger.warning("Rejected duplicate ISBN %s", isbn)
            raise DuplicateIsbnError(isbn)

    def _persist(self, session: Session, book: Book) -> None:
        try:
            self._books.save(session, book)
        except IntegrityError as exc:
            # Unique index caught a concurrent insert that slipped past the existence check
            if _violates_isbn_index(exc):
                raise DuplicateIsbnError(book.isbn) from exc
            raise

    @staticmethod
    def _apply_detail_patch(book: Book, request: BookDetailRequest) -> None:
        detail = book.ensure_detail()
        for field, value in request.model_dump(exclude_unset=True).items():
            setattr(detail, field, value)

    def _to_responses(self, session: Session, books: list[Book]) -> list[BookResponse]:
        counts = self._books.count_by_publisher_ids(session, {book.publisher_id for book in books})
        return [to_book_response(book, counts) for book in books]


def _violates_isbn_index(exc: IntegrityError) -> bool:
    """Match the ISBN constraint by name (PostgreSQL) or by column (SQLite)."""
    message = str(exc.orig)
    return "uq_books_isbn" in message or "books.isbn" in message
