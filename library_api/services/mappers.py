"""Entity to response-shape conversion."""

from __future__ import annotations

from library_api.models.book import Book
from library_api.models.book_detail import BookDetail
from library_api.models.publisher import Publisher
from library_api.schemas.book import BookDetailResponse, BookResponse
from library_api.schemas.publisher import PublisherResponse
from library_api.schemas.summaries import BookSimpleResponse, PublisherSimpleResponse


def to_publisher_summary(publisher: Publisher, book_count: int) -> PublisherSimpleResponse:
    return PublisherSimpleResponse(
        id=publisher.id,
        name=publisher.name,
        established_date=publisher.established_date,
        address=publisher.address,
        book_count=book_count,
    )


def to_publisher_response(publisher: Publisher) -> PublisherResponse:
    """Map a publisher whose ``books`` collection is already loaded."""
    return PublisherResponse(
        id=publisher.id,
        name=publisher.name,
        established_date=publisher.established_date,
        address=publisher.address,
        book_count=len(publisher.books),
        books=[BookSimpleResponse.model_validate(book) for book in publisher.books],
    )


def to_detail_response(detail: BookDetail | None) -> BookDetailResponse | None:
    if detail is None:
        return None
    return BookDetailResponse.model_validate(detail)


def to_book_response(book: Book, book_counts: dict[int, int]) -> BookResponse:
    """Map a book with publisher and detail loaded.

    ``book_counts`` maps publisher ids to their current number of books.
    """
    publisher = None
    if book.publisher is not None:
        publisher = to_publisher_summary(book.publisher, book_counts.get(book.publisher.id, 0))
    return BookResponse(
        id=book.id,
        title=book.title,
        author=book.author,
        isbn=book.isbn,
        price=book.price,
        publish_date=book.publish_date,
        publisher=publisher,
        detail=to_detail_response(book.detail),
    )
