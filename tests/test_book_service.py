"""Tests for BookService business rules."""

from __future__ import annotations

from datetime import date
from unittest.mock import MagicMock

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from library_api.core.errors import DuplicateIsbnError, ResourceNotFoundError
from library_api.models.book import Book
from library_api.models.book_detail import BookDetail
from library_api.models.publisher import Publisher
from library_api.repositories.book import BookRepository
from library_api.repositories.publisher import PublisherRepository
from library_api.schemas.book import BookDetailRequest, BookPatchRequest, BookRequest
from library_api.services.books import BookService

FULL_DETAIL = {
    "description": "A story",
    "language": "en",
    "page_count": 320,
    "publisher": "Acme Imprint",
    "cover_image_url": "https://example.com/cover.png",
    "edition": "2nd",
}


@pytest.fixture
def service() -> BookService:
    return BookService(BookRepository(), PublisherRepository())


def _request(publisher_id: int, **overrides: object) -> BookRequest:
    data: dict[str, object] = {
        "title": "X",
        "author": "Y",
        "isbn": "123-456-789-0",
        "price": 1000,
        "publish_date": date(2020, 1, 1),
        "publisher_id": publisher_id,
    }
    data.update(overrides)
    return BookRequest(**data)


def _book_count(session: Session) -> int:
    return session.scalar(select(func.count(Book.id)))


def test_create_book_links_publisher(service: BookService, session: Session, make_publisher) -> None:
    acme = make_publisher()

    response = service.create_book(session, _request(acme.id))

    assert response.id is not None
    assert response.title == "X"
    assert response.publisher is not None
    assert response.publisher.id == acme.id
    assert response.publisher.name == "Acme"
    assert response.publisher.book_count == 1
    assert response.detail is None


def test_create_book_with_detail_round_trips(service: BookService, session: Session, make_publisher) -> None:
    acme = make_publisher()
    created = service.create_book(session, _request(acme.id, detail=BookDetailRequest(**FULL_DETAIL)))

    session.expunge_all()
    fetched = service.get_book(session, created.id)

    assert fetched.detail is not None
    assert fetched.detail.model_dump(exclude={"id"}) == FULL_DETAIL


def test_create_book_rejects_duplicate_isbn(
    service: BookService, session: Session, make_publisher, make_book
) -> None:
    acme = make_publisher()
    make_book(acme, isbn="123-456-789-0")

    with pytest.raises(DuplicateIsbnError) as excinfo:
        service.create_book(session, _request(acme.id, title="Other"))

    assert excinfo.value.details["value"] == "123-456-789-0"
    assert _book_count(session) == 1


def test_create_book_with_unknown_publisher_leaves_no_state(service: BookService, session: Session) -> None:
    with pytest.raises(ResourceNotFoundError) as excinfo:
        service.create_book(session, _request(999, detail=BookDetailRequest(**FULL_DETAIL)))

    assert excinfo.value.entity == "Publisher"
    assert _book_count(session) == 0
    assert session.scalar(select(func.count(BookDetail.id))) == 0


def test_get_book_missing_raises(service: BookService, session: Session) -> None:
    with pytest.raises(ResourceNotFoundError):
        service.get_book(session, 42)


def test_get_book_by_isbn(service: BookService, session: Session, make_publisher, make_book) -> None:
    make_book(make_publisher(), isbn="9781234567897")

    assert service.get_book_by_isbn(session, "9781234567897").isbn == "9781234567897"
    with pytest.raises(ResourceNotFoundError):
        service.get_book_by_isbn(session, "0000000000")


def test_list_books_includes_publisher_counts(
    service: BookService, session: Session, make_publisher, make_book
) -> None:
    acme = make_publisher(name="Acme")
    globex = make_publisher(name="Globex")
    make_book(acme, isbn="1111111111")
    make_book(acme, isbn="2222222222")
    make_book(globex, isbn="3333333333")

    books = service.list_books(session)

    assert [(b.isbn, b.publisher.name, b.publisher.book_count) for b in books] == [
        ("1111111111", "Acme", 2),
        ("2222222222", "Acme", 2),
        ("3333333333", "Globex", 1),
    ]


def test_searches_return_empty_lists_instead_of_errors(service: BookService, session: Session) -> None:
    assert service.search_by_author(session, "nobody") == []
    assert service.search_by_title(session, "nothing") == []


def test_list_by_publisher_requires_existing_publisher(
    service: BookService, session: Session, make_publisher, make_book
) -> None:
    acme = make_publisher()
    make_book(acme)

    assert len(service.list_by_publisher(session, acme.id)) == 1
    with pytest.raises(ResourceNotFoundError):
        service.list_by_publisher(session, 999)


def test_update_book_replaces_fields_and_detail(
    service: BookService, session: Session, make_publisher, make_book
) -> None:
    acme = make_publisher(name="Acme")
    globex = make_publisher(name="Globex")
    book = make_book(acme, detail=FULL_DETAIL)

    response = service.update_book(
        session,
        book.id,
        _request(
            globex.id,
            title="New",
            author="Someone",
            isbn="9781234567897",
            price=None,
            detail=BookDetailRequest(language="fr"),
        ),
    )

    assert response.title == "New"
    assert response.isbn == "9781234567897"
    assert response.price is None
    assert response.publisher.name == "Globex"
    # Detail is overwritten wholesale, not merged
    assert response.detail.language == "fr"
    assert response.detail.description is None
    assert response.detail.page_count is None


def test_update_book_keeping_its_own_isbn_is_not_a_conflict(
    service: BookService, session: Session, make_publisher, make_book
) -> None:
    acme = make_publisher()
    book = make_book(acme, isbn="123-456-789-0")

    response = service.update_book(session, book.id, _request(acme.id, title="Renamed"))

    assert response.title == "Renamed"


def test_update_book_rejects_isbn_of_another_book(
    service: BookService, session: Session, make_publisher, make_book
) -> None:
    acme = make_publisher()
    make_book(acme, isbn="1111111111")
    book = make_book(acme, isbn="2222222222", title="Original")
    book_id = book.id

    with pytest.raises(DuplicateIsbnError):
        service.update_book(session, book_id, _request(acme.id, isbn="1111111111", title="Changed"))

    session.expunge_all()
    unchanged = service.get_book(session, book_id)
    assert unchanged.isbn == "2222222222"
    assert unchanged.title == "Original"


def test_update_book_with_unknown_publisher_rolls_back(
    service: BookService, session: Session, make_publisher, make_book
) -> None:
    acme = make_publisher()
    book = make_book(acme, title="Original")
    book_id = book.id

    with pytest.raises(ResourceNotFoundError):
        service.update_book(session, book_id, _request(999, title="Changed"))

    assert service.get_book(session, book_id).title == "Original"


def test_update_missing_book_raises(service: BookService, session: Session, make_publisher) -> None:
    acme = make_publisher()
    with pytest.raises(ResourceNotFoundError):
        service.update_book(session, 999, _request(acme.id))


def test_patch_price_only_preserves_other_fields(
    service: BookService, session: Session, make_publisher, make_book
) -> None:
    acme = make_publisher()
    book = make_book(acme, detail=FULL_DETAIL)
    before = service.get_book(session, book.id)

    after = service.patch_book(session, book.id, BookPatchRequest(price=2500))

    assert after.price == 2500
    assert after.model_dump(exclude={"price"}) == before.model_dump(exclude={"price"})


def test_patch_publisher_only_moves_the_book(
    service: BookService, session: Session, make_publisher, make_book
) -> None:
    acme = make_publisher(name="Acme")
    globex = make_publisher(name="Globex")
    book = make_book(acme, detail=FULL_DETAIL)
    before = service.get_book(session, book.id)

    after = service.patch_book(session, book.id, BookPatchRequest.model_validate({"publisher": globex.id}))

    assert after.publisher.id == globex.id
    assert after.publisher.book_count == 1
    assert after.model_dump(exclude={"publisher"}) == before.model_dump(exclude={"publisher"})


def test_patch_with_unknown_publisher_raises(
    service: BookService, session: Session, make_publisher, make_book
) -> None:
    book = make_book(make_publisher())

    with pytest.raises(ResourceNotFoundError):
        service.patch_book(session, book.id, BookPatchRequest(publisher_id=999))


def test_patch_isbn_to_duplicate_raises_and_keeps_state(
    service: BookService, session: Session, make_publisher, make_book
) -> None:
    acme = make_publisher()
    make_book(acme, isbn="1111111111")
    book = make_book(acme, isbn="2222222222")
    book_id = book.id

    with pytest.raises(DuplicateIsbnError):
        service.patch_book(session, book_id, BookPatchRequest(isbn="1111111111", price=1))

    unchanged = service.get_book(session, book_id)
    assert unchanged.isbn == "2222222222"
    assert unchanged.price == 1000


def test_patch_detail_creates_detail_and_applies_supplied_fields(
    service: BookService, session: Session, make_publisher, make_book
) -> None:
    book = make_book(make_publisher())

    response = service.patch_book(
        session,
        book.id,
        BookPatchRequest(detail=BookDetailRequest(language="de", page_count=12)),
    )

    assert response.detail is not None
    assert response.detail.language == "de"
    assert response.detail.page_count == 12
    assert response.detail.edition is None


def test_update_book_detail_only_touches_supplied_sub_fields(
    service: BookService, session: Session, make_publisher, make_book
) -> None:
    book = make_book(make_publisher(), detail=FULL_DETAIL)

    response = service.update_book_detail(session, book.id, BookDetailRequest(edition="3rd"))

    assert response.detail.edition == "3rd"
    assert response.detail.description == "A story"
    assert response.detail.publisher == "Acme Imprint"


def test_update_book_detail_creates_detail_when_absent(
    service: BookService, session: Session, make_publisher, make_book
) -> None:
    book = make_book(make_publisher())

    response = service.update_book_detail(session, book.id, BookDetailRequest(description="New"))

    assert response.detail.description == "New"
    assert session.scalar(select(func.count(BookDetail.id))) == 1


def test_update_book_detail_missing_book_raises(service: BookService, session: Session) -> None:
    with pytest.raises(ResourceNotFoundError):
        service.update_book_detail(session, 999, BookDetailRequest(description="x"))


def test_delete_book_cascades_to_detail(
    service: BookService, session: Session, make_publisher, make_book
) -> None:
    book = make_book(make_publisher(), detail=FULL_DETAIL)
    book_id = book.id

    service.delete_book(session, book_id)

    assert _book_count(session) == 0
    assert session.scalar(select(func.count(BookDetail.id))) == 0
    with pytest.raises(ResourceNotFoundError):
        service.get_book(session, book_id)


def test_delete_missing_book_raises(service: BookService, session: Session) -> None:
    with pytest.raises(ResourceNotFoundError):
        service.delete_book(session, 999)


def _unique_violation(message: str) -> IntegrityError:
    return IntegrityError("INSERT ...", {}, Exception(message))


def test_isbn_index_violation_at_flush_is_reported_as_duplicate() -> None:
    books = MagicMock(spec=BookRepository)
    publishers = MagicMock(spec=PublisherRepository)
    books.exists_by_isbn.return_value = False
    publishers.get.return_value = Publisher(id=1, name="Acme")
    books.save.side_effect = _unique_violation("UNIQUE constraint failed: books.isbn")
    mock_session = MagicMock()

    with pytest.raises(DuplicateIsbnError):
        BookService(books, publishers).create_book(mock_session, _request(1))

    mock_session.rollback.assert_called_once()
    mock_session.commit.assert_not_called()


def test_detail_index_violation_is_not_reported_as_isbn_conflict() -> None:
    books = MagicMock(spec=BookRepository)
    publishers = MagicMock(spec=PublisherRepository)
    books.get_with_relations.return_value = Book(id=1, title="X", author="Y", isbn="1234567890")
    books.save.side_effect = _unique_violation(
        'duplicate key value violates unique constraint "uq_book_details_book_id"'
    )
    mock_session = MagicMock()

    with pytest.raises(IntegrityError):
        BookService(books, publishers).update_book_detail(
            mock_session, 1, BookDetailRequest(language="en")
        )

    mock_session.rollback.assert_called_once()
