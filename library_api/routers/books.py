"""CRUD endpoints for books."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from library_api.db import get_db
from library_api.repositories.book import BookRepository
from library_api.repositories.publisher import PublisherRepository
from library_api.schemas.book import (
    BookDetailRequest,
    BookPatchRequest,
    BookRequest,
    BookResponse,
)
from library_api.services.books import BookService

router = APIRouter(prefix="/api/books", tags=["Books"])
_book_service = BookService(BookRepository(), PublisherRepository())


@router.get("", response_model=list[BookResponse])
def list_books(db: Session = Depends(get_db)) -> list[BookResponse]:
    """Return every book with its publisher summary and detail."""

    return _book_service.list_books(db)


@router.get("/isbn/{isbn}", response_model=BookResponse)
def get_book_by_isbn(isbn: str, db: Session = Depends(get_db)) -> BookResponse:
    return _book_service.get_book_by_isbn(db, isbn)


@router.get("/search/author", response_model=list[BookResponse])
def search_books_by_author(
    author: str = Query(..., description="Case-insensitive substring of the author name"),
    db: Session = Depends(get_db),
) -> list[BookResponse]:
    return _book_service.search_by_author(db, author)


@router.get("/search/title", response_model=list[BookResponse])
def search_books_by_title(
    title: str = Query(..., description="Case-insensitive substring of the title"),
    db: Session = Depends(get_db),
) -> list[BookResponse]:
    return _book_service.search_by_title(db, title)


@router.get("/publisher/{publisher_id}", response_model=list[BookResponse])
def list_books_by_publisher(publisher_id: int, db: Session = Depends(get_db)) -> list[BookResponse]:
    """List all books owned by a publisher."""

    return _book_service.list_by_publisher(db, publisher_id)


@router.get("/{book_id}", response_model=BookResponse)
def get_book(book_id: int, db: Session = Depends(get_db)) -> BookResponse:
    """Retrieve a single book by identifier."""

    return _book_service.get_book(db, book_id)


@router.post("", response_model=BookResponse, status_code=status.HTTP_201_CREATED)
def create_book(payload: BookRequest, db: Session = Depends(get_db)) -> BookResponse:
    """Create a book linked to an existing publisher."""

    return _book_service.create_book(db, payload)


@router.put("/{book_id}", response_model=BookResponse)
def update_book(book_id: int, payload: BookRequest, db: Session = Depends(get_db)) -> BookResponse:
    """Replace all fields of an existing book."""

    return _book_service.update_book(db, book_id, payload)


@router.patch("/{book_id}", response_model=BookResponse)
def patch_book(book_id: int, payload: BookPatchRequest, db: Session = Depends(get_db)) -> BookResponse:
    """Update only the fields present in the request body."""

    return _book_service.patch_book(db, book_id, payload)


@router.patch("/{book_id}/detail", response_model=BookResponse)
def update_book_detail(
    book_id: int,
    payload: BookDetailRequest,
    db: Session = Depends(get_db),
) -> BookResponse:
    """Create or partially update the detail record of a book."""

    return _book_service.update_book_detail(db, book_id, payload)


@router.delete("/{book_id}", status_code=status.HTTP_204_NO_CONTENT, response_model=None)
def delete_book(book_id: int, db: Session = Depends(get_db)) -> Response:
    """Permanently delete a book together with its detail."""

    _book_service.delete_book(db, book_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
