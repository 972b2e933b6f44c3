"""Domain errors raised by the library services."""

from __future__ import annotations

import enum
from typing import Any


class ErrorCode(str, enum.Enum):
    """Stable failure categories exposed to API clients."""

    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    ISBN_DUPLICATE = "ISBN_DUPLICATE"
    PUBLISHER_NAME_DUPLICATE = "PUBLISHER_NAME_DUPLICATE"
    PUBLISHER_HAS_BOOKS = "PUBLISHER_HAS_BOOKS"
    VALIDATION_FAILED = "VALIDATION_FAILED"


class LibraryError(Exception):
    """Base exception for business rule violations."""

    code: ErrorCode

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ResourceNotFoundError(LibraryError):
    """Raised when a referenced entity does not exist."""

    code = ErrorCode.RESOURCE_NOT_FOUND

    def __init__(self, entity: str, field: str, value: Any) -> None:
        super().__init__(
            f"{entity} not found with {field}: {value}",
            {"entity": entity, "field": field, "value": value},
        )
        self.entity = entity
        self.field = field
        self.value = value


class ConflictError(LibraryError):
    """Base class for state conflicts (duplicate keys, referential restrictions)."""


class DuplicateIsbnError(ConflictError):
    """Raised when an ISBN is already used by another book."""

    code = ErrorCode.ISBN_DUPLICATE

    def __init__(self, isbn: str) -> None:
        super().__init__(
            f"ISBN duplicate: {isbn}",
            {"entity": "Book", "field": "isbn", "value": isbn},
        )
        self.isbn = isbn


class DuplicatePublisherNameError(ConflictError):
    """Raised when a publisher name is already taken."""

    code = ErrorCode.PUBLISHER_NAME_DUPLICATE

    def __init__(self, name: str) -> None:
        super().__init__(
            f"Publisher name duplicate: {name}",
            {"entity": "Publisher", "field": "name", "value": name},
        )
        self.name = name


class PublisherHasBooksError(ConflictError):
    """Raised when deleting a publisher that still owns books."""

    code = ErrorCode.PUBLISHER_HAS_BOOKS

    def __init__(self, publisher_id: int, book_count: int) -> None:
        super().__init__(
            f"Publisher has books: publisher {publisher_id} still owns {book_count} book(s)",
            {"entity": "Publisher", "field": "id", "value": publisher_id, "book_count": book_count},
        )
        self.publisher_id = publisher_id
        self.book_count = book_count
