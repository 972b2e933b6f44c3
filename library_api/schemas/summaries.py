"""Scalar-only response shapes nested inside the full book and publisher responses."""

from __future__ import annotations

from datetime import date

from library_api.schemas.base import ApiModel


class BookSimpleResponse(ApiModel):
    """Book scalar fields without related entities."""

    id: int
    title: str
    author: str
    isbn: str
    price: int | None = None
    publish_date: date | None = None


class PublisherSimpleResponse(ApiModel):
    """Publisher scalar fields plus the number of books it owns."""

    id: int
    name: str
    established_date: date
    address: str
    book_count: int = 0
