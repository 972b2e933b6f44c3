"""Pydantic schemas used by the FastAPI application."""

from .book import (
    BookDetailRequest,
    BookDetailResponse,
    BookPatchRequest,
    BookRequest,
    BookResponse,
)
from .publisher import PublisherPatchRequest, PublisherRequest, PublisherResponse
from .summaries import BookSimpleResponse, PublisherSimpleResponse

__all__ = [
    # Book schemas
    "BookDetailRequest",
    "BookDetailResponse",
    "BookPatchRequest",
    "BookRequest",
    "BookResponse",
    "BookSimpleResponse",
    # Publisher schemas
    "PublisherPatchRequest",
    "PublisherRequest",
    "PublisherResponse",
    "PublisherSimpleResponse",
]
