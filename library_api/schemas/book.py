"""Pydantic schemas for book payloads."""

from __future__ import annotations

from pydantic import AliasChoices, Field, model_validator

from library_api.schemas.base import ApiModel
from library_api.schemas.summaries import BookSimpleResponse, PublisherSimpleResponse
from library_api.schemas.validators import BookText, Isbn, NonNegativeInt, PastDate


class BookDetailRequest(ApiModel):
    """Descriptive metadata for a book; every field is optional.

    ``publisher`` here is a free-text imprint name and is never resolved
    against the Publisher table.
    """

    description: str | None = None
    language: str | None = Field(default=None, max_length=64)
    page_count: NonNegativeInt | None = None
    publisher: str | None = Field(default=None, max_length=255)
    cover_image_url: str | None = Field(default=None, max_length=512)
    edition: str | None = Field(default=None, max_length=64)


class BookRequest(ApiModel):
    """Payload for creating a book or replacing all of its fields."""

    title: BookText
    author: BookText
    isbn: Isbn
    price: NonNegativeInt | None = None
    publish_date: PastDate | None = None
    publisher_id: int = Field(..., alias="publisher", description="Identifier of an existing publisher")
    detail: BookDetailRequest | None = Field(
        default=None, validation_alias=AliasChoices("detail", "detailRequest")
    )


class BookPatchRequest(ApiModel):
    """Payload for partial updates; only fields present in the body are applied."""

    title: BookText | None = None
    author: BookText | None = None
    isbn: Isbn | None = None
    price: NonNegativeInt | None = None
    publish_date: PastDate | None = None
    publisher_id: int | None = Field(default=None, alias="publisher")
    detail: BookDetailRequest | None = Field(
        default=None, validation_alias=AliasChoices("detail", "detailRequest")
    )

    @model_validator(mode="after")
    def _reject_null_required_fields(self) -> "BookPatchRequest":
        for name in ("title", "author", "isbn", "publisher_id"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self


class BookDetailResponse(ApiModel):
    id: int
    description: str | None = None
    language: str | None = None
    page_count: int | None = None
    publisher: str | None = None
    cover_image_url: str | None = None
    edition: str | None = None


class BookResponse(BookSimpleResponse):
    """Full book representation with its publisher summary and detail."""

    publisher: PublisherSimpleResponse | None = None
    detail: BookDetailResponse | None = None
