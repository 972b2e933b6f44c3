"""Pydantic schemas for publisher payloads."""

from __future__ import annotations

from pydantic import Field, model_validator

from library_api.schemas.base import ApiModel
from library_api.schemas.summaries import BookSimpleResponse, PublisherSimpleResponse
from library_api.schemas.validators import PastOrPresentDate, PublisherAddress, PublisherName


class PublisherRequest(ApiModel):
    """Payload for creating a publisher or replacing all of its fields."""

    name: PublisherName
    established_date: PastOrPresentDate
    address: PublisherAddress


class PublisherPatchRequest(ApiModel):
    """Payload for partial publisher updates."""

    name: PublisherName | None = None
    established_date: PastOrPresentDate | None = None
    address: PublisherAddress | None = None

    @model_validator(mode="after")
    def _reject_null_fields(self) -> "PublisherPatchRequest":
        for name in self.model_fields_set:
            if getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self


class PublisherResponse(PublisherSimpleResponse):
    """Publisher with the simple representation of each book it owns."""

    books: list[BookSimpleResponse] = Field(default_factory=list)
