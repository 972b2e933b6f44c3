"""Reusable field constraints for request payloads."""

from __future__ import annotations

import re
from datetime import date
from typing import Annotated

from pydantic import AfterValidator, Field

ISBN_PATTERN = re.compile(r"[0-9-]+")
ISBN_DIGIT_COUNTS = (10, 13)


def validate_isbn(value: str) -> str:
    """Accept digits with optional hyphens, totalling exactly 10 or 13 digits."""
    if not ISBN_PATTERN.fullmatch(value):
        raise ValueError("ISBN must be valid (10 or 13 digits, with or without hyphens)")
    if len(value.replace("-", "")) not in ISBN_DIGIT_COUNTS:
        raise ValueError("ISBN must be valid (10 or 13 digits, with or without hyphens)")
    return value


def validate_not_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value


def validate_past(value: date) -> date:
    if value >= date.today():
        raise ValueError("must be a date in the past")
    return value


def validate_past_or_present(value: date) -> date:
    if value > date.today():
        raise ValueError("must be a date in the past or present")
    return value


BookText = Annotated[str, Field(max_length=255), AfterValidator(validate_not_blank)]
PublisherName = Annotated[str, Field(max_length=100), AfterValidator(validate_not_blank)]
PublisherAddress = Annotated[str, Field(max_length=100)]
Isbn = Annotated[str, AfterValidator(validate_isbn)]
NonNegativeInt = Annotated[int, Field(ge=0)]
PastDate = Annotated[date, AfterValidator(validate_past)]
PastOrPresentDate = Annotated[date, AfterValidator(validate_past_or_present)]
