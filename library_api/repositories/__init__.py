"""Repository exports."""

from .book import BookRepository
from .publisher import PublisherRepository

__all__ = [
    "BookRepository",
    "PublisherRepository",
]
