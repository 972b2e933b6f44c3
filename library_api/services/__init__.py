"""Service layer orchestrating repositories inside units of work."""

from .books import BookService
from .publishers import PublisherService

__all__ = [
    "BookService",
    "PublisherService",
]
