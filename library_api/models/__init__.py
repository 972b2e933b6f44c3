"""Database models package."""

from .publisher import Publisher  # Must be imported before Book due to relationship
from .book import Book
from .book_detail import BookDetail

__all__ = ["Book", "BookDetail", "Publisher"]
