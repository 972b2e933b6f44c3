from . import books, health, publishers  # noqa: F401

__all__ = ["books", "health", "publishers"]
