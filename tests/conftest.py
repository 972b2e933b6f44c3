"""Shared fixtures: an in-memory SQLite database and an API client bound to it."""

from __future__ import annotations

import os
from collections.abc import Callable, Iterator
from datetime import date
from typing import Any

# Must be set before library_api.db builds its engine
os.environ.setdefault("LIBRARY_DATABASE_URL_OVERRIDE", "sqlite+pysqlite:///:memory:")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine, event  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from library_api.db import get_db  # noqa: E402
from library_api.db.base import Base  # noqa: E402
from library_api.main import app  # noqa: E402
from library_api.models import Book, BookDetail, Publisher  # noqa: E402

TEST_DATABASE_URL = "sqlite+pysqlite:///:memory:"
engine = create_engine(
    TEST_DATABASE_URL,
    future=True,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


@event.listens_for(engine, "connect")
def _enable_foreign_keys(dbapi_connection, _connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def override_get_db() -> Iterator[Session]:
    with TestingSessionLocal() as session:
        yield session


@pytest.fixture(autouse=True)
def setup_database() -> Iterator[None]:
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def session() -> Iterator[Session]:
    with TestingSessionLocal() as db:
        yield db


@pytest.fixture
def client() -> Iterator[TestClient]:
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.pop(get_db, None)


@pytest.fixture
def make_publisher(session: Session) -> Callable[..., Publisher]:
    """Persist a publisher directly, bypassing the service layer."""

    def _make(
        name: str = "Acme",
        established_date: date = date(2000, 1, 1),
        address: str = "1 Main St",
    ) -> Publisher:
        publisher = Publisher(name=name, established_date=established_date, address=address)
        session.add(publisher)
        session.commit()
        return publisher

    return _make


@pytest.fixture
def make_book(session: Session) -> Callable[..., Book]:
    """Persist a book (optionally with detail) directly, bypassing the service layer."""

    def _make(
        publisher: Publisher,
        *,
        title: str = "X",
        author: str = "Y",
        isbn: str = "123-456-789-0",
        price: int | None = 1000,
        publish_date: date | None = date(2020, 1, 1),
        detail: dict[str, Any] | None = None,
    ) -> Book:
        book = Book(
            title=title,
            author=author,
            isbn=isbn,
            price=price,
            publish_date=publish_date,
            publisher=publisher,
        )
        if detail is not None:
            book.detail = BookDetail(**detail)
        session.add(book)
        session.commit()
        return book

    return _make
