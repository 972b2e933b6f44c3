"""CRUD endpoints for publishers."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from library_api.db import get_db
from library_api.repositories.book import BookRepository
from library_api.repositories.publisher import PublisherRepository
from library_api.schemas.publisher import (
    PublisherPatchRequest,
    PublisherRequest,
    PublisherResponse,
)
from library_api.schemas.summaries import PublisherSimpleResponse
from library_api.services.publishers import PublisherService

router = APIRouter(prefix="/api/publishers", tags=["Publishers"])
_publisher_service = PublisherService(PublisherRepository(), BookRepository())


@router.get("", response_model=list[PublisherSimpleResponse])
def list_publishers(db: Session = Depends(get_db)) -> list[PublisherSimpleResponse]:
    """Return every publisher with its book count."""

    return _publisher_service.list_publishers(db)


@router.get("/name/{name}", response_model=PublisherResponse)
def get_publisher_by_name(name: str, db: Session = Depends(get_db)) -> PublisherResponse:
    """Retrieve a single publisher by unique name."""

    return _publisher_service.get_publisher_by_name(db, name)


@router.get("/{publisher_id}", response_model=PublisherResponse)
def get_publisher(publisher_id: int, db: Session = Depends(get_db)) -> PublisherResponse:
    """Retrieve a single publisher by ID, including its books."""

    return _publisher_service.get_publisher(db, publisher_id)


@router.post("", response_model=PublisherResponse, status_code=status.HTTP_201_CREATED)
def create_publisher(payload: PublisherRequest, db: Session = Depends(get_db)) -> PublisherResponse:
    """Create a new publisher record."""

    return _publisher_service.create_publisher(db, payload)


@router.put("/{publisher_id}", response_model=PublisherResponse)
def update_publisher(
    publisher_id: int,
    payload: PublisherRequest,
    db: Session = Depends(get_db),
) -> PublisherResponse:
    """Replace all fields of an existing publisher."""

    return _publisher_service.update_publisher(db, publisher_id, payload)


@router.patch("/{publisher_id}", response_model=PublisherResponse)
def patch_publisher(
    publisher_id: int,
    payload: PublisherPatchRequest,
    db: Session = Depends(get_db),
) -> PublisherResponse:
    return _publisher_service.patch_publisher(db, publisher_id, payload)


@router.delete("/{publisher_id}", status_code=status.HTTP_204_NO_CONTENT, response_model=None)
def delete_publisher(publisher_id: int, db: Session = Depends(get_db)) -> Response:
    """Delete a publisher that no longer owns any books."""

    _publisher_service.delete_publisher(db, publisher_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
