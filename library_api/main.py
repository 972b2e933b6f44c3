import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from library_api.core.config import get_settings
from library_api.core.errors import ConflictError, ErrorCode, LibraryError, ResourceNotFoundError
from library_api.routers import books, health, publishers


settings = get_settings()
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def _status_for(exc: LibraryError) -> int:
    if isinstance(exc, ResourceNotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, ConflictError):
        return status.HTTP_409_CONFLICT
    return status.HTTP_400_BAD_REQUEST


async def handle_library_error(request: Request, exc: LibraryError) -> JSONResponse:
    """Render domain errors as ``{code, message, details}`` with a category-specific status."""
    return JSONResponse(
        status_code=_status_for(exc),
        content=jsonable_encoder(
            {"code": exc.code.value, "message": exc.message, "details": exc.details}
        ),
    )


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {
            "field": ".".join(str(part) for part in error["loc"][1:]) or str(error["loc"][0]),
            "message": error["msg"],
            "value": error.get("input"),
        }
        for error in exc.errors()
    ]
    logger.info("Rejected %s %s: %d validation error(s)", request.method, request.url.path, len(errors))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=jsonable_encoder(
            {
                "code": ErrorCode.VALIDATION_FAILED.value,
                "message": "Request validation failed",
                "details": {"errors": errors},
            }
        ),
    )


app = FastAPI(title=settings.app_name, version=settings.app_version)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.resolved_cors_allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(LibraryError, handle_library_error)
app.add_exception_handler(RequestValidationError, handle_validation_error)

app.include_router(health.router)
app.include_router(books.router)
app.include_router(publishers.router)
