from fastapi import APIRouter

from library_api.core.config import get_settings


router = APIRouter(tags=["Health"])


@router.get("/")
@router.get("/health")
def read_health() -> dict[str, str]:
    """Liveness probe reporting the service name and version."""
    settings = get_settings()
    return {
        "status": "ok",
        "service": settings.app_name,
        "version": settings.app_version,
    }
