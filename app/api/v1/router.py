"""
API v1 Router - Main Entry Point
Aggregates the catalog, booking and payment endpoints of the reservation engine.
"""
from fastapi import APIRouter

from app.api.v1 import bookings, catalog, payments, temporary_bookings
from app.config.settings import settings
from app.core.logging import get_logger
from app.schemas.common import ErrorResponse

logger = get_logger(__name__)

router = APIRouter(
    responses={
        404: {"model": ErrorResponse, "description": "Not Found"},
        409: {"model": ErrorResponse, "description": "Conflict"},
        422: {"description": "Validation Error"},
        500: {"model": ErrorResponse, "description": "Internal Server Error"},
        502: {"model": ErrorResponse, "description": "Downstream Failure"},
    }
)

router.include_router(catalog.router)
# Registered ahead of bookings so "/bookings/temporary" is not read as a booking id
router.include_router(temporary_bookings.router)
router.include_router(bookings.router)
router.include_router(payments.router)


@router.get("/health", tags=["System Health"])
async def api_health_check():
    """Liveness probe with the registered route count."""
    return {
        "status": "healthy",
        "version": settings.API_VERSION,
        "api_version": "v1",
        "total_routes": len(router.routes),
        "description": f"{settings.APP_NAME} API v1",
    }


logger.info("API v1 router initialized", extra={"total_routes": len(router.routes)})
