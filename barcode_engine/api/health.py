# barcode_engine/api/health.py

from fastapi import APIRouter, HTTPException, status
from barcode_engine.schemas import HealthResponse
from barcode_engine.config import settings
import logging
import psutil

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/health",
    tags=["System Health"],
    responses={
        status.HTTP_500_INTERNAL_SERVER_ERROR: {
            "description": "Internal server error",
            "content": {
                "application/json": {
                    "example": {"detail": "Internal server error occurred"}
                }
            }
        }
    }
)


def get_system_metrics() -> dict:
    """
    Collect process host metrics using psutil.

    Returns:
        Dict containing CPU and memory usage percentages
    """
    return {
        "cpu_usage": psutil.cpu_percent(interval=None),
        "memory_usage": psutil.virtual_memory().percent,
    }


@router.get(
    "",
    response_model=HealthResponse,
    summary="Check Server Status",
    description="""
    Perform a basic health check on the service.

    Returns service status, version, environment and host CPU and memory usage.
    """
)
async def health_check() -> HealthResponse:
    try:
        return HealthResponse(
            status="ok",
            version=settings.API_VERSION,
            environment=settings.ENVIRONMENT,
            **get_system_metrics()
        )
    except Exception as e:
        logger.error("Health check failed", exc_info=e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Health check failed due to internal error"
        )
