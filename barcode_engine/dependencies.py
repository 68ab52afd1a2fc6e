# barcode_engine/dependencies.py
from fastapi import HTTPException, Request, status

from barcode_engine.batch_processor import BatchProcessor
from barcode_engine.engine import BarcodeEngine
from barcode_engine.renderer import BarcodeRenderer
from barcode_engine.store import BarcodeStore

import logging

logger = logging.getLogger(__name__)


def _state(request: Request, name: str):
    value = getattr(request.app.state, name, None)
    if value is None:
        logger.error(f"Application state '{name}' is not initialized")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service is starting up. Please try again.",
        )
    return value


async def get_engine(request: Request) -> BarcodeEngine:
    return _state(request, "engine")


async def get_batch_processor(request: Request) -> BatchProcessor:
    return _state(request, "batch_processor")


async def get_store(request: Request) -> BarcodeStore:
    return _state(request, "store")


async def get_renderer(request: Request) -> BarcodeRenderer:
    return _state(request, "renderer")
