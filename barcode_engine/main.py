# barcode_engine/main.py

import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.middleware.base import BaseHTTPMiddleware

import logging

from barcode_engine.api import barcode, bulk, health
from barcode_engine.batch_processor import BatchProcessor
from barcode_engine.config import settings
from barcode_engine.engine import BarcodeEngine
from barcode_engine.events import EventType
from barcode_engine.renderer import BarcodeRenderer
from barcode_engine.schemas import BarcodeGenerationError
from barcode_engine.store import BarcodeStore

log_directory = settings.LOG_DIRECTORY
os.makedirs(log_directory, exist_ok=True)

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.FileHandler(os.path.join(log_directory, "app.log"), mode="a"),
        logging.StreamHandler()
    ]
)

logger = logging.getLogger(__name__)


class CustomServerHeaderMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers["server"] = f"BarcodeEngine/{settings.API_VERSION}"
        return response


def _log_failure(event) -> None:
    result = event.payload
    logger.info(f"Barcode {result.id} failed ({result.error_type.value}): {result.error}")


def _log_batch(event) -> None:
    batch = event.payload
    logger.info(f"Batch {batch.id} '{batch.name}' finished with status {batch.status.value}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the shared engine, batch processor, renderer and result store."""
    logger.info(f"Starting {settings.PROJECT_NAME} {settings.API_VERSION} ({settings.ENVIRONMENT})")

    renderer = BarcodeRenderer(dpi=settings.RENDER_DPI)
    engine = BarcodeEngine(renderer=renderer if settings.RENDER_IMAGES else None)
    unsubscribers = [
        engine.notifier.subscribe(EventType.FAILED, _log_failure),
        engine.notifier.subscribe(EventType.BATCH_COMPLETED, _log_batch),
    ]

    app.state.renderer = renderer
    app.state.engine = engine
    app.state.batch_processor = BatchProcessor(engine, max_workers=settings.BATCH_MAX_WORKERS)
    app.state.store = BarcodeStore()
    logger.info("Startup complete!")

    try:
        yield
    finally:
        logger.info("Starting shutdown process...")
        for unsubscribe in unsubscribers:
            unsubscribe()
        app.state.store.clear()
        logger.info("Shutdown complete")


app = FastAPI(
    title="Barcode Engine",
    description="""
    Encode, validate and analyse linear barcodes across ten symbologies.
    Batches can be submitted as JSON or as uploaded text, CSV and Excel files.
    """,
    version=settings.API_VERSION,
    docs_url="/redoc" if settings.ENVIRONMENT == "development" else None,
    redoc_url="/docs",
    openapi_url="/openapi.json",
    lifespan=lifespan,
    root_path=settings.ROOT_PATH,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    max_age=3600
)

app.add_middleware(CustomServerHeaderMiddleware)

# Include routers
app.include_router(health.router)
app.include_router(barcode.router)
app.include_router(bulk.router)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "message": "An unexpected error occurred. Please try again later.",
            "error_type": "InternalServerError"
        }
    )


@app.exception_handler(BarcodeGenerationError)
async def barcode_generation_exception_handler(request: Request, exc: BarcodeGenerationError):
    logger.error(f"Barcode generation error: {exc}")
    return JSONResponse(
        status_code=400,
        content={"message": exc.message, "error_type": exc.error_type}
    )


def _first_error_message(errors) -> str:
    err = errors[0]
    return f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.error(f"Validation error: {exc}")
    return JSONResponse(
        status_code=400,
        content={"message": _first_error_message(exc.errors()), "error_type": "ValidationError"}
    )


@app.exception_handler(ValidationError)
async def pydantic_validation_exception_handler(request: Request, exc: ValidationError):
    logger.error(f"Pydantic validation error: {exc}")
    return JSONResponse(
        status_code=400,
        content={"message": _first_error_message(exc.errors()), "error_type": "ValidationError"}
    )


@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info(f"Request: {request.method} {request.url}")
    response = await call_next(request)
    logger.info(f"Response status: {response.status_code}")
    return response


def run():
    """Serve the application with uvicorn."""
    import argparse
    import uvicorn

    parser = argparse.ArgumentParser(description="Run the barcode engine HTTP service")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    args = parser.parse_args()

    logger.info(f"Starting HTTP server on http://{args.host}:{args.port}")
    uvicorn.run("barcode_engine.main:app", host=args.host, port=args.port, reload=False)


if __name__ == "__main__":
    run()
