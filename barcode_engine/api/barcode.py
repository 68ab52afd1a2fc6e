# barcode_engine/api/barcode.py

import asyncio
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from barcode_engine.config import settings
from barcode_engine.dependencies import get_engine, get_renderer, get_store
from barcode_engine.engine import BarcodeEngine
from barcode_engine.formats import BARCODE_FORMATS
from barcode_engine.renderer import BarcodeRenderer
from barcode_engine.schemas import (
    BarcodeCustomization,
    BarcodeFormatEnum,
    BarcodeGenerationError,
    BarcodeResult,
    BarcodeSettings,
    BarcodeTemplate,
    BarcodeValidation,
    FormatInfo,
    TextCaseEnum,
)
from barcode_engine.store import BarcodeStore
from barcode_engine.templates import get_template, list_templates, settings_from_template

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Barcodes"])


@router.get("/formats", response_model=List[FormatInfo])
async def get_formats() -> List[FormatInfo]:
    """List every supported symbology with its capacity and industry standards."""
    return list(BARCODE_FORMATS.values())


@router.post("/validate", response_model=BarcodeValidation)
async def validate_barcode(
    barcode_settings: BarcodeSettings,
    engine: BarcodeEngine = Depends(get_engine),
) -> BarcodeValidation:
    return engine.validate(barcode_settings)


@router.post("/generate", response_model=BarcodeResult)
async def generate_barcode(
    barcode_settings: BarcodeSettings,
    engine: BarcodeEngine = Depends(get_engine),
    store: BarcodeStore = Depends(get_store),
) -> BarcodeResult:
    """
    Generate a barcode and keep the result in the store.

    Invalid content is not an HTTP error: the result comes back with
    ``isValid`` false and the error message.
    """
    result = await asyncio.to_thread(engine.generate, barcode_settings)
    store.add(result)
    return result


@router.get("/generate")
async def generate_barcode_image(
    content: str = Query(..., description="The data to encode in the barcode"),
    format: BarcodeFormatEnum = Query(default=BarcodeFormatEnum.CODE128, description="Barcode format"),
    width: float = Query(default=2, gt=0, allow_inf_nan=False, description="Width of a single bar module in pixels"),
    height: float = Query(default=80, gt=0, allow_inf_nan=False, description="Height of the bars in pixels"),
    display_value: bool = Query(True, description="Whether to display text under the barcode"),
    background_color: str = Query("#ffffff", description="Background colour"),
    line_color: str = Query("#000000", description="Bar and text colour"),
    font_size: float = Query(12, ge=0, le=72),
    margin: float = Query(15, ge=0, le=200),
    text_case: TextCaseEnum = Query(TextCaseEnum.NONE),
    show_border: bool = Query(False),
    engine: BarcodeEngine = Depends(get_engine),
    renderer: BarcodeRenderer = Depends(get_renderer),
):
    """Generate a barcode and return it as a PNG image."""
    barcode_settings = BarcodeSettings(
        content=content,
        format=format,
        width=width,
        height=height,
        display_value=display_value,
        background_color=background_color,
        line_color=line_color,
        font_size=font_size,
        margin=margin,
        customization=BarcodeCustomization(show_border=show_border, text_case=text_case),
    )

    result = await asyncio.to_thread(engine.generate, barcode_settings)
    if not result.is_valid:
        raise BarcodeGenerationError(result.error, result.error_type.value)

    image = await asyncio.to_thread(renderer.render_png, result.pattern, barcode_settings)
    return Response(
        content=image,
        media_type="image/png",
        headers={"Server": f"BarcodeEngine/{settings.API_VERSION}"},
    )


@router.get("/barcodes", response_model=List[BarcodeResult])
async def list_barcodes(store: BarcodeStore = Depends(get_store)) -> List[BarcodeResult]:
    return store.all()


@router.get("/barcodes/{barcode_id}", response_model=BarcodeResult)
async def get_barcode(barcode_id: str, store: BarcodeStore = Depends(get_store)) -> BarcodeResult:
    result = store.get(barcode_id)
    if result is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Barcode {barcode_id} not found")
    return result


@router.delete("/barcodes/{barcode_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_barcode(barcode_id: str, store: BarcodeStore = Depends(get_store)):
    if not store.remove(barcode_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Barcode {barcode_id} not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/barcodes")
async def clear_barcodes(store: BarcodeStore = Depends(get_store)):
    removed = store.clear()
    logger.info(f"Cleared {removed} stored barcodes")
    return {"removed": removed}


@router.get("/templates", response_model=List[BarcodeTemplate])
async def get_templates(
    category: Optional[str] = Query(None, description="Only return templates of this category"),
) -> List[BarcodeTemplate]:
    return list_templates(category)


@router.get("/templates/{template_id}", response_model=BarcodeTemplate)
async def get_template_by_id(template_id: str) -> BarcodeTemplate:
    try:
        return get_template(template_id)
    except BarcodeGenerationError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)


@router.post("/templates/{template_id}/generate", response_model=BarcodeResult)
async def generate_from_template(
    template_id: str,
    content: Optional[str] = Query(None, description="Content replacing the template's sample content"),
    engine: BarcodeEngine = Depends(get_engine),
    store: BarcodeStore = Depends(get_store),
) -> BarcodeResult:
    try:
        barcode_settings = settings_from_template(template_id, content)
    except BarcodeGenerationError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)

    result = await asyncio.to_thread(engine.generate, barcode_settings)
    store.add(result)
    return result
